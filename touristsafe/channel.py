# --------------------------------------------------------------
# File: channel.py
# Description: Proveedores del canal SMS saliente (Twilio o degradado).
# --------------------------------------------------------------
"""Abstracción del transporte SMS.

El despachador solo conoce el protocolo :class:`ChannelProvider`. El canal se
construye explícitamente con :func:`configure_channel` y se pasa por
referencia; no existe estado global de "SMS habilitado".
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from touristsafe.config import Settings
from touristsafe.errors import ChannelDeliveryFailure, ChannelUnavailable
from touristsafe.models import ChannelStatus, DeliveryResult

logger = logging.getLogger(__name__)

DEFAULT_SENDER_LABEL = "Tourist Safety System"
TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class ChannelProvider(Protocol):
    def is_available(self) -> bool: ...

    def status(self) -> ChannelStatus: ...

    def send(
        self, destination: str, body: str, sender_label: str = DEFAULT_SENDER_LABEL
    ) -> DeliveryResult: ...


class UnconfiguredChannel:
    """Canal degradado: nunca entrega, siempre responde con un envío simulado.

    Args:
        reason (str): Motivo por el que el canal no está operativo.
        configured (bool): ``True`` si había credenciales pero se deshabilitó.

    """

    provider = "none"

    def __init__(self, reason: str = "SMS credentials not configured", configured: bool = False):
        self.reason = reason
        self.configured = configured

    def is_available(self) -> bool:
        return False

    def status(self) -> ChannelStatus:
        return ChannelStatus(enabled=False, configured=self.configured, provider=self.provider)

    def send(
        self, destination: str, body: str, sender_label: str = DEFAULT_SENDER_LABEL
    ) -> DeliveryResult:
        logger.info("SMS disabled (%s) - simulating SMS send", self.reason)
        return DeliveryResult(
            success=False,
            simulated=True,
            to=destination,
            body=body,
            error=ChannelUnavailable.message,
            error_code=ChannelUnavailable.error_code,
        )


class TwilioChannel:
    """Envío de SMS mediante la API REST de Twilio.

    Args:
        account_sid (str): Identificador de la cuenta Twilio.
        auth_token (str): Token de autenticación.
        from_number (Optional[str]): Número emisor en formato E.164.
        client (Optional[httpx.Client]): Cliente HTTP a reutilizar; si se omite
            se crea uno con ``timeout``.
        timeout (float): Timeout en segundos para cada petición.

    """

    provider = "twilio"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: Optional[str],
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._account_sid = account_sid
        self._from_number = from_number
        self._client = client or httpx.Client(timeout=timeout)
        self._auth = httpx.BasicAuth(account_sid, auth_token)

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_API_BASE}/Accounts/{self._account_sid}/Messages.json"

    def is_available(self) -> bool:
        return True

    def status(self) -> ChannelStatus:
        return ChannelStatus(
            enabled=True,
            configured=True,
            provider=self.provider,
            phone_number=self._from_number or "Not configured",
        )

    def close(self) -> None:
        self._client.close()

    def _failure(self, destination: str, error: str) -> DeliveryResult:
        logger.warning("Failed to send SMS: %s", error)
        return DeliveryResult(
            success=False,
            to=destination,
            from_number=self._from_number,
            error=error,
            error_code=ChannelDeliveryFailure.error_code,
        )

    def send(
        self, destination: str, body: str, sender_label: str = DEFAULT_SENDER_LABEL
    ) -> DeliveryResult:
        """Publica el mensaje; cualquier fallo se devuelve, nunca se relanza.

        ``sender_label`` solo se registra en el log: la API exige un número
        emisor y no todos los países aceptan remitentes alfanuméricos.
        """

        if not self._from_number:
            logger.error("TWILIO_PHONE_NUMBER not configured")
            return DeliveryResult(
                success=False,
                to=destination,
                error="Twilio phone number not configured",
                error_code=ChannelUnavailable.error_code,
            )

        logger.info("Sending SMS to %s on behalf of %s", destination, sender_label)
        try:
            response = self._client.post(
                self.messages_url,
                data={"To": destination, "From": self._from_number, "Body": body},
                auth=self._auth,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            return self._failure(destination, _twilio_error_text(exc.response))
        except httpx.TimeoutException:
            return self._failure(destination, "SMS provider timed out")
        except httpx.HTTPError as exc:
            return self._failure(destination, str(exc) or type(exc).__name__)
        except ValueError:
            return self._failure(destination, "Unreadable response from SMS provider")

        if not isinstance(payload, dict):
            return self._failure(destination, "Unreadable response from SMS provider")

        logger.info("SMS sent successfully. SID: %s", payload.get("sid"))
        return DeliveryResult(
            success=True,
            message_id=_text(payload.get("sid")),
            status=_text(payload.get("status")),
            to=destination,
            from_number=self._from_number,
            body=body,
        )


def _text(value: object) -> Optional[str]:
    return None if value is None else str(value)


def _twilio_error_text(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    # Las pasarelas intermedias pueden devolver JSON que no es un objeto.
    message = payload.get("message") if isinstance(payload, dict) else None
    if isinstance(message, str) and message:
        return message
    return f"SMS provider returned HTTP {response.status_code}"


def configure_channel(
    settings: Settings, client: Optional[httpx.Client] = None
) -> ChannelProvider:
    """Construye el canal SMS a partir de la configuración.

    Args:
        settings (Settings): Configuración del proceso.
        client (Optional[httpx.Client]): Cliente HTTP opcional para Twilio.

    Returns:
        ChannelProvider: ``TwilioChannel`` si hay credenciales y el canal está
        habilitado; en otro caso un ``UnconfiguredChannel``.

    """

    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        logger.warning(
            "Twilio credentials not found. SMS functionality disabled. "
            "Set TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN to enable it."
        )
        return UnconfiguredChannel()

    if not settings.sms_enabled:
        logger.info("SMS functionality disabled via SMS_ENABLED")
        return UnconfiguredChannel("SMS disabled via SMS_ENABLED", configured=True)

    logger.info("Twilio SMS service initialized")
    return TwilioChannel(
        settings.twilio_account_sid,
        settings.twilio_auth_token,
        settings.twilio_phone_number,
        client=client,
        timeout=settings.sms_timeout,
    )
