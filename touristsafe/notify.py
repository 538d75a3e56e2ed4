# --------------------------------------------------------------
# File: notify.py
# Description: Despacho de SMS de emergencia al contacto del turista.
# --------------------------------------------------------------
"""Compone el aviso, normaliza el destino y delega en el canal SMS.

Ninguna función de este módulo lanza excepciones por problemas de
notificación: los fallos se devuelven como :class:`DeliveryResult` para que
el flujo de emergencia que las invoca no se interrumpa nunca.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional, Union

from touristsafe.channel import DEFAULT_SENDER_LABEL, ChannelProvider
from touristsafe.errors import InvalidPhoneNumber, MissingContactPhone, NotificationError
from touristsafe.messages import DEFAULT_LOCATION, SOS, compose_emergency_message
from touristsafe.models import DeliveryResult, EmergencyContact
from touristsafe.phone import format_phone_number

logger = logging.getLogger(__name__)


def _failed(error: NotificationError, to: Optional[str] = None) -> DeliveryResult:
    return DeliveryResult(success=False, to=to, error=error.message, error_code=error.error_code)


def send_sms(
    channel: ChannelProvider,
    to: str,
    body: str,
    sender_label: str = DEFAULT_SENDER_LABEL,
) -> DeliveryResult:
    """Normaliza el destino y entrega el mensaje al canal.

    Args:
        channel (ChannelProvider): Transporte SMS.
        to (str): Teléfono del destinatario en cualquier formato.
        body (str): Texto del mensaje.
        sender_label (str): Nombre del remitente a mostrar.

    Returns:
        DeliveryResult: Resultado del canal, o un fallo ``invalid_phone_number``
        sin contactar con el canal.

    """

    destination = format_phone_number(to)
    if destination is None:
        logger.warning("Refusing to send SMS: invalid phone number")
        return _failed(InvalidPhoneNumber(), to=to)
    return channel.send(destination, body, sender_label)


def send_emergency_sms(
    channel: ChannelProvider,
    contact: Union[EmergencyContact, Mapping[str, Optional[str]], None],
    tourist_name: str,
    tourist_id: str,
    emergency_type: str = SOS,
    location: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DeliveryResult:
    """Envía el aviso de emergencia al contacto del turista.

    Args:
        channel (ChannelProvider): Transporte SMS ya configurado.
        contact (EmergencyContact | Mapping | None): Contacto descifrado; debe
            incluir ``emergency_contact_phone``.
        tourist_name (str): Nombre del turista.
        tourist_id (str): Identificador del turista.
        emergency_type (str): Tipo de emergencia.
        location (Optional[str]): Ubicación; ``Demo Map Zone`` si falta.
        now (Optional[datetime]): Momento del aviso; por defecto la hora local.

    Returns:
        DeliveryResult: Resultado estructurado; nunca se lanza.

    """

    if contact is not None and not isinstance(contact, EmergencyContact):
        contact = EmergencyContact.model_validate(dict(contact))
    if contact is None or not contact.emergency_contact_phone:
        return _failed(MissingContactPhone())

    message = compose_emergency_message(
        emergency_type,
        tourist_name,
        tourist_id,
        location or DEFAULT_LOCATION,
        now or datetime.now(),
    )
    result = send_sms(channel, contact.emergency_contact_phone, message, DEFAULT_SENDER_LABEL)
    if not result.success:
        logger.warning(
            "Emergency SMS for %s not delivered (%s)", tourist_id, result.error_code
        )
    return result
