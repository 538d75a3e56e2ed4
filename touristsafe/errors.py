# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del registro de turistas.
# --------------------------------------------------------------
"""Excepciones de dominio con mensajes estables de cara al usuario."""

from __future__ import annotations

from typing import Optional


class TouristSafetyError(Exception):
    """Error base del paquete.

    Attributes:
        message (str): Texto estable que puede mostrarse al usuario.

    """

    message = "Unexpected error."

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ConfigurationError(TouristSafetyError):
    """Configuración ausente o inválida detectada al arrancar."""

    message = "Invalid configuration."


class DecryptionError(TouristSafetyError):
    """El valor cifrado está malformado o procede de otra clave."""

    message = "Unable to decrypt value."


class StoreUnavailable(TouristSafetyError):
    message = "Service temporarily unavailable."


class RegistrationError(TouristSafetyError):
    message = "Missing required registration fields."


class DuplicateRegistration(TouristSafetyError):
    message = "Tourist with this passport already exists."


class MissingCredentials(TouristSafetyError):
    message = "Credentials required."


class InvalidCredentials(TouristSafetyError):
    """Credenciales inexistentes o incorrectas (indistinguibles a propósito)."""

    message = "Invalid passport or password."


class NotificationError(TouristSafetyError):
    """Base de los fallos de notificación; siempre se convierten en resultado."""

    error_code = "notification_error"
    message = "Failed to send notification."


class MissingContactPhone(NotificationError):
    error_code = "missing_contact_phone"
    message = "Emergency contact phone number not available"


class InvalidPhoneNumber(NotificationError):
    error_code = "invalid_phone_number"
    message = "Invalid phone number format"


class ChannelUnavailable(NotificationError):
    error_code = "channel_unavailable"
    message = "SMS service not available"


class ChannelDeliveryFailure(NotificationError):
    error_code = "delivery_failed"
    message = "SMS delivery failed"
