# --------------------------------------------------------------
# File: models.py
# Description: Modelos Pydantic de registros, perfiles y resultados de envío.
# --------------------------------------------------------------
"""Modelos compartidos entre el almacenamiento, la autenticación y los SMS."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

TOURISTS = "tourists"
AUTHORITIES = "authorities"
ALERTS = "alerts"

# Campos de turista que se guardan siempre cifrados.
TOURIST_ENCRYPTED_FIELDS = frozenset(
    {
        "full_name",
        "nationality",
        "passport",
        "phone",
        "email",
        "emergency_contact_name",
        "emergency_contact_phone",
        "emergency_contact_email",
        "password",
    }
)
TOURIST_PROFILE_FIELDS = TOURIST_ENCRYPTED_FIELDS - {"password"}
TOURIST_CONTACT_FIELDS = frozenset(
    {
        "full_name",
        "emergency_contact_name",
        "emergency_contact_phone",
        "emergency_contact_email",
    }
)

AUTHORITY_ENCRYPTED_FIELDS = frozenset({"username", "password", "name"})


class TouristRegistration(BaseModel):
    """Datos en claro enviados en el alta de un turista."""

    full_name: str = Field(min_length=1)
    nationality: str = Field(min_length=1)
    passport: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str = ""
    emergency_contact_name: str = Field(min_length=1)
    emergency_contact_phone: str = Field(min_length=1)
    emergency_contact_email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator(
        "full_name",
        "nationality",
        "passport",
        "phone",
        "emergency_contact_name",
        "emergency_contact_phone",
        "emergency_contact_email",
        "password",
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _email_default(cls, value: Optional[str]) -> str:
        return value or ""


class TouristProfile(BaseModel):
    """Vista descifrada de un turista; nunca incluye la contraseña."""

    id: str
    full_name: str
    nationality: str
    passport: str
    phone: str
    email: str = ""
    emergency_contact_name: str
    emergency_contact_phone: str
    emergency_contact_email: str
    tx_hash: str
    created_at: str


class AuthorityProfile(BaseModel):
    id: int
    username: str
    name: str
    role: str


class AlertRecord(BaseModel):
    """Alerta en claro asociada a un turista.

    Attributes:
        alert_id (str): Identificador asignado por el cliente.
        type (str): Tipo de emergencia (``sos``, ``geofence_breach``...).
        message (str): Texto descriptivo de la alerta.
        timestamp (str): Momento del evento según el cliente.
        tourist_id (str): Turista afectado.
        severity (str): Gravedad declarada.
        created_at (Optional[str]): Marca ISO-8601 asignada al guardar.

    """

    alert_id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    message: str = Field(min_length=1)
    timestamp: str = Field(min_length=1)
    tourist_id: str = Field(min_length=1)
    severity: str = Field(min_length=1)
    created_at: Optional[str] = None


class EmergencyContact(BaseModel):
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_email: Optional[str] = None


class ChannelStatus(BaseModel):
    enabled: bool
    configured: bool
    provider: str
    phone_number: str = "Not configured"


class DeliveryResult(BaseModel):
    """Resultado estructurado de un intento de envío; nunca se lanza.

    Attributes:
        success (bool): ``True`` solo si el proveedor aceptó el mensaje.
        simulated (bool): ``True`` cuando el canal no está operativo.
        message_id (Optional[str]): Identificador del proveedor.
        status (Optional[str]): Estado devuelto por el proveedor.
        to (Optional[str]): Destino (normalizado si fue posible).
        from_number (Optional[str]): Número emisor.
        body (Optional[str]): Texto enviado.
        error (Optional[str]): Descripción del fallo.
        error_code (Optional[str]): Código estable del fallo.

    """

    success: bool
    simulated: bool = False
    message_id: Optional[str] = None
    status: Optional[str] = None
    to: Optional[str] = None
    from_number: Optional[str] = None
    body: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
