# --------------------------------------------------------------
# File: auth.py
# Description: Alta de turistas y autenticación de turistas y autoridades.
# --------------------------------------------------------------
"""Funciones de negocio para registrar turistas y validar credenciales."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import UTC, datetime
from typing import Any, Dict, List

from pydantic import ValidationError

from touristsafe.codec import CipherCodec
from touristsafe.errors import (
    InvalidCredentials,
    MissingCredentials,
    RegistrationError,
)
from touristsafe.matcher import ensure_passport_available, find_authority, find_tourist
from touristsafe.models import (
    AUTHORITIES,
    AUTHORITY_ENCRYPTED_FIELDS,
    TOURIST_ENCRYPTED_FIELDS,
    TOURISTS,
    AuthorityProfile,
    TouristProfile,
    TouristRegistration,
)
from touristsafe.storage import CredentialStore

logger = logging.getLogger(__name__)

INVALID_TOURIST_LOGIN = "Invalid passport or password."
INVALID_AUTHORITY_LOGIN = "Invalid username or password."

# Cuentas de demostración que se crean cuando no existe ninguna autoridad.
SAMPLE_AUTHORITIES: List[Dict[str, str]] = [
    {"username": "admin", "password": "admin123", "name": "System Administrator", "role": "admin"},
    {"username": "police", "password": "police123", "name": "Police Officer", "role": "police"},
    {
        "username": "emergency",
        "password": "emergency123",
        "name": "Emergency Services",
        "role": "emergency",
    },
]


def make_tourist_id() -> str:
    """Genera un identificador ``TID-`` seguido de 8 hexadecimales en mayúscula."""

    return "TID-" + uuid.uuid4().hex[:8].upper()


def make_tx_hash() -> str:
    """Hash de transacción simulado: 32 bytes aleatorios en hexadecimal."""

    return "0x" + os.urandom(32).hex()


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def register_tourist(
    store: CredentialStore, codec: CipherCodec, registration: TouristRegistration | Dict[str, Any]
) -> TouristProfile:
    """Registra un turista cifrando sus datos personales y credenciales.

    Args:
        store (CredentialStore): Almacén de registros.
        codec (CipherCodec): Códec de cifrado de campos.
        registration (TouristRegistration | Dict[str, Any]): Datos en claro.

    Returns:
        TouristProfile: Perfil en claro del turista creado (sin contraseña).

    Raises:
        RegistrationError: Si faltan campos obligatorios.
        DuplicateRegistration: Si el pasaporte ya está registrado.
        StoreUnavailable: Si el almacén no es accesible.

    """

    if not isinstance(registration, TouristRegistration):
        try:
            registration = TouristRegistration.model_validate(registration)
        except ValidationError as exc:
            raise RegistrationError() from exc

    tourists = store.list_all(TOURISTS)
    # La comprobación y la inserción no son atómicas entre procesos.
    ensure_passport_available(tourists, codec, registration.passport)

    existing_ids = {row.get("id") for row in tourists}
    tourist_id = make_tourist_id()
    while tourist_id in existing_ids:
        tourist_id = make_tourist_id()

    plain = registration.model_dump()
    row = codec.encrypt_record(plain, TOURIST_ENCRYPTED_FIELDS)
    row.update(id=tourist_id, tx_hash=make_tx_hash(), created_at=_now_iso())
    store.insert(TOURISTS, row)
    logger.info("Registered tourist %s", tourist_id)

    plain.pop("password")
    return TouristProfile(id=tourist_id, tx_hash=row["tx_hash"], created_at=row["created_at"], **plain)


def login_tourist(
    store: CredentialStore, codec: CipherCodec, passport: str, password: str
) -> TouristProfile:
    """Autentica a un turista por pasaporte y contraseña.

    Raises:
        MissingCredentials: Si falta alguno de los dos valores.
        InvalidCredentials: Si no hay coincidencia; el mensaje es el mismo
            para pasaporte desconocido y contraseña errónea.
        StoreUnavailable: Si el almacén no es accesible.

    """

    if not passport or not password:
        raise MissingCredentials("Passport and password required.")

    match = find_tourist(store.list_all(TOURISTS), codec, passport, password)
    if match is None:
        raise InvalidCredentials(INVALID_TOURIST_LOGIN)
    match.pop("password", None)
    return TouristProfile.model_validate(match)


def login_authority(
    store: CredentialStore, codec: CipherCodec, username: str, password: str
) -> AuthorityProfile:
    """Autentica a una autoridad por usuario y contraseña.

    Raises:
        MissingCredentials: Si falta alguno de los dos valores.
        InvalidCredentials: Si no hay coincidencia.

    """

    if not username or not password:
        raise MissingCredentials("Username and password required.")

    match = find_authority(store.list_all(AUTHORITIES), codec, username, password)
    if match is None:
        raise InvalidCredentials(INVALID_AUTHORITY_LOGIN)
    return AuthorityProfile.model_validate(match)


def seed_authorities(store: CredentialStore, codec: CipherCodec) -> int:
    """Crea las cuentas de autoridad de demostración si la tabla está vacía.

    Returns:
        int: Número de cuentas insertadas.

    """

    if store.list_all(AUTHORITIES):
        return 0
    for account in SAMPLE_AUTHORITIES:
        row = codec.encrypt_record(account, AUTHORITY_ENCRYPTED_FIELDS)
        row["created_at"] = _now_iso()
        store.insert(AUTHORITIES, row)
        logger.info("Sample authority account created: %s", account["role"])
    return len(SAMPLE_AUTHORITIES)
