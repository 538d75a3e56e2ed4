# --------------------------------------------------------------
# File: config.py
# Description: Carga de la configuración del proceso desde .env y entorno.
# --------------------------------------------------------------
"""Lectura única de la configuración: clave de cifrado, almacenamiento y SMS."""

from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from argon2.low_level import Type, hash_secret_raw
from dotenv import load_dotenv
from pydantic import BaseModel

from touristsafe.errors import ConfigurationError

load_dotenv()

DEFAULT_DATA_DIR = "./_data"
DEFAULT_SALT = "tourist-safety-demo"
STORE_FILENAME = "tourist_safety.json"

FIELD_KEY_BYTES = 32

# Argon2id para passphrases: 3 pasadas, 64 MiB, un hilo.
KEY_TIME_COST = 3
KEY_MEMORY_KIB = 64 * 1024
KEY_PARALLELISM = 1

_HEX_KEY = re.compile(r"[0-9a-fA-F]{%d}" % (FIELD_KEY_BYTES * 2))


class Settings(BaseModel):
    """Configuración resuelta del proceso.

    Attributes:
        encryption_key (bytes): Clave de 32 bytes del códec de campos.
        data_dir (str): Directorio de persistencia.
        twilio_account_sid (Optional[str]): Cuenta Twilio, si existe.
        twilio_auth_token (Optional[str]): Token Twilio, si existe.
        twilio_phone_number (Optional[str]): Número emisor de los SMS.
        sms_enabled (bool): Interruptor global del canal SMS.
        sms_timeout (float): Timeout HTTP del canal en segundos.

    """

    encryption_key: bytes
    data_dir: str = DEFAULT_DATA_DIR
    twilio_account_sid: Optional[str] = None
    twilio_auth_token: Optional[str] = None
    twilio_phone_number: Optional[str] = None
    sms_enabled: bool = True
    sms_timeout: float = 10.0

    @property
    def store_path(self) -> str:
        return os.path.join(self.data_dir, STORE_FILENAME)


def resolve_encryption_key(secret: str, salt: str = DEFAULT_SALT) -> bytes:
    """Convierte ``ENCRYPTION_KEY`` en una clave de longitud fija.

    Un valor hexadecimal de 64 caracteres se usa tal cual. Cualquier otro se
    estira con Argon2id sobre ``ENCRYPTION_SALT``; con el mismo secreto y la
    misma salt la clave no cambia entre arranques y los datos siguen legibles.

    Args:
        secret (str): 64 caracteres hexadecimales o una passphrase.
        salt (str): Salt usada solo cuando se deriva desde passphrase.

    Returns:
        bytes: Clave de 32 bytes.

    Raises:
        ConfigurationError: Si la salt es demasiado corta.

    """

    if _HEX_KEY.fullmatch(secret):
        return bytes.fromhex(secret)
    salt_bytes = salt.encode("utf-8")
    if len(salt_bytes) < 8:
        raise ConfigurationError("ENCRYPTION_SALT must be at least 8 bytes.")
    return hash_secret_raw(
        secret.encode("utf-8"),
        salt_bytes,
        time_cost=KEY_TIME_COST,
        memory_cost=KEY_MEMORY_KIB,
        parallelism=KEY_PARALLELISM,
        hash_len=FIELD_KEY_BYTES,
        type=Type.ID,
    )


def _flag(value: Optional[str], default: bool = True) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Construye :class:`Settings` a partir del entorno.

    Args:
        environ (Optional[Mapping[str, str]]): Entorno alternativo; por
            defecto ``os.environ``.

    Returns:
        Settings: Configuración validada.

    Raises:
        ConfigurationError: Si falta ``ENCRYPTION_KEY`` o algún valor es
            inválido. Es un error fatal de arranque.

    """

    env = os.environ if environ is None else environ

    secret = env.get("ENCRYPTION_KEY")
    if not secret:
        raise ConfigurationError("ENCRYPTION_KEY must be set before starting the service.")
    key = resolve_encryption_key(secret, env.get("ENCRYPTION_SALT") or DEFAULT_SALT)

    try:
        timeout = float(env.get("SMS_TIMEOUT") or 10.0)
    except ValueError as exc:
        raise ConfigurationError("SMS_TIMEOUT must be a number of seconds.") from exc

    return Settings(
        encryption_key=key,
        data_dir=env.get("STORAGE_PATH") or DEFAULT_DATA_DIR,
        twilio_account_sid=env.get("TWILIO_ACCOUNT_SID") or None,
        twilio_auth_token=env.get("TWILIO_AUTH_TOKEN") or None,
        twilio_phone_number=env.get("TWILIO_PHONE_NUMBER") or None,
        sms_enabled=_flag(env.get("SMS_ENABLED")),
        sms_timeout=timeout,
    )
