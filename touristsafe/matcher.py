# --------------------------------------------------------------
# File: matcher.py
# Description: Búsqueda lineal por descifrado y comparación de credenciales.
# --------------------------------------------------------------
"""Resolución de credenciales en claro sin índice sobre los datos cifrados.

Los campos sensibles se guardan con cifrado no determinista, así que no hay
forma de indexarlos ni de compararlos en su forma almacenada. Cada búsqueda
descifra los campos candidatos de todos los registros: O(n) descifrados por
intento.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from touristsafe.codec import CipherCodec
from touristsafe.errors import DecryptionError, DuplicateRegistration
from touristsafe.models import AUTHORITY_ENCRYPTED_FIELDS, TOURIST_PROFILE_FIELDS

logger = logging.getLogger(__name__)


def find_first_match(
    records: Iterable[Mapping[str, Any]],
    codec: CipherCodec,
    criteria: Mapping[str, str],
    reveal: Iterable[str] = (),
) -> Optional[Dict[str, Any]]:
    """Devuelve el primer registro cuyos campos descifrados coinciden.

    Args:
        records (Iterable[Mapping[str, Any]]): Registros tal como se guardan.
        codec (CipherCodec): Códec con la clave del proceso.
        criteria (Mapping[str, str]): Campo cifrado -> valor en claro esperado.
        reveal (Iterable[str]): Campos adicionales a descifrar en el registro
            elegido.

    Returns:
        Optional[Dict[str, Any]]: Copia del registro con ``criteria`` y
        ``reveal`` descifrados, o ``None`` si ninguno coincide.

    """

    reveal = tuple(reveal)
    for record in records:
        try:
            matched = all(
                codec.decrypt_field(record[name]) == expected
                for name, expected in criteria.items()
            )
            if not matched:
                continue
            # Un campo corrupto en el registro elegido lo excluye de la búsqueda.
            return codec.decrypt_record(record, set(criteria) | set(reveal))
        except (DecryptionError, KeyError) as exc:
            logger.warning(
                "Skipping record %s during scan: %s", record.get("id"), type(exc).__name__
            )
    return None


def find_tourist(
    records: Iterable[Mapping[str, Any]],
    codec: CipherCodec,
    passport: str,
    password: str,
) -> Optional[Dict[str, Any]]:
    """Busca el turista cuyo pasaporte y contraseña coinciden."""

    return find_first_match(
        records,
        codec,
        {"passport": passport, "password": password},
        reveal=TOURIST_PROFILE_FIELDS,
    )


def find_authority(
    records: Iterable[Mapping[str, Any]],
    codec: CipherCodec,
    username: str,
    password: str,
) -> Optional[Dict[str, Any]]:
    """Busca la autoridad cuyo usuario y contraseña coinciden (gana la primera)."""

    return find_first_match(
        records,
        codec,
        {"username": username, "password": password},
        reveal=AUTHORITY_ENCRYPTED_FIELDS,
    )


def passport_registered(
    records: Iterable[Mapping[str, Any]], codec: CipherCodec, passport: str
) -> bool:
    return find_first_match(records, codec, {"passport": passport}) is not None


def ensure_passport_available(
    records: Iterable[Mapping[str, Any]], codec: CipherCodec, passport: str
) -> None:
    """Comprueba que ningún registro tenga ya ese pasaporte descifrado.

    Raises:
        DuplicateRegistration: Si el pasaporte ya está registrado.

    """

    if passport_registered(records, codec, passport):
        raise DuplicateRegistration()
