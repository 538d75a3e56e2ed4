# --------------------------------------------------------------
# File: codec.py
# Description: Cifrado reversible de campos individuales y de registros.
# --------------------------------------------------------------
"""Códec de cifrado a nivel de campo para datos personales y credenciales.

Cada valor se sella con AES-256-GCM y un nonce aleatorio, por lo que dos
cifrados del mismo texto producen valores distintos. El formato almacenado es
``v1.<base64url(nonce || ciphertext || tag)>`` sin relleno.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, Iterable, Mapping

from cryptography.exceptions import InvalidTag

from touristsafe.config import FIELD_KEY_BYTES, Settings
from touristsafe.crypto_sym import aes_gcm_open, aes_gcm_seal
from touristsafe.errors import ConfigurationError, DecryptionError

PREFIX = "v1."


def _b64u(data: bytes) -> str:
    """Codifica datos binarios en Base64 URL-safe sin relleno."""

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64u(value: str) -> bytes:
    """Decodifica Base64 URL-safe gestionando el relleno."""

    pad = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + pad)


class CipherCodec:
    """Transforma valores en claro en campos cifrados y viceversa.

    Args:
        key (bytes): Clave simétrica de exactamente 32 bytes.

    Raises:
        ConfigurationError: Si la clave no tiene la longitud requerida.

    """

    def __init__(self, key: bytes) -> None:
        if not isinstance(key, (bytes, bytearray)) or len(key) != FIELD_KEY_BYTES:
            raise ConfigurationError(
                f"Encryption key must be exactly {FIELD_KEY_BYTES} bytes."
            )
        self._key = bytes(key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CipherCodec":
        return cls(settings.encryption_key)

    def encrypt_field(self, plaintext: str) -> str:
        """Cifra un texto, incluida la cadena vacía.

        Args:
            plaintext (str): Valor en claro.

        Returns:
            str: Campo cifrado opaco.

        """

        sealed = aes_gcm_seal(self._key, plaintext.encode("utf-8"))
        return PREFIX + _b64u(sealed)

    def decrypt_field(self, ciphertext: str) -> str:
        """Recupera el texto original de un campo cifrado.

        Args:
            ciphertext (str): Valor producido por :meth:`encrypt_field`.

        Returns:
            str: Texto en claro idéntico al original.

        Raises:
            DecryptionError: Si el valor está malformado, fue alterado o se
                cifró con otra clave.

        """

        if not isinstance(ciphertext, str) or not ciphertext.startswith(PREFIX):
            raise DecryptionError("Unrecognized ciphertext format.")
        try:
            sealed = _unb64u(ciphertext[len(PREFIX):])
            return aes_gcm_open(self._key, sealed).decode("utf-8")
        except (binascii.Error, ValueError) as exc:
            # UnicodeDecodeError también es ValueError.
            raise DecryptionError("Malformed ciphertext.") from exc
        except InvalidTag as exc:
            raise DecryptionError("Ciphertext authentication failed.") from exc

    def encrypt_record(
        self, record: Mapping[str, Any], fields: Iterable[str]
    ) -> Dict[str, Any]:
        """Cifra exactamente los campos indicados y copia el resto.

        Args:
            record (Mapping[str, Any]): Registro en claro.
            fields (Iterable[str]): Nombres de los campos a cifrar.

        Returns:
            Dict[str, Any]: Nuevo registro con los campos indicados cifrados.

        """

        result = dict(record)
        for name in set(fields):
            if name in result:
                value = result[name]
                result[name] = self.encrypt_field("" if value is None else str(value))
        return result

    def decrypt_record(
        self, record: Mapping[str, Any], fields: Iterable[str]
    ) -> Dict[str, Any]:
        """Descifra exactamente los campos indicados y copia el resto.

        Raises:
            DecryptionError: Si cualquiera de los campos indicados falla.

        """

        result = dict(record)
        for name in set(fields):
            if name in result:
                result[name] = self.decrypt_field(result[name])
        return result
