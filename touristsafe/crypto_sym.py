# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para sellar y abrir bloques binarios.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico con el nonce antepuesto al ciphertext."""

from __future__ import annotations

import os
from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_BYTES = 12
TAG_BYTES = 16


def aes_gcm_seal(key: bytes, plaintext: bytes, aad: Optional[bytes] = None) -> bytes:
    """Cifra datos con AES-GCM y devuelve ``nonce || ciphertext || tag``.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos a cifrar; pueden estar vacíos.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Bloque autocontenido con un nonce aleatorio de 96 bits.

    """

    nonce = os.urandom(NONCE_BYTES)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, aad)


def aes_gcm_open(key: bytes, sealed: bytes, aad: Optional[bytes] = None) -> bytes:
    """Descifra un bloque producido por :func:`aes_gcm_seal`.

    Args:
        key (bytes): Clave simétrica usada al sellar.
        sealed (bytes): Bloque ``nonce || ciphertext || tag``.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        ValueError: Si el bloque es más corto que nonce y etiqueta.
        cryptography.exceptions.InvalidTag: Si la autenticación falla.

    """

    if len(sealed) < NONCE_BYTES + TAG_BYTES:
        raise ValueError("Sealed block too short")
    nonce, body = sealed[:NONCE_BYTES], sealed[NONCE_BYTES:]
    return AESGCM(key).decrypt(nonce, body, aad)
