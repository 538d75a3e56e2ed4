# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del sellado y apertura simétrica con AES-GCM.
# --------------------------------------------------------------

import os

import pytest
from cryptography.exceptions import InvalidTag

from touristsafe.crypto_sym import NONCE_BYTES, TAG_BYTES, aes_gcm_open, aes_gcm_seal


def test_aes_gcm_roundtrip_ok():
    """Comprueba que un bloque sellado pueda abrirse con la misma clave.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    key = os.urandom(32)
    plaintext = os.urandom(128)
    sealed = aes_gcm_seal(key, plaintext)
    assert len(sealed) == NONCE_BYTES + len(plaintext) + TAG_BYTES
    assert aes_gcm_open(key, sealed) == plaintext


def test_aes_gcm_empty_plaintext():
    key = os.urandom(32)
    assert aes_gcm_open(key, aes_gcm_seal(key, b"")) == b""


def test_aes_gcm_detects_tampering():
    """Verifica que cualquier alteración del bloque sea detectada.

    Returns:
        None: La expectativa es una excepción al descifrar.
    """
    key = os.urandom(32)
    sealed = bytearray(aes_gcm_seal(key, b"hola mundo"))
    sealed[NONCE_BYTES] ^= 1
    with pytest.raises(InvalidTag):
        aes_gcm_open(key, bytes(sealed))


def test_aes_gcm_rejects_other_key():
    sealed = aes_gcm_seal(os.urandom(32), b"msg")
    with pytest.raises(InvalidTag):
        aes_gcm_open(os.urandom(32), sealed)


def test_aes_gcm_rejects_truncated_block():
    with pytest.raises(ValueError):
        aes_gcm_open(os.urandom(32), b"\x00" * (NONCE_BYTES + TAG_BYTES - 1))


def test_aes_gcm_nonce_uniqueness():
    """Evalúa que los nonces aleatorios generados no se repitan.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    key = os.urandom(32)
    nonces = set()
    for _ in range(200):
        nonce = aes_gcm_seal(key, b"x")[:NONCE_BYTES]
        assert nonce not in nonces
        nonces.add(nonce)
