# --------------------------------------------------------------
# File: test_auth_flow.py
# Description: Pruebas de integración del alta y login sobre touristsafe.auth.
# --------------------------------------------------------------

import re

import pytest

from touristsafe import auth
from touristsafe.errors import (
    DuplicateRegistration,
    InvalidCredentials,
    MissingCredentials,
    RegistrationError,
    StoreUnavailable,
)
from touristsafe.models import AUTHORITIES, TOURISTS


def _payload(**overrides):
    """Datos de alta válidos con valores sobrescribibles.

    Returns:
        dict: Carga útil de registro en claro.
    """
    data = {
        "full_name": "Ana García",
        "nationality": "Spanish",
        "passport": "P123",
        "phone": "+34 600 111 222",
        "emergency_contact_name": "Luis García",
        "emergency_contact_phone": "+34 600 333 444",
        "emergency_contact_email": "luis@example.com",
        "password": "pw1",
    }
    data.update(overrides)
    return data


def test_register_login_and_duplicate_scenario(store, codec):
    """Valida el flujo completo: alta, login correcto, login erróneo y duplicado.

    Returns:
        None: Las aserciones internas verifican el comportamiento esperado.
    """
    tourist = auth.register_tourist(store, codec, _payload())

    logged = auth.login_tourist(store, codec, "P123", "pw1")
    assert logged.id == tourist.id
    assert logged.full_name == "Ana García"

    with pytest.raises(InvalidCredentials) as wrong:
        auth.login_tourist(store, codec, "P123", "wrong")
    assert wrong.value.message == "Invalid passport or password."

    with pytest.raises(DuplicateRegistration):
        auth.register_tourist(store, codec, _payload(full_name="Someone Else", password="pw2"))
    assert len(store.list_all(TOURISTS)) == 1


def test_register_generates_identifiers(store, codec):
    tourist = auth.register_tourist(store, codec, _payload())
    assert re.fullmatch(r"TID-[0-9A-F]{8}", tourist.id)
    assert re.fullmatch(r"0x[0-9a-f]{64}", tourist.tx_hash)
    assert tourist.created_at.endswith("+00:00")
    assert "password" not in tourist.model_dump()


def test_register_stores_ciphertext_only(store, codec):
    """Comprueba que los datos personales no se guarden en claro.

    Returns:
        None: Las aserciones revisan el registro persistido.
    """
    tourist = auth.register_tourist(store, codec, _payload())
    row = store.get_by_id(TOURISTS, tourist.id)

    assert row["passport"] != "P123"
    assert row["password"] != "pw1"
    assert row["email"] != ""
    assert codec.decrypt_field(row["email"]) == ""
    assert codec.decrypt_field(row["emergency_contact_phone"]) == "+34 600 333 444"
    assert row["tx_hash"] == tourist.tx_hash


@pytest.mark.parametrize("field", ["passport", "password", "full_name", "emergency_contact_phone"])
def test_register_rejects_missing_fields(store, codec, field):
    with pytest.raises(RegistrationError):
        auth.register_tourist(store, codec, _payload(**{field: "  "}))
    assert store.list_all(TOURISTS) == []


def test_login_failures_are_indistinguishable(store, codec):
    auth.register_tourist(store, codec, _payload())
    with pytest.raises(InvalidCredentials) as unknown:
        auth.login_tourist(store, codec, "P999", "pw1")
    with pytest.raises(InvalidCredentials) as wrong:
        auth.login_tourist(store, codec, "P123", "pw2")
    assert unknown.value.message == wrong.value.message


def test_login_requires_both_values(store, codec):
    with pytest.raises(MissingCredentials):
        auth.login_tourist(store, codec, "P123", "")


def test_login_with_unreadable_store(store, codec):
    with open(store.path, "w", encoding="utf-8") as handler:
        handler.write("{broken")
    with pytest.raises(StoreUnavailable):
        auth.login_tourist(store, codec, "P123", "pw1")


def test_seed_and_login_authorities(store, codec):
    """Verifica la siembra de cuentas de autoridad y su autenticación.

    Returns:
        None: Las aserciones comprueban roles y mensajes de error.
    """
    assert auth.seed_authorities(store, codec) == 3
    assert auth.seed_authorities(store, codec) == 0

    rows = store.list_all(AUTHORITIES)
    assert all(row["username"] != "admin" for row in rows)
    assert {row["role"] for row in rows} == {"admin", "police", "emergency"}

    admin = auth.login_authority(store, codec, "admin", "admin123")
    assert admin.role == "admin"
    assert admin.name == "System Administrator"

    with pytest.raises(InvalidCredentials) as exc:
        auth.login_authority(store, codec, "admin", "police123")
    assert exc.value.message == "Invalid username or password."


def test_make_identifiers_format():
    assert re.fullmatch(r"TID-[0-9A-F]{8}", auth.make_tourist_id())
    assert re.fullmatch(r"0x[0-9a-f]{64}", auth.make_tx_hash())
