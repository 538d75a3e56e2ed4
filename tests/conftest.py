# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar almacenamiento, clave y canal.
# --------------------------------------------------------------

import os
from typing import Iterator, List, Tuple

import pytest

from api import services
from touristsafe.codec import CipherCodec
from touristsafe.models import ChannelStatus, DeliveryResult
from touristsafe.storage import CredentialStore

TEST_KEY_HEX = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH, fija una clave de prueba y desactiva Twilio.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))
    monkeypatch.setenv("ENCRYPTION_KEY", TEST_KEY_HEX)
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER", "SMS_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    services.get_context.cache_clear()
    yield
    services.get_context.cache_clear()


@pytest.fixture
def codec() -> CipherCodec:
    return CipherCodec(os.urandom(32))


@pytest.fixture
def store(tmp_path) -> CredentialStore:
    return CredentialStore(str(tmp_path / "_data" / "tourist_safety.json"))


class RecordingChannel:
    """Canal operativo de prueba que guarda cada envío solicitado."""

    provider = "recording"

    def __init__(self, result: DeliveryResult = None) -> None:
        self.sent: List[Tuple[str, str, str]] = []
        self._result = result

    def is_available(self) -> bool:
        return True

    def status(self) -> ChannelStatus:
        return ChannelStatus(enabled=True, configured=True, provider=self.provider)

    def send(self, destination: str, body: str, sender_label: str = "") -> DeliveryResult:
        self.sent.append((destination, body, sender_label))
        if self._result is not None:
            return self._result
        return DeliveryResult(success=True, message_id="SM-test", to=destination, body=body)


@pytest.fixture
def recording_channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def channel_factory():
    """Devuelve la clase RecordingChannel para construir canales con resultado fijo."""
    return RecordingChannel
