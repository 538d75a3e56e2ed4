# --------------------------------------------------------------
# File: test_notify.py
# Description: Pruebas del despacho de SMS de emergencia.
# --------------------------------------------------------------

from datetime import datetime

import pytest

from touristsafe.channel import UnconfiguredChannel
from touristsafe.models import DeliveryResult, EmergencyContact
from touristsafe.notify import send_emergency_sms, send_sms

MOMENT = datetime(2026, 10, 19, 15, 4, 5)


def test_emergency_sms_is_normalized_and_sent(recording_channel):
    """Comprueba que el destino se normalice y el cuerpo incluya el contexto.

    Args:
        recording_channel (RecordingChannel): Canal que registra envíos.
    """
    contact = {"emergency_contact_name": "Luis", "emergency_contact_phone": "123-456-7890"}
    result = send_emergency_sms(
        recording_channel, contact, "Ana", "TID-1234ABCD", "sos", "Old Town", now=MOMENT
    )

    assert result.success is True
    [(destination, body, label)] = recording_channel.sent
    assert destination == "+11234567890"
    assert "TID-1234ABCD" in body
    assert "Location: Old Town" in body
    assert body.startswith("🚨 URGENT")
    assert label == "Tourist Safety System"


def test_location_defaults_to_demo_zone(recording_channel):
    contact = EmergencyContact(emergency_contact_phone="+44 20 7946 0958")
    send_emergency_sms(recording_channel, contact, "Ana", "TID-1", "geofence_exit")
    destination, body, _ = recording_channel.sent[0]
    assert destination == "+442079460958"
    assert "Location: Demo Map Zone\n" in body


@pytest.mark.parametrize("contact", [None, {}, {"emergency_contact_phone": ""}])
def test_missing_contact_phone(recording_channel, contact):
    result = send_emergency_sms(recording_channel, contact, "Ana", "TID-1")
    assert result.success is False
    assert result.error_code == "missing_contact_phone"
    assert recording_channel.sent == []


def test_invalid_phone_short_circuits(recording_channel):
    result = send_emergency_sms(
        recording_channel, {"emergency_contact_phone": "123"}, "Ana", "TID-1"
    )
    assert result.success is False
    assert result.error_code == "invalid_phone_number"
    assert result.error == "Invalid phone number format"
    assert recording_channel.sent == []


def test_unconfigured_channel_yields_simulated_result():
    result = send_emergency_sms(
        UnconfiguredChannel(), {"emergency_contact_phone": "1234567890"}, "Ana", "TID-1"
    )
    assert result.success is False
    assert result.simulated is True


def test_channel_failure_is_returned_not_raised(channel_factory):
    failing = channel_factory(
        DeliveryResult(success=False, error="Carrier rejected", error_code="delivery_failed")
    )
    result = send_emergency_sms(failing, {"emergency_contact_phone": "1234567890"}, "Ana", "TID-1")
    assert result.success is False
    assert result.error == "Carrier rejected"
    assert len(failing.sent) == 1


def test_send_sms_passes_custom_sender(recording_channel):
    send_sms(recording_channel, "+1 (555) 123-4567", "test", sender_label="Ops")
    assert recording_channel.sent == [("+15551234567", "test", "Ops")]
