# --------------------------------------------------------------
# File: test_messages.py
# Description: Pruebas de las plantillas de SMS de emergencia.
# --------------------------------------------------------------

from datetime import datetime

import pytest

from touristsafe.messages import compose_emergency_message, format_timestamp

MOMENT = datetime(2026, 10, 19, 15, 4, 5)


def test_timestamp_is_human_readable():
    assert format_timestamp(MOMENT) == "10/19/2026, 3:04:05 PM"


@pytest.mark.parametrize(
    "moment,expected",
    [
        (datetime(2026, 1, 5, 3, 4, 5), "1/5/2026, 3:04:05 AM"),
        (datetime(2026, 1, 5, 0, 0, 9), "1/5/2026, 12:00:09 AM"),
        (datetime(2026, 7, 1, 12, 30, 0), "7/1/2026, 12:30:00 PM"),
        (datetime(2026, 12, 31, 23, 59, 59), "12/31/2026, 11:59:59 PM"),
    ],
)
def test_timestamp_has_no_leading_zeros(moment, expected):
    """Comprueba el formato local en-US: mes, día y hora sin ceros a la izquierda.

    Args:
        moment (datetime): Momento parametrizado.
        expected (str): Texto esperado.
    """
    assert format_timestamp(moment) == expected


def test_sos_template_exact():
    """Comprueba el texto exacto del aviso SOS.

    Returns:
        None: La aserción compara la cadena completa.
    """
    message = compose_emergency_message("sos", "Ana", "TID-1234ABCD", "Old Town", MOMENT)
    assert message == (
        "🚨 URGENT: Ana has triggered SOS emergency!\n\n"
        "Tourist ID: TID-1234ABCD\n"
        "Location: Old Town\n"
        "Time: 10/19/2026, 3:04:05 PM\n\n"
        "Please contact authorities immediately.\n\n"
        "This is an automated alert from the Tourist Safety System."
    )


def test_geofence_breach_template():
    message = compose_emergency_message("geofence_breach", "Ana", "TID-1234ABCD", "Zone B", MOMENT)
    assert message.startswith("⚠️ ALERT: Ana entered a restricted area!\n\n")
    assert "Please check on Ana if possible.\n\n" in message
    assert message.endswith("Tourist Safety System Alert.")


def test_geofence_exit_template_is_not_urgent():
    message = compose_emergency_message("geofence_exit", "Ana", "TID-1234ABCD", "Zone B", MOMENT)
    assert message == (
        "✅ UPDATE: Ana exited restricted area.\n\n"
        "Tourist ID: TID-1234ABCD\n"
        "Location: Zone B\n"
        "Time: 10/19/2026, 3:04:05 PM\n\n"
        "Tourist Safety System Update."
    )
    assert "URGENT" not in message


def test_unknown_type_uses_default_template():
    message = compose_emergency_message("medical", "Ana", "TID-1234ABCD", "Beach", MOMENT)
    assert message.startswith("📱 ALERT: Ana - medical\n\n")
    assert "Tourist ID: TID-1234ABCD\nLocation: Beach\n" in message


def test_values_with_braces_are_not_interpreted():
    message = compose_emergency_message("sos", "{name}", "TID-1", "{location}", MOMENT)
    assert "URGENT: {name} has" in message
    assert "Location: {location}\n" in message
