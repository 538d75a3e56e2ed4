# --------------------------------------------------------------
# File: messages.py
# Description: Plantillas de los SMS de emergencia por tipo de evento.
# --------------------------------------------------------------
"""Composición determinista del texto de las notificaciones."""

from __future__ import annotations

from datetime import datetime

SOS = "sos"
GEOFENCE_BREACH = "geofence_breach"
GEOFENCE_EXIT = "geofence_exit"

DEFAULT_LOCATION = "Demo Map Zone"

_DETAILS = "Tourist ID: {tourist_id}\nLocation: {location}\nTime: {timestamp}\n\n"

TEMPLATES = {
    SOS: (
        "🚨 URGENT: {name} has triggered SOS emergency!\n\n"
        + _DETAILS
        + "Please contact authorities immediately.\n\n"
        "This is an automated alert from the Tourist Safety System."
    ),
    GEOFENCE_BREACH: (
        "⚠️ ALERT: {name} entered a restricted area!\n\n"
        + _DETAILS
        + "Please check on {name} if possible.\n\n"
        "Tourist Safety System Alert."
    ),
    GEOFENCE_EXIT: (
        "✅ UPDATE: {name} exited restricted area.\n\n"
        + _DETAILS
        + "Tourist Safety System Update."
    ),
}

DEFAULT_TEMPLATE = (
    "📱 ALERT: {name} - {emergency_type}\n\n" + _DETAILS + "Tourist Safety System Alert."
)


def format_timestamp(moment: datetime) -> str:
    """Fecha legible sin ceros a la izquierda: ``1/5/2026, 3:04:05 AM``."""

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def compose_emergency_message(
    emergency_type: str,
    tourist_name: str,
    tourist_id: str,
    location: str,
    timestamp: datetime,
) -> str:
    """Construye el cuerpo del SMS para un tipo de emergencia.

    Args:
        emergency_type (str): ``sos``, ``geofence_breach``, ``geofence_exit``
            o cualquier otro valor, que usa la plantilla genérica.
        tourist_name (str): Nombre del turista.
        tourist_id (str): Identificador ``TID-``.
        location (str): Ubicación en texto libre.
        timestamp (datetime): Momento del aviso.

    Returns:
        str: Texto listo para enviar.

    """

    template = TEMPLATES.get(emergency_type, DEFAULT_TEMPLATE)
    return template.format(
        name=tourist_name,
        emergency_type=emergency_type,
        tourist_id=tourist_id,
        location=location,
        timestamp=format_timestamp(timestamp),
    )
