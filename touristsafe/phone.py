# --------------------------------------------------------------
# File: phone.py
# Description: Normalización de números de teléfono a formato E.164.
# --------------------------------------------------------------
"""Utilidades para preparar el destino de un SMS."""

from __future__ import annotations

import re
from typing import Optional

_NON_DIGIT = re.compile(r"\D")


def format_phone_number(phone_number: Optional[str]) -> Optional[str]:
    """Convierte un teléfono libre en un número E.164.

    Se eliminan todos los caracteres no numéricos. Con 10 dígitos exactos se
    asume un número norteamericano y se antepone ``+1``; con más de 10 se
    entiende que ya incluye el prefijo de país y se antepone ``+``.

    Args:
        phone_number (Optional[str]): Teléfono tal como lo escribió el usuario.

    Returns:
        Optional[str]: Número normalizado o ``None`` si no es utilizable.

    """

    if not phone_number:
        return None
    cleaned = _NON_DIGIT.sub("", phone_number)
    if len(cleaned) == 10:
        return f"+1{cleaned}"
    if len(cleaned) > 10:
        return f"+{cleaned}"
    return None
