# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de los módulos del registro de turistas.
# --------------------------------------------------------------
"""Inicializa el paquete `touristsafe` y documenta sus módulos principales."""

__all__ = [
    "auth",
    "channel",
    "codec",
    "config",
    "crypto_sym",
    "errors",
    "matcher",
    "messages",
    "models",
    "notify",
    "phone",
    "storage",
]
