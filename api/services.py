# --------------------------------------------------------------
# File: services.py
# Description: Servicios de registro, alertas y SMS de emergencia para la interfaz.
# --------------------------------------------------------------
"""Capa de servicios que traduce las operaciones del núcleo a respuestas dict.

Las funciones devuelven diccionarios con la forma de las respuestas de la
API original (``success``, ``error``...). Los errores de dominio se
convierten aquí en mensajes estables sin filtrar detalles internos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from touristsafe import auth
from touristsafe.channel import ChannelProvider, configure_channel
from touristsafe.codec import CipherCodec
from touristsafe.config import Settings, load_settings
from touristsafe.errors import DecryptionError, StoreUnavailable, TouristSafetyError
from touristsafe.messages import SOS
from touristsafe.models import (
    ALERTS,
    TOURIST_CONTACT_FIELDS,
    TOURIST_PROFILE_FIELDS,
    TOURISTS,
    AlertRecord,
)
from touristsafe.notify import send_emergency_sms
from touristsafe.storage import CredentialStore

logger = logging.getLogger(__name__)

ALERTS_PAGE_SIZE = 50


@dataclass
class AppContext:
    """Colaboradores del proceso construidos una sola vez al arrancar."""

    settings: Settings
    codec: CipherCodec
    store: CredentialStore
    channel: ChannelProvider


def build_context(settings: Settings, channel: Optional[ChannelProvider] = None) -> AppContext:
    """Crea el contexto y siembra las autoridades de demostración.

    Args:
        settings (Settings): Configuración resuelta.
        channel (Optional[ChannelProvider]): Canal ya construido; por defecto
            se usa :func:`configure_channel`.

    Returns:
        AppContext: Contexto listo para atender peticiones.

    """

    ctx = AppContext(
        settings=settings,
        codec=CipherCodec.from_settings(settings),
        store=CredentialStore(settings.store_path),
        channel=channel or configure_channel(settings),
    )
    auth.seed_authorities(ctx.store, ctx.codec)
    return ctx


@lru_cache(maxsize=1)
def get_context() -> AppContext:
    """Contexto del proceso; falla de forma fatal si falta ``ENCRYPTION_KEY``."""

    return build_context(load_settings())


def _error(exc: TouristSafetyError) -> Dict[str, Any]:
    return {"success": False, "error": exc.message}


def register(ctx: AppContext, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Alta de turista.

    Returns:
        Dict[str, Any]: ``{"success": True, "tourist": {...}}`` o
        ``{"success": False, "error": msg}``.

    """

    try:
        tourist = auth.register_tourist(ctx.store, ctx.codec, payload)
    except TouristSafetyError as exc:
        return _error(exc)
    return {"success": True, "tourist": tourist.model_dump()}


def login(ctx: AppContext, passport: str, password: str) -> Dict[str, Any]:
    try:
        tourist = auth.login_tourist(ctx.store, ctx.codec, passport, password)
    except TouristSafetyError as exc:
        return _error(exc)
    return {"success": True, "tourist": tourist.model_dump()}


def authority_login(ctx: AppContext, username: str, password: str) -> Dict[str, Any]:
    try:
        authority = auth.login_authority(ctx.store, ctx.codec, username, password)
    except TouristSafetyError as exc:
        return _error(exc)
    return {"success": True, "authority": authority.model_dump()}


def get_tourist(ctx: AppContext, tourist_id: str) -> Optional[Dict[str, Any]]:
    """Perfil descifrado de un turista por id, o ``None`` si no existe.

    Raises:
        DecryptionError: Si el registro no puede descifrarse.
        StoreUnavailable: Si el almacén no es accesible.

    """

    row = ctx.store.get_by_id(TOURISTS, tourist_id)
    if row is None:
        return None
    plain = ctx.codec.decrypt_record(row, TOURIST_PROFILE_FIELDS)
    plain.pop("password", None)
    return plain


def list_tourists(ctx: AppContext) -> List[Dict[str, Any]]:
    """Turistas descifrados, uno por pasaporte (se conserva el alta más reciente).

    Los registros que no pueden descifrarse o a los que les falta el pasaporte
    o la fecha de alta se omiten.
    """

    latest: Dict[str, Dict[str, Any]] = {}
    for row in ctx.store.list_all(TOURISTS):
        try:
            plain = ctx.codec.decrypt_record(row, TOURIST_PROFILE_FIELDS)
            passport, created_at = plain["passport"], plain["created_at"]
        except (DecryptionError, KeyError) as exc:
            logger.warning(
                "Skipping tourist %s in listing: %s", row.get("id"), type(exc).__name__
            )
            continue
        plain.pop("password", None)
        current = latest.get(passport)
        if current is None or created_at > current["created_at"]:
            latest[passport] = plain
    return sorted(latest.values(), key=lambda t: t["created_at"], reverse=True)


def record_alert(ctx: AppContext, alert: AlertRecord | Dict[str, Any]) -> Dict[str, Any]:
    """Guarda una alerta en claro.

    Returns:
        Dict[str, Any]: ``{"success": True, "alert_id": ...}`` o el error.

    """

    try:
        if not isinstance(alert, AlertRecord):
            alert = AlertRecord.model_validate(alert)
    except ValidationError:
        return {"success": False, "error": "Missing required alert fields."}

    row = alert.model_dump()
    row["created_at"] = datetime.now(UTC).isoformat()
    try:
        ctx.store.insert(ALERTS, row)
    except StoreUnavailable as exc:
        return _error(exc)
    return {"success": True, "alert_id": alert.alert_id}


def _newest_first(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows.sort(key=lambda r: str(r.get("created_at") or ""), reverse=True)
    return rows


def list_alerts(ctx: AppContext, limit: int = ALERTS_PAGE_SIZE) -> Dict[str, Any]:
    """Alertas más recientes primero.

    Returns:
        Dict[str, Any]: ``{"success": True, "alerts": [...]}`` o el error
        genérico si el almacén no es accesible.

    """

    try:
        rows = ctx.store.list_all(ALERTS)
    except StoreUnavailable as exc:
        return _error(exc)
    return {"success": True, "alerts": _newest_first(rows)[:limit]}


def alerts_for_tourist(ctx: AppContext, tourist_id: str) -> Dict[str, Any]:
    try:
        rows = ctx.store.list_all(ALERTS)
    except StoreUnavailable as exc:
        return _error(exc)
    mine = [r for r in rows if r.get("tourist_id") == tourist_id]
    return {"success": True, "alerts": _newest_first(mine)}


def send_emergency(
    ctx: AppContext,
    tourist_id: str,
    emergency_type: str = SOS,
    location: Optional[str] = None,
) -> Dict[str, Any]:
    """Busca al turista, descifra su contacto y envía el SMS de emergencia.

    Args:
        ctx (AppContext): Contexto del proceso.
        tourist_id (str): Identificador del turista.
        emergency_type (str): Tipo de emergencia.
        location (Optional[str]): Ubicación declarada.

    Returns:
        Dict[str, Any]: ``success``, ``message``, ``sms_result`` y
        ``tourist_name``; o ``{"success": False, "error": ...}``.

    """

    if not tourist_id:
        return {"success": False, "error": "Tourist ID required."}
    try:
        row = ctx.store.get_by_id(TOURISTS, tourist_id)
        if row is None:
            return {"success": False, "error": "Tourist not found."}
        contact = ctx.codec.decrypt_record(row, TOURIST_CONTACT_FIELDS)
    except TouristSafetyError as exc:
        logger.error("Emergency SMS lookup failed for %s: %s", tourist_id, type(exc).__name__)
        return {"success": False, "error": "Failed to send emergency SMS."}

    result = send_emergency_sms(
        ctx.channel,
        contact,
        contact["full_name"],
        tourist_id,
        emergency_type or SOS,
        location,
    )
    return {
        "success": result.success,
        "message": (
            "Emergency SMS sent successfully" if result.success else "Failed to send emergency SMS"
        ),
        "sms_result": result.model_dump(),
        "tourist_name": contact["full_name"],
    }


def raise_alert(
    ctx: AppContext,
    tourist_id: str,
    emergency_type: str,
    message: str,
    severity: str,
    location: Optional[str] = None,
    alert_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Registra la alerta y después intenta avisar por SMS.

    La alerta queda guardada aunque el SMS falle.

    Returns:
        Dict[str, Any]: ``{"alert": {...}, "sms": {...}}``.

    """

    now = datetime.now(UTC)
    alert = {
        "alert_id": alert_id or f"ALERT-{int(now.timestamp() * 1000)}",
        "type": emergency_type,
        "message": message,
        "timestamp": now.isoformat(),
        "tourist_id": tourist_id,
        "severity": severity,
    }
    stored = record_alert(ctx, alert)
    if not stored["success"]:
        return {"alert": stored, "sms": None}
    return {"alert": stored, "sms": send_emergency(ctx, tourist_id, emergency_type, location)}


def sms_status(ctx: AppContext) -> Dict[str, Any]:
    status = ctx.channel.status()
    return {
        "sms_available": ctx.channel.is_available(),
        "status": status.model_dump(),
        "message": "SMS service is available" if status.enabled else "SMS service is not available",
    }
