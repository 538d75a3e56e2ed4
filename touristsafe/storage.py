# --------------------------------------------------------------
# File: storage.py
# Description: Almacén JSON de turistas, autoridades y alertas.
# --------------------------------------------------------------
"""Persistencia en un único archivo JSON con escritura atómica."""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional, Union

from touristsafe.errors import StoreUnavailable
from touristsafe.models import ALERTS, AUTHORITIES, TOURISTS

__all__ = ["CredentialStore", "load_db", "save_db"]

logger = logging.getLogger(__name__)

TABLES = (TOURISTS, AUTHORITIES, ALERTS)

RecordId = Union[str, int]


def _empty_db() -> Dict[str, Any]:
    return {table: [] for table in TABLES}


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def load_db(path: str) -> Dict[str, Any]:
    """Carga la base JSON completa.

    Args:
        path (str): Ruta del archivo JSON.

    Returns:
        Dict[str, Any]: Contenido con todas las tablas, vacío si el archivo
        aún no existe.

    Raises:
        StoreUnavailable: Si el archivo existe pero no puede leerse o no es
            un JSON válido.

    """

    try:
        with open(path, "r", encoding="utf-8") as handler:
            db = json.load(handler)
    except FileNotFoundError:
        return _empty_db()
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Store at %s could not be read: %s", path, exc)
        raise StoreUnavailable() from exc

    if not isinstance(db, dict):
        logger.error("Store at %s has an unexpected layout", path)
        raise StoreUnavailable()
    for table in TABLES:
        db.setdefault(table, [])
    return db


def save_db(db: Dict[str, Any], path: str) -> None:
    """Guarda la base JSON aplicando escritura atómica.

    Raises:
        StoreUnavailable: Si el archivo no puede escribirse.

    """

    tmp_path = f"{path}.tmp"
    try:
        _ensure_parent_dir(path)
        with open(tmp_path, "w", encoding="utf-8") as handler:
            json.dump(db, handler, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except OSError as exc:
        logger.error("Store at %s could not be written: %s", path, exc)
        raise StoreUnavailable() from exc


class CredentialStore:
    """Colección persistente de registros, propietaria exclusiva de los datos.

    Solo ofrece lectura completa de una tabla, inserción y búsqueda por
    clave primaria; no existe ningún índice sobre los campos cifrados.

    Args:
        path (str): Ruta del archivo JSON.

    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()

    def _check_table(self, table: str) -> None:
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")

    def list_all(self, table: str) -> List[Dict[str, Any]]:
        """Devuelve copias de todos los registros de ``table`` en orden de alta."""

        self._check_table(table)
        db = load_db(self.path)
        return copy.deepcopy(db[table])

    def insert(self, table: str, record: Dict[str, Any]) -> RecordId:
        """Añade un registro y devuelve su identificador.

        Si el registro no trae ``id`` se le asigna un entero autoincremental.

        Raises:
            ValueError: Si el ``id`` proporcionado ya existe en la tabla.
            StoreUnavailable: Si el almacén no puede leerse o escribirse.

        """

        self._check_table(table)
        with self._lock:
            db = load_db(self.path)
            rows = db[table]
            row = dict(record)
            if row.get("id") is None:
                numeric = [r["id"] for r in rows if isinstance(r.get("id"), int)]
                row["id"] = max(numeric, default=0) + 1
            elif any(r.get("id") == row["id"] for r in rows):
                raise ValueError(f"Duplicate id in {table}: {row['id']}")
            rows.append(row)
            save_db(db, self.path)
        return row["id"]

    def get_by_id(self, table: str, record_id: RecordId) -> Optional[Dict[str, Any]]:
        self._check_table(table)
        for row in load_db(self.path)[table]:
            if row.get("id") == record_id:
                return copy.deepcopy(row)
        return None
