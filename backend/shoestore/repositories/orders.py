# shoestore/repositories/orders.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter

from shoestore.config import settings
from shoestore.repositories.common import snap_to_dict, stream_desc

COL = "orders"


def _col(db):
    return db.collection(settings.collection(COL))


def get(db, order_id: str) -> Optional[Dict[str, Any]]:
    snap = _col(db).document(order_id).get()
    return snap_to_dict(snap) if snap.exists else None


def list_all(db) -> List[Dict[str, Any]]:
    return stream_desc(_col(db), "order_date")


def list_by_field(db, field: str, value: Any) -> List[Dict[str, Any]]:
    return stream_desc(_col(db).where(filter=FieldFilter(field, "==", value)), "order_date")


def list_between(db, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    q = (
        _col(db)
        .where(filter=FieldFilter("order_date", ">=", start))
        .where(filter=FieldFilter("order_date", "<=", end))
    )
    return stream_desc(q, "order_date")


def stream_all(db):
    """Unordered scan, used by reporting."""
    for snap in _col(db).stream():
        yield snap_to_dict(snap)


def create(db, order_id: str, doc: Dict[str, Any]) -> None:
    _col(db).document(order_id).set(doc)


def update(db, order_id: str, patch: Dict[str, Any]) -> None:
    _col(db).document(order_id).update(patch)
