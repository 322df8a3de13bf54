# shoestore/repositories/products.py
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter

from shoestore.config import settings
from shoestore.repositories.common import snap_to_dict, stream_sorted_desc

COL = "products"


def _col(db):
    return db.collection(settings.collection(COL))


def get(db, product_id: str) -> Optional[Dict[str, Any]]:
    snap = _col(db).document(product_id).get()
    return snap_to_dict(snap) if snap.exists else None


def list_all(db) -> List[Dict[str, Any]]:
    return stream_sorted_desc(_col(db), "created_at")


def list_where(db, field: str, value: Any) -> List[Dict[str, Any]]:
    return stream_sorted_desc(_col(db).where(filter=FieldFilter(field, "==", value)), "created_at")


def create(db, data: Dict[str, Any]) -> Dict[str, Any]:
    ref = _col(db).document()
    ref.set(data)
    return {**data, "id": ref.id}


def update(db, product_id: str, patch: Dict[str, Any]) -> None:
    _col(db).document(product_id).update(patch)


def delete(db, product_id: str) -> None:
    _col(db).document(product_id).delete()
