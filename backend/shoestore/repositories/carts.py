# shoestore/repositories/carts.py
from typing import Any, Dict, Optional

from shoestore.config import settings

# one document per user, keyed by uid
COL = "carts"


def _col(db):
    return db.collection(settings.collection(COL))


def get(db, uid: str) -> Optional[Dict[str, Any]]:
    snap = _col(db).document(uid).get()
    if not snap.exists:
        return None
    data = snap.to_dict() or {}
    data["items"] = data.get("items") or []
    return data


def save(db, uid: str, cart: Dict[str, Any]) -> None:
    _col(db).document(uid).set(cart)
