# shoestore/repositories/users.py
from typing import Any, Dict, Optional

from shoestore.config import settings

# one profile document per user, keyed by uid
COL = "users"


def _col(db):
    return db.collection(settings.collection(COL))


def get(db, uid: str) -> Optional[Dict[str, Any]]:
    snap = _col(db).document(uid).get()
    if not snap.exists:
        return None
    return snap.to_dict() or {}


def merge(db, uid: str, patch: Dict[str, Any]) -> None:
    _col(db).document(uid).set(patch, merge=True)
