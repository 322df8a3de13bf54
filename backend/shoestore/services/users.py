# shoestore/services/users.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from shoestore.repositories import users as user_repo
from shoestore.schemas.principal import Principal
from shoestore.schemas.user import ProfileOut, ProfileUpdate

logger = logging.getLogger("shoestore.users")


def _to_out(principal: Principal, doc: dict) -> ProfileOut:
    return ProfileOut(
        uid=principal.uid,
        email=principal.email,
        display_name=doc.get("display_name") or principal.display_name,
        phone=doc.get("phone"),
        shipping_address=doc.get("shipping_address"),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def get_profile(db, principal: Principal) -> ProfileOut:
    """Stored profile, or one built from the token when nothing was saved yet (nothing is written)."""
    return _to_out(principal, user_repo.get(db, principal.uid) or {})


def update_profile(db, principal: Principal, payload: ProfileUpdate) -> ProfileOut:
    current = user_repo.get(db, principal.uid)
    patch = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if not patch:
        return _to_out(principal, current or {})

    now = datetime.now(timezone.utc)
    patch["updated_at"] = now
    if current is None:
        patch["created_at"] = now
    user_repo.merge(db, principal.uid, patch)
    logger.info("Profile %s updated: %s", principal.uid, sorted(patch))
    return _to_out(principal, {**(current or {}), **patch})
