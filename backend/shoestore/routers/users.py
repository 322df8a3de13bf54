"""
shoestore/routers/users.py
Profile of the signed-in caller: display name, phone and default shipping address.
"""
from fastapi import APIRouter, Depends

from shoestore.config import get_db
from shoestore.core.auth import get_principal
from shoestore.schemas.principal import Principal
from shoestore.schemas.user import ProfileOut, ProfileUpdate
from shoestore.services import users as user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=ProfileOut)
def get_my_profile(principal: Principal = Depends(get_principal), db=Depends(get_db)):
    return user_service.get_profile(db, principal)


@router.put("/me", response_model=ProfileOut)
def update_my_profile(payload: ProfileUpdate, principal: Principal = Depends(get_principal), db=Depends(get_db)):
    """Omitted fields are left unchanged."""
    return user_service.update_profile(db, principal, payload)
