"""
shoestore/schemas/user.py - Profile models for /users/me.

The e-mail comes from the Firebase token and is not editable here.
"""
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field

PHONE_REGEX = r"^\+?[0-9 ()\-]{7,20}$"
NameStr = Annotated[str, Field(min_length=1, max_length=120)]
PhoneStr = Annotated[str, Field(pattern=PHONE_REGEX)]


class ProfileOut(BaseModel):
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = Field(None, description="Full name of the user")
    phone: Optional[str] = Field(None, description="Phone number")
    shipping_address: Optional[str] = Field(None, description="Default address used at checkout")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """All fields optional; omitted or null fields keep their stored value."""
    display_name: Optional[NameStr] = None
    phone: Optional[PhoneStr] = None
    shipping_address: Optional[str] = Field(None, min_length=1)
