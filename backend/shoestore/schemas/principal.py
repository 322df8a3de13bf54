"""
shoestore/schemas/principal.py
Who is calling: built once per request from the verified Firebase token.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Role = Literal["guest", "user", "admin"]


class Principal(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    # guest: anonymous Firebase sign-in, admin: `admin` custom claim
    role: Role
    email: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_guest(self) -> bool:
        return self.role == "guest"
