# shoestore/core/auth.py
import logging
from typing import Optional

from fastapi import Depends, Request
from firebase_admin import auth as fb_auth

from shoestore.config import init_firebase, settings
from shoestore.core.errors import Forbidden, Unauthorized
from shoestore.schemas.principal import Principal

logger = logging.getLogger("shoestore.auth")

MOCK_TOKEN_PREFIX = "mock_jwt_token_"


def _extract_bearer_token(request: Request) -> Optional[str]:
    """
    Reads the token from the `Authorization: Bearer <id_token>` header.
    Returns None when it is missing or malformed.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_mock_token(mock_token: str) -> dict:
    """
    Format: mock_jwt_token_<uid>. Mock tokens never carry the admin claim.
    """
    uid = mock_token[len(MOCK_TOKEN_PREFIX):]
    if not uid:
        raise Unauthorized("Invalid mock token format")
    return {
        "uid": uid,
        "email": None,
        "name": None,
        "firebase": {
            "sign_in_provider": "anonymous" if "anonymous" in uid else "password"
        },
        "admin": False,
    }


def _decode_id_token(id_token: str) -> dict:
    """
    Verifies a Firebase ID token (with revocation check).
    Invalid, revoked or expired tokens fail with 401.
    """
    if settings.allow_mock_tokens and id_token.startswith(MOCK_TOKEN_PREFIX):
        return _decode_mock_token(id_token)

    init_firebase()
    try:
        return fb_auth.verify_id_token(id_token, check_revoked=True)
    except fb_auth.ExpiredIdTokenError:
        raise Unauthorized("Token expired")
    except fb_auth.RevokedIdTokenError:
        raise Unauthorized("Session revoked")
    except (ValueError, fb_auth.InvalidIdTokenError, fb_auth.UserDisabledError) as exc:
        logger.warning("Rejected ID token: %s", exc)
        raise Unauthorized("Invalid authentication token")


def _token_to_principal(decoded: dict) -> Principal:
    """
    - anonymous provider -> role='guest'
    - custom claim admin=True -> role='admin'
    - everything else -> role='user'
    """
    uid = decoded.get("uid") or decoded.get("user_id")
    if not uid:
        raise Unauthorized("Token missing uid.")

    provider = (decoded.get("firebase") or {}).get("sign_in_provider")
    if provider == "anonymous":
        role = "guest"
    elif decoded.get("admin") is True:
        role = "admin"
    else:
        role = "user"

    return Principal(
        uid=uid,
        role=role,
        email=decoded.get("email"),
        display_name=decoded.get("name"),
    )

# --------- FastAPI Dependencies --------- #

async def get_principal(request: Request) -> Principal:
    """Token required: verifies it and returns the Principal (guest/user/admin)."""
    token = _extract_bearer_token(request)
    if not token:
        raise Unauthorized("Missing Authorization header.")
    return _token_to_principal(_decode_id_token(token))


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    """Only admin users are accepted."""
    if not principal.is_admin:
        raise Forbidden("Admin privilege required.")
    return principal
