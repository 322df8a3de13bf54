#!/usr/bin/env python3
"""
Grants the `admin` custom claim to a Firebase user (required by the /admin API).

Usage: python set_admin_claim.py <user_email> [--revoke]
"""
import sys

from firebase_admin import auth

from shoestore.config import init_firebase


def set_admin_claim(user_email: str, admin: bool = True) -> bool:
    """Sets (or removes) the admin claim, keeping any other custom claims."""
    try:
        init_firebase()
    except Exception as e:
        print(f"Firebase initialization failed: {e}")
        return False

    try:
        user = auth.get_user_by_email(user_email)
    except auth.UserNotFoundError:
        print(f"User not found: {user_email}")
        return False

    claims = dict(user.custom_claims or {})
    if admin:
        claims["admin"] = True
    else:
        claims.pop("admin", None)
    auth.set_custom_user_claims(user.uid, claims or None)
    print(f"Custom claims for {user.uid}: {claims}")
    return True


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    revoke = "--revoke" in args
    args = [a for a in args if a != "--revoke"]
    if len(args) != 1:
        print("Usage: python set_admin_claim.py <user_email> [--revoke]")
        return 1

    if not set_admin_claim(args[0], admin=not revoke):
        print("Failed to update admin claim")
        return 1
    print("The user will need to sign out and sign in again for the change to take effect.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
