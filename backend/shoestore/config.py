"""
shoestore/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and lazily initializes the Firebase Admin SDK (Firestore) using the provided credentials.
Routers receive the Firestore client through the `get_db` dependency, so importing the
application never requires credentials.
"""
import logging
from decimal import Decimal
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("shoestore.config")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    firebase_cred_file: str = Field("firebase_service_account.json")
    firebase_project_id: Optional[str] = None

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None
    firebase_collection_prefix: str = ""

    debug: bool = False
    log_level: str = "INFO"
    allowed_origins: str = "*"  # Comma-separated list or '*' for all
    # Accept `mock_jwt_token_<uid>` bearer tokens (local development only)
    allow_mock_tokens: bool = False

    currency: str = "USD"
    shipping_flat_rate: Decimal = Field(Decimal("10.00"), ge=0)
    free_shipping_threshold: Decimal = Field(Decimal("100.00"), ge=0)
    tax_rate: Decimal = Field(Decimal("0.08"), ge=0)

    def collection(self, name: str) -> str:
        """Prefix-aware collection name (FIREBASE_COLLECTION_PREFIX)."""
        prefix = (self.firebase_collection_prefix or "").strip()
        return f"{prefix}{name}" if prefix else name

    def _env_credentials(self) -> Optional[dict]:
        fields = [
            self.firebase_private_key_id,
            self.firebase_private_key,
            self.firebase_client_email,
            self.firebase_client_id,
            self.firebase_auth_uri,
            self.firebase_token_uri,
            self.firebase_auth_provider_x509_cert_url,
            self.firebase_client_x509_cert_url,
        ]
        if not all(fields):
            return None
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            # Cloud Run env vars keep the PEM newlines escaped
            "private_key": self.firebase_private_key.replace("\\n", "\n"),
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": self.firebase_auth_uri,
            "token_uri": self.firebase_token_uri,
            "auth_provider_x509_cert_url": self.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": self.firebase_client_x509_cert_url,
        }


# Load settings from environment (.env file, etc.)
settings = Settings()


def init_firebase() -> firebase_admin.App:
    """Initialize the default Firebase app once and return it."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    cred_dict = settings._env_credentials()
    if cred_dict:
        # Use environment variables for Firebase credentials (Cloud Run)
        cred = credentials.Certificate(cred_dict)
    else:
        # Use service account file (local development)
        cred = credentials.Certificate(settings.firebase_cred_file)

    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    logger.info("Initializing Firebase app (project=%s)", settings.firebase_project_id)
    return firebase_admin.initialize_app(cred, options)


@lru_cache(maxsize=1)
def _client():
    init_firebase()
    return firestore.client()


def get_db():
    """FastAPI dependency returning the shared Firestore client."""
    return _client()
