"""Authentication provider infrastructure package."""

from .firebase_auth_client import FirebaseAuthClient

__all__ = ["FirebaseAuthClient"]
