"""Sign-in providers that turn a bearer token into a marketplace user id."""

from .base import SessionVerificationError, SessionVerifier
from .firebase_auth import FirebaseSessionVerifier
from .mock_auth import MockSessionVerifier

__all__ = [
    "SessionVerificationError",
    "SessionVerifier",
    "FirebaseSessionVerifier",
    "MockSessionVerifier",
]
