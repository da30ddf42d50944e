"""Contract every sign-in provider implements."""

from abc import ABC, abstractmethod

from app.schemas.auth import SessionSubject


class SessionVerificationError(Exception):
    """The bearer token was rejected by the sign-in provider."""


class SessionVerifier(ABC):
    """Answers "who signed in?" for a bearer token.

    Implementations only establish the user id and email. Roles and
    profile ids come from the marketplace's own ``users`` records.
    """

    @abstractmethod
    def verify_session(self, token: str) -> SessionSubject:
        """Return the signed-in user, or raise ``SessionVerificationError``."""


__all__ = ["SessionVerificationError", "SessionVerifier"]
