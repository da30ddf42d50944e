"""Local sign-in used by the test suite and ``UGCMARKET_AUTH_PROVIDER=mock``."""

from app.adapters.auth.base import SessionVerificationError, SessionVerifier
from app.schemas.auth import SessionSubject

_TOKEN_PREFIX = "test"


class MockSessionVerifier(SessionVerifier):
    """Reads the user straight out of the token.

    ``test:<user_id>`` signs in with ``<user_id>@example.test``;
    ``test:<user_id>:<email>`` supplies the email explicitly.
    """

    def verify_session(self, token: str) -> SessionSubject:
        prefix, _, rest = token.partition(":")
        if prefix != _TOKEN_PREFIX or not rest or rest.count(":") > 1:
            raise SessionVerificationError("Not a local sign-in token")

        user_id, _, email = (part.strip() for part in rest.partition(":"))
        if not user_id:
            raise SessionVerificationError("Sign-in token carries no user id")

        return SessionSubject(user_id=user_id, email=email or f"{user_id}@example.test")


__all__ = ["MockSessionVerifier"]
