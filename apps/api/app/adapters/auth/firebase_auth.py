"""Firebase ID token sign-in."""

from __future__ import annotations

from app.adapters.auth.base import SessionVerificationError, SessionVerifier
from app.schemas.auth import SessionSubject


class FirebaseSessionVerifier(SessionVerifier):
    def __init__(self, project_id: str | None, audience: str | None) -> None:
        self._project_id = project_id
        self._audience = audience

    def verify_session(self, token: str) -> SessionSubject:
        try:
            import firebase_admin
            from firebase_admin import auth as firebase_auth
        except ImportError as exc:  # pragma: no cover - firebase extra not installed
            raise SessionVerificationError("firebase-admin is not installed") from exc

        if not firebase_admin._apps:
            firebase_admin.initialize_app()

        try:
            claims = firebase_auth.verify_id_token(token, check_revoked=True)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise SessionVerificationError("Firebase rejected the sign-in token") from exc

        if self._audience and claims.get("aud") != self._audience:
            raise SessionVerificationError("Sign-in token was issued for another audience")

        if self._project_id:
            issuer = str(claims.get("iss", ""))
            if self._project_id not in issuer and str(claims.get("aud", "")) != self._project_id:
                raise SessionVerificationError("Sign-in token was issued by another project")

        user_id = str(claims.get("uid") or claims.get("sub") or "").strip()
        if not user_id:
            raise SessionVerificationError("Sign-in token carries no user id")

        return SessionSubject(user_id=user_id, email=str(claims.get("email") or ""))


__all__ = ["FirebaseSessionVerifier"]
