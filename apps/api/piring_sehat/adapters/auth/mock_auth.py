"""Mock auth verifier for local development and tests."""

from piring_sehat.adapters.auth.base import AuthVerificationError, TokenVerifier
from piring_sehat.schemas.auth import VerifiedIdentity


class MockTokenVerifier(TokenVerifier):
    """Accepts deterministic test tokens only.

    Expected token format:
    - ``test:<firebase_uid>``
    - ``test:<firebase_uid>:<email>``
    """

    def verify_token(self, token: str) -> VerifiedIdentity:
        parts = token.split(":")
        if len(parts) not in (2, 3) or parts[0] != "test":
            raise AuthVerificationError("Invalid bearer token")

        subject_id = parts[1].strip()
        if not subject_id:
            raise AuthVerificationError("Bearer token missing user identity")

        claims: dict[str, str] = {"uid": subject_id}
        if len(parts) == 3 and parts[2].strip():
            claims["email"] = parts[2].strip()

        return VerifiedIdentity(subject_id=subject_id, claims=claims)


__all__ = ["MockTokenVerifier"]
