"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from piring_sehat.schemas.auth import VerifiedIdentity


class AuthVerificationError(Exception):
    """Raised when a token cannot be verified or normalized."""


class TokenVerifier(ABC):
    """Provider-neutral token verification interface."""

    @abstractmethod
    def verify_token(self, token: str) -> VerifiedIdentity:
        """Verify token and return the provider's subject identity."""


__all__ = ["AuthVerificationError", "TokenVerifier"]
