"""Request admission: bearer token -> verified identity -> local principal."""

from __future__ import annotations

import logging

from piring_sehat.adapters.auth import AuthVerificationError, TokenVerifier
from piring_sehat.core.logging_safety import safe_log_identifier
from piring_sehat.errors import Unauthenticated
from piring_sehat.repositories.base import DataStore
from piring_sehat.schemas.auth import AuthPrincipal
from piring_sehat.services.store_errors import store_call

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "Unauthorized: missing token"
INVALID_TOKEN_MESSAGE = "Unauthorized: invalid token"


class AuthGate:
    """Admits a request only when its token verifies and maps to a provisioned local user.

    The gate is read-only: users are provisioned by the explicit sync
    operation, never here. Every rejection after the presence check carries
    the same message, whichever step failed.
    """

    def __init__(self, verifier: TokenVerifier, store: DataStore) -> None:
        self._verifier = verifier
        self._store = store

    def admit(self, token: str | None, *, correlation_id: str = "") -> AuthPrincipal:
        safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
        if not token:
            logger.warning("auth.rejected correlation_id=%s reason=missing_bearer", safe_correlation_id)
            raise Unauthenticated(MISSING_TOKEN_MESSAGE)

        try:
            identity = self._verifier.verify_token(token)
        except AuthVerificationError as exc:
            logger.warning(
                "auth.rejected correlation_id=%s reason=token_verification_failed detail=%s",
                safe_correlation_id,
                exc,
            )
            raise Unauthenticated(INVALID_TOKEN_MESSAGE) from exc

        safe_subject_id = safe_log_identifier(identity.subject_id, prefix="sub")
        with store_call("auth.lookup_user", "Failed to resolve authenticated user"):
            user = self._store.get_user_by_firebase_uid(identity.subject_id)

        if user is None:
            logger.warning(
                "auth.rejected correlation_id=%s subject_id=%s reason=user_not_provisioned",
                safe_correlation_id,
                safe_subject_id,
            )
            raise Unauthenticated(INVALID_TOKEN_MESSAGE)

        logger.info(
            "auth.accepted correlation_id=%s subject_id=%s principal_id=%s role=%s",
            safe_correlation_id,
            safe_subject_id,
            safe_log_identifier(user.id, prefix="pid"),
            user.role,
        )
        return AuthPrincipal(external_subject_id=identity.subject_id, user_id=user.id, role=user.role)
