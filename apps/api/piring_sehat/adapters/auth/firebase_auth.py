"""Firebase Auth token verifier adapter."""

from __future__ import annotations

import logging
import threading

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials

from piring_sehat.adapters.auth.base import AuthVerificationError, TokenVerifier
from piring_sehat.schemas.auth import VerifiedIdentity

logger = logging.getLogger(__name__)

_GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class FirebaseTokenVerifier(TokenVerifier):
    """Verifies Firebase ID tokens against a dedicated, lazily initialized Firebase app.

    Service-account credentials are used when both the client email and the
    private key are configured; otherwise the SDK falls back to application
    default credentials.
    """

    def __init__(
        self,
        *,
        project_id: str | None,
        client_email: str | None = None,
        private_key: str | None = None,
        app_name: str = "piring-sehat",
    ) -> None:
        self._project_id = project_id
        self._client_email = client_email
        self._private_key = private_key
        self._app_name = app_name
        self._app: firebase_admin.App | None = None
        self._lock = threading.Lock()

        if not (project_id and client_email and private_key):
            logger.warning("firebase.config_incomplete falling_back_to=application_default_credentials")

    def _get_app(self) -> firebase_admin.App:
        with self._lock:
            if self._app is not None:
                return self._app

            try:
                self._app = firebase_admin.get_app(self._app_name)
            except ValueError:
                self._app = firebase_admin.initialize_app(
                    self._build_credential(),
                    {"projectId": self._project_id} if self._project_id else None,
                    name=self._app_name,
                )
            return self._app

    def _build_credential(self) -> credentials.Base | None:
        if not (self._client_email and self._private_key):
            return None
        return credentials.Certificate(
            {
                "type": "service_account",
                "project_id": self._project_id,
                "client_email": self._client_email,
                "private_key": self._private_key,
                "token_uri": _GOOGLE_TOKEN_URI,
            }
        )

    def verify_token(self, token: str) -> VerifiedIdentity:
        try:
            app = self._get_app()
            decoded = firebase_auth.verify_id_token(token, app=app, check_revoked=True)
        except Exception as exc:  # provider exception surface
            raise AuthVerificationError("Invalid bearer token") from exc

        subject_id = str(decoded.get("uid") or decoded.get("sub") or "").strip()
        if not subject_id:
            raise AuthVerificationError("Bearer token missing user identity")

        return VerifiedIdentity(subject_id=subject_id, claims=dict(decoded))


__all__ = ["FirebaseTokenVerifier"]
