"""Authentication helpers (static dev token, Firebase ID tokens, JWT)."""

from __future__ import annotations

import abc
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional

import firebase_admin
import jwt
from fastapi import status
from firebase_admin import auth as firebase_auth

from ..models.auth import JWTPayload
from .config import AppConfig, get_config
from .firestore_backend import get_firebase_app

logger = logging.getLogger(__name__)

DEV_FALLBACK_USER = "dev-user"


class AuthError(Exception):
    """Domain-specific authentication error."""

    def __init__(
        self,
        error: str,
        message: str,
        *,
        status_code: int = status.HTTP_401_UNAUTHORIZED,
        detail: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.detail = detail or {}


class TokenValidator(abc.ABC):
    """Abstract base class for token validation strategies."""

    @abc.abstractmethod
    def validate(self, token: str) -> Optional[JWTPayload]:
        """
        Validate the token and return payload if valid, or None if this validator
        does not recognize the token (allow fallthrough).
        Raises AuthError if token is recognized but invalid/expired.
        """


class StaticTokenValidator(TokenValidator):
    """Validates against a configured static token (local dev)."""

    def __init__(self, static_token: Optional[str], user_id: str):
        self.static_token = static_token
        self.user_id = user_id

    def validate(self, token: str) -> Optional[JWTPayload]:
        if self.static_token and token == self.static_token:
            now = datetime.now(timezone.utc)
            return JWTPayload(
                sub=self.user_id,
                iat=int(now.timestamp()),
                exp=int((now + timedelta(days=365)).timestamp()),
            )
        return None


class FirebaseTokenValidator(TokenValidator):
    """Verifies Firebase ID tokens issued to signed-in users."""

    def __init__(self, app: firebase_admin.App):
        self.app = app

    def validate(self, token: str) -> Optional[JWTPayload]:
        try:
            decoded = firebase_auth.verify_id_token(token, app=self.app)
        except firebase_auth.ExpiredIdTokenError as exc:
            raise AuthError("token_expired", "Token expired") from exc
        except firebase_auth.RevokedIdTokenError as exc:
            raise AuthError("token_revoked", "Token revoked") from exc
        except (firebase_auth.InvalidIdTokenError, ValueError):
            # Not a Firebase token; let the next validator try
            return None
        now = int(datetime.now(timezone.utc).timestamp())
        return JWTPayload(
            sub=decoded["uid"],
            iat=int(decoded.get("iat", now)),
            exp=int(decoded.get("exp", now)),
        )


class JWTValidator(TokenValidator):
    """Validates standard JWT tokens signed by the application secret."""

    def __init__(self, config: AppConfig, algorithm: str = "HS256"):
        self.config = config
        self.algorithm = algorithm

    def validate(self, token: str) -> Optional[JWTPayload]:
        secret = self.config.jwt_secret_key
        if not secret:
            return None
        try:
            decoded = jwt.decode(token, secret, algorithms=[self.algorithm])
            return JWTPayload(**decoded)
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("token_expired", "Token expired") from exc
        except jwt.DecodeError:
            # Malformed (not a JWT)
            return None
        except jwt.InvalidTokenError as exc:
            raise AuthError("invalid_token", f"Invalid token: {exc}") from exc


class AuthService:
    """Resolve caller identities and issue development tokens."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        firebase_app: Optional[firebase_admin.App] = None,
        algorithm: str = "HS256",
        token_ttl_days: int = 90,
    ) -> None:
        self.config = config or get_config()
        self.firebase_app = firebase_app
        self.algorithm = algorithm
        self.token_ttl_days = token_ttl_days

        self.validators: List[TokenValidator] = []
        if self.config.enable_local_mode and not self.config.is_production:
            self.validators.append(
                StaticTokenValidator(self.config.local_dev_token, "local-dev")
            )
        if self.firebase_app is not None:
            self.validators.append(FirebaseTokenValidator(self.firebase_app))
        self.validators.append(JWTValidator(self.config, algorithm))

    @property
    def dev_bypass_enabled(self) -> bool:
        """Whether caller-asserted identities are accepted."""
        if self.config.allow_dev_auth_bypass:
            return True
        return self.firebase_app is None and not self.config.is_production

    def validate_token(self, token: str) -> JWTPayload:
        """
        Validate a bearer token against all registered strategies.

        Returns the first successful payload. Raises AuthError if no validator
        accepts it or if one explicitly rejects it.
        """
        for validator in self.validators:
            payload = validator.validate(token)
            if payload:
                return payload
        raise AuthError("invalid_token", "Invalid authentication credentials")

    def resolve_user_id(
        self, authorization: Optional[str], asserted_user_id: Optional[str] = None
    ) -> Optional[str]:
        """
        Turn request credentials into a user id, or None for anonymous callers.

        A verified bearer token wins. An invalid one raises AuthError unless the
        development bypass is on, in which case the asserted id (or a fixed
        fallback user) is used instead. Other schemes are ignored.
        """
        bypass = self.dev_bypass_enabled
        if authorization:
            scheme, _, token = authorization.partition(" ")
            token = token.strip()
            if scheme.lower() == "bearer" and token:
                try:
                    return self.validate_token(token).sub
                except AuthError:
                    if not bypass:
                        raise
                    logger.debug("Bearer token rejected; falling back to dev identity")

        if bypass:
            return asserted_user_id or DEV_FALLBACK_USER
        return None

    def _require_secret(self) -> str:
        secret = self.config.jwt_secret_key
        if not secret:
            raise AuthError("missing_jwt_secret", "JWT secret not configured", status_code=500)
        return secret

    def _build_payload(
        self, user_id: str, expires_in: Optional[timedelta] = None
    ) -> JWTPayload:
        now = datetime.now(timezone.utc)
        lifetime = expires_in or timedelta(days=self.token_ttl_days)
        return JWTPayload(
            sub=user_id,
            iat=int(now.timestamp()),
            exp=int((now + lifetime).timestamp()),
        )

    def create_jwt(
        self, user_id: str, *, expires_in: Optional[timedelta] = None
    ) -> str:
        """Create a signed JWT for the given user."""
        payload = self._build_payload(user_id, expires_in)
        return jwt.encode(
            payload.model_dump(),
            self._require_secret(),
            algorithm=self.algorithm,
        )


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    return AuthService(get_config(), firebase_app=get_firebase_app())


__all__ = [
    "AuthService",
    "AuthError",
    "TokenValidator",
    "StaticTokenValidator",
    "FirebaseTokenValidator",
    "JWTValidator",
    "get_auth_service",
    "DEV_FALLBACK_USER",
]
