"""
JWT token creation / verification and password hashing.

Passwords are stored as unsalted hex SHA-256 digests (passlib's
``hex_sha256`` scheme).  This matches the digests already held in the
``user_passwords`` table; moving to a salted or adaptive scheme changes
stored-data compatibility and needs a migration.
"""

from __future__ import annotations

import base64
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordSizeError

from hr_api.core.config import Settings
from hr_api.core.errors import AppError, AuthErrors

pwd_context = CryptContext(schemes=["hex_sha256"])


class InvalidInput(ValueError):
    """Raised when a value handed to the hasher is empty or blank."""


# ── Passwords ───────────────────────────────────────────────────────
class PasswordHasher:
    @staticmethod
    def hash(password: str) -> str:
        if not password or not password.strip():
            raise InvalidInput("Password cannot be null or empty")
        try:
            return pwd_context.hash(password)
        except PasswordSizeError as exc:
            raise InvalidInput("Password exceeds the maximum allowed size") from exc

    @staticmethod
    def verify(password: str, digest: str) -> bool:
        """Case-insensitive digest comparison; never raises."""
        if not password or not password.strip() or not digest or not digest.strip():
            return False
        try:
            return pwd_context.verify(password, digest.strip().lower())
        except ValueError:
            # digest is not a recognisable hex SHA-256 string
            return False

    @staticmethod
    def generate_salt(length: int = 16) -> str:
        return base64.b64encode(secrets.token_bytes(length)).decode("ascii")

    @classmethod
    def hash_with_salt(cls, password: str, salt: str) -> str:
        if not password or not password.strip():
            raise InvalidInput("Password cannot be null or empty")
        if not salt or not salt.strip():
            raise InvalidInput("Salt cannot be null or empty")
        return cls.hash(password + salt)


# ── JWT tokens ──────────────────────────────────────────────────────
@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    issuer: str
    audience: str
    algorithm: str = "HS256"
    expiration_minutes: int = 60

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenConfig:
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            algorithm=settings.JWT_ALGORITHM,
            expiration_minutes=settings.JWT_EXPIRATION_MINUTES,
        )


@dataclass(frozen=True)
class TokenClaims:
    subject: int
    role: str | None
    email: str | None = None


class TokenService:
    """Issues and validates the bearer tokens handed out at login."""

    def __init__(self, config: TokenConfig) -> None:
        self._config = config

    def issue(
        self,
        user_id: int,
        email: str,
        role: str,
        issued_at: datetime | None = None,
    ) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        expire = issued_at + timedelta(minutes=self._config.expiration_minutes)
        claims = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "jti": str(uuid.uuid4()),
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "iss": self._config.issuer,
            "aud": self._config.audience,
        }
        return jwt.encode(claims, self._config.secret_key, algorithm=self._config.algorithm)

    def expiration_seconds(self) -> int:
        return self._config.expiration_minutes * 60

    def validate(self, token: str) -> TokenClaims:
        """Verify signature, issuer, audience and expiry (no clock skew).

        Raises ``AppError`` with ``TOKEN_EXPIRED`` or ``TOKEN_INVALID``.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret_key,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                options={"leeway": 0, "require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError as exc:
            raise AppError(AuthErrors.TOKEN_EXPIRED) from exc
        except JWTError as exc:
            raise AppError(AuthErrors.TOKEN_INVALID, details=str(exc)) from exc

        try:
            subject = int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AppError(AuthErrors.TOKEN_INVALID, details="Invalid subject claim") from exc
        return TokenClaims(subject=subject, role=payload.get("role"), email=payload.get("email"))

    @staticmethod
    def subject_of(token: str) -> int | None:
        """Read the subject claim without verifying the token."""
        try:
            return int(jwt.get_unverified_claims(token)["sub"])
        except (JWTError, KeyError, TypeError, ValueError):
            return None

    @staticmethod
    def role_of(token: str) -> str | None:
        """Read the role claim without verifying the token."""
        try:
            role = jwt.get_unverified_claims(token).get("role")
        except JWTError:
            return None
        return role if isinstance(role, str) else None
