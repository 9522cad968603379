"""Credential and token checks guarding schedule mutations.

There is exactly one privileged identity. Tokens are HS256 JWTs with a fixed
lifetime and cannot be revoked: a token stays valid until it expires, even
after later logins.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from venue_hours.errors import AuthError, AuthFailure
from venue_hours.metrics import AUTH_ATTEMPTS_TOTAL

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return pwd_context.hash(password)


class IdentityStore:
    """Holds the single privileged principal."""

    def __init__(self, username: str, password_hash: str):
        self.username = username
        self.password_hash = password_hash

    @classmethod
    def from_plain_password(cls, username: str, password: str) -> "IdentityStore":
        return cls(username, hash_password(password))

    def verify(self, username: str, password: str) -> bool:
        """Check a username/password pair.

        The hash is checked even when the username is wrong so both failure
        causes take the same time.
        """
        try:
            password_ok = pwd_context.verify(password, self.password_hash)
        except (ValueError, TypeError) as e:
            logger.error(f"[IdentityStore] Password verification error: {e}")
            password_ok = False
        return password_ok and username == self.username


class AuthGate:
    """Issues tokens on login and verifies them before mutations."""

    def __init__(
        self,
        identity_store: IdentityStore,
        secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(hours=1),
    ):
        """Initialize the gate.

        Args:
            identity_store: The privileged principal
            secret: Signing secret, read-only after startup
            algorithm: JWT signing algorithm
            token_ttl: Token lifetime
        """
        self.identity_store = identity_store
        self.secret = secret
        self.algorithm = algorithm
        self.token_ttl = token_ttl

    def login(self, username: str, password: str) -> str:
        """Exchange credentials for a signed, time-bounded token.

        Raises:
            AuthError: INVALID_CREDENTIALS for a wrong username or password
        """
        if not self.identity_store.verify(username, password):
            AUTH_ATTEMPTS_TOTAL.labels(operation="login", result="invalid_credentials").inc()
            logger.warning("[AuthGate] Login rejected")
            raise AuthError(AuthFailure.INVALID_CREDENTIALS)

        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.token_ttl,
        }
        token = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        AUTH_ATTEMPTS_TOTAL.labels(operation="login", result="success").inc()
        logger.info(f"[AuthGate] Issued token for {username}")
        return token

    def authorize(self, token: Optional[str]) -> dict[str, Any]:
        """Verify a bearer token and return its claims.

        Raises:
            AuthError: NO_TOKEN when no token was presented, INVALID_TOKEN when
                it is malformed, tampered with or expired
        """
        if not token:
            AUTH_ATTEMPTS_TOTAL.labels(operation="authorize", result="no_token").inc()
            raise AuthError(AuthFailure.NO_TOKEN)

        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            AUTH_ATTEMPTS_TOTAL.labels(operation="authorize", result="invalid_token").inc()
            logger.warning(f"[AuthGate] Token rejected: {e}")
            raise AuthError(AuthFailure.INVALID_TOKEN) from e

        AUTH_ATTEMPTS_TOTAL.labels(operation="authorize", result="success").inc()
        return claims
