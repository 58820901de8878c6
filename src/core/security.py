"""
Security utilities for ResumeCraft

- CSRF token generation (double-submit cookie)
- Password hashing (bcrypt)
- JWT session tokens (issue / verify)
- Resolving a session token to a user
- Admin checks
"""

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from fastapi import Request
from jose import JWTError, jwt

from src.config.settings import Settings, get_settings
from src.models.auth import User, UserRole

logger = logging.getLogger(__name__)

SESSION_COOKIE = "token"
CSRF_TOKEN_BYTES = 32
BCRYPT_ROUNDS = 12

_BEARER_PREFIX = re.compile(r"^Bearer\s+")


class AuthorizationError(Exception):
    """Raised when a user lacks the rights for an action."""
    pass


class UserRepository:
    """
    In-memory user store.

    Accounts are kept in process memory, keyed by id.
    """

    def __init__(self, users: list[User] | None = None):
        self._users: dict[str, User] = {}
        for user in users or []:
            self.add(user)

    def add(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def get(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        email = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == email:
                return user
        return None

    def all(self) -> list[User]:
        return sorted(self._users.values(), key=lambda user: user.created_at)

    def __len__(self) -> int:
        return len(self._users)


# ============================================================================
# CSRF
# ============================================================================

def generate_csrf_token() -> str:
    """
    Random CSRF token.

    Returns:
        str: 64-character lowercase hex string (32 random bytes).
    """
    return secrets.token_hex(CSRF_TOKEN_BYTES)


# ============================================================================
# PASSWORDS
# ============================================================================

def hash_password(plain_password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check a password against a bcrypt hash. Missing or malformed hashes never match."""
    if not hashed_password:
        return False

    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a bcrypt hash")
        return False


def authenticate_user(users: UserRepository, email: str, password: str) -> User | None:
    """Look up an account by email and check its password."""
    user = users.find_by_email(email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def seed_admin(users: UserRepository, settings: Settings | None = None) -> User | None:
    """
    Create the admin account from ADMIN_EMAIL / ADMIN_PASSWORD.

    Does nothing when either is unset or the email is already taken.
    """
    settings = settings or get_settings()
    if not (settings.admin_email and settings.admin_password):
        return None

    if users.find_by_email(settings.admin_email):
        return None

    admin = users.add(User(
        email=settings.admin_email.strip().lower(),
        name=settings.admin_name,
        role=UserRole.ADMIN,
        hashed_password=hash_password(settings.admin_password),
    ))
    logger.info(f"Seeded admin account {admin.email}")
    return admin


# ============================================================================
# SESSION TOKENS
# ============================================================================

def get_jwt_secret(settings: Settings | None = None) -> str | None:
    """
    Secret used to sign session tokens.

    NEXTAUTH_SECRET wins over JWT_SECRET. Production without either has
    no secret (auth disabled); development falls back to an insecure key.
    """
    settings = settings or get_settings()

    secret = settings.nextauth_secret or settings.jwt_secret
    if secret:
        return secret

    if settings.is_production:
        logger.error("Auth misconfigured: NEXTAUTH_SECRET is not set")
        return None

    logger.warning("NEXTAUTH_SECRET is not set; using an insecure dev fallback secret")
    return settings.dev_fallback_secret


def parse_token(value: str | None) -> str | None:
    """Strip a ``Bearer`` prefix. Empty values give None."""
    if not value:
        return None
    token = _BEARER_PREFIX.sub("", value).strip()
    return token or None


def token_from_request(request: Request) -> str | None:
    """Session token from the Authorization header, then the ``token`` cookie."""
    auth_header = request.headers.get("authorization")
    if auth_header:
        return parse_token(auth_header)

    return parse_token(request.cookies.get(SESSION_COOKIE))


def create_access_token(
    subject: str,
    settings: Settings | None = None,
    expires_minutes: int | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """
    Issue a signed session token.

    Args:
        subject: User id stored in the ``sub`` claim
        settings: Settings to read the secret and TTL from
        expires_minutes: Lifetime override
        extra_claims: Additional claims

    Raises:
        AuthorizationError: When no signing secret is configured
    """
    settings = settings or get_settings()
    secret = get_jwt_secret(settings)
    if not secret:
        raise AuthorizationError("Cannot issue tokens without a signing secret")

    ttl = expires_minutes if expires_minutes is not None else settings.token_ttl_minutes
    now = datetime.now(timezone.utc)

    claims: dict[str, Any] = dict(extra_claims or {})
    claims.update({
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
    })

    return jwt.encode(claims, secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> dict[str, Any] | None:
    """Verify a session token. Returns its claims, or None when invalid or expired."""
    settings = settings or get_settings()
    secret = get_jwt_secret(settings)
    if not secret:
        return None

    try:
        return jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Rejected session token: {e}")
        return None


def get_user_from_token(
    token: str | None,
    users: UserRepository,
    settings: Settings | None = None,
) -> User | None:
    """
    Resolve a session token to its user.

    Never raises: missing, malformed, expired or orphaned tokens all
    resolve to None.
    """
    token = parse_token(token)
    if not token:
        return None

    payload = decode_access_token(token, settings)
    if not payload:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    return users.get(str(subject))


def require_admin(user: User | None) -> User:
    """Raise AuthorizationError unless the user is an admin."""
    if user is None or user.role != UserRole.ADMIN:
        raise AuthorizationError("Unauthorized")
    return user
