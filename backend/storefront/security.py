"""
Storefront Backend — Password Hashing and Tokens
==================================================

What:  bcrypt password hashing and PyJWT access tokens.
Who:   UserService, CustomerService, AuthService and the route dependencies.

Token Claims:
    sub     id of the authenticated user or customer
    domain  "admin" or "store"; a store token is never accepted on /admin
    iat     issued-at (UTC)
    exp     expiry (UTC), `settings.jwt_expires_in` after iat
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from storefront.config import settings
from storefront.exceptions import UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

ADMIN_DOMAIN = "admin"
STORE_DOMAIN = "store"

ADMIN_SESSION_COOKIE = "storefront_admin_session"
STORE_SESSION_COOKIE = "storefront_store_session"


# ── Passwords ─────────────────────────────────────────────────────────────
# bcrypt only reads the first 72 bytes; bcrypt>=5 rejects anything longer
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a plain text password with a fresh bcrypt salt.

    Raises:
        ValidationError: the password is longer than 72 UTF-8 bytes
    """
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
        )
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Constant-time check of `password` against a stored bcrypt hash."""
    if not password_hash or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        logger.warning("Stored password hash could not be parsed")
        return False


# ── Tokens ────────────────────────────────────────────────────────────────
def create_access_token(
    subject: str,
    domain: str,
    expires_in: Optional[int] = None,
    secret: Optional[str] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Issue a signed JWT for `subject`.

    Args:
        subject: Entity id stored in the `sub` claim
        domain: ADMIN_DOMAIN or STORE_DOMAIN
        expires_in: Lifetime in seconds (defaults to settings.jwt_expires_in)
        secret: Signing key (defaults to settings.jwt_secret); password reset
                tokens are signed with the user's password hash instead so
                they stop working once the password changes
        extra_claims: Additional claims merged into the payload
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": subject,
        "domain": domain,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in or settings.jwt_expires_in),
    }
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(
    token: str,
    domain: Optional[str] = None,
    secret: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Verify signature and expiry of `token` and return its claims.

    Raises:
        UnauthorizedError: expired, malformed or wrongly signed token, or a
                           token issued for another domain
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected token: %s", str(e))
        raise UnauthorizedError("Invalid token")

    if domain is not None and payload.get("domain") != domain:
        raise UnauthorizedError("Invalid token")
    return payload


def read_unverified_claims(token: str) -> Dict[str, Any]:
    """
    Read claims without verifying the signature.

    Only used to find which user a password reset token belongs to, so the
    token can then be verified with that user's password hash.
    """
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")
