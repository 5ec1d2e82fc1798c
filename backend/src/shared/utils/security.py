"""
Security Utilities

Password hashing, JWT access tokens and opaque random tokens.

Usage:
======
    from src.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("s3cret-pass")
    SecurityUtils.verify_password("s3cret-pass", hashed)  # True

    token = SecurityUtils.create_access_token(
        data={"user_id": str(profile.id), "email": profile.email},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)

    SecurityUtils.bearer_matches("Bearer abc", "abc")   # cron auth
    SecurityUtils.generate_token()                      # unsubscribe links
"""

from datetime import datetime, timedelta, timezone
import hmac
from typing import Optional
import uuid

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """Stateless helpers for authentication and token handling."""

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Bcrypt hash with a random salt embedded in the result."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT carrying data plus exp/iat claims.

        Args:
            data: Payload (user_id, email)
            secret_key: Signing key
            expires_delta: Lifetime (default: 7 days)
            algorithm: JWT algorithm

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + (expires_delta or timedelta(days=7)),
            "iat": now,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify a JWT.

        Raises:
            ValueError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

    # ═══════════════════════════════════════════════════════════════════════════
    # OPAQUE TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def generate_token() -> str:
        """Random UUID4 string, used for newsletter unsubscribe links."""
        return str(uuid.uuid4())

    @staticmethod
    def bearer_matches(authorization: Optional[str], secret: str) -> bool:
        """Constant-time check of an Authorization header against "Bearer {secret}"."""
        if not authorization:
            return False
        return hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode())
