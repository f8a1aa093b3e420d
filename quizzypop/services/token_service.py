"""
JWT access tokens and opaque refresh tokens
"""
import base64
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt

from quizzypop.config import settings
from quizzypop.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class TokenService:
    """
    Issues HS256-signed access tokens and random refresh tokens

    Access tokens carry the caller's claims plus issuer, audience and a
    short expiry. Refresh tokens are 64 random bytes, base64-encoded, and
    only mean something when looked up in the refresh_tokens table.
    """

    ALGORITHM = "HS256"
    MIN_SECRET_BYTES = 32
    REFRESH_TOKEN_BYTES = 64

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        access_token_minutes: int = 30,
        refresh_token_days: int = 7
    ):
        if not secret or len(secret.encode("utf-8")) < self.MIN_SECRET_BYTES:
            raise ValueError("JWT signing secret must be at least 256 bits")

        self.secret = secret
        self.issuer = issuer
        self.audience = audience
        self.access_token_minutes = access_token_minutes
        self.refresh_token_days = refresh_token_days

    def issue_access_token(
        self,
        claims: Dict[str, Any],
        now: Optional[datetime] = None
    ) -> Tuple[str, datetime]:
        """
        Build a signed access token

        Args:
            claims: Caller claims (sub, name, role)
            now: Issue time, defaults to the current UTC time

        Returns:
            Tuple of (encoded token, expiry)
        """
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(minutes=self.access_token_minutes)

        payload = {
            **claims,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "nbf": now,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)
        return token, expires_at

    def issue_refresh_token(self) -> str:
        return base64.b64encode(secrets.token_bytes(self.REFRESH_TOKEN_BYTES)).decode("ascii")

    def refresh_token_expiry(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) + timedelta(days=self.refresh_token_days)

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """
        Verify signature, issuer, audience and expiry with no clock skew

        Raises:
            UnauthorizedError: token is malformed, forged, expired or for another audience
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                leeway=0,
                options={"require": ["exp", "iss", "aud", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Access token has expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected access token: {str(e)}")
            raise UnauthorizedError("Invalid access token")


# Global instance; a missing or short secret fails here, at startup
token_service = TokenService(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    audience=settings.JWT_AUDIENCE,
    access_token_minutes=settings.ACCESS_TOKEN_MINUTES,
    refresh_token_days=settings.REFRESH_TOKEN_DAYS
)
