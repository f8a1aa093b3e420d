"""
Registration, login and refresh-token rotation
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from quizzypop.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from quizzypop.models import RefreshToken, User
from quizzypop.repositories import RefreshTokenRepository, UserRepository
from quizzypop.schemas.auth import RegisterRequest, TokenResponse
from quizzypop.services.password_hasher import KEY_BYTES, SALT_BYTES, hash_password, verify_password
from quizzypop.services.token_service import TokenService, token_service

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "student"
INVALID_CREDENTIALS = "Invalid email or password"

# Verified against when the email is unknown so both failures cost one KDF run
_DUMMY_HASH = bytes(KEY_BYTES)
_DUMMY_SALT = bytes(SALT_BYTES)


class AuthService:

    def __init__(
        self,
        users: UserRepository,
        refresh_tokens: RefreshTokenRepository,
        tokens: TokenService = token_service
    ):
        self.users = users
        self.refresh_tokens = refresh_tokens
        self.tokens = tokens

    @staticmethod
    def _normalize_email(email: str) -> str:
        return email.strip().lower()

    def register(self, request: RegisterRequest) -> User:
        email = self._normalize_email(request.email)
        if self.users.get_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError("Email already registered")

        password_hash, salt = hash_password(request.password)
        user = User(
            email=email,
            role=request.role or DEFAULT_ROLE,
            display_name=(request.display_name or "").strip() or None,
            password_hash=password_hash,
            password_salt=salt,
        )

        try:
            created = self.users.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise ConflictError("Email already registered")

        logger.info(f"Registered user {created.id} with role {created.role}")
        return created

    def login(self, email: str, password: str) -> TokenResponse:
        user = self.users.get_by_email(self._normalize_email(email))
        if user is None:
            verify_password(password, _DUMMY_HASH, _DUMMY_SALT)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash, user.password_salt):
            logger.info(f"Failed login for user {user.id}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info(f"User {user.id} logged in")
        return self._issue_tokens(user)

    def refresh(self, token: Optional[str]) -> TokenResponse:
        token = (token or "").strip()
        if not token:
            raise UnauthorizedError("Refresh token is required")

        stored = self.refresh_tokens.get_by_token(token)
        if stored is None or not stored.is_active:
            logger.warning("Rejected unknown, revoked or expired refresh token")
            raise UnauthorizedError("Invalid refresh token")

        return self._issue_tokens(stored.user, replacing=stored)

    def logout(self, token: Optional[str], user_id: int) -> None:
        """Revoke one refresh token owned by the caller; unknown tokens are ignored"""
        stored = self.refresh_tokens.get_by_token((token or "").strip())
        if stored is None:
            return
        if stored.user_id != user_id:
            raise ForbiddenError("Refresh token belongs to another user")
        if stored.revoked_at is None:
            self.refresh_tokens.revoke(stored)
            logger.info(f"User {user_id} revoked refresh token {stored.id}")

    @staticmethod
    def claims_for(user: User) -> dict:
        return {
            "sub": str(user.id),
            "name": user.email,
            "role": user.role or DEFAULT_ROLE,
        }

    def _issue_tokens(self, user: User, replacing: Optional[RefreshToken] = None) -> TokenResponse:
        access_token, expires_at = self.tokens.issue_access_token(self.claims_for(user))

        new_token = RefreshToken(
            token=self.tokens.issue_refresh_token(),
            expires_at=self.tokens.refresh_token_expiry(),
            user_id=user.id,
        )
        if replacing is None:
            self.refresh_tokens.add(new_token)
        elif not self.refresh_tokens.rotate(replacing, new_token):
            logger.warning("Rejected refresh token that was rotated or revoked concurrently")
            raise UnauthorizedError("Invalid refresh token")

        return TokenResponse(
            access_token=access_token,
            refresh_token=new_token.token,
            expires_at=expires_at,
        )
