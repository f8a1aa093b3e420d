"""
User and refresh-token persistence
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from quizzypop.models import RefreshToken, User

logger = logging.getLogger(__name__)


class UserRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError:
            logger.error("Failed to look up user by email", exc_info=True)
            raise

    def add(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except SQLAlchemyError:
            # Unique-email races surface here as IntegrityError
            logger.error("Error adding user", exc_info=True)
            self.db.rollback()
            raise


class RefreshTokenRepository:

    def __init__(self, db: Session):
        self.db = db

    def get_by_token(self, token: str) -> Optional[RefreshToken]:
        return (
            self.db.query(RefreshToken)
            .options(joinedload(RefreshToken.user))
            .filter(RefreshToken.token == token)
            .first()
        )

    def add(self, refresh_token: RefreshToken) -> RefreshToken:
        try:
            self.db.add(refresh_token)
            self.db.commit()
            return refresh_token
        except SQLAlchemyError:
            logger.error(f"Error storing refresh token for user {refresh_token.user_id}", exc_info=True)
            self.db.rollback()
            raise

    def rotate(self, old: RefreshToken, new: RefreshToken) -> bool:
        """
        Revoke `old` and store `new` in a single commit

        The revoke only matches a row that is still unrevoked, so of two
        concurrent rotations of the same token exactly one wins.

        Returns:
            False (and nothing stored) if `old` was already revoked
        """
        try:
            result = self.db.execute(
                update(RefreshToken)
                .where(RefreshToken.id == old.id, RefreshToken.revoked_at.is_(None))
                .values(revoked_at=datetime.now(timezone.utc))
            )
            if result.rowcount != 1:
                self.db.rollback()
                return False

            self.db.add(new)
            self.db.commit()
            return True
        except SQLAlchemyError:
            logger.error(f"Error rotating refresh token {old.id}", exc_info=True)
            self.db.rollback()
            raise

    def revoke(self, refresh_token: RefreshToken) -> None:
        try:
            refresh_token.revoked_at = datetime.now(timezone.utc)
            self.db.commit()
        except SQLAlchemyError:
            logger.error(f"Error revoking refresh token {refresh_token.id}", exc_info=True)
            self.db.rollback()
            raise
