import pytest

from quizzypop.exceptions import UnauthorizedError
from quizzypop.models import RefreshToken
from quizzypop.repositories import RefreshTokenRepository, UserRepository
from quizzypop.services.auth_service import AuthService
from quizzypop.services.token_service import token_service

from conftest import PASSWORD


@pytest.fixture
def open_session(session_factory):
    sessions = []

    def _open():
        session = session_factory()
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()


def auth_service(session):
    return AuthService(UserRepository(session), RefreshTokenRepository(session), token_service)


def test_same_refresh_token_rotates_only_once(open_session, author):
    token = auth_service(open_session()).login(author.email, PASSWORD).refresh_token
    first, second = open_session(), open_session()

    # The second caller has already seen the token as active
    assert RefreshTokenRepository(second).get_by_token(token).is_active

    rotated = auth_service(first).refresh(token)
    with pytest.raises(UnauthorizedError):
        auth_service(second).refresh(token)

    check = open_session()
    stored = check.query(RefreshToken).filter(RefreshToken.user_id == author.id).all()
    assert len(stored) == 2
    assert [t.token for t in stored if t.revoked_at is None] == [rotated.refresh_token]


def test_rotate_reports_already_revoked_token(open_session, author):
    session = open_session()
    token = auth_service(session).login(author.email, PASSWORD).refresh_token
    repo = RefreshTokenRepository(session)
    stored = repo.get_by_token(token)
    repo.revoke(stored)

    replacement = RefreshToken(
        token=token_service.issue_refresh_token(),
        expires_at=token_service.refresh_token_expiry(),
        user_id=author.id,
    )

    assert repo.rotate(stored, replacement) is False
    assert repo.get_by_token(replacement.token) is None
