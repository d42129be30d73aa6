import pytest

from contactbook.modules.user_management.domain.models.user import SubscriptionTier, User
from contactbook.modules.user_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from contactbook.shared.core.exceptions import NotFoundError
from contactbook.shared.infrastructure.database.connection import DatabaseConnectionManager
from contactbook.shared.infrastructure.database.session import DatabaseSessionManager

from tests.helpers import build_settings


@pytest.fixture
async def sessions(tmp_path):
    db_manager = DatabaseConnectionManager(build_settings(tmp_path))
    await db_manager.initialize()
    session_manager = DatabaseSessionManager(db_manager)
    session_manager.initialize()
    yield session_manager
    await db_manager.close()


@pytest.fixture
async def stored_user(sessions):
    async with sessions.get_session() as session:
        user = User(email="ann@mailbox.com", password_hash="hash", session_token="T1")
        return await UserRepositoryImpl(session).create(user)


class TestUserRepositoryUpdate:
    async def test_stale_copy_does_not_restore_logged_out_token(self, sessions, stored_user):
        async with sessions.get_session() as session_a, sessions.get_session() as session_b:
            repo_a = UserRepositoryImpl(session_a)
            repo_b = UserRepositoryImpl(session_b)

            uploading = await repo_a.get_by_id(stored_user.user_id)
            assert uploading.session_token == "T1"

            logging_out = await repo_b.get_by_id(stored_user.user_id)
            logging_out.end_session()
            await repo_b.update(logging_out)

            uploading.change_avatar("/avatars/new.png")
            saved = await repo_a.update(uploading)

        assert saved.session_token is None
        assert saved.avatar_url == "/avatars/new.png"

        async with sessions.get_session() as session:
            current = await UserRepositoryImpl(session).get_by_id(stored_user.user_id)
        assert current.session_token is None
        assert current.avatar_url == "/avatars/new.png"

    async def test_verification_keeps_concurrent_login(self, sessions, stored_user):
        async with sessions.get_session() as session:
            repo = UserRepositoryImpl(session)
            pending = await repo.get_by_id(stored_user.user_id)
            pending.rotate_verification_token("pending-token")
            await repo.update(pending)

        async with sessions.get_session() as session_a, sessions.get_session() as session_b:
            verifying = await UserRepositoryImpl(session_a).get_by_id(stored_user.user_id)

            logging_in = await UserRepositoryImpl(session_b).get_by_id(stored_user.user_id)
            logging_in.start_session("T2")
            await UserRepositoryImpl(session_b).update(logging_in)

            verifying.mark_verified()
            saved = await UserRepositoryImpl(session_a).update(verifying)

        assert saved.verified is True
        assert saved.verification_token is None
        assert saved.session_token == "T2"

    async def test_update_returns_stored_state(self, sessions, stored_user):
        async with sessions.get_session() as session:
            repo = UserRepositoryImpl(session)
            user = await repo.get_by_id(stored_user.user_id)
            user.change_subscription(SubscriptionTier.BUSINESS)
            saved = await repo.update(user)

        assert saved.subscription is SubscriptionTier.BUSINESS
        assert user.pending_changes() == {}

    async def test_update_of_missing_user(self, sessions):
        ghost = User(email="ghost@mailbox.com", password_hash="hash")
        ghost.change_avatar("/avatars/ghost.png")

        async with sessions.get_session() as session:
            with pytest.raises(NotFoundError):
                await UserRepositoryImpl(session).update(ghost)
