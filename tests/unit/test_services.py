from datetime import timedelta
from typing import Dict, Optional

import pytest

from contactbook.modules.user_management.domain.models.user import User
from contactbook.modules.user_management.domain.repositories.user_repository import UserRepository
from contactbook.modules.user_management.domain.services.auth_service import AuthService
from contactbook.modules.user_management.domain.services.avatar_service import AvatarService
from contactbook.modules.user_management.infrastructure.external.verification_mailer import (
    VerificationMailer,
)
from contactbook.shared.core.exceptions import NotFoundError, ValidationError
from contactbook.shared.core.security import SecurityManager, TokenType
from contactbook.shared.infrastructure.storage.file_manager import FileManager

from tests.helpers import RecordingEmailClient, build_settings, image_bytes


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.users: Dict[str, User] = {}

    async def create(self, user: User) -> User:
        self.users[user.user_id] = user.model_copy()
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u.model_copy() for u in self.users.values() if u.email == email), None)

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        return next(
            (u.model_copy() for u in self.users.values() if u.verification_token == token), None
        )

    async def update(self, user: User) -> User:
        stored = self.users[user.user_id].model_copy(update=user.pending_changes())
        self.users[user.user_id] = stored
        user.clear_changes()
        return stored.model_copy()

    async def exists_by_email(self, email: str) -> bool:
        return any(u.email == email for u in self.users.values())


@pytest.fixture
def settings(tmp_path):
    return build_settings(tmp_path)


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
def security(settings):
    return SecurityManager(settings)


@pytest.fixture
def auth_service(repository, security, settings):
    mailer = VerificationMailer(RecordingEmailClient(), settings)
    return AuthService(repository, security, mailer, settings)


class TestVerificationLink:
    def test_link_uses_public_base_url(self, settings):
        mailer = VerificationMailer(RecordingEmailClient(), settings)
        assert mailer.build_link("abc") == "http://localhost:8000/api/users/verify/abc"

    def test_message_contains_link(self, settings):
        message = VerificationMailer(RecordingEmailClient(), settings).build_message("a@mailbox.com", "abc")
        assert message.to == "a@mailbox.com"
        assert "/api/users/verify/abc" in message.html
        assert "/api/users/verify/abc" in message.text


class TestVerifyEmail:
    async def test_expired_token_is_refused(self, auth_service, repository, security):
        user = await auth_service.register("ann@mailbox.com", "pw")
        stored = repository.users[user.user_id]
        stored.verification_token = security.create_token(
            user.user_id, TokenType.VERIFICATION, expires_delta=timedelta(seconds=-5)
        )

        with pytest.raises(NotFoundError, match="invalid or expired"):
            await auth_service.verify_email(stored.verification_token)
        assert repository.users[user.user_id].verified is False

    async def test_token_of_another_user_is_refused(self, auth_service, repository, security):
        user = await auth_service.register("ann@mailbox.com", "pw")
        foreign = security.create_token("someone-else", TokenType.VERIFICATION)
        repository.users[user.user_id].verification_token = foreign

        with pytest.raises(NotFoundError, match="invalid or expired"):
            await auth_service.verify_email(foreign)

    async def test_session_token_cannot_verify(self, auth_service, repository, security):
        user = await auth_service.register("ann@mailbox.com", "pw")
        session_token = security.create_token(user.user_id, TokenType.SESSION)
        repository.users[user.user_id].verification_token = session_token

        with pytest.raises(NotFoundError):
            await auth_service.verify_email(session_token)

    async def test_resend_without_email(self, auth_service):
        with pytest.raises(ValidationError):
            await auth_service.resend_verification("")


class TestAvatarService:
    async def test_vanished_user_discards_staged_file(self, repository, settings):
        file_manager = FileManager(settings)
        file_manager.ensure_directories()
        service = AvatarService(repository, file_manager, settings)

        with pytest.raises(NotFoundError):
            await service.update_avatar("missing-user", "me.png", image_bytes("PNG"))

        assert list(file_manager.staging_dir.iterdir()) == []
        assert list(file_manager.avatars_dir.iterdir()) == []

    def test_intake_checks_run_before_staging(self, repository, settings):
        service = AvatarService(repository, FileManager(settings), settings)

        with pytest.raises(ValidationError):
            service.check_intake("me.gif", 10)
        with pytest.raises(ValidationError):
            service.check_intake("me.png", 0)
        service.check_intake("me.png", 10)
