# 📄 File: contactbook/modules/user_management/domain/services/avatar_service.py
# 🧭 Purpose (Layman Explanation):
# Takes a newly uploaded profile picture from checking it all the way to showing it on the account.
# 🧪 Purpose (Technical Summary):
# Avatar upload pipeline: intake validation, staging, owner lookup, resize, relocation,
# staging cleanup and persistence of the new avatar URL.
# 🔗 Dependencies:
# User repository, contactbook.shared.infrastructure.storage.file_manager, validators
# 🔄 Connected Modules / Calls From:
# PATCH /users/avatars endpoint

import logging

from ..repositories.user_repository import UserRepository
from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import (
    FileProcessingError,
    FileTooLargeError,
    InvalidFileTypeError,
    NotFoundError,
)
from contactbook.shared.infrastructure.storage.file_manager import FileManager
from contactbook.shared.utils.validators import is_allowed_avatar_extension, validate_avatar_file

logger = logging.getLogger(__name__)


class AvatarService:
    """
    Runs an upload through the avatar pipeline.

    Intake and staging failures are client errors (400). A vanished owner is a
    404. Anything failing after that is unexpected and propagates; the staged
    file is then left for a later sweep.
    """

    def __init__(self, user_repository: UserRepository, file_manager: FileManager, settings: Settings):
        self.user_repository = user_repository
        self.file_manager = file_manager
        self.max_size = settings.MAX_AVATAR_SIZE

    def check_intake(self, filename: str, size: int) -> None:
        """Reject uploads with a disallowed extension or size before anything is stored."""
        if not is_allowed_avatar_extension(filename):
            raise InvalidFileTypeError(field="avatar")

        result = validate_avatar_file(filename, size, self.max_size)
        if not result.is_valid:
            if size > self.max_size:
                raise FileTooLargeError(result.message, field="avatar")
            raise FileProcessingError(result.message, field="avatar")

    async def update_avatar(self, user_id: str, filename: str, data: bytes) -> str:
        """
        Replace the avatar of ``user_id`` with the uploaded image.

        Args:
            user_id: Id of the authenticated user
            filename: Client supplied filename
            data: Uploaded bytes

        Returns:
            str: Public URL path of the new avatar

        Raises:
            ValidationError: Rejected at intake or staging
            NotFoundError: The user record no longer exists
        """
        self.check_intake(filename, len(data))
        staged = await self.file_manager.stage_upload(data, filename)

        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            await self.file_manager.discard(staged)
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)

        avatar_url = await self.file_manager.store_avatar(staged, user.user_id)

        await self.file_manager.discard(staged)
        await self.file_manager.sweep_staging()

        user.change_avatar(avatar_url)
        await self.user_repository.update(user)
        logger.info(f"Avatar updated for user {user.user_id}: {avatar_url}")
        return avatar_url
