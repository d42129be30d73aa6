# 📄 File: contactbook/shared/infrastructure/storage/file_manager.py

# 🧭 Purpose (Layman Explanation):
# This file is the darkroom for profile pictures: it parks an uploaded picture in a waiting
# area, shrinks it to the standard size, moves it to the public picture folder and tidies up.

# 🧪 Purpose (Technical Summary):
# Local file management for avatar uploads: staging to a temporary directory under
# collision-resistant names, Pillow hard resize, atomic relocation into permanent storage,
# and age-scoped sweeping of leftover staged files.

# 🔗 Dependencies:
# - PIL: Image decoding, resizing and encoding
# - starlette.concurrency: Offload blocking file and image work from the event loop
# - contactbook.shared.utils.validators: filename sanitisation

# 🔄 Connected Modules / Calls From:
# Called by: user_management avatar service (avatar upload pipeline)

import os
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List

from PIL import Image
from starlette.concurrency import run_in_threadpool

from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import FileProcessingError
from contactbook.shared.utils.helpers import epoch_millis
from contactbook.shared.utils.logging import get_logger
from contactbook.shared.utils.validators import sanitize_filename

logger = get_logger(__name__)

# Pillow encoder per accepted extension
IMAGE_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}


@dataclass(frozen=True)
class StagedFile:
    """An upload parked in the staging directory."""
    path: Path
    original_name: str

    @property
    def extension(self) -> str:
        return Path(self.original_name).suffix.lower()


class FileManager:
    """
    Avatar file lifecycle management.

    Staged files are only ever removed by their own upload (``discard``) or by
    ``sweep_staging`` once they are older than the configured minimum age, so a
    sweep can never pull a file out from under an upload that is still in flight.
    """

    def __init__(self, settings: Settings):
        self.staging_dir = Path(settings.TMP_DIR)
        self.avatars_dir = Path(settings.AVATARS_DIR)
        self.avatars_url_path = settings.AVATARS_URL_PATH.rstrip("/")
        self.avatar_size = (settings.AVATAR_SIZE, settings.AVATAR_SIZE)
        self.sweep_min_age = settings.STAGING_SWEEP_MIN_AGE_SECONDS

    def ensure_directories(self) -> None:
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        self.avatars_dir.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # STAGING
    # =========================================================================

    async def stage_upload(self, data: bytes, original_name: str) -> StagedFile:
        """
        Persist uploaded bytes to the staging directory.

        Args:
            data: Raw upload content
            original_name: Client supplied filename

        Returns:
            StagedFile describing the parked upload

        Raises:
            FileProcessingError: If the file cannot be written
        """
        staged_name = f"{epoch_millis()}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original_name)}"
        path = self.staging_dir / staged_name
        try:
            await run_in_threadpool(self._write_bytes, path, data)
        except OSError as e:
            logger.error(f"Failed to stage upload {original_name}: {e}")
            raise FileProcessingError("Could not store uploaded file") from e

        logger.debug(f"Staged upload at {path}")
        return StagedFile(path=path, original_name=original_name)

    def _write_bytes(self, path: Path, data: bytes) -> None:
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as fh:
            fh.write(data)

    # =========================================================================
    # TRANSFORM + RELOCATE
    # =========================================================================

    async def store_avatar(self, staged: StagedFile, owner_id: str) -> str:
        """
        Resize a staged image and move it into permanent avatar storage.

        The target name combines the owner id, a millisecond timestamp, a random
        suffix and the original extension. The image is written to a ``.part``
        file first and renamed into place, so readers never see a half written avatar.

        Args:
            staged: The staged upload
            owner_id: Id of the user the avatar belongs to

        Returns:
            Public URL path of the stored avatar
        """
        final_name = f"{owner_id}-{epoch_millis()}-{uuid.uuid4().hex[:8]}{staged.extension}"
        final_path = self.avatars_dir / final_name
        await run_in_threadpool(self._resize_and_save, staged.path, final_path, staged.extension)

        logger.info(f"Stored avatar {final_name} for user {owner_id}")
        return f"{self.avatars_url_path}/{final_name}"

    def _resize_and_save(self, source: Path, target: Path, extension: str) -> None:
        image_format = IMAGE_FORMATS[extension]
        partial = target.with_name(target.name + ".part")
        self.avatars_dir.mkdir(parents=True, exist_ok=True)

        with Image.open(source) as img:
            resized = img.resize(self.avatar_size)
            if image_format == "JPEG" and resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")
            try:
                resized.save(partial, format=image_format)
                os.replace(partial, target)
            finally:
                if partial.exists():
                    partial.unlink()

    # =========================================================================
    # CLEANUP
    # =========================================================================

    async def discard(self, staged: StagedFile) -> bool:
        """
        Delete one staged file. Failures are logged, never raised.

        Returns:
            True if the file was removed
        """
        try:
            await run_in_threadpool(staged.path.unlink)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to delete staged file {staged.path}: {e}")
            return False

    async def sweep_staging(self) -> List[Path]:
        """
        Remove leftover staged files older than the minimum age.

        Leftovers come from uploads that failed after staging. Failures are
        logged and swallowed.

        Returns:
            Paths that were removed
        """
        try:
            return await run_in_threadpool(self._sweep, time.time())
        except OSError as e:
            logger.warning(f"Staging sweep failed: {e}")
            return []

    def _sweep(self, now: float) -> List[Path]:
        removed: List[Path] = []
        if not self.staging_dir.is_dir():
            return removed

        for entry in self.staging_dir.iterdir():
            if not entry.is_file():
                continue
            try:
                age = now - entry.stat().st_mtime
                if age < self.sweep_min_age:
                    continue
                entry.unlink()
                removed.append(entry)
                logger.info(f"Swept stale staged file: {entry}")
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning(f"Failed to sweep staged file {entry}: {e}")

        if removed:
            logger.info(f"Staging sweep removed {len(removed)} file(s)")
        return removed
