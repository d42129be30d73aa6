import io
import os
import time

import pytest
from PIL import Image, UnidentifiedImageError

from contactbook.shared.infrastructure.storage.file_manager import FileManager, StagedFile

from tests.helpers import build_settings, image_bytes


@pytest.fixture
def file_manager(tmp_path):
    manager = FileManager(build_settings(tmp_path))
    manager.ensure_directories()
    return manager


async def test_stage_upload_writes_under_unique_name(file_manager):
    first = await file_manager.stage_upload(b"abc", "my photo.png")
    second = await file_manager.stage_upload(b"abc", "my photo.png")

    assert first.path != second.path
    assert first.path.parent == file_manager.staging_dir
    assert first.path.name.endswith("my_photo.png")
    assert first.path.read_bytes() == b"abc"
    assert first.extension == ".png"


async def test_store_avatar_resizes_and_relocates(file_manager):
    staged = await file_manager.stage_upload(image_bytes("PNG", size=(640, 480)), "me.png")

    url = await file_manager.store_avatar(staged, "user-1")

    assert url.startswith("/avatars/user-1-")
    assert url.endswith(".png")
    stored = file_manager.avatars_dir / url.rsplit("/", 1)[1]
    with Image.open(stored) as img:
        assert img.size == (250, 250)
        assert img.format == "PNG"
    assert not list(file_manager.avatars_dir.glob("*.part"))
    # Staged source is left for the caller to discard
    assert staged.path.exists()


async def test_store_avatar_converts_alpha_for_jpeg(file_manager):
    buffer = io.BytesIO()
    Image.new("RGBA", (300, 300), (0, 0, 255, 128)).save(buffer, format="PNG")
    staged = await file_manager.stage_upload(buffer.getvalue(), "me.jpg")

    url = await file_manager.store_avatar(staged, "user-2")

    with Image.open(file_manager.avatars_dir / url.rsplit("/", 1)[1]) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"


async def test_store_avatar_rejects_undecodable_content(file_manager):
    staged = await file_manager.stage_upload(b"definitely not an image", "me.png")

    with pytest.raises(UnidentifiedImageError):
        await file_manager.store_avatar(staged, "user-3")

    assert not list(file_manager.avatars_dir.iterdir())
    assert staged.path.exists()


async def test_discard_is_idempotent(file_manager):
    staged = await file_manager.stage_upload(b"abc", "me.png")

    assert await file_manager.discard(staged) is True
    assert await file_manager.discard(staged) is False
    assert not staged.path.exists()


async def test_discard_of_missing_file_does_not_raise(file_manager):
    ghost = StagedFile(path=file_manager.staging_dir / "ghost.png", original_name="ghost.png")
    assert await file_manager.discard(ghost) is False


async def test_sweep_only_removes_files_older_than_min_age(file_manager):
    fresh = await file_manager.stage_upload(b"new", "fresh.png")
    stale = await file_manager.stage_upload(b"old", "stale.png")
    old = time.time() - file_manager.sweep_min_age - 60
    os.utime(stale.path, (old, old))

    removed = await file_manager.sweep_staging()

    assert removed == [stale.path]
    assert fresh.path.exists()
    assert not stale.path.exists()


async def test_sweep_without_staging_directory(tmp_path):
    manager = FileManager(build_settings(tmp_path, TMP_DIR=str(tmp_path / "missing")))
    assert await manager.sweep_staging() == []


async def test_avatars_stored_in_same_millisecond_do_not_collide(file_manager, monkeypatch):
    monkeypatch.setattr(
        "contactbook.shared.infrastructure.storage.file_manager.epoch_millis", lambda: 1700000000000
    )
    first = await file_manager.stage_upload(image_bytes("PNG"), "me.png")
    second = await file_manager.stage_upload(image_bytes("PNG"), "me.png")

    first_url = await file_manager.store_avatar(first, "user-4")
    second_url = await file_manager.store_avatar(second, "user-4")

    assert first_url != second_url
    assert len(list(file_manager.avatars_dir.glob("user-4-*.png"))) == 2
