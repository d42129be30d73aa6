# 📄 File: contactbook/shared/infrastructure/storage/__init__.py

# 🧭 Purpose (Layman Explanation):
# Sets up where uploaded pictures are parked and where finished avatars are kept.

# 🧪 Purpose (Technical Summary):
# Storage package exposing the local FileManager used by the avatar pipeline.

# 🔗 Dependencies:
# - file_manager: staging, Pillow resize, atomic relocation, sweeping

# 🔄 Connected Modules / Calls From:
# Used by: contactbook.main (construction), user_management AvatarService

from .file_manager import IMAGE_FORMATS, FileManager, StagedFile

__all__ = [
    "FileManager",
    "StagedFile",
    "IMAGE_FORMATS",
]
