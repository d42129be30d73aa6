# 📄 File: contactbook/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# This file contains checkers that make sure data entered into the service is correct and safe,
# like verifying email addresses and making sure uploaded pictures have an allowed file type.
# 🧪 Purpose (Technical Summary):
# Reusable validation functions for email addresses (format + top-level domain allow-list),
# avatar upload filenames and sizes, and filename sanitisation for on-disk storage.
# 🔗 Dependencies:
# re, pathlib, email-validator
# 🔄 Connected Modules / Calls From:
# User request schemas, avatar pipeline, file manager

import re
from pathlib import Path
from typing import Iterable, List

from email_validator import EmailNotValidError, validate_email

# File validation constants
ALLOWED_AVATAR_EXTENSIONS = {".jpg", ".jpeg", ".png"}


class ValidationResult:
    """Result of validation with detailed information"""

    def __init__(self, is_valid: bool = True, errors: List[str] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        self.errors.append(error)
        self.is_valid = False

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


# ==============================================================================
# EMAIL VALIDATION
# ==============================================================================

def validate_email_address(email: str, allowed_tlds: Iterable[str]) -> ValidationResult:
    """
    Validate email address format and top-level domain.

    The domain needs at least two labels and its last label must be in
    ``allowed_tlds``. Deliverability is not checked.

    Args:
        email: Email address to validate
        allowed_tlds: Accepted top-level domains (lower case)

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not email or not isinstance(email, str):
        result.add_error('"email" is required')
        return result

    if len(email) > 254:
        result.add_error('"email" is too long (max 254 characters)')
        return result

    try:
        valid_email = validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        result.add_error(f'"email" must be a valid email: {e}')
        return result

    labels = valid_email.ascii_domain.split(".")
    allowed = {tld.lower() for tld in allowed_tlds}
    if len(labels) < 2 or labels[-1].lower() not in allowed:
        result.add_error(
            f'"email" must use one of the allowed top-level domains: {", ".join(sorted(allowed))}'
        )

    return result


# ==============================================================================
# FILE VALIDATION
# ==============================================================================

def validate_avatar_file(filename: str, file_size: int, max_size: int) -> ValidationResult:
    """
    Validate an avatar upload by name and size.

    Args:
        filename: Original client-side filename
        file_size: Upload size in bytes
        max_size: Largest accepted upload in bytes

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult(True)

    if not filename or not isinstance(filename, str):
        result.add_error("Filename is required")
        return result

    extension = Path(filename).suffix.lower()
    if extension not in ALLOWED_AVATAR_EXTENSIONS:
        result.add_error("Only .jpg, .jpeg, and .png files are allowed")
        return result

    if file_size <= 0:
        result.add_error("File is empty")
    elif file_size > max_size:
        result.add_error(f"File size exceeds maximum allowed size ({max_size // (1024 * 1024)}MB)")

    return result


def is_allowed_avatar_extension(filename: str) -> bool:
    return Path(filename or "").suffix.lower() in ALLOWED_AVATAR_EXTENSIONS


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for safe storage

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    if not filename:
        return "unnamed_file"

    # Drop any client supplied directories
    filename = Path(filename.replace("\\", "/")).name

    filename = re.sub(r'[^\w\-_\.\s]', '', filename)
    filename = re.sub(r'\s+', '_', filename)
    filename = filename.strip('._')

    if len(filename) > 100:
        name, ext = Path(filename).stem[:95], Path(filename).suffix
        filename = f"{name}{ext}"

    return filename or "unnamed_file"
