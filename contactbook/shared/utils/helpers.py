# 📄 File: contactbook/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small utility functions used across the service, like building a default profile
# picture address from an email and millisecond timestamps for file names.

# 🧪 Purpose (Technical Summary):
# Common helpers for timestamps and Gravatar URL derivation.

# 🔗 Dependencies:
# - hashlib: Gravatar email hashing
# - urllib.parse: Query string encoding

# 🔄 Connected Modules / Calls From:
# User registration (default avatar), file manager (timestamped names)

import hashlib
import time
from urllib.parse import urlencode

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def epoch_millis() -> int:
    """Milliseconds since the epoch, used to build collision resistant names."""
    return time.time_ns() // 1_000_000


def gravatar_url(email: str, size: int = 250, rating: str = "pg", default: str = "mm") -> str:
    """
    Build the deterministic Gravatar URL for an email address.

    Args:
        email: Email address
        size: Image edge length in pixels
        rating: Maximum content rating
        default: Fallback image style when no Gravatar exists

    Returns:
        Absolute Gravatar URL
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": str(size), "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
