"""Submission identifier generation."""

import secrets
import string
import time
from typing import Optional

ID_PREFIX = "sub"
SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9


def generate_submission_id(now_ms: Optional[int] = None) -> str:
    """Generate a unique submission ID.

    Args:
        now_ms: Epoch milliseconds to embed (defaults to the current time)

    Returns:
        A submission ID in the format: sub_<epoch millis>_<9 base36 chars>
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{ID_PREFIX}_{now_ms}_{suffix}"
