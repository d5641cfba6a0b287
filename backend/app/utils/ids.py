"""Record identifiers: creation timestamp plus a short random suffix."""

import secrets
import string

_BASE36 = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 7


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_record_id(prefix: str, timestamp: int) -> str:
    """e.g. ``job_1718000000000_k3j9x0a``"""
    return f"{prefix}_{timestamp}_{random_suffix()}"
