"""
Helper functions for common infrastructure operations.

Usage:
    from core.helpers import hash_string

    digest = hash_string("someone@example.com", "md5")
"""

from __future__ import annotations

import hashlib


def hash_string(value: str, algorithm: str = "sha256") -> str:
    """
    Hash a string with the named hashlib algorithm.

    Args:
        value: String to hash (UTF-8 encoded before hashing)
        algorithm: Any name accepted by hashlib.new (sha256, md5, ...)

    Returns:
        Hexadecimal digest
    """
    hasher = hashlib.new(algorithm)
    hasher.update(value.encode("utf-8"))
    return hasher.hexdigest()
