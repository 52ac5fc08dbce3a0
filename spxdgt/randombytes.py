"""Random bytes from the operating system's entropy source."""

from __future__ import annotations

import os


def randombytes(n):
    """Return n bytes from the system's cryptographic random source."""
    if n < 0:
        raise ValueError("length must be non-negative")
    return os.urandom(n)