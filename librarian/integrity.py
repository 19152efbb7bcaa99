"""File checksums."""

from __future__ import annotations

import hashlib
import os

_CHUNK_SIZE = 1 << 16


def checksum_file(path: str | os.PathLike[str]) -> str:
    """Return the hexadecimal MD5 digest of the file at *path*."""
    digest = hashlib.md5()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()