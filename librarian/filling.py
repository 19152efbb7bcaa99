"""Copying files with progress reporting."""

from __future__ import annotations

import logging
import os

from librarian import logger

_CHUNK_SIZE = 32 * 1024


class ProgressWriter:
    """Counts bytes passing through and reports the percentage done."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.written = 0
        self.last_output = 0

    def write(self, data: bytes) -> int:
        size = len(data)
        self.written += size
        percent = int(self.written * 100 / self.total) if self.total else 100
        if percent != self.last_output:
            logger.console(f"\rCopying: {percent}%")
            self.last_output = percent
        return size


def copy_file(orig: str | os.PathLike[str], dest: str | os.PathLike[str]) -> int:
    """Copy *orig* to *dest*, reporting progress, and return the bytes copied."""
    with open(orig, "rb") as source:
        total = os.fstat(source.fileno()).st_size
        with open(dest, "wb") as target:
            progress = ProgressWriter(total)
            written = 0
            for chunk in iter(lambda: source.read(_CHUNK_SIZE), b""):
                target.write(chunk)
                progress.write(chunk)
                written += len(chunk)

    logger.console("\n")
    logger.log(logging.INFO, f"Copy complete. Copied {written} bytes")
    return written