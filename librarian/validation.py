"""Media probing with ffprobe."""

from __future__ import annotations

import logging
import subprocess

from librarian import logger
from librarian.options import LibOptions


def get_video_duration(path: str, options: LibOptions) -> float:
    """Return the duration of the media at *path* in seconds, as reported by ffprobe.

    Raises ``RuntimeError`` when ffprobe cannot be started and ``ValueError``
    when its output holds no duration.
    """
    command = [
        options.ffprobe_path,
        "-v", "error",
        "-show_entries",
        "format=duration",
        "-of",
        "default=noprint_wrappers=1:nokey=1",
        path,
    ]
    logger.log(logging.INFO, " ".join(command))

    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"failed to start ffprobe: {exc}") from exc

    line, newline, _ = result.stdout.partition("\n")
    if not newline:
        raise ValueError(f"no duration reported for {path}")
    return float(line.strip())