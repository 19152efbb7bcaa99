"""Options that control how the librarian works."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LibOptions:
    """Settings shared by every librarian operation."""

    console_output: bool = True
    use_hw_accel: bool = False
    ffmpeg_path: str = "/usr/bin/ffmpeg"
    ffprobe_path: str = "/usr/bin/ffprobe"
    format: str = "table"
    db_store: bool = False
    dry_run: bool = False