"""State and processing steps for a single media file."""

from __future__ import annotations

import errno
import logging
import math
import os
import subprocess
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO, Any

from librarian import logger
from librarian.filling import copy_file as _copy_file
from librarian.integrity import checksum_file
from librarian.options import LibOptions
from librarian.utils import is_dir, path_exists
from librarian.validation import get_video_duration

_HWACCEL_ARGS = (
    "-init_hw_device", "vaapi=va:/dev/dri/renderD128,driver=iHD",
    "-hwaccel", "vaapi",
    "-hwaccel_output_format", "vaapi",
)
_PROGRESS_PREFIX = "out_time_ms="


class MediaError(Enum):
    """Reasons a media file can fail to be processed."""

    DEST_PATH_NOT_EXIST = "destiny path doesn't exist"
    DEST_NOT_DIR = "destiny path isn't a directory"
    FAILED_ORIG_CHECKSUM = "failed checksum on source file"
    FAILED_COPY_CHECKSUM = "failed checksum on copied file"
    FAILED_CHECKSUM_VALIDATION = "failed checksum validation"
    FAILED_MEDIA_INTEGRITY = "failed media integrity test"
    FAILED_MEDIA_COPY = "failed to copy media"
    FAILED_TO_RESOLVE_REALPATH = "failed to resolve realpath"
    FAILED_TO_RESOLVE_DESTPATH = "failed to resolve dest realpath"

    def __str__(self) -> str:
        return self.value


def validate_dest_path(dest: str) -> None:
    """Check that *dest* exists and is a directory.

    Raises ``FileNotFoundError`` or ``NotADirectoryError`` otherwise.
    """
    if not path_exists(dest):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), dest)
    if not is_dir(dest):
        raise NotADirectoryError(errno.ENOTDIR, str(MediaError.DEST_NOT_DIR), dest)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _abort_on_error_output(process: subprocess.Popen, kill_errors: list[OSError]) -> None:
    stream: IO[str] | None = process.stderr
    if stream is None:
        return
    for line in stream:
        if line.strip():
            try:
                process.kill()
            except OSError as exc:
                kill_errors.append(exc)
            return


@dataclass
class Media:
    """Everything known about one file as it moves through the pipeline."""

    file_size: int = 0
    file_length: float = 0.0
    path: str = ""
    dest_path: str = ""
    hash: str = ""
    copy_hash: str = ""
    err: MediaError | OSError | None = None
    details: str = ""
    state: bool = True
    analysis_duration: int = 0
    copy_duration: int = 0

    def fail_media_integrity(self, details: str, error: BaseException) -> None:
        self.state = False
        self.details = str(error)
        self.err = MediaError.FAILED_MEDIA_INTEGRITY

    def fail_checksum(self, error: object) -> None:
        self.state = False
        self.err = MediaError.FAILED_COPY_CHECKSUM
        self.details = str(error)

    def fail_copy_checksum(self, error: object) -> None:
        self.state = False
        self.err = MediaError.FAILED_COPY_CHECKSUM
        self.details = str(error)

    def fail_checksum_validation(self) -> None:
        self.state = False
        self.err = MediaError.FAILED_CHECKSUM_VALIDATION

    def fail_media_copy(self, error: BaseException) -> None:
        self.state = False
        self.err = MediaError.FAILED_MEDIA_COPY
        self.details = str(error)

    def checksum_original(self) -> None:
        """Record the checksum of the source file."""
        try:
            self.hash = checksum_file(self.path)
        except OSError:
            self.fail_checksum(MediaError.FAILED_ORIG_CHECKSUM)
            self.hash = ""

    def checksum_copy(self) -> None:
        """Record the checksum of the copied file."""
        try:
            self.copy_hash = checksum_file(self.dest_path)
        except OSError:
            self.fail_copy_checksum(MediaError.FAILED_COPY_CHECKSUM)
            self.copy_hash = ""

    def resolve_destpath(self, dest: str) -> None:
        """Work out where the file goes inside the directory *dest*."""
        logger.log(logging.INFO, f"Resolving dest path from {dest}")
        try:
            validate_dest_path(dest)
        except FileNotFoundError as exc:
            self.err = MediaError.DEST_PATH_NOT_EXIST
            self.details = str(exc)
            self.state = False
            return
        except NotADirectoryError:
            self.err = MediaError.DEST_NOT_DIR
            self.details = str(MediaError.DEST_NOT_DIR)
            self.state = False
            return

        self.dest_path = os.path.abspath(os.path.join(dest, os.path.basename(self.path)))
        logger.log(logging.INFO, f"Destpath is {self.dest_path}")

    def validate_checksums(self) -> None:
        if self.hash != self.copy_hash:
            self.fail_checksum_validation()

    def verify_integrity(self, options: LibOptions) -> None:
        """Run the integrity check, recording how long it took and any failure."""
        start = time.monotonic()
        try:
            self.integrity_check(options)
        except (OSError, ValueError, RuntimeError) as exc:
            self.analysis_duration = _elapsed_ms(start)
            self.fail_media_integrity("", exc)
        else:
            self.analysis_duration = _elapsed_ms(start)

    def set_filesize(self) -> None:
        try:
            self.file_size = os.stat(self.path).st_size
        except OSError as exc:
            self.err = exc
            self.details = str(exc)
            self.state = False

    def copy_file(self, options: LibOptions) -> None:
        """Copy the file to its destination path, timing the copy."""
        start = time.monotonic()
        try:
            _copy_file(self.path, self.dest_path)
        except OSError as exc:
            self.copy_duration = _elapsed_ms(start)
            self.fail_media_copy(exc)
        else:
            self.copy_duration = _elapsed_ms(start)

    def _report_progress(self, line: str) -> None:
        if line.startswith(_PROGRESS_PREFIX):
            seconds = float(line[len(_PROGRESS_PREFIX):]) / 1000.0 / 1000.0
            percentage = seconds / self.file_length * 100 if self.file_length else math.inf
            logger.console(f"\rAnalyzing: {percentage:.2f}%")
        elif line.startswith("progress=end"):
            logger.console("\n")
            logger.log(logging.INFO, "Done")

    def integrity_check(self, options: LibOptions) -> None:
        """Decode the whole file with ffmpeg, failing on any error output.

        Raises ``RuntimeError`` when ffmpeg reports a problem, ``ValueError``
        when its progress output cannot be read, and ``OSError`` when it
        cannot be started.
        """
        self.file_length = get_video_duration(self.path, options)

        command = [options.ffmpeg_path]
        if options.use_hw_accel:
            command.extend(_HWACCEL_ARGS)
        command.extend([
            "-v", "error",
            "-i", self.path,
            "-f", "null", "-",
            "-progress", "pipe:1",
        ])
        logger.log(logging.INFO, " ".join(command))

        kill_errors: list[OSError] = []
        with subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        ) as process:
            watcher = threading.Thread(
                target=_abort_on_error_output, args=(process, kill_errors), daemon=True
            )
            watcher.start()
            try:
                assert process.stdout is not None
                for line in process.stdout:
                    self._report_progress(line.rstrip("\n"))
            except ValueError:
                process.kill()
                watcher.join()
                raise
            returncode = process.wait()
            watcher.join()

        if kill_errors:
            logger.console("\n")
            raise RuntimeError(f"aborted due to error output: {kill_errors[0]}")
        if returncode != 0:
            logger.console("\n")
            status = f"signal: {-returncode}" if returncode < 0 else f"exit status {returncode}"
            raise RuntimeError(f"ffmpeg exited with error: {status}")

    def to_dict(self) -> dict[str, Any]:
        """Return the media state as a JSON-ready mapping."""
        return {
            "file_size": self.file_size,
            "file_length": self.file_length,
            "path": self.path,
            "dest_path": self.dest_path,
            "hash": self.hash,
            "copy_hash": self.copy_hash,
            "err": None if self.err is None else str(self.err),
            "details": self.details,
            "state": self.state,
            "analysis_duration": self.analysis_duration,
            "copy_duration": self.copy_duration,
        }