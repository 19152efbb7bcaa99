"""A collection of media files processed together."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable, Iterator

from librarian import logger
from librarian.media import Media
from librarian.options import LibOptions


class Cart:
    """Media files keyed by their absolute path."""

    def __init__(self, initial_load: Iterable[str] = ()) -> None:
        self.media: dict[str, Media] = {}
        for path in initial_load:
            self.add_media(path)

    def add_media(self, path: str) -> None:
        key = os.path.abspath(path)
        self.media[key] = Media(path=key)

    def get_media_state(self, path: str) -> Media | None:
        return self.media.get(path)

    def summary_rows(self) -> Iterator[str]:
        """Yield one formatted table row per media file."""
        for item in self.media.values():
            error = "" if item.err is None else str(item.err)
            yield (
                f"{str(item.state).lower():<6} "
                f"{os.path.basename(item.path):<40} "
                f"{item.hash[:33]:<33} "
                f"{item.copy_hash[:33]:<33} "
                f"{error}"
            )

    def print_summary(self, options: LibOptions) -> None:
        """Log the cart's state and print it in the configured format."""
        data = {key: item.to_dict() for key, item in self.media.items()}
        logger.log_fields(logging.INFO, {"data": data}, "summary")

        if options.format == "table":
            print("Summary:")
            for row in self.summary_rows():
                print(row)
        elif options.format == "json":
            ordered = {key: data[key] for key in sorted(data)}
            print(json.dumps(ordered, separators=(",", ":")))

    def _shelve(self, item: Media, dest: str, options: LibOptions) -> None:
        steps: tuple[Callable[[], None], ...] = (
            lambda: item.resolve_destpath(dest),
            item.set_filesize,
            lambda: item.verify_integrity(options),
            item.checksum_original,
            lambda: item.copy_file(options),
            item.checksum_copy,
            item.validate_checksums,
        )
        for step in steps:
            step()
            if item.err is not None:
                return

    def copy_files(self, dest: str, options: LibOptions) -> None:
        """Verify, copy and check every file into the directory *dest*."""
        logger.log(logging.INFO, "Starting cart copying routine")
        for item in self.media.values():
            self._shelve(item, dest, options)
        self.print_summary(options)

    def validate_files(self, options: LibOptions) -> None:
        """Run the integrity check on every file and print the summary."""
        for item in self.media.values():
            item.verify_integrity(options)
        self.print_summary(options)