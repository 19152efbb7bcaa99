"""The librarian: entry point for shelving and validating media."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable

from librarian import logger
from librarian.cart import Cart
from librarian.options import LibOptions
from librarian.utils import path_exists


class Librarian:
    """Runs cart operations with a fixed set of options."""

    def __init__(self, options: LibOptions) -> None:
        """Check that the external tools exist and apply output options.

        Raises ``FileNotFoundError`` when ffmpeg or ffprobe is missing.
        """
        for tool in (options.ffmpeg_path, options.ffprobe_path):
            if not path_exists(tool):
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), tool)

        if not options.console_output:
            logger.set_options(options.console_output)

        self.options = options

    def validate_files(self, sources: Iterable[str]) -> Cart:
        """Check the integrity of every file in *sources*."""
        cart = Cart(sources)
        cart.validate_files(self.options)
        return cart

    def move_files(self, sources: Iterable[str], dest: str) -> Cart:
        """Verify and copy every file in *sources* into the directory *dest*."""
        cart = Cart(sources)
        cart.copy_files(dest, self.options)
        return cart