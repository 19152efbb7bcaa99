"""Small filesystem helpers."""

from __future__ import annotations

import os
import stat


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Return whether *path* is a directory.

    Raises ``FileNotFoundError`` when the path does not exist.
    """
    return stat.S_ISDIR(os.stat(path).st_mode)


def path_exists(path: str | os.PathLike[str]) -> bool:
    """Return whether *path* exists once resolved to an absolute path.

    Only a missing path counts as absent; any other failure to inspect the
    path (permissions and the like) is treated as the path being present.
    """
    absolute = os.path.abspath(path)
    try:
        os.stat(absolute)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True