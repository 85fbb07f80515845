from __future__ import annotations
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Union


def expand_home(path: str, home: Optional[Union[str, Path]] = None) -> str:
    """Replace a leading ``~`` with the home directory; other text is left alone."""
    if not path.startswith("~"):
        return path
    home_s = str(home) if home is not None else str(Path.home())
    return home_s + path[1:]


def is_path_safe(path: str, allowed: Iterable[str], canonicalize: bool = False) -> bool:
    """
    True when ``path`` starts with one of the ``allowed`` prefixes.

    Plain string prefix test: ``..`` segments and symlinks are not resolved
    unless ``canonicalize`` is set, in which case both sides go through
    realpath first.
    """
    if not path:
        return False
    candidate = os.path.realpath(path) if canonicalize else path
    for prefix in allowed:
        p = os.path.realpath(prefix) if canonicalize else prefix
        if candidate.startswith(p):
            return True
    return False


def which(cmd: str) -> bool:
    from shutil import which as _w
    return _w(cmd) is not None


def now_iso() -> str:
    """UTC ISO-8601 with milliseconds and a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
