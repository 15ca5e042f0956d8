"""Treat ``README.md`` chapters as ``index.md``, the usual index file."""

from __future__ import annotations

import os
import re
from pathlib import PurePath

_README = re.compile(r"readme", re.IGNORECASE)


def _as_pure(path: str | os.PathLike[str]) -> PurePath:
    return path if isinstance(path, PurePath) else PurePath(path)


def is_readme_file(path: str | os.PathLike[str]) -> bool:
    """Whether the file stem is exactly ``readme``, ignoring case."""
    return _README.fullmatch(_as_pure(path).stem) is not None


def index_path_for(path: str | os.PathLike[str]) -> PurePath:
    """The chapter path with a readme file renamed to ``index.md``."""
    pure = _as_pure(path)
    if is_readme_file(pure):
        return pure.with_name("index.md")
    return pure