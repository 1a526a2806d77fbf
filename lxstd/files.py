"""File-system helpers: reading, writing and inspecting paths."""

from __future__ import annotations

import os
import shutil
import stat as _stat
from dataclasses import dataclass
from typing import Any, Union

PathArg = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class FileStat:
    """Basic metadata about a path."""

    size: int
    is_file: bool
    is_dir: bool
    readonly: bool


def _path(path: Any, op: str) -> str:
    if isinstance(path, (str, os.PathLike)):
        return os.fspath(path)
    raise TypeError(f"fs.{op} expects Str path")


def _text(content: Any) -> str:
    return content if isinstance(content, str) else str(content)


def read(path: PathArg) -> str:
    """Return the whole contents of a UTF-8 text file."""
    with open(_path(path, "read"), encoding="utf-8", newline="") as handle:
        return handle.read()


def write(path: PathArg, content: Any) -> None:
    """Replace a file's contents, creating it if needed."""
    with open(_path(path, "write"), "w", encoding="utf-8", newline="") as handle:
        handle.write(_text(content))


def append(path: PathArg, content: Any) -> None:
    """Append to a file, creating it if needed."""
    with open(_path(path, "append"), "a", encoding="utf-8", newline="") as handle:
        handle.write(_text(content))


def exists(path: PathArg) -> bool:
    """Whether the path exists."""
    return os.path.exists(_path(path, "exists"))


def remove(path: PathArg) -> None:
    """Remove a file, or a directory together with everything under it."""
    target = _path(path, "remove")
    if os.path.isdir(target):
        shutil.rmtree(target)
    else:
        os.remove(target)


def mkdir(path: PathArg) -> None:
    """Create a directory and any missing parents."""
    os.makedirs(_path(path, "mkdir"), exist_ok=True)


def ls(path: PathArg) -> list[str]:
    """Return the names of a directory's entries, sorted."""
    return sorted(os.listdir(_path(path, "ls")))


def stat(path: PathArg) -> FileStat:
    """Return size, kind and write-protection of a path."""
    info = os.stat(_path(path, "stat"))
    return FileStat(
        size=info.st_size,
        is_file=_stat.S_ISREG(info.st_mode),
        is_dir=_stat.S_ISDIR(info.st_mode),
        readonly=not (info.st_mode & 0o222),
    )