"""Front-door constructors selecting embedded or runtime directories."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from .dirs import AnyDir, CtDir, RtDir
from .embed import embed_dir, package_root_for_frame
from .entries import CT, RT, AnyFileEntry


def anydir(kind: str, path: str | os.PathLike[str]) -> AnyDir:
    """Return a directory handle of ``kind`` for ``path``.

    ``anydir("ct", "LITERAL")`` embeds the literal, resolving
    ``$PACKAGE_ROOT`` and relative paths against the caller's project root.
    ``anydir("rt", path)`` wraps any path-like value for runtime reads.
    """
    if kind == CT:
        if not isinstance(path, str):
            raise TypeError(f"anydir({CT!r}, ...) requires a string literal, got {type(path).__name__}")
        package_root = package_root_for_frame(sys._getframe(1))
        return AnyDir(CtDir(embed_dir(path, package_root=package_root)))
    if kind == RT:
        return anydir_rt(path)
    raise ValueError(f"unknown directory kind {kind!r}; expected {CT!r} or {RT!r}")


def anydir_rt(path: str | os.PathLike[str]) -> AnyDir:
    """Wrap ``path`` as a runtime directory."""
    return AnyDir(RtDir(Path(path)))


def anyfile_from_path(path: str | os.PathLike[str]) -> AnyFileEntry:
    """Build a runtime file entry relative to the working directory."""
    return AnyFileEntry.from_path(path)


__all__ = [
    "anydir",
    "anydir_rt",
    "anyfile_from_path",
]
