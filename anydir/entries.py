"""File entries for embedded and runtime directories.

``CtFileEntry`` serves bytes captured by ``anydir.embed``; ``RtFileEntry``
reads from the filesystem on every access. ``AnyFileEntry`` wraps either one
so callers read content without caring where it comes from.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .embed import EmbeddedFile
from .errors import InvalidDataError

CT = "ct"
RT = "rt"


class FileEntryOps(Protocol):
    """Capability set shared by every file entry."""

    def path(self) -> Path: ...

    def absolute_path(self) -> Path | None: ...

    def read_bytes(self) -> bytes: ...

    def read_string(self) -> str: ...


def decode_utf8(data: bytes, path: Path) -> str:
    """Decode strict UTF-8, raising ``InvalidDataError`` for bad input."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidDataError(f"{path} is not valid UTF-8") from exc


@dataclass(frozen=True)
class CtFileEntry:
    """Entry backed by an embedded file; has no filesystem location."""

    relative_path: Path
    file: EmbeddedFile

    def path(self) -> Path:
        return self.relative_path

    def absolute_path(self) -> Path | None:
        return None

    def read_bytes(self) -> bytes:
        return self.file.contents

    def read_string(self) -> str:
        return decode_utf8(self.file.contents, self.relative_path)

    def __str__(self) -> str:
        return str(self.relative_path)

    def __fspath__(self) -> str:
        return str(self.relative_path)


@dataclass(frozen=True)
class RtFileEntry:
    """Entry backed by a file on disk.

    ``relative_path`` is relative to the owning ``RtDir`` base, or to the
    working directory when built through ``from_path``.
    """

    absolute: Path
    relative_path: Path

    @classmethod
    def from_path(cls, absolute_path: str | os.PathLike[str]) -> RtFileEntry:
        """Build an entry for ``absolute_path``, relative to the current directory.

        Paths outside the working directory keep their full form as the
        relative path. ``OSError`` from resolving the working directory
        propagates.
        """
        absolute = Path(absolute_path)
        cwd = Path.cwd()
        try:
            relative = absolute.relative_to(cwd)
        except ValueError:
            relative = absolute
        return cls(absolute=absolute, relative_path=relative)

    def path(self) -> Path:
        return self.relative_path

    def absolute_path(self) -> Path | None:
        return self.absolute

    def read_bytes(self) -> bytes:
        return self.absolute.read_bytes()

    def read_string(self) -> str:
        return decode_utf8(self.absolute.read_bytes(), self.absolute)

    def __str__(self) -> str:
        return str(self.relative_path)

    def __fspath__(self) -> str:
        return str(self.relative_path)


@dataclass(frozen=True)
class AnyFileEntry:
    """Tagged wrapper over ``CtFileEntry`` or ``RtFileEntry``."""

    entry: CtFileEntry | RtFileEntry

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> AnyFileEntry:
        """Wrap ``RtFileEntry.from_path(path)``."""
        return cls(RtFileEntry.from_path(path))

    @property
    def kind(self) -> str:
        """``"ct"`` for embedded entries, ``"rt"`` for runtime entries."""
        return CT if isinstance(self.entry, CtFileEntry) else RT

    def path(self) -> Path:
        return self.entry.path()

    def absolute_path(self) -> Path | None:
        return self.entry.absolute_path()

    def read_bytes(self) -> bytes:
        return self.entry.read_bytes()

    def read_string(self) -> str:
        return self.entry.read_string()

    def __str__(self) -> str:
        return str(self.entry)

    def __fspath__(self) -> str:
        return self.entry.__fspath__()


__all__ = [
    "CT",
    "RT",
    "FileEntryOps",
    "decode_utf8",
    "CtFileEntry",
    "RtFileEntry",
    "AnyFileEntry",
]
