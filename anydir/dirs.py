"""Directory handles that enumerate their immediate files.

``CtDir`` lists files captured in an ``EmbeddedDir``; ``RtDir`` scans a
directory on disk each time it is asked. ``AnyDir`` wraps either one.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .embed import EmbeddedDir
from .entries import CT, RT, AnyFileEntry, CtFileEntry, RtFileEntry

logger = logging.getLogger(__name__)


class DirOps(Protocol):
    """Capability set shared by every directory handle."""

    def file_entries(self) -> list[AnyFileEntry]: ...


@dataclass(frozen=True)
class CtDir:
    """Directory embedded at build time."""

    dir: EmbeddedDir

    def file_entries(self) -> list[AnyFileEntry]:
        """Return one entry per captured file, in capture order."""
        return [
            AnyFileEntry(CtFileEntry(relative_path=Path(embedded.path), file=embedded))
            for embedded in self.dir.files
        ]


@dataclass(frozen=True)
class RtDir:
    """Directory read from the filesystem on each enumeration.

    By default a directory that cannot be scanned enumerates as empty and a
    warning is logged. ``strict=True`` re-raises the ``OSError`` instead.
    """

    path: Path
    strict: bool = False

    def file_entries(self) -> list[AnyFileEntry]:
        """Return entries for regular-file children in scan order."""
        base_dir = self.path
        entries: list[AnyFileEntry] = []
        try:
            with os.scandir(base_dir) as children:
                for child in children:
                    try:
                        is_file = child.is_file()
                    except OSError:
                        is_file = False
                    if not is_file:
                        continue

                    absolute = Path(child.path)
                    try:
                        relative = absolute.relative_to(base_dir)
                    except ValueError:
                        relative = absolute
                    entries.append(AnyFileEntry(RtFileEntry(absolute=absolute, relative_path=relative)))
        except OSError as exc:
            if self.strict:
                raise
            logger.warning(f"Could not read directory {base_dir}: {exc}")
            return []
        return entries


@dataclass(frozen=True)
class AnyDir:
    """Tagged wrapper over ``CtDir`` or ``RtDir``."""

    inner: CtDir | RtDir

    @property
    def kind(self) -> str:
        """``"ct"`` for embedded directories, ``"rt"`` for runtime ones."""
        return CT if isinstance(self.inner, CtDir) else RT

    def as_rt(self) -> RtDir | None:
        """Return the wrapped ``RtDir``, or ``None`` for embedded directories."""
        return self.inner if isinstance(self.inner, RtDir) else None

    def as_ct(self) -> CtDir | None:
        """Return the wrapped ``CtDir``, or ``None`` for runtime directories."""
        return self.inner if isinstance(self.inner, CtDir) else None

    def file_entries(self) -> list[AnyFileEntry]:
        return self.inner.file_entries()


__all__ = [
    "DirOps",
    "CtDir",
    "RtDir",
    "AnyDir",
]
