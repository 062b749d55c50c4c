"""Uniform access to embedded and runtime directories.

``anydir("ct", "LITERAL")`` embeds a directory snapshot, ``anydir("rt", path)``
reads one from disk at run time; both enumerate ``AnyFileEntry`` handles with
the same ``path``/``read_bytes``/``read_string`` surface.
"""

from __future__ import annotations

from .constructors import anydir, anydir_rt, anyfile_from_path
from .dirs import AnyDir, CtDir, DirOps, RtDir
from .embed import (
    EmbeddedDir,
    EmbeddedFile,
    clear_embedded_registry,
    embed_dir,
    embedded_registry,
    register_embedded,
    sanitize_identifier,
)
from .entries import CT, RT, AnyFileEntry, CtFileEntry, FileEntryOps, RtFileEntry
from .errors import EmbedError, InvalidDataError

__all__ = [
    "CT",
    "RT",
    "anydir",
    "anydir_rt",
    "anyfile_from_path",
    "AnyDir",
    "CtDir",
    "RtDir",
    "DirOps",
    "AnyFileEntry",
    "CtFileEntry",
    "RtFileEntry",
    "FileEntryOps",
    "EmbeddedDir",
    "EmbeddedFile",
    "embed_dir",
    "register_embedded",
    "embedded_registry",
    "clear_embedded_registry",
    "sanitize_identifier",
    "EmbedError",
    "InvalidDataError",
]
