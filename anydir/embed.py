"""Build-time directory embedding.

``embed_dir`` turns a directory literal into an immutable ``EmbeddedDir``
snapshot: every file's bytes are read once and kept in memory, indexed by
the file's POSIX path relative to the embedded root. Snapshots live in a
process-wide registry keyed by the literal and the project root it resolves
against, so a frozen module (see ``anydir.freeze``) imported ahead of time
satisfies the same literal without touching the filesystem, while another
project using the same literal keeps its own tree.
"""

from __future__ import annotations

import logging
import os
import re
import sys
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path, PurePath
from types import FrameType

from .config import load_tokens
from .errors import EmbedError

logger = logging.getLogger(__name__)

PACKAGE_ROOT_TOKEN = "PACKAGE_ROOT"
PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg")

_TOKEN_RE = re.compile(r"\$(?:\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\}|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))")


@dataclass(frozen=True)
class EmbeddedFile:
    """One captured file: path relative to the embedded root plus its bytes."""

    path: str
    contents: bytes


@dataclass(frozen=True)
class EmbeddedDir:
    """Captured directory with its immediate files and subdirectories.

    ``path`` is relative to the embedded root (``""`` for the root itself).
    Lookups through ``get_file``/``get_dir`` always take root-relative paths,
    even when called on a subdirectory.
    """

    path: str = ""
    files: tuple[EmbeddedFile, ...] = ()
    dirs: tuple["EmbeddedDir", ...] = ()

    def walk_files(self) -> Iterator[EmbeddedFile]:
        """Yield every file in this subtree, own files before subdirectories."""
        yield from self.files
        for child in self.dirs:
            yield from child.walk_files()

    def walk_dirs(self) -> Iterator["EmbeddedDir"]:
        """Yield this directory and every nested directory, depth first."""
        yield self
        for child in self.dirs:
            yield from child.walk_dirs()

    @cached_property
    def _file_index(self) -> dict[str, EmbeddedFile]:
        return {embedded.path: embedded for embedded in self.walk_files()}

    @cached_property
    def _dir_index(self) -> dict[str, "EmbeddedDir"]:
        return {embedded.path: embedded for embedded in self.walk_dirs()}

    def get_file(self, path: str | PurePath) -> EmbeddedFile | None:
        """Return the file at root-relative ``path`` or ``None``."""
        return self._file_index.get(_lookup_key(path))

    def get_dir(self, path: str | PurePath) -> "EmbeddedDir | None":
        """Return the directory at root-relative ``path`` or ``None``."""
        return self._dir_index.get(_lookup_key(path))


def _lookup_key(path: str | PurePath) -> str:
    key = PurePath(path).as_posix()
    return "" if key == "." else key


# Keyed by (literal, resolved package root): one datum per literal per project.
_EMBEDDED: dict[tuple[str, Path], EmbeddedDir] = {}
_REGISTRY_LOCK = threading.RLock()


def sanitize_identifier(literal: str) -> str:
    """Derive the ``DIR_`` identifier naming the snapshot for ``literal``.

    ASCII letters and digits are uppercased; any other character becomes
    ``_``.
    """
    out = ["DIR_"]
    for ch in literal:
        if ch.isascii() and ch.isalnum():
            out.append(ch.upper())
        else:
            out.append("_")
    return "".join(out)


def package_root_for_file(module_file: str | os.PathLike[str]) -> Path:
    """Return the project root owning ``module_file``.

    The nearest ancestor holding a packaging marker wins. Installed code
    usually has none, so the fallback is the outermost package directory
    containing the module (or the module's directory outside any package).
    """
    start = Path(module_file).resolve().parent
    for candidate in (start, *start.parents):
        if any((candidate / marker).is_file() for marker in PROJECT_MARKERS):
            return candidate

    top = start
    while (top / "__init__.py").is_file() and (top.parent / "__init__.py").is_file():
        top = top.parent
    return top


def package_root_for_frame(frame: FrameType | None) -> Path:
    """Return the project root of the module executing ``frame``.

    Frames without a ``__file__`` (REPL, ``exec``) use the working directory.
    """
    module_file = frame.f_globals.get("__file__") if frame is not None else None
    if not module_file:
        return Path.cwd().resolve()
    return package_root_for_file(module_file)


def resolve_literal(literal: str, package_root: Path) -> Path:
    """Substitute ``$NAME``/``${NAME}`` tokens and anchor relative results.

    ``PACKAGE_ROOT`` maps to ``package_root``; other names are looked up in
    the environment, then in the user config ``tokens`` table.
    """
    config_tokens: dict[str, str] | None = None

    def substitute(match: re.Match[str]) -> str:
        nonlocal config_tokens
        name = match.group("braced") or match.group("bare")
        if name == PACKAGE_ROOT_TOKEN:
            return str(package_root)
        if name in os.environ:
            return os.environ[name]
        if config_tokens is None:
            config_tokens = load_tokens()
        if name in config_tokens:
            return config_tokens[name]
        raise EmbedError(f"unknown token ${name} in embed literal {literal!r}")

    path = Path(_TOKEN_RE.sub(substitute, literal))
    if not path.is_absolute():
        path = package_root / path
    return path


def capture_dir(directory: Path) -> EmbeddedDir:
    """Read ``directory`` recursively into an ``EmbeddedDir``.

    Children are captured in name order. Raises ``EmbedError`` when the path
    is missing, is not a directory, or any part of it cannot be read.
    """
    if not directory.exists():
        raise EmbedError(f"embed path does not exist: {directory}")
    if not directory.is_dir():
        raise EmbedError(f"embed path is not a directory: {directory}")
    return _capture(directory, "", frozenset())


def _capture(directory: Path, relative: str, ancestors: frozenset[Path]) -> EmbeddedDir:
    resolved = directory.resolve()
    if resolved in ancestors:
        raise EmbedError(f"symlink cycle while embedding: {directory}")
    ancestors = ancestors | {resolved}

    try:
        with os.scandir(directory) as entries:
            children = sorted(entries, key=lambda child: child.name)
    except OSError as exc:
        raise EmbedError(f"cannot read directory {directory}: {exc}") from exc

    files: list[EmbeddedFile] = []
    dirs: list[EmbeddedDir] = []
    for child in children:
        child_relative = f"{relative}/{child.name}" if relative else child.name
        child_path = Path(child.path)
        try:
            if child.is_dir():
                dirs.append(_capture(child_path, child_relative, ancestors))
            elif child.is_file():
                files.append(EmbeddedFile(path=child_relative, contents=child_path.read_bytes()))
        except OSError as exc:
            raise EmbedError(f"cannot read {child_path}: {exc}") from exc

    return EmbeddedDir(path=relative, files=tuple(files), dirs=tuple(dirs))


def register_embedded(literal: str, root: EmbeddedDir, *, package_root: Path) -> EmbeddedDir:
    """Define the snapshot for ``literal`` within ``package_root`` once.

    Re-registering the same literal for the same project returns the first
    snapshot; other literals and other projects get their own entries.
    """
    key = (literal, package_root.resolve())
    with _REGISTRY_LOCK:
        existing = _EMBEDDED.get(key)
        if existing is not None:
            return existing
        _EMBEDDED[key] = root
    logger.debug(f"Registered {sanitize_identifier(literal)} for {literal!r} in {key[1]}")
    return root


def embed_dir(literal: str, *, package_root: Path | None = None) -> EmbeddedDir:
    """Return the embedded snapshot for directory ``literal``.

    ``package_root`` defaults to the project root of the calling module. A
    snapshot already registered for the literal in that project (from a
    frozen module or an earlier call) is returned as-is; otherwise the
    literal is resolved against the root, captured and registered.
    """
    if not isinstance(literal, str):
        raise TypeError(f"embed_dir requires a string literal, got {type(literal).__name__}")

    if package_root is None:
        package_root = package_root_for_frame(sys._getframe(1))
    key = (literal, package_root.resolve())
    with _REGISTRY_LOCK:
        existing = _EMBEDDED.get(key)
        if existing is not None:
            return existing

        directory = resolve_literal(literal, package_root)
        root = capture_dir(directory)
        file_count = sum(1 for _ in root.walk_files())
        logger.debug(f"Captured {file_count} files from {directory} as {sanitize_identifier(literal)}")
        return register_embedded(literal, root, package_root=package_root)


def embedded_registry() -> dict[tuple[str, Path], EmbeddedDir]:
    """Return a copy of the (literal, package root) -> snapshot registry."""
    with _REGISTRY_LOCK:
        return dict(_EMBEDDED)


def clear_embedded_registry() -> None:
    """Drop every registered snapshot."""
    with _REGISTRY_LOCK:
        _EMBEDDED.clear()


__all__ = [
    "PACKAGE_ROOT_TOKEN",
    "EmbeddedFile",
    "EmbeddedDir",
    "sanitize_identifier",
    "package_root_for_file",
    "package_root_for_frame",
    "resolve_literal",
    "capture_dir",
    "register_embedded",
    "embed_dir",
    "embedded_registry",
    "clear_embedded_registry",
]
