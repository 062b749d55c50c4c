"""Frozen snapshot modules.

A frozen module carries an embedded tree as bytes literals and registers it
for the literal within its own project root when imported; the module-level
name is the literal's ``DIR_`` identifier. Ship it with the
application and import it before calling ``embed_dir``/``anydir("ct", ...)``
so the snapshot is served without reading the source tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .embed import EmbeddedDir, EmbeddedFile, capture_dir, resolve_literal, sanitize_identifier

logger = logging.getLogger(__name__)

BYTES_CHUNK = 48
INDENT = "    "

_MODULE_HEADER = '''"""Frozen anydir snapshot of {literal}.

Generated by ``anydir freeze``; do not edit.
"""

from anydir.embed import EmbeddedDir, EmbeddedFile, package_root_for_file, register_embedded

'''


def _render_file(embedded: EmbeddedFile, indent: str) -> list[str]:
    inner = indent + INDENT
    lines = [f"{indent}EmbeddedFile(", f"{inner}path={embedded.path!r},"]
    contents = embedded.contents
    if len(contents) <= BYTES_CHUNK:
        lines.append(f"{inner}contents={contents!r},")
    else:
        lines.append(f"{inner}contents=(")
        for offset in range(0, len(contents), BYTES_CHUNK):
            lines.append(f"{inner}{INDENT}{contents[offset:offset + BYTES_CHUNK]!r}")
        lines.append(f"{inner}),")
    lines.append(f"{indent})")
    return lines


def _render_dir(embedded: EmbeddedDir, indent: str) -> list[str]:
    inner = indent + INDENT
    lines = [f"{indent}EmbeddedDir(", f"{inner}path={embedded.path!r},", f"{inner}files=("]
    for child_file in embedded.files:
        lines.extend(_render_file(child_file, inner + INDENT))
        lines[-1] += ","
    lines.append(f"{inner}),")
    lines.append(f"{inner}dirs=(")
    for child_dir in embedded.dirs:
        lines.extend(_render_dir(child_dir, inner + INDENT))
        lines[-1] += ","
    lines.append(f"{inner}),")
    lines.append(f"{indent})")
    return lines


def render_frozen_module(literal: str, root: EmbeddedDir) -> str:
    """Return Python source that rebuilds and registers ``root`` for ``literal``."""
    identifier = sanitize_identifier(literal)
    lines = [
        f"{identifier} = register_embedded(",
        f"{INDENT}{literal!r},",
    ]
    lines.extend(_render_dir(root, INDENT))
    lines[-1] += ","
    lines.append(f"{INDENT}package_root=package_root_for_file(__file__),")
    lines.append(")")
    return _MODULE_HEADER.format(literal=repr(literal)) + "\n".join(lines) + "\n"


def freeze_dir(literal: str, output: Path, *, package_root: Path) -> Path:
    """Capture ``literal`` and write its frozen module to ``output``.

    Raises ``EmbedError`` when the literal cannot be resolved or captured.
    """
    directory = resolve_literal(literal, package_root)
    root = capture_dir(directory)
    source = render_frozen_module(literal, root)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")
    logger.info(f"Froze {directory} into {output}")
    return output


__all__ = [
    "render_frozen_module",
    "freeze_dir",
]
