"""Exception types raised by anydir.

Runtime read failures surface as plain ``OSError``; these subclasses mark
the two failure kinds callers usually want to tell apart.
"""

from __future__ import annotations


class InvalidDataError(OSError):
    """File content is not valid UTF-8."""


class EmbedError(Exception):
    """A directory literal could not be captured into an embedded snapshot."""


__all__ = [
    "InvalidDataError",
    "EmbedError",
]
