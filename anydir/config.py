"""Persistent JSON config helpers.

Stores extra ``embed_dir`` tokens and the preferred highlight style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "anydir"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / "config.json"
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Return the persisted config object, or ``{}`` when there is none usable."""
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` as indented JSON; unwritable locations and unserializable data are ignored."""
    try:
        payload = json.dumps(data, indent=2)
    except (TypeError, ValueError):
        return
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(payload + "\n", encoding="utf-8")
    except OSError:
        return


def load_tokens() -> dict[str, str]:
    """Return user-defined ``$NAME`` substitutions for embed literals.

    Entries whose key or value is not a non-empty string are dropped.
    """
    value = load_config().get("tokens")
    if not isinstance(value, dict):
        return {}

    tokens: dict[str, str] = {}
    for name, replacement in value.items():
        if not isinstance(name, str) or not name:
            continue
        if not isinstance(replacement, str) or not replacement:
            continue
        tokens[name] = replacement
    return tokens


def save_token(name: str, replacement: str) -> None:
    """Persist one token substitution, ignoring blank names."""
    stripped = str(name).strip()
    if not stripped:
        return
    config = load_config()
    tokens = config.get("tokens")
    if not isinstance(tokens, dict):
        tokens = {}
    tokens[stripped] = str(replacement)
    config["tokens"] = tokens
    save_config(config)


def load_style() -> str:
    """Load persisted highlight style name, defaulting to ``monokai``."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def save_style(style: str) -> None:
    """Persist selected highlight style name."""
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_STYLE",
    "load_config",
    "save_config",
    "load_tokens",
    "save_token",
    "load_style",
    "save_style",
]
