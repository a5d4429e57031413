"""Shared utility functions for Prism.

Provides the Rich console used for all diagnostic output, the warning
printer, and JSON/YAML file I/O used by the configuration layer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)

_YAML_SUFFIXES = {".yml", ".yaml"}


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_warning(message: str) -> None:
    """Print a yellow warning message.

    LLM responses end up in warning text, so the message is escaped before
    Rich interprets square brackets as markup.
    """
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


# ---------------------------------------------------------------------------
# Structured file I/O
# ---------------------------------------------------------------------------


def is_yaml_path(path: str | Path) -> bool:
    """Return ``True`` if *path* has a YAML suffix."""
    return Path(path).suffix.lower() in _YAML_SUFFIXES


def load_structured(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML mapping from disk.

    The format is chosen from the file suffix (``.yml``/``.yaml`` for YAML,
    anything else for JSON).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) if is_yaml_path(file_path) else json.loads(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {file_path}, got {type(data).__name__}")
    return data


def save_structured(data: dict[str, Any], path: str | Path) -> Path:
    """Write *data* as pretty JSON or YAML (by suffix), creating parent dirs.

    Returns:
        The path that was written.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if is_yaml_path(file_path):
        content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    file_path.write_text(content, encoding="utf-8")
    return file_path
