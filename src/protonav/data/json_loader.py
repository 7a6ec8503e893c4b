"""Low-level JSON helpers for prototype exports."""
from __future__ import annotations

import json
import re
from pathlib import Path

from .errors import DataLoadError

_JS_ASSIGNMENT = re.compile(r"^\s*(?:var|let|const)\s+[A-Za-z_$][\w$]*\s*=\s*", re.ASCII)


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def load_story_js(path: Path) -> object:
    """Load a ``var story = {...}`` export and return the embedded object."""
    text = _read_text(path)
    return parse_story_js(text, source=str(path))


def parse_story_js(text: str, *, source: str = "<string>") -> object:
    """Strip the JavaScript assignment wrapper and decode the object literal."""
    match = _JS_ASSIGNMENT.match(text)
    body = text[match.end():] if match else text
    body = body.strip()
    if body.endswith(";"):
        body = body[:-1].rstrip()
    if not body.startswith("{"):
        raise DataLoadError(f"No story object literal found in {source}")
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid story object in {source}: {exc}") from exc


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Prototype file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read prototype file: {path}") from exc
