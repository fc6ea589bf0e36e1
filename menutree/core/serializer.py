"""Conversion of the item tree into the site structure document.

The stored artifact is the compact JSON array with every double quote escaped
by a backslash, the format existing consumers of the structure file read.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .errors import OutputError
from .menu_item import MenuItem


def build_structure(items: Iterable[MenuItem]) -> List[Dict[str, Any]]:
    return [
        {
            "name_de": item.name_de,
            "name_en": item.name_en,
            "link": item.link,
            "hidden": item.hidden,
            "items": build_structure(item.children),
        }
        for item in items
    ]


def dumps_structure(items: Iterable[MenuItem], escape_quotes: bool = True) -> str:
    text = json.dumps(build_structure(items), ensure_ascii=False, separators=(",", ":"))
    if escape_quotes:
        text = text.replace('"', '\\"')
    return text


def loads_structure(text: str, escaped: bool = True) -> List[Dict[str, Any]]:
    """Inverse of :func:`dumps_structure`."""
    if escaped:
        text = text.replace('\\"', '"')
    return json.loads(text)


def write_structure(
    items: Iterable[MenuItem],
    path: Path,
    escape_quotes: bool = True,
    encoding: str = "utf-8",
) -> None:
    text = dumps_structure(items, escape_quotes=escape_quotes)
    try:
        Path(path).write_text(text, encoding=encoding)
    except OSError as e:
        raise OutputError(f"Could not write output file '{path}': {e}") from e


__all__ = ["build_structure", "dumps_structure", "loads_structure", "write_structure"]
