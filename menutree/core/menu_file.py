"""Parsing of per-directory ``.menu`` files.

A menu file is a JSON array of objects. The entry without a ``link`` describes
the directory itself (its *self* item); every entry with a ``link`` becomes a
sub item attached below it.

Problems with a single entry are logged and skip only that entry. Problems
with the file as a whole raise :class:`MenuFileError`.
"""
from __future__ import annotations
import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from loguru import logger

from .errors import MenuFileError, MenuItemError
from .menu_item import MenuItem, order_preserving_hash
from .settings import BuildSettings

SANITIZED_KEYS = ("link", "hidden", "name_de", "name_en")


@dataclass
class ParsedMenu:
    self_item: Optional[MenuItem] = None
    sub_items: List[MenuItem] = field(default_factory=list)


def relative_dir(directory: Path, root: Path) -> str:
    rel = directory.relative_to(root).as_posix()
    return "" if rel == "." else rel


def resolve_link(rel: str, link: Optional[str]) -> str:
    if link is None:
        return f"{rel}/" if rel else ""
    return f"{rel}/{link}"


def stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def resolve_order(value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            return order_preserving_hash(str(value))
        return int(value)
    return order_preserving_hash(stringify(value))


def _optional_str(entry: Dict[str, Any], key: str) -> Optional[str]:
    val = entry.get(key)
    if val is not None and not isinstance(val, str):
        raise MenuItemError(f"'{key}' must be a string, got {type(val).__name__}.")
    return val


def build_item(entry: Dict[str, Any], rel: str, default_order: int) -> MenuItem:
    """Create a menu item from one decoded menu entry.

    Raises MenuItemError if the entry cannot form a valid item.
    """
    link = _optional_str(entry, "link")
    hidden = entry.get("hidden")
    if hidden is None:
        hidden = False
    elif not isinstance(hidden, bool):
        raise MenuItemError(f"'hidden' must be a boolean, got {type(hidden).__name__}.")

    properties = {str(k): stringify(v) for k, v in entry.items() if v is not None}
    item = MenuItem(
        link=resolve_link(rel, link),
        name_de=_optional_str(entry, "name_de"),
        name_en=_optional_str(entry, "name_en"),
        group=_optional_str(entry, "group"),
        order=resolve_order(entry.get("order"), default_order),
        hidden=hidden,
        properties=properties,
    )
    # Placeholders must see the values actually stored on the item
    properties.update(
        link=item.link,
        hidden=stringify(item.hidden),
        name_de=item.name_de,
        name_en=item.name_en,
    )
    return item


def read_menu_entries(menu_path: Path, encoding: str = "utf-8") -> List[Any]:
    try:
        if not menu_path.is_file():
            raise MenuFileError(f"Could not find menu file '{menu_path}'.")
        text = menu_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise MenuFileError(f"Could not read menu file '{menu_path}': {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MenuFileError(f"Menu file '{menu_path}' does not contain a valid JSON array. {e}") from e
    if not isinstance(data, list):
        raise MenuFileError(f"Menu file '{menu_path}' does not contain a JSON array.")
    return data


def parse_menu_file(directory: Path, root: Path, settings: Optional[BuildSettings] = None) -> ParsedMenu:
    settings = settings or BuildSettings()
    menu_path = directory / settings.menu_file_name
    entries = read_menu_entries(menu_path, settings.menu_encoding)
    rel = relative_dir(directory, root)

    parsed = ParsedMenu()
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(f"Found invalid site entry #{idx} in menu file '{menu_path}'. Skipping item.")
            continue
        try:
            item = build_item(entry, rel, settings.default_order)
        except MenuItemError as e:
            logger.warning(f"Found invalid site entry #{idx} in menu file '{menu_path}'. {e} Skipping item.")
            continue
        if entry.get("link") is None:
            if parsed.self_item is not None:
                logger.warning(f"Menu file '{menu_path}' has more than one main entry; using the last one.")
            parsed.self_item = item
        else:
            parsed.sub_items.append(item)
    return parsed


__all__ = [
    "ParsedMenu",
    "parse_menu_file",
    "read_menu_entries",
    "build_item",
    "resolve_link",
    "resolve_order",
    "relative_dir",
    "stringify",
]
