"""Group fragments rendered from ``.template.<group>`` files.

A template file is a JSON object with a required ``item_template`` and an
optional ``item_spacer``. Every item below the template's owning item whose
group starts with ``<group>`` (case-insensitive) is collected; items are
bucketed by their exact group string and each bucket is rendered to
``.<bucket>.html`` next to the template.
"""
from __future__ import annotations
import json
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional
from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator

from .errors import TemplateError
from .menu_item import ChildItems, MenuItem
from .settings import BuildSettings
from .tree_builder import TemplateRef

PLACEHOLDER_PATTERN = re.compile(r"\{\{(.*?)\}\}")


class GroupTemplate(BaseModel):
    item_template: str
    item_spacer: str = ""

    @field_validator("item_spacer", mode="before")
    @classmethod
    def _spacer_default(cls, v):
        return "" if v is None else v


def load_template(path: Path, encoding: str = "utf-8") -> GroupTemplate:
    try:
        data = json.loads(Path(path).read_text(encoding=encoding))
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Template '{path}' could not be read: {e}") from e
    except json.JSONDecodeError as e:
        raise TemplateError(f"Template '{path}' is not a valid JSON file. {e}") from e
    if not isinstance(data, dict):
        raise TemplateError(f"Template '{path}' is not a valid JSON file.")
    if "item_template" not in data:
        raise TemplateError(f"Template '{path}' does not contain a 'item_template' entry.")
    try:
        return GroupTemplate.model_validate(data)
    except ValidationError as e:
        raise TemplateError(f"Template '{path}' is invalid: {e}") from e


def group_name_for(path: Path, prefix: str = ".template.") -> str:
    return Path(path).name[len(prefix):]


def find_group_items(items: Iterable[MenuItem], group_name: str) -> Dict[str, ChildItems]:
    """Collect items of the whole subtree whose group starts with ``group_name``."""
    wanted = group_name.lower()
    buckets: Dict[str, ChildItems] = {}
    for item in _walk(items):
        if item.group is not None and item.group.lower().startswith(wanted):
            buckets.setdefault(item.group, ChildItems()).add(item)
    return buckets


def _walk(items: Iterable[MenuItem]):
    for item in items:
        yield item
        yield from item.walk()


def render_item(item_template: str, properties: Mapping[str, str]) -> str:
    return PLACEHOLDER_PATTERN.sub(lambda m: properties.get(m.group(1), ""), item_template)


def render_group(template: GroupTemplate, items: Iterable[MenuItem]) -> str:
    return template.item_spacer.join(render_item(template.item_template, i.properties) for i in items)


def group_file_path(template_path: Path, group: str, suffix: str = ".html") -> Path:
    return Path(template_path).parent / f".{group}{suffix}"


def write_group_files(ref: TemplateRef, settings: Optional[BuildSettings] = None) -> List[Path]:
    """Render and write every group bucket for one template.

    Returns the paths written. Template problems skip the template, write
    problems skip only the affected bucket.
    """
    settings = settings or BuildSettings()
    try:
        template = load_template(ref.path, settings.menu_encoding)
    except TemplateError as e:
        logger.warning(f"{e} Skipping template.")
        return []

    group_name = group_name_for(ref.path, settings.template_prefix)
    buckets = find_group_items(ref.owner.children, group_name)
    if not buckets:
        logger.debug(f"Template '{ref.path}' matched no items of group '{group_name}'.")

    written: List[Path] = []
    for group, members in buckets.items():
        out_path = group_file_path(ref.path, group, settings.template_output_suffix)
        try:
            out_path.write_text(render_group(template, members), encoding=settings.output_encoding)
        except OSError as e:
            logger.error(f"Could not write group file '{out_path}': {e}. Skipping group '{group}'.")
            continue
        written.append(out_path)
    return written


__all__ = [
    "GroupTemplate",
    "PLACEHOLDER_PATTERN",
    "load_template",
    "group_name_for",
    "find_group_items",
    "render_item",
    "render_group",
    "group_file_path",
    "write_group_files",
]
