"""Recursive directory walk that assembles the menu item tree.

Each directory's self item becomes the parent context for its
subdirectories: the walker hands the self item's child container down and the
child directory inserts its own self item into it. Template files found along
the way are recorded together with the self item of the directory that holds
them, which governs the whole subtree below.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from loguru import logger

from .errors import MenuFileError, RootNotFoundError
from .menu_file import parse_menu_file
from .menu_item import ChildItems, MenuItem
from .settings import BuildSettings


@dataclass
class TemplateRef:
    path: Path
    owner: MenuItem


@dataclass
class BuildTree:
    items: ChildItems = field(default_factory=ChildItems)
    templates: List[TemplateRef] = field(default_factory=list)


class TreeBuilder:
    def __init__(self, root: Path, settings: Optional[BuildSettings] = None):
        self.root = Path(root).resolve()
        self.settings = settings or BuildSettings()
        self.templates: List[TemplateRef] = []

    def build(self) -> BuildTree:
        try:
            root_exists = self.root.is_dir()
        except OSError as e:
            raise RootNotFoundError(f"Could not access path '{self.root}': {e}. Abort.") from e
        if not root_exists:
            raise RootNotFoundError(f"Could not find path '{self.root}'. Abort.")
        self.templates = []
        items = ChildItems()
        if not self.process_directory(self.root, items):
            # A broken root menu still lets the rest of the tree through
            logger.warning(f"Root folder '{self.root}' has no main entry; using its subfolders as top level.")
            self._process_root_children(items)
        return BuildTree(items=items, templates=list(self.templates))

    def process_directory(self, directory: Path, parent_children: ChildItems) -> bool:
        """Add ``directory`` and its subtree to ``parent_children``.

        Returns False when the directory was skipped.
        """
        try:
            parsed = parse_menu_file(directory, self.root, self.settings)
        except MenuFileError as e:
            logger.warning(f"{e} Skipping path.")
            return False
        if parsed.self_item is None:
            menu_path = directory / self.settings.menu_file_name
            dropped = f" Dropping {len(parsed.sub_items)} sub entries." if parsed.sub_items else ""
            logger.warning(f"No main entry (empty link property) in menu file '{menu_path}'.{dropped} Skipping path.")
            return False

        self_item = parsed.self_item
        self_item.children.extend(parsed.sub_items)
        parent_children.add(self_item)

        for entry, is_dir in self._list_dir(directory):
            if is_dir:
                self.process_directory(entry, self_item.children)
            elif entry.name.startswith(self.settings.template_prefix):
                self.templates.append(TemplateRef(path=entry, owner=self_item))
        return True

    def _process_root_children(self, items: ChildItems) -> None:
        for entry, is_dir in self._list_dir(self.root):
            if is_dir:
                self.process_directory(entry, items)
            elif entry.name.startswith(self.settings.template_prefix):
                logger.warning(f"Template '{entry}' has no owning menu entry. Skipping template.")

    def _list_dir(self, directory: Path) -> List[Tuple[Path, bool]]:
        """Return the sorted entries of ``directory`` with their is-directory flag."""
        try:
            paths = sorted(directory.iterdir())
        except OSError as e:
            logger.warning(f"Could not list folder '{directory}': {e}. Skipping subfolders.")
            return []
        entries = []
        for path in paths:
            try:
                entries.append((path, path.is_dir()))
            except OSError as e:
                logger.warning(f"Could not access '{path}': {e}. Skipping entry.")
        return entries


__all__ = ["TreeBuilder", "TemplateRef", "BuildTree"]
