"""
menutree

Builds the navigation structure of a website from a folder-based content
layout: per-folder ``.menu`` files describe the entries, ``.template.<group>``
files render grouped item lists into HTML fragments.
"""

from .builder import StructureBuilder, BuildResult
from .core.errors import MenuTreeError
from .core.menu_item import MenuItem, ChildItems
from .core.settings import BuildSettings, load_settings

__all__ = [
    "StructureBuilder",
    "BuildResult",
    "MenuTreeError",
    "MenuItem",
    "ChildItems",
    "BuildSettings",
    "load_settings",
]
