"""Core components of the structure builder.

Modules:
  menu_item: Menu item entity, sibling ordering and the order-preserving hash.
  menu_file: Parse one folder's .menu file into a self item and sub items.
  tree_builder: Recursive folder walk and template discovery.
  serializer: Item tree to structure document.
  group_templates: Render grouped item lists from .template.<group> files.
  settings: YAML settings layered over defaults.
  errors: Exception hierarchy.
  logging: loguru setup.
"""

from .menu_item import MenuItem, ChildItems  # noqa: F401
