"""Centralized exception hierarchy for the structure builder."""
from __future__ import annotations


class MenuTreeError(Exception):
    """Base class for all structure builder errors."""


class ConfigError(MenuTreeError):
    pass


class RootNotFoundError(MenuTreeError):
    pass


class OutputError(MenuTreeError):  # structure file cannot be written
    pass


class MenuFileError(MenuTreeError):  # skips one directory and its subtree
    pass


class MenuItemError(MenuTreeError, ValueError):  # skips a single menu entry
    pass


class TemplateError(MenuTreeError):
    pass


__all__ = [
    "MenuTreeError",
    "ConfigError",
    "RootNotFoundError",
    "OutputError",
    "MenuFileError",
    "MenuItemError",
    "TemplateError",
]
