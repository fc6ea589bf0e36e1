"""Build settings: YAML file layered over built-in defaults.

The settings file is chosen by an explicit path (``--config``) or the
``MENUTREE_CONFIG_FILE`` environment variable. Without either, the defaults
below are used unchanged.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from loguru import logger

from .errors import ConfigError
from .menu_item import DEFAULT_ORDER


DEFAULT_SETTINGS: Dict[str, Any] = {
    "menu": {
        "file_name": ".menu",
        "default_order": DEFAULT_ORDER,
        "encoding": "utf-8",
    },
    "templates": {
        "prefix": ".template.",
        "output_suffix": ".html",
    },
    "output": {
        # Escape every double quote of the structure file (consumer format)
        "escape_quotes": True,
        "encoding": "utf-8",
    },
}


@dataclass(frozen=True)
class BuildSettings:
    menu_file_name: str = ".menu"
    default_order: int = DEFAULT_ORDER
    menu_encoding: str = "utf-8"
    template_prefix: str = ".template."
    template_output_suffix: str = ".html"
    escape_quotes: bool = True
    output_encoding: str = "utf-8"


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read settings file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Settings file '{path}' is not valid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file '{path}' must contain a mapping")
    return data


def _require_str(section: Dict[str, Any], key: str, where: str) -> str:
    val = section.get(key)
    if not isinstance(val, str) or not val:
        raise ConfigError(f"{where}.{key} must be a non-empty string")
    return val


def _validate(cfg: Dict[str, Any]) -> BuildSettings:
    for name in ("menu", "templates", "output"):
        if not isinstance(cfg.get(name), dict):
            raise ConfigError(f"Section '{name}' must be a mapping")
    menu, templates, output = cfg["menu"], cfg["templates"], cfg["output"]

    default_order = menu.get("default_order")
    if isinstance(default_order, bool) or not isinstance(default_order, int):
        raise ConfigError(f"menu.default_order must be an integer, got {default_order!r}")
    escape_quotes = output.get("escape_quotes")
    if not isinstance(escape_quotes, bool):
        raise ConfigError(f"output.escape_quotes must be a boolean, got {escape_quotes!r}")

    return BuildSettings(
        menu_file_name=_require_str(menu, "file_name", "menu"),
        default_order=default_order,
        menu_encoding=_require_str(menu, "encoding", "menu"),
        template_prefix=_require_str(templates, "prefix", "templates"),
        template_output_suffix=_require_str(templates, "output_suffix", "templates"),
        escape_quotes=escape_quotes,
        output_encoding=_require_str(output, "encoding", "output"),
    )


def settings_from_dict(data: Optional[Dict[str, Any]] = None) -> BuildSettings:
    return _validate(_deep_merge(DEFAULT_SETTINGS, data or {}))


def load_settings(path: Optional[Path] = None) -> BuildSettings:
    """Load settings from ``path`` or ``MENUTREE_CONFIG_FILE``, else defaults."""
    if path is None:
        env_path = os.getenv("MENUTREE_CONFIG_FILE")
        path = Path(env_path) if env_path else None
    if path is None:
        return settings_from_dict()
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Settings file '{path}' does not exist")
    logger.debug(f"Loading settings from {path}")
    return settings_from_dict(_read_yaml(path))


__all__ = [
    "BuildSettings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "settings_from_dict",
    "ConfigError",
]
