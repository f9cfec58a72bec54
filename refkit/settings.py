"""Picker settings: built-in defaults overlaid with config/settings.yaml."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_MISSING = object()

_DEFAULTS: dict[str, Any] = {
    "picker": {
        "search_prompt": "Search",
        "show_icons": True,
    },
    "catalog": {
        "path": "config/catalog.yaml",
    },
    "icons": {
        # Used when neither metadata nor the type hierarchy yields an icon
        "fallback": "",
        "named": {
            "d_ScriptableObject Icon": "📜",
            "d_Folder Icon": "📁",
            "d_Prefab Icon": "🧊",
        },
        # module.QualName -> icon; nearest class in the MRO wins
        "types": {},
    },
    "logging": {
        "file": "logs/refkit.log",
        "level": "INFO",
        "log_to_console": False,
        "max_bytes": 1048576,  # 1 MB
        "backup_count": 3,
    },
}

_cache: dict[Path, dict[str, Any]] = {}


def _merged(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """New dict with overlay applied over base. Nested sections merge; None values keep the default."""
    result = copy.deepcopy(base)
    for key, value in overlay.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = _merged(current, value)
        else:
            result[key] = value
    return result


def get_default_settings() -> dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def get_setting(settings: dict[str, Any], path: str, default: Any = None) -> Any:
    """Nested lookup by dot path, e.g. ``'picker.search_prompt'``."""
    node: Any = settings
    for key in path.split("."):
        if not isinstance(node, dict):
            return default
        node = node.get(key, _MISSING)
        if node is _MISSING:
            return default
    return node


def reload_settings() -> None:
    """Forget every cached config dir so the next load rereads settings.yaml."""
    _cache.clear()


def _read_overrides(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not a mapping", path)
        return {}
    return data


def load_settings(config_dir: Path | None = None) -> dict[str, Any]:
    """Defaults overlaid with ``<config_dir>/settings.yaml``, cached per directory.

    config_dir defaults to the ``config`` directory next to the package.
    """
    if config_dir is None:
        config_dir = Path(__file__).resolve().parent.parent / "config"
    key = config_dir.resolve()
    if key not in _cache:
        _cache[key] = _merged(_DEFAULTS, _read_overrides(key / "settings.yaml"))
    return _cache[key]
