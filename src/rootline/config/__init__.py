"""
rootline.config - Configuration loading and defaults

Configuration is layered, later layers winning:

1. DEFAULT_CONFIG
2. ``.rootline.toml`` (found by walking up from the working directory)
3. ``.rootline.local.toml`` next to it (untracked, per-developer)
4. ``ROOTLINE_<SECTION>_<KEY>`` environment variables
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Mapping

import tomlkit
from tomlkit import TOMLDocument

from rootline.config.defaults import DEFAULT_CONFIG

CONFIG_FILENAME = ".rootline.toml"
LOCAL_CONFIG_FILENAME = ".rootline.local.toml"
ENV_PREFIX = "ROOTLINE_"


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML content, preserving comments and formatting for round-trips."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into plain Python dicts and lists."""
    return parse_toml_document(content).unwrap()


def find_git_root(start: Path) -> Path | None:
    """Return the nearest ancestor of ``start`` containing a ``.git`` entry."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def find_config_file(start: Path) -> Path | None:
    """Find ``.rootline.toml`` in ``start`` or its ancestors.

    The search stops at the git root when there is one, so a config file
    in an unrelated parent directory is never picked up.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if not found.
    """
    current = start.resolve()
    git_root = find_git_root(current)
    for candidate in (current, *current.parents):
        config_path = candidate / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
        if git_root is not None and candidate == git_root:
            break
    return None


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables are merged key by key; any other value in ``override``
    replaces the base value outright (lists are not concatenated).
    """
    result = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable string.

    JSON arrays/objects and numbers are decoded, ``true``/``false`` become
    booleans, anything else (including malformed JSON) stays a string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return _try_parse_numeric(value)


def _try_parse_numeric(value: str) -> Any:
    """Return ``value`` as int or float when it looks numeric."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env_overrides(
    config: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Apply ``ROOTLINE_<SECTION>_<KEY>`` overrides to ``config`` in place.

    The first underscore after the prefix separates section from key, so
    ``ROOTLINE_LAYOUT_CANVAS_HEIGHT`` sets ``layout.canvas_height``.
    """
    env = os.environ if environ is None else environ
    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX) :].lower()
        if "_" not in remainder:
            continue
        section, key = remainder.split("_", 1)
        if not section or not key:
            continue
        table = config.setdefault(section, {})
        if isinstance(table, dict):
            table[key] = _try_parse_env_value(raw)
    return config


class ConfigLoader:
    """Read access to a merged configuration with dotted-key lookup.

    Example:
        loader = ConfigLoader.from_dict({"layout": {"node_width": 200}})
        loader.get("layout.node_width")  # 200
    """

    def __init__(self, data: dict[str, Any], path: Path | None = None) -> None:
        self._data = data
        self.path = path

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConfigLoader:
        """Wrap an existing dict (no defaults applied)."""
        return cls(copy.deepcopy(dict(data)))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key like ``columns.parent``."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def as_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying data."""
        return copy.deepcopy(self._data)


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigLoader:
    """Load configuration with defaults, local override and env overrides.

    Args:
        config_path: Explicit config file. When None only defaults and
            environment overrides apply.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        ConfigLoader over the merged configuration.
    """
    data = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        data = merge_configs(data, parse_toml(config_path.read_text(encoding="utf-8")))
        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            data = merge_configs(data, parse_toml(local_path.read_text(encoding="utf-8")))

    _apply_env_overrides(data, environ)
    return ConfigLoader(data, path=config_path)


def get_config(config_path: Path | None = None, start_dir: Path | None = None) -> ConfigLoader:
    """Resolve the config file (explicit or discovered) and load it."""
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())
    return load_config(config_path)


def render_default_config() -> str:
    """Return DEFAULT_CONFIG as a commented TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("rootline configuration"))
    for section, values in DEFAULT_CONFIG.items():
        table = tomlkit.table()
        for key, value in values.items():
            table.add(key, value)
        doc.add(tomlkit.nl())
        doc.add(section, table)
    return tomlkit.dumps(doc)


__all__ = [
    "CONFIG_FILENAME",
    "LOCAL_CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "find_config_file",
    "find_git_root",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "render_default_config",
]
