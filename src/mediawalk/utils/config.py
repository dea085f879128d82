"""Persistent settings for mediawalk.

Settings live in ``$XDG_CONFIG_HOME/mediawalk/config.toml`` (by default
``~/.config/mediawalk/config.toml``) and can be overridden per run with
``MEDIAWALK_*`` environment variables or CLI options. Uses tomli/tomli-w for
TOML parsing and writing.

Known keys:
- ``walk.follow_links`` (bool, default True)
- ``walk.queue_size`` (int, default 0 meaning unbounded)
- ``output.json`` (bool, default False)
"""

from pathlib import Path
from typing import Any, Dict, TypeVar, cast
import contextlib
import os

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "mediawalk"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "MEDIAWALK_"

DEFAULTS: Dict[str, Any] = {
    "walk.follow_links": True,
    "walk.queue_size": 0,
    "output.json": False,
}

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="walk.queue_size" will attempt
    ``data["walk"]["queue_size"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "walk.queue_size" -> "MEDIAWALK_WALK_QUEUE_SIZE".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def coerce_value(value: Any, default: T) -> T:
    """Coerce a raw env/config *value* to the type of *default*.

    Falls back to *default* when the value cannot be converted. Booleans are
    checked before ints because ``bool`` is a subclass of ``int``.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            return cast(T, value.strip().lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return cast(T, value)
        if isinstance(value, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(value))
        return default
    if isinstance(default, float):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, float(value))
        return default
    if default is None and isinstance(value, str):
        if value.isdigit():
            return cast(T, int(value))
        with contextlib.suppress(ValueError):
            return cast(T, float(value))
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"walk.follow_links"``.
        default: Value to fall back to when no overrides found. Its type
            drives coercion of env and config values.
        cli_value: Value passed from a CLI option (``None`` when not provided).

    Returns:
        The resolved value.
    """

    if cli_value is not None:
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return coerce_value(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return coerce_value(file_val, default)

    return default


def get_config_value(key: str) -> Any | None:
    """Return the value stored in the config file for *key*, or None."""
    return _lookup_nested(_read_config_file(), key)


def set_config_value(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Intermediate tables are created as needed.

    Raises:
        ValueError: If a non-table value is already stored on the key path.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    data = _read_config_file()
    *parents, leaf = key.split(".")
    table = data
    for part in parents:
        table = table.setdefault(part, {})
        if not isinstance(table, dict):
            raise ValueError(f"Cannot set {key}: {part} is not a table")
    table[leaf] = value
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)
