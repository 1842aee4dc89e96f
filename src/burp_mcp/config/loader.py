"""Configuration loading: layered TOML files plus environment overrides.

Layers, lowest priority first:
    1. Built-in defaults (Pydantic model defaults)
    2. User config: ``$XDG_CONFIG_HOME/burp-mcp/config.toml``
       (``~/.config`` when unset)
    3. Project-local config: ``./burp-mcp.toml``
    4. The file named by ``$BURP_MCP_CONFIG``
    5. Explicit path passed to ``load_config``
    6. ``$BURP_URL`` (backend base URL)
    7. Programmatic overrides passed to ``load_config``

Layers 2 and 3 are optional. A file named in layer 4 or 5 must exist.
"""

from __future__ import annotations

import functools
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pydantic

from burp_mcp.core.errors import ConfigError

from .schema import BurpMcpConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

APP_DIR = "burp-mcp"
PROJECT_FILE = "burp-mcp.toml"
BURP_URL_ENV = "BURP_URL"
CONFIG_PATH_ENV = "BURP_MCP_CONFIG"


def search_paths() -> tuple[Path, Path]:
    """The optional user-level and project-level config files."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_DIR / "config.toml", Path.cwd() / PROJECT_FILE


def _must_exist(path: str | Path, origin: str) -> Path:
    resolved = Path(path)
    if not resolved.is_file():
        msg = f"{origin} not found: {path}"
        raise ConfigError(msg)
    return resolved


def _config_files(explicit: str | Path | None) -> Iterator[Path]:
    yield from (p for p in search_paths() if p.is_file())
    from_env = os.environ.get(CONFIG_PATH_ENV)
    if from_env:
        yield _must_exist(from_env, f"${CONFIG_PATH_ENV} file")
    if explicit is not None:
        yield _must_exist(explicit, "Config file")


def _parse(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict with *override* layered over *base*, table by table."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _env_layer() -> dict[str, Any]:
    burp_url = os.environ.get(BURP_URL_ENV)
    return {"backend": {"base_url": burp_url}} if burp_url else {}


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> BurpMcpConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file path (highest file priority).
        overrides: Dict of overrides merged last (highest overall priority).

    Raises:
        ConfigError: On invalid TOML, missing files, or validation failure.
    """
    layers = [_parse(p) for p in _config_files(path)]
    layers += [_env_layer(), overrides or {}]
    merged = functools.reduce(_deep_merge, layers, {})
    try:
        return BurpMcpConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e
