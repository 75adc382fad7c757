"""Config file discovery and merging."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import click

from neocities_cli.exceptions import ConfigError
from neocities_cli.models import Config, Credential, KeyCredential, PasswordCredential

logger = logging.getLogger(__name__)

APP_NAME = "neo"
GLOBAL_CONFIG_NAME = "conf.toml"
PROJECT_CONFIG_NAME = "Neo.toml"


def global_config_path() -> Path:
    """Return the path of the per-user config file."""
    return Path(click.get_app_dir(APP_NAME)) / GLOBAL_CONFIG_NAME


def find_project_config(start: Path) -> Path | None:
    """Walk upward from start looking for a project config file.

    Returns the first match, or None once the filesystem root is passed.
    """
    for directory in (start, *start.parents):
        candidate = directory / PROJECT_CONFIG_NAME
        logger.debug(f"Checking {candidate}")
        if candidate.is_file():
            logger.info(f"Found config file at {candidate}")
            return candidate
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e


def _parse_credential(site: str, entry: Any) -> Credential:
    """Turn one [sites.<name>] table into a credential.

    The variant is chosen by which of `key` or `password` is present.
    """
    if not isinstance(entry, dict):
        raise ConfigError(f"Site '{site}' must be a table with 'key' or 'password'")

    has_key = "key" in entry
    has_password = "password" in entry
    if has_key == has_password:
        raise ConfigError(f"Site '{site}' must set exactly one of 'key' or 'password'")

    field_name = "key" if has_key else "password"
    value = entry[field_name]
    if not isinstance(value, str):
        raise ConfigError(f"Site '{site}' {field_name} must be a string")

    if has_key:
        return KeyCredential(key=value)
    return PasswordCredential(user=site, password=value)


def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
    """Overlay source onto target.

    Scalars are replaced; the sites table is replaced per site name.
    """
    for key, value in source.items():
        if key == "sites":
            if not isinstance(value, dict):
                raise ConfigError("'sites' must be a table")
            target.setdefault("sites", {}).update(value)
        else:
            target[key] = value


def _to_config(raw: dict[str, Any], site_root: Path | None) -> Config:
    default_site = raw.get("default_site")
    if default_site is not None and not isinstance(default_site, str):
        raise ConfigError("'default_site' must be a string")

    sites = {
        name: _parse_credential(name, entry)
        for name, entry in raw.get("sites", {}).items()
    }
    return Config(site_root=site_root, default_site=default_site, sites=sites)


def load_config(cwd: Path | None = None, global_path: Path | None = None) -> Config:
    """Load and merge the global and project config files.

    Args:
        cwd: Directory to start the project config search from
            (defaults to the current working directory)
        global_path: Override for the per-user config file location

    Returns:
        The merged Config

    Raises:
        ConfigError: If a config file exists but cannot be used
    """
    global_path = global_path or global_config_path()
    try:
        start = (cwd or Path.cwd()).resolve()
        has_global = global_path.is_file()
        project_path = find_project_config(start)
    except OSError as e:
        raise ConfigError(f"Failed to locate config files: {e}") from e

    raw: dict[str, Any] = {}
    if has_global:
        logger.info(f"Loading global config from {global_path}")
        _merge(raw, _read_toml(global_path))

    site_root: Path | None = None
    if project_path is not None:
        _merge(raw, _read_toml(project_path))
        site_root = project_path.parent

    if "site_root" in raw:
        logger.debug("Ignoring site_root from config file; it is set by discovery")

    return _to_config(raw, site_root)


def build_config(cwd: Path | None = None, global_path: Path | None = None) -> Config:
    """Load the config, falling back to an empty one on any error.

    A broken config file is logged as a warning and treated as absent.
    """
    try:
        return load_config(cwd, global_path)
    except ConfigError as e:
        logger.warning(f"Ignoring config: {e}")
        return Config()
