#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the prosediff CLI.

This module handles automatic discovery of configuration files, loading
configs from JSON, TOML or YAML, and resolving the final settings from
command-line arguments, environment variables and configuration.
"""

import argparse
import json
import logging
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from prosediff.colorize import Palette
from prosediff.constants import DEFAULT_COLOR_MODE, DEFAULT_COMMAND, DEFAULT_PAGER, PALETTE_KEYS, RGB
from prosediff.exceptions import ValidationError

logger = logging.getLogger(__name__)

DOTFILE_NAMES = [".prosediff.toml", ".prosediff.yaml", ".prosediff.yml", ".prosediff.json"]

ENV_CONFIG = "PROSEDIFF_CONFIG"
ENV_COMMAND = "PROSEDIFF_COMMAND"
ENV_PAGER = "PROSEDIFF_PAGER"
ENV_COLORS = "PROSEDIFF_COLORS"

_HEX_COLOR_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def _load_pyproject_prosediff_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load [tool.prosediff] section from pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.prosediff] section, or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)

        if "tool" in data and "prosediff" in data["tool"]:
            config = data["tool"]["prosediff"]
            if not isinstance(config, dict):
                raise argparse.ArgumentTypeError(
                    f"[tool.prosediff] section in {pyproject_path} must be a table, got {type(config).__name__}"
                )
            return config

        return {}

    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for, in priority order, ``.prosediff.toml``,
    ``.prosediff.yaml``, ``.prosediff.yml``, ``.prosediff.json`` and a
    ``pyproject.toml`` with a ``[tool.prosediff]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in DOTFILE_NAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_prosediff_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.warning("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break

        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover configuration file in standard locations.

    Searches the directories from ``start_dir`` (default: cwd) up to the
    filesystem root, then the dotfiles in the user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in DOTFILE_NAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from JSON, TOML, YAML, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".prosediff.toml")
    >>> print(config.get("pager"))
    less -R

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_prosediff_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)
    else:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (PROSEDIFF_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        logger.debug("Using config file %s", discovered_path)
        return load_config_file(discovered_path)

    return {}


def parse_rgb(name: str, value: Any) -> RGB:
    """Parse a palette colour given as ``[r, g, b]`` or ``"#rrggbb"``.

    Raises
    ------
    ValidationError
        If the value is neither

    """
    if isinstance(value, str):
        match = _HEX_COLOR_RE.match(value.strip())
        if match:
            r, g, b = (int(component, 16) for component in match.groups())
            return r, g, b
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            r, g, b = value
            return r, g, b

    raise ValidationError(
        f"Palette color '{name}' must be [r, g, b] or '#rrggbb', got {value!r}",
        parameter_name=name,
        parameter_value=value,
    )


@dataclass
class Settings:
    """Resolved run-time settings of the CLI."""

    command: str = DEFAULT_COMMAND
    pager: str = DEFAULT_PAGER
    color_mode: str = DEFAULT_COLOR_MODE
    log_level: Optional[str] = None
    palette_overrides: Dict[str, RGB] = field(default_factory=dict)

    def build_palette(self) -> Palette:
        """Return the palette described by these settings."""
        return Palette.from_rgb(self.color_mode, self.palette_overrides)  # type: ignore[arg-type]


def resolve_settings(
    parsed_args: argparse.Namespace, config: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Combine arguments, environment and configuration into settings.

    Command-line arguments win over environment variables, which win over
    the configuration file, which wins over built-in defaults.

    Raises
    ------
    ValidationError
        If a configured value has the wrong type or an unknown key is used
        in the palette table

    """
    if environ is None:
        environ = os.environ

    def pick(arg_name: str, env_name: str, config_key: str, default: str) -> str:
        value = getattr(parsed_args, arg_name, None)
        if value is None:
            value = environ.get(env_name)
        if value is None:
            value = config.get(config_key, default)
        if not isinstance(value, str):
            raise ValidationError(
                f"Setting '{config_key}' must be a string, got {type(value).__name__}",
                parameter_name=config_key,
                parameter_value=value,
            )
        return value

    settings = Settings(
        command=pick("command", ENV_COMMAND, "command", DEFAULT_COMMAND),
        pager=pick("pager", ENV_PAGER, "pager", DEFAULT_PAGER),
        color_mode=pick("colors", ENV_COLORS, "colors", DEFAULT_COLOR_MODE),
        log_level=config.get("log_level"),
    )
    if getattr(parsed_args, "no_pager", False):
        settings.pager = ""

    palette = config.get("palette", {})
    if not isinstance(palette, dict):
        raise ValidationError("Setting 'palette' must be a table", parameter_name="palette", parameter_value=palette)
    for name, value in palette.items():
        if name not in PALETTE_KEYS:
            raise ValidationError(
                f"Unknown palette color '{name}' (expected one of: {', '.join(PALETTE_KEYS)})",
                parameter_name="palette",
                parameter_value=name,
            )
        settings.palette_overrides[name] = parse_rgb(name, value)

    return settings
