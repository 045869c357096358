#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for bbcode2md.

Options can be stored in ``.bbcode2md.toml``, ``.bbcode2md.yaml``/``.yml``,
``.bbcode2md.json`` or in the ``[tool.bbcode2md]`` table of ``pyproject.toml``::

    [tool.bbcode2md]
    disabled-cleaners = ["remove_color"]

    [tool.bbcode2md.language-aliases]
    py = "python"

"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from bbcode2md.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from bbcode2md.exceptions import ConfigError
from bbcode2md.options import BBCodeConverterOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.bbcode2md]`` section from a pyproject.toml file.

    Returns an empty dict when the section is missing.

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading pyproject.toml {pyproject_path}: {e}", str(pyproject_path), e) from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` (default: the current directory) to the
    filesystem root. In each directory the dedicated config files are checked
    first, then ``pyproject.toml`` if it has a ``[tool.bbcode2md]`` table.

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
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                logger.debug(f"Skipping unreadable {pyproject_path}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    The format is chosen from the file name and extension.

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
    ConfigError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        with open(config_path, "rb") as f:
            if ext == ".toml":
                config = tomllib.load(f)
            elif ext in (".yaml", ".yml"):
                config = yaml.safe_load(f)
            elif ext == ".json":
                config = json.load(f)
            else:
                raise ConfigError(
                    f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
                )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a table/object at root level, got {type(config).__name__}",
            str(config_path),
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def load_options(config_path: Path | str | None = None) -> BBCodeConverterOptions:
    """Build converter options from a configuration file.

    Parameters
    ----------
    config_path : Path or str, optional
        Explicit configuration file. When omitted, :func:`find_config_in_parents`
        is used and defaults are returned if nothing is found.

    Returns
    -------
    BBCodeConverterOptions
        Options described by the configuration file

    Raises
    ------
    ConfigError
        If the file cannot be loaded
    ValidationError
        If the file contains unknown or invalid options

    """
    if config_path is None:
        config_path = find_config_in_parents()
        if config_path is None:
            return BBCodeConverterOptions()

    return BBCodeConverterOptions.from_dict(load_config_file(config_path))
