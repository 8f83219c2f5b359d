#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/config.py
"""Configuration file discovery, loading and merging.

Configuration lives in a YAML file in the working directory. Values from the
file sit between the built-in defaults and explicit overrides (normally the
command-line flags):

    defaults < preset < config file < overrides

Example ``llm-docs-builder.yml``::

    docs: ./docs
    base_url: https://example.com/docs
    title: My Project
    suffix: ""
    excludes:
      - "**/private/**"
    remove_code_examples: false
    generate_toc: true

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from llm_docs_builder.constants import CONFIG_FILENAMES
from llm_docs_builder.exceptions import ConfigurationError
from llm_docs_builder.options import BuilderOptions

logger = logging.getLogger(__name__)

# Keys that only come from programmatic overrides, never from a config file
OVERRIDE_ONLY_KEYS = frozenset(["content", "source_url"])


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the first configuration file found in ``start_dir``.

    Candidates are checked in order: ``llm-docs-builder.yml``,
    ``llm-docs-builder.yaml``, ``.llm-docs-builder.yml``.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to search, defaults to the current working directory

    Returns
    -------
    Path or None
        Path of the configuration file, or None if there is none

    """
    directory = start_dir if start_dir is not None else Path.cwd()
    for filename in CONFIG_FILENAMES:
        config_path = directory / filename
        if config_path.is_file():
            logger.debug("Found configuration file %s", config_path)
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a YAML configuration file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping; an empty file yields ``{}``

    Raises
    ------
    ConfigurationError
        If the file is missing, is not valid YAML or does not contain a
        mapping at the root

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Failed to load config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"YAML config file must contain a mapping at root level, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def load_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Load the explicit configuration file, or the discovered one.

    Returns ``{}`` when no path is given and no configuration file exists.
    """
    if config_path is not None:
        return load_config_file(config_path)

    discovered = discover_config_file()
    if discovered is None:
        return {}
    return load_config_file(discovered)


def merge_with_options(
    config: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
    base: Mapping[str, Any] | None = None,
) -> BuilderOptions:
    """Combine configuration layers into :class:`BuilderOptions`.

    Parameters
    ----------
    config : mapping
        Values loaded from the configuration file
    overrides : mapping, optional
        Explicit values. A key that is present wins even when its value is
        falsy (``False``, ``""``, ``[]``); a ``None`` value counts as unset.
    base : mapping, optional
        Values applied over the defaults before the configuration file,
        e.g. a compression preset

    Returns
    -------
    BuilderOptions
        Merged options; unknown keys are ignored

    """
    merged: Dict[str, Any] = {}
    for layer_name, layer in (("base", base), ("config", config), ("overrides", overrides)):
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            if key in OVERRIDE_ONLY_KEYS and layer_name != "overrides":
                logger.debug("Ignoring %s from %s; it can only be set programmatically", key, layer_name)
                continue
            merged[key] = value

    return BuilderOptions.from_mapping(merged)
