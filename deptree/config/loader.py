"""Helpers for loading traversal options from TOML/JSON sources.

This module provides a single entry point `load_options_config`
that accepts various configuration sources:

* None -> empty mapping
* dict -> returned as a copy
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

The result is a plain mapping; callers merge it with their own values
before validating it as ``DependencyTreeOptions``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from deptree.parsers.base import ConfigurationError

logger = logging.getLogger("deptree.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]

# Section holding the options when the file is shared with other tools.
TOOL_SECTION = "deptree"


def load_options_config(source: ConfigSource) -> Dict[str, Any]:
    """Load a traversal options mapping from various sources.

    Args:
        source: One of:
            * None: returns an empty mapping
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        Dict[str, Any]: Options mapping. When the document has a top-level
        ``deptree`` table, only that table is returned.

    Raises:
        ConfigurationError: If the source cannot be read or parsed.
    """
    if source is None:
        logger.debug("No config source provided; using defaults")
        return {}

    if isinstance(source, dict):
        logger.debug("Loading options from provided dict")
        return dict(source)

    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    path = Path(source)
    fmt: Optional[str] = None

    if path.is_file():
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        logger.info("Loading configuration from file: %s", path)
    else:
        text = str(source)
        logger.info("Loading configuration from inline string")

    if fmt is None:
        # Guess from content
        fmt = "json" if text.lstrip().startswith(("{", "[")) else "toml"

    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {fmt.upper()} configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("Top-level configuration must be a mapping/dict")

    section = data.get(TOOL_SECTION)
    if isinstance(section, dict):
        return section
    return data


__all__ = ["load_options_config", "ConfigSource", "TOOL_SECTION"]
