"""
==========================
Helpers - Configurations
==========================

This module provides configurations for the package: where staging files are kept,
where logs go, how much the CSV writer buffers and how the database is reached.

Features:
- Loads configuration from a YAML file (`$BULKLOAD_CONFIG`, or `.config.yml` in the working directory).
- Falls back to built-in defaults for every key the file leaves out, or when there is no file.
- Exposes the resolved values as module constants.

Usage:
>>> import bulkload.helpers.config as cfg
>>> print(cfg.BUFFER_SIZE)  # Access the writer buffer size
>>> settings = cfg.load_config("other.yml")  # Load another file on demand

*Created: 2026-10-19*
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path(os.getenv("BULKLOAD_CONFIG", ".config.yml"))

DEFAULTS: Dict[str, Any] = {
    "paths": {
        # None -> system temp dir
        "tmp_dir": None,
        "log_folder": "logs",
    },
    "writer": {
        "buffer_size": 0,
        "eol": "\n",
    },
    "db": {
        "is_remote": True,
    },
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the YAML configuration and merge it over DEFAULTS.

    Args:
        path (str | Path, optional): YAML file to read. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        dict: The merged configuration. Plain defaults when the file does not exist.

    Raises:
        ValueError: If the file does not hold a YAML mapping.
    """
    p = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not p.exists():
        return copy.deepcopy(DEFAULTS)

    with open(p, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {p} must contain a mapping, got {type(loaded).__name__}")

    return deep_merge(copy.deepcopy(DEFAULTS), loaded)


# =========================
# CONFIG
# =========================

cfg = load_config()

# Paths
TMP_DIR = cfg["paths"]["tmp_dir"]
LOG_FOLDER = Path(cfg["paths"]["log_folder"])

# Writer Configs
BUFFER_SIZE = int(cfg["writer"]["buffer_size"] or 0)
EOL = str(cfg["writer"]["eol"])

# DB Configs
DB_IS_REMOTE = bool(cfg["db"]["is_remote"])
