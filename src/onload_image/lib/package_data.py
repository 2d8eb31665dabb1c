"""Package data access utilities.

Provides functions to access the built-in catalog file.
"""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

CATALOG_FILENAME = "catalog.yaml"


def get_data_dir() -> Path:
    """Get path to the package data directory.

    This uses importlib.resources to locate the data/ directory within the
    installed package, so it works both in development and when installed
    via pip/uv.

    Returns:
        Path to the data/ directory
    """
    data_dir = files('onload_image') / 'data'
    if hasattr(data_dir, '__fspath__'):
        return Path(data_dir)
    return Path(str(data_dir))


def get_builtin_catalog_file() -> Path:
    """Get path to the built-in catalog file.

    Returns:
        Path to catalog.yaml

    Raises:
        FileNotFoundError: If the catalog file is missing from the package
    """
    catalog_file = get_data_dir() / CATALOG_FILENAME
    if not catalog_file.exists():
        raise FileNotFoundError(
            f"Built-in catalog '{CATALOG_FILENAME}' not found in {catalog_file.parent}"
        )
    return catalog_file
