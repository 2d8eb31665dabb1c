"""Catalog of known Onload versions and image flavors.

Parses and validates catalog.yaml. The catalog is read once at start-up
and never modified afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from onload_image.lib.errors import CatalogError
from onload_image.lib.package_data import get_builtin_catalog_file

LATEST = "latest"


class VersionEntry(BaseModel):
    """One Onload release."""
    model_config = ConfigDict(frozen=True)

    version: str
    md5sum: str
    driver_id: Optional[str] = None
    package_url: Optional[str] = None

    @field_validator('version', 'md5sum', 'driver_id', mode='before')
    @classmethod
    def to_string(cls, v: Any) -> Any:
        """Convert scalars to string (handles YAML parsing numbers)."""
        if v is None:
            return v
        return str(v)


class FlavorEntry(BaseModel):
    """One image flavor, i.e. one <flavor>/Dockerfile."""
    model_config = ConfigDict(frozen=True)

    flavor: str
    os: str

    @field_validator('flavor', mode='before')
    @classmethod
    def flavor_to_string(cls, v: Any) -> str:
        return str(v)


class Catalog(BaseModel):
    """Versions and flavors, plus the release the 'latest' alias points at."""
    model_config = ConfigDict(frozen=True)

    latest: str
    versions: List[VersionEntry]
    flavors: List[FlavorEntry]

    @field_validator('latest', mode='before')
    @classmethod
    def latest_to_string(cls, v: Any) -> str:
        return str(v)

    @model_validator(mode='after')
    def check_names(self) -> 'Catalog':
        """Reject duplicate names and a dangling 'latest' alias."""
        version_names = [v.version for v in self.versions]
        if len(set(version_names)) != len(version_names):
            raise ValueError("duplicate version names in catalog")
        if LATEST in version_names:
            raise ValueError(f"'{LATEST}' is reserved and cannot be a version name")
        if self.latest not in version_names:
            raise ValueError(
                f"latest version '{self.latest}' is not one of {version_names}"
            )

        flavor_names = [f.flavor for f in self.flavors]
        if len(set(flavor_names)) != len(flavor_names):
            raise ValueError("duplicate flavor names in catalog")
        return self

    def get_version(self, name: str) -> Optional[VersionEntry]:
        """Look up a version by name, following the 'latest' alias.

        Args:
            name: Version name or 'latest'

        Returns:
            Matching entry, or None if unknown
        """
        if name == LATEST:
            name = self.latest
        for entry in self.versions:
            if entry.version == name:
                return entry
        return None

    def get_flavor(self, name: str) -> Optional[FlavorEntry]:
        """Look up a flavor by name."""
        for entry in self.flavors:
            if entry.flavor == name:
                return entry
        return None

    def version_entries(self) -> Iterator[VersionEntry]:
        """Iterate over versions in catalog order, without the alias."""
        return iter(self.versions)


def load_catalog(catalog_path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load and validate a catalog file.

    Args:
        catalog_path: Path to a catalog YAML file; the built-in catalog is
            used when None

    Returns:
        Validated catalog

    Raises:
        CatalogError: If the file cannot be read, parsed or validated

    Example:
        >>> catalog = load_catalog()
        >>> catalog.get_version("latest").version
        '8.0.2.51'
    """
    try:
        path = Path(catalog_path) if catalog_path else get_builtin_catalog_file()
        with open(path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Failed to load catalog: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"Failed to load catalog: {path} is not a mapping")

    try:
        return Catalog(**raw)
    except ValidationError as e:
        # Keep the first problem on one line; -v shows the full report
        first = e.errors()[0]
        location = ".".join(str(part) for part in first['loc'])
        detail = f"{location}: {first['msg']}" if location else first['msg']
        raise CatalogError(f"Invalid catalog {path}: {detail}") from e
