"""Resolve requested version, flavor and tag against the catalog."""

from __future__ import annotations

import logging
from typing import Optional

from onload_image.lib.catalog import LATEST, Catalog, FlavorEntry, VersionEntry
from onload_image.lib.errors import MissingFlavorError, UnknownFlavorError, UnknownVersionError
from onload_image.lib.options import BuildOptions, check_tag_spec

logger = logging.getLogger(__name__)

NOZF_SUFFIX = "-nozf"


def requested_version(options: BuildOptions) -> str:
    """Version name asked for on the command line, 'latest' by default."""
    return options.version if options.version is not None else LATEST


def resolve_version(options: BuildOptions, catalog: Catalog) -> VersionEntry:
    """Look up the requested version.

    Raises:
        UnknownVersionError: If the version is not in the catalog
    """
    name = requested_version(options)
    entry = catalog.get_version(name)
    if entry is None:
        raise UnknownVersionError(f"unknown onload version '{name}'.  List with --versions")
    logger.debug(f"Resolved onload version '{name}' to {entry.version}")
    return entry


def resolve_flavor(options: BuildOptions, catalog: Catalog) -> FlavorEntry:
    """Look up the requested flavor.

    Raises:
        MissingFlavorError: If no flavor was given
        UnknownFlavorError: If the flavor is not in the catalog
    """
    if options.flavor is None:
        raise MissingFlavorError(
            "a valid flavor must be specified with --flavor (-f).  List with --flavors."
        )
    entry = catalog.get_flavor(options.flavor)
    if entry is None:
        raise UnknownFlavorError(f"unknown flavor '{options.flavor}'.  List with --flavors.")
    return entry


def make_autotag(prefix: str, version: str, flavor: str, zf: bool) -> str:
    """Compose an autotag name.

    Example:
        >>> make_autotag("rel:", "8.0.2.51", "bionic", False)
        'rel:8.0.2.51-bionic-nozf'
    """
    suffix = "" if zf else NOZF_SUFFIX
    return f"{prefix}{version}-{flavor}{suffix}"


def resolve_tag(options: BuildOptions, catalog: Catalog) -> Optional[str]:
    """Work out the image tag.

    An explicit --tag is returned verbatim. An autotag uses the version
    name as requested, so 'latest' stays 'latest' in the tag.

    Returns:
        Tag string, or None when no tag was requested

    Raises:
        ConflictingTagSpecError: If both --tag and --autotag were given
        UnknownVersionError, MissingFlavorError, UnknownFlavorError:
            If an autotag cannot be resolved
    """
    check_tag_spec(options)

    if options.tag is not None:
        return options.tag
    if options.autotag is None:
        return None

    resolve_version(options, catalog)
    flavor = resolve_flavor(options, catalog)
    return make_autotag(options.autotag, requested_version(options), flavor.flavor, options.zf)
