"""Docker command line construction.

Commands are plain strings handed to the host shell. Values are not
escaped; only the package URL is wrapped in single quotes.
"""

from __future__ import annotations

from typing import List, Optional

from onload_image.lib.catalog import FlavorEntry, VersionEntry
from onload_image.lib.options import BuildOptions

DOCKER = "docker"
BUILD_CONTEXT = "."


def _build_arg(value: str) -> List[str]:
    return ["--build-arg", value]


def dockerfile_path(flavor: FlavorEntry) -> str:
    """Path of the Dockerfile for a flavor, relative to the build context."""
    return f"{flavor.flavor}/Dockerfile"


def build_command(
    version: VersionEntry,
    flavor: FlavorEntry,
    options: BuildOptions,
    tag: Optional[str] = None
) -> str:
    """Build the docker build command line.

    Args:
        version: Resolved Onload version
        flavor: Resolved image flavor
        options: Parsed command line options
        tag: Resolved image tag, if any

    Returns:
        Command line string

    Example:
        >>> build_command(version, flavor, BuildOptions(), "onload:8.0.2.51-bionic-nozf")
        "docker build --build-arg ONLOAD_VERSION=8.0.2.51 ... -t onload:8.0.2.51-bionic-nozf -f bionic/Dockerfile ."
    """
    cmd = [DOCKER, "build"]
    cmd.extend(_build_arg(f"ONLOAD_VERSION={version.version}"))
    cmd.extend(_build_arg(f"ONLOAD_MD5SUM={version.md5sum}"))

    # An empty URL tells the Dockerfile to build from the legacy source
    package_url = options.url if options.url is not None else version.package_url
    cmd.extend(_build_arg(f"ONLOAD_PACKAGE_URL='{package_url or ''}'"))

    if options.zf:
        cmd.extend(_build_arg("ONLOAD_WITHZF=1"))
    for arg in options.build_args:
        cmd.extend(_build_arg(arg))

    if options.quiet:
        cmd.append("-q")
    if not options.use_cache:
        cmd.append("--no-cache")
    if tag is not None:
        cmd.extend(["-t", tag])

    cmd.extend(["-f", dockerfile_path(flavor), BUILD_CONTEXT])
    return " ".join(cmd)


def build_push_command(tag: str) -> str:
    """Build the docker push command line for a tag."""
    return " ".join([DOCKER, "push", tag])
