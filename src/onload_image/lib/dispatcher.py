"""Action dispatch.

Runs the single action selected on the command line and writes its
result to ``out``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from onload_image.lib.catalog import Catalog
from onload_image.lib.command_builder import build_command, build_push_command
from onload_image.lib.errors import MissingTagSpecError, NoActionError, PushPreconditionError
from onload_image.lib.executor import run_command
from onload_image.lib.options import Action, BuildOptions
from onload_image.lib.resolver import resolve_flavor, resolve_tag, resolve_version

logger = logging.getLogger(__name__)


def list_versions(catalog: Catalog, verbose: bool, out: TextIO) -> None:
    """Print known versions, one per line, without the 'latest' alias."""
    for entry in catalog.version_entries():
        if verbose:
            print(
                f"{entry.version:<16} {entry.md5sum} "
                f"{entry.driver_id or ''} {entry.package_url or ''}",
                file=out
            )
        else:
            print(entry.version, file=out)


def list_flavors(catalog: Catalog, out: TextIO) -> None:
    """Print known flavors, one per line."""
    for entry in catalog.flavors:
        print(entry.flavor, file=out)


def get_tag(options: BuildOptions, catalog: Catalog, out: TextIO) -> None:
    """Print the resolved tag.

    Raises:
        MissingTagSpecError: If neither --tag nor --autotag was given
    """
    if options.tag is None and options.autotag is None:
        raise MissingTagSpecError(
            "must specify either --tag or --autotag (or --gettag with argument)"
        )
    print(resolve_tag(options, catalog), file=out)


def build(options: BuildOptions, catalog: Catalog, out: TextIO) -> None:
    """Print the docker build command, then optionally run it and push.

    Push only happens after a successful build.

    Raises:
        PushPreconditionError: If --push is given without --execute or a tag
        ExternalCommandError: If docker build or docker push fails
    """
    version = resolve_version(options, catalog)
    flavor = resolve_flavor(options, catalog)
    tag = resolve_tag(options, catalog)

    if options.push and not options.execute:
        raise PushPreconditionError("--push requires --execute")
    if options.push and tag is None:
        raise PushPreconditionError("--push requires --tag or --autotag")

    cmd = build_command(version, flavor, options, tag)
    print(cmd, file=out)
    if not options.execute:
        return

    # Let our line reach the terminal before docker starts writing to it
    out.flush()
    run_command(cmd, "docker build")

    if options.push:
        push_cmd = build_push_command(tag)
        print(push_cmd, file=out)
        out.flush()
        run_command(push_cmd, "docker push")


def dispatch(
    options: BuildOptions,
    catalog: Optional[Catalog],
    usage: str = "",
    out: Optional[TextIO] = None
) -> int:
    """Run the selected action.

    Args:
        options: Parsed command line options
        catalog: Loaded catalog (may be None for the help action)
        usage: Help text printed by the help action
        out: Stream for normal output (default: sys.stdout)

    Returns:
        Exit code (0 for success)

    Raises:
        NoActionError: If no action was selected
        ImageToolError: Any failure of the selected action
    """
    out = out or sys.stdout
    action = options.action
    logger.debug(f"Action: {action.value if action else None}")

    if action is None:
        raise NoActionError("no action specified. try --help")

    if action == Action.VERSIONS:
        list_versions(catalog, options.verbosity > 0, out)
    elif action == Action.FLAVORS:
        list_flavors(catalog, out)
    elif action == Action.GETTAG:
        get_tag(options, catalog, out)
    elif action == Action.BUILD:
        build(options, catalog, out)
    elif action == Action.HELP:
        print(usage, file=out, end="")
    return 0
