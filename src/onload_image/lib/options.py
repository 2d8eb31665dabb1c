"""Command line option parsing.

Turns argv into a frozen BuildOptions record. Flags are processed in the
order given, so the last action flag wins.
"""

from __future__ import annotations

import argparse
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from onload_image.lib.errors import ConflictingTagSpecError, PushPreconditionError, UsageError

DESCRIPTION = "Build helper for OpenOnload Docker images"

EPILOG = """\
autotag names have the form <prefix><version>-<flavor>[-nozf].
<prefix> is optional, but without a <prefix> ending in a colon the autotag
is an image name rather than an image-name:tag.
"""


class Action(Enum):
    """What a single invocation does."""
    VERSIONS = "versions"
    FLAVORS = "flavors"
    GETTAG = "gettag"
    BUILD = "build"
    HELP = "help"


class BuildOptions(BaseModel):
    """Options collected from the command line.

    ``autotag`` is tri-state: None when no autotag was requested, an empty
    string when it was requested without a prefix, the prefix otherwise.
    """
    model_config = ConfigDict(frozen=True)

    action: Optional[Action] = None
    version: Optional[str] = None
    flavor: Optional[str] = None
    url: Optional[str] = None
    tag: Optional[str] = None
    autotag: Optional[str] = None
    build_args: Tuple[str, ...] = ()
    zf: bool = False
    quiet: bool = False
    use_cache: bool = True
    execute: bool = False
    push: bool = False
    verbosity: int = 0
    catalog_path: Optional[Path] = None


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


class SetOnceAction(argparse.Action):
    """Store a value, rejecting a second occurrence of the flag."""

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            raise argparse.ArgumentError(self, "can only be specified once")
        setattr(namespace, self.dest, values)


class GetTagAction(argparse.Action):
    """Select the gettag action; seed the autotag prefix if not set yet."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.action = Action.GETTAG
        if namespace.autotag is None:
            namespace.autotag = values if values is not None else ''


class ExecuteAction(argparse.Action):
    """Select the build action and request its execution."""

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.action = Action.BUILD
        setattr(namespace, self.dest, True)


class ZfAction(argparse.Action):
    """Enable zf unless the optional value is '0' or 'false'."""

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, parse_truthy(values))


def parse_truthy(value: Optional[str]) -> bool:
    """Interpret an optional flag value.

    Example:
        >>> parse_truthy(None), parse_truthy("FALSE"), parse_truthy("no")
        (True, False, True)
    """
    if value is None:
        return True
    return value.lower() not in ('0', 'false')


def build_parser() -> OptionParser:
    """Build the argument parser.

    Returns:
        Parser whose namespace maps onto BuildOptions
    """
    parser = OptionParser(
        prog="onload-image",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.set_defaults(action=None)

    actions = parser.add_argument_group('Actions')
    actions.add_argument(
        '--versions',
        dest='action',
        action='store_const',
        const=Action.VERSIONS,
        help='show list of onload version names (use with -v to show all fields)'
    )
    actions.add_argument(
        '--flavors',
        dest='action',
        action='store_const',
        const=Action.FLAVORS,
        help='show list of image flavors'
    )
    actions.add_argument(
        '--gettag',
        action=GetTagAction,
        nargs='?',
        default=argparse.SUPPRESS,
        metavar='PREFIX',
        help='show the autotag name of --autotag PREFIX'
    )
    actions.add_argument(
        '--build',
        dest='action',
        action='store_const',
        const=Action.BUILD,
        help='show docker build command'
    )
    actions.add_argument(
        '--execute', '-x',
        dest='execute',
        action=ExecuteAction,
        nargs=0,
        default=False,
        help='also execute the docker build command'
    )
    actions.add_argument(
        '--help', '-h',
        dest='action',
        action='store_const',
        const=Action.HELP,
        help='show this help'
    )

    options = parser.add_argument_group('Options')
    options.add_argument(
        '--flavor', '-f',
        action=SetOnceAction,
        metavar='FLAVOR',
        help='build FLAVOR (required for --build or --execute)'
    )
    options.add_argument(
        '--onload', '-o',
        dest='version',
        action=SetOnceAction,
        metavar='VERSION',
        help="onload VERSION to build (default is 'latest')"
    )
    options.add_argument(
        '--url', '-u',
        metavar='URL',
        help='override URL for "packaged" versions'
    )
    options.add_argument(
        '--tag', '-t',
        metavar='TAG',
        help='tag image as TAG'
    )
    options.add_argument(
        '--autotag', '-a',
        nargs='?',
        const='',
        metavar='PREFIX',
        help='tag image as PREFIX<version>-<flavor>[-nozf]'
    )
    options.add_argument(
        '--zf',
        action=ZfAction,
        nargs='?',
        default=False,
        metavar='TRUTHY',
        help="build with TCPDirect (zf), or not if TRUTHY is '0' or 'false'"
    )
    options.add_argument(
        '--arg',
        dest='build_args',
        action='append',
        default=[],
        metavar='ARG',
        help="pass '--build-arg ARG' to docker build (repeatable)"
    )
    options.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='build quietly (pass -q to docker build)'
    )
    options.add_argument(
        '--no-cache',
        dest='use_cache',
        action='store_false',
        help='pass --no-cache to docker build'
    )
    options.add_argument(
        '--push', '-p',
        action='store_true',
        help='push the built image (requires --execute and a tag)'
    )
    options.add_argument(
        '--verbose', '-v',
        dest='verbosity',
        action='count',
        default=0,
        help='verbose output'
    )
    options.add_argument(
        '--catalog',
        dest='catalog_path',
        type=Path,
        metavar='PATH',
        help='read versions and flavors from PATH instead of the built-in catalog'
    )

    return parser


def check_tag_spec(options: BuildOptions) -> None:
    """Reject an explicit tag combined with an autotag."""
    if options.tag is not None and options.autotag is not None:
        raise ConflictingTagSpecError(
            "cannot specify both --tag and --autotag (or --gettag with argument)"
        )


def parse_options(
    argv: Optional[Sequence[str]] = None,
    parser: Optional[OptionParser] = None
) -> BuildOptions:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        parser: Parser from build_parser(); a new one is built when None

    Returns:
        Validated options

    Raises:
        UsageError: For unknown, duplicated or malformed flags
        ConflictingTagSpecError: If --tag and --autotag are both given
        PushPreconditionError: If --push is given without --execute
    """
    parser = parser or build_parser()
    args = parser.parse_args(argv)

    options = BuildOptions(
        action=args.action,
        version=args.version,
        flavor=args.flavor,
        url=args.url,
        tag=args.tag,
        autotag=args.autotag,
        build_args=tuple(args.build_args),
        zf=args.zf,
        quiet=args.quiet,
        use_cache=args.use_cache,
        execute=args.execute,
        push=args.push,
        verbosity=args.verbosity,
        catalog_path=args.catalog_path,
    )

    check_tag_spec(options)
    if options.push and not options.execute:
        raise PushPreconditionError("--push requires --execute")

    return options
