from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

from onload_image.lib.catalog import load_catalog
from onload_image.lib.dispatcher import dispatch
from onload_image.lib.errors import ImageToolError
from onload_image.lib.options import Action, build_parser, parse_options


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging.

    Args:
        verbose: Enable debug logging
        quiet: Suppress info logging
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()

    try:
        options = parse_options(argv, parser)
    except ImageToolError as e:
        setup_logging()
        logger.error(str(e))
        return e.exit_code

    verbose = options.verbosity > 0
    setup_logging(verbose, options.quiet)

    try:
        catalog = None
        if options.action not in (None, Action.HELP):
            catalog = load_catalog(options.catalog_path)
        return dispatch(options, catalog, usage=parser.format_help())
    except ImageToolError as e:
        logger.error(str(e))
        if verbose:
            logger.exception("Error details:")
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
