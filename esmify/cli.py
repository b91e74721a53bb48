"""
Command-line entry point for esmify.
"""

import os
import sys
import argparse
from typing import List, Optional

from .config import setup_logging, get_config
from .config_loader import RunConfig, load_formatter_options
from .exceptions import ConfigurationError, InvalidProjectError
from .main import ImportRewriter

EXIT_OK = 0
EXIT_FILE_FAILURES = 1
EXIT_STARTUP_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esmify",
        usage="esmify <folder> [--jsx] [-p PRETTIER_CONFIG] [-w WORKERS]",
        description="Append explicit extensions to relative TypeScript imports for strict ESM"
    )
    parser.add_argument("folders", nargs="*", metavar="folder",
                        help="Folder to rewrite, relative to the working directory")
    parser.add_argument("--jsx", action="store_true",
                        help="Use .jsx instead of .js for specifiers that resolve to .tsx files")
    parser.add_argument("-p", "--prettier", metavar="PATH",
                        help="Prettier options file (JSON) used to format rewritten files")
    parser.add_argument("-w", "--workers", type=int, metavar="N",
                        help="Worker processes (default: CPU count - 1)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run esmify and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.folders) != 1:
        parser.print_usage()
        return EXIT_OK

    config = get_config()
    setup_logging(config['LOG_LEVEL'], config['LOG_FILE'])

    try:
        prettier_options = None
        if args.prettier:
            prettier_options = load_formatter_options(os.path.join(os.getcwd(), args.prettier))

        run_config = RunConfig(jsx=args.jsx, prettier_options=prettier_options, workers=args.workers)
        result = ImportRewriter(run_config).rewrite(os.path.join(os.getcwd(), args.folders[0]))
    except (ConfigurationError, InvalidProjectError) as e:
        print(f"esmify: {e}", file=sys.stderr)
        return EXIT_STARTUP_ERROR

    print(f"Rewrote {len(result.rewritten)} of {len(result.results)} files "
          f"({len(result.failed)} failed)")
    return EXIT_OK if result.ok else EXIT_FILE_FAILURES


if __name__ == "__main__":
    sys.exit(main())
