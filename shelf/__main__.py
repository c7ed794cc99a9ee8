# shelf/__main__.py
import argparse
import logging
import sys

import uvicorn

from shelf import config
from shelf.main import create_app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shelf",
        description="Read the EPUBs of a Calibre library in the browser.",
    )
    parser.add_argument(
        "library",
        nargs="?",
        default=config.CALIBRE_LIBRARY or None,
        help="Calibre library directory (the one holding metadata.db). "
        "Defaults to $CALIBRE_LIBRARY.",
    )
    parser.add_argument("--host", default=config.SHELF_HOST, help="Bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=config.SHELF_PORT, help="Port (default: %(default)s)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.library:
        print("Usage: shelf <calibre library>", file=sys.stderr)
        return 2

    try:
        app = create_app(args.library)
    except RuntimeError as e:
        print(f"Error opening library: {e}", file=sys.stderr)
        return 1

    uvicorn.run(app, host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
