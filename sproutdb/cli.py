#!/usr/bin/env python3
"""
Command-line entry point: loads optional seed data and serves the HTTP transport.
"""

import argparse
import sys

import dotenv
import uvicorn

from .api.main import create_app, default_database
from .core.config import get_host, get_port, get_seed_path, validate_config
from .core.errors import SeedError, ValidationError
from .core.seed import load_seed_path
from .util.logging import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sproutdb",
        description="Start a test database server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Serve an empty database on port 3000
  %(prog)s -p 8080 -s seed.json     # Seed from one file: {"users": [...], ...}
  %(prog)s --seed ./fixtures        # Seed from a folder of <table>.json files

Environment variables (also read from a .env file):
- SPROUTDB_HOST, SPROUTDB_PORT, SPROUTDB_SEED
- SPROUTDB_DEFAULT_TABLES=users (comma separated)
- SPROUTDB_LOG_LEVEL=INFO
        """
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to run on (default: SPROUTDB_PORT or 3000)"
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: SPROUTDB_HOST or 127.0.0.1)"
    )

    parser.add_argument(
        "--seed", "-s",
        default=None,
        help="Path to seed data JSON file or folder"
    )

    return parser


def main(argv=None) -> int:
    dotenv.load_dotenv()
    args = build_parser().parse_args(argv)

    issues = validate_config(check_port=args.port is None)
    if args.port is not None and not 0 < args.port < 65536:
        issues.append(f"--port out of range: {args.port}")
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}", file=sys.stderr)
        return 1

    db = default_database()
    seed_path = args.seed or get_seed_path()
    if seed_path:
        try:
            db.load_seed(load_seed_path(seed_path))
        except (SeedError, ValidationError) as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    host = args.host or get_host()
    port = args.port if args.port is not None else get_port()
    logger.info(f"Server running on http://{host}:{port}")
    uvicorn.run(create_app(db), host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
