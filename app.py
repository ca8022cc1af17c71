#!/usr/bin/env python3
"""
Run script for the Asset Registry
"""

import argparse
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from asset_registry import create_app  # noqa: E402
from asset_registry.build import build_database  # noqa: E402
from asset_registry.logger import get_logger  # noqa: E402

logger = get_logger("asset_registry.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='Asset Registry')
    parser.add_argument('--build-only', action='store_true',
                        help='Build database tables and the role authority, do not start the server')
    parser.add_argument('--host', default=os.environ.get('FLASK_HOST', '127.0.0.1'),
                        help='Server host (default: FLASK_HOST or 127.0.0.1)')
    parser.add_argument('--port', type=int, default=int(os.environ.get('FLASK_PORT', '5000')),
                        help='Server port (default: FLASK_PORT or 5000)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app()
    build_database(app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {args.host}:{args.port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=args.host, port=args.port, use_reloader=False)
