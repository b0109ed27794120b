#!/usr/bin/env python3
"""
Run script for the School Inventory system
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before the app reads them
load_dotenv()

from school_inventory import create_app  # noqa: E402
from school_inventory.build import build_database, run_overdue_sweep  # noqa: E402
from school_inventory.logger import get_logger  # noqa: E402

logger = get_logger("school_inventory.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='School Inventory Management')
    parser.add_argument('--build-only', action='store_true',
                        help='Create tables and seed the default admin, then exit')
    parser.add_argument('--sweep-overdue', action='store_true',
                        help='Mark lapsed loans as overdue once and exit (for cron)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app()

    if args.sweep_overdue:
        run_overdue_sweep(app)
        sys.exit(0)

    build_database(app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=False)
