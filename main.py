#!/usr/bin/env python3
"""
Pocket Server entry point.

Loads the config file, builds the tag store and application, then runs the
enabled listeners until the process is killed. Exits with status 1 on any
configuration or listener failure.
"""

import argparse
import asyncio
import logging
import sys

from pocket_app.app import create_app
from pocket_app.config import DEFAULT_CONFIG_PATH, load_settings
from pocket_app.errors import StartupError, StorageFailure
from pocket_app.server import build_servers, serve_forever
from pocket_app.storage.strategies import SQLTagStore

logger = logging.getLogger("pocket_app")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Personal HTTP utility server")
    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"path to the INI config file (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = load_settings(args.config)
    except StartupError as e:
        logger.error("❌ %s", e)
        return 1

    logging.getLogger().setLevel(settings.general.loglevel.upper())

    try:
        store = SQLTagStore.from_path(settings.general.database)
    except StorageFailure as e:
        logger.error("❌ Could not open database %s: %s", settings.general.database, e.message)
        return 1
    logger.info("✅ Tag store ready (%s)", settings.general.database)

    app = create_app(settings, store)
    try:
        asyncio.run(serve_forever(build_servers(app, settings.general)))
    except StartupError as e:
        logger.error("❌ %s", e)
        return 1
    finally:
        store.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
