#!/usr/bin/env python3
"""
Google Calendar Digest - Main Entry Point

Prints the upcoming events of the configured Google calendars as a
plain-text digest, cached for the current hour.
"""

import argparse
import sys

from config.calendar_config import DEFAULT_CONFIG_PATH, DigestSettings
from gcal_digest.core import DigestRunner
from utils.error_handling import DigestError
from utils.logging import logger, get_log_file_location


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print upcoming Google Calendar events")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file")
    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point."""
    args = parse_args(argv)
    logger.debug(f"Logging to: {get_log_file_location()}")
    try:
        settings = DigestSettings.from_environ()
        digest = DigestRunner(settings).run(args.config)
    except DigestError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    sys.stdout.write(digest)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    main()
