#!/usr/bin/env python3
"""
Openreach Availability Monitor - Main Entry Point

Starts the status endpoint on a background thread, then polls Openreach
availability on the main thread until the process is stopped.

Usage:
    python main.py [--port 8080] [--interval 15m] [--notifyerr] [--once]
"""

import argparse
import logging
import sys

from config.settings import ConfigError, load_settings, log_missing_settings
from monitoring.availability_checker import AvailabilityChecker
from monitoring.state import AvailabilityStore
from services.monitoring_daemon import CycleOutcome, MonitoringDaemon
from webapp.app import create_app, start_status_server
from webapp.services.slack_service import SlackNotifier

logger = logging.getLogger(__name__)


def configure_logging(settings):
    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_parser():
    parser = argparse.ArgumentParser(description="Openreach Availability Monitor")

    parser.add_argument("--port", type=int, default=None, help="Status server port (default: $PORT or 8080)")
    parser.add_argument("--interval", default=None, help="Polling interval, e.g. 15m or 1h30m (default: $INTERVAL or 15m)")
    parser.add_argument("--notifyerr", action="store_true", default=None, help="Send a notification when a poll fails")
    parser.add_argument("--once", action="store_true", help="Run a single check and exit")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(
            port=args.port,
            interval=args.interval,
            notify_on_error=args.notifyerr,
        )
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(settings)
    logger.info(f"Loaded {settings!r}")
    log_missing_settings(settings)

    store = AvailabilityStore()
    checker = AvailabilityChecker.from_settings(settings, store)
    notifier = SlackNotifier(settings.slack_url, timeout=settings.request_timeout)
    daemon = MonitoringDaemon(
        checker,
        notifier,
        interval=settings.interval,
        notify_on_error=settings.notify_on_error,
    )

    if args.once:
        outcome = daemon.run_cycle()
        return 1 if outcome == CycleOutcome.ERROR else 0

    app = create_app(store, timezone=settings.timezone)
    try:
        server = start_status_server(app, settings.port)
    except OSError as e:
        logger.error(f"Could not start status server on port {settings.port}: {e}; polling without it")
        server = None

    daemon.install_signal_handlers()
    try:
        daemon.run_forever()
    finally:
        if server is not None:
            server.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
