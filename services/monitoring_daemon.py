"""
Monitoring Daemon

Background service that polls Openreach availability on a fixed interval and
sends a webhook notification whenever broadband is available.
"""

import time
import logging
import signal

from monitoring.availability_checker import PollError

logger = logging.getLogger(__name__)

AVAILABLE_MESSAGE = "openreach broadband is available"


class CycleOutcome:
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class MonitoringDaemon:
    """Drives the availability checker and notifier, one cycle per interval."""

    def __init__(self, checker, notifier, interval, notify_on_error=False, sleep=time.sleep):
        self.checker = checker
        self.notifier = notifier
        self.interval = interval
        self.notify_on_error = notify_on_error
        self.running = True
        self.cycle_count = 0
        self._sleep = sleep

    def run_cycle(self):
        """
        Poll once and notify on the result.

        The poll always finishes before any notification for the same cycle
        is sent.

        Returns:
            str: One of the CycleOutcome values
        """
        logger.info("polling...")

        try:
            available = self.checker.poll()
        except PollError as e:
            logger.error(f"error: {e}")
            if self.notify_on_error:
                self.notifier.notify(f"openreach error: {e}")
            return CycleOutcome.ERROR

        if available:
            logger.info("available, sending notification")
            self.notifier.notify(AVAILABLE_MESSAGE)
            return CycleOutcome.AVAILABLE

        logger.info("not available")
        return CycleOutcome.UNAVAILABLE

    def stop(self, signum=None, frame=None):
        """Handle shutdown signals gracefully."""
        logger.info("Received shutdown signal. Stopping gracefully...")
        self.running = False

    def install_signal_handlers(self):
        signal.signal(signal.SIGINT, self.stop)
        signal.signal(signal.SIGTERM, self.stop)

    def _wait(self, seconds):
        # Sleep in one-second slices so a stop request is seen promptly
        remaining = seconds
        while self.running and remaining > 0:
            step = min(1.0, remaining)
            self._sleep(step)
            remaining -= step

    def run_forever(self):
        """
        Main daemon loop.
        Runs a cycle, waits the configured interval, and repeats until stopped.
        """
        logger.info(f"Starting Monitoring Daemon (interval {self.interval}s, notify on error: {self.notify_on_error})")

        try:
            while self.running:
                self.cycle_count += 1
                logger.info(f"=== Monitoring Cycle #{self.cycle_count} ===")

                try:
                    self.run_cycle()
                except Exception as e:
                    logger.error(f"Error in monitoring cycle: {e}", exc_info=True)

                if self.running:
                    logger.info(f"Waiting {self.interval} seconds before next cycle...")
                    self._wait(self.interval)

        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            logger.info("Monitoring Daemon stopped")
