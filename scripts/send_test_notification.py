#!/usr/bin/env python3
"""
Send a test message to the configured webhook (SLACK_URL).

Usage: python scripts/send_test_notification.py
"""

import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from config.settings import ConfigError, load_settings
from webapp.services.slack_service import SlackNotifier


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 2

    notifier = SlackNotifier(settings.slack_url, timeout=settings.request_timeout)
    if notifier.send_test_notification():
        print("Test notification sent.")
        return 0

    print("Test notification failed; see log output above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
