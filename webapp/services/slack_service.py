"""
Slack Service

Posts one-line notifications to an incoming-webhook URL.
"""

import json
import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

TEST_MESSAGE = "This is a test message from the Openreach availability monitor. Your webhook configuration is working correctly."


def build_payload(message):
    """Form body for a webhook post: one 'payload' field holding {"text": message} as JSON."""
    return {"payload": json.dumps({"text": message})}


class SlackNotifier:
    """
    Best-effort webhook notifier.

    Delivery failures are logged and never raised to the caller.
    """

    def __init__(self, webhook_url, timeout=DEFAULT_TIMEOUT, session=None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, message):
        """
        Send a message to the webhook.

        Args:
            message (str): Text to post

        Returns:
            bool: True if the webhook accepted the message, False otherwise
        """
        if not self.webhook_url:
            logger.error("Slack webhook not configured. Set the SLACK_URL environment variable.")
            return False

        try:
            resp = self.session.post(
                self.webhook_url,
                data=build_payload(message),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Error sending notification to webhook: {e}")
            return False

        if resp.status_code >= 400:
            logger.error(f"Webhook rejected notification: HTTP {resp.status_code} {resp.text[:200]}")
            return False

        logger.info(f"Notification sent: {message}")
        return True

    def notify(self, message):
        self._post(message)

    def send_test_notification(self):
        """
        Send a test message to verify the webhook configuration.

        Returns:
            bool: True if the message was sent successfully, False otherwise
        """
        return self._post(TEST_MESSAGE)
