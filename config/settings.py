"""
Configuration Management

Loads monitor settings from environment variables (optionally seeded from a
.env file) and validates them at startup.
"""

import os
import logging

import pytz
from dotenv import load_dotenv

from utils.duration import parse_duration

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_INTERVAL = "15m"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_TIMEZONE = "Europe/London"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


class Settings:
    """Resolved configuration for one monitor process."""

    def __init__(
        self,
        port=DEFAULT_PORT,
        postcode="",
        address="",
        latlng="",
        slack_url="",
        interval=15 * 60,
        notify_on_error=False,
        request_timeout=DEFAULT_REQUEST_TIMEOUT,
        timezone=DEFAULT_TIMEZONE,
        log_file=None,
        log_level="INFO",
    ):
        self.port = port
        self.postcode = postcode
        self.address = address
        self.latlng = latlng
        self.slack_url = slack_url
        self.interval = interval
        self.notify_on_error = notify_on_error
        self.request_timeout = request_timeout
        self.timezone = timezone
        self.log_file = log_file
        self.log_level = log_level

    def __repr__(self):
        return (
            f"Settings(port={self.port}, postcode={'set' if self.postcode else 'unset'}, "
            f"interval={self.interval}, notify_on_error={self.notify_on_error}, "
            f"slack_url={'set' if self.slack_url else 'unset'})"
        )


def _parse_bool(name, value):
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _parse_port(value):
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"PORT must be an integer, got '{value}'") from e
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


def _parse_interval(value):
    try:
        seconds = parse_duration(value)
    except ValueError as e:
        raise ConfigError(f"INTERVAL: {e}") from e
    if seconds <= 0:
        raise ConfigError(f"INTERVAL must be positive, got '{value}'")
    return seconds


def _parse_timeout(value):
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"REQUEST_TIMEOUT must be a number of seconds, got '{value}'") from e
    if timeout <= 0:
        raise ConfigError(f"REQUEST_TIMEOUT must be positive, got '{value}'")
    return timeout


def _parse_timezone(value):
    try:
        pytz.timezone(value)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigError(f"Unknown TIMEZONE '{value}'") from e
    return value


def load_settings(environ=None, port=None, interval=None, notify_on_error=None):
    """
    Build Settings from the environment.

    Keyword arguments that are not None override the matching environment
    variable (used for command-line flags).

    Args:
        environ (dict, optional): Mapping to read instead of os.environ
        port (int, optional): Listening port override
        interval (str, optional): Polling interval override, Go duration syntax
        notify_on_error (bool, optional): Error notification override

    Returns:
        Settings: Validated settings

    Raises:
        ConfigError: If any value is invalid
    """
    env = os.environ if environ is None else environ

    if notify_on_error is None:
        notify_on_error = _parse_bool("NOTIFY_ERROR", env.get("NOTIFY_ERROR", "false"))

    settings = Settings(
        port=_parse_port(port if port is not None else (env.get("PORT") or DEFAULT_PORT)),
        postcode=env.get("POSTCODE", ""),
        address=env.get("ADDRESS", ""),
        latlng=env.get("LATLNG", ""),
        slack_url=env.get("SLACK_URL", ""),
        interval=_parse_interval(interval if interval is not None else env.get("INTERVAL", DEFAULT_INTERVAL)),
        notify_on_error=notify_on_error,
        request_timeout=_parse_timeout(env.get("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        timezone=_parse_timezone(env.get("TIMEZONE", DEFAULT_TIMEZONE)),
        log_file=env.get("LOG_FILE") or None,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )

    return settings


def log_missing_settings(settings):
    """Warn about empty optional settings. Call after logging is configured."""
    if not settings.postcode:
        logger.warning("POSTCODE is not set; availability checks will send an empty postcode")
    if not settings.slack_url:
        logger.warning("SLACK_URL is not set; notifications will be skipped")
