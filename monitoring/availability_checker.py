"""
Openreach Availability Checker

Posts the configured address to the superfastmaps Openreach lookup and reads
the serving cabinet's status from the JSON reply.
Returns: True (available) unless the cabinet reports "highdemand".
"""

import logging

import requests

from monitoring.state import utc_now

logger = logging.getLogger(__name__)

API_URL = "https://api.superfastmaps.co.uk/openreach/1.2/ajax/check.ajax.php"

# Cabinet status meaning no new connections are being taken
UNWANTED_STATUS = "highdemand"

REQUEST_HEADERS = {
    "Pragma": "no-cache",
    "Origin": "https://api.superfastmaps.co.uk",
    "Accept-Language": "en-US,en;q=0.8",
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_11_0) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/54.0.2840.98 Safari/537.36",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "X-Requested-With": "XMLHttpRequest",
    "Connection": "keep-alive",
    "Referer": "https://api.superfastmaps.co.uk/openreach/1.2/?simple=yes",
}


class PollError(Exception):
    """Base class for failures while checking availability."""


class RequestConstructionError(PollError):
    """The lookup request could not be built."""


class TransportError(PollError):
    """The lookup request did not get a response."""


class DecodeError(PollError):
    """The lookup response body was not the expected JSON."""


def build_form(postcode, address, latlng):
    """Form fields expected by the lookup endpoint."""
    return {
        "input": postcode,
        "address": address,
        "latlng": latlng,
    }


def parse_cabinet_status(payload):
    """
    Extract cabinet.status from a decoded lookup response.

    Missing objects or fields read as an empty status. Values of the wrong
    JSON type are rejected.

    Args:
        payload: Decoded JSON body

    Returns:
        str: Cabinet status, possibly empty

    Raises:
        DecodeError: If the body does not have the expected shape
    """
    if payload is None:
        return ""
    if not isinstance(payload, dict):
        raise DecodeError(f"expected JSON object, got {type(payload).__name__}")

    cabinet = payload.get("cabinet")
    if cabinet is None:
        return ""
    if not isinstance(cabinet, dict):
        raise DecodeError(f"expected 'cabinet' object, got {type(cabinet).__name__}")

    status = cabinet.get("status")
    if status is None:
        return ""
    if not isinstance(status, str):
        raise DecodeError(f"expected 'cabinet.status' string, got {type(status).__name__}")

    return status


def is_available(status):
    return status != UNWANTED_STATUS


class AvailabilityChecker:
    """Runs one availability lookup per call and records the result."""

    def __init__(self, store, postcode="", address="", latlng="", timeout=30.0,
                 api_url=API_URL, session=None):
        self.store = store
        self.postcode = postcode
        self.address = address
        self.latlng = latlng
        self.timeout = timeout
        self.api_url = api_url
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings, store, session=None):
        return cls(
            store,
            postcode=settings.postcode,
            address=settings.address,
            latlng=settings.latlng,
            timeout=settings.request_timeout,
            session=session,
        )

    def _build_request(self):
        request = requests.Request(
            "POST",
            self.api_url,
            data=build_form(self.postcode, self.address, self.latlng),
            headers=REQUEST_HEADERS,
        )
        try:
            return self.session.prepare_request(request)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Failed creating request for {self.api_url}: {e}")
            raise RequestConstructionError(f"failed creating request: {e}") from e

    def poll(self):
        """
        Check availability once.

        On success the shared store is updated with the result and the poll
        time. On failure the store is left as it was.

        Returns:
            bool: True if broadband is available

        Raises:
            RequestConstructionError, TransportError, DecodeError
        """
        prepared = self._build_request()

        try:
            response = self.session.send(prepared, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {self.api_url} failed: {e}")
            raise TransportError(f"request failed: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Lookup responded {response.status_code}: {response.text[:200]}")

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Failed decoding response (HTTP {response.status_code}): {e}")
            raise DecodeError(f"failed decoding response (HTTP {response.status_code}): {e}") from e

        status = parse_cabinet_status(payload)
        available = is_available(status)
        self.store.set(available, utc_now())

        logger.info(f"Cabinet status: '{status}' (available={available})")
        return available
