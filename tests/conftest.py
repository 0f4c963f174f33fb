"""Shared fixtures for monitor tests."""

from unittest.mock import MagicMock

import pytest
import requests

from monitoring.availability_checker import AvailabilityChecker
from monitoring.state import AvailabilityStore
from tests.helpers import START_TIME


@pytest.fixture
def store():
    return AvailabilityStore(available=False, last_polled=START_TIME)


@pytest.fixture
def session():
    """A real Session (so requests are prepared for real) with send() mocked out."""
    sess = requests.Session()
    sess.send = MagicMock()
    return sess


@pytest.fixture
def checker(store, session):
    return AvailabilityChecker(
        store,
        postcode="AB1 2CD",
        address="1 High Street",
        latlng="51.5,-0.12",
        timeout=5,
        session=session,
    )
