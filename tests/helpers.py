"""Helpers shared by the test modules."""

import json
from datetime import datetime, timezone

import requests

START_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_response(body, status_code=200):
    """Build a real requests.Response carrying the given body."""
    resp = requests.Response()
    resp.status_code = status_code
    if not isinstance(body, (bytes, str)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    resp._content = body
    resp.encoding = "utf-8"
    return resp


def cabinet(status):
    return {"cabinet": {"status": status}}
