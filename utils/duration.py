"""
Duration Utility

Parses interval settings written in Go duration syntax (e.g. "15m", "1h30m",
"1.5s") and formats elapsed time the same way for the status page
(e.g. "4m3.5s").
"""

import math
import re

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value):
    """
    Convert a duration string to seconds.

    Accepts Go duration syntax ("15m", "1h30m", "250ms", "-2s") or a plain
    number, which is read as seconds.

    Args:
        value (str): Duration string

    Returns:
        float: Duration in seconds

    Raises:
        ValueError: If value is not a valid duration
    """
    text = str(value).strip()
    if not text:
        raise ValueError("Invalid duration ''")

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ValueError(f"Invalid duration '{value}'")
        return seconds

    sign = 1.0
    body = text
    if body[0] in "+-":
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]

    if body == "0":
        return 0.0

    total = 0.0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if not match:
            raise ValueError(f"Invalid duration '{value}'")
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        pos = match.end()

    if pos == 0:
        raise ValueError(f"Invalid duration '{value}'")

    return sign * total


def _trim_fraction(whole, fraction, width):
    digits = f"{fraction:0{width}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(seconds):
    """
    Format seconds the way Go prints a time.Duration.

    Examples: 0 -> "0s", 0.25 -> "250ms", 90 -> "1m30s", 3600 -> "1h0m0s".
    Precision is limited to microseconds.
    """
    micros = int(round(abs(seconds) * 1_000_000))
    if micros == 0:
        return "0s"

    sign = "-" if seconds < 0 else ""

    if micros < 1000:
        return f"{sign}{micros}µs"

    if micros < 1_000_000:
        return f"{sign}{_trim_fraction(micros // 1000, micros % 1000, 3)}ms"

    hours, rem = divmod(micros, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    out = f"{_trim_fraction(rem // 1_000_000, rem % 1_000_000, 6)}s"
    if hours or minutes:
        out = f"{minutes}m{out}"
    if hours:
        out = f"{hours}h{out}"

    return sign + out
