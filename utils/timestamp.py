"""Wall-clock helpers shared by the codec, logging and health checks."""

import time
from datetime import datetime, timezone


def now_seconds():
    """Current time in whole seconds since Unix epoch."""
    return int(time.time())


def now_micros():
    """Current time in microseconds since Unix epoch."""
    return int(time.time() * 1_000_000)


def format_timestamp(epoch_us=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = now_micros()

    dt = datetime.fromtimestamp(epoch_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def format_seconds(epoch_s):
    """Format whole seconds as ISO 8601, or None when out of datetime range."""
    try:
        dt = datetime.fromtimestamp(epoch_s, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")
