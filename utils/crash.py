"""Crash handling for the server process; each crash is keyed by a fresh Tid."""

import json
import os
import sys
import traceback

from tid.identifier import generate_int, to_string
from utils.timestamp import format_timestamp

# Overridden from config.logging.crash_file by configure()
_crash_log = "logs/crash.log"


def configure(crash_file):
    global _crash_log
    _crash_log = crash_file


def _new_record(exc_name, exc_msg, tb, context=None):
    record = {
        "id": to_string(generate_int()),
        "timestamp": format_timestamp(),
        "type": exc_name,
        "msg": exc_msg,
        "traceback": tb,
    }
    if context:
        record["context"] = context
    return record


def _append(record):
    """Append one JSON line to the crash log. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook: report to stderr and the crash log."""
    exc_name = exc_type.__name__ if exc_type else "Unknown"
    exc_msg = str(exc_value) if exc_value else ""
    tb = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    record = _new_record(exc_name, exc_msg, tb)

    bar = "=" * 60
    sys.stderr.write(f"\n{bar}\nCRASH [{record['id']}] {record['timestamp']}\n{bar}\n")
    sys.stderr.write(f"{exc_name}: {exc_msg}\n{'-' * 60}\n{tb}{bar}\n\n")
    _append(record)
    return record["id"]


def log_async_crash(exc, context_dict, logger=None):
    exc_name = type(exc).__name__ if exc else "AsyncError"
    exc_msg = str(exc) if exc else context_dict.get("message", "Unknown")
    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc else None
    record = _new_record(exc_name, exc_msg, tb, str(context_dict))

    if logger:
        logger.error("Async exception", error=exc_msg, crash_id=record["id"],
                     task=str(context_dict.get("future", "unknown")))

    _append(record)
    return record["id"]


def create_async_handler(logger=None):
    """Event loop exception handler writing to the crash log."""
    def handler(loop, context):
        log_async_crash(context.get("exception"), context, logger)
    return handler


def install_crash_handler():
    sys.excepthook = log_crash
