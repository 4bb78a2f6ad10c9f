from internal.logging import LogLevel, StructuredLogger, get_logger, parse_level
from utils.timestamp import format_timestamp, now_micros, now_seconds

__all__ = [
    "LogLevel",
    "StructuredLogger",
    "get_logger",
    "parse_level",
    "format_timestamp",
    "now_micros",
    "now_seconds",
]
