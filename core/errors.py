"""Custom errors with tracking IDs."""

from utils.timestamp import format_timestamp


def _tracking_id():
    # imported late: the codec itself raises these errors
    from tid.identifier import generate_int, to_string
    return to_string(generate_int())


class BaseTidError(Exception):
    """Base error with unique ID and timestamp for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.error_id = _tracking_id()
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause

    def __str__(self):
        return f"[{self.error_id}] {super().__str__()}"


class InvalidTidError(BaseTidError, ValueError):
    """Rejected identifier input (bad integer, bad string, bad time)."""

    def __init__(self, message, value=None, **kwargs):
        context = kwargs.pop("context", {})
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context, **kwargs)


class UnsupportedVersionError(InvalidTidError):
    """Version code missing from the version table."""

    def __init__(self, message, version=None, **kwargs):
        context = kwargs.pop("context", {})
        if version is not None:
            context["version"] = version
        super().__init__(message, context=context, **kwargs)
