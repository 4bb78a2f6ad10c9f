"""
Base36 text form of Tid integers.

Digits are 0-9 then lowercase a-z. Strings are grouped in dash-separated
chunks of 4 for readability, e.g. 28740015009630 -> "a6qz-aw3fi".
"""

import string

from core.errors import InvalidTidError
from tid.versions import MAX_VALUE

BASE36 = string.digits + string.ascii_lowercase
SEPARATOR = "-"
CHUNK_SIZE = 4
# shortest trailing chunk allowed to stand on its own
MIN_TAIL = 3

_ALNUM = frozenset(string.digits + string.ascii_letters)


def encode(n):
    """Encode a non-negative integer as raw base36, without separators."""
    if n < 0:
        raise InvalidTidError("Cannot encode a negative integer", value=n)
    if n == 0:
        return "0"

    chars = []
    while n > 0:
        n, remainder = divmod(n, 36)
        chars.append(BASE36[remainder])

    return "".join(reversed(chars))


def decode(text):
    """
    Parse base36 text (with or without separators) into an integer.

    Only separators are stripped; any other character outside 0-9/a-z
    (either case) is rejected rather than skipped.
    """
    if not isinstance(text, str):
        raise InvalidTidError("Tid string must be str", value=repr(text))

    compact = text.replace(SEPARATOR, "")
    if not compact:
        raise InvalidTidError("Invalid empty Tid string", value=text)
    # checked before lower(): some non-ASCII letters lower-case to ASCII
    if not _ALNUM.issuperset(compact):
        raise InvalidTidError("Invalid Tid characters", value=text)
    compact = compact.lower()

    n = int(compact, 36)
    if n > MAX_VALUE:
        raise InvalidTidError("Tid string exceeds 63 bits", value=text)
    return n


def format_string(text, separator=SEPARATOR):
    """Format a string with spacer dashes, dropping any non-alphanumeric input."""
    text = "".join(ch for ch in text if ch in _ALNUM)
    chunks = [text[i:i + CHUNK_SIZE] for i in range(0, len(text), CHUNK_SIZE)]

    if len(chunks) > 1 and len(chunks[-1]) < MIN_TAIL:
        last = chunks.pop()
        chunks[-1] += last

    return separator.join(chunks)
