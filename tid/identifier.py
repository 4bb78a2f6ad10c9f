"""
Tid - time-ordered identifiers packed into 63-bit integers.

Layout, least significant bits first:

    [ version: 4 ][ entropy: per version ][ timestamp >> dropped bits ]

Version 0 carries no timestamp: 58 random bits with bit 62 forced on, so its
string form is always full length. The other versions sort by generation
time (at their resolution) in both integer and string form.
"""

import functools
import hashlib
import hmac
import secrets

from core.errors import InvalidTidError, UnsupportedVersionError
from internal.logging import get_logger
from tid import base36
from tid.versions import (
    MAX_VALUE,
    RANDOM_VERSION_BITS,
    RANDOM_VERSION_TOP_BIT,
    VERSION_0,
    VERSION_BITS,
    VERSION_CONFIGS,
    VERSION_MASK,
)
from utils import timestamp

# right shift applied to the first 64 digest bits to leave 58
_DIGEST_SHIFT = 64 - RANDOM_VERSION_BITS


def _config(version):
    try:
        return VERSION_CONFIGS[version]
    except (KeyError, TypeError):
        raise UnsupportedVersionError("Unsupported Tid version", version=version) from None


def _random_int(random_bits):
    return ((random_bits << VERSION_BITS) | VERSION_0) | RANDOM_VERSION_TOP_BIT


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def pack_int(version, epoch_s, random_bits):
    """Assemble a time-bearing Tid integer from its parts."""
    config = _config(version)
    if not config.has_time:
        raise UnsupportedVersionError("Version carries no timestamp", version=version)

    n = epoch_s >> config.dropped_bits
    n = (n << config.entropy_bits) | (random_bits & ((1 << config.entropy_bits) - 1))
    return (n << VERSION_BITS) | version


def generate_int(version=VERSION_0):
    """Generate a new Tid integer of the given version."""
    config = _config(version)
    if not config.has_time:
        return _random_int(secrets.randbits(RANDOM_VERSION_BITS))

    return pack_int(version, timestamp.now_seconds(), secrets.randbits(config.entropy_bits))


def derive_int(seed, secret=None):
    """
    Deterministic version 0 Tid integer from a seed.

    Without a secret this is a plain SHA-256 of the seed, so anyone holding
    the seed can compute the ID. With a secret it is an HMAC-SHA-256, which
    makes IDs unguessable from their seeds.
    """
    seed = _as_bytes(seed)
    if secret is None:
        digest = hashlib.sha256(seed).digest()
    else:
        digest = hmac.new(_as_bytes(secret), seed, hashlib.sha256).digest()

    n = int.from_bytes(digest[:8], "big")
    return _random_int(n >> _DIGEST_SHIFT)


def _as_bytes(data):
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Tid seed and secret must be str or bytes, not {type(data).__name__}")


# ---------------------------------------------------------------------------
# Decomposition
# ---------------------------------------------------------------------------

def version(n):
    return n & VERSION_MASK


def entropy_bits(n):
    """Width of the random field for this integer's version."""
    return _config(version(n)).entropy_bits


def earliest_time(n):
    """Lower bound of the generation time window, 0 for random versions."""
    config = _config(version(n))
    if not config.has_time:
        return 0
    n >>= VERSION_BITS
    n >>= config.entropy_bits
    return n << config.dropped_bits


def latest_time(n):
    return earliest_time(n) | ((1 << entropy_bits(n)) - 1)


def random_bits(n):
    config = _config(version(n))
    n >>= VERSION_BITS
    if not config.has_time:
        return n
    return n & ((1 << config.entropy_bits) - 1)


# ---------------------------------------------------------------------------
# Validation and text form
# ---------------------------------------------------------------------------

def check_int(n):
    """Raise InvalidTidError unless n is a valid Tid integer."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Tid integer must be int, not {type(n).__name__}")

    reason = None
    if n < 0:
        reason = "Tid integer must not be negative"
    elif n > MAX_VALUE:
        reason = "Tid integer exceeds 63 bits"

    if reason is None:
        v = version(n)
        if v not in VERSION_CONFIGS:
            get_logger().debug("tid rejected", reason="version", value=n)
            raise UnsupportedVersionError("Unsupported Tid version", version=v, context={"value": n})

        earliest = earliest_time(n)
        if earliest < 0:
            reason = "Tid timestamp is negative"
        elif earliest > timestamp.now_seconds():
            reason = "Tid timestamp is in the future"

    if reason is not None:
        get_logger().debug("tid rejected", reason=reason, value=n)
        raise InvalidTidError(reason, value=n)


def validate_int(n):
    try:
        check_int(n)
    except (InvalidTidError, TypeError):
        return False
    return True


def validate_string(text):
    try:
        check_int(base36.decode(text))
    except InvalidTidError:
        return False
    return True


def to_string(n):
    """Formatted base36 form of a Tid integer (no validation)."""
    return base36.format_string(base36.encode(n))


def from_int(n):
    return Tid(n)


def from_string(text):
    return Tid(base36.decode(text))


def generate(version=VERSION_0):
    return Tid(generate_int(version))


def derive(seed, secret=None):
    return Tid(derive_int(seed, secret))


def hash_generate(source):
    """Deterministic Tid from a source alone; weak against guessing."""
    return derive(source)


def hmac_generate(source, secret):
    """Deterministic Tid keyed by a secret; strong against guessing."""
    return derive(source, secret)


@functools.total_ordering
class Tid:
    """
    Immutable identifier value. Equal, hashed and ordered by its integer;
    str() gives the dash-formatted base36 form, which is also what it
    serializes as (json.dumps(..., default=str)).
    """

    __slots__ = ("_value",)

    def __init__(self, value):
        check_int(value)
        self._value = value

    @classmethod
    def from_int(cls, value):
        return cls(value)

    @classmethod
    def from_string(cls, text):
        return cls(base36.decode(text))

    @classmethod
    def generate(cls, version=VERSION_0):
        return cls(generate_int(version))

    @classmethod
    def derive(cls, seed, secret=None):
        return cls(derive_int(seed, secret))

    @property
    def value(self):
        return self._value

    @property
    def version(self):
        return version(self._value)

    @property
    def entropy_bits(self):
        return entropy_bits(self._value)

    @property
    def earliest_time(self):
        return earliest_time(self._value)

    @property
    def latest_time(self):
        return latest_time(self._value)

    @property
    def random_bits(self):
        return random_bits(self._value)

    def compact_string(self):
        return base36.encode(self._value)

    def to_dict(self):
        """Fields for JSON; 63-bit values go out as strings to survive doubles."""
        earliest, latest = self.earliest_time, self.latest_time
        has_time = VERSION_CONFIGS[self.version].has_time
        return {
            "tid": str(self),
            "int": str(self._value),
            "version": self.version,
            "entropy_bits": self.entropy_bits,
            "earliest_time": earliest,
            "latest_time": latest if has_time else None,
            "earliest": timestamp.format_seconds(earliest) if has_time else None,
            "latest": timestamp.format_seconds(latest) if has_time else None,
        }

    def __int__(self):
        return self._value

    def __str__(self):
        return to_string(self._value)

    def __repr__(self):
        return f"Tid({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, Tid):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, Tid):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)
