"""
Version table for Tid identifiers.

Every identifier keeps its version code in the lowest 4 bits. The code picks
how many low bits of the Unix timestamp are thrown away (coarser time, less
leaked about when the ID was made) and how many random bits fill the room.
All versions fit in 63 bits, so values are safe in signed 64-bit columns.
"""

from collections import namedtuple
from types import MappingProxyType

VERSION_BITS = 4
VERSION_MASK = (1 << VERSION_BITS) - 1
MAX_BITS = 63
MAX_VALUE = (1 << MAX_BITS) - 1

# Fully random, no time information. Bit 62 is always set to stabilize the
# string length, leaving 58 random bits.
VERSION_0 = 0
# Full second resolution, 14 random bits.
VERSION_1 = 1
# Drops 8 bits, about 4.25 minutes resolution, 22 random bits.
VERSION_2 = 2
# Drops 16 bits, about 18 hours resolution, 30 random bits.
VERSION_3 = 3
# Drops 18 bits, about 3 days resolution, 32 random bits.
VERSION_4 = 4
# Drops 20 bits, about 12 days resolution, 34 random bits.
VERSION_5 = 5

RANDOM_VERSION_BITS = 58
RANDOM_VERSION_TOP_BIT = 1 << (MAX_BITS - 1)


class VersionConfig(namedtuple("VersionConfig", ("dropped_bits", "entropy_bits"))):
    __slots__ = ()

    @property
    def has_time(self):
        return self.dropped_bits is not None

    @property
    def resolution_s(self):
        """Width of the time window in seconds, None for random versions."""
        if self.dropped_bits is None:
            return None
        return 1 << self.dropped_bits


VERSION_CONFIGS = MappingProxyType({
    VERSION_0: VersionConfig(None, 59),
    VERSION_1: VersionConfig(0, 14),
    VERSION_2: VersionConfig(8, 22),
    VERSION_3: VersionConfig(16, 30),
    VERSION_4: VersionConfig(18, 32),
    VERSION_5: VersionConfig(20, 34),
})
