from tid.base36 import format_string
from tid.identifier import (
    Tid,
    derive,
    derive_int,
    earliest_time,
    entropy_bits,
    from_int,
    from_string,
    generate,
    generate_int,
    hash_generate,
    hmac_generate,
    latest_time,
    pack_int,
    random_bits,
    to_string,
    validate_int,
    validate_string,
    version,
)
from tid.versions import (
    VERSION_0,
    VERSION_1,
    VERSION_2,
    VERSION_3,
    VERSION_4,
    VERSION_5,
    VERSION_CONFIGS,
)
from core.errors import InvalidTidError, UnsupportedVersionError

__all__ = [
    "Tid",
    "derive",
    "derive_int",
    "earliest_time",
    "entropy_bits",
    "format_string",
    "from_int",
    "from_string",
    "generate",
    "generate_int",
    "hash_generate",
    "hmac_generate",
    "latest_time",
    "pack_int",
    "random_bits",
    "to_string",
    "validate_int",
    "validate_string",
    "version",
    "VERSION_0",
    "VERSION_1",
    "VERSION_2",
    "VERSION_3",
    "VERSION_4",
    "VERSION_5",
    "VERSION_CONFIGS",
    "InvalidTidError",
    "UnsupportedVersionError",
]
