"""INFO column parsing with value-driven type inference.

The declared Type in the header is never consulted: each value is tried as an
integer, then a float, then kept as a string. Comma-separated values become
arrays only when every element parses as the same numeric kind.
"""

import re

from .models import InfoValue

MISSING_VALUE = "."

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]{1,19}")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_int(value: str) -> int | None:
    """Parse a signed 64-bit integer; anything wider is left to the float parser."""
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


def parse_float(value: str) -> float | None:
    # float() accepts surrounding whitespace and digit separators; VCF does not.
    if not value or "_" in value or value != value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def infer_info_value(value: str) -> InfoValue:
    """Classify one INFO value string."""
    if "," in value:
        parts = value.split(",")

        ints = [parse_int(p) for p in parts]
        if all(i is not None for i in ints):
            return InfoValue.integer_array(ints)

        floats = [parse_float(p) for p in parts]
        if all(f is not None for f in floats):
            return InfoValue.float_array(floats)

        return InfoValue.string_array(parts)

    as_int = parse_int(value)
    if as_int is not None:
        return InfoValue.integer(as_int)

    as_float = parse_float(value)
    if as_float is not None:
        return InfoValue.floating(as_float)

    return InfoValue.string(value)


def parse_info_entry(entry: str) -> tuple[str, InfoValue]:
    """Parse 'KEY=VALUE' or a bare flag 'KEY'."""
    key, sep, value = entry.partition("=")
    if not sep:
        return key, InfoValue.flag()
    return key, infer_info_value(value)


def parse_info_field(value: str) -> dict[str, InfoValue]:
    """Parse a whole INFO column into a key -> InfoValue mapping."""
    info: dict[str, InfoValue] = {}
    if value == MISSING_VALUE:
        return info

    for entry in value.split(";"):
        if not entry:
            continue
        key, info_value = parse_info_entry(entry)
        info[key] = info_value

    return info
