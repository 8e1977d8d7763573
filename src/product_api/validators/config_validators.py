import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

# Signed 64-bit range: the widest integer column the supported databases bind
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()

def blank_to_none(value: str | None) -> str | None:
    """
    Strips a string and turns an empty result into None.
    """
    if value is None:
        return None
    value = str(value).strip()
    return value or None

def parse_int(value) -> int | None:
    """
    Parse a base-10 integer with an optional sign.

    Only ASCII digits are accepted (no whitespace, underscores or decimals),
    so values like " 5", "5_0" or "2.0" are rejected. Values outside the signed
    64-bit range count as unparsable. Returns None when the value cannot be parsed.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        number = value
    else:
        text = str(value)
        if not _INT_PATTERN.fullmatch(text):
            return None
        number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number

def positive_int_or_default(value, default: int) -> int:
    """
    Return `value` as an int when it parses to a positive integer, else `default`.
    """
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed
