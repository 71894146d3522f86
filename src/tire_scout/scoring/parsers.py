"""Field parsers for raw catalog attribute values.

Every parser returns a number or None. None means "no value": the
field is absent or could not be read, and the two are not told apart.
"""

import math
import re

from tire_scout.models.pydantic_models import NoiseRange

# Pre-compiled regex patterns for performance
_NOT_NUMERIC_RE = re.compile(r"[^\d.]")
_LEADING_FLOAT_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _is_number(raw: object) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def parse_noise_level(raw: object, noise_range: NoiseRange) -> float | None:
    """Parse a tire noise value in decibels.

    Algorithm:
    1. Numbers are taken as they are
    2. Strings are cut at the first slash ("72/70 dB" keeps "72")
    3. Every character other than digits and "." is dropped
    4. The leading numeric token is read as a float
    5. The result must lie within noise_range, else there is no value

    Args:
        raw: Raw field value (number, "72 dB", "72/70 dB", ...).
        noise_range: Closed range of plausible decibel values.

    Returns:
        Noise level in dB, or None.

    Examples:
        >>> parse_noise_level("72 dB", NoiseRange())
        72.0
        >>> parse_noise_level("72/70 dB", NoiseRange())
        72.0
        >>> parse_noise_level("150 dB", NoiseRange()) is None
        True
    """
    if _is_number(raw):
        value = float(raw)  # type: ignore[arg-type]
    elif isinstance(raw, str):
        head = raw.split("/", 1)[0]
        cleaned = _NOT_NUMERIC_RE.sub("", head)
        match = _LEADING_FLOAT_RE.match(cleaned)
        if match is None:
            return None
        value = float(match.group())
    else:
        return None

    if math.isnan(value) or not noise_range.contains(value):
        return None
    return value


def decode_grade(raw: object, grade_table: dict[str, int]) -> int:
    """Decode a letter grade through grade_table, case-insensitively.

    Anything outside the table, including an absent value, decodes to 0.
    A missing grade is therefore indistinguishable from the worst grade.

    Examples:
        >>> decode_grade("b", {"A": 5, "B": 4})
        4
        >>> decode_grade(None, {"A": 5, "B": 4})
        0
    """
    if raw is None:
        return 0
    return grade_table.get(str(raw).strip().upper(), 0)


def coerce_positive_number(raw: object) -> float | None:
    """Convert a price-like value to a positive float.

    Non-numeric text, non-finite and non-positive results give None.
    """
    if _is_number(raw):
        value = float(raw)  # type: ignore[arg-type]
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_rating(raw: object) -> int | None:
    """Read the integer part of a user rating ("4.7" and "4 stars" give 4).

    Non-positive or unreadable ratings give None.
    """
    if _is_number(raw):
        if not math.isfinite(raw):  # type: ignore[arg-type]
            return None
        value = int(raw)  # type: ignore[call-overload]
    elif isinstance(raw, str):
        match = _LEADING_INT_RE.match(raw)
        if match is None:
            return None
        value = int(match.group(1))
    else:
        return None

    return value if value > 0 else None
