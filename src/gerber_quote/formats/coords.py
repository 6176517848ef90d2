"""Fixed-point coordinate decoding shared by both grammars."""

from __future__ import annotations

from ..schema.statements import ZeroSuppression


def decode_coordinate(
    raw: str,
    integer_digits: int,
    decimal_digits: int,
    zero_suppression: ZeroSuppression = ZeroSuppression.LEADING,
) -> float:
    """Decode a coordinate word into a native-unit value.

    Values containing a decimal point are taken literally. Otherwise the
    digits are interpreted with the implied decimal point given by the
    active format, padding on the right when trailing zeros were omitted.

    Raises:
        ValueError: If ``raw`` is not a number.
    """
    text = raw.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1.0
        text = text[1:]
    if not text:
        raise ValueError(f"Malformed coordinate {raw!r}")

    if "." in text:
        return sign * float(text)

    if not text.isdigit():
        raise ValueError(f"Malformed coordinate {raw!r}")

    if zero_suppression is ZeroSuppression.TRAILING:
        text = text.ljust(integer_digits + decimal_digits, "0")
    return sign * int(text) / 10**decimal_digits


def parse_number(raw: str) -> float:
    """Parse a literal decimal number such as an aperture parameter."""
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Malformed number {raw!r}") from e
