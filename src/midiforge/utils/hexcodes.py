"""Normalization of user-entered hex codes."""

import re

_HEX_PREFIX = re.compile(r"^0x", re.IGNORECASE)
_NON_HEX = re.compile(r"[^0-9A-Fa-f]")


def normalize_hex(raw: str | None) -> str | None:
    """
    Normalize a user-entered hex code.

    Trims the input, drops an optional ``0x`` prefix and every character
    that is not a hex digit.

    Returns:
        ``"0x"`` followed by the uppercase digits, or None if no digit is left

    Example:
        >>> normalize_hex("0x1a")
        '0x1A'
        >>> normalize_hex("zz") is None
        True
    """
    if raw is None:
        return None
    digits = _NON_HEX.sub("", _HEX_PREFIX.sub("", raw.strip()))
    if not digits:
        return None
    return "0x" + digits.upper()
