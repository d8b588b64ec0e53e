"""Identifier helpers for generated source code."""

import re
from collections.abc import Iterable, Sequence

_WHITESPACE = re.compile(r"\s+")
_NOT_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")


def sanitize(label: str, fallback: str) -> str:
    """
    Turn a user label into a token by replacing whitespace runs with ``_``.

    Falls back to ``fallback`` when the label is empty. Never raises and
    never returns an empty string.
    """
    token = _WHITESPACE.sub("_", label or "")
    return token or fallback or "unnamed"


class IdentifierRegistry:
    """
    Hands out unique C identifiers within one generated document.

    Labels are sanitized, characters that cannot appear in a C identifier
    become ``_``, and a repeated token gets a numeric suffix in claim order
    (``fader``, ``fader_2``, ``fader_3``). Names passed as ``reserved`` are
    never handed out.
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._claimed: set[str] = set(reserved)

    def _base(self, label: str, fallback: str) -> str:
        base = _NOT_IDENTIFIER.sub("_", sanitize(label, fallback))
        if base[0].isdigit():
            base = "_" + base
        return base

    def claim(self, label: str, fallback: str, derived: Sequence[str] = ()) -> str:
        """
        Claim a unique identifier for ``label``.

        Args:
            label: User-facing name of the control
            fallback: Used when the label sanitizes to nothing
            derived: Suffixes of companion names declared next to the
                identifier (e.g. ``_rowPins``); these are claimed too and
                must be free as well

        Returns:
            The claimed identifier
        """
        base = self._base(label, fallback)

        token = base
        suffix = 2
        while any(name in self._claimed for name in (token, *(token + d for d in derived))):
            token = f"{base}_{suffix}"
            suffix += 1

        self._claimed.add(token)
        self._claimed.update(token + d for d in derived)
        return token

    def __contains__(self, token: str) -> bool:
        return token in self._claimed
