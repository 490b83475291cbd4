"""Ally code parsing.

Players share their ally code in many shapes ("265-924-989", "265 924 989",
"#265924989"). Every non-digit character is dropped before parsing.
"""

from __future__ import annotations

import re

from swgohhelp.shared.errors import ParseError

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_ally_code(code: str | int) -> int:
    """Parse a single ally code.

    Raises:
        ParseError: If no digits remain after cleanup
    """
    raw = str(code)
    digits = _NON_DIGITS.sub("", raw)
    if not digits:
        raise ParseError(raw)
    return int(digits)


def parse_ally_codes(*codes: str | int) -> list[int]:
    """Parse ally codes into integers, preserving input order.

    The batch fails as a whole: the first malformed code raises and no
    partial result is returned.

    Example:
        >>> parse_ally_codes("265-924-989", "123 456 789")
        [265924989, 123456789]

    Raises:
        ParseError: Naming the first offending input
    """
    return [parse_ally_code(code) for code in codes]


def format_ally_code(code: int) -> str:
    """Format an ally code for display as ``123-456-789``."""
    digits = f"{code:09d}"
    return "-".join(digits[i : i + 3] for i in range(0, len(digits), 3))
