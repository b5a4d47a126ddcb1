"""Interval rule parsing.

Rules are fixed-length durations written as one or more ``<number><unit>``
terms (``"30s"``, ``"1h30m"``, ``"1.5h"``, ``"250ms"``), or a whole number of
days or weeks (``"1d"``, ``"2w"``). Durations resolve to integer microseconds,
the timestamp unit used throughout gridline.

Calendar units (months, years) have no fixed length and are rejected.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from gridline._error_messages import invalid_rule_error
from gridline.errors import ParseError

_NS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3_600 * 1_000_000_000,
}

_DATE_UNIT_NS: dict[str, int] = {
    "d": 24 * _NS_PER_UNIT["h"],
    "w": 7 * 24 * _NS_PER_UNIT["h"],
}

_CALENDAR_UNITS = {"M", "y"}

_DATE_UNIT_PATTERN = re.compile(r"^(\d+)([dwMy])$")
_TERM_PATTERN = re.compile(r"(\d*\.?\d*)(ns|us|µs|μs|ms|s|m|h)")

NS_PER_US = 1_000


def parse_duration_us(rule: str) -> int:
    """Parse an interval rule into a strictly positive number of microseconds.

    Args:
        rule: Interval rule such as "1m", "1h30m", "1.5s" or "1d"

    Returns:
        Interval length in microseconds (always > 0)

    Raises:
        ParseError: If the rule is malformed, uses a calendar unit, or does not
            resolve to at least one microsecond

    Example:
        >>> parse_duration_us("1m")
        60000000
        >>> parse_duration_us("1h30m")
        5400000000
    """
    if not isinstance(rule, str):
        raise ParseError(invalid_rule_error(repr(rule), f"expected str, got {type(rule).__name__}"))

    text = rule.strip()
    if not text:
        raise ParseError(invalid_rule_error(rule, "empty input"))

    total_ns = _parse_ns(rule, text)
    total_us = total_ns // NS_PER_US
    if total_us <= 0:
        raise ParseError(invalid_rule_error(rule, "interval must be at least 1us"))
    return total_us


def _parse_ns(rule: str, text: str) -> int:
    date_match = _DATE_UNIT_PATTERN.match(text)
    if date_match:
        count, unit = date_match.groups()
        if unit in _CALENDAR_UNITS:
            raise ParseError(
                invalid_rule_error(rule, f"calendar unit {unit!r} has no fixed length")
            )
        return int(count) * _DATE_UNIT_NS[unit]

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    pos = 0
    total = Decimal(0)
    while pos < len(text):
        match = _TERM_PATTERN.match(text, pos)
        if match is None or match.end() == pos:
            raise ParseError(invalid_rule_error(rule, f"unexpected input at {text[pos:]!r}"))
        number, unit = match.groups()
        if number in {"", "."}:
            raise ParseError(invalid_rule_error(rule, f"missing number before unit {unit!r}"))
        try:
            total += Decimal(number) * _NS_PER_UNIT[unit]
        except InvalidOperation as exc:
            raise ParseError(invalid_rule_error(rule, f"invalid number {number!r}")) from exc
        pos = match.end()

    if pos == 0:
        raise ParseError(invalid_rule_error(rule, "missing unit"))

    return sign * int(total)


__all__ = ["parse_duration_us"]
