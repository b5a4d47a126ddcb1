"""Error message templates for the gridline API.

Error messages include:
- Clear problem description
- Suggested fixes with examples
- Fuzzy matching for common typos ("Did you mean...?")
"""

from __future__ import annotations

from difflib import get_close_matches


def unsupported_policy_error(kind: str, name: str, available: list[str]) -> str:
    """Error message when a downsampler/upsampler name is not registered.

    Includes fuzzy matching suggestions for common typos.

    Args:
        kind: Policy kind ("downsampler" or "upsampler")
        name: The policy name that was not found
        available: List of valid policy names

    Returns:
        Formatted error message with suggestions
    """
    suggestions = get_close_matches(str(name).strip().lower(), available, n=3, cutoff=0.6)

    msg = f"{kind} {name!r} is not supported.\n"

    if suggestions:
        msg += "\nDid you mean one of these?\n"
        for suggestion in suggestions:
            msg += f"  - {suggestion}\n"

    msg += f"\nSupported {kind}s:\n"
    for option in sorted(available):
        msg += f"  - {option}\n"

    return msg.rstrip("\n")


def invalid_rule_error(rule: str, reason: str) -> str:
    """Error message when an interval rule cannot be parsed.

    Args:
        rule: The raw rule string
        reason: Short description of what is wrong

    Returns:
        Formatted error message
    """
    return (
        f'failed to parse "rule" field {rule!r}: {reason}.\n'
        "\n"
        "Rules are positive fixed durations, optionally compound:\n"
        "  '500ms', '30s', '1m', '1h30m', '1.5h', '1d', '1w'\n"
        "Supported units: ns, us (µs), ms, s, m, h, d, w"
    )


def range_too_short_error(from_us: int, to_us: int, interval_us: int) -> str:
    """Error message when the time range cannot be sampled at the interval.

    Args:
        from_us: Range start in microseconds
        to_us: Range end in microseconds
        interval_us: Grid interval in microseconds

    Returns:
        Formatted error message
    """
    return (
        "the series cannot be sampled further; the time range is shorter than the interval.\n"
        "\n"
        f"  from_us:     {from_us}\n"
        f"  to_us:       {to_us}\n"
        f"  interval_us: {interval_us}\n"
        "\n"
        "Use a shorter rule or widen the range so that to - from >= interval."
    )


def grid_too_large_error(points: int, max_points: int) -> str:
    """Error message when the planned grid exceeds the safety limit.

    Args:
        points: Number of grid points the plan would produce
        max_points: Configured limit

    Returns:
        Formatted error message
    """
    return (
        f"Resample grid would generate too many points: {points:,} > {max_points:,}.\n"
        "\n"
        "Increase the rule interval, shorten the range, or raise the limit via\n"
        "  GRIDLINE_MAX_POINTS=<n>  or  max_points = <n> under [resample] in the config file."
    )


__all__ = [
    "unsupported_policy_error",
    "invalid_rule_error",
    "range_too_short_error",
    "grid_too_large_error",
]
