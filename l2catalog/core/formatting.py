"""Duration formatting for record prose."""

from __future__ import annotations

_UNITS: tuple[tuple[str, int], ...] = (
    ("d", 86_400),
    ("h", 3_600),
    ("m", 60),
    ("s", 1),
)


def format_seconds(seconds: int) -> str:
    """Render a duration as compact units, e.g. ``604800 -> "7d"``.

    >>> format_seconds(3600 * 12)
    '12h'
    >>> format_seconds(86_400 + 90)
    '1d 1m 30s'
    """
    if seconds < 0:
        raise ValueError(f"Negative duration: {seconds}")
    if seconds == 0:
        return "0s"
    parts: list[str] = []
    remaining = int(seconds)
    for suffix, size in _UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{suffix}")
    return " ".join(parts)
