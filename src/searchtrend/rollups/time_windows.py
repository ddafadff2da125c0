"""Trailing window bounds over a date-sorted sequence.

Windows are counted in observations, not calendar days: the "7-day" window
is the last seven sorted rows, whatever dates they carry.
All bounds are half-open ``(start, stop)`` index pairs.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "current_window_bounds",
    "previous_window_bounds",
    "validate_window_size",
]

DEFAULT_WINDOW_SIZE = 7


def validate_window_size(window_size: int) -> int:
    """Return ``window_size`` or raise ``ValueError`` if it is not a positive int."""
    if isinstance(window_size, bool) or not isinstance(window_size, int):
        raise ValueError(f"window_size must be an integer, got {window_size!r}")
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")
    return window_size


def current_window_bounds(index: int, window_size: int = DEFAULT_WINDOW_SIZE) -> tuple[int, int]:
    """Bounds of the window ending at ``index`` (inclusive).

    The window grows from one element until it reaches ``window_size``,
    then slides.

    Examples
    --------
    >>> current_window_bounds(0)
    (0, 1)
    >>> current_window_bounds(9)
    (3, 10)
    """
    start = max(0, index - (window_size - 1))
    return start, index + 1


def previous_window_bounds(index: int, window_size: int = DEFAULT_WINDOW_SIZE) -> tuple[int, int]:
    """Bounds of the ``window_size`` elements just before the current window.

    Near the start of the sequence the range is shorter than ``window_size``
    (possibly empty); callers decide what a short range means.

    Examples
    --------
    >>> previous_window_bounds(6)
    (0, 0)
    >>> previous_window_bounds(13)
    (0, 7)
    """
    window_start, _ = current_window_bounds(index, window_size)
    return max(0, window_start - window_size), window_start
