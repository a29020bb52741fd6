"""Duration helpers for expressing timeouts in seconds.

Every timeout accepted by this package is a float number of seconds. These
helpers let test code spell durations out in the unit it thinks in:

    ```python
    expectations.wait_for(done, timeout=milliseconds(250))
    expectations.wait_for(done, timeout=SMALL)
    ```
"""

from __future__ import annotations

from datetime import timedelta


def milliseconds(value: float) -> float:
    """Return ``value`` milliseconds expressed in seconds.

    Example:
        >>> milliseconds(3)
        0.003
    """
    return float(value) / 1000.0


def millisecond(value: float) -> float:
    """Singular form of :func:`milliseconds`, e.g. ``millisecond(1)``."""
    return milliseconds(value)


def seconds(value: float) -> float:
    """Return ``value`` seconds as a float.

    Example:
        >>> seconds(3)
        3.0
    """
    return float(value)


def second(value: float) -> float:
    """Singular form of :func:`seconds`, e.g. ``second(1)``."""
    return seconds(value)


def times(value: int) -> int:
    """Return ``value`` unchanged.

    Reads better in repeat loops: ``for _ in range(times(3)): done.fulfill()``.
    """
    return value


def time(value: int) -> int:
    """Singular form of :func:`times`, e.g. ``time(1)``."""
    return times(value)


def to_seconds(value: float | timedelta) -> float:
    """Normalize a timeout given as a number or a ``timedelta`` to seconds."""
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


# A tiny time interval of 1 millisecond.
TINY = milliseconds(1)

# A small time interval of 500 milliseconds.
SMALL = milliseconds(500)

# A default time interval of 1 second.
DEFAULT = seconds(1)

# A default timeout of 1 second.
TIMEOUT = seconds(1)

__all__ = [
    "DEFAULT",
    "SMALL",
    "TIMEOUT",
    "TINY",
    "millisecond",
    "milliseconds",
    "second",
    "seconds",
    "time",
    "times",
    "to_seconds",
]
