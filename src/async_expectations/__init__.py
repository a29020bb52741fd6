"""Async-Expectations.

Friendlier expectations for testing asynchronous code: named expectations,
default timeouts, closure-based fulfillment helpers and duration helpers,
layered over a pluggable host that owns waiting and failure reporting.
"""

from async_expectations.context import ExpectationContext, ExpectationFailedError
from async_expectations.durations import (
    DEFAULT,
    SMALL,
    TIMEOUT,
    TINY,
    millisecond,
    milliseconds,
    second,
    seconds,
    times,
)
from async_expectations.host import (
    ExpectationHandle,
    ExpectationHost,
    ThreadedHost,
    WaitOutcome,
    WaitResult,
)
from async_expectations.testcase import ExpectationTestCase
from async_expectations.tracker import Expectation, InvalidHandleError

__version__ = "0.1.0"

__all__ = [
    "DEFAULT",
    "SMALL",
    "TIMEOUT",
    "TINY",
    "Expectation",
    "ExpectationContext",
    "ExpectationFailedError",
    "ExpectationHandle",
    "ExpectationHost",
    "ExpectationTestCase",
    "InvalidHandleError",
    "ThreadedHost",
    "WaitOutcome",
    "WaitResult",
    "millisecond",
    "milliseconds",
    "second",
    "seconds",
    "times",
]
