"""Host expectation machinery: protocols, wait outcomes and the threaded host."""

from async_expectations.host.base import ExpectationHandle, ExpectationHost
from async_expectations.host.models import ExpectationViolation, WaitOutcome, WaitResult
from async_expectations.host.threaded import ThreadedExpectation, ThreadedHost

__all__ = [
    "ExpectationHandle",
    "ExpectationHost",
    "ExpectationViolation",
    "ThreadedExpectation",
    "ThreadedHost",
    "WaitOutcome",
    "WaitResult",
]
