"""Protocols for the host expectation machinery.

The tracker and the test-case helpers never talk to a concrete host directly.
They depend on these two protocols, so a test double or another host
implementation can be dropped in without touching the wrapper code.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from async_expectations.host.models import ExpectationViolation, WaitOutcome


@runtime_checkable
class ExpectationHandle(Protocol):
    """A host-owned expectation that can be fulfilled a configured number of times.

    Attributes:
        description: Human readable name used in failure messages.
        expected_fulfillment_count: Number of ``fulfill()`` calls that satisfy it.
        assert_for_over_fulfill: Whether fulfilling past the expected count
            is reported as a failure.
        is_inverted: Whether the expectation must *not* be fulfilled.

    Example:
        >>> from async_expectations.host import ThreadedHost
        >>> isinstance(ThreadedHost().expectation("done"), ExpectationHandle)
        True
    """

    description: str
    expected_fulfillment_count: int
    assert_for_over_fulfill: bool
    is_inverted: bool

    def fulfill(self) -> None:
        """Signal one unit of progress towards satisfying the expectation."""
        ...


@runtime_checkable
class ExpectationHost(Protocol):
    """Protocol for the component that owns handles, waiting and failure reporting."""

    def expectation(self, description: str) -> ExpectationHandle:
        """Create a new handle with an expected fulfillment count of 1.

        Args:
            description: Human readable name of the expectation.

        Returns:
            A fresh, unfulfilled handle.
        """
        ...

    def wait(
        self,
        handles: Sequence[ExpectationHandle],
        timeout: float,
        enforce_order: bool = False,
    ) -> WaitOutcome:
        """Block until the handles are satisfied or the timeout elapses.

        Failed outcomes are returned, not raised.

        Args:
            handles: Handles to wait on; must not be empty.
            timeout: Maximum time to block, in seconds.
            enforce_order: Require the handles to be fulfilled in the given order.

        Returns:
            The outcome of the wait.
        """
        ...

    def drain_violations(self) -> list[ExpectationViolation]:
        """Return and forget every API violation recorded so far."""
        ...
