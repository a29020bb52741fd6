"""Threaded expectation host.

This module implements the reference host: expectations that can be fulfilled
from any thread, and a blocking wait built on a shared ``threading.Condition``.
"""

from __future__ import annotations

import itertools
import json
import logging
import threading
import time
from collections.abc import Sequence
from datetime import UTC, datetime

from async_expectations.host.models import ExpectationViolation, WaitOutcome, WaitResult

logger = logging.getLogger(__name__)


class ThreadedExpectation:
    """Expectation handle owned by a :class:`ThreadedHost`.

    Instances are created through :meth:`ThreadedHost.expectation`; all
    handles of a host share the host's condition variable, so ``fulfill()``
    is safe to call from any thread.

    Attributes:
        description: Human readable name used in failure messages.
        assert_for_over_fulfill: Report fulfilling past the expected count.
        is_inverted: The expectation must not be fulfilled.
    """

    def __init__(self, host: ThreadedHost, description: str) -> None:
        self._host = host
        self.description = description
        self.assert_for_over_fulfill = True
        self.is_inverted = False
        self._expected_fulfillment_count = 1
        self._fulfillment_count = 0
        self._fulfilled_sequence: int | None = None
        self._wait_ended = False

    @property
    def expected_fulfillment_count(self) -> int:
        """Number of ``fulfill()`` calls needed to satisfy the expectation."""
        return self._expected_fulfillment_count

    @expected_fulfillment_count.setter
    def expected_fulfillment_count(self, value: int) -> None:
        if value < 1:
            raise ValueError("expected_fulfillment_count must be at least 1")
        self._expected_fulfillment_count = value

    @property
    def fulfillment_count(self) -> int:
        """Number of times ``fulfill()`` has been called."""
        return self._fulfillment_count

    @property
    def is_fulfilled(self) -> bool:
        """Whether the expected fulfillment count has been reached."""
        return self._fulfilled_sequence is not None

    def fulfill(self) -> None:
        """Record one fulfillment and wake up any waiter."""
        with self._host._condition:
            if self._wait_ended and self.is_fulfilled:
                self._host._record_violation(
                    self.description,
                    f'API violation - called fulfill() on "{self.description}" '
                    "after the wait context has ended.",
                )
                return

            self._fulfillment_count += 1
            if (
                self._fulfillment_count > self._expected_fulfillment_count
                and self.assert_for_over_fulfill
            ):
                self._host._record_violation(
                    self.description,
                    f'API violation - multiple calls made to fulfill() for "{self.description}".',
                )

            if (
                self._fulfilled_sequence is None
                and self._fulfillment_count >= self._expected_fulfillment_count
            ):
                self._fulfilled_sequence = next(self._host._sequence)
                self._host._condition.notify_all()


class ThreadedHost:
    """Host that creates :class:`ThreadedExpectation` handles and waits on them.

    The wait is a plain condition-variable wait with a deadline: it wakes on
    every fulfillment, re-evaluates the handles, and gives up once the
    timeout has elapsed. Failed waits are returned as :class:`WaitOutcome`
    values; API violations are kept until :meth:`drain_violations` is called.

    Example:
        ```python
        host = ThreadedHost()
        done = host.expectation("done")
        threading.Timer(0.01, done.fulfill).start()

        outcome = host.wait([done], timeout=1.0)
        assert outcome.succeeded
        ```
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._sequence = itertools.count()
        self._violations: list[ExpectationViolation] = []

    def expectation(self, description: str) -> ThreadedExpectation:
        """Create a new handle bound to this host.

        Args:
            description: Human readable name of the expectation.

        Returns:
            ThreadedExpectation: A fresh handle expecting a single fulfillment.
        """
        return ThreadedExpectation(self, description)

    def wait(
        self,
        handles: Sequence[ThreadedExpectation],
        timeout: float,
        enforce_order: bool = False,
    ) -> WaitOutcome:
        """Block until the handles are satisfied or the timeout elapses.

        Args:
            handles: Handles created by this host.
            timeout: Maximum time to block, in seconds.
            enforce_order: Require non-inverted handles to be fulfilled in
                the order they are given.

        Returns:
            WaitOutcome: How the wait ended.

        Raises:
            ValueError: If no handles are given or the timeout is negative.
        """
        if not handles:
            raise ValueError("wait requires at least one expectation")
        if timeout < 0:
            raise ValueError("timeout must be non-negative")

        required = [h for h in handles if not h.is_inverted]
        inverted = [h for h in handles if h.is_inverted]
        start = time.monotonic()
        deadline = start + timeout

        with self._condition:
            while True:
                fulfilled_inverted = [h for h in inverted if h.is_fulfilled]
                if fulfilled_inverted:
                    result = WaitResult.INVERTED_FULFILLMENT
                    break

                if required and all(h.is_fulfilled for h in required):
                    result = WaitResult.COMPLETED
                    if enforce_order and not all(
                        fulfilled is expected
                        for fulfilled, expected in zip(
                            self._fulfillment_order(required), required, strict=True
                        )
                    ):
                        result = WaitResult.INCORRECT_ORDER
                    break

                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    # Only inverted handles: surviving the timeout is success.
                    result = WaitResult.TIMED_OUT if required else WaitResult.COMPLETED
                    break

                self._condition.wait(remaining)

            for handle in handles:
                handle._wait_ended = True

            outcome = WaitOutcome(
                result=result,
                timeout=timeout,
                elapsed=time.monotonic() - start,
                expectations=tuple(h.description for h in handles),
                unfulfilled=tuple(h.description for h in required if not h.is_fulfilled),
                fulfilled_inverted=tuple(h.description for h in fulfilled_inverted),
                fulfillment_order=tuple(
                    h.description for h in self._fulfillment_order(required)
                ),
            )

        self._log_outcome(outcome)
        return outcome

    def drain_violations(self) -> list[ExpectationViolation]:
        """Return and clear the API violations recorded so far.

        Returns:
            list[ExpectationViolation]: Violations in the order they happened.
        """
        with self._condition:
            violations = list(self._violations)
            self._violations.clear()
        return violations

    def _fulfillment_order(
        self, handles: Sequence[ThreadedExpectation]
    ) -> list[ThreadedExpectation]:
        """Fulfilled handles, sorted by when they became fulfilled."""
        fulfilled = [h for h in handles if h._fulfilled_sequence is not None]
        fulfilled.sort(key=lambda h: h._fulfilled_sequence or 0)
        return fulfilled

    def _record_violation(self, description: str, message: str) -> None:
        """Store a violation; the caller holds the condition."""
        self._violations.append(ExpectationViolation(description=description, message=message))
        log_entry = {
            "event": "expectation_violation",
            "expectation": description,
            "message": message,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        logger.warning(json.dumps(log_entry))

    def _log_outcome(self, outcome: WaitOutcome) -> None:
        """Log the end of a wait with structured JSON."""
        log_entry = {
            "event": "expectation_wait_finished",
            "result": outcome.result.value,
            "expectations": list(outcome.expectations),
            "unfulfilled": list(outcome.unfulfilled),
            "timeout": outcome.timeout,
            "elapsed_ms": round(outcome.elapsed * 1000, 3),
            "timestamp": datetime.now(UTC).isoformat(),
        }
        if outcome.succeeded:
            logger.info(json.dumps(log_entry))
        else:
            logger.warning(json.dumps(log_entry))
