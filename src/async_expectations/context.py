"""Test-case convenience surface for creating and waiting on expectations."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from datetime import timedelta

from async_expectations.durations import DEFAULT, to_seconds
from async_expectations.host.base import ExpectationHost
from async_expectations.host.models import ExpectationViolation, WaitOutcome
from async_expectations.host.threaded import ThreadedHost
from async_expectations.tracker import Expectation

logger = logging.getLogger(__name__)

Timeout = float | timedelta

# Called with the failure, or None on success, at the end of ``wait_for_all``.
CompletionHandler = Callable[["ExpectationFailedError | None"], None]


class ExpectationFailedError(AssertionError):
    """Raised when a wait fails or the host reports an API violation.

    Subclasses ``AssertionError`` so test runners report it as a failure.

    Attributes:
        outcome: The failed wait outcome, if the failure came from a wait.
        violations: Host violations included in the failure.
    """

    def __init__(
        self,
        message: str,
        outcome: WaitOutcome | None = None,
        violations: list[ExpectationViolation] | None = None,
    ) -> None:
        super().__init__(message)
        self.outcome = outcome
        self.violations = violations or []


class ExpectationContext:
    """Creates expectations bound to one host and waits on them.

    One context is meant to live for the duration of a single test. It
    remembers every expectation it creates so that :meth:`wait_for_all` and
    :meth:`verify` can find the ones that have not been waited on.

    Args:
        host: Host owning the expectation handles. Defaults to a new ThreadedHost.
        default_timeout: Timeout used when a wait is given none. Defaults to
            ``EXPECTATIONS_DEFAULT_TIMEOUT`` from the environment, else 1 second.

    Example:
        ```python
        context = ExpectationContext()
        first = context.expect("first")
        second = context.expect("second", count=2)

        worker.start(on_first=first.fulfill, on_item=second.fulfill)

        context.wait_for(first, second, timeout=seconds(5))
        ```
    """

    def __init__(
        self,
        host: ExpectationHost | None = None,
        default_timeout: Timeout | None = None,
    ) -> None:
        self._host = host or ThreadedHost()
        self._default_timeout = (
            to_seconds(default_timeout)
            if default_timeout is not None
            else float(os.getenv("EXPECTATIONS_DEFAULT_TIMEOUT", str(DEFAULT)))
        )
        if self._default_timeout < 0:
            raise ValueError("default_timeout must be non-negative")

        self._created: list[Expectation] = []
        self._waited: set[int] = set()

    @property
    def host(self) -> ExpectationHost:
        """Host owning this context's expectation handles."""
        return self._host

    @property
    def default_timeout(self) -> float:
        """Timeout in seconds used by waits that are not given one."""
        return self._default_timeout

    def expect(self, description: str, count: int | None = None) -> Expectation:
        """Create an expectation.

        Args:
            description: The expectation's description.
            count: Number of times ``fulfill()`` must be called. When given,
                fulfilling more often than ``count`` is reported as a failure.

        Returns:
            Expectation: The new tracker.

        Raises:
            ValueError: If count is less than 1.
        """
        handle = self._host.expectation(description)
        if count is not None:
            if count < 1:
                raise ValueError("count must be at least 1")
            handle.expected_fulfillment_count = count
            handle.assert_for_over_fulfill = True
        return self._track(Expectation(handle))

    def expect_not_to_occur(self, description: str) -> Expectation:
        """Create an inverted expectation: the test fails if it is fulfilled.

        Args:
            description: The expectation's description.

        Returns:
            Expectation: The new tracker.
        """
        handle = self._host.expectation(description)
        handle.is_inverted = True
        return self._track(Expectation(handle))

    def dont_expect(self, description: str) -> Expectation:
        """Alias of :meth:`expect_not_to_occur`."""
        return self.expect_not_to_occur(description)

    def wait_for(
        self,
        *expectations: Expectation,
        timeout: Timeout | None = None,
        enforce_order: bool = False,
    ) -> WaitOutcome:
        """Wait for the given expectations.

        Args:
            *expectations: Trackers to wait on.
            timeout: Seconds (or a timedelta) to wait. Defaults to ``default_timeout``.
            enforce_order: Require fulfillment in the given order.

        Returns:
            WaitOutcome: The successful outcome.

        Raises:
            ExpectationFailedError: If the wait failed or the host recorded violations.
            ValueError: If no expectations are given.
        """
        if not expectations:
            raise ValueError("wait_for requires at least one expectation")

        outcome = self._host.wait(
            [expectation.handle for expectation in expectations],
            self._resolve_timeout(timeout),
            enforce_order=enforce_order,
        )
        # Failed outcomes still count as waited; rejected calls do not.
        for expectation in expectations:
            self._waited.add(id(expectation))
        self._raise_for_failure(outcome)
        return outcome

    def wait_for_all(
        self,
        timeout: Timeout | None = None,
        handler: CompletionHandler | None = None,
    ) -> WaitOutcome:
        """Wait for every expectation of this context not yet waited on.

        Args:
            timeout: Seconds (or a timedelta) to wait. Defaults to ``default_timeout``.
            handler: Called with the failure, or None, once the wait ends.

        Returns:
            WaitOutcome: The successful outcome.

        Raises:
            ExpectationFailedError: If the wait failed or the host recorded violations.
            ValueError: If there is nothing left to wait on.
        """
        pending = self.pending()
        if not pending:
            raise ValueError("wait_for_all called without any pending expectations")

        try:
            outcome = self.wait_for(*pending, timeout=timeout)
        except ExpectationFailedError as exc:
            if handler is not None:
                handler(exc)
            raise

        if handler is not None:
            handler(None)
        return outcome

    async def wait_for_async(
        self,
        *expectations: Expectation,
        timeout: Timeout | None = None,
        enforce_order: bool = False,
    ) -> WaitOutcome:
        """Run :meth:`wait_for` in a worker thread so the event loop keeps running."""
        return await asyncio.to_thread(
            self.wait_for,
            *expectations,
            timeout=timeout,
            enforce_order=enforce_order,
        )

    async def wait_for_all_async(
        self,
        timeout: Timeout | None = None,
        handler: CompletionHandler | None = None,
    ) -> WaitOutcome:
        """Run :meth:`wait_for_all` in a worker thread so the event loop keeps running."""
        return await asyncio.to_thread(self.wait_for_all, timeout=timeout, handler=handler)

    def pending(self) -> list[Expectation]:
        """Expectations created by this context that have not been waited on."""
        return [e for e in self._created if id(e) not in self._waited]

    def verify(self) -> None:
        """Fail for host violations and for expectations never waited on.

        Raises:
            ExpectationFailedError: If anything is left to report.
        """
        violations = self._host.drain_violations()
        messages = [violation.message for violation in violations]

        unwaited = self.pending()
        if unwaited:
            names = ", ".join(f'"{e.description}"' for e in unwaited)
            messages.append(f"Failed due to unwaited expectations: {names}.")
            # Report once.
            self._waited.update(id(e) for e in unwaited)

        if messages:
            raise ExpectationFailedError("\n".join(messages), violations=violations)

    def _track(self, expectation: Expectation) -> Expectation:
        self._created.append(expectation)
        logger.debug(
            "Created expectation %r (count=%s, inverted=%s)",
            expectation.description,
            expectation.expected_count,
            expectation.handle.is_inverted,
        )
        return expectation

    def _resolve_timeout(self, timeout: Timeout | None) -> float:
        if timeout is None:
            return self._default_timeout
        return to_seconds(timeout)

    def _raise_for_failure(self, outcome: WaitOutcome) -> None:
        violations = self._host.drain_violations()
        messages = [] if outcome.succeeded else [outcome.describe()]
        messages.extend(violation.message for violation in violations)
        if messages:
            raise ExpectationFailedError(
                "\n".join(messages),
                outcome=None if outcome.succeeded else outcome,
                violations=violations,
            )
