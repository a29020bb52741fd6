"""unittest integration."""

from __future__ import annotations

import unittest

from async_expectations.context import (
    CompletionHandler,
    ExpectationContext,
    Timeout,
)
from async_expectations.host.models import WaitOutcome
from async_expectations.tracker import Expectation


class ExpectationTestCase(unittest.TestCase):
    """``unittest.TestCase`` with expectation helpers.

    Each test gets a fresh :class:`ExpectationContext`. Expectations that were
    never waited on, and violations reported by the host, fail the test during
    cleanup.

    Example:
        ```python
        class TestDownloader(ExpectationTestCase):
            def test_download_completes(self):
                done = self.expect("download completes")
                Downloader(on_complete=done.fulfill).start()
                self.wait_for(done, timeout=seconds(5))
        ```
    """

    expectations_timeout: Timeout | None = None

    def setUp(self) -> None:
        super().setUp()
        self.expectations = ExpectationContext(default_timeout=self.expectations_timeout)
        self.addCleanup(self.expectations.verify)

    def expect(self, description: str, count: int | None = None) -> Expectation:
        """Create an expectation; see :meth:`ExpectationContext.expect`."""
        return self.expectations.expect(description, count=count)

    def expect_not_to_occur(self, description: str) -> Expectation:
        """Create an inverted expectation that fails the test if fulfilled."""
        return self.expectations.expect_not_to_occur(description)

    def dont_expect(self, description: str) -> Expectation:
        """Alias of :meth:`expect_not_to_occur`."""
        return self.expectations.dont_expect(description)

    def wait_for(
        self,
        *expectations: Expectation,
        timeout: Timeout | None = None,
        enforce_order: bool = False,
    ) -> WaitOutcome:
        """Wait for the given expectations; see :meth:`ExpectationContext.wait_for`."""
        return self.expectations.wait_for(
            *expectations, timeout=timeout, enforce_order=enforce_order
        )

    def wait_for_all(
        self,
        timeout: Timeout | None = None,
        handler: CompletionHandler | None = None,
    ) -> WaitOutcome:
        """Wait for every expectation not yet waited on."""
        return self.expectations.wait_for_all(timeout=timeout, handler=handler)
