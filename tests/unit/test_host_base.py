"""Tests for the host protocols.

These tests verify the protocols are runtime checkable, so fakes can stand in
for the threaded host.
"""

from __future__ import annotations

from async_expectations.host.base import ExpectationHandle, ExpectationHost
from async_expectations.host.models import WaitOutcome, WaitResult
from async_expectations.tracker import Expectation


class TestExpectationHandleProtocol:
    """Test cases for the ExpectationHandle protocol."""

    def test_fake_handle_conforms(self, make_handle) -> None:
        assert isinstance(make_handle(), ExpectationHandle)

    def test_object_without_fulfill_does_not_conform(self) -> None:
        class NotAHandle:
            description = "x"
            expected_fulfillment_count = 1
            assert_for_over_fulfill = True
            is_inverted = False

        assert not isinstance(NotAHandle(), ExpectationHandle)


class TestExpectationHostProtocol:
    """Test cases for the ExpectationHost protocol."""

    def test_minimal_host_conforms(self, make_handle) -> None:
        """A hand-written host is usable wherever ExpectationHost is expected."""

        class MinimalHost:
            def expectation(self, description):
                return make_handle(description)

            def wait(self, handles, timeout, enforce_order=False):
                return WaitOutcome(result=WaitResult.COMPLETED, timeout=timeout, elapsed=0.0)

            def drain_violations(self):
                return []

        host = MinimalHost()

        assert isinstance(host, ExpectationHost)
        tracker = Expectation(host.expectation("done"))
        tracker.fulfill()
        assert tracker.is_satisfied
