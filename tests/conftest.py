"""Pytest configuration and fixtures for async-expectations tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from async_expectations.host import ThreadedHost

pytest_plugins = ["pytester"]


@pytest.fixture()
def host() -> ThreadedHost:
    """Provide a fresh threaded host."""
    return ThreadedHost()


@pytest.fixture()
def call_log() -> list[str]:
    """Shared log that fake handles and test thunks append to."""
    return []


@pytest.fixture()
def make_handle(call_log: list[str]) -> Callable[..., object]:
    """Factory for fake host handles that record their fulfill calls."""

    class FakeHandle:
        def __init__(self, description: str, expected_fulfillment_count: int) -> None:
            self.description = description
            self.expected_fulfillment_count = expected_fulfillment_count
            self.assert_for_over_fulfill = True
            self.is_inverted = False
            self.fulfill_calls = 0

        def fulfill(self) -> None:
            self.fulfill_calls += 1
            call_log.append("fulfill")

    def factory(description: str = "fake", expected_fulfillment_count: int = 1) -> FakeHandle:
        return FakeHandle(description, expected_fulfillment_count)

    return factory
