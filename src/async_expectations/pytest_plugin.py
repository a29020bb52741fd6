"""pytest plugin providing the ``expectations`` fixture.

Registered through the ``pytest11`` entry point, so installing the package is
enough to make the fixture available.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from async_expectations.context import ExpectationContext


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "expectations_timeout",
        help="Default timeout in seconds for waits made through the expectations fixture.",
        default=None,
    )


@pytest.fixture()
def expectations(request: pytest.FixtureRequest) -> Iterator[ExpectationContext]:
    """Provide an ExpectationContext and verify it when the test finishes."""
    configured = request.config.getini("expectations_timeout")
    context = ExpectationContext(default_timeout=float(configured) if configured else None)
    yield context
    context.verify()
