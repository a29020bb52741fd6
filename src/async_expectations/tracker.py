"""Fulfillment tracker wrapping a host expectation handle."""

from collections.abc import Callable
from typing import TypeVar

from async_expectations.host.base import ExpectationHandle

T = TypeVar("T")
R = TypeVar("R")

# The thunk handed to a finish callback.
CompletionThunk = Callable[[], None]

# The finish callback passed to a ``do`` body.
FinishCallback = Callable[[CompletionThunk], None]

# A body that receives a finish callback.
CompletionBody = Callable[[FinishCallback], R]

# Value-returning counterparts of the aliases above.
ReturningThunk = Callable[[], T]
ReturningFinishCallback = Callable[[ReturningThunk[T]], T]
ReturningBody = Callable[[ReturningFinishCallback[T]], R]


class InvalidHandleError(ValueError):
    """Raised when a tracker is created without a host handle."""

    pass


class Expectation:
    """
    Bookkeeping wrapper around a host expectation handle.

    Counts fulfillments and exposes whether the expected count has been
    reached. Waiting, timeouts and failure reporting stay with the host.

    Args:
        handle: The host expectation to wrap.

    Example:
        ```python
        finished = expectations.expect("finished")

        def on_response(response):
            finished.fulfill()

        client.get(url, callback=on_response)
        expectations.wait_for(finished)
        ```
    """

    def __init__(self, handle: ExpectationHandle) -> None:
        """Initialize the tracker.

        Args:
            handle: The host expectation to wrap.

        Raises:
            InvalidHandleError: If handle is None.
        """
        if handle is None:
            raise InvalidHandleError("Expectation requires a host expectation handle")

        self._handle = handle
        self._expected_count = handle.expected_fulfillment_count
        self._fulfilled_count = 0
        self._is_satisfied = False

    @property
    def handle(self) -> ExpectationHandle:
        """The wrapped host expectation."""
        return self._handle

    @property
    def description(self) -> str:
        """Description of the wrapped host expectation."""
        return self._handle.description

    @property
    def expected_count(self) -> int:
        """Number of fulfillments needed, captured when the tracker was created."""
        return self._expected_count

    @property
    def fulfilled_count(self) -> int:
        """Number of times ``fulfill()`` has been called on this tracker."""
        return self._fulfilled_count

    @property
    def is_satisfied(self) -> bool:
        """Whether ``fulfilled_count`` has reached ``expected_count``."""
        return self._is_satisfied

    def fulfill(self) -> None:
        """Fulfill the wrapped handle and update the counters.

        Over-fulfillment is reported by the host, never raised here.
        """
        self._handle.fulfill()
        self._fulfilled_count += 1
        if self._fulfilled_count >= self._expected_count:
            self._is_satisfied = True

    def do(self, body: CompletionBody[R]) -> R:
        """Run ``body`` with a callback that fulfills this expectation.

        ``body`` receives ``finish``; calling ``finish(thunk)`` runs ``thunk``
        and then fulfills the expectation once.

        Example:
            ```python
            loaded = expectations.expect("loaded")
            loaded.do(lambda finish: loader.load(
                on_done=lambda data: finish(lambda: results.append(data))
            ))
            ```

        Args:
            body: Callable receiving the finish callback.

        Returns:
            Whatever ``body`` returns.
        """

        def finish(thunk: CompletionThunk) -> None:
            thunk()
            self.fulfill()

        return body(finish)

    def do_returning(self, body: ReturningBody[T, R]) -> R:
        """Like :meth:`do`, but ``finish(thunk)`` hands back the thunk's value.

        The expectation is fulfilled after the thunk has run, on every exit
        path out of it.

        Args:
            body: Callable receiving the value-returning finish callback.

        Returns:
            Whatever ``body`` returns.
        """

        def finish(thunk: ReturningThunk[T]) -> T:
            try:
                return thunk()
            finally:
                self.fulfill()

        return body(finish)

    def to(self, body: CompletionBody[R]) -> R:
        """Alias of :meth:`do`."""
        return self.do(body)

    def to_returning(self, body: ReturningBody[T, R]) -> R:
        """Alias of :meth:`do_returning`."""
        return self.do_returning(body)
