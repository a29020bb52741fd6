"""Data structures describing the result of waiting on expectations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class WaitResult(str, Enum):
    """How a wait on a set of expectations ended.

    Attributes:
        COMPLETED: Every non-inverted expectation was fulfilled in time and
            no inverted expectation was fulfilled.
        TIMED_OUT: The timeout elapsed with unfulfilled expectations.
        INVERTED_FULFILLMENT: An inverted expectation was fulfilled.
        INCORRECT_ORDER: An ordered wait saw expectations fulfilled out of order.
    """

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    INVERTED_FULFILLMENT = "inverted_fulfillment"
    INCORRECT_ORDER = "incorrect_order"


def _quoted(descriptions: tuple[str, ...]) -> str:
    return ", ".join(f'"{description}"' for description in descriptions)


@dataclass(frozen=True, slots=True)
class WaitOutcome:
    """Result of a single host wait.

    This dataclass is immutable (frozen=True) and uses slots for memory efficiency.

    Attributes:
        result: How the wait ended.
        timeout: Timeout the wait was given, in seconds.
        elapsed: Time actually spent waiting, in seconds.
        expectations: Descriptions of the waited expectations, in wait order.
        unfulfilled: Descriptions of non-inverted expectations still unfulfilled.
        fulfilled_inverted: Descriptions of inverted expectations that were fulfilled.
        fulfillment_order: Descriptions of fulfilled expectations, in the order
            they became fulfilled.
    """

    result: WaitResult
    timeout: float
    elapsed: float
    expectations: tuple[str, ...] = field(default=())
    unfulfilled: tuple[str, ...] = field(default=())
    fulfilled_inverted: tuple[str, ...] = field(default=())
    fulfillment_order: tuple[str, ...] = field(default=())

    @property
    def succeeded(self) -> bool:
        """Whether the wait ended with ``WaitResult.COMPLETED``."""
        return self.result is WaitResult.COMPLETED

    def describe(self) -> str:
        """Human readable summary, phrased as a test failure message."""
        if self.result is WaitResult.TIMED_OUT:
            return (
                f"Exceeded timeout of {self.timeout} seconds, "
                f"with unfulfilled expectations: {_quoted(self.unfulfilled)}."
            )
        if self.result is WaitResult.INVERTED_FULFILLMENT:
            return f"Fulfilled inverted expectation {_quoted(self.fulfilled_inverted)}."
        if self.result is WaitResult.INCORRECT_ORDER:
            required, actual = self._first_out_of_order()
            return (
                "Failed due to expectation fulfilled in incorrect order: "
                f'requires "{required}", actually fulfilled "{actual}".'
            )
        return f"Fulfilled expectations: {_quoted(self.expectations)}."

    def _first_out_of_order(self) -> tuple[str, str]:
        # Inverted expectations are never part of an ordered completion.
        ordered = [d for d in self.expectations if d in self.fulfillment_order]
        for required, actual in zip(ordered, self.fulfillment_order, strict=False):
            if required != actual:
                return required, actual
        return ordered[0], self.fulfillment_order[0]


@dataclass(frozen=True, slots=True)
class ExpectationViolation:
    """An API misuse detected by the host, such as over-fulfillment.

    Attributes:
        description: Description of the expectation involved.
        message: Failure message to report.
    """

    description: str
    message: str
