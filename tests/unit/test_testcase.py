"""Tests for the unittest integration."""

from __future__ import annotations

import threading
import unittest

from async_expectations.testcase import ExpectationTestCase


def _run(case_class: type[unittest.TestCase]) -> unittest.TestResult:
    suite = unittest.defaultTestLoader.loadTestsFromTestCase(case_class)
    result = unittest.TestResult()
    suite.run(result)
    return result


class TestExpectationTestCase:
    """Test cases for ExpectationTestCase."""

    def test_passing_case(self) -> None:
        """A fulfilled and waited expectation passes."""

        class Case(ExpectationTestCase):
            def test_fulfilled(self) -> None:
                done = self.expect("done")
                timer = threading.Timer(0.01, done.fulfill)
                timer.start()
                self.wait_for(done, timeout=5.0)
                timer.join()

        result = _run(Case)

        assert result.testsRun == 1
        assert result.wasSuccessful()

    def test_wait_for_all(self) -> None:
        class Case(ExpectationTestCase):
            def test_all(self) -> None:
                first = self.expect("first")
                second = self.expect("second", count=2)
                first.fulfill()
                second.fulfill()
                second.fulfill()
                self.wait_for_all(timeout=1.0)

        assert _run(Case).wasSuccessful()

    def test_timeout_fails_case(self) -> None:
        class Case(ExpectationTestCase):
            def test_never(self) -> None:
                self.wait_for(self.expect("never"), timeout=0.01)

        result = _run(Case)

        assert len(result.failures) == 1
        assert "Exceeded timeout" in result.failures[0][1]

    def test_inverted_expectation(self) -> None:
        class Case(ExpectationTestCase):
            def test_inverted(self) -> None:
                self.wait_for(self.expect_not_to_occur("crash"), timeout=0.01)

            def test_alias(self) -> None:
                self.wait_for(self.dont_expect("crash"), timeout=0.01)

        result = _run(Case)

        assert result.testsRun == 2
        assert result.wasSuccessful()

    def test_unwaited_expectation_fails_in_cleanup(self) -> None:
        class Case(ExpectationTestCase):
            def test_forgets_to_wait(self) -> None:
                self.expect("forgotten").fulfill()

        result = _run(Case)

        assert not result.wasSuccessful()

    def test_helper_methods_documented(self) -> None:
        """Every public helper carries a docstring."""
        for name in ("expect", "expect_not_to_occur", "dont_expect", "wait_for", "wait_for_all"):
            assert getattr(ExpectationTestCase, name).__doc__, f"{name} has no docstring"

    def test_class_level_timeout(self) -> None:
        class Case(ExpectationTestCase):
            expectations_timeout = 0.25

            def test_timeout(self) -> None:
                assert self.expectations.default_timeout == 0.25

        assert _run(Case).wasSuccessful()
