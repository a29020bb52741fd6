"""Integration tests for the ``expectations`` pytest fixture."""

from __future__ import annotations


class TestExpectationsFixture:
    """Test cases run through pytester with the installed plugin."""

    def test_fixture_passes_for_waited_expectation(self, pytester) -> None:
        pytester.makepyfile(
            """
            import threading

            def test_done(expectations):
                done = expectations.expect("done")
                threading.Timer(0.01, done.fulfill).start()
                expectations.wait_for(done, timeout=5.0)
            """
        )

        result = pytester.runpytest("-p", "no:cacheprovider")

        result.assert_outcomes(passed=1)

    def test_unwaited_expectation_errors_at_teardown(self, pytester) -> None:
        pytester.makepyfile(
            """
            def test_forgets(expectations):
                expectations.expect("forgotten")
            """
        )

        result = pytester.runpytest("-p", "no:cacheprovider")

        result.assert_outcomes(passed=1, errors=1)
        result.stdout.fnmatch_lines(['*unwaited expectations: "forgotten"*'])

    def test_timeout_fails_test(self, pytester) -> None:
        pytester.makepyfile(
            """
            def test_never(expectations):
                expectations.wait_for(expectations.expect("never"), timeout=0.01)
            """
        )

        result = pytester.runpytest("-p", "no:cacheprovider")

        result.assert_outcomes(failed=1)
        result.stdout.fnmatch_lines(["*Exceeded timeout of 0.01 seconds*"])

    def test_ini_timeout(self, pytester) -> None:
        pytester.makeini(
            """
            [pytest]
            expectations_timeout = 0.2
            """
        )
        pytester.makepyfile(
            """
            def test_timeout(expectations):
                assert expectations.default_timeout == 0.2
            """
        )

        result = pytester.runpytest("-p", "no:cacheprovider")

        result.assert_outcomes(passed=1)
