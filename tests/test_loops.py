from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    BoomerangNameError,
    BoomerangTypeError,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param(
        "for x in (1, 2, 3) { x * 2; };",
        ("list", [[2], [4], [6]]),
        None,
        id="for-collects-block-results",
    ),
    pytest.param(
        "unwrap_all(for x in (1, 2, 3) { x * 2; }, 0);",
        ("list", [2, 4, 6]),
        None,
        id="for-unwrap-all",
    ),
    pytest.param(
        "for x in (1, 2, 3) { if x == 2 { continue; }; x; };",
        ("list", [[1], [], [3]]),
        None,
        id="for-continue-contributes-empty",
    ),
    pytest.param(
        "for x in (1, 2, 3) { if x == 2 { break; }; x; };",
        ("list", [[1]]),
        None,
        id="for-break-stops",
    ),
    pytest.param(
        'for c in "abc" { c; };',
        ("list", [["a"], ["b"], ["c"]]),
        None,
        id="for-over-string",
    ),
    pytest.param("for x in () { x; };", ("list", []), None, id="for-over-empty"),
    pytest.param(
        "for x in (1, 2) { y = x; };",
        ("list", [[], []]),
        None,
        id="for-body-without-value",
    ),
    pytest.param(
        "total = 0; for x in range(1, 4) { total = total + x; }; total;",
        ("number", 10),
        None,
        id="for-updates-outer",
    ),
    pytest.param(
        dedent(
            """\
            count = 0;
            for a in (1, 2) {
                for b in (1, 2, 3) {
                    if b == 2 { break; };
                    count = count + 1;
                };
            };
            count;
            """
        ),
        ("number", 2),
        None,
        id="break-only-exits-inner-loop",
    ),
    pytest.param(
        dedent(
            """\
            find = func(xs, target) {
                for x in xs {
                    if x == target { return "found"; };
                };
                "missing";
            };
            unwrap(find((1, 2, 3), 2), "") + " " + unwrap(find((1, 2, 3), 9), "");
            """
        ),
        ("string", "found missing"),
        None,
        id="return-from-for",
    ),
    pytest.param(
        dedent(
            """\
            fns = ();
            for i in (1, 2) { fns = fns <- func() { i; }; };
            unwrap(fns @ 0 <- (), 0) * 10 + unwrap(fns @ 1 <- (), 0);
            """
        ),
        ("number", 12),
        None,
        id="closures-capture-iteration-binding",
    ),
    pytest.param(
        "for x in (1, 2) { when x { is 1 { \"one\"; } else { \"other\"; } }; };",
        ("list", [[["one"]], [["other"]]]),
        None,
        id="for-body-when-results",
    ),
    pytest.param("for x in 5 { x; };", None, BoomerangTypeError, id="for-non-iterable"),
    pytest.param("for x in (1,) { x; }; x;", None, BoomerangNameError, id="for-variable-scope"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_loops(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
