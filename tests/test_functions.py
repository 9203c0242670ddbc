from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    BoomerangArityError,
    BoomerangRuntimeError,
    BoomerangTypeError,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param(
        "add = func(a, b) { a + b; }; add(1, 2);",
        ("monad", 3),
        None,
        id="call-returns-monad",
    ),
    pytest.param(
        "add = func(a, b) { a + b; }; add <- (1, 2);",
        ("monad", 3),
        None,
        id="send-returns-monad",
    ),
    pytest.param(
        "divide = func(a, b) { a / b; }; divide <- (10, 2);",
        ("monad", 5),
        None,
        id="send-divide",
    ),
    pytest.param("f = func() {}; f <- ();", ("monad", None), None, id="empty-body-send"),
    pytest.param("f = func() {}; f();", ("monad", None), None, id="empty-body-call"),
    pytest.param(
        "f = func() { x = 1; }; f();",
        ("monad", None),
        None,
        id="assignment-last-yields-empty",
    ),
    pytest.param(
        "double = func(x) { x * 2; }; double <- (4,);",
        ("monad", 8),
        None,
        id="send-single-argument",
    ),
    pytest.param(
        "f = func(a, b = 10) { a + b; }; f(1);",
        ("monad", 11),
        None,
        id="default-param-used",
    ),
    pytest.param(
        "f = func(a, b = 10) { a + b; }; f(1, 2);",
        ("monad", 3),
        None,
        id="default-param-overridden",
    ),
    pytest.param(
        "f = func(a, b = a * 2) { a + b; }; f(3);",
        ("monad", 9),
        None,
        id="default-sees-earlier-param",
    ),
    pytest.param(
        dedent(
            """\
            sign = func(n) {
                if n > 0 { return "pos"; };
                "non-pos";
            };
            unwrap(sign(1), "") + "/" + unwrap(sign(-1), "");
            """
        ),
        ("string", "pos/non-pos"),
        None,
        id="early-return",
    ),
    pytest.param(
        "f = func() { return; 5; }; f();",
        ("monad", None),
        None,
        id="bare-return-is-empty",
    ),
    pytest.param(
        dedent(
            """\
            fact = func(n) {
                if n <= 1 { return 1; };
                n * unwrap(fact(n - 1), 0);
            };
            unwrap(fact(5), 0);
            """
        ),
        ("number", 120),
        None,
        id="recursion",
    ),
    pytest.param(
        dedent(
            """\
            make_adder = func(n) { func(x) { x + n; }; };
            add5 = unwrap(make_adder(5), 0);
            unwrap(add5(10), 0);
            """
        ),
        ("number", 15),
        None,
        id="closure-captures-argument",
    ),
    pytest.param(
        dedent(
            """\
            make_counter = func() {
                count = 0;
                func() { count = count + 1; count; };
            };
            next = unwrap(make_counter(), 0);
            next();
            next();
            unwrap(next(), 0);
            """
        ),
        ("number", 3),
        None,
        id="closure-updates-captured-variable",
    ),
    pytest.param(
        dedent(
            """\
            apply = func(fn, v) { unwrap(fn(v), 0); };
            double = func(x) { x * 2; };
            unwrap(apply(double, 4), 0);
            """
        ),
        ("number", 8),
        None,
        id="function-as-argument",
    ),
    pytest.param(
        "func(a, b = 1) { a; };",
        ("function", ["a", "b"]),
        None,
        id="function-literal-value",
    ),
    pytest.param(
        "func(a, b) { a; };",
        ("render", "func(a,b){...}"),
        None,
        id="function-render",
    ),
    pytest.param(
        "f = func() { print; }; unwrap(f(), 0);",
        ("render", "<built-in function print>"),
        None,
        id="builtin-reference-from-body",
    ),
    pytest.param("f = func(a) { a; }; f(1, 2);", None, BoomerangArityError, id="too-many-args"),
    pytest.param("f = func(a, b) { a; }; f(1);", None, BoomerangArityError, id="missing-arg"),
    pytest.param(
        "f = func(a, b) { a; }; f <- (1,);",
        None,
        BoomerangArityError,
        id="missing-arg-via-send",
    ),
    pytest.param("x = 5; x(1);", None, BoomerangTypeError, id="call-non-function"),
    pytest.param("5 <- (1,);", None, BoomerangTypeError, id="send-to-number"),
    pytest.param(
        "f = func(a) { a; }; f <- 1;",
        None,
        BoomerangTypeError,
        id="send-non-list-to-function",
    ),
    pytest.param(
        "f = func() { break; }; f();",
        None,
        BoomerangRuntimeError,
        id="break-escaping-function",
    ),
    pytest.param(
        "f = func() { break; }; for x in (1,) { f(); };",
        None,
        BoomerangRuntimeError,
        id="break-escaping-function-inside-loop",
    ),
    pytest.param(
        "f = func() { continue; }; f();",
        None,
        BoomerangRuntimeError,
        id="continue-escaping-function",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_functions(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
