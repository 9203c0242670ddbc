from __future__ import annotations

import pytest

from tests.support.harness import (
    BoomerangNameError,
    BoomerangSyntaxError,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param('"hello";', ("string", "hello"), None, id="plain"),
    pytest.param('"";', ("string", ""), None, id="empty"),
    pytest.param('name = "Ada"; "hi {name}";', ("string", "hi Ada"), None, id="interp-identifier"),
    pytest.param('"sum: {1 + 2}";', ("string", "sum: 3"), None, id="interp-expression"),
    pytest.param('"{1}{2}";', ("string", "12"), None, id="interp-adjacent"),
    pytest.param('xs = (1, 2); "xs = {xs}";', ("string", "xs = (1, 2)"), None, id="interp-list"),
    pytest.param('"{true} {1.5}";', ("string", "true 1.5"), None, id="interp-bool-and-fraction"),
    pytest.param('"{len((1, 2, 3))} items";', ("string", "3 items"), None, id="interp-builtin-call"),
    pytest.param(
        'f = func(x) { x * 2; }; "{unwrap(f(2), 0)}";',
        ("string", "4"),
        None,
        id="interp-function-call",
    ),
    pytest.param('x = 12; len("{x}");', ("number", 2), None, id="len-of-interpolated"),
    pytest.param(
        'greet = func(n) { "hello, {n}"; }; unwrap(greet("Bo"), "");',
        ("string", "hello, Bo"),
        None,
        id="interp-in-function-scope",
    ),
    pytest.param('"a" + "{1 + 1}";', ("string", "a2"), None, id="interp-concat"),
    pytest.param('"a\\nb";', ("string", "a\nb"), None, id="escape-newline"),
    pytest.param('"a\\tb";', ("string", "a\tb"), None, id="escape-tab"),
    pytest.param('"say \\"hi\\"";', ("string", 'say "hi"'), None, id="escape-quote"),
    pytest.param('"back\\\\slash";', ("string", "back\\slash"), None, id="escape-backslash"),
    pytest.param('"\\{x}";', ("string", "{x}"), None, id="escaped-brace"),
    pytest.param('"a}b";', ("string", "a}b"), None, id="lone-closing-brace"),
    pytest.param('"ab" == "a" + "b";', ("bool", True), None, id="string-equality"),
    pytest.param('"{missing}";', None, BoomerangNameError, id="interp-undefined"),
    pytest.param('"{1 +}";', None, BoomerangSyntaxError, id="interp-bad-expression"),
    pytest.param('"{}";', None, BoomerangSyntaxError, id="interp-empty"),
    pytest.param('"{x";', None, BoomerangSyntaxError, id="interp-unterminated"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_strings(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
