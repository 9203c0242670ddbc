"""Builtin functions and variables (len, print, etc.) registered via boomerang_ref.runtime.

Each builtin receives the caller's environment, the call's line number and the
*unevaluated* argument nodes, and evaluates them itself. That is what lets
`unwrap` skip its default unless the monad is empty.
"""

from __future__ import annotations

import math
import random
import sys

from .eval.expr import check_in_range
from .eval.helpers import eval_value, expect_integer, expect_type
from .evaluator import eval_node
from .nodes import BlockStatementReturnValue, Boolean, List, Node, Number, String, is_monad, monad
from .runtime import register_builtin, register_builtin_variable
from .types import BoomerangRangeError, BoomerangTypeError, Environment

def _eval(node: Node, env: Environment) -> Node:
    return eval_value(node, env, eval_node)

def _unwrap(value: Node, default: Node, env: Environment, line: int) -> Node:
    if not is_monad(value):
        raise BoomerangTypeError(f"expected Monad, got {value.kind}", line)

    if value.items:
        return value.items[0]

    return _eval(default, env)

@register_builtin("len", arity=1)
def builtin_len(env: Environment, line: int, args: list[Node]) -> Number:
    value = _eval(args[0], env)

    if not isinstance(value, (List, String)):
        raise BoomerangTypeError(f"invalid type for len: {value.describe()}", line)

    return Number(value.length(), line=line)

@register_builtin("unwrap", arity=2)
def builtin_unwrap(env: Environment, line: int, args: list[Node]) -> Node:
    return _unwrap(_eval(args[0], env), args[1], env, line)

@register_builtin("unwrap_all", arity=2)
def builtin_unwrap_all(env: Environment, line: int, args: list[Node]) -> List:
    monads = expect_type(_eval(args[0], env), List, line)
    return List([_unwrap(m, args[1], env, line) for m in monads.items], line=line)

@register_builtin("slice", arity=3)
def builtin_slice(env: Environment, line: int, args: list[Node]) -> Node:
    """Inclusive `[start, end]` sub-list or substring."""
    collection = _eval(args[0], env)

    if not isinstance(collection, (List, String)):
        raise BoomerangTypeError(f"invalid type for slice: {collection.describe()}", line)
    size = collection.length()

    start = expect_integer(_eval(args[1], env), "start index must be an integer", line)
    check_in_range(start, size, line)

    end = expect_integer(_eval(args[2], env), "end index must be an integer", line)
    check_in_range(end, size, line)

    if start > end:
        raise BoomerangRangeError("start index cannot be greater than end index", line)

    if isinstance(collection, String):
        return String(collection.value[start:end + 1], line=line)

    return List(collection.items[start:end + 1], line=line)

@register_builtin("range", arity=2)
def builtin_range(env: Environment, line: int, args: list[Node]) -> List:
    """Inclusive integer sequence, descending when start > end."""
    start = expect_integer(_eval(args[0], env), "start value must be an integer", line)
    end = expect_integer(_eval(args[1], env), "end value must be an integer", line)
    step = 1 if start <= end else -1

    return List([Number(i, line=line) for i in range(start, end + step, step)], line=line)

@register_builtin("random", arity=2)
def builtin_random(env: Environment, line: int, args: list[Node]) -> Number:
    low = expect_integer(_eval(args[0], env), "min value must be an integer", line)
    high = expect_integer(_eval(args[1], env), "max value must be an integer", line)

    if low > high:
        raise BoomerangRangeError(
            f"the minimum number, {low}, cannot be greater than the maximum number, {high}",
            line,
        )

    return Number(random.randint(low, high), line=line)

@register_builtin("print")
def builtin_print(env: Environment, line: int, args: list[Node]) -> BlockStatementReturnValue:
    rendered = [_eval(arg, env).render() for arg in args]
    print(*rendered)
    return monad(line=line)

@register_builtin("input", arity=1)
def builtin_input(env: Environment, line: int, args: list[Node]) -> String:
    prompt = expect_type(_eval(args[0], env), String, line)
    print(prompt.value, end="", flush=True)

    text = sys.stdin.readline()
    if text.endswith("\n"):
        text = text[:-1]

    return String(text, line=line)

@register_builtin("is_success", arity=1)
def builtin_is_success(env: Environment, line: int, args: list[Node]) -> Boolean:
    value = _eval(args[0], env)

    if not is_monad(value):
        raise BoomerangTypeError(f"expected Monad, got {value.kind}", line)

    return Boolean(len(value.items) == 1, line=line)

@register_builtin_variable("pi")
def builtin_pi() -> Number:
    return Number(math.pi)
