from __future__ import annotations

from typing import Callable, Optional, TypeVar

from ..nodes import Boolean, Function, List, Node, Number
from ..types import BoomerangRuntimeError, BoomerangTypeError, BoomerangValueError, Environment

EvalFunc = Callable[[Node, Environment], Optional[Node]]

N = TypeVar("N", bound=Node)

def eval_value(node: Node, frame: Environment, eval_func: EvalFunc) -> Node:
    """Evaluate an expression position; statements yield nothing and are rejected."""
    value = eval_func(node, frame)

    if value is None:
        raise BoomerangRuntimeError(f"{node.kind} does not produce a value", node.line)

    return value

def expect_type(value: Node, expected: type[N], line: Optional[int] = None) -> N:
    if isinstance(value, expected):
        return value

    raise BoomerangTypeError(
        f"expected {expected.kind}, got {value.kind}",
        value.line if line is None else line,
    )

def expect_integer(value: Node, message: str, line: Optional[int] = None) -> int:
    """Require a Number holding an integral value; `message` explains a fractional one."""
    number = expect_type(value, Number, line)

    if not number.is_integer():
        raise BoomerangValueError(message, number.line if line is None else line)

    return int(number.value)

def expect_boolean(value: Node, context: str, line: int) -> bool:
    if isinstance(value, Boolean):
        return value.value

    raise BoomerangTypeError(f"invalid type for {context} condition: {value.describe()}", line)

def values_equal(lhs: Node, rhs: Node) -> bool:
    """Guest `==`: structural for data, identity for closures."""
    if isinstance(lhs, Function) or isinstance(rhs, Function):
        return lhs is rhs

    if isinstance(lhs, List) and isinstance(rhs, List):
        return len(lhs.items) == len(rhs.items) and all(
            values_equal(a, b) for a, b in zip(lhs.items, rhs.items)
        )

    return lhs == rhs

def current_function_frame(frame: Environment) -> Optional[Environment]:
    """Walk parents to find the nearest function-call frame marker."""
    cur: Optional[Environment] = frame

    while cur is not None:
        if cur.is_function_frame():
            return cur

        cur = cur.parent

    return None
