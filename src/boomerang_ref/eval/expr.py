from __future__ import annotations

import math
import operator
from typing import Callable, Dict, Tuple

from ..nodes import (
    BinaryExpression,
    Boolean,
    BuiltinFunctionReference,
    Function,
    List,
    Node,
    Number,
    String,
    UnaryExpression,
)
from ..runtime import dispatch
from ..types import BoomerangRangeError, BoomerangRuntimeError, BoomerangTypeError, BoomerangValueError, Environment
from .fn import call_function
from .helpers import EvalFunc, eval_value, values_equal

# operator -> (verb used in diagnostics, implementation)
_ARITHMETIC: Dict[str, Tuple[str, Callable[[float, float], float]]] = {
    "+": ("add", operator.add),
    "-": ("subtract", operator.sub),
    "*": ("multiply", operator.mul),
    "/": ("divide", operator.truediv),
    "%": ("modulo", math.fmod),
}

_ORDERING: Dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}

def eval_binary(node: BinaryExpression, frame: Environment, eval_func: EvalFunc) -> Node:
    lhs = eval_value(node.left, frame, eval_func)
    rhs = eval_value(node.right, frame, eval_func)

    return apply_binary_operator(node.operator, lhs, rhs, node.line, frame, eval_func)

def apply_binary_operator(
    op: str,
    lhs: Node,
    rhs: Node,
    line: int,
    frame: Environment,
    eval_func: EvalFunc,
) -> Node:
    if op in _ARITHMETIC:
        return _arithmetic(op, lhs, rhs, line)

    if op in _ORDERING:
        if isinstance(lhs, Number) and isinstance(rhs, Number):
            return Boolean(_ORDERING[op](lhs.value, rhs.value), line=line)
        raise BoomerangTypeError(f"cannot compare types {lhs.describe()} and {rhs.describe()}", line)

    match op:
        case "==":
            return Boolean(values_equal(lhs, rhs), line=line)
        case "!=":
            return Boolean(not values_equal(lhs, rhs), line=line)
        case "and" | "or":
            if isinstance(lhs, Boolean) and isinstance(rhs, Boolean):
                result = (lhs.value and rhs.value) if op == "and" else (lhs.value or rhs.value)
                return Boolean(result, line=line)
            raise BoomerangTypeError(f"invalid types for {op}: {lhs.describe()} and {rhs.describe()}", line)
        case "in":
            return Boolean(_contains(lhs, rhs, line), line=line)
        case "@":
            return index_value(lhs, rhs, line)
        case "<-":
            return send(lhs, rhs, line, frame, eval_func)

    raise BoomerangRuntimeError(f"invalid binary operator: {op}", line)

def _arithmetic(op: str, lhs: Node, rhs: Node, line: int) -> Node:
    verb, fn = _ARITHMETIC[op]

    if isinstance(lhs, Number) and isinstance(rhs, Number):
        if op in ("/", "%") and rhs.value == 0:
            raise BoomerangValueError("cannot divide by zero", line)
        return Number(fn(lhs.value, rhs.value), line=line)

    if op == "+" and isinstance(lhs, String) and isinstance(rhs, String):
        return String(lhs.value + rhs.value, line=line)

    raise BoomerangTypeError(f"cannot {verb} types {lhs.describe()} and {rhs.describe()}", line)

def _contains(needle: Node, haystack: Node, line: int) -> bool:
    match haystack:
        case List(items=items):
            return any(values_equal(needle, item) for item in items)
        case String(value=text) if isinstance(needle, String):
            return needle.value in text

    raise BoomerangTypeError(f"invalid types for in: {needle.describe()} and {haystack.describe()}", line)

def index_value(collection: Node, index: Node, line: int) -> Node:
    """`collection @ index` for Lists and Strings."""
    if not isinstance(collection, (List, String)) or not isinstance(index, Number):
        raise BoomerangTypeError(
            f"invalid types for index: {collection.describe()} and {index.describe()}",
            line,
        )

    if not index.is_integer():
        raise BoomerangValueError("list index must be an integer", line)

    pos = int(index.value)
    check_in_range(pos, collection.length(), line)

    if isinstance(collection, String):
        return String(collection.value[pos], line=line)

    return collection.items[pos]

def check_in_range(pos: int, length: int, line: int) -> None:
    if pos < 0 or pos >= length:
        raise BoomerangRangeError(f"index of {pos} out of range (0 to {length - 1})", line)

def send(lhs: Node, rhs: Node, line: int, frame: Environment, eval_func: EvalFunc) -> Node:
    """`f <- (args)` applies f; `list <- value` appends."""
    match lhs, rhs:
        case BuiltinFunctionReference(name=name), List(items=items):
            return dispatch(name, line, list(items), frame)
        case Function(), List(items=items):
            return call_function(lhs, list(items), line, eval_func)
        case List(items=items), List():
            return List(items + rhs.items, line=line)
        case List(items=items), _:
            return List(items + [rhs], line=line)

    raise BoomerangTypeError(f"cannot use send on types {lhs.describe()} and {rhs.describe()}", line)

def eval_unary(node: UnaryExpression, frame: Environment, eval_func: EvalFunc) -> Node:
    operand = eval_value(node.operand, frame, eval_func)

    match node.operator:
        case "-":
            if isinstance(operand, Number):
                return Number(-operand.value, line=node.line)
            raise BoomerangTypeError(f"invalid type for minus operator: {operand.describe()}", node.line)
        case "not":
            if isinstance(operand, Boolean):
                return Boolean(not operand.value, line=node.line)
            raise BoomerangTypeError(f"invalid type for bang operator: {operand.describe()}", node.line)

    raise BoomerangRuntimeError(f"invalid unary operator: {node.operator}", node.line)
