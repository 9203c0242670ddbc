from __future__ import annotations

from typing import Optional

from ..nodes import BreakStatement, ContinueStatement, IfStatement, Node, ReturnStatement
from ..types import (
    BoomerangBreakSignal,
    BoomerangContinueSignal,
    BoomerangReturnSignal,
    BoomerangRuntimeError,
    Environment,
)
from .blocks import eval_block
from .helpers import EvalFunc, current_function_frame, eval_value, expect_boolean

def eval_return_stmt(node: ReturnStatement, frame: Environment, eval_func: EvalFunc) -> Node:
    if current_function_frame(frame) is None:
        raise BoomerangRuntimeError("return statements not allowed in the global scope", node.line)

    value = eval_value(node.value, frame, eval_func) if node.value is not None else None

    raise BoomerangReturnSignal(value, node.line)

def eval_break_stmt(node: BreakStatement, frame: Environment, eval_func: EvalFunc) -> Node:
    raise BoomerangBreakSignal(node.line)

def eval_continue_stmt(node: ContinueStatement, frame: Environment, eval_func: EvalFunc) -> Node:
    raise BoomerangContinueSignal(node.line)

def eval_if_stmt(node: IfStatement, frame: Environment, eval_func: EvalFunc) -> Optional[Node]:
    """Run the selected branch in a child frame; yields that block's value."""
    condition = eval_value(node.condition, frame, eval_func)

    if expect_boolean(condition, "if-statement", node.line):
        body = node.consequence
    elif node.alternative is not None:
        body = node.alternative
    else:
        return None

    return eval_block(body, Environment(parent=frame), eval_func)
