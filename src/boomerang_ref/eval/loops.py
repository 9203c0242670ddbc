from __future__ import annotations

from typing import Optional

from ..nodes import ForLoop, List, Node, String, WhileLoop, monad
from ..types import BoomerangBreakSignal, BoomerangContinueSignal, BoomerangTypeError, Environment
from .blocks import eval_block
from .helpers import EvalFunc, eval_value, expect_boolean

def eval_while_loop(node: WhileLoop, frame: Environment, eval_func: EvalFunc) -> Optional[Node]:
    while True:
        condition = eval_value(node.condition, frame, eval_func)
        if not expect_boolean(condition, "while-loop", node.line):
            break

        try:
            eval_block(node.body, Environment(parent=frame), eval_func)
        except BoomerangBreakSignal:
            break
        except BoomerangContinueSignal:
            continue

    return None

def eval_for_loop(node: ForLoop, frame: Environment, eval_func: EvalFunc) -> List:
    """Bind each element in a fresh frame; yields one block-result per finished iteration."""
    iterable = eval_value(node.iterable, frame, eval_func)
    results: list[Node] = []

    for element in _iter_elements(iterable, node.line):
        iteration = Environment(parent=frame)
        iteration.define(node.variable.name, element)

        try:
            value = eval_block(node.body, iteration, eval_func)
        except BoomerangBreakSignal:
            break
        except BoomerangContinueSignal:
            value = None

        results.append(monad(value, node.line))

    return List(results, line=node.line)

def _iter_elements(iterable: Node, line: int) -> list[Node]:
    match iterable:
        case List(items=items):
            return list(items)
        case String(value=text):
            return [String(ch, line=line) for ch in text]
        case _:
            raise BoomerangTypeError(f"invalid type for for-loop iterable: {iterable.describe()}", line)
