"""
Subject matching for `when` expressions.

    when x { is 1 { ... } is 2 { ... } else { ... } };
    when { x == 1 { ... } else { ... } };

Rules:
1. The subject is evaluated once (`true` when omitted, `false` for `when not`)
2. Case conditions are evaluated lazily in source order and compared by equality
3. The first matching case body runs in a child frame
4. With no match the else body runs, if present
5. The result is a block-result: empty when nothing ran or the body produced
   no value, else the body's last value
"""

from __future__ import annotations

from typing import Optional

from ..nodes import BlockStatementReturnValue, Node, WhenExpression, monad
from ..types import Environment
from .blocks import eval_block
from .helpers import EvalFunc, eval_value, values_equal

def eval_when(node: WhenExpression, frame: Environment, eval_func: EvalFunc) -> BlockStatementReturnValue:
    subject = eval_value(node.subject, frame, eval_func)
    body: Optional[list[Node]] = None

    for case in node.cases:
        candidate = eval_value(case.condition, frame, eval_func)

        if values_equal(subject, candidate):
            body = case.body
            break
    else:
        body = node.otherwise

    if body is None:
        return monad(line=node.line)

    return monad(eval_block(body, Environment(parent=frame), eval_func), node.line)
