from __future__ import annotations

from ..nodes import List, String
from ..types import Environment
from .helpers import EvalFunc, eval_value

def eval_string(node: String, frame: Environment, eval_func: EvalFunc) -> String:
    """Plain strings are already values; templates render each `{expr}` part in place."""
    if not node.is_template():
        return node

    rendered: list[str] = []

    for part in node.parts:
        if isinstance(part, str):
            rendered.append(part)
            continue

        rendered.append(eval_value(part, frame, eval_func).render())

    return String("".join(rendered), line=node.line)

def eval_list(node: List, frame: Environment, eval_func: EvalFunc) -> List:
    items = [eval_value(item, frame, eval_func) for item in node.items]
    return type(node)(items, line=node.line)
