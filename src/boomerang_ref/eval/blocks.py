from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from ..nodes import Node
from ..types import BoomerangBreakSignal, BoomerangContinueSignal, BoomerangRuntimeError, Environment
from .helpers import EvalFunc

def eval_block(statements: list[Node], frame: Environment, eval_func: EvalFunc) -> Optional[Node]:
    """Run a stmt list in `frame`, returning the last statement's value.

    Control-flow signals are not intercepted here; they unwind to the loop or
    function that owns them.
    """
    result: Optional[Node] = None

    for stmt in statements:
        result = eval_func(stmt, frame)

    return result

def eval_program(statements: list[Node], frame: Environment, eval_func: EvalFunc) -> list[Node]:
    """Run top-level statements, collecting every value they produce."""
    results: list[Node] = []

    with loop_control_forbidden():
        for stmt in statements:
            value = eval_func(stmt, frame)

            if value is not None:
                results.append(value)

    return results

@contextmanager
def loop_control_forbidden() -> Iterator[None]:
    """Turn stray break/continue signals into errors at a function or program boundary."""
    try:
        yield
    except BoomerangBreakSignal as signal:
        raise BoomerangRuntimeError("break statements not allowed outside loops", signal.line) from None
    except BoomerangContinueSignal as signal:
        raise BoomerangRuntimeError("continue statements not allowed outside loops", signal.line) from None
