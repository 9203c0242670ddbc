from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..logging_utils import logger
from ..nodes import (
    Assignment,
    BlockStatementReturnValue,
    BuiltinFunctionReference,
    Function,
    FunctionCall,
    Identifier,
    Node,
    monad,
)
from ..runtime import dispatch
from ..types import BoomerangArityError, BoomerangReturnSignal, BoomerangRuntimeError, BoomerangTypeError, Environment
from .blocks import eval_block, loop_control_forbidden
from .helpers import EvalFunc, eval_value

def eval_function_literal(node: Function, frame: Environment, eval_func: EvalFunc) -> Function:
    """Close over the defining frame; an already-bound closure is returned as is."""
    if node.env is not None:
        return node

    return replace(node, env=frame)

def eval_function_call(node: FunctionCall, frame: Environment, eval_func: EvalFunc) -> Node:
    callee = eval_value(node.function, frame, eval_func)

    match callee:
        case BuiltinFunctionReference(name=name):
            return dispatch(name, node.line, node.args, frame)
        case Function():
            args = [eval_value(arg, frame, eval_func) for arg in node.args]
            return call_function(callee, args, node.line, eval_func)
        case _:
            raise BoomerangTypeError(f"cannot make function call on type {callee.describe()}", node.line)

def call_function(fn: Function, args: list[Node], line: int, eval_func: EvalFunc) -> BlockStatementReturnValue:
    """Invoke a closure with evaluated positional args and wrap the outcome as a monad."""
    callee_frame = Environment(parent=fn.env)
    callee_frame.mark_function_frame()
    bind_params(fn, args, callee_frame, line, eval_func)

    logger.debug("function.call params={} line={}", fn.param_names(), line)

    value: Optional[Node]
    try:
        with loop_control_forbidden():
            value = eval_block(fn.body, callee_frame, eval_func)
    except BoomerangReturnSignal as signal:
        value = signal.value

    return monad(value, line)

def bind_params(fn: Function, args: list[Node], frame: Environment, line: int, eval_func: EvalFunc) -> None:
    """Bind args positionally; omitted trailing params fall back to their defaults."""
    if len(args) > len(fn.params):
        raise BoomerangArityError(f"expected {len(fn.params)} arguments, got {len(args)}", line)

    missing = len(fn.params) - len(args)

    for idx, param in enumerate(fn.params):
        match param:
            case Assignment(target=Identifier(name=name), value=default):
                if idx < len(args):
                    frame.define(name, args[idx])
                else:
                    frame.define(name, eval_value(default, frame, eval_func))
            case Identifier(name=name):
                if idx >= len(args):
                    raise BoomerangArityError(
                        f'function parameter "{name}" does not have a value. '
                        f"Either add {missing} more parameters to the function call "
                        f'or assign "{name}" a default value in the function definition.',
                        line,
                    )
                frame.define(name, args[idx])
            case _:
                raise BoomerangRuntimeError(f"invalid function parameter: {param.describe()}", param.line)
