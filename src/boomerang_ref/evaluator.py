from __future__ import annotations

from typing import Any, Callable, Optional

from .nodes import (
    Assignment,
    BinaryExpression,
    BlockStatementReturnValue,
    Boolean,
    BreakStatement,
    BuiltinFunctionReference,
    ContinueStatement,
    ForLoop,
    Function,
    FunctionCall,
    Identifier,
    IfStatement,
    List,
    Node,
    Number,
    PrintStatement,
    ReturnStatement,
    String,
    UnaryExpression,
    WhenExpression,
    WhileLoop,
)
from .runtime import dispatch, init_builtins, is_builtin
from .types import BoomerangRuntimeError, Environment

from .eval.blocks import eval_program
from .eval.control import eval_break_stmt, eval_continue_stmt, eval_if_stmt, eval_return_stmt
from .eval.expr import eval_binary, eval_unary
from .eval.fn import eval_function_call, eval_function_literal
from .eval.helpers import eval_value
from .eval.literals import eval_list, eval_string
from .eval.loops import eval_for_loop, eval_while_loop
from .eval.match import eval_when

def _maybe_attach_location(exc: BoomerangRuntimeError, node: Node) -> None:
    if exc.line is not None:
        return

    if node.line:
        exc.line = node.line

# ---------------- Public API ----------------

class Evaluator:
    """Runs a parsed program against one root environment."""

    def __init__(self, statements: list[Node], env: Optional[Environment] = None):
        init_builtins()
        self.statements = statements
        self.env = env if env is not None else Environment()

    def evaluate(self) -> list[Node]:
        """Values produced by the top-level statements, in order."""
        return eval_program(self.statements, self.env, eval_node)

def eval_expr(ast: Node, frame: Optional[Environment] = None) -> Optional[Node]:
    init_builtins()

    if frame is None:
        frame = Environment()

    return eval_node(ast, frame)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, frame: Environment) -> Optional[Node]:
    try:
        return _eval_node_inner(n, frame)
    except BoomerangRuntimeError as e:
        _maybe_attach_location(e, n)
        raise

def _eval_node_inner(n: Node, frame: Environment) -> Optional[Node]:
    handler = _NODE_DISPATCH.get(type(n))

    if handler is None:
        raise BoomerangRuntimeError(f"unknown node: {n.kind}", n.line)

    return handler(n, frame)

def _eval_identifier(n: Identifier, frame: Environment) -> Node:
    return frame.get(n.name, n.line)

def _eval_assignment(n: Assignment, frame: Environment) -> None:
    name = n.target.name

    if is_builtin(name):
        raise BoomerangRuntimeError(f'"{name}" is a builtin function or variable', n.line)

    frame.assign(name, eval_value(n.value, frame, eval_node))

def _eval_print_stmt(n: PrintStatement, frame: Environment) -> Node:
    return dispatch("print", n.line, n.args, frame)

def _self(n: Node, _frame: Environment) -> Node:
    return n

_NODE_DISPATCH: dict[type, Callable[[Any, Environment], Optional[Node]]] = {
    Number: _self,
    Boolean: _self,
    BuiltinFunctionReference: _self,
    String: lambda n, frame: eval_string(n, frame, eval_node),
    List: lambda n, frame: eval_list(n, frame, eval_node),
    BlockStatementReturnValue: lambda n, frame: eval_list(n, frame, eval_node),
    Identifier: _eval_identifier,
    BinaryExpression: lambda n, frame: eval_binary(n, frame, eval_node),
    UnaryExpression: lambda n, frame: eval_unary(n, frame, eval_node),
    Function: lambda n, frame: eval_function_literal(n, frame, eval_node),
    FunctionCall: lambda n, frame: eval_function_call(n, frame, eval_node),
    Assignment: _eval_assignment,
    PrintStatement: _eval_print_stmt,
    IfStatement: lambda n, frame: eval_if_stmt(n, frame, eval_node),
    WhenExpression: lambda n, frame: eval_when(n, frame, eval_node),
    WhileLoop: lambda n, frame: eval_while_loop(n, frame, eval_node),
    ForLoop: lambda n, frame: eval_for_loop(n, frame, eval_node),
    BreakStatement: lambda n, frame: eval_break_stmt(n, frame, eval_node),
    ContinueStatement: lambda n, frame: eval_continue_stmt(n, frame, eval_node),
    ReturnStatement: lambda n, frame: eval_return_stmt(n, frame, eval_node),
}
