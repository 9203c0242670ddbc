"""AST nodes and runtime values.

Every node kind is its own dataclass. Literal kinds (Number, String, Boolean,
List, Function, BuiltinFunctionReference) double as runtime values, so the
evaluator hands the same objects back and forth between the parser's output and
its own results.

Equality ignores line numbers: ``Number(5, line=1) == Number(5.0, line=9)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional, Union
from typing_extensions import TypeGuard

from .types import BoomerangTypeError

if TYPE_CHECKING:
    from .types import Environment

# ---------- Base ----------

@dataclass
class Node:
    kind: ClassVar[str] = "Node"
    line: int = field(default=0, compare=False, kw_only=True)

    def render(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} has no rendering")

    def describe(self) -> str:
        """Diagnostic form used in error messages, e.g. ``Number ("1")``."""
        return f'{self.kind} ("{self.render()}")'

    def length(self) -> int:
        raise BoomerangTypeError(f"invalid type for len: {self.describe()}", self.line)

    def __str__(self) -> str:
        return self.render()

# ---------- Values ----------

@dataclass
class Number(Node):
    kind: ClassVar[str] = "Number"
    value: float

    def __post_init__(self) -> None:
        self.value = float(self.value)

    def is_integer(self) -> bool:
        return self.value.is_integer()

    def render(self) -> str:
        v = self.value
        # exponent form from 1e21 up
        if v.is_integer() and abs(v) < 1e21:
            return str(int(v))
        return repr(v)

@dataclass
class String(Node):
    kind: ClassVar[str] = "String"
    value: str
    # interpolation template: literal text and embedded expressions in order
    parts: list[Union[str, Node]] = field(default_factory=list)

    def is_template(self) -> bool:
        return bool(self.parts)

    def length(self) -> int:
        return len(self.value)

    def render(self) -> str:
        if not self.parts:
            return self.value

        return "".join(p if isinstance(p, str) else "{" + p.render() + "}" for p in self.parts)

@dataclass
class Boolean(Node):
    kind: ClassVar[str] = "Boolean"
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"

@dataclass(eq=False)
class List(Node):
    kind: ClassVar[str] = "List"
    items: list[Node] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self.items == other.items

    def length(self) -> int:
        return len(self.items)

    def render(self) -> str:
        return "(" + ", ".join(item.render() for item in self.items) + ")"

@dataclass(eq=False)
class BlockStatementReturnValue(List):
    """Result of a block: empty when nothing was produced, else one value.

    This is the monad every user-function call returns.
    """
    kind: ClassVar[str] = "BlockStatementReturnValue"

    @property
    def value(self) -> Optional[Node]:
        return self.items[0] if self.items else None

@dataclass
class Function(Node):
    kind: ClassVar[str] = "Function"
    params: list[Node]  # Identifier, or Assignment carrying a default
    body: list[Node]
    env: Optional['Environment'] = field(default=None, compare=False, repr=False)

    def param_names(self) -> list[str]:
        names = []

        for param in self.params:
            if isinstance(param, Assignment):
                names.append(param.target.name)
            elif isinstance(param, Identifier):
                names.append(param.name)

        return names

    def render(self) -> str:
        return "func(" + ",".join(self.param_names()) + "){...}"

@dataclass
class BuiltinFunctionReference(Node):
    kind: ClassVar[str] = "BuiltinFunctionReference"
    name: str

    def render(self) -> str:
        return f"<built-in function {self.name}>"

# ---------- Expressions ----------

@dataclass
class Identifier(Node):
    kind: ClassVar[str] = "Identifier"
    name: str

    def render(self) -> str:
        return self.name

@dataclass
class BinaryExpression(Node):
    kind: ClassVar[str] = "BinaryExpression"
    left: Node
    operator: str
    right: Node

    def render(self) -> str:
        return f"({self.left.render()} {self.operator} {self.right.render()})"

@dataclass
class UnaryExpression(Node):
    kind: ClassVar[str] = "UnaryExpression"
    operator: str
    operand: Node

    def render(self) -> str:
        sep = " " if self.operator.isalpha() else ""
        return f"({self.operator}{sep}{self.operand.render()})"

@dataclass
class FunctionCall(Node):
    kind: ClassVar[str] = "FunctionCall"
    function: Node
    args: list[Node] = field(default_factory=list)

    def render(self) -> str:
        return self.function.render() + "(" + ", ".join(a.render() for a in self.args) + ")"

@dataclass
class WhenCase:
    condition: Node
    body: list[Node]

@dataclass
class WhenExpression(Node):
    kind: ClassVar[str] = "WhenExpression"
    subject: Node
    cases: list[WhenCase]
    otherwise: Optional[list[Node]] = None

    def render(self) -> str:
        return f"when {self.subject.render()} {{...}}"

@dataclass
class ForLoop(Node):
    kind: ClassVar[str] = "ForLoop"
    variable: Identifier
    iterable: Node
    body: list[Node]

    def render(self) -> str:
        return f"for {self.variable.name} in {self.iterable.render()} {{...}}"

# ---------- Statements ----------

@dataclass
class Assignment(Node):
    kind: ClassVar[str] = "Assignment"
    target: Identifier
    value: Node

    def render(self) -> str:
        return f"{self.target.name} = {self.value.render()}"

@dataclass
class PrintStatement(Node):
    kind: ClassVar[str] = "PrintStatement"
    args: list[Node] = field(default_factory=list)

    def render(self) -> str:
        return "print(" + ", ".join(a.render() for a in self.args) + ")"

@dataclass
class IfStatement(Node):
    kind: ClassVar[str] = "IfStatement"
    condition: Node
    consequence: list[Node]
    alternative: Optional[list[Node]] = None

    def render(self) -> str:
        return f"if {self.condition.render()} {{...}}"

@dataclass
class WhileLoop(Node):
    kind: ClassVar[str] = "WhileLoop"
    condition: Node
    body: list[Node]

    def render(self) -> str:
        return f"while {self.condition.render()} {{...}}"

@dataclass
class BreakStatement(Node):
    kind: ClassVar[str] = "BreakStatement"

    def render(self) -> str:
        return "break"

@dataclass
class ContinueStatement(Node):
    kind: ClassVar[str] = "ContinueStatement"

    def render(self) -> str:
        return "continue"

@dataclass
class ReturnStatement(Node):
    kind: ClassVar[str] = "ReturnStatement"
    value: Optional[Node] = None

    def render(self) -> str:
        if self.value is None:
            return "return"
        return f"return {self.value.render()}"

def monad(value: Optional[Node] = None, line: int = 0) -> BlockStatementReturnValue:
    """Wrap an optional value in the block-result form."""
    items = [] if value is None else [value]
    return BlockStatementReturnValue(items, line=line)

def is_monad(node: Node) -> TypeGuard[List]:
    return isinstance(node, List) and len(node.items) <= 1
