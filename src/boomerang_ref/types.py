from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Literal, Optional

if TYPE_CHECKING:
    from .nodes import Node

# ---------- Exceptions ----------

class BoomerangRuntimeError(Exception):
    """Line-tagged interpreter failure, rendered as ``error at line N: msg``."""
    line: Optional[int]

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message

        return f"error at line {self.line}: {self.message}"

class BoomerangNameError(BoomerangRuntimeError):
    def __init__(self, name: str, line: Optional[int] = None):
        super().__init__(f"undefined identifier: {name}", line)
        self.name = name

class BoomerangTypeError(BoomerangRuntimeError):
    pass

class BoomerangArityError(BoomerangRuntimeError):
    pass

class BoomerangRangeError(BoomerangRuntimeError):
    pass

class BoomerangValueError(BoomerangRuntimeError):
    pass

class BoomerangSyntaxError(BoomerangRuntimeError):
    pass

class BoomerangReturnSignal(Exception):
    """Internal control-flow exception used to implement `return`."""
    def __init__(self, value: Optional[Node], line: int = 0):
        self.value = value
        self.line = line

class BoomerangBreakSignal(Exception):
    """Internal control flow for `break`."""
    def __init__(self, line: int = 0):
        self.line = line

class BoomerangContinueSignal(Exception):
    """Internal control flow for `continue`."""
    def __init__(self, line: int = 0):
        self.line = line

# ---------- Builtins ----------

BuiltinFn = Callable[['Environment', int, 'list[Node]'], 'Node']
BuiltinCategory = Literal["function", "variable"]

@dataclass(frozen=True)
class Builtin:
    name: str
    fn: BuiltinFn
    category: BuiltinCategory = "function"
    arity: Optional[int] = None  # None means variadic

class Builtins:
    registry: Dict[str, Builtin] = {}
    # what each builtin name is bound to in the root environment
    bindings: Dict[str, 'Node'] = {}

# ---------- Environment ----------

class Environment:
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.vars: Dict[str, Node] = {}
        self._is_function_frame = False

        if parent is None and Builtins.bindings:
            self.vars.update(Builtins.bindings)

    def define(self, name: str, val: Node) -> None:
        """Bind or overwrite `name` in this frame only."""
        self.vars[name] = val

    def get(self, name: str, line: Optional[int] = None) -> Node:
        frame = self.lookup(name)

        if frame is None:
            raise BoomerangNameError(name, line)

        return frame.vars[name]

    def lookup(self, name: str) -> Optional['Environment']:
        """Return the innermost frame that binds `name`."""
        cur: Optional[Environment] = self

        while cur is not None:
            if name in cur.vars:
                return cur
            cur = cur.parent

        return None

    def assign(self, name: str, val: Node) -> None:
        """Rebind `name` where it already lives, else create it here."""
        frame = self.lookup(name)
        (frame or self).vars[name] = val

    def mark_function_frame(self) -> None:
        self._is_function_frame = True

    def is_function_frame(self) -> bool:
        return self._is_function_frame
