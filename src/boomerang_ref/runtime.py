from __future__ import annotations

import importlib
from typing import Callable, Optional

from .logging_utils import logger
from .nodes import BuiltinFunctionReference, Node
from .types import (
    Builtin,
    BuiltinCategory,
    BuiltinFn,
    Builtins,
    BoomerangArityError,
    BoomerangRuntimeError,
    Environment,
)

_BUILTINS_INITIALIZED = False

def init_builtins() -> None:
    """Load the builtin catalogue (idempotent) so register_builtin hooks run."""
    global _BUILTINS_INITIALIZED

    if _BUILTINS_INITIALIZED:
        return

    importlib.import_module("boomerang_ref.stdlib")
    _BUILTINS_INITIALIZED = True

def register_builtin(name: str, *, arity: Optional[int] = None):
    """Register a builtin function; `arity=None` accepts any argument count."""
    def dec(fn: BuiltinFn):
        Builtins.registry[name] = Builtin(name=name, fn=fn, category="function", arity=arity)
        Builtins.bindings[name] = BuiltinFunctionReference(name)
        return fn

    return dec

def register_builtin_variable(name: str):
    """Register a builtin variable; its value is computed once at registration.

    Identifiers read the value from the root frame binding. The registry entry
    hands back that same node, so `dispatch(name, line, [], env)` also works.
    """
    def dec(fn: Callable[[], Node]):
        value = fn()
        Builtins.registry[name] = Builtin(
            name=name,
            fn=lambda _env, _line, _args: value,
            category="variable",
            arity=0,
        )
        Builtins.bindings[name] = value
        return fn

    return dec

def is_builtin(name: str) -> bool:
    return name in Builtins.registry

def is_builtin_of_type(category: BuiltinCategory, name: str) -> bool:
    builtin = Builtins.registry.get(name)
    return builtin is not None and builtin.category == category

def dispatch(name: str, line: int, args: list[Node], env: Environment) -> Node:
    """Check arity, then hand the unevaluated argument nodes to the builtin."""
    builtin = Builtins.registry.get(name)
    if builtin is None:
        raise BoomerangRuntimeError(f"unknown builtin: {name}", line)

    if builtin.arity is not None and builtin.arity != len(args):
        raise BoomerangArityError(
            f"incorrect number of arguments. expected {builtin.arity}, got {len(args)}",
            line,
        )

    logger.debug("builtin.dispatch name={} line={} argc={}", name, line, len(args))

    return builtin.fn(env, line, args)
