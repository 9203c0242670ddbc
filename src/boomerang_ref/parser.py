"""Lark front end: source text -> list of statement nodes.

The grammar lives beside this module in ``grammar.lark``. ``AstBuilder`` turns
lark's parse tree into the dataclasses from ``boomerang_ref.nodes``; string
literals are split into literal text and ``{expr}`` segments here, each
segment parsed with the ``interpolation`` entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from lark import Lark, Token, Transformer, UnexpectedInput
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken, VisitError

from .logging_utils import logger
from .nodes import (
    Assignment,
    BinaryExpression,
    Boolean,
    BreakStatement,
    ContinueStatement,
    ForLoop,
    Function,
    FunctionCall,
    Identifier,
    IfStatement,
    List,
    Node,
    Number,
    ReturnStatement,
    String,
    UnaryExpression,
    WhenCase,
    WhenExpression,
    WhileLoop,
)
from .types import BoomerangRuntimeError, BoomerangSyntaxError

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

_PARSER = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="lalr",
    lexer="basic",
    start=["start", "interpolation"],
    maybe_placeholders=False,
)

_ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}

@dataclass
class _Case:
    case: WhenCase
    has_is: bool
    line: int

@dataclass
class _Otherwise:
    body: list[Node]

def _nodes(children: list[Any]) -> list[Node]:
    return [c for c in children if isinstance(c, Node)]

class AstBuilder(Transformer):
    """Parse tree -> nodes. Token lines are shifted by ``line_offset``."""

    def __init__(self, line_offset: int = 0):
        super().__init__()
        self.line_offset = line_offset

    def _line(self, tok: Token) -> int:
        return (tok.line or 0) + self.line_offset

    def _ident(self, tok: Token) -> Identifier:
        return Identifier(str(tok), line=self._line(tok))

    # ---- statements ----
    def start(self, c):
        return list(c)

    def interpolation(self, c):
        return c[0]

    def block(self, c):
        return list(c)

    def assignment(self, c):
        name, value = c
        return Assignment(self._ident(name), value, line=self._line(name))

    def while_loop(self, c):
        kw, condition, body = c
        return WhileLoop(condition, body, line=self._line(kw))

    def if_stmt(self, c):
        kw, condition, consequence = c[:3]
        alternative = c[3] if len(c) > 3 else None

        if isinstance(alternative, IfStatement):
            alternative = [alternative]

        return IfStatement(condition, consequence, alternative, line=self._line(kw))

    def break_stmt(self, c):
        return BreakStatement(line=self._line(c[0]))

    def continue_stmt(self, c):
        return ContinueStatement(line=self._line(c[0]))

    def return_stmt(self, c):
        value = c[1] if len(c) > 1 else None
        return ReturnStatement(value, line=self._line(c[0]))

    # ---- expressions ----
    def binary(self, c):
        left, op, right = c
        return BinaryExpression(left, str(op), right, line=left.line)

    def unary(self, c):
        op, operand = c
        return UnaryExpression(str(op), operand, line=self._line(op))

    def call(self, c):
        callee = c[0]
        return FunctionCall(callee, _nodes(c[1:]), line=callee.line)

    def number(self, c):
        return Number(float(c[0]), line=self._line(c[0]))

    def string(self, c):
        return self._string_literal(c[0])

    def true(self, c):
        return Boolean(True, line=self._line(c[0]))

    def false(self, c):
        return Boolean(False, line=self._line(c[0]))

    def identifier(self, c):
        return self._ident(c[0])

    def list_literal(self, c):
        return List(_nodes(c), line=self._line(c[0]))

    def group(self, c):
        return c[1]

    def function(self, c):
        kw, body = c[0], c[-1]
        return Function(_nodes(c[1:-1]), body, line=self._line(kw))

    def param(self, c):
        return self._ident(c[0])

    def default_param(self, c):
        name, default = c
        return Assignment(self._ident(name), default, line=self._line(name))

    def for_loop(self, c):
        kw, name, _in, iterable, body = c
        return ForLoop(self._ident(name), iterable, body, line=self._line(kw))

    # ---- when ----
    def when_not(self, c):
        return Boolean(False, line=self._line(c[0]))

    def when_case(self, c):
        has_is = isinstance(c[0], Token) and c[0].type == "IS"
        condition, body = c[-2], c[-1]
        line = self._line(c[0]) if has_is else condition.line
        return _Case(WhenCase(condition, body), has_is, line)

    def when_else(self, c):
        return _Otherwise(c[0])

    def when_expr(self, c):
        kw, rest = c[0], c[1:]
        line = self._line(kw)

        if rest and isinstance(rest[0], Node):
            subject = rest[0]
        else:
            subject = Boolean(True, line=line)

        boolean_subject = isinstance(subject, Boolean)
        cases = []
        otherwise = None

        for item in rest:
            if isinstance(item, _Otherwise):
                otherwise = item.body
                continue

            if not isinstance(item, _Case):
                continue

            if boolean_subject and item.has_is:
                raise BoomerangSyntaxError('"is" not allowed for boolean values', item.line)
            if not boolean_subject and not item.has_is:
                raise BoomerangSyntaxError('expected "is" before when case', item.line)

            cases.append(item.case)

        return WhenExpression(subject, cases, otherwise, line=line)

    # ---- string interpolation ----
    def _string_literal(self, tok: Token) -> String:
        line = self._line(tok)
        parts = self._split_template(tok.value[1:-1], line)

        if not any(isinstance(p, Node) for p in parts):
            return String("".join(parts), line=line)

        raw = "".join(p if isinstance(p, str) else "{" + p.render() + "}" for p in parts)
        return String(raw, parts=parts, line=line)

    def _split_template(self, body: str, line: int) -> list[Union[str, Node]]:
        parts: list[Union[str, Node]] = []
        literal: list[str] = []
        index = 0

        while index < len(body):
            ch = body[index]

            if ch == "\\" and index + 1 < len(body):
                nxt = body[index + 1]
                literal.append(_ESCAPES.get(nxt, nxt))
                index += 2
                continue

            if ch == "{":
                end = body.find("}", index + 1)
                if end == -1:
                    raise BoomerangSyntaxError("unterminated interpolation in string literal", line)

                if literal:
                    parts.append("".join(literal))
                    literal.clear()

                # newlines inside the braces move later tokens down
                inner_offset = line - 1 + body.count("\n", 0, index)
                parts.append(_parse_interpolation(body[index + 1:end], inner_offset))
                index = end + 1
                continue

            literal.append(ch)
            index += 1

        if literal:
            parts.append("".join(literal))

        return parts

def _parse_interpolation(text: str, line_offset: int) -> Node:
    if not text.strip():
        raise BoomerangSyntaxError("empty interpolation in string literal", line_offset + 1)

    try:
        tree = _PARSER.parse(text, start="interpolation")
    except UnexpectedInput as exc:
        raise _syntax_error(exc, text, line_offset) from None

    return _transform(tree, AstBuilder(line_offset))

def _transform(tree: Any, builder: AstBuilder) -> Any:
    try:
        return builder.transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, BoomerangRuntimeError):
            raise exc.orig_exc from None
        raise

def _syntax_error(exc: UnexpectedInput, source: str, line_offset: int = 0) -> BoomerangSyntaxError:
    line: Optional[int] = getattr(exc, "line", None)
    if line is None or line < 1:
        line = source.count("\n") + 1

    if isinstance(exc, UnexpectedCharacters):
        message = f"invalid character {exc.char!r}"
    elif isinstance(exc, UnexpectedEOF):
        message = "unexpected end of input"
    elif isinstance(exc, UnexpectedToken) and exc.token.type == "$END":
        message = "unexpected end of input"
    elif isinstance(exc, UnexpectedToken):
        message = f'unexpected token {exc.token.type} ("{exc.token}")'
    else:
        message = "invalid syntax"

    return BoomerangSyntaxError(message, line + line_offset)

def parse(source: str) -> list[Node]:
    """Parse a whole program into its top-level statements."""
    try:
        tree = _PARSER.parse(source, start="start")
    except UnexpectedInput as exc:
        raise _syntax_error(exc, source) from None

    statements = _transform(tree, AstBuilder())
    logger.debug("parsed {} top-level statements", len(statements))
    return statements
