"""FilterSyntax: pluggable text syntaxes that produce specification dicts."""

from __future__ import annotations

import json
import re
from typing import Any, NamedTuple

from .exceptions import SpecificationParseError
from .operators import MAX_NESTING_DEPTH, SpecificationOperator

_TOKEN_RE = re.compile(
    r"""
    (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<compare>!=|==|=)
    | (?P<comma>,)
    | (?P<quoted>"[^"]*"|'[^']*')
    | (?P<word>[A-Za-z0-9_.\-]+)
    """,
    re.VERBOSE,
)

_KEYWORDS = frozenset({"and", "or", "not", "in", "not_in"})


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(raw: str) -> list[Token]:
    """Split an expression into tokens; raises on an unexpected character."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(raw):
        if raw[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_RE.match(raw, pos)
        if match is None:
            raise SpecificationParseError(
                f"Unexpected character {raw[pos]!r}", position=pos
            )
        kind = match.lastgroup or ""
        text = match.group()
        if kind == "quoted":
            text = text[1:-1]
        tokens.append(Token(kind, text, pos))
        pos = match.end()
    return tokens


class FilterSyntax:
    """Base for filter syntax parsers."""

    def parse_filter(self, raw: Any) -> dict[str, Any]:
        """Parse raw input to a specification dict (op, attr, val or conditions)."""
        raise NotImplementedError


class ExpressionSyntax(FilterSyntax):
    """
    Parse boolean expressions such as ``color=green AND size=huge``.

    Grammar (keywords are case-insensitive, AND binds tighter than OR)::

        expr       := and_expr ("OR" and_expr)*
        and_expr   := unary ("AND" unary)*
        unary      := "NOT" unary | "(" expr ")" | comparison
        comparison := field ("=" | "!=") value
                    | field ("IN" | "NOT IN" | "NOT_IN") value ("," value)*

    Values are kept as strings; typing them is left to the caller.
    """

    def parse_filter(self, raw: Any) -> dict[str, Any]:
        if not isinstance(raw, str) or not raw.strip():
            raise SpecificationParseError("Empty specification")
        return _ExpressionParser(tokenize(raw), len(raw)).parse()


class _ExpressionParser:
    def __init__(self, tokens: list[Token], end: int) -> None:
        self._tokens = tokens
        self._index = 0
        self._end = end
        self._depth = 0

    def parse(self) -> dict[str, Any]:
        node = self._or_expr()
        if self._peek() is not None:
            token = self._tokens[self._index]
            raise SpecificationParseError(
                f"Unexpected {token.text!r}", position=token.position
            )
        return node

    # -- token helpers -------------------------------------------------------

    def _peek(self) -> Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _peek_kind(self) -> str | None:
        token = self._peek()
        return token.kind if token is not None else None

    def _next(self, expected: str) -> Token:
        token = self._peek()
        if token is None:
            raise SpecificationParseError(
                f"Expected {expected}, got end of input", position=self._end
            )
        self._index += 1
        return token

    def _at_keyword(self, *keywords: str) -> bool:
        token = self._peek()
        return (
            token is not None
            and token.kind == "word"
            and token.text.lower() in keywords
        )

    # -- grammar -------------------------------------------------------------

    def _or_expr(self) -> dict[str, Any]:
        node = self._and_expr()
        while self._at_keyword("or"):
            self._index += 1
            node = _combine(SpecificationOperator.OR, node, self._and_expr())
        return node

    def _and_expr(self) -> dict[str, Any]:
        node = self._unary()
        while self._at_keyword("and"):
            self._index += 1
            node = _combine(SpecificationOperator.AND, node, self._unary())
        return node

    def _unary(self) -> dict[str, Any]:
        if self._at_keyword("not"):
            self._descend()
            node = {
                "op": SpecificationOperator.NOT.value,
                "conditions": [self._unary()],
            }
            self._depth -= 1
            return node
        if self._peek_kind() == "lparen":
            self._descend()
            node = self._or_expr()
            closing = self._next("')'")
            if closing.kind != "rparen":
                raise SpecificationParseError(
                    f"Expected ')', got {closing.text!r}", position=closing.position
                )
            self._depth -= 1
            return node
        return self._comparison()

    def _descend(self) -> None:
        """Consume a NOT or '(', refusing to nest past ``MAX_NESTING_DEPTH``."""
        token = self._tokens[self._index]
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise SpecificationParseError(
                f"Expression is nested more than {MAX_NESTING_DEPTH} levels deep",
                position=token.position,
            )
        self._index += 1

    def _comparison(self) -> dict[str, Any]:
        field = self._next("a field name")
        if field.kind != "word" or field.text.lower() in _KEYWORDS:
            raise SpecificationParseError(
                f"Expected a field name, got {field.text!r}", position=field.position
            )

        op_token = self._next("an operator")
        if op_token.kind == "compare":
            op = (
                SpecificationOperator.NE
                if op_token.text == "!="
                else SpecificationOperator.EQ
            )
            return {"op": op.value, "attr": field.text, "val": self._value()}

        keyword = op_token.text.lower() if op_token.kind == "word" else ""
        if keyword == "not" and self._at_keyword("in"):
            self._index += 1
            keyword = "not_in"
        if keyword in ("in", "not_in"):
            values = [self._value()]
            while self._peek_kind() == "comma":
                self._index += 1
                values.append(self._value())
            return {"op": keyword, "attr": field.text, "val": values}

        raise SpecificationParseError(
            f"Expected '=', '!=', 'in' or 'not in' after {field.text!r}, "
            f"got {op_token.text!r}",
            position=op_token.position,
        )

    def _value(self) -> str:
        token = self._next("a value")
        if token.kind == "quoted":
            return token.text
        if token.kind != "word" or token.text.lower() in ("and", "or"):
            raise SpecificationParseError(
                f"Expected a value, got {token.text!r}", position=token.position
            )
        return token.text


def _combine(
    op: SpecificationOperator, left: dict[str, Any], right: dict[str, Any]
) -> dict[str, Any]:
    return {"op": op.value, "conditions": [left, right]}


class JsonFilterSyntax(FilterSyntax):
    """Parse the ``to_dict()`` form given as JSON text or an already-decoded dict."""

    def parse_filter(self, raw: Any) -> dict[str, Any]:
        if isinstance(raw, dict):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            raise SpecificationParseError("Empty specification")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SpecificationParseError(
                f"Invalid JSON: {e.msg}", position=e.pos
            ) from e
        except RecursionError as e:
            raise SpecificationParseError("JSON is nested too deeply") from e
        if not isinstance(data, dict):
            raise SpecificationParseError("Top-level JSON value must be an object")
        return data
