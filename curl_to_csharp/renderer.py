"""Renderer - turns a statement tree into C# source text.

Layout follows the usual C# conventions: Allman braces, four-space indent,
one statement per line. A blank line separates the top-level handler
configuration from the client scope, and sibling scopes from each other.
"""

from __future__ import annotations

from typing import Union

from curl_to_csharp.converter import ConversionResult
from curl_to_csharp.syntax import (
    Assignment,
    Await,
    BooleanLiteral,
    Declaration,
    Expression,
    ExpressionCall,
    Identifier,
    InterpolatedString,
    Invocation,
    MemberAccess,
    ObjectCreation,
    ScopedBlock,
    Statement,
    StringLiteral,
)


DEFAULT_INDENT = "    "

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

# C# line terminators besides \r and \n; none may appear raw in a literal
_LINE_TERMINATORS = frozenset({"\x85", "\u2028", "\u2029"})


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char < " " or char == "\x7f" or char in _LINE_TERMINATORS:
        return f"\\u{ord(char):04x}"
    return char


def escape_string(value: str) -> str:
    """Escape text for the inside of a regular C# string literal.

    Named escapes are used where C# has one; other control characters and
    Unicode line terminators become \\uXXXX.
    """
    return "".join(_escape_char(char) for char in value)


def _escape_interpolated_text(value: str) -> str:
    return escape_string(value).replace("{", "{{").replace("}", "}}")


def _render_args(args: tuple[Expression, ...]) -> str:
    return ", ".join(render_expression(arg) for arg in args)


def render_expression(expr: Expression) -> str:
    """Render a single expression node.

    Raises:
        TypeError: If expr is not a known expression node.
    """
    if isinstance(expr, StringLiteral):
        return f'"{escape_string(expr.value)}"'
    if isinstance(expr, BooleanLiteral):
        return "true" if expr.value else "false"
    if isinstance(expr, Identifier):
        return expr.name
    if isinstance(expr, MemberAccess):
        return f"{render_expression(expr.target)}.{expr.member}"
    if isinstance(expr, Invocation):
        path = ".".join((render_expression(expr.receiver), *expr.member_path))
        return f"{path}({_render_args(expr.args)})"
    if isinstance(expr, ObjectCreation):
        return f"new {expr.type_name}({_render_args(expr.args)})"
    if isinstance(expr, InterpolatedString):
        parts = []
        for part in expr.parts:
            if isinstance(part, str):
                parts.append(_escape_interpolated_text(part))
            else:
                parts.append("{" + render_expression(part) + "}")
        return '$"' + "".join(parts) + '"'
    if isinstance(expr, Await):
        return f"await {render_expression(expr.expression)}"
    raise TypeError(f"Cannot render expression of type {type(expr).__name__}")


def render_statement(statement: Statement, depth: int = 0, indent: str = DEFAULT_INDENT) -> list[str]:
    """Render one statement as a list of lines (scoped blocks span several).

    Raises:
        TypeError: If statement is not a known statement node.
    """
    prefix = indent * depth

    if isinstance(statement, Declaration):
        return [f"{prefix}var {statement.name} = {render_expression(statement.initializer)};"]
    if isinstance(statement, Assignment):
        target = render_expression(statement.target)
        return [f"{prefix}{target}.{statement.member} = {render_expression(statement.value)};"]
    if isinstance(statement, ExpressionCall):
        path = ".".join((render_expression(statement.receiver), *statement.member_path))
        return [f"{prefix}{path}({_render_args(statement.args)});"]
    if isinstance(statement, ScopedBlock):
        creation = f"new {statement.type_name}({_render_args(statement.constructor_args)})"
        lines = [f"{prefix}using (var {statement.bound_name} = {creation})", f"{prefix}{{"]
        lines.extend(_render_block(statement.body, depth + 1, indent))
        lines.append(f"{prefix}}}")
        return lines
    raise TypeError(f"Cannot render statement of type {type(statement).__name__}")


def _render_block(statements: tuple[Statement, ...], depth: int, indent: str) -> list[str]:
    lines: list[str] = []
    previous: Statement | None = None
    for statement in statements:
        # Blank line around scopes
        if previous is not None and (
            isinstance(statement, ScopedBlock) or isinstance(previous, ScopedBlock)
        ):
            lines.append("")
        lines.extend(render_statement(statement, depth, indent))
        previous = statement
    return lines


def render(
    source: Union[ConversionResult, tuple[Statement, ...], list[Statement]],
    indent: str = DEFAULT_INDENT,
) -> str:
    """Render a conversion result (or a bare statement sequence) to C# source."""
    statements = source.statements if isinstance(source, ConversionResult) else tuple(source)
    return "\n".join(_render_block(tuple(statements), 0, indent)) + "\n"
