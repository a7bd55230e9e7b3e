"""Statement nodes - the language-agnostic intermediate representation.

The converter builds a tree of these nodes; the renderer turns it into C#
source text. Every node is a frozen dataclass and every sequence is a tuple,
so a built tree can be shared and compared but never patched in place.

Builders accept a plain identifier string anywhere an expression is expected:
``invoke("request", "Headers", "TryAddWithoutValidation", args=...)`` reads
like the code it produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class MemberAccess:
    """``target.member``"""

    target: Expression
    member: str


@dataclass(frozen=True)
class Invocation:
    """``receiver.member_path[0].member_path[1](args)``"""

    receiver: Expression
    member_path: tuple[str, ...]
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ObjectCreation:
    """``new TypeName(args)``"""

    type_name: str
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class InterpolatedString:
    """Interpolated string; ``str`` parts are literal text, others are holes."""

    parts: tuple[Union[str, Expression], ...]


@dataclass(frozen=True)
class Await:
    expression: Expression


Expression = Union[
    StringLiteral,
    BooleanLiteral,
    Identifier,
    MemberAccess,
    Invocation,
    ObjectCreation,
    InterpolatedString,
    Await,
]


# =============================================================================
# Statements
# =============================================================================


@dataclass(frozen=True)
class Declaration:
    """``var name = initializer;``"""

    name: str
    initializer: Expression


@dataclass(frozen=True)
class Assignment:
    """``target.member = value;``"""

    target: Expression
    member: str
    value: Expression


@dataclass(frozen=True)
class ExpressionCall:
    """An invocation used as a statement."""

    receiver: Expression
    member_path: tuple[str, ...]
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ScopedBlock:
    """``using (var bound_name = new type_name(constructor_args)) { body }``"""

    bound_name: str
    type_name: str
    constructor_args: tuple[Expression, ...]
    body: tuple[Statement, ...]


Statement = Union[Declaration, Assignment, ExpressionCall, ScopedBlock]


# =============================================================================
# Builders
# =============================================================================


def _expr(value: Union[str, Expression]) -> Expression:
    """Promote a bare string to an Identifier."""
    if isinstance(value, str):
        return Identifier(value)
    return value


def literal(value: str) -> StringLiteral:
    return StringLiteral(value)


def ident(name: str) -> Identifier:
    return Identifier(name)


def member(target: Union[str, Expression], *names: str) -> Expression:
    """Chain member accesses: ``member("Encoding", "UTF8")``."""
    expr = _expr(target)
    for name in names:
        expr = MemberAccess(expr, name)
    return expr


def new(type_name: str, *args: Union[str, Expression]) -> ObjectCreation:
    """Object creation. String args here are identifiers, not literals."""
    return ObjectCreation(type_name, tuple(_expr(a) for a in args))


def invoke(
    receiver: Union[str, Expression],
    *member_path: str,
    args: tuple[Union[str, Expression], ...] = (),
) -> Invocation:
    return Invocation(_expr(receiver), tuple(member_path), tuple(_expr(a) for a in args))


def await_(expression: Expression) -> Await:
    return Await(expression)


def declare(name: str, initializer: Expression) -> Declaration:
    return Declaration(name, initializer)


def assign(target: Union[str, Expression], member_name: str, value: Expression) -> Assignment:
    return Assignment(_expr(target), member_name, value)


def call(
    receiver: Union[str, Expression],
    *member_path: str,
    args: tuple[Union[str, Expression], ...] = (),
) -> ExpressionCall:
    return ExpressionCall(_expr(receiver), tuple(member_path), tuple(_expr(a) for a in args))


def scoped(
    bound_name: str,
    type_name: str,
    constructor_args: tuple[Union[str, Expression], ...] = (),
    body: tuple[Statement, ...] | list[Statement] = (),
) -> ScopedBlock:
    return ScopedBlock(
        bound_name,
        type_name,
        tuple(_expr(a) for a in constructor_args),
        tuple(body),
    )


def walk(statements: tuple[Statement, ...] | list[Statement]) -> Iterator[Statement]:
    """Yield every statement depth-first, including scoped block contents."""
    for statement in statements:
        yield statement
        if isinstance(statement, ScopedBlock):
            yield from walk(statement.body)
