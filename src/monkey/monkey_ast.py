"""
Defines the abstract syntax tree (AST) for the Monkey programming language.

Node families:
    Statement:
        LetStatement, ReturnStatement, ExpressionStatement, BlockStatement
    Expression:
        Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
        IfExpression, FunctionLiteral, CallExpression

Program is the root: an ordered tuple of top-level statements.

Every node is a frozen dataclass and exposes:
    token_literal(): the literal text of the token that introduced the node.
    __str__(): a canonical rendering that re-parses to an equal tree.
    to_dict(): a plain-dict form suitable for JSON output or debugging.

Node equality is structural: the defining token (and with it the source
position) is excluded from comparison, so `parse("1+2")` and `parse("1 + 2")`
produce equal trees.

Example:
    >>> str(InfixExpression(tok, IntegerLiteral(one, 1), "+", IntegerLiteral(two, 2)))
    '(1 + 2)'
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional, TypedDict

from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    Serialized node shape produced by `to_dict()`.

    Fields:
        kind (str): Node class name (e.g. "LetStatement", "InfixExpression").
        literal (str): Literal text of the node's defining token.
        line (int): Line of the defining token.
        col (int): Column of the defining token.
    Remaining keys mirror the node's own fields, with child nodes nested as ASTDict.
    """

    kind: str
    literal: str
    line: int
    col: int


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


class Node:
    """Base for every statement and expression node."""

    token: Token

    def token_literal(self) -> str:
        return self.token.value

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {
            "kind": type(self).__name__,
            "literal": self.token_literal(),
            "line": self.token.line,
            "col": self.token.col,
        }
        for f in fields(self):  # type: ignore[arg-type]
            if f.name != "token":
                data[f.name] = _serialize(getattr(self, f.name))
        return data  # type: ignore[return-value]


class Statement(Node):
    pass


class Expression(Node):
    pass


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: int

    def __str__(self) -> str:
        return self.token_literal()


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token = field(compare=False, repr=False)
    value: bool

    def __str__(self) -> str:
        return self.token_literal()


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


# Statements


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token = field(compare=False, repr=False)
    return_value: Optional[Expression] = None

    def __str__(self) -> str:
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token = field(compare=False, repr=False)
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token = field(compare=False, repr=False)
    statements: tuple[Statement, ...] = ()

    def __str__(self) -> str:
        # Expression statements get their `;` back so `{ a; (b) }` does not
        # re-parse as the call `a(b)`.
        parts = [
            f"{stmt};" if isinstance(stmt, ExpressionStatement) else str(stmt)
            for stmt in self.statements
        ]
        return "{ " + "".join(p + " " for p in parts) + "}"


# Expressions with blocks


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token = field(compare=False, repr=False)
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    parameters: tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token = field(compare=False, repr=False)  # the '(' token
    function: Expression
    arguments: tuple[Expression, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class Program:
    """Root of a parsed source: the ordered top-level statements."""

    statements: tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)

    def to_dict(self) -> ASTDict:
        return {  # type: ignore[typeddict-unknown-key]
            "kind": "Program",
            "statements": [stmt.to_dict() for stmt in self.statements],
        }
