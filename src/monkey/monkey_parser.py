"""
Monkey Language Parser

Parses a Monkey token stream into a `Program` AST.

Statements are parsed by recursive descent, dispatched on the current token.
Expressions are parsed by precedence climbing (Pratt parsing): each token type
that can start an expression has a *prefix* rule, each token type that can
continue one has an *infix* rule, and `parse_expression` keeps folding infix
rules into the left operand while the next operator binds tighter than the
caller's precedence.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expr>;`
    * `return [<expr>];`
    * bare expression statements
    * blocks `{ ... }` (inside `if` and `function`)

- Expressions:
    * identifiers, integer literals, `true` / `false`
    * prefix `!` and `-`
    * infix `+ - * / < > == !=` (left-associative)
    * grouping `( ... )`
    * `if (<cond>) { ... } else { ... }`
    * `function(<params>) { ... }`
    * calls `<expr>(<args>)`

Parser Behavior
---------------
- Never raises on malformed input. Every problem is appended to `Parser.errors`
  and the parser keeps going, so a `Program` is always returned.
- A failed top-level statement is dropped and the parser skips to the next `;`
  (or EOF) before resuming.
- `;` after a statement is optional unless `ParserConfig.require_semicolons`.
- Expression nesting deeper than `ParserConfig.max_depth` is reported instead
  of recursing further.

Entry Points
------------
- `Parser(tokens).parse_program()`: parse a token list.
- `parse(source)`: lex and parse, returning `(Program, errors)`.
- `parse_or_raise(source)`: same, but raises `ParseError` when errors exist.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Optional

from monkey import monkey_constants as c
from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_config import ParserConfig
from monkey.monkey_constants import PRECEDENCES, Precedence
from monkey.monkey_lexer import Token, tokenize


class ParseError(Exception):
    """Raised by `parse_or_raise` when a parse produced diagnostics.

    Attributes:
        errors (list[str]): The parser's diagnostics, in source order.
        program (Program): The best-effort tree built despite the errors.
    """

    def __init__(self, errors: list[str], program: Program):
        super().__init__(f"{len(errors)} parse error(s):\n" + "\n".join(errors))
        self.errors = errors
        self.program = program


def describe(tok: Token) -> str:
    if tok.type == c.ILLEGAL:
        return f"{tok.type} {tok.value!r}"
    return tok.type


class Parser:
    """
    Monkey Parser Class

    Holds a cursor over the token list with one token of lookahead
    (`cur_token`, `peek_token`). Past the end of the list both stay on EOF.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream.
    position : int
        Index of `cur_token` in `tokens`.
    config : ParserConfig
        Nesting limit and semicolon strictness.
    errors : list[str]
        Diagnostics, appended in the order they are found.
    depth : int
        Current `parse_expression` nesting.
    """

    def __init__(self, tokens: list[Token], config: ParserConfig | None = None) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.config: ParserConfig = config or ParserConfig()
        self.errors: list[str] = []
        self.depth: int = 0
        self.cur_token: Token = self.token_at(0)
        self.peek_token: Token = self.token_at(1)

    @classmethod
    def from_source(cls, source: str, config: ParserConfig | None = None) -> Parser:
        return cls(tokenize(source), config)

    def token_at(self, index: int) -> Token:
        if index < len(self.tokens):
            return self.tokens[index]
        if self.tokens:
            last = self.tokens[-1]
            return Token(c.EOF, "", last.line, last.col)
        return Token(c.EOF, "", 1, 1)

    def next_token(self) -> None:
        self.position += 1
        self.cur_token = self.peek_token
        self.peek_token = self.token_at(self.position + 1)

    def cur_token_is(self, type_: str) -> bool:
        return self.cur_token.type == type_

    def peek_token_is(self, type_: str) -> bool:
        return self.peek_token.type == type_

    def expect_peek(self, type_: str) -> bool:
        """Advances if the next token has `type_`; otherwise records an error."""
        if self.peek_token_is(type_):
            self.next_token()
            return True
        self.peek_error(type_)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Diagnostics

    def error(self, message: str, tok: Token) -> None:
        self.errors.append(f"{message} (line {tok.line}, col {tok.col})")

    def peek_error(self, expected: str) -> None:
        self.error(
            f"expected next token to be {expected}, got {describe(self.peek_token)} instead",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self.error(f"no prefix parse function for {describe(tok)} found", tok)

    # Statements

    def parse_program(self) -> Program:
        """Parse every statement up to EOF. Always returns a Program."""
        statements: list[Statement] = []
        while not self.cur_token_is(c.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize()
            self.next_token()
        return Program(tuple(statements))

    def synchronize(self, in_block: bool = False) -> None:
        """Skip to the next statement boundary after a failed statement.

        Inside a block the closing `}` is also a boundary, and is left as the
        current token so the block can end on it.
        """
        stops = (c.SEMICOLON, c.EOF, c.RBRACE) if in_block else (c.SEMICOLON, c.EOF)
        while self.cur_token.type not in stops:
            self.next_token()

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(c.LET):
            return self.parse_let_statement()
        if self.cur_token_is(c.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def end_statement(self, kind: str) -> None:
        if self.peek_token_is(c.SEMICOLON):
            self.next_token()
        elif self.config.require_semicolons:
            self.error(f"expected ';' after {kind} statement", self.peek_token)

    def parse_let_statement(self) -> Optional[LetStatement]:
        tok = self.cur_token

        if not self.expect_peek(c.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.value)

        if not self.expect_peek(c.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self.end_statement("let")
        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        tok = self.cur_token

        if self.peek_token.type in (c.SEMICOLON, c.RBRACE, c.EOF):
            self.end_statement("return")
            return ReturnStatement(tok)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self.end_statement("return")
        return ReturnStatement(tok, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        self.end_statement("expression")
        return ExpressionStatement(tok, expression)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        tok = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.cur_token_is(c.RBRACE):
            if self.cur_token_is(c.EOF):
                self.error(
                    f"expected next token to be {c.RBRACE}, got {c.EOF} instead",
                    self.cur_token,
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.synchronize(in_block=True)
                if self.cur_token.type in (c.RBRACE, c.EOF):
                    continue
            self.next_token()

        return BlockStatement(tok, tuple(statements))

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        """Precedence climbing over the prefix and infix rule tables.

        Folds infix operators into `left` while the next operator binds tighter
        than `precedence`; equal precedence stops the loop, which makes every
        binary operator left-associative.
        """
        if self.depth >= self.config.max_depth:
            self.error(
                f"expression nesting exceeds maximum depth of {self.config.max_depth}",
                self.cur_token,
            )
            return None

        self.depth += 1
        try:
            prefix = PREFIX_RULES.get(self.cur_token.type)
            if prefix is None:
                self.no_prefix_parse_fn_error(self.cur_token)
                return None
            left = prefix(self)

            while (
                left is not None
                and not self.peek_token_is(c.SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = INFIX_RULES.get(self.peek_token.type)
                if infix is None:
                    return left
                self.next_token()
                left = infix(self, left)

            return left
        finally:
            self.depth -= 1

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.value)

    def parse_integer_literal(self) -> Optional[Expression]:
        tok = self.cur_token
        try:
            value = int(tok.value, 10)
        except ValueError:
            value = None
        if value is None or value > c.INT64_MAX:
            self.error(f"could not parse {tok.value!r} as integer", tok)
            return None
        return IntegerLiteral(tok, value)

    def parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self.cur_token_is(c.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        tok = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.value, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        tok = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.value, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(c.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[Expression]:
        tok = self.cur_token

        if not self.expect_peek(c.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(c.RPAREN) or not self.expect_peek(c.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(c.ELSE):
            self.next_token()
            if not self.expect_peek(c.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        tok = self.cur_token

        if not self.expect_peek(c.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(c.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(tok, tuple(parameters), body)

    def parse_function_parameters(self) -> Optional[list[Identifier]]:
        identifiers: list[Identifier] = []

        if self.peek_token_is(c.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(c.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.value))

        while self.peek_token_is(c.COMMA):
            self.next_token()
            if not self.expect_peek(c.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.value))

        if not self.expect_peek(c.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, function, tuple(arguments))

    def parse_call_arguments(self) -> Optional[list[Expression]]:
        args: list[Expression] = []

        if self.peek_token_is(c.RPAREN):
            self.next_token()
            return args

        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self.peek_token_is(c.COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(c.RPAREN):
            return None
        return args


PrefixRule = Callable[[Parser], Optional[Expression]]
InfixRule = Callable[[Parser, Expression], Optional[Expression]]

PREFIX_RULES: Mapping[str, PrefixRule] = MappingProxyType(
    {
        c.IDENT: Parser.parse_identifier,
        c.INT: Parser.parse_integer_literal,
        c.BANG: Parser.parse_prefix_expression,
        c.MINUS: Parser.parse_prefix_expression,
        c.TRUE: Parser.parse_boolean,
        c.FALSE: Parser.parse_boolean,
        c.LPAREN: Parser.parse_grouped_expression,
        c.IF: Parser.parse_if_expression,
        c.FUNCTION: Parser.parse_function_literal,
    }
)

INFIX_RULES: Mapping[str, InfixRule] = MappingProxyType(
    {
        c.PLUS: Parser.parse_infix_expression,
        c.MINUS: Parser.parse_infix_expression,
        c.SLASH: Parser.parse_infix_expression,
        c.ASTERISK: Parser.parse_infix_expression,
        c.EQ: Parser.parse_infix_expression,
        c.NOT_EQ: Parser.parse_infix_expression,
        c.LT: Parser.parse_infix_expression,
        c.GT: Parser.parse_infix_expression,
        c.LPAREN: Parser.parse_call_expression,
    }
)


def parse(source: str, config: ParserConfig | None = None) -> tuple[Program, list[str]]:
    """Lex and parse `source`. Returns the program and a copy of the diagnostics."""
    parser = Parser.from_source(source, config)
    program = parser.parse_program()
    return program, list(parser.errors)


def parse_or_raise(source: str, config: ParserConfig | None = None) -> Program:
    """Like `parse`, but raises ParseError instead of returning diagnostics."""
    program, errors = parse(source, config)
    if errors:
        raise ParseError(errors, program)
    return program


__all__ = [
    "INFIX_RULES",
    "PREFIX_RULES",
    "ParseError",
    "Parser",
    "parse",
    "parse_or_raise",
]
