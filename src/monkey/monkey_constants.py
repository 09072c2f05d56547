"""
Shared token tables for the Monkey front end.

Token types are plain uppercase string tags. Every tag the lexer can produce is
listed in `TOKEN_TYPES`; the parser dispatches on these tags only.

Exports:
    - token type tags (IDENT, INT, PLUS, ...)
    - keywords: reserved word → token type
    - token_hashmap: single and double character symbol → token type
    - Precedence: binding power of operators, lowest to highest
    - PRECEDENCES: token type → Precedence for every infix-capable token
    - INT64_MAX: largest value an integer literal may hold
"""

from enum import IntEnum

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers + literals
IDENT = "IDENT"
INT = "INT"

# Operators
ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
GT = "GT"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

# Delimiters
COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"

# Keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

keywords: dict[str, str] = {
    "function": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

token_hashmap: dict[str, str] = {
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    ",": COMMA,
    ";": SEMICOLON,
    "==": EQ,
    "!=": NOT_EQ,
}

TOKEN_TYPES: frozenset[str] = frozenset(
    {ILLEGAL, EOF, IDENT, INT} | set(keywords.values()) | set(token_hashmap.values())
)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -x or !x
    CALL = 7  # fn(x)


PRECEDENCES: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
}

INT64_MAX = 2**63 - 1

