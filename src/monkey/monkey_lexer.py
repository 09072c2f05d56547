"""
Lexical analyzer for the Monkey programming language.

This module converts raw source text into a token stream:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable token with type, literal text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Skips whitespace (space, tab, carriage return, newline)
    - Single-character lookahead for the two-character operators `==` and `!=`
    - Recognizes:
        * Identifiers and the reserved keywords
        * Decimal integer literals (no sign, no fraction)
        * Operators and punctuation
    - Never raises: unknown characters become ILLEGAL tokens and scanning continues

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Callable
from dataclasses import dataclass

from monkey.monkey_constants import EOF, IDENT, ILLEGAL, INT, keywords, token_hashmap

WHITESPACE = " \t\r\n"


def is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class CharacterStream:
    """
    Reads characters from a source string while tracking line and column.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token.

    Attributes:
        type (str): The token type tag (e.g. 'IDENT', 'INT', 'LET', 'EOF').
        value (str): The literal text. Identifiers and integers keep the exact
            source substring; keywords and symbols carry their canonical spelling;
            EOF carries an empty string.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    type: str
    value: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"


class Lexer:
    """Lexical analyzer for the Monkey language.

    Scans left to right in one pass, never backtracking. Once the end of the
    source is reached every further call to `next_token` returns EOF.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        text = ""
        while not self.stream.end_of_file() and predicate(self.peek()):
            text += self.advance()
        return text

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream."""
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = self.read_while(lambda c: is_letter(c) or is_digit(c))
            return Token(keywords.get(ident, IDENT), ident, line, col)

        # 2. Integer
        if is_digit(ch):
            return Token(INT, self.read_while(is_digit), line, col)

        # 3. Two-character operators, then single-character symbols
        pair = ch + self.stream.peek(1)
        if len(pair) == 2 and pair in token_hashmap:
            self.advance()
            self.advance()
            return Token(token_hashmap[pair], pair, line, col)
        if ch in token_hashmap:
            self.advance()
            return Token(token_hashmap[ch], ch, line, col)

        # 4. Unknown character
        return Token(ILLEGAL, self.advance(), line, col)

    def tokenize(self) -> list[Token]:
        """Drains the stream into a list terminated by exactly one EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == EOF:
                return tokens


def tokenize(source: str) -> list[Token]:
    return Lexer(CharacterStream(source)).tokenize()


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
