import json

import pytest

from monkey.monkey_ast import (
    BlockStatement,
    Boolean,
    CallExpression,
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
)
from monkey.monkey_lexer import Token


def ident(name: str, line: int = 0, col: int = 0) -> Identifier:
    return Identifier(Token("IDENT", name, line, col), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(Token("INT", str(value)), value)


def test_let_statement_string() -> None:
    program = Program(
        (
            LetStatement(
                Token("LET", "let"),
                ident("myVar"),
                ident("anotherVar"),
            ),
        )
    )
    assert str(program) == "let myVar = anotherVar;"
    assert program.token_literal() == "let"


def test_return_statement_string() -> None:
    assert str(ReturnStatement(Token("RETURN", "return"), integer(5))) == "return 5;"
    assert str(ReturnStatement(Token("RETURN", "return"))) == "return;"


def test_expression_renderings() -> None:
    minus = Token("MINUS", "-")
    plus = Token("PLUS", "+")
    neg = PrefixExpression(minus, "-", integer(5))
    assert str(neg) == "(-5)"

    total = InfixExpression(plus, neg, "+", ident("x"))
    assert str(total) == "((-5) + x)"

    assert str(Boolean(Token("TRUE", "true"), True)) == "true"


def test_block_terminates_expression_statements() -> None:
    block = BlockStatement(
        Token("LBRACE", "{"),
        (
            ExpressionStatement(Token("IDENT", "a"), ident("a")),
            LetStatement(Token("LET", "let"), ident("b"), integer(1)),
        ),
    )
    assert str(block) == "{ a; let b = 1; }"
    assert str(BlockStatement(Token("LBRACE", "{"))) == "{ }"


def test_if_function_and_call_renderings() -> None:
    body = BlockStatement(
        Token("LBRACE", "{"), (ExpressionStatement(Token("IDENT", "x"), ident("x")),)
    )
    if_expr = IfExpression(Token("IF", "if"), ident("c"), body, body)
    assert str(if_expr) == "if (c) { x; } else { x; }"

    fn = FunctionLiteral(
        Token("FUNCTION", "function"), (ident("x"), ident("y")), body
    )
    assert str(fn) == "function(x, y) { x; }"

    call = CallExpression(Token("LPAREN", "("), ident("add"), (integer(1), integer(2)))
    assert str(call) == "add(1, 2)"
    assert str(CallExpression(Token("LPAREN", "("), ident("f"))) == "f()"


def test_equality_ignores_source_positions() -> None:
    assert ident("x", 1, 1) == ident("x", 7, 3)
    assert ident("x") != ident("y")
    assert integer(5) != ident("5")


def test_nodes_are_immutable() -> None:
    node = InfixExpression(Token("PLUS", "+"), integer(1), "+", integer(2))
    with pytest.raises(AttributeError):
        node.right = integer(3)  # type: ignore[misc]


def test_token_literal_and_empty_program() -> None:
    assert ident("foobar").token_literal() == "foobar"
    assert Program().token_literal() == ""
    assert str(Program()) == ""


def test_to_dict_is_json_serializable() -> None:
    stmt = LetStatement(
        Token("LET", "let", 1, 1),
        ident("x", 1, 5),
        InfixExpression(Token("PLUS", "+", 1, 11), integer(1), "+", integer(2)),
    )
    data = Program((stmt,)).to_dict()
    assert data["kind"] == "Program"

    let = data["statements"][0]  # type: ignore[typeddict-item]
    assert let["kind"] == "LetStatement"
    assert let["literal"] == "let"
    assert (let["line"], let["col"]) == (1, 1)
    assert let["name"]["value"] == "x"
    assert let["value"]["operator"] == "+"
    assert let["value"]["left"] == {
        "kind": "IntegerLiteral",
        "literal": "1",
        "line": 0,
        "col": 0,
        "value": 1,
    }
    json.dumps(data)


def test_to_dict_serializes_tuples_and_missing_children() -> None:
    fn = FunctionLiteral(
        Token("FUNCTION", "function"),
        (ident("a"),),
        BlockStatement(Token("LBRACE", "{"), (ReturnStatement(Token("RETURN", "return")),)),
    )
    data = fn.to_dict()
    assert [p["value"] for p in data["parameters"]] == ["a"]  # type: ignore[typeddict-item]
    assert data["body"]["statements"][0]["return_value"] is None  # type: ignore[typeddict-item]
