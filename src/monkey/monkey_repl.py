"""
Read-parse-print loop for the Monkey front end.

Each line read is lexed and parsed on its own. A clean parse prints the
canonical rendering of the program; otherwise every diagnostic is printed.

Commands:
    exit, quit      leave the loop
    verbose-mode    toggle echoing of the token stream
"""

from monkey.monkey_config import ParserConfig
from monkey.monkey_lexer import tokenize
from monkey.monkey_parser import Parser

PROMPT = ">> "


def print_parser_errors(errors: list[str]) -> None:
    print("[error] >>>")
    for msg in errors:
        print(f"\t{msg}")


def start_repl(config: ParserConfig | None = None, verbose: bool = False) -> None:
    print("Monkey REPL (parse only). Type 'exit' or 'quit' to leave.")
    config = config or ParserConfig()

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print("\nExiting Monkey REPL.")
            return

        src = line.strip()
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting Monkey REPL.")
            return
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        tokens = tokenize(src)
        if verbose:
            print(f"[tokens] >>> {tokens}")

        parser = Parser(tokens, config)
        program = parser.parse_program()
        if parser.errors:
            print_parser_errors(parser.errors)
            continue
        print(program)
