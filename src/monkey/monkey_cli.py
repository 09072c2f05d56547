"""
Monkey CLI Entrypoint.

Command-line front end for the Monkey lexer and parser.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the canonical rendering, a JSON dump of the AST, or the token stream.
    - Report parse diagnostics on stderr with a non-zero exit code.
    - Launch the read-parse-print loop.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "add(1, 2)" -f json -o ast.json
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, fmt: str = "string",
               out: str | None = None, config: ParserConfig | None = None,
               verbose: bool = False) -> int:
        Lexes and parses, then writes the selected output. Returns the exit code.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import sys

from monkey.monkey_config import ConfigError, ParserConfig
from monkey.monkey_lexer import tokenize
from monkey.monkey_parser import Parser

FORMATS = ("string", "json", "tokens")


def run_monkey(
    source: str,
    is_string: bool = False,
    fmt: str = "string",
    out: str | None = None,
    config: ParserConfig | None = None,
    verbose: bool = False,
) -> int:
    """
    Run the Monkey front end over a file or an inline string.

    Args:
        source (str): Monkey source code, or the path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code. Defaults to False.
        fmt (str): One of "string", "json", "tokens". Defaults to "string".
        out (str | None): Optional path to write the output to instead of stdout.
        config (ParserConfig | None): Parser settings. Defaults to `ParserConfig()`.
        verbose (bool): If True, echoes the token stream to stderr first.

    Returns:
        int: 0 on a clean parse, 1 if the parser reported diagnostics.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey',
            or if `fmt` is not a known format.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt}")
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    if verbose:
        print(f"[tokens] >>> {tokens}", file=sys.stderr)

    if fmt == "tokens":
        text = "\n".join(f"{t.line}:{t.col}\t{t.type}\t{t.value}" for t in tokens)
    else:
        parser = Parser(tokens, config)
        program = parser.parse_program()
        if parser.errors:
            print("[error] >>>", file=sys.stderr)
            for msg in parser.errors:
                print(f"\t{msg}", file=sys.stderr)
            return 1
        if fmt == "json":
            text = json.dumps(program.to_dict(), indent=2)
        else:
            text = str(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)
    return 0


def build_config(args: argparse.Namespace) -> ParserConfig:
    config = (
        ParserConfig.load_from_json(args.config)
        if args.config
        else ParserConfig.from_env()
    )
    return config.override(
        max_depth=args.max_depth, require_semicolons=True if args.strict else None
    )


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Monkey CLI.

    Launches the REPL when no source is given or `--repl` is passed; otherwise
    runs `run_monkey`. Configuration problems are reported on stderr with exit
    code 2.
    """
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="string",
        help="Output format (default: string)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument("--config", metavar="JSON", help="Parser config file")
    parser.add_argument(
        "--max-depth", type=int, default=None, help="Maximum expression nesting"
    )
    parser.add_argument(
        "--strict", action="store_true", help="Require ';' after every statement"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the read-parse-print loop"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Echo the token stream"
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"[config error] >>> {e}", file=sys.stderr)
        return 2

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(config=config, verbose=args.verbose)
        return 0

    return run_monkey(
        source=args.source,
        is_string=args.string,
        fmt=args.fmt,
        out=args.out,
        config=config,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    sys.exit(main())
