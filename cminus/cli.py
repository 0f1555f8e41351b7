import argparse
import io
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from termcolor import colored

from cminus.environment import CminusRuntimeError, Environment
from cminus.lexer import LexerError, tokenize
from cminus.parser import ParserError, parse
from cminus.programs import SAMPLE_PROGRAMS
from cminus.runtime import evaluate
from cminus.value import Value

logger = logging.getLogger(__name__)


def run_source(
    code: str, environment: Optional[Environment] = None, output: Optional[TextIO] = None
) -> Optional[Value]:
    """Parses and evaluates C-- source, nothing is evaluated if there are syntax errors"""
    program = parse(code)
    if environment is None:
        environment = Environment()
    logger.debug("Evaluating %d statement(s)", len(program.statements))
    return evaluate(program, environment, output)


def print_error(error: Exception, stream: TextIO) -> None:
    message = str(error)
    if stream.isatty():
        message = colored(message, "red", attrs=["bold"])
    print(message, file=stream)


def repl(
    environment: Optional[Environment] = None,
    input_fn: Callable[[str], str] = input,
    output: Optional[TextIO] = None,
) -> None:
    """Reads C-- line by line, all lines share one environment"""
    if environment is None:
        environment = Environment()
    if output is None:
        output = sys.stdout

    while True:
        try:
            code = input_fn("> ")
        except EOFError:
            print(file=output)
            return

        if not code.strip():
            continue

        printed = io.StringIO()
        try:
            result = run_source(code, environment, printed)
        except (LexerError, ParserError, CminusRuntimeError) as e:
            if printed.getvalue():
                print(printed.getvalue().rstrip(), file=output)
            print_error(e, output)
            continue

        if printed.getvalue():
            print(printed.getvalue().rstrip(), file=output)
        if result is not None:
            print(result, file=output)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cminus", description="C-- interpreter")
    parser.add_argument("file", nargs="?", help="source file to run, '-' reads standard input")
    parser.add_argument("--sample", choices=sorted(SAMPLE_PROGRAMS), help="run a bundled sample program")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true", help="print the token stream instead of running")
    mode.add_argument("--ast", action="store_true", help="print the parsed program instead of running")
    mode.add_argument("--repl", action="store_true", help="start an interactive session")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _read_source(args: argparse.Namespace) -> str:
    if args.file == "-":
        return sys.stdin.read()
    elif args.file is not None:
        return Path(args.file).read_text()
    return SAMPLE_PROGRAMS[args.sample or "collatz"]


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.file is not None and args.sample is not None:
        parser.error("a file and --sample can not be used together")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl:
        repl()
        return 0

    code = _read_source(args)
    try:
        if args.tokens:
            for token in tokenize(code):
                print(token)
        elif args.ast:
            print(parse(code))
        else:
            run_source(code)
            print()
    except ParserError as e:
        print_error(e, sys.stdout)
        return 1
    except LexerError as e:
        print_error(e, sys.stderr)
        return 1
    except CminusRuntimeError as e:
        print()
        print_error(e, sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
