"""ExplainError: terminal front-end.

Classifies one error report and renders the verdict with Rich, or prints
the same JSON object the HTTP endpoint returns.

Usage:
    uv run python cli.py "connect ECONNREFUSED 10.0.0.5:443"
    uv run python cli.py "TypeError: x is undefined" --stack-file trace.txt
    some_command 2>&1 | uv run python cli.py - --json
"""

import argparse
import json
import pathlib
import sys

from rich.console import Console

from classifier.engine import classify
from display.verdict import render_verdict

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="explain-error",
        description="Classify an error message (and optional stack trace).",
    )
    parser.add_argument(
        "message",
        nargs="?",
        default="-",
        help="error message text; '-' or omitted reads stdin",
    )
    stack = parser.add_mutually_exclusive_group()
    stack.add_argument("--stack", default="", help="stack trace text")
    stack.add_argument("--stack-file", type=pathlib.Path, help="read the stack trace from a file")
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the verdict as JSON instead of a rendered panel",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    message = sys.stdin.read() if args.message == "-" else args.message
    stack = args.stack_file.read_text(encoding="utf-8") if args.stack_file else args.stack

    verdict = classify(message, stack)

    if args.json:
        print(json.dumps(verdict.to_response(), indent=2))
    else:
        console.print(render_verdict(verdict))
    return 0


if __name__ == "__main__":
    sys.exit(main())
