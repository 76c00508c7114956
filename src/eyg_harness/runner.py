from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import requests

from .config import HarnessConfig
from .convert import json_to_string
from .sandbox import Sandbox
from .services import fetch_source
from .types import ExecutionError, MarshalError

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    if os.path.isfile(arg):
        return Path(arg).read_text(encoding="utf-8")

    return arg

def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="eyg-harness", description="Run generated EYG code in the harness sandbox")
    ap.add_argument("source", nargs="?", help="Path to a source file, literal code, or - for stdin")
    ap.add_argument("--json", action="store_true", help="Print the result as pretty JSON")
    ap.add_argument("--legacy-keys", action="store_true", help="Count record keys from the left operand only when comparing")
    ap.add_argument("--fetch", action="store_true", help="Run the saved program from the configured source URL")
    ap.add_argument("--repl", action="store_true", help="Start an interactive session")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return ap

def configure_logging(config: HarnessConfig, verbose: int = 0) -> None:
    level = getattr(logging, config.log_level, logging.WARNING)

    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = min(level, logging.INFO)

    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = HarnessConfig.from_env()

    if args.legacy_keys:
        config = config.with_overrides(legacy_key_count=True)

    configure_logging(config, args.verbose)

    if args.repl:
        from .repl import repl  # prompt_toolkit only needed here
        repl(config)
        return 0

    try:
        source = fetch_source(config.source_url) if args.fetch else _load_source(args.source)
    except requests.RequestException as exc:
        print(f"Error: could not fetch source: {exc}", file=sys.stderr)
        return 1

    sandbox = Sandbox(lambda value: print(f"debug: {value!r}", file=sys.stderr), config=config)

    try:
        result = sandbox.run(source)
        print(json_to_string(result) if args.json else repr(result))
    except (ExecutionError, MarshalError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
