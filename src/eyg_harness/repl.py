"""Interactive REPL for the harness sandbox, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
import traceback
from dataclasses import dataclass
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .config import HarnessConfig
from .sandbox import Sandbox
from .types import ExecutionError, Frame, UNIT

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/legacy-keys": ("Toggle left-side key counting in equal", "[on|off]"),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")


@dataclass
class ReplState:
    sandbox: Sandbox
    frame: Frame
    py_traceback: bool = False

    @classmethod
    def create(cls, config: HarnessConfig) -> "ReplState":
        sandbox = _make_sandbox(config)
        return cls(sandbox=sandbox, frame=sandbox.new_frame(), py_traceback=config.debug_py_trace)


def _make_sandbox(config: HarnessConfig) -> Sandbox:
    return Sandbox(lambda value: print(f"debug: {value!r}"), config=config)


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display=f"{cmd} {hint}".rstrip(),
                    display_meta=desc,
                )


def _parse_toggle(arg: str, current: bool) -> Optional[bool]:
    lowered = arg.lower()
    if lowered in _ON:
        return True
    if lowered in _OFF:
        return False
    if lowered == "":
        return not current
    return None


def _handle_slash(line: str, state: ReplState) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/py-traceback":
        flag = _parse_toggle(arg, state.py_traceback)
        if flag is None:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state.py_traceback = flag
        print(f"Python traceback: {'on' if flag else 'off'}")
        return True

    if cmd == "/legacy-keys":
        flag = _parse_toggle(arg, state.sandbox.context.legacy_key_count)
        if flag is None:
            print("Usage: /legacy-keys [on|off]", file=sys.stderr)
            return True

        # frames share the context object, so existing bindings see the change
        state.sandbox.context.legacy_key_count = flag
        print(f"Legacy key counting: {'on' if flag else 'off'}")
        return True

    if cmd == "/reset":
        state.frame = state.sandbox.new_frame()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_line(text: str, state: ReplState) -> None:
    try:
        result = state.sandbox.evaluate(text, state.frame)
    except ExecutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if state.py_traceback and exc.cause is not None:
            print("\nPython traceback:", file=sys.stderr)
            print("".join(traceback.format_tb(exc.cause.__traceback__)), file=sys.stderr, end="")
        return

    if result != UNIT:
        print(repr(result))


def repl(config: Optional[HarnessConfig] = None) -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    state = ReplState.create(config or HarnessConfig.from_env())

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print("eyg harness repl (Ctrl-D to exit, / for commands)")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if _handle_slash(text, state):
            continue

        eval_line(text, state)
