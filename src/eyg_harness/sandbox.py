"""Evaluation sandbox for generated code.

Code text is never handed to the host ``eval``. It is parsed with the
restricted grammar in ``grammar.lark`` and run by the embedded evaluator, so
the only names it can reach are the intrinsics bound into the root frame.
Evaluation runs on a worker thread with a raised recursion limit and a large
stack, so recursive walks over long lists complete; unbounded recursion still
ends in RecursionError. There are no other resource limits.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, Callable, Dict, Optional, Union

from lark.exceptions import LarkError

from .config import HarnessConfig
from .evaluator import eval_expr
from .parser import parse_source
from .runtime import root_frame
from .types import (
    DebugObserver,
    Err,
    EygRuntimeError,
    EygValue,
    ExecutionError,
    Frame,
    Ok,
    SandboxContext,
)

logger = logging.getLogger(__name__)

# each call in evaluated code costs about twenty interpreter frames
RECURSION_LIMIT = 30000
EVAL_STACK_SIZE = 256 * 1024 * 1024

def _run_deep(func: Callable[[], EygValue]) -> EygValue:
    """Run ``func`` on a worker thread sized for deeply recursive programs."""
    outcome: Dict[str, Any] = {}

    def worker() -> None:
        try:
            outcome["value"] = func()
        except BaseException as exc:
            outcome["error"] = exc

    old_limit = sys.getrecursionlimit()
    old_stack = threading.stack_size()
    sys.setrecursionlimit(max(old_limit, RECURSION_LIMIT))

    try:
        threading.stack_size(EVAL_STACK_SIZE)
        try:
            thread = threading.Thread(target=worker, name="eyg-harness-eval")
            thread.start()
        finally:
            threading.stack_size(old_stack)
        thread.join()
    finally:
        sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]

class Sandbox:
    def __init__(self, observer: Optional[DebugObserver] = None, *, config: Optional[HarnessConfig] = None):
        self.config = config or HarnessConfig()
        self.context = SandboxContext(
            observer=observer,
            legacy_key_count=self.config.legacy_key_count,
        )

    def new_frame(self, source: Optional[str] = None) -> Frame:
        return root_frame(source=source, context=self.context)

    def evaluate(self, code: str, frame: Frame) -> EygValue:
        """Run ``code`` in an existing scope; faults surface as ExecutionError."""
        logger.debug("running %d characters of generated code", len(code))

        def execute() -> EygValue:
            try:
                ast = parse_source(code)
                return eval_expr(ast, frame, source=code)
            except (LarkError, EygRuntimeError, RecursionError) as exc:
                logger.debug("execution failed: %s", exc)
                raise ExecutionError(str(exc), exc) from exc

        result = _run_deep(execute)

        logger.debug("execution finished with %r", result)
        return result

    def run(self, code: str) -> EygValue:
        return self.evaluate(code, self.new_frame(source=code))

    def try_run(self, code: str) -> Union[Ok[EygValue], Err[ExecutionError]]:
        try:
            return Ok(self.run(code))
        except ExecutionError as exc:
            return Err(exc)

def run(code: str, observer: Optional[DebugObserver] = None, *, config: Optional[HarnessConfig] = None) -> EygValue:
    return Sandbox(observer, config=config).run(code)
