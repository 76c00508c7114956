"""I/O collaborators the harness calls or is called by.

Fetches behave like awaited browser fetches: network failures raise
(``requests.RequestException``) and any HTTP status still yields the body.
The remaining helpers report failure as ``Err`` values so I/O problems stay
distinguishable from execution faults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union

import requests
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys

from .config import HarnessConfig
from .types import Err, Ok

logger = logging.getLogger(__name__)

DROP_TARGET_ID = "the-id-for-dropping-html"
REQUEST_TIMEOUT = 30.0

# ---------------- Network ----------------

def fetch_text(url: str, *, session: Optional[requests.Session] = None) -> str:
    client = session or requests
    response = client.get(url, timeout=REQUEST_TIMEOUT)
    return response.text

def fetch_source(url: Optional[str] = None, *, session: Optional[requests.Session] = None) -> str:
    """Fetch the saved program text from the configured endpoint."""
    target = url or HarnessConfig.from_env().source_url
    logger.debug("fetching saved source from %s", target)
    return fetch_text(target, session=session)

def post(url: str, data: Union[str, bytes], *, session: Optional[requests.Session] = None) -> Union[Ok[None], Err[Exception]]:
    client = session or requests

    try:
        response = client.post(url, data=data, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        logger.warning("post to %s failed: %s", url, exc)
        return Err(exc)

    logger.info("post to %s returned %s", url, response.status_code)
    return Ok(None)

# ---------------- Files ----------------

def read_file(path: Union[str, Path]) -> Union[Ok[str], Err[str]]:
    try:
        return Ok(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        return Err(str(exc))

# ---------------- Output sink ----------------

@dataclass
class HtmlSink:
    """Stand-in for a page element whose markup the harness may replace."""
    element_id: str
    inner_html: str = ""

def write_into_div(content: str, document: Mapping[str, HtmlSink]) -> None:
    el = document.get(DROP_TARGET_ID)

    if el is None:
        logger.warning("nothing found with id %r", DROP_TARGET_ID)
        return

    el.inner_html = content

# ---------------- Keyboard ----------------

# navigation keys forwarded with their browser names
NAMED_KEYS: Dict[str, str] = {
    Keys.Up: "ArrowUp",
    Keys.Down: "ArrowDown",
    Keys.Left: "ArrowLeft",
    Keys.Right: "ArrowRight",
    Keys.Home: "Home",
    Keys.End: "End",
    Keys.Delete: "Delete",
    Keys.PageUp: "PageUp",
    Keys.PageDown: "PageDown",
}

def listen_keypress(dispatch: Callable[[str], None], bindings: KeyBindings) -> KeyBindings:
    """Forward plain key presses to ``dispatch``.

    Only printable keys and navigation keys are forwarded; control and meta
    chords are left to whatever bindings they already have.
    """

    @bindings.add(Keys.Any)
    def _printable(event: KeyPressEvent) -> None:
        if event.data and event.data.isprintable():
            dispatch(event.data)

    for key, name in NAMED_KEYS.items():
        bindings.add(key)(_forward_named(dispatch, name))

    return bindings

def _forward_named(dispatch: Callable[[str], None], name: str) -> Callable[[KeyPressEvent], None]:
    def handler(_event: KeyPressEvent) -> None:
        dispatch(name)

    return handler
