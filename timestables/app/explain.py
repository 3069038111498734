from __future__ import annotations

"""Explain mode: one-line traces at round and stats milestones.

Off by default; the CLI turns it on with --explain. Lines look like

    [EXPLAIN] stats_updated :: {"key":"7_8","score":85.0,...}
"""

import json
from typing import Any, Dict

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def format_line(event: str, payload: Dict[str, Any] | None = None) -> str:
    if not payload:
        return f"[EXPLAIN] {event}"
    try:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return f"[EXPLAIN] {event}"
    return f"[EXPLAIN] {event} :: {body}"


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if _ENABLED:
        print(format_line(event, payload))
