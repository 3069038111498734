from __future__ import annotations

"""CLI for Times Table Turbo: play rounds and inspect the mastery grid."""

import argparse
import sys
import time
from typing import Any, Callable, Dict, Optional

from .. import __version__
from ..analytics.grid import format_grid
from ..config.config import load_config, validate_config
from ..drills.question_set import MIXED, TABLE_SIZE, parse_mode
from ..storage.store import FactStatsStore
from ..util.randomness import make_rng
from . import explain
from .session_manager import RoundSession

TABLE_CHOICES = [str(n) for n in range(1, TABLE_SIZE + 1)] + [MIXED]
QUIT_WORDS = {"", "q", "quit"}


def _build_ui() -> Dict[str, Callable[..., Any]]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    def pause(ms: int) -> None:
        time.sleep(ms / 1000)

    return {"ask": ask, "inform": inform, "pause": pause}


def _make_store(cfg: Dict[str, Any]) -> FactStatsStore:
    stats = cfg["stats"]
    return FactStatsStore(stats["data_dir"], stats["storage_key"], scoring=cfg["scoring"])


def play_round(session: RoundSession, ui: Dict[str, Callable[..., Any]]) -> Optional[Dict[str, Any]]:
    """Drive a session through the ask/inform/pause callbacks.

    Returns the round summary, or None when the player backs out.
    """
    ask = ui["ask"]
    inform = ui["inform"]
    pause = ui.get("pause", lambda _ms: None)

    while not session.finished:
        q = session.current_question
        if q is None:
            break
        raw = ask(f"[{session.progress}]  {q.a} × {q.b} = ").strip()
        if raw.lower() in QUIT_WORDS:
            session.abandon()
            inform("Round abandoned.")
            return None
        # whole line must be a number the keypad could have typed
        if not (raw.isascii() and raw.isdigit() and len(raw) <= session.max_digits):
            inform("Please type a number.")
            continue
        for ch in raw:
            session.press_digit(ch)
        result = session.submit()
        if result is None:
            inform("Please type a number.")
            continue
        if result.correct:
            inform("✓ Nice!")
        else:
            inform(f"✗ Answer: {result.expected}")
        pause(session.feedback_delay_ms(result))
        session.advance()

    agg = session.results
    inform("")
    inform(agg.title)
    inform(agg.score_line)
    for line in agg.detail_lines():
        inform(line)
    return agg.summary()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="timestables")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--data-dir", default=None, help="Override stats directory")
    p.add_argument("--explain", action="store_true")
    p.add_argument("--version", action="version", version=f"timestables {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    pp = sub.add_parser("play")
    pp.add_argument("--table", default=MIXED, choices=TABLE_CHOICES, help="Times table 1-12 or 'mixed'")

    sub.add_parser("stats")

    hp = sub.add_parser("heatmap")
    hp.add_argument("--out", required=True, help="Image path, e.g. mastery.png")

    args = p.parse_args(argv)
    explain.enable(args.explain)

    cfg = validate_config(load_config(args.config))
    if args.data_dir:
        cfg["stats"]["data_dir"] = args.data_dir
    store = _make_store(cfg)
    min_attempts = int(cfg["stats"]["min_attempts"])

    if args.cmd == "play":
        session = RoundSession.start(
            parse_mode(args.table),
            store,
            rng=make_rng(),
            count=int(cfg["round"]["questions"]),
            max_digits=int(cfg["round"]["max_digits"]),
            correct_delay_ms=int(cfg["feedback"]["correct_delay_ms"]),
            incorrect_delay_ms=int(cfg["feedback"]["incorrect_delay_ms"]),
        )
        try:
            play_round(session, _build_ui())
        except (EOFError, KeyboardInterrupt):
            session.abandon()
            print("\nRound abandoned.")
        return 0

    if args.cmd == "stats":
        print(format_grid(store.load(), min_attempts))
        return 0

    if args.cmd == "heatmap":
        from ..analytics.plots import plot_mastery_heatmap

        plot_mastery_heatmap(store.load(), min_attempts=min_attempts, save_path=args.out)
        print(f"Heatmap saved to: {args.out}")
        return 0

    print(f"Unknown command: {args.cmd}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
