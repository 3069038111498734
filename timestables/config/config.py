from __future__ import annotations

"""Configuration loading and validation for Times Table Turbo.

This module loads YAML configuration, applies defaults, and validates
scoring hyperparameters and round settings.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..scoring.config import ScoringConfig


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def _positive_int(section: Dict[str, Any], name: str, default: int) -> None:
    value = section.get(name)
    try:
        ok = int(value) > 0
    except (TypeError, ValueError):
        ok = False
    if not ok:
        print(f"WARNING: Invalid {name} '{value}', using {default}.", file=sys.stderr)
        section[name] = default
    else:
        section[name] = int(value)


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary. `cfg["scoring"]`
        is replaced by a ScoringConfig instance.
    """
    cfg.setdefault("round", {})
    cfg.setdefault("stats", {})
    cfg.setdefault("scoring", {})
    cfg.setdefault("feedback", {})

    rnd = cfg["round"]
    stats = cfg["stats"]
    feedback = cfg["feedback"]

    rnd.setdefault("questions", 15)
    rnd.setdefault("max_digits", 3)

    stats.setdefault("data_dir", "~/.timestables")
    stats.setdefault("storage_key", "timesTableTurboStats")
    stats.setdefault("min_attempts", 5)

    feedback.setdefault("correct_delay_ms", 800)
    feedback.setdefault("incorrect_delay_ms", 1500)

    _positive_int(rnd, "questions", 15)
    _positive_int(rnd, "max_digits", 3)
    _positive_int(stats, "min_attempts", 5)
    _positive_int(feedback, "correct_delay_ms", 800)
    _positive_int(feedback, "incorrect_delay_ms", 1500)

    if not str(stats.get("storage_key") or "").strip():
        print("WARNING: Empty storage_key, using 'timesTableTurboStats'.", file=sys.stderr)
        stats["storage_key"] = "timesTableTurboStats"
    stats["data_dir"] = str(Path(str(stats["data_dir"])).expanduser())

    scoring = cfg["scoring"]
    if not isinstance(scoring, ScoringConfig):
        try:
            cfg["scoring"] = ScoringConfig.model_validate(scoring or {})
        except ValidationError as e:
            print(f"WARNING: Invalid scoring settings ({e.error_count()} errors), using defaults.", file=sys.stderr)
            cfg["scoring"] = ScoringConfig()

    return cfg
