"""Times Table Turbo: multiplication drills with per-fact mastery tracking."""

__version__ = "0.1.0"

__all__ = ["__version__"]
