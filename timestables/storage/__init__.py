from .schema import STORAGE_KEY, FactKey, FactRecord, StatsTable, stat_key, parse_stat_key
from .store import FactStatsStore

__all__ = [
    "STORAGE_KEY",
    "FactKey",
    "FactRecord",
    "StatsTable",
    "stat_key",
    "parse_stat_key",
    "FactStatsStore",
]
