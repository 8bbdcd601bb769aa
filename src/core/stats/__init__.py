"""스탯 시스템 Core 패키지 — 공개 API"""

from src.core.stats.models import (
    ALL_STATS,
    PlayerArchetype,
    StatCategory,
    StatChange,
    StatChangeBreakdown,
    StatChangeComponent,
    StatName,
    StatTracking,
    StatVector,
    to_stat_name,
)
from src.core.stats.calculations import (
    BASE_STAT_CAP,
    MAX_CURRENT_GAP,
    DailyStatResult,
    SurplusConversion,
    apply_activity_stat_gain,
    apply_diminishing_returns,
    apply_stat_change,
    apply_stat_effects,
    calculate_surplus_conversion,
    cap_current_stat,
    get_base_stat,
    get_current_stat,
    process_daily_stat_changes,
    round_half_away,
    set_base_stat,
    set_current_stat,
)
from src.core.stats.archetypes import (
    ARCHETYPE_STATS,
    DEFENSIVE_STATS,
    MIXED_STATS,
    OFFENSIVE_STATS,
    STAT_CATEGORIES,
    get_default_tracking,
    get_starting_stats,
)

__all__ = [
    "ALL_STATS",
    "PlayerArchetype",
    "StatCategory",
    "StatChange",
    "StatChangeBreakdown",
    "StatChangeComponent",
    "StatName",
    "StatTracking",
    "StatVector",
    "to_stat_name",
    "BASE_STAT_CAP",
    "MAX_CURRENT_GAP",
    "DailyStatResult",
    "SurplusConversion",
    "apply_activity_stat_gain",
    "apply_diminishing_returns",
    "apply_stat_change",
    "apply_stat_effects",
    "calculate_surplus_conversion",
    "cap_current_stat",
    "get_base_stat",
    "get_current_stat",
    "process_daily_stat_changes",
    "round_half_away",
    "set_base_stat",
    "set_current_stat",
    "ARCHETYPE_STATS",
    "DEFENSIVE_STATS",
    "MIXED_STATS",
    "OFFENSIVE_STATS",
    "STAT_CATEGORIES",
    "get_default_tracking",
    "get_starting_stats",
]
