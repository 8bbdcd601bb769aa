"""아키타입별 시작 스탯 + 스탯 분류 상수"""

from typing import Dict, List, Union

from src.core.stats.models import (
    ALL_STATS,
    PlayerArchetype,
    StatCategory,
    StatName,
    StatTracking,
    StatVector,
)

STAT_CATEGORIES: Dict[StatName, StatCategory] = {
    StatName.FITNESS: StatCategory.PHYSICAL,
    StatName.VITALITY: StatCategory.PHYSICAL,
    StatName.POISE: StatCategory.PHYSICAL,
    StatName.KNOWLEDGE: StatCategory.MENTAL,
    StatName.CREATIVITY: StatCategory.MENTAL,
    StatName.AMBITION: StatCategory.MENTAL,
    StatName.CONFIDENCE: StatCategory.SOCIAL,
    StatName.WIT: StatCategory.SOCIAL,
    StatName.EMPATHY: StatCategory.SOCIAL,
}

DEFENSIVE_STATS: List[StatName] = [
    StatName.VITALITY,
    StatName.AMBITION,
    StatName.EMPATHY,
]

OFFENSIVE_STATS: List[StatName] = [s for s in ALL_STATS if s not in DEFENSIVE_STATS]

# 수면 결과에서 "mixed" 그룹으로 보고하는 스탯
MIXED_STATS: List[StatName] = [
    StatName.POISE,
    StatName.CREATIVITY,
    StatName.WIT,
]


def _template(primary: List[str], secondary: List[str]) -> Dict[StatName, int]:
    """주 스탯 25, 보조 스탯 15, 나머지 5."""
    values = {s: 5 for s in ALL_STATS}
    for name in primary:
        values[StatName(name)] = 25
    for name in secondary:
        values[StatName(name)] = 15
    return values


ARCHETYPE_STATS: Dict[PlayerArchetype, Dict[StatName, int]] = {
    PlayerArchetype.ATHLETE: _template(
        ["fitness", "vitality"], ["confidence", "ambition", "poise"]
    ),
    PlayerArchetype.SCHOLAR: _template(
        ["knowledge", "creativity"], ["ambition", "wit", "vitality"]
    ),
    PlayerArchetype.SOCIAL_BUTTERFLY: _template(
        ["confidence", "wit", "empathy"], ["poise", "vitality"]
    ),
    PlayerArchetype.ARTIST: _template(
        ["creativity", "empathy"], ["poise", "wit", "vitality"]
    ),
    PlayerArchetype.PROFESSIONAL: _template(
        ["ambition", "knowledge"], ["vitality", "confidence", "poise"]
    ),
    PlayerArchetype.BALANCED: {s: 15 for s in ALL_STATS},
    PlayerArchetype.DEBUG_ADVANCED: {s: 50 for s in ALL_STATS},
    PlayerArchetype.DEBUG_MASTER: {s: 80 for s in ALL_STATS},
}


def get_starting_stats(archetype: Union[PlayerArchetype, str]) -> StatVector:
    """아키타입 템플릿으로 base = current 벡터 생성."""
    template = ARCHETYPE_STATS[PlayerArchetype(archetype)]
    return StatVector(
        base={s: float(v) for s, v in template.items()},
        current={s: float(v) for s, v in template.items()},
    )


def get_default_tracking() -> StatTracking:
    return StatTracking()
