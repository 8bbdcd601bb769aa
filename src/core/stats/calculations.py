"""스탯 수치 계산

감소 수익, current 상한, 야간 surplus 전환.
전부 순수 함수. 입력을 변경하지 않고 새 StatVector를 반환한다.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

from src.core.stats.models import (
    ALL_STATS,
    StatChange,
    StatChangeComponent,
    StatKey,
    StatName,
    StatVector,
    to_stat_name,
)

BASE_STAT_CAP = 100
MAX_CURRENT_GAP = 30
DIMINISHING_RETURNS_CEILING = 150

SURPLUS_BASE_RATE = 0.25
SURPLUS_DECAY_RATE = 0.5


def round_half_away(value: float) -> int:
    """0.5는 0에서 멀어지는 쪽으로 반올림 (-1.5 → -2, 2.5 → 3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class SurplusConversion:
    base_growth: float
    current_decay: float


@dataclass(frozen=True)
class DailyStatResult:
    """process_daily_stat_changes 결과"""

    new_stats: StatVector
    changes: List[StatChange]
    components: Dict[StatName, List[StatChangeComponent]]


# ── 기본 공식 ─────────────────────────────────────────────


def apply_diminishing_returns(base_gain: float, current_stat: float) -> float:
    """current가 150에 가까워질수록 이득 감소. 150 이상이면 0."""
    multiplier = max(0.0, 1 - current_stat / DIMINISHING_RETURNS_CEILING)
    return base_gain * multiplier


def get_max_current(base_stat: float) -> float:
    return min(base_stat + MAX_CURRENT_GAP, BASE_STAT_CAP + MAX_CURRENT_GAP)


def cap_current_stat(base_stat: float, current_stat: float) -> float:
    """current를 [0, min(base+30, 130)] 범위로 클램프."""
    return min(max(current_stat, 0), get_max_current(base_stat))


def calculate_surplus_conversion(
    base_stat: float, current_stat: float
) -> SurplusConversion:
    """surplus의 25%는 base로, 50%는 current에서 소멸.

    base는 100을 넘지 않는다.
    """
    surplus = current_stat - base_stat
    if surplus <= 0:
        return SurplusConversion(base_growth=0, current_decay=0)

    base_growth = surplus * SURPLUS_BASE_RATE
    current_decay = surplus * SURPLUS_DECAY_RATE
    capped_growth = max(0, min(base_growth, BASE_STAT_CAP - base_stat))
    return SurplusConversion(base_growth=capped_growth, current_decay=current_decay)


# ── 접근자 ───────────────────────────────────────────────


def get_base_stat(stats: StatVector, stat: StatKey) -> float:
    return stats.base[to_stat_name(stat)]


def get_current_stat(stats: StatVector, stat: StatKey) -> float:
    return stats.current[to_stat_name(stat)]


def set_base_stat(stats: StatVector, stat: StatKey, value: float) -> StatVector:
    """base 설정. 100 상한."""
    name = to_stat_name(stat)
    base = dict(stats.base)
    base[name] = max(0, min(value, BASE_STAT_CAP))
    return StatVector(base=base, current=dict(stats.current))


def set_current_stat(stats: StatVector, stat: StatKey, value: float) -> StatVector:
    """current 설정. 현재 base 기준으로 상한 재계산."""
    name = to_stat_name(stat)
    current = dict(stats.current)
    current[name] = cap_current_stat(stats.base[name], value)
    return StatVector(base=dict(stats.base), current=current)


# ── 활동 효과 ─────────────────────────────────────────────


def apply_stat_change(base_stat: float, current_stat: float, change: float) -> float:
    return cap_current_stat(base_stat, current_stat + change)


def apply_activity_stat_gain(
    stats: StatVector, stat: StatKey, base_gain: float
) -> Tuple[StatVector, float]:
    """감소 수익 적용 후 current에 더한다. (새 벡터, 실제 증가량) 반환."""
    name = to_stat_name(stat)
    current_stat = stats.current[name]
    effective_gain = apply_diminishing_returns(base_gain, current_stat)
    new_current = cap_current_stat(stats.base[name], current_stat + effective_gain)
    return set_current_stat(stats, name, new_current), new_current - current_stat


def apply_stat_effects(
    stats: StatVector, effects: Mapping[StatKey, float]
) -> Tuple[StatVector, Dict[StatName, float]]:
    """활동 결과 스탯 효과 일괄 적용.

    양수: 감소 수익 적용.
    음수: 그대로 적용하되 base 아래로는 내려가지 않음.
    이미 base 미만이면 페널티는 변화 없음.
    """
    new_stats = stats
    actual_changes: Dict[StatName, float] = {}

    for stat, change in effects.items():
        name = to_stat_name(stat)
        if not change:
            continue

        if change > 0:
            new_stats, gained = apply_activity_stat_gain(new_stats, name, change)
            actual_changes[name] = gained
        else:
            current_stat = new_stats.current[name]
            floor = min(current_stat, new_stats.base[name])
            new_current = max(current_stat + change, floor)
            new_stats = set_current_stat(new_stats, name, new_current)
            actual_changes[name] = new_stats.current[name] - current_stat

    return new_stats, actual_changes


# ── 야간 처리 ─────────────────────────────────────────────


def process_daily_stat_changes(stats: StatVector) -> DailyStatResult:
    """모든 스탯에 surplus 전환 적용 (수면 1회당 1번)."""
    new_stats = stats
    changes: List[StatChange] = []
    components: Dict[StatName, List[StatChangeComponent]] = {}

    for name in ALL_STATS:
        base_stat = stats.base[name]
        current_stat = stats.current[name]
        surplus = current_stat - base_stat
        conversion = calculate_surplus_conversion(base_stat, current_stat)
        stat_components: List[StatChangeComponent] = []

        new_base = min(base_stat + conversion.base_growth, BASE_STAT_CAP)
        if conversion.base_growth > 0:
            stat_components.append(
                StatChangeComponent(
                    source="surplus_to_base",
                    category="Surplus Conversion",
                    description="25% of surplus converted to base",
                    value=conversion.base_growth,
                    details=f"Surplus: {surplus:.1f} → Base +{conversion.base_growth:.2f}",
                )
            )

        new_current = current_stat - conversion.current_decay
        if conversion.current_decay > 0:
            stat_components.append(
                StatChangeComponent(
                    source="surplus_decay",
                    category="Surplus Decay",
                    description="50% of surplus decayed from current",
                    value=-conversion.current_decay,
                    details=f"Surplus: {surplus:.1f} → Current -{conversion.current_decay:.2f}",
                )
            )

        new_stats = set_base_stat(new_stats, name, new_base)
        new_stats = set_current_stat(new_stats, name, new_current)

        if conversion.base_growth or conversion.current_decay:
            changes.append(
                StatChange(
                    stat=name,
                    previous_base=base_stat,
                    new_base=new_stats.base[name],
                    previous_current=current_stat,
                    new_current=new_stats.current[name],
                    base_delta=new_stats.base[name] - base_stat,
                    current_delta=new_stats.current[name] - current_stat,
                )
            )
        if stat_components:
            components[name] = stat_components

    return DailyStatResult(new_stats=new_stats, changes=changes, components=components)
