"""2d100 판정 엔진

DC = 100 + difficulty, total = roll + stat_bonus.
티어 판정 후 크리티컬 구간이면 한 단계 이동.

[크리티컬 구간] DC와 무관하게 고정
- 2 ~ 50   → 대실패 (한 단계 하락)
- 152 ~ 200 → 대성공 (한 단계 상승)
"""

import random
from typing import Dict, Iterable, List, Mapping, Optional

from src.core.logging import get_logger
from src.core.outcome.models import (
    TIER_ORDER,
    OutcomeTier,
    RequirementCheck,
    RollResult,
    UnmetRequirement,
)
from src.core.stats.calculations import get_base_stat, get_current_stat, round_half_away
from src.core.stats.models import StatKey, StatVector, to_stat_name

logger = get_logger(__name__)

BASE_DC = 100
TIER_BAND = 50

DIE_SIDES = 100
MIN_ROLL = 2
MAX_ROLL = 2 * DIE_SIDES

CRIT_FAILURE_MAX = 50
CRIT_SUCCESS_MIN = 152


def roll_2d100(rng: Optional[random.Random] = None) -> int:
    """1~100 두 번 합산."""
    rng = rng or random.Random()
    return rng.randint(1, DIE_SIDES) + rng.randint(1, DIE_SIDES)


def calculate_stat_bonus(stats: StatVector, relevant_stats: Iterable[StatKey]) -> int:
    """관련 스탯 current의 평균 (반올림). 관련 스탯이 없으면 0."""
    values = [get_current_stat(stats, s) for s in relevant_stats]
    if not values:
        return 0
    return round_half_away(sum(values) / len(values))


def determine_outcome_tier(total: int, dc: int) -> OutcomeTier:
    """total vs DC 비교.

    total <= DC-50        → catastrophic
    DC-50 < total < DC    → mixed
    DC <= total < DC+50   → okay
    total >= DC+50        → best
    """
    if total <= dc - TIER_BAND:
        return OutcomeTier.CATASTROPHIC
    if total < dc:
        return OutcomeTier.MIXED
    if total < dc + TIER_BAND:
        return OutcomeTier.OKAY
    return OutcomeTier.BEST


def is_critical_failure(roll: int) -> bool:
    return MIN_ROLL <= roll <= CRIT_FAILURE_MAX


def is_critical_success(roll: int) -> bool:
    return CRIT_SUCCESS_MIN <= roll <= MAX_ROLL


def apply_crit_shift(
    tier: OutcomeTier, critical_success: bool, critical_failure: bool
) -> OutcomeTier:
    """크리티컬 보정. best / catastrophic 경계를 넘지 않는다."""
    index = TIER_ORDER.index(tier)
    if critical_success:
        index = min(index + 1, len(TIER_ORDER) - 1)
    elif critical_failure:
        index = max(index - 1, 0)
    return TIER_ORDER[index]


def roll_outcome(
    stats: StatVector,
    relevant_stats: Iterable[StatKey],
    difficulty: int,
    roll: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> RollResult:
    """판정 실행.

    Args:
        stats: 플레이어 스탯
        relevant_stats: 보너스 계산에 쓰는 스탯
        difficulty: 활동/상황 난이도 (DC = 100 + difficulty, 하한 없음)
        roll: 고정 주사위 값 (테스트용, 2~200)
        rng: 주입 난수원

    Returns:
        RollResult
    """
    stats_used = [to_stat_name(s) for s in relevant_stats]

    if roll is None:
        roll = roll_2d100(rng)
    elif not MIN_ROLL <= roll <= MAX_ROLL:
        raise ValueError(f"Roll out of range [{MIN_ROLL}, {MAX_ROLL}]: {roll}")

    stat_bonus = calculate_stat_bonus(stats, stats_used)
    dc = BASE_DC + difficulty
    total = roll + stat_bonus

    base_tier = determine_outcome_tier(total, dc)
    crit_success = is_critical_success(roll)
    crit_failure = is_critical_failure(roll)
    tier = apply_crit_shift(base_tier, crit_success, crit_failure)

    logger.debug(
        "roll=%d bonus=%d dc=%d total=%d tier=%s (base=%s)",
        roll,
        stat_bonus,
        dc,
        total,
        tier.value,
        base_tier.value,
    )

    return RollResult(
        tier=tier,
        base_tier=base_tier,
        roll=roll,
        stat_bonus=stat_bonus,
        dc=dc,
        total=total,
        is_critical_success=crit_success,
        is_critical_failure=crit_failure,
        stats_used=stats_used,
    )


def roll_probability(roll: int) -> float:
    """2d100 합이 정확히 roll일 확률 (삼각 분포)."""
    if not MIN_ROLL <= roll <= MAX_ROLL:
        return 0.0
    ways = roll - 1 if roll <= DIE_SIDES + 1 else MAX_ROLL + 1 - roll
    return ways / (DIE_SIDES * DIE_SIDES)


def calculate_outcome_probabilities(stat_bonus: int, dc: int) -> Dict[OutcomeTier, float]:
    """최종 티어별 확률 (크리티컬 포함). 합계 1."""
    probabilities = {tier: 0.0 for tier in TIER_ORDER}
    for roll in range(MIN_ROLL, MAX_ROLL + 1):
        base_tier = determine_outcome_tier(roll + stat_bonus, dc)
        tier = apply_crit_shift(
            base_tier, is_critical_success(roll), is_critical_failure(roll)
        )
        probabilities[tier] += roll_probability(roll)
    return probabilities


def meets_stat_requirements(
    stats: StatVector, requirements: Mapping[StatKey, float]
) -> RequirementCheck:
    """활동 요구 스탯 확인. base 스탯 기준."""
    unmet: List[UnmetRequirement] = []
    for stat, required in requirements.items():
        actual = get_base_stat(stats, stat)
        if actual < required:
            unmet.append(
                UnmetRequirement(stat=to_stat_name(stat), required=required, actual=actual)
            )
    return RequirementCheck(meets=not unmet, unmet=unmet)


_DEFAULT_DESCRIPTIONS: Dict[OutcomeTier, str] = {
    OutcomeTier.BEST: "{name} went exceptionally well!",
    OutcomeTier.OKAY: "{name} went as expected.",
    OutcomeTier.MIXED: "{name} had some complications.",
    OutcomeTier.CATASTROPHIC: "{name} was a disaster.",
}


def get_default_outcome_description(activity_name: str, tier: OutcomeTier) -> str:
    return _DEFAULT_DESCRIPTIONS[OutcomeTier(tier)].format(name=activity_name)
