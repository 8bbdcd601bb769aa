"""결과 효과 생성기

티어 + ActivityEffectProfile → 스탯/자원 변동량.
무작위 선택은 주입된 rng로만 수행 (비복원 추출).
"""

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, TypeVar

from src.core.activity.models import ActivityEffectProfile, NegativeEffects
from src.core.outcome.models import GeneratedOutcome, OutcomeTier
from src.core.relationship.config import OUTCOME_RELATIONSHIP_SCALING
from src.core.stats.calculations import round_half_away
from src.core.stats.models import StatName

T = TypeVar("T")


@dataclass(frozen=True)
class TierScaling:
    main_multiplier: float
    secondary_count: int = 0
    stat_penalty_count: int = 0
    penalty_severity: float = 1.0


OUTCOME_SCALING: Dict[OutcomeTier, TierScaling] = {
    OutcomeTier.BEST: TierScaling(main_multiplier=1.75, secondary_count=2),
    OutcomeTier.OKAY: TierScaling(main_multiplier=1.0),
    OutcomeTier.MIXED: TierScaling(main_multiplier=0.5, stat_penalty_count=1),
    OutcomeTier.CATASTROPHIC: TierScaling(
        main_multiplier=0.0, stat_penalty_count=2, penalty_severity=1.5
    ),
}


def select_random(pool: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """비복원 추출. 풀이 작으면 가능한 만큼만 반환 (빈 풀 → [])."""
    if not pool or count <= 0:
        return []
    return rng.sample(list(pool), min(count, len(pool)))


def _resource_costs(effects: NegativeEffects) -> Dict[str, float]:
    """0이 아닌 자원 비용만."""
    costs = {
        "energy": effects.energy_cost,
        "money": effects.money_cost,
        "time": effects.time_cost,
    }
    return {k: v for k, v in costs.items() if v}


def _apply_resource_cost(outcome: GeneratedOutcome, kind: str, amount: float) -> None:
    if kind == "energy":
        outcome.additional_energy_cost = -round_half_away(amount)
    elif kind == "money":
        outcome.additional_money_cost = -round_half_away(amount)
    elif kind == "time":
        outcome.additional_time_cost = round_half_away(amount)


def _add_stat_effect(outcome: GeneratedOutcome, stat: StatName, value: float) -> None:
    outcome.stat_effects[stat] = outcome.stat_effects.get(stat, 0) + value


def generate_outcome(
    tier: OutcomeTier,
    profile: ActivityEffectProfile,
    rng: Optional[random.Random] = None,
) -> GeneratedOutcome:
    """티어별 효과 생성.

    best         ×1.75 + 보조 스탯 2개, 관계 ×1.5
    okay         ×1.0, 관계 ×1.0
    mixed        ×0.5 + 스탯 페널티 1개 + 자원 비용 1개, 관계 ×0.3
    catastrophic ×0 + 스탯 페널티 최대 2개 ×1.5 + 모든 자원 비용 ×1.5, 관계 ×-0.5
    """
    tier = OutcomeTier(tier)
    rng = rng or random.Random()
    scaling = OUTCOME_SCALING[tier]
    relationship_multiplier = OUTCOME_RELATIONSHIP_SCALING[tier.value]

    outcome = GeneratedOutcome(
        friendship_multiplier=relationship_multiplier,
        romance_multiplier=relationship_multiplier,
    )

    # 주 효과
    if scaling.main_multiplier > 0:
        main_gain = profile.main_stat_gain * scaling.main_multiplier
        if main_gain:
            for stat in profile.main_stats:
                _add_stat_effect(outcome, stat, main_gain)
        outcome.money_gain = round_half_away(profile.main_money_gain * scaling.main_multiplier)

    # 보조 효과 (best)
    if scaling.secondary_count and profile.secondary_stat_gain:
        for stat in select_random(profile.secondary_stats, scaling.secondary_count, rng):
            _add_stat_effect(outcome, stat, profile.secondary_stat_gain)

    # 부정 효과 (mixed / catastrophic)
    negative = profile.negative_effects
    if scaling.stat_penalty_count and negative is not None:
        penalty = negative.stat_penalty * scaling.penalty_severity
        for stat in select_random(negative.stats, scaling.stat_penalty_count, rng):
            _add_stat_effect(outcome, stat, -penalty)

        costs = _resource_costs(negative)
        if tier == OutcomeTier.CATASTROPHIC:
            for kind, amount in costs.items():
                _apply_resource_cost(outcome, kind, amount * scaling.penalty_severity)
        else:
            for kind in select_random(sorted(costs), 1, rng):
                _apply_resource_cost(outcome, kind, costs[kind])

    return outcome
