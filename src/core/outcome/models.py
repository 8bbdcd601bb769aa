"""판정 결과 모델"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from src.core.stats.models import StatName


class OutcomeTier(str, Enum):
    """결과 티어 (catastrophic < mixed < okay < best)"""

    CATASTROPHIC = "catastrophic"
    MIXED = "mixed"
    OKAY = "okay"
    BEST = "best"

    @property
    def rank(self) -> int:
        return TIER_ORDER.index(self)


TIER_ORDER: List[OutcomeTier] = [
    OutcomeTier.CATASTROPHIC,
    OutcomeTier.MIXED,
    OutcomeTier.OKAY,
    OutcomeTier.BEST,
]


@dataclass(frozen=True)
class RollResult:
    """2d100 판정 결과. 입력에 대한 순수 함수의 출력."""

    tier: OutcomeTier
    base_tier: OutcomeTier  # 크리티컬 보정 전
    roll: int  # 2 ~ 200
    stat_bonus: int
    dc: int
    total: int
    is_critical_success: bool
    is_critical_failure: bool
    stats_used: List[StatName] = field(default_factory=list)


@dataclass(frozen=True)
class UnmetRequirement:
    stat: StatName
    required: float
    actual: float


@dataclass(frozen=True)
class RequirementCheck:
    meets: bool
    unmet: List[UnmetRequirement]


@dataclass
class GeneratedOutcome:
    """티어 + 효과 프로필 → 구체적 변동량.

    additional_*_cost: 에너지/돈은 음수(추가 소모), 시간은 양수(추가 소요 분).
    """

    stat_effects: Dict[StatName, float] = field(default_factory=dict)
    money_gain: int = 0
    additional_energy_cost: int = 0
    additional_money_cost: int = 0
    additional_time_cost: int = 0
    friendship_multiplier: float = 1.0
    romance_multiplier: float = 1.0
