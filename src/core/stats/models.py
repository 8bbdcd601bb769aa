"""스탯 시스템 도메인 모델

9개 스탯 벡터(base + current), 일일 추적 카운터, 변동 내역 기록.
DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class StatName(str, Enum):
    """9대 스탯"""

    FITNESS = "fitness"
    VITALITY = "vitality"
    POISE = "poise"
    KNOWLEDGE = "knowledge"
    CREATIVITY = "creativity"
    AMBITION = "ambition"
    CONFIDENCE = "confidence"
    WIT = "wit"
    EMPATHY = "empathy"


class StatCategory(str, Enum):
    PHYSICAL = "physical"
    MENTAL = "mental"
    SOCIAL = "social"


class PlayerArchetype(str, Enum):
    """캐릭터 생성 시 선택하는 시작 스탯 템플릿"""

    ATHLETE = "athlete"
    SCHOLAR = "scholar"
    SOCIAL_BUTTERFLY = "social_butterfly"
    ARTIST = "artist"
    PROFESSIONAL = "professional"
    BALANCED = "balanced"
    DEBUG_ADVANCED = "debug_advanced"
    DEBUG_MASTER = "debug_master"


StatKey = Union[StatName, str]

ALL_STATS: List[StatName] = list(StatName)


def to_stat_name(stat: StatKey) -> StatName:
    """문자열 → StatName. 알 수 없는 이름은 ValueError."""
    if isinstance(stat, StatName):
        return stat
    return StatName(stat)


@dataclass(frozen=True)
class StatVector:
    """base(영구) + current(변동) 쌍.

    불변 객체. 변경 함수는 항상 새 StatVector를 반환한다.
    """

    base: Dict[StatName, float]
    current: Dict[StatName, float]

    def __post_init__(self) -> None:
        missing = [s.value for s in ALL_STATS if s not in self.base or s not in self.current]
        if missing:
            raise ValueError(f"StatVector missing stats: {missing}")

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "base": {s.value: self.base[s] for s in ALL_STATS},
            "current": {s.value: self.current[s] for s in ALL_STATS},
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Dict[str, float]]) -> "StatVector":
        return cls(
            base={to_stat_name(k): float(v) for k, v in raw["base"].items()},
            current={to_stat_name(k): float(v) for k, v in raw["current"].items()},
        )


@dataclass
class StatTracking:
    """하루 단위 추적 카운터. 수면 시 초기화."""

    min_energy_today: int = 100
    ending_energy_today: int = 100
    work_streak: int = 0
    rest_streak: int = 0
    burnout_streak: int = 0
    late_night_streak: int = 0
    worked_today: bool = False
    had_catastrophic_failure_today: bool = False
    stats_trained_today: List[StatName] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "min_energy_today": self.min_energy_today,
            "ending_energy_today": self.ending_energy_today,
            "work_streak": self.work_streak,
            "rest_streak": self.rest_streak,
            "burnout_streak": self.burnout_streak,
            "late_night_streak": self.late_night_streak,
            "worked_today": self.worked_today,
            "had_catastrophic_failure_today": self.had_catastrophic_failure_today,
            "stats_trained_today": [s.value for s in self.stats_trained_today],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, object]) -> "StatTracking":
        data = dict(raw)
        data["stats_trained_today"] = [
            to_stat_name(s) for s in data.get("stats_trained_today", [])
        ]
        return cls(**data)


@dataclass(frozen=True)
class StatChangeComponent:
    """스탯 변동 한 건의 출처 (예: surplus_to_base, vitality_min_energy)"""

    source: str
    category: str
    description: str
    value: float
    details: Optional[str] = None


@dataclass(frozen=True)
class StatChange:
    """단일 스탯의 변동 전후 값"""

    stat: StatName
    previous_base: float
    new_base: float
    previous_current: float
    new_current: float
    base_delta: float
    current_delta: float


@dataclass(frozen=True)
class StatChangeBreakdown:
    """수면 1회분 감사 기록. 생성 후 변경하지 않는다."""

    stat: StatName
    previous_base: float
    new_base: float
    previous_current: float
    new_current: float
    base_change: float
    current_change: float
    components: List[StatChangeComponent]
