"""활동 정의 모델

카탈로그(JSON)에서 로드되는 선언적 데이터.
잘못된 정의는 생성 시점에 ValueError. 조용히 보정하지 않는다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from src.core.stats.models import StatName, to_stat_name
from src.core.time import TimeSlot


class ActivityCategory(str, Enum):
    WORK = "work"
    SOCIAL = "social"
    SELF_IMPROVEMENT = "self_improvement"
    LEISURE = "leisure"
    SELF_CARE = "self_care"
    DISCOVERY = "discovery"


class ActivityTag(str, Enum):
    """NPC 특성 상성 판정에 쓰는 태그"""

    COFFEE = "coffee"
    PHYSICAL = "physical"
    INTELLECTUAL = "intellectual"
    CALM = "calm"
    FOOD = "food"
    ROMANTIC = "romantic"
    GAMING = "gaming"
    COMPETITIVE = "competitive"
    OUTDOOR = "outdoor"
    CREATIVE = "creative"


@dataclass(frozen=True)
class NegativeEffects:
    """mixed / catastrophic 결과에서 뽑는 부정 효과 풀. 비용은 양수 크기."""

    stats: List[StatName] = field(default_factory=list)
    stat_penalty: float = 1.0
    energy_cost: float = 0
    money_cost: float = 0
    time_cost: float = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "stats", [to_stat_name(s) for s in self.stats])
        for name in ("stat_penalty", "energy_cost", "money_cost", "time_cost"):
            if getattr(self, name) < 0:
                raise ValueError(f"negative_effects.{name} must be >= 0")


@dataclass(frozen=True)
class ActivityEffectProfile:
    """결과 티어 → 구체적 변동량 변환에 쓰는 효과 프로필"""

    main_stats: List[StatName] = field(default_factory=list)
    main_stat_gain: float = 0
    main_money_gain: float = 0
    secondary_stats: List[StatName] = field(default_factory=list)
    secondary_stat_gain: float = 0
    negative_effects: Optional[NegativeEffects] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "main_stats", [to_stat_name(s) for s in self.main_stats])
        object.__setattr__(
            self, "secondary_stats", [to_stat_name(s) for s in self.secondary_stats]
        )
        for name in ("main_stat_gain", "main_money_gain", "secondary_stat_gain"):
            if getattr(self, name) < 0:
                raise ValueError(f"outcome_profile.{name} must be >= 0")

    @classmethod
    def from_dict(cls, raw: Dict) -> "ActivityEffectProfile":
        negative = raw.get("negative_effects")
        return cls(
            main_stats=list(raw.get("main_stats", [])),
            main_stat_gain=float(raw.get("main_stat_gain", 0)),
            main_money_gain=float(raw.get("main_money_gain", 0)),
            secondary_stats=list(raw.get("secondary_stats", [])),
            secondary_stat_gain=float(raw.get("secondary_stat_gain", 0)),
            negative_effects=NegativeEffects(**negative) if negative else None,
        )


@dataclass(frozen=True)
class Activity:
    """활동 정의.

    energy_cost / money_cost는 부호 있는 변동량 (음수 = 소모).
    time_cost는 분 단위.
    """

    id: str
    name: str
    category: ActivityCategory
    time_cost: int
    energy_cost: int = 0
    money_cost: int = 0
    description: str = ""
    difficulty: Optional[int] = None
    relevant_stats: List[StatName] = field(default_factory=list)
    tags: List[ActivityTag] = field(default_factory=list)
    location: Optional[str] = None
    allowed_time_slots: Optional[List[TimeSlot]] = None
    stat_requirements: Dict[StatName, float] = field(default_factory=dict)
    outcome_profile: Optional[ActivityEffectProfile] = None
    relationship_effects: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Activity id is required")
        if self.time_cost < 0:
            raise ValueError(f"{self.id}: time_cost must be >= 0")
        object.__setattr__(self, "category", ActivityCategory(self.category))
        object.__setattr__(
            self, "relevant_stats", [to_stat_name(s) for s in self.relevant_stats]
        )
        object.__setattr__(self, "tags", [ActivityTag(t) for t in self.tags])
        if self.allowed_time_slots is not None:
            object.__setattr__(
                self, "allowed_time_slots", [TimeSlot(s) for s in self.allowed_time_slots]
            )
        object.__setattr__(
            self,
            "stat_requirements",
            {to_stat_name(k): v for k, v in self.stat_requirements.items()},
        )
        unknown_axes = set(self.relationship_effects) - {"trust", "affection", "desire"}
        if unknown_axes:
            raise ValueError(f"{self.id}: unknown relationship axes {sorted(unknown_axes)}")

    @property
    def has_difficulty(self) -> bool:
        return bool(self.difficulty and self.difficulty > 0)

    @classmethod
    def from_dict(cls, raw: Dict) -> "Activity":
        profile = raw.get("outcome_profile")
        return cls(
            id=raw["id"],
            name=raw["name"],
            category=raw["category"],
            time_cost=int(raw["time_cost"]),
            energy_cost=int(raw.get("energy_cost", 0)),
            money_cost=int(raw.get("money_cost", 0)),
            description=raw.get("description", ""),
            difficulty=raw.get("difficulty"),
            relevant_stats=list(raw.get("relevant_stats", [])),
            tags=list(raw.get("tags", [])),
            location=raw.get("location"),
            allowed_time_slots=raw.get("allowed_time_slots"),
            stat_requirements=dict(raw.get("stat_requirements", {})),
            outcome_profile=ActivityEffectProfile.from_dict(profile) if profile else None,
            relationship_effects=dict(raw.get("relationship_effects", {})),
        )
