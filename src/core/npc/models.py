"""NPC Core 도메인 모델

DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from src.core.traits.calculations import to_trait, validate_traits
from src.core.traits.config import NPCTrait


class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"
    OTHER = "other"


@dataclass
class NPC:
    """만날 수 있는 NPC.

    traits: 숨겨진 특성 전체. revealed_traits: 플레이어가 발견한 특성 (발견 순서).
    """

    npc_id: str
    name: str
    gender: Gender = Gender.OTHER
    traits: List[NPCTrait] = field(default_factory=list)
    revealed_traits: List[NPCTrait] = field(default_factory=list)
    current_location: str = "coffee_shop"

    def __post_init__(self) -> None:
        self.gender = Gender(self.gender)
        self.traits = validate_traits(self.traits)
        self.revealed_traits = [to_trait(t) for t in self.revealed_traits]
        hidden = [t.value for t in self.revealed_traits if t not in self.traits]
        if hidden:
            raise ValueError(f"Revealed traits not owned by {self.npc_id}: {hidden}")

    @property
    def hidden_traits(self) -> List[NPCTrait]:
        return [t for t in self.traits if t not in self.revealed_traits]
