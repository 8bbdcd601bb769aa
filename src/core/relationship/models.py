"""관계 시스템 도메인 모델

신뢰(trust) / 호감(affection) / 욕망(desire) 3축.
상태는 항상 축 값에서 재계산한다. 저장된 current_state는 캐시일 뿐.
DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

AXES = ("trust", "affection", "desire")


class RelationshipState(str, Enum):
    """관계 상태 10단계 (우선순위 순)"""

    PARTNER = "partner"
    LOVER = "lover"
    CLOSE_FRIEND = "close_friend"
    FRIEND = "friend"
    CRUSH = "crush"
    ACQUAINTANCE = "acquaintance"
    STRANGER = "stranger"
    COMPLICATED = "complicated"
    RIVAL = "rival"
    ENEMY = "enemy"


class SexualPreference(str, Enum):
    WOMEN = "women"
    MEN = "men"
    EVERYONE = "everyone"
    NO_ONE = "no_one"


class EmotionalState(str, Enum):
    """NPC 표정/반응 표시용"""

    HAPPY = "happy"
    FLIRTY = "flirty"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANGRY = "angry"


@dataclass(frozen=True)
class RelationshipAxes:
    """3축 값. 각 축 -100 ~ +100."""

    trust: int = 0
    affection: int = 0
    desire: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"trust": self.trust, "affection": self.affection, "desire": self.desire}


@dataclass
class Relationship:
    """플레이어-NPC 관계 (플레이어/NPC 쌍마다 하나)"""

    relationship_id: str
    player_id: str
    npc_id: str

    # 3축 수치
    trust: int = 0
    affection: int = 0
    desire: int = 0
    desire_cap: Optional[int] = None  # 성적 지향 불일치 시 상한

    # 상태 (캐시)
    current_state: RelationshipState = RelationshipState.STRANGER
    unlocked_states: List[RelationshipState] = field(
        default_factory=lambda: [RelationshipState.STRANGER]
    )

    # 메타
    created_at: str = ""
    updated_at: str = ""

    @property
    def axes(self) -> RelationshipAxes:
        return RelationshipAxes(trust=self.trust, affection=self.affection, desire=self.desire)


@dataclass(frozen=True)
class RelationshipChange:
    """한 번의 관계 변동 평가 결과"""

    previous_axes: RelationshipAxes
    new_axes: RelationshipAxes
    deltas: Dict[str, int]
    previous_state: RelationshipState
    new_state: RelationshipState
    state_changed: bool
    unlocked_states: List[RelationshipState]
