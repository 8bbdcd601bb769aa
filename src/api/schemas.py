"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class CreatePlayerRequest(BaseModel):
    """캐릭터 생성 (이미 있으면 초기화)"""

    player_id: str = Field(..., min_length=1, max_length=50, description="플레이어 ID")
    archetype: Optional[str] = Field(None, description="athlete, scholar, balanced ...")
    sexual_preference: str = Field("everyone", description="women, men, everyone, no_one")


class CreateNPCRequest(BaseModel):
    """NPC 생성"""

    name: str = Field(..., min_length=1, max_length=100)
    gender: str = Field("other", description="female, male, other")
    location: str = Field("coffee_shop", description="현재 장소 ID")
    traits: Optional[list[str]] = Field(None, description="없으면 무작위 3개")
    npc_id: Optional[str] = None


class PerformActivityRequest(BaseModel):
    """활동 수행"""

    player_id: str = Field(..., min_length=1)
    activity_id: str = Field(..., min_length=1)
    npc_id: Optional[str] = Field(None, description="사회 활동이면 필수")


class TravelRequest(BaseModel):
    player_id: str = Field(..., min_length=1)
    destination: str = Field(..., description="목적지 장소 ID")


class SleepRequest(BaseModel):
    player_id: str = Field(..., min_length=1)


# === Response Schemas ===


class StatsInfo(BaseModel):
    base: dict[str, float]
    current: dict[str, float]


class PlayerInfo(BaseModel):
    """플레이어 정보"""

    player_id: str
    archetype: str
    sexual_preference: str
    current_energy: int
    max_energy: int
    money: int
    current_day: int
    current_time: str
    current_location: str
    last_slept_at: Optional[str] = None
    stats: StatsInfo
    tracking: dict[str, Any] = {}


class NPCInfo(BaseModel):
    """NPC 정보. 공개된 특성만 노출."""

    npc_id: str
    name: str
    gender: str
    current_location: str
    revealed_traits: list[str] = []


class ActivityInfo(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str
    time_cost: int
    energy_cost: int
    money_cost: int
    difficulty: Optional[int] = None
    relevant_stats: list[str] = []
    tags: list[str] = []
    location: Optional[str] = None
    is_social: bool = False


class RollInfo(BaseModel):
    roll: int
    stat_bonus: int
    dc: int
    total: int
    base_tier: str
    is_critical_success: bool
    is_critical_failure: bool


class DifficultyContributorInfo(BaseModel):
    source: str
    label: str
    value: int


class DifficultyInfo(BaseModel):
    final_dc: int
    base_dc: int
    activity_difficulty: int
    relationship_modifier: int = 0
    trait_score: int = 0
    contributors: list[DifficultyContributorInfo] = []


class RelationshipChangeInfo(BaseModel):
    previous: dict[str, int]
    new: dict[str, int]
    deltas: dict[str, int]
    previous_state: str
    new_state: str
    state_changed: bool


class ActivityResultResponse(BaseModel):
    """활동 수행 결과"""

    success: bool = True
    player_id: str
    activity_id: str
    npc_id: Optional[str] = None
    tier: str
    description: str
    roll: Optional[RollInfo] = None
    difficulty: Optional[DifficultyInfo] = None
    stat_changes: dict[str, float] = {}
    stats_trained: list[str] = []
    energy_delta: int
    money_delta: int
    time_spent: int
    new_energy: int
    new_money: int
    new_time: str
    ends_after_midnight: bool = False
    relationship: Optional[RelationshipChangeInfo] = None
    emotional_state: Optional[str] = None
    discovered_trait: Optional[str] = None


class TravelResponse(BaseModel):
    player_id: str
    location: str
    travel_time: int
    current_time: str


class StatComponentInfo(BaseModel):
    source: str
    category: str
    description: str
    value: float
    details: Optional[str] = None


class StatBreakdownInfo(BaseModel):
    stat: str
    previous_base: float
    new_base: float
    previous_current: float
    new_current: float
    base_change: float
    current_change: float
    components: list[StatComponentInfo] = []


class SleepResponse(BaseModel):
    """수면 결과"""

    player_id: str
    wake_time: str
    hours_slept: float
    energy_restored: int
    new_day: int
    new_energy: int
    bedtime: str
    traveled_home: bool
    travel_time: int
    breakdowns: list[StatBreakdownInfo] = []
    defensive_changes: dict[str, float] = {}
    mixed_changes: dict[str, float] = {}


class RelationshipInfo(BaseModel):
    npc_id: str
    trust: int
    affection: int
    desire: int
    desire_cap: Optional[int] = None
    state: str
    state_name: str
    description: str
    unlocked_states: list[str] = []


class DifficultyPreviewResponse(BaseModel):
    """판정 전 난이도 + 티어 확률"""

    activity_id: str
    npc_id: Optional[str] = None
    stat_bonus: int
    difficulty: DifficultyInfo
    probabilities: dict[str, float]


class ErrorResponse(BaseModel):
    """에러 응답"""

    success: bool = False
    error: str
    detail: Optional[str] = None
