"""관계 시스템 상수 테이블

상태 임계값, 난이도 보정, 결과 티어별 관계 배율, 욕망 상한, 감정/설명 매핑.
관계 관련 수치는 전부 여기서만 정의한다.
"""

from typing import Dict

from src.core.relationship.models import EmotionalState, RelationshipState

AXIS_MIN = -100
AXIS_MAX = 100

# 상태 판정 임계값 (states.calculate_relationship_state에서 우선순위 순으로 사용)
RELATIONSHIP_THRESHOLDS: Dict[str, Dict[str, int]] = {
    "partner": {"min_trust": 60, "min_affection": 60, "min_desire": 50},
    "lover": {"min_desire": 60, "min_affection": 40, "max_trust": 60},
    "close_friend": {"min_affection": 60, "min_trust": 40, "max_desire": 30},
    "friend": {"min_affection": 30, "min_trust": 20},
    "crush": {"min_desire": 40, "max_affection": 30},
    "enemy": {"max_trust": -50, "max_affection": -50},
    "rival": {"max_trust": -30, "max_affection": -30},
    "complicated": {"positive": 20, "negative": -20},
    "acquaintance": {"min_any": 10, "floor": -10},
}

STATE_DIFFICULTY_MODIFIERS: Dict[RelationshipState, int] = {
    RelationshipState.PARTNER: -15,
    RelationshipState.LOVER: -12,
    RelationshipState.CLOSE_FRIEND: -12,
    RelationshipState.FRIEND: -8,
    RelationshipState.CRUSH: -5,
    RelationshipState.ACQUAINTANCE: -3,
    RelationshipState.STRANGER: 0,
    RelationshipState.COMPLICATED: 10,
    RelationshipState.RIVAL: 15,
    RelationshipState.ENEMY: 30,
}

# 결과 티어 → 관계 효과 배율 (효과 생성기 / 관계 변동 공용)
# 키는 OutcomeTier.value
OUTCOME_RELATIONSHIP_SCALING: Dict[str, float] = {
    "best": 1.5,
    "okay": 1.0,
    "mixed": 0.3,
    "catastrophic": -0.5,
}

DESIRE_CAP_MATCH = 100
DESIRE_CAP_MISMATCH = 25
DESIRE_CAP_NONE = 0

REPAIR_BASE_DIFFICULTY = 50
REPAIR_SCALE = 50

# 이 값 이하의 단일 축 하락은 분노로 표시
ANGRY_DELTA_THRESHOLD = -15

STATE_EMOTION_MAP: Dict[RelationshipState, EmotionalState] = {
    RelationshipState.PARTNER: EmotionalState.HAPPY,
    RelationshipState.LOVER: EmotionalState.FLIRTY,
    RelationshipState.CLOSE_FRIEND: EmotionalState.HAPPY,
    RelationshipState.FRIEND: EmotionalState.HAPPY,
    RelationshipState.CRUSH: EmotionalState.FLIRTY,
    RelationshipState.ACQUAINTANCE: EmotionalState.NEUTRAL,
    RelationshipState.STRANGER: EmotionalState.NEUTRAL,
    RelationshipState.COMPLICATED: EmotionalState.SAD,
    RelationshipState.RIVAL: EmotionalState.ANGRY,
    RelationshipState.ENEMY: EmotionalState.ANGRY,
}

STATE_DESCRIPTIONS: Dict[RelationshipState, str] = {
    RelationshipState.PARTNER: "Deeply committed romantic partner with trust and love",
    RelationshipState.LOVER: "Passionate romantic connection, still building trust",
    RelationshipState.CLOSE_FRIEND: "Best friends with deep trust and affection",
    RelationshipState.FRIEND: "Good friends who enjoy spending time together",
    RelationshipState.CRUSH: "Strong attraction, but not yet emotionally connected",
    RelationshipState.ACQUAINTANCE: "Friendly but still getting to know each other",
    RelationshipState.STRANGER: "Just met, neutral feelings",
    RelationshipState.COMPLICATED: "Mixed feelings, complex relationship dynamics",
    RelationshipState.RIVAL: "Tension and animosity, on bad terms",
    RelationshipState.ENEMY: "Strong mutual dislike, actively hostile",
}
