"""관계 상태 판정

3축 값 → RelationshipState. 우선순위 테이블의 첫 일치가 이긴다.
"""

from typing import Dict, List, Optional

from src.core.relationship.config import (
    RELATIONSHIP_THRESHOLDS,
    STATE_DESCRIPTIONS,
    STATE_DIFFICULTY_MODIFIERS,
    STATE_EMOTION_MAP,
    ANGRY_DELTA_THRESHOLD,
)
from src.core.relationship.models import (
    EmotionalState,
    RelationshipAxes,
    RelationshipState,
)

T = RELATIONSHIP_THRESHOLDS


def calculate_relationship_state(trust: float, affection: float, desire: float) -> RelationshipState:
    """우선순위 순 판정.

    partner > lover > close_friend > friend > crush > enemy > rival
    > complicated > acquaintance > stranger
    """
    axes = (trust, affection, desire)

    partner = T["partner"]
    if (
        trust >= partner["min_trust"]
        and affection >= partner["min_affection"]
        and desire >= partner["min_desire"]
    ):
        return RelationshipState.PARTNER

    lover = T["lover"]
    if (
        desire >= lover["min_desire"]
        and affection >= lover["min_affection"]
        and trust < lover["max_trust"]
    ):
        return RelationshipState.LOVER

    close = T["close_friend"]
    if (
        affection >= close["min_affection"]
        and trust >= close["min_trust"]
        and desire < close["max_desire"]
    ):
        return RelationshipState.CLOSE_FRIEND

    friend = T["friend"]
    if affection >= friend["min_affection"] and trust >= friend["min_trust"]:
        return RelationshipState.FRIEND

    crush = T["crush"]
    if desire >= crush["min_desire"] and affection < crush["max_affection"]:
        return RelationshipState.CRUSH

    enemy = T["enemy"]
    if trust < enemy["max_trust"] and affection < enemy["max_affection"]:
        return RelationshipState.ENEMY

    rival = T["rival"]
    if trust < rival["max_trust"] or affection < rival["max_affection"]:
        return RelationshipState.RIVAL

    complicated = T["complicated"]
    if any(v > complicated["positive"] for v in axes) and any(
        v < complicated["negative"] for v in axes
    ):
        return RelationshipState.COMPLICATED

    acquaintance = T["acquaintance"]
    if any(v >= acquaintance["min_any"] for v in axes) and all(
        v > acquaintance["floor"] for v in axes
    ):
        return RelationshipState.ACQUAINTANCE

    return RelationshipState.STRANGER


def get_state_for_axes(axes: RelationshipAxes) -> RelationshipState:
    return calculate_relationship_state(axes.trust, axes.affection, axes.desire)


def get_relationship_difficulty_modifier(axes: RelationshipAxes) -> int:
    """상태별 사회 활동 난이도 보정 (음수 = 쉬움)."""
    return STATE_DIFFICULTY_MODIFIERS[get_state_for_axes(axes)]


def update_unlocked_states(
    unlocked: List[RelationshipState], new_state: RelationshipState
) -> List[RelationshipState]:
    """처음 도달한 상태를 뒤에 추가. 입력 리스트는 변경하지 않는다."""
    result = [RelationshipState(s) for s in unlocked]
    if new_state not in result:
        result.append(new_state)
    return result


def get_state_description(state: RelationshipState) -> str:
    return STATE_DESCRIPTIONS[RelationshipState(state)]


def get_state_display_name(state: RelationshipState) -> str:
    """'close_friend' → 'Close Friend'"""
    return RelationshipState(state).value.replace("_", " ").title()


def get_emotional_state(state: RelationshipState) -> EmotionalState:
    return STATE_EMOTION_MAP[RelationshipState(state)]


def get_contextual_emotional_state(
    deltas: Optional[Dict[str, float]], new_state: RelationshipState
) -> EmotionalState:
    """방금 일어난 변동을 반영한 감정.

    큰 하락 → angry, 하락 → sad, 욕망 상승 → flirty,
    신뢰/호감 상승 → happy, 그 외 상태 기본 감정.
    """
    deltas = deltas or {}
    values = [v for v in deltas.values() if v is not None]

    if any(v <= ANGRY_DELTA_THRESHOLD for v in values):
        return EmotionalState.ANGRY
    if any(v < 0 for v in values):
        return EmotionalState.SAD
    if deltas.get("desire", 0) > 0:
        return EmotionalState.FLIRTY
    if deltas.get("trust", 0) > 0 or deltas.get("affection", 0) > 0:
        return EmotionalState.HAPPY
    return get_emotional_state(new_state)
