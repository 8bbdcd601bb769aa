"""3축 수치 변동 계산

전부 순수 함수, 외부 의존 없음. 입력 객체는 변경하지 않는다.
"""

from typing import Dict, Mapping, Optional

from src.core.outcome.models import OutcomeTier
from src.core.relationship.config import (
    AXIS_MAX,
    AXIS_MIN,
    DESIRE_CAP_MATCH,
    DESIRE_CAP_MISMATCH,
    DESIRE_CAP_NONE,
    OUTCOME_RELATIONSHIP_SCALING,
    REPAIR_BASE_DIFFICULTY,
    REPAIR_SCALE,
)
from src.core.relationship.models import (
    AXES,
    Relationship,
    RelationshipAxes,
    RelationshipChange,
    SexualPreference,
)
from src.core.relationship.states import (
    calculate_relationship_state,
    update_unlocked_states,
)
from src.core.stats.calculations import round_half_away

_MATCHING_GENDER = {
    SexualPreference.WOMEN: "female",
    SexualPreference.MEN: "male",
}


def clamp_axis(value: float) -> int:
    """정수로 반올림 (0.5는 0에서 먼 쪽) 후 -100 ~ +100 클램프."""
    return max(AXIS_MIN, min(AXIS_MAX, round_half_away(value)))


def apply_relationship_delta(
    axes: RelationshipAxes,
    delta: Mapping[str, float],
    desire_cap: Optional[int] = None,
) -> RelationshipAxes:
    """축별 변동 적용 → ±100 클램프 → 욕망 상한.

    상한은 위쪽만 제한한다 (음수 욕망은 그대로).
    """
    unknown = set(delta) - set(AXES)
    if unknown:
        raise ValueError(f"Unknown relationship axes: {sorted(unknown)}")

    trust = clamp_axis(axes.trust + delta.get("trust", 0))
    affection = clamp_axis(axes.affection + delta.get("affection", 0))
    desire = clamp_axis(axes.desire + delta.get("desire", 0))
    if desire_cap is not None and desire > desire_cap:
        desire = desire_cap
    return RelationshipAxes(trust=trust, affection=affection, desire=desire)


def calculate_desire_cap(preference: SexualPreference, gender: str) -> int:
    """플레이어 지향 + NPC 성별 → 욕망 상한.

    everyone → 100, no_one → 0, 일치 → 100, 불일치 → 25
    """
    preference = SexualPreference(preference)
    if preference == SexualPreference.EVERYONE:
        return DESIRE_CAP_MATCH
    if preference == SexualPreference.NO_ONE:
        return DESIRE_CAP_NONE
    gender_value = getattr(gender, "value", gender)
    if _MATCHING_GENDER[preference] == gender_value:
        return DESIRE_CAP_MATCH
    return DESIRE_CAP_MISMATCH


def get_repair_difficulty(value: float, base: int = REPAIR_BASE_DIFFICULTY) -> int:
    """음수 축을 회복하는 활동의 난이도. 깊을수록 어렵다."""
    if value < 0:
        return round_half_away(base * (1 + abs(value) / REPAIR_SCALE))
    return base


def scale_relationship_effects(
    effects: Mapping[str, float], tier: OutcomeTier
) -> Dict[str, int]:
    """기본 관계 효과 × 티어 배율 (반올림). 존재하는 축만 반환."""
    multiplier = OUTCOME_RELATIONSHIP_SCALING[OutcomeTier(tier).value]
    return {
        axis: round_half_away(value * multiplier)
        for axis, value in effects.items()
        if value is not None
    }


def evaluate_relationship_change(
    relationship: Relationship,
    base_effects: Mapping[str, float],
    tier: OutcomeTier,
) -> RelationshipChange:
    """활동 결과가 관계에 미치는 영향 계산 (순수)."""
    previous_axes = relationship.axes
    previous_state = calculate_relationship_state(
        previous_axes.trust, previous_axes.affection, previous_axes.desire
    )

    deltas = scale_relationship_effects(base_effects, tier)
    new_axes = apply_relationship_delta(previous_axes, deltas, relationship.desire_cap)
    new_state = calculate_relationship_state(new_axes.trust, new_axes.affection, new_axes.desire)

    return RelationshipChange(
        previous_axes=previous_axes,
        new_axes=new_axes,
        deltas=deltas,
        previous_state=previous_state,
        new_state=new_state,
        state_changed=new_state != previous_state,
        unlocked_states=update_unlocked_states(relationship.unlocked_states, new_state),
    )
