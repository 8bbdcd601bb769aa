"""관계 시스템 Core 패키지 — 공개 API"""

from src.core.relationship.models import (
    AXES,
    EmotionalState,
    Relationship,
    RelationshipAxes,
    RelationshipChange,
    RelationshipState,
    SexualPreference,
)
from src.core.relationship.config import (
    DESIRE_CAP_MATCH,
    DESIRE_CAP_MISMATCH,
    DESIRE_CAP_NONE,
    OUTCOME_RELATIONSHIP_SCALING,
    RELATIONSHIP_THRESHOLDS,
    STATE_DESCRIPTIONS,
    STATE_DIFFICULTY_MODIFIERS,
    STATE_EMOTION_MAP,
)
from src.core.relationship.states import (
    calculate_relationship_state,
    get_contextual_emotional_state,
    get_emotional_state,
    get_relationship_difficulty_modifier,
    get_state_description,
    get_state_display_name,
    get_state_for_axes,
    update_unlocked_states,
)
from src.core.relationship.calculations import (
    apply_relationship_delta,
    calculate_desire_cap,
    clamp_axis,
    evaluate_relationship_change,
    get_repair_difficulty,
    scale_relationship_effects,
)

__all__ = [
    "AXES",
    "EmotionalState",
    "Relationship",
    "RelationshipAxes",
    "RelationshipChange",
    "RelationshipState",
    "SexualPreference",
    "DESIRE_CAP_MATCH",
    "DESIRE_CAP_MISMATCH",
    "DESIRE_CAP_NONE",
    "OUTCOME_RELATIONSHIP_SCALING",
    "RELATIONSHIP_THRESHOLDS",
    "STATE_DESCRIPTIONS",
    "STATE_DIFFICULTY_MODIFIERS",
    "STATE_EMOTION_MAP",
    "calculate_relationship_state",
    "get_contextual_emotional_state",
    "get_emotional_state",
    "get_relationship_difficulty_modifier",
    "get_state_description",
    "get_state_display_name",
    "get_state_for_axes",
    "update_unlocked_states",
    "apply_relationship_delta",
    "calculate_desire_cap",
    "clamp_axis",
    "evaluate_relationship_change",
    "get_repair_difficulty",
    "scale_relationship_effects",
]
