"""판정 시스템 Core 패키지 — 공개 API"""

from src.core.outcome.models import (
    TIER_ORDER,
    GeneratedOutcome,
    OutcomeTier,
    RequirementCheck,
    RollResult,
    UnmetRequirement,
)
from src.core.outcome.resolver import (
    BASE_DC,
    apply_crit_shift,
    calculate_outcome_probabilities,
    calculate_stat_bonus,
    determine_outcome_tier,
    get_default_outcome_description,
    is_critical_failure,
    is_critical_success,
    meets_stat_requirements,
    roll_2d100,
    roll_outcome,
)
from src.core.outcome.effects import (
    OUTCOME_SCALING,
    generate_outcome,
    select_random,
)

__all__ = [
    "TIER_ORDER",
    "GeneratedOutcome",
    "OutcomeTier",
    "RequirementCheck",
    "RollResult",
    "UnmetRequirement",
    "BASE_DC",
    "apply_crit_shift",
    "calculate_outcome_probabilities",
    "calculate_stat_bonus",
    "determine_outcome_tier",
    "get_default_outcome_description",
    "is_critical_failure",
    "is_critical_success",
    "meets_stat_requirements",
    "roll_2d100",
    "roll_outcome",
    "OUTCOME_SCALING",
    "generate_outcome",
    "select_random",
]
