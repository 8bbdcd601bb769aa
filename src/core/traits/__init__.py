"""NPC 특성 Core 패키지 — 공개 API"""

from src.core.traits.config import (
    CONFLICTING_TRAITS,
    MAX_TRAIT_SCORE,
    MIN_TRAIT_SCORE,
    TRAIT_DEFINITIONS,
    TRAIT_TAG_AFFINITY,
    NPCTrait,
    TraitDefinition,
)
from src.core.traits.calculations import (
    TraitContribution,
    get_contributing_trait,
    get_trait_activity_bonus,
    get_trait_activity_breakdown,
    get_trait_name,
    remove_conflicting_traits,
    select_random_traits,
    to_trait,
    traits_conflict,
    validate_traits,
)

__all__ = [
    "CONFLICTING_TRAITS",
    "MAX_TRAIT_SCORE",
    "MIN_TRAIT_SCORE",
    "TRAIT_DEFINITIONS",
    "TRAIT_TAG_AFFINITY",
    "NPCTrait",
    "TraitDefinition",
    "TraitContribution",
    "get_contributing_trait",
    "get_trait_activity_bonus",
    "get_trait_activity_breakdown",
    "get_trait_name",
    "remove_conflicting_traits",
    "select_random_traits",
    "to_trait",
    "traits_conflict",
    "validate_traits",
]
