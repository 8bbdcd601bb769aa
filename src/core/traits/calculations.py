"""특성-활동 상성 계산

NPC 특성 + 활동 태그 → 난이도 감소 점수.
점수가 양수면 활동이 쉬워진다 (difficulty 조합에서 차감).
"""

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from src.core.activity.models import ActivityTag
from src.core.traits.config import (
    CONFLICTING_TRAITS,
    MAX_TRAIT_SCORE,
    MIN_TRAIT_SCORE,
    TRAIT_DEFINITIONS,
    TRAIT_TAG_AFFINITY,
    NPCTrait,
)


@dataclass(frozen=True)
class TraitContribution:
    trait: NPCTrait
    trait_name: str
    bonus: int


def to_trait(trait) -> NPCTrait:
    """문자열 → NPCTrait. 알 수 없는 특성은 ValueError."""
    if isinstance(trait, NPCTrait):
        return trait
    return NPCTrait(trait)


def get_trait_name(trait) -> str:
    return TRAIT_DEFINITIONS[to_trait(trait)].name


def _trait_tag_score(trait: NPCTrait, tags: Sequence[ActivityTag]) -> int:
    affinity = TRAIT_TAG_AFFINITY.get(trait, {})
    return sum(affinity.get(ActivityTag(tag), 0) for tag in tags)


def get_trait_activity_bonus(traits: Iterable, tags: Sequence[ActivityTag]) -> int:
    """특성별 상성 합산. ±MAX_TRAIT_SCORE로 제한."""
    total = sum(_trait_tag_score(to_trait(t), tags) for t in traits)
    return max(MIN_TRAIT_SCORE, min(MAX_TRAIT_SCORE, total))


def get_trait_activity_breakdown(
    traits: Iterable, tags: Sequence[ActivityTag]
) -> List[TraitContribution]:
    """0이 아닌 특성별 기여 (제한 전 값)."""
    contributions = []
    for raw in traits:
        trait = to_trait(raw)
        bonus = _trait_tag_score(trait, tags)
        if bonus != 0:
            contributions.append(
                TraitContribution(trait=trait, trait_name=get_trait_name(trait), bonus=bonus)
            )
    return contributions


def get_contributing_trait(
    traits: Iterable, revealed: Iterable, tags: Sequence[ActivityTag]
) -> Optional[NPCTrait]:
    """활동 태그와 상성이 있는 첫 번째 미공개 특성. 없으면 None."""
    revealed_set = {to_trait(t) for t in revealed}
    tag_set = {ActivityTag(t) for t in tags}
    for raw in traits:
        trait = to_trait(raw)
        if trait in revealed_set:
            continue
        if tag_set & set(TRAIT_TAG_AFFINITY.get(trait, {})):
            return trait
    return None


def traits_conflict(a, b) -> bool:
    return frozenset({to_trait(a), to_trait(b)}) in CONFLICTING_TRAITS


def validate_traits(traits: Iterable) -> List[NPCTrait]:
    """특성 목록 검증. 알 수 없는 특성 / 중복 / 충돌 조합은 ValueError."""
    result: List[NPCTrait] = []
    for raw in traits:
        trait = to_trait(raw)
        if trait in result:
            raise ValueError(f"Duplicate trait: {trait.value}")
        for existing in result:
            if traits_conflict(existing, trait):
                raise ValueError(f"Conflicting traits: {existing.value}, {trait.value}")
        result.append(trait)
    return result


def remove_conflicting_traits(traits: Iterable) -> List[NPCTrait]:
    """충돌/중복 시 먼저 나온 특성을 남긴다."""
    result: List[NPCTrait] = []
    for raw in traits:
        trait = to_trait(raw)
        if trait in result or any(traits_conflict(t, trait) for t in result):
            continue
        result.append(trait)
    return result


def select_random_traits(count: int, rng: Optional[random.Random] = None) -> List[NPCTrait]:
    """충돌 없는 특성 count개 무작위 선택."""
    rng = rng or random.Random()
    pool = list(NPCTrait)
    rng.shuffle(pool)
    return remove_conflicting_traits(pool)[:count]
