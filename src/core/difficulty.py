"""사회 활동 난이도 조합

final_dc = 100 + 활동 난이도 + 관계 보정 - 특성 점수 (하한/상한 없음).
contributors에는 0이 아닌 항목만 남긴다. 합계에는 항상 전부 포함.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from src.core.outcome.resolver import BASE_DC
from src.core.traits.calculations import TraitContribution


@dataclass(frozen=True)
class DifficultyContributor:
    source: str
    label: str
    value: int


@dataclass(frozen=True)
class DifficultyBreakdown:
    final_dc: int
    base_dc: int
    activity_difficulty: int
    relationship_modifier: int = 0
    trait_score: int = 0
    contributors: List[DifficultyContributor] = field(default_factory=list)

    @property
    def difficulty(self) -> int:
        """roll_outcome에 넘기는 값 (DC - 100)."""
        return self.final_dc - self.base_dc


def calculate_dynamic_difficulty(
    activity_difficulty: int,
    relationship_modifier: int,
    trait_score: int,
    individual_traits: Optional[Sequence[TraitContribution]] = None,
) -> DifficultyBreakdown:
    """관계 + 특성을 반영한 최종 DC.

    individual_traits가 주어지면 특성별 항목(부호 반전)으로 표시하고,
    없으면 trait_score 한 줄로 표시한다.
    """
    final_dc = BASE_DC + activity_difficulty + relationship_modifier - trait_score

    contributors = [DifficultyContributor("base", "Base DC", BASE_DC)]
    if activity_difficulty:
        contributors.append(
            DifficultyContributor("activity", "Activity difficulty", activity_difficulty)
        )
    if relationship_modifier:
        contributors.append(
            DifficultyContributor("relationship", "Relationship", relationship_modifier)
        )
    if individual_traits:
        for contribution in individual_traits:
            if contribution.bonus:
                contributors.append(
                    DifficultyContributor(
                        f"trait:{contribution.trait.value}",
                        contribution.trait_name,
                        -contribution.bonus,
                    )
                )
    elif trait_score:
        contributors.append(DifficultyContributor("traits", "Trait compatibility", -trait_score))

    return DifficultyBreakdown(
        final_dc=final_dc,
        base_dc=BASE_DC,
        activity_difficulty=activity_difficulty,
        relationship_modifier=relationship_modifier,
        trait_score=trait_score,
        contributors=contributors,
    )


def calculate_solo_difficulty(activity_difficulty: int) -> DifficultyBreakdown:
    """관계/특성 없는 단독 활동."""
    return calculate_dynamic_difficulty(activity_difficulty, 0, 0)
