"""NPC 특성 정의 + 활동 태그 상성 테이블"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List

from src.core.activity.models import ActivityTag


class NPCTrait(str, Enum):
    COFFEE_LOVER = "coffee_lover"
    ATHLETIC = "athletic"
    BOOKWORM = "bookworm"
    FOODIE = "foodie"
    GAMER = "gamer"
    NATURE_LOVER = "nature_lover"
    CREATIVE_SOUL = "creative_soul"
    COMPETITIVE = "competitive"
    ROMANTIC = "romantic"
    INTELLECTUAL = "intellectual"
    ADVENTUROUS = "adventurous"
    INTROVERTED = "introverted"


@dataclass(frozen=True)
class TraitDefinition:
    name: str
    description: str


# 상성 단계
STRONG_LIKE = 15
LIKE = 10
SLIGHT_LIKE = 5
SLIGHT_DISLIKE = -5
DISLIKE = -10

# 합산 점수 상/하한
MAX_TRAIT_SCORE = 20
MIN_TRAIT_SCORE = -20

TRAIT_DEFINITIONS: Dict[NPCTrait, TraitDefinition] = {
    NPCTrait.COFFEE_LOVER: TraitDefinition("Coffee Lover", "Passionate about coffee culture"),
    NPCTrait.ATHLETIC: TraitDefinition("Athletic", "Dedicated to physical fitness and activity"),
    NPCTrait.BOOKWORM: TraitDefinition("Bookworm", "Loves reading and intellectual pursuits"),
    NPCTrait.FOODIE: TraitDefinition("Foodie", "Passionate about food and culinary experiences"),
    NPCTrait.GAMER: TraitDefinition("Gamer", "Enthusiastic about video games and gaming culture"),
    NPCTrait.NATURE_LOVER: TraitDefinition("Nature Lover", "Finds peace and joy in natural settings"),
    NPCTrait.CREATIVE_SOUL: TraitDefinition(
        "Creative Soul", "Drawn to artistic and creative expression"
    ),
    NPCTrait.COMPETITIVE: TraitDefinition("Competitive", "Driven to win and prove themselves"),
    NPCTrait.ROMANTIC: TraitDefinition("Romantic", "Values romance and emotional connection"),
    NPCTrait.INTELLECTUAL: TraitDefinition(
        "Intellectual", "Attracted to mental stimulation and deep conversation"
    ),
    NPCTrait.ADVENTUROUS: TraitDefinition("Adventurous", "Seeks excitement and new experiences"),
    NPCTrait.INTROVERTED: TraitDefinition(
        "Introverted", "Prefers quieter, more intimate interactions"
    ),
}

TRAIT_TAG_AFFINITY: Dict[NPCTrait, Dict[ActivityTag, int]] = {
    NPCTrait.COFFEE_LOVER: {ActivityTag.COFFEE: STRONG_LIKE},
    NPCTrait.ATHLETIC: {ActivityTag.PHYSICAL: STRONG_LIKE},
    NPCTrait.BOOKWORM: {ActivityTag.INTELLECTUAL: STRONG_LIKE, ActivityTag.CALM: LIKE},
    NPCTrait.FOODIE: {ActivityTag.FOOD: STRONG_LIKE, ActivityTag.ROMANTIC: LIKE},
    NPCTrait.GAMER: {ActivityTag.GAMING: STRONG_LIKE, ActivityTag.COMPETITIVE: LIKE},
    NPCTrait.NATURE_LOVER: {ActivityTag.OUTDOOR: STRONG_LIKE},
    NPCTrait.CREATIVE_SOUL: {ActivityTag.CREATIVE: STRONG_LIKE},
    NPCTrait.COMPETITIVE: {ActivityTag.COMPETITIVE: STRONG_LIKE},
    NPCTrait.ROMANTIC: {ActivityTag.ROMANTIC: STRONG_LIKE},
    NPCTrait.INTELLECTUAL: {ActivityTag.INTELLECTUAL: STRONG_LIKE},
    NPCTrait.ADVENTUROUS: {
        ActivityTag.OUTDOOR: LIKE,
        ActivityTag.PHYSICAL: SLIGHT_LIKE,
        ActivityTag.CALM: SLIGHT_DISLIKE,
    },
    NPCTrait.INTROVERTED: {ActivityTag.CALM: LIKE, ActivityTag.COMPETITIVE: SLIGHT_DISLIKE},
}

# 한 NPC가 동시에 가질 수 없는 조합
CONFLICTING_TRAITS: List[FrozenSet[NPCTrait]] = [
    frozenset({NPCTrait.ADVENTUROUS, NPCTrait.INTROVERTED}),
]
