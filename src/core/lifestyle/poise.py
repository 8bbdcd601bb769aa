"""침착함(poise) 생활 패턴 평가기

몸을 다양하게 쓰는지, 결과를 우아하게 내는지.
"""

from typing import List, Optional

from src.core.activity.models import ActivityCategory
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import ActivityRecord, PlayerPatternSnapshot
from src.core.outcome.models import OutcomeTier
from src.core.stats.archetypes import STAT_CATEGORIES
from src.core.stats.models import StatCategory, StatName

POISE_CATEGORY = "Lifestyle (Poise)"

NAP_THRESHOLD = 2

# (고유 신체 활동 수, 보너스) 높은 순
PHYSICAL_VARIETY_TIERS = [(4, 1.5), (3, 1.0), (2, 0.5)]


def is_physical(record: ActivityRecord) -> bool:
    return any(STAT_CATEGORIES[s] == StatCategory.PHYSICAL for s in record.relevant_stats)


def physical_activities(records: List[ActivityRecord]) -> List[ActivityRecord]:
    return [r for r in records if is_physical(r)]


def is_nap(record: ActivityRecord) -> bool:
    return record.category == ActivityCategory.SELF_CARE and "nap" in record.activity_id


class PoiseEvaluator(PatternEvaluator):
    stat = StatName.POISE
    category = POISE_CATEGORY


class PhysicalVarietyEvaluator(PoiseEvaluator):
    id = "poise_physical_variety"
    name = "Physical Variety"

    @staticmethod
    def unique_count(snapshot: PlayerPatternSnapshot) -> int:
        return len({r.activity_id for r in physical_activities(snapshot.last_3_days.activities)})

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        count = self.unique_count(snapshot)
        for threshold, bonus in PHYSICAL_VARIETY_TIERS:
            if count >= threshold:
                return bonus
        return 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Physical activity variety"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"{self.unique_count(snapshot)} different physical activities in last 3 days"


class BestOutcomeEvaluator(PoiseEvaluator):
    id = "poise_best_outcome"
    name = "Best Outcome"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.5 if snapshot.today.best_outcome_count > 0 else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Achieved best outcome"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Graceful execution today"


class SocialGraceEvaluator(PoiseEvaluator):
    id = "poise_social_grace"
    name = "Social Grace"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        social = snapshot.last_7_days.by_category(ActivityCategory.SOCIAL)
        return 0.5 if any(r.tier == OutcomeTier.BEST for r in social) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Social grace demonstrated"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Best outcome in social activity in last 7 days"


class SedentaryEvaluator(PoiseEvaluator):
    id = "poise_sedentary"
    name = "Sedentary Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        recent = snapshot.last_3_days.activities
        if not recent:
            return 0
        return 0 if physical_activities(recent) else -2.0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Body stagnation"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "No physical activities in last 3 days"


class MultipleNapsEvaluator(PoiseEvaluator):
    id = "poise_multiple_naps"
    name = "Multiple Naps Penalty"

    @staticmethod
    def nap_count(snapshot: PlayerPatternSnapshot) -> int:
        return sum(1 for r in snapshot.today.activities if is_nap(r))

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return -1.0 if self.nap_count(snapshot) >= NAP_THRESHOLD else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Excessive napping"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"{self.nap_count(snapshot)} naps today"


POISE_EVALUATORS = [
    PhysicalVarietyEvaluator(),
    BestOutcomeEvaluator(),
    SocialGraceEvaluator(),
    SedentaryEvaluator(),
    MultipleNapsEvaluator(),
]
