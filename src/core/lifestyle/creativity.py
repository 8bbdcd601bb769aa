"""창의성(creativity) 생활 패턴 평가기

여가를 즐기는지, 매번 같은 일만 반복하지 않는지.
"""

from typing import FrozenSet, Optional, Set

from src.core.activity.models import ActivityCategory
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import PlayerPatternSnapshot
from src.core.stats.archetypes import STAT_CATEGORIES
from src.core.stats.models import StatCategory, StatName

CREATIVITY_CATEGORY = "Lifestyle (Creativity)"

LEISURE = ActivityCategory.LEISURE


def _leisure_ids_on(snapshot: PlayerPatternSnapshot, days_ago: int) -> Set[str]:
    day = snapshot.current_day - days_ago
    return {r.activity_id for r in snapshot.last_3_days.on_day(day, LEISURE)}


def _npcs_on(snapshot: PlayerPatternSnapshot, days_ago: int) -> FrozenSet[str]:
    day = snapshot.current_day - days_ago
    return frozenset(r.npc_id for r in snapshot.last_3_days.on_day(day) if r.npc_id)


class CreativityEvaluator(PatternEvaluator):
    stat = StatName.CREATIVITY
    category = CREATIVITY_CATEGORY


class ActivityVarietyEvaluator(CreativityEvaluator):
    id = "creativity_activity_variety"
    name = "Activity Variety"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        today = _leisure_ids_on(snapshot, 0)
        if not today:
            return 0
        return 1.5 if today - _leisure_ids_on(snapshot, 1) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Daily spontaneity"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Different activities from yesterday"


class NoveltyEvaluator(CreativityEvaluator):
    id = "creativity_novelty"
    name = "Novelty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        today = snapshot.today.by_category(LEISURE)
        if not today:
            return 0
        past = {
            r.activity_id
            for r in snapshot.last_7_days.by_category(LEISURE)
            if r.day_number < snapshot.current_day
        }
        return 1.5 if any(r.activity_id not in past for r in today) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Seeking novelty"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Tried activity not done recently"


class CrossDomainEvaluator(CreativityEvaluator):
    id = "creativity_cross_domain"
    name = "Cross Domain"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        domains = {
            STAT_CATEGORIES[stat]
            for record in snapshot.last_7_days.by_category(LEISURE)
            for stat in record.relevant_stats
        }
        return 1.0 if len(domains) == len(StatCategory) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Holistic exploration"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Activities span physical, mental, and social domains"


class StuckInRutEvaluator(CreativityEvaluator):
    id = "creativity_stuck_in_rut"
    name = "Stuck in Rut Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        repeated = (
            _leisure_ids_on(snapshot, 0)
            & _leisure_ids_on(snapshot, 1)
            & _leisure_ids_on(snapshot, 2)
        )
        return -2.0 if repeated else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Stuck in rut"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Same activity 3 days in a row"


class NoLeisureEvaluator(CreativityEvaluator):
    id = "creativity_no_leisure"
    name = "No Leisure Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 0 if snapshot.today.by_category(LEISURE) else -1.5

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "No leisure"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "No leisure activities today"


class RepeatedNpcsEvaluator(CreativityEvaluator):
    id = "creativity_repeated_npcs"
    name = "Repeated NPCs Penalty"

    @staticmethod
    def repeated(snapshot: PlayerPatternSnapshot) -> FrozenSet[str]:
        """사흘 내내 만난 NPC"""
        return _npcs_on(snapshot, 0) & _npcs_on(snapshot, 1) & _npcs_on(snapshot, 2)

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        count = len(self.repeated(snapshot))
        return -1.0 * count if count else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Social routine"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        count = len(self.repeated(snapshot))
        return f"Talked to same {count} {'person' if count == 1 else 'people'} all 3 days"


CREATIVITY_EVALUATORS = [
    ActivityVarietyEvaluator(),
    NoveltyEvaluator(),
    CrossDomainEvaluator(),
    StuckInRutEvaluator(),
    NoLeisureEvaluator(),
    RepeatedNpcsEvaluator(),
]
