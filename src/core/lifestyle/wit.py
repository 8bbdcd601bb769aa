"""재치(wit) 생활 패턴 평가기

짧은 대화와 긴 대화를 고루 하는지, 여러 사람과 말을 섞는지.
"""

from typing import List, Optional

from src.core.activity.models import ActivityCategory
from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import ActivityRecord, PlayerPatternSnapshot
from src.core.stats.models import StatName

WIT_CATEGORY = "Lifestyle (Wit)"

QUICK_MINUTES = 60  # 미만이면 짧은 대화
MIN_PARTNERS = 3


def is_quick(record: ActivityRecord) -> bool:
    return record.time_cost < QUICK_MINUTES


def _social(records: List[ActivityRecord]) -> List[ActivityRecord]:
    return [r for r in records if r.category == ActivityCategory.SOCIAL]


def _partners(records: List[ActivityRecord]) -> int:
    return len({r.npc_id for r in _social(records) if r.npc_id})


class WitEvaluator(PatternEvaluator):
    stat = StatName.WIT
    category = WIT_CATEGORY


class ConversationalRangeEvaluator(WitEvaluator):
    id = "wit_conversational_range"
    name = "Conversational Range"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.5 if _partners(snapshot.last_3_days.activities) >= MIN_PARTNERS else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Conversational range"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        count = _partners(snapshot.last_3_days.activities)
        return f"Interacted with {count} different people in last 3 days"


class QuickInteractionEvaluator(WitEvaluator):
    id = "wit_quick_interaction"
    name = "Quick Interaction"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.0 if any(is_quick(r) for r in _social(snapshot.today.activities)) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Quick thinking practiced"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Quick interaction today"


class TonalAgilityEvaluator(WitEvaluator):
    id = "wit_tonal_agility"
    name = "Tonal Agility"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        social = _social(snapshot.last_3_days.activities)
        has_quick = any(is_quick(r) for r in social)
        has_long = any(not is_quick(r) for r in social)
        return 1.0 if has_quick and has_long else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Tonal agility"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Mixed interaction types in last 3 days"


class NoPracticeEvaluator(WitEvaluator):
    id = "wit_no_practice"
    name = "No Practice Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 0 if _social(snapshot.today.activities) else -0.5

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Wit needs practice"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "No social interaction today"


class ConversationalRutEvaluator(WitEvaluator):
    id = "wit_conversational_rut"
    name = "Conversational Rut Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        recent = snapshot.last_3_days.activities
        if not _social(recent):
            return 0
        return -1.5 if _partners(recent) == 1 else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Conversational rut"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Only talked to 1 person in last 3 days"


class NoQuickThinkingEvaluator(WitEvaluator):
    id = "wit_no_quick_thinking"
    name = "No Quick Thinking Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        social = _social(snapshot.last_7_days.activities)
        if not social:
            return 0
        return -1.0 if not any(is_quick(r) for r in social) else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Lost quick-thinking edge"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Only deep conversations, no quick interactions in last 7 days"


WIT_EVALUATORS = [
    ConversationalRangeEvaluator(),
    QuickInteractionEvaluator(),
    TonalAgilityEvaluator(),
    NoPracticeEvaluator(),
    ConversationalRutEvaluator(),
    NoQuickThinkingEvaluator(),
]
