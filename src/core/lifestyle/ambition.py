"""야망(ambition) 생활 패턴 평가기

일 습관 + 난이도 도전 여부.
"""

from typing import List, Optional

from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import ActivityRecord, PlayerPatternSnapshot
from src.core.stats.calculations import get_current_stat
from src.core.stats.models import StatName

AMBITION_CATEGORY = "Lifestyle (Ambition)"

SHORT_STREAK = 2
SHORT_STREAK_BONUS = 1.5
LONG_STREAK = 5
LONG_STREAK_BONUS = 2.5  # 짧은 연속 보너스에 추가

COMFORT_GAP = 20
HARD_DIFFICULTY = 50
MAX_COUNTED_ACTIVITIES = 3
COASTING_MIN_DIFFICULTY = 20


def highest_relevant_stat(snapshot: PlayerPatternSnapshot) -> Optional[float]:
    """오늘 활동에 쓰인 스탯 중 가장 높은 current. 없으면 None."""
    values = [
        get_current_stat(snapshot.stats, stat)
        for record in snapshot.today.activities
        for stat in record.relevant_stats
    ]
    return max(values) if values else None


def _count_label(count: int) -> str:
    return "activity" if count == 1 else "activities"


class AmbitionEvaluator(PatternEvaluator):
    stat = StatName.AMBITION
    category = AMBITION_CATEGORY


class WorkedTodayEvaluator(AmbitionEvaluator):
    id = "ambition_worked_today"
    name = "Worked Today"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 2.0 if snapshot.work.worked_today else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Completed work activity"


class WorkStreakEvaluator(AmbitionEvaluator):
    id = "ambition_work_streak"
    name = "Work Streak Bonus"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        streak = snapshot.work.current_work_streak
        if streak >= LONG_STREAK:
            return SHORT_STREAK_BONUS + LONG_STREAK_BONUS
        if streak >= SHORT_STREAK:
            return SHORT_STREAK_BONUS
        return 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        if snapshot.work.current_work_streak >= LONG_STREAK:
            return "Long work streak"
        return "Work streak"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"{snapshot.work.current_work_streak} consecutive work days"


class _CountedActivityEvaluator(AmbitionEvaluator):
    """조건을 만족한 활동 수 × 단위 값 (최대 3건)"""

    value_per_activity: float = 0.0
    noun: str = ""

    def matching(self, snapshot: PlayerPatternSnapshot) -> List[ActivityRecord]:
        raise NotImplementedError

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        count = min(len(self.matching(snapshot)), MAX_COUNTED_ACTIVITIES)
        return self.value_per_activity * count

    def _count_text(self, snapshot: PlayerPatternSnapshot) -> str:
        count = len(self.matching(snapshot))
        capped = min(count, MAX_COUNTED_ACTIVITIES)
        text = f"{capped} {self.noun} {_count_label(capped)}"
        if count > MAX_COUNTED_ACTIVITIES:
            text += f" (capped from {count})"
        return text

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return self._count_text(snapshot)


class PushedLimitsEvaluator(_CountedActivityEvaluator):
    id = "ambition_pushed_limits"
    name = "Pushed Limits"
    value_per_activity = 2.0
    noun = "challenging"

    def matching(self, snapshot: PlayerPatternSnapshot) -> List[ActivityRecord]:
        highest = highest_relevant_stat(snapshot)
        if highest is None:
            return []
        return [
            record
            for record in snapshot.today.activities
            if record.difficulty and record.difficulty >= highest + COMFORT_GAP
        ]

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Pushed beyond comfort level"


class HardActivitiesEvaluator(_CountedActivityEvaluator):
    id = "ambition_hard_activities"
    name = "Hard Activities"
    value_per_activity = 1.0
    noun = "hard"

    def matching(self, snapshot: PlayerPatternSnapshot) -> List[ActivityRecord]:
        return [
            record
            for record in snapshot.today.activities
            if record.difficulty and record.difficulty >= HARD_DIFFICULTY
        ]

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Attempted hard activities"


class NoWorkEvaluator(AmbitionEvaluator):
    id = "ambition_no_work"
    name = "No Work Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 0 if snapshot.work.worked_today else -1.0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "No work activity today"


class RestStreakEvaluator(AmbitionEvaluator):
    id = "ambition_rest_streak"
    name = "Rest Streak Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        streak = snapshot.work.current_rest_streak
        if streak < SHORT_STREAK:
            return 0
        return -1.5 * streak

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Extended rest period"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"{snapshot.work.current_rest_streak} consecutive rest days"


class CoastingEvaluator(AmbitionEvaluator):
    id = "ambition_coasting"
    name = "Coasting Penalty"

    @staticmethod
    def easy_threshold(snapshot: PlayerPatternSnapshot) -> Optional[float]:
        highest = highest_relevant_stat(snapshot)
        if highest is None:
            return None
        return max(COASTING_MIN_DIFFICULTY, highest - COMFORT_GAP)

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        if not snapshot.today.activities:
            return 0
        threshold = self.easy_threshold(snapshot)
        if threshold is None:
            return 0
        all_easy = all(
            not record.difficulty or record.difficulty < threshold
            for record in snapshot.today.activities
        )
        return -1.5 if all_easy else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "All activities were too easy"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        threshold = self.easy_threshold(snapshot)
        return f"Threshold: {threshold:g}" if threshold is not None else None


AMBITION_EVALUATORS = [
    WorkedTodayEvaluator(),
    WorkStreakEvaluator(),
    PushedLimitsEvaluator(),
    HardActivitiesEvaluator(),
    NoWorkEvaluator(),
    RestStreakEvaluator(),
    CoastingEvaluator(),
]
