"""활력(vitality) 생활 패턴 평가기

에너지 관리 / 수면 습관 / 일-휴식 균형.
"""

from typing import Optional

from src.core.lifestyle.base import PatternEvaluator
from src.core.lifestyle.snapshot import PlayerPatternSnapshot
from src.core.stats.models import StatName

VITALITY_CATEGORY = "Lifestyle (Vitality)"

MIN_ENERGY_THRESHOLD = 30
BALANCE_MIN = 20
BALANCE_MAX = 50
STREAK_PENALTY_BASE = -2.5
STREAK_PENALTY_STEP = 0.2
STREAK_LIMIT = 3
STREAK_LIMIT_PENALTY = -1.5


def _streak_penalty(streak: int) -> float:
    """연속 일수에 비례해 커지는 페널티. 1일째 -2.5, 이후 하루마다 20%씩 가중."""
    return STREAK_PENALTY_BASE * (1 + (streak - 1) * STREAK_PENALTY_STEP)


class VitalityEvaluator(PatternEvaluator):
    stat = StatName.VITALITY
    category = VITALITY_CATEGORY


class MinEnergyEvaluator(VitalityEvaluator):
    id = "vitality_min_energy"
    name = "Minimum Energy Maintained"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 2.5 if snapshot.energy.min_today >= MIN_ENERGY_THRESHOLD else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return f"Maintained energy above {MIN_ENERGY_THRESHOLD}"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Min energy: {snapshot.energy.min_today}"


class SleepScheduleEvaluator(VitalityEvaluator):
    id = "vitality_sleep_schedule"
    name = "Sleep Schedule"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.5 if snapshot.sleep.slept_before_midnight else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Slept before midnight"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Bedtime: {snapshot.bedtime}"


class EnergyBalanceEvaluator(VitalityEvaluator):
    id = "vitality_energy_balance"
    name = "Energy Balance"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 1.5 if BALANCE_MIN <= snapshot.energy.ending_today <= BALANCE_MAX else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Balanced energy usage"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return (
            f"Ending energy: {snapshot.energy.ending_today} "
            f"(optimal: {BALANCE_MIN}-{BALANCE_MAX})"
        )


class NoCatastropheEvaluator(VitalityEvaluator):
    id = "vitality_no_catastrophe"
    name = "No Catastrophic Failures"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return 0 if snapshot.flags.had_catastrophic_failure_today else 1.0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "No catastrophic failures"


class RestRecoveryEvaluator(VitalityEvaluator):
    id = "vitality_rest_recovery"
    name = "Rest Recovery"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        first_rest = snapshot.work.current_rest_streak == 1 and not snapshot.work.worked_today
        return 2.0 if first_rest else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Rest day after work"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return "Good recovery pattern"


class BurnoutEvaluator(VitalityEvaluator):
    id = "vitality_burnout"
    name = "Burnout Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        if not snapshot.energy.hit_zero:
            return 0
        return _streak_penalty(snapshot.sleep.burnout_streak)

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Hit zero energy"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        streak = snapshot.sleep.burnout_streak
        return f"Burnout streak: {streak} days" if streak > 1 else None


class LateNightEvaluator(VitalityEvaluator):
    id = "vitality_late_night"
    name = "Late Night Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        if not snapshot.sleep.slept_after_2am:
            return 0
        return _streak_penalty(snapshot.sleep.late_night_streak)

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Slept after 2 AM"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        streak = snapshot.sleep.late_night_streak
        if streak > 1:
            return f"Late night streak: {streak} days"
        return f"Bedtime: {snapshot.bedtime}"


class WastedEnergyEvaluator(VitalityEvaluator):
    id = "vitality_wasted_energy"
    name = "Wasted Energy"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        return -1.5 if snapshot.energy.ending_today > BALANCE_MAX else 0

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Ended day with excess energy"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Energy: {snapshot.energy.ending_today} (optimal: {BALANCE_MIN}-{BALANCE_MAX})"


class OverworkEvaluator(VitalityEvaluator):
    id = "vitality_overwork"
    name = "Overwork Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        streak = snapshot.work.current_work_streak
        if streak < STREAK_LIMIT:
            return 0
        return STREAK_LIMIT_PENALTY * (streak - 2)

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Too many consecutive work days"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Work streak: {snapshot.work.current_work_streak} days"


class SlackingEvaluator(VitalityEvaluator):
    id = "vitality_slacking"
    name = "Slacking Penalty"

    def evaluate(self, snapshot: PlayerPatternSnapshot) -> float:
        streak = snapshot.work.current_rest_streak
        if streak < STREAK_LIMIT:
            return 0
        return STREAK_LIMIT_PENALTY * (streak - 2)

    def describe(self, snapshot: PlayerPatternSnapshot) -> str:
        return "Too many consecutive rest days"

    def details(self, snapshot: PlayerPatternSnapshot) -> Optional[str]:
        return f"Rest streak: {snapshot.work.current_rest_streak} days"


VITALITY_EVALUATORS = [
    MinEnergyEvaluator(),
    SleepScheduleEvaluator(),
    EnergyBalanceEvaluator(),
    NoCatastropheEvaluator(),
    RestRecoveryEvaluator(),
    BurnoutEvaluator(),
    LateNightEvaluator(),
    WastedEnergyEvaluator(),
    OverworkEvaluator(),
    SlackingEvaluator(),
]
