"""플레이어 생활 패턴 스냅샷

수면 시점의 추적 카운터 + 최근 7일 활동 기록 + 관계 요약을 한 번에 묶는다.
연속 기록(streak)은 오늘을 포함해 갱신된 값.

활동 창(window)은 오늘 / 최근 3일 / 최근 7일 (모두 오늘 포함).
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Optional

from src.core.activity.models import ActivityCategory
from src.core.outcome.models import OutcomeTier
from src.core.relationship.models import RelationshipState
from src.core.stats.models import StatName, StatTracking, StatVector
from src.core.time import parse_time

SHORT_WINDOW_DAYS = 3
LONG_WINDOW_DAYS = 7
NEGLECT_DAYS = 7

FRIEND_STATES = frozenset(
    {RelationshipState.FRIEND, RelationshipState.CLOSE_FRIEND, RelationshipState.PARTNER}
)
ROMANTIC_ONLY_STATES = frozenset({RelationshipState.CRUSH, RelationshipState.LOVER})


@dataclass(frozen=True)
class ActivityRecord:
    """수행한 활동 1건 (패턴 평가용).

    day_number가 None이면 스냅샷의 오늘로 본다.
    """

    activity_id: str
    category: ActivityCategory
    difficulty: Optional[int] = None
    relevant_stats: List[StatName] = field(default_factory=list)
    tier: Optional[OutcomeTier] = None
    npc_id: Optional[str] = None
    day_number: Optional[int] = None
    time_cost: int = 0
    stat_effects: Dict[StatName, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ActivityWindow:
    """기간 내 활동 묶음"""

    activities: List[ActivityRecord] = field(default_factory=list)

    @property
    def unique_activity_ids(self) -> FrozenSet[str]:
        return frozenset(a.activity_id for a in self.activities)

    @property
    def unique_npc_ids(self) -> FrozenSet[str]:
        return frozenset(a.npc_id for a in self.activities if a.npc_id)

    @property
    def best_outcome_count(self) -> int:
        return sum(1 for a in self.activities if a.tier == OutcomeTier.BEST)

    @property
    def catastrophic_count(self) -> int:
        return sum(1 for a in self.activities if a.tier == OutcomeTier.CATASTROPHIC)

    def by_category(self, category: ActivityCategory) -> List[ActivityRecord]:
        return [a for a in self.activities if a.category == category]

    def on_day(self, day: int, category: Optional[ActivityCategory] = None) -> List[ActivityRecord]:
        return [
            a
            for a in self.activities
            if a.day_number == day and (category is None or a.category == category)
        ]


@dataclass(frozen=True)
class RelationshipSummary:
    npc_id: str
    state: RelationshipState
    days_since_contact: Optional[int] = None  # None = 만난 적 없음


@dataclass(frozen=True)
class SocialPattern:
    relationships: List[RelationshipSummary] = field(default_factory=list)
    npcs_contacted_today: FrozenSet[str] = frozenset()
    unique_npcs_last_7_days: int = 0

    @property
    def friends(self) -> List[RelationshipSummary]:
        """friend / close_friend / partner"""
        return [r for r in self.relationships if r.state in FRIEND_STATES]

    @property
    def romantic_only(self) -> List[RelationshipSummary]:
        """crush / lover"""
        return [r for r in self.relationships if r.state in ROMANTIC_ONLY_STATES]

    @property
    def neglected_friends(self) -> List[RelationshipSummary]:
        """7일 이상 (또는 한 번도) 연락하지 않은 친구"""
        return [
            r
            for r in self.friends
            if r.days_since_contact is None or r.days_since_contact >= NEGLECT_DAYS
        ]


@dataclass(frozen=True)
class EnergyPattern:
    min_today: float
    ending_today: float
    hit_zero: bool


@dataclass(frozen=True)
class WorkPattern:
    worked_today: bool
    current_work_streak: int
    current_rest_streak: int


@dataclass(frozen=True)
class SleepPattern:
    slept_before_midnight: bool
    slept_after_2am: bool
    late_night_streak: int
    burnout_streak: int


@dataclass(frozen=True)
class PatternFlags:
    had_catastrophic_failure_today: bool = False
    stats_trained_today: FrozenSet[StatName] = frozenset()


@dataclass(frozen=True)
class PlayerPatternSnapshot:
    current_day: int
    bedtime: str
    stats: StatVector
    energy: EnergyPattern
    work: WorkPattern
    sleep: SleepPattern
    today: ActivityWindow = field(default_factory=ActivityWindow)
    last_3_days: ActivityWindow = field(default_factory=ActivityWindow)
    last_7_days: ActivityWindow = field(default_factory=ActivityWindow)
    social: SocialPattern = field(default_factory=SocialPattern)
    flags: PatternFlags = field(default_factory=PatternFlags)


def is_before_midnight(bedtime: str) -> bool:
    """20:00 ~ 23:59 취침"""
    hour, _ = parse_time(bedtime)
    return 20 <= hour <= 23


def is_after_2am(bedtime: str) -> bool:
    """02:00 ~ 05:59 취침"""
    hour, _ = parse_time(bedtime)
    return 2 <= hour <= 5


def build_relationship_summaries(
    states: Dict[str, RelationshipState],
    last_contact_days: Dict[str, int],
    current_day: int,
) -> List[RelationshipSummary]:
    """NPC별 관계 상태 + 마지막 접촉 일자 → 요약 목록."""
    summaries = []
    for npc_id, state in states.items():
        last_day = last_contact_days.get(npc_id)
        summaries.append(
            RelationshipSummary(
                npc_id=npc_id,
                state=RelationshipState(state),
                days_since_contact=None if last_day is None else current_day - last_day,
            )
        )
    return summaries


def build_pattern_snapshot(
    current_day: int,
    bedtime: str,
    stats: StatVector,
    tracking: StatTracking,
    activities: Iterable[ActivityRecord] = (),
    relationships: Iterable[RelationshipSummary] = (),
) -> PlayerPatternSnapshot:
    """추적 카운터 + 최근 활동 + 관계 요약 → 스냅샷.

    activities는 최근 7일치를 넘겨도 되고 오늘치만 넘겨도 된다.
    창 밖의 기록은 버린다.
    """
    worked = tracking.worked_today
    hit_zero = tracking.min_energy_today <= 0
    slept_late = is_after_2am(bedtime)

    records = [
        record if record.day_number is not None else replace(record, day_number=current_day)
        for record in activities
    ]
    last_7 = [r for r in records if current_day - LONG_WINDOW_DAYS < r.day_number <= current_day]
    last_3 = [r for r in last_7 if r.day_number > current_day - SHORT_WINDOW_DAYS]
    today = [r for r in last_3 if r.day_number == current_day]

    today_window = ActivityWindow(today)
    last_7_window = ActivityWindow(last_7)

    return PlayerPatternSnapshot(
        current_day=current_day,
        bedtime=bedtime,
        stats=stats,
        energy=EnergyPattern(
            min_today=tracking.min_energy_today,
            ending_today=tracking.ending_energy_today,
            hit_zero=hit_zero,
        ),
        work=WorkPattern(
            worked_today=worked,
            current_work_streak=tracking.work_streak + 1 if worked else 0,
            current_rest_streak=0 if worked else tracking.rest_streak + 1,
        ),
        sleep=SleepPattern(
            slept_before_midnight=is_before_midnight(bedtime),
            slept_after_2am=slept_late,
            late_night_streak=tracking.late_night_streak + 1 if slept_late else 0,
            burnout_streak=tracking.burnout_streak + 1 if hit_zero else 0,
        ),
        today=today_window,
        last_3_days=ActivityWindow(last_3),
        last_7_days=last_7_window,
        social=SocialPattern(
            relationships=list(relationships),
            npcs_contacted_today=today_window.unique_npc_ids,
            unique_npcs_last_7_days=len(last_7_window.unique_npc_ids),
        ),
        flags=PatternFlags(
            had_catastrophic_failure_today=tracking.had_catastrophic_failure_today,
            stats_trained_today=frozenset(tracking.stats_trained_today),
        ),
    )
