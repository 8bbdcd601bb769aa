"""Sleep Service — 수면 / 하루 넘기기

순서가 중요하다:
1. 플레이어 로드 (없으면 생성)
2. 집이 아니면 귀가 (이동 시간만큼 취침 지연)
3. 취침 시각 → 기상 시각 / 수면 시간 / 에너지 회복
4. 생활 패턴 평가 (최근 7일 활동 + 관계 요약) → current 보정
5. surplus 전환 (보정된 스탯 기준)
6. 추적 카운터 초기화
7. 스탯별 변동 내역 (생활 패턴 → surplus 순)
8. 저장 + day_advanced 이벤트

서비스는 flush만 한다. 같은 플레이어의 수면 직렬화와 commit은 호출자 책임.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from src.config import settings
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.lifestyle.engine import LifestyleEvaluationResult, evaluate_all_patterns
from src.core.lifestyle.snapshot import (
    PlayerPatternSnapshot,
    build_pattern_snapshot,
    build_relationship_summaries,
)
from src.core.locations import calculate_travel_time
from src.core.logging import get_logger
from src.core.stats.archetypes import DEFENSIVE_STATS, MIXED_STATS
from src.core.stats.calculations import (
    get_current_stat,
    process_daily_stat_changes,
    set_current_stat,
)
from src.core.stats.models import (
    ALL_STATS,
    StatChange,
    StatChangeBreakdown,
    StatChangeComponent,
    StatName,
    StatTracking,
    StatVector,
)
from src.core.time import add_minutes, calculate_sleep_results
from src.services.player_service import PlayerService
from src.services.relationship_service import RelationshipService

logger = get_logger(__name__)

TravelTimeFn = Callable[[str, str], int]
LifestyleEvaluatorFn = Callable[[PlayerPatternSnapshot], LifestyleEvaluationResult]


@dataclass(frozen=True)
class SleepOutcome:
    player_id: str
    wake_time: str
    hours_slept: float
    energy_restored: int
    new_day: int
    new_energy: int
    bedtime: str
    traveled_home: bool = False
    travel_time: int = 0
    stat_changes: List[StatChange] = field(default_factory=list)
    breakdowns: Dict[StatName, StatChangeBreakdown] = field(default_factory=dict)
    defensive_changes: Dict[StatName, float] = field(default_factory=dict)
    mixed_changes: Dict[StatName, float] = field(default_factory=dict)


class SleepService:
    """하루 넘기기 오케스트레이터"""

    def __init__(
        self,
        db_session: Session,
        event_bus: EventBus,
        player_service: PlayerService,
        travel_time_fn: TravelTimeFn = calculate_travel_time,
        lifestyle_evaluator: LifestyleEvaluatorFn = evaluate_all_patterns,
        home_location: Optional[str] = None,
        relationship_service: Optional[RelationshipService] = None,
    ) -> None:
        self._db = db_session
        self._bus = event_bus
        self._players = player_service
        self._travel_time = travel_time_fn
        self._evaluate_lifestyle = lifestyle_evaluator
        self._home = home_location or settings.HOME_LOCATION
        self._relationships = relationship_service or RelationshipService(db_session, event_bus)

    def process_sleep(self, player_id: str) -> SleepOutcome:
        """수면 처리. 협력자 예외는 그대로 전파."""
        player = self._players.get_or_create_player(player_id)

        # 귀가
        travel_time = 0
        traveled_home = player.current_location != self._home
        if traveled_home:
            travel_time = self._travel_time(player.current_location, self._home)
        bedtime = add_minutes(player.current_time, travel_time)

        # 수면 / 에너지
        sleep = calculate_sleep_results(bedtime)
        new_energy = min(player.max_energy, player.current_energy + sleep.energy_restored)

        # 생활 패턴
        activities = self._players.get_recent_activity_records(player_id, player.current_day)
        states = {
            r.npc_id: r.current_state
            for r in self._relationships.get_relationships_for(player_id)
        }
        relationships = build_relationship_summaries(
            states,
            self._players.get_last_contact_days(player_id),
            player.current_day,
        )
        snapshot = build_pattern_snapshot(
            player.current_day,
            bedtime,
            player.stats,
            player.tracking,
            activities,
            relationships,
        )
        lifestyle = self._evaluate_lifestyle(snapshot)
        adjusted = _apply_lifestyle_changes(player.stats, lifestyle.changes)

        # surplus 전환
        daily = process_daily_stat_changes(adjusted)

        breakdowns = _build_breakdowns(
            player.stats, daily.new_stats, lifestyle.components, daily.components
        )
        stat_changes = _diff_stats(player.stats, daily.new_stats)

        previous_day = player.current_day
        player.stats = daily.new_stats
        player.tracking = StatTracking(
            min_energy_today=new_energy,
            ending_energy_today=new_energy,
            work_streak=snapshot.work.current_work_streak,
            rest_streak=snapshot.work.current_rest_streak,
            burnout_streak=snapshot.sleep.burnout_streak,
            late_night_streak=snapshot.sleep.late_night_streak,
        )
        player.current_day = previous_day + 1
        player.current_time = sleep.wake_time
        player.last_slept_at = bedtime
        player.current_location = self._home
        player.current_energy = new_energy
        self._players.save_player(player)

        logger.info(
            f"Player slept: {player_id} day {previous_day}→{player.current_day} "
            f"bed={bedtime} wake={sleep.wake_time} hours={sleep.hours_slept:g} "
            f"energy +{sleep.energy_restored} → {new_energy}"
            + (f" (traveled home {travel_time}min)" if traveled_home else "")
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.DAY_ADVANCED,
                data={
                    "player_id": player_id,
                    "previous_day": previous_day,
                    "new_day": player.current_day,
                    "wake_time": sleep.wake_time,
                },
                source="sleep_service",
            )
        )
        self._bus.reset_chain()

        return SleepOutcome(
            player_id=player_id,
            wake_time=sleep.wake_time,
            hours_slept=sleep.hours_slept,
            energy_restored=sleep.energy_restored,
            new_day=player.current_day,
            new_energy=new_energy,
            bedtime=bedtime,
            traveled_home=traveled_home,
            travel_time=travel_time,
            stat_changes=stat_changes,
            breakdowns=breakdowns,
            defensive_changes={
                s: v for s, v in lifestyle.changes.items() if s in DEFENSIVE_STATS
            },
            mixed_changes={s: v for s, v in lifestyle.changes.items() if s in MIXED_STATS},
        )


def _apply_lifestyle_changes(stats: StatVector, changes: Dict[StatName, float]) -> StatVector:
    for stat, delta in changes.items():
        if delta:
            stats = set_current_stat(stats, stat, get_current_stat(stats, stat) + delta)
    return stats


def _diff_stats(before: StatVector, after: StatVector) -> List[StatChange]:
    """수면 전후로 달라진 스탯만."""
    changes: List[StatChange] = []
    for stat in ALL_STATS:
        base_delta = after.base[stat] - before.base[stat]
        current_delta = after.current[stat] - before.current[stat]
        if base_delta or current_delta:
            changes.append(
                StatChange(
                    stat=stat,
                    previous_base=before.base[stat],
                    new_base=after.base[stat],
                    previous_current=before.current[stat],
                    new_current=after.current[stat],
                    base_delta=base_delta,
                    current_delta=current_delta,
                )
            )
    return changes


def _build_breakdowns(
    before: StatVector,
    after: StatVector,
    lifestyle_components: Dict[StatName, List[StatChangeComponent]],
    surplus_components: Dict[StatName, List[StatChangeComponent]],
) -> Dict[StatName, StatChangeBreakdown]:
    """생활 패턴 또는 surplus 내역이 하나라도 있는 스탯만."""
    breakdowns: Dict[StatName, StatChangeBreakdown] = {}
    for stat in ALL_STATS:
        components = [
            *lifestyle_components.get(stat, []),
            *surplus_components.get(stat, []),
        ]
        if not components:
            continue
        breakdowns[stat] = StatChangeBreakdown(
            stat=stat,
            previous_base=before.base[stat],
            new_base=after.base[stat],
            previous_current=before.current[stat],
            new_current=after.current[stat],
            base_change=after.base[stat] - before.base[stat],
            current_change=after.current[stat] - before.current[stat],
            components=components,
        )
    return breakdowns
