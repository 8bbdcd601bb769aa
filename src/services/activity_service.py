"""Activity Service — 활동 수행 유스케이스

검증 → 난이도 → 판정 → 효과 → 관계 → 자원 → 추적 → 기록 → 이벤트.
서비스는 flush만 한다. commit은 호출자(요청 단위) 책임.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from src.config import settings
from src.core.activity.availability import can_perform_activity
from src.core.activity.catalog import (
    ActivityCatalog,
    can_meet_npcs_at,
    is_social_activity,
    is_work_activity,
)
from src.core.activity.models import Activity
from src.core.difficulty import (
    DifficultyBreakdown,
    calculate_dynamic_difficulty,
    calculate_solo_difficulty,
)
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.npc.models import NPC
from src.core.outcome.effects import generate_outcome
from src.core.outcome.models import GeneratedOutcome, OutcomeTier, RollResult
from src.core.outcome.resolver import (
    get_default_outcome_description,
    meets_stat_requirements,
    roll_outcome,
)
from src.core.player.models import PlayerCharacter
from src.core.relationship.models import EmotionalState, RelationshipChange
from src.core.relationship.states import (
    get_contextual_emotional_state,
    get_relationship_difficulty_modifier,
)
from src.core.stats.calculations import apply_stat_effects
from src.core.stats.models import StatName
from src.core.time import add_minutes, check_activity_end_time
from src.core.traits.calculations import (
    get_contributing_trait,
    get_trait_activity_bonus,
    get_trait_activity_breakdown,
)
from src.core.traits.config import NPCTrait
from src.db.models import PlayerActivityModel
from src.services.npc_service import NPCService
from src.services.player_service import PlayerService
from src.services.relationship_service import RelationshipService

logger = get_logger(__name__)


class ActivityValidationError(ValueError):
    """활동 규칙 위반. status_code는 API 응답 코드로 그대로 쓴다."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class ActivityResult:
    player_id: str
    activity_id: str
    activity_name: str
    npc_id: Optional[str] = None

    # 판정
    tier: Optional[OutcomeTier] = None
    description: str = ""
    roll: Optional[RollResult] = None
    difficulty: Optional[DifficultyBreakdown] = None

    # 스탯
    stat_changes: Dict[StatName, float] = field(default_factory=dict)
    stats_trained: List[StatName] = field(default_factory=list)

    # 자원
    energy_delta: int = 0
    money_delta: int = 0
    time_spent: int = 0
    new_energy: int = 0
    new_money: int = 0
    new_time: str = ""
    ends_after_midnight: bool = False

    # 사회 활동
    relationship_change: Optional[RelationshipChange] = None
    emotional_state: Optional[EmotionalState] = None
    discovered_trait: Optional[NPCTrait] = None


class ActivityService:
    """활동 실행"""

    def __init__(
        self,
        db_session: Session,
        event_bus: EventBus,
        catalog: ActivityCatalog,
        player_service: PlayerService,
        npc_service: NPCService,
        relationship_service: RelationshipService,
        rng: Optional[random.Random] = None,
        home_location: Optional[str] = None,
    ) -> None:
        self._db = db_session
        self._bus = event_bus
        self._catalog = catalog
        self._players = player_service
        self._npcs = npc_service
        self._relationships = relationship_service
        self._rng = rng or random.Random()
        self._home = home_location or settings.HOME_LOCATION

    # ── 조회 ─────────────────────────────────────────────────

    def get_activity(self, activity_id: str) -> Activity:
        activity = self._catalog.get(activity_id)
        if activity is None:
            raise ActivityValidationError(f"Activity not found: {activity_id}", 404)
        return activity

    def preview_difficulty(
        self, player_id: str, activity_id: str, npc_id: Optional[str] = None
    ) -> DifficultyBreakdown:
        """판정 없이 최종 DC만 계산 (DB 변경 없음)."""
        activity = self.get_activity(activity_id)
        if npc_id is None or not is_social_activity(activity):
            return calculate_solo_difficulty(activity.difficulty or 0)

        npc = self._require_npc(npc_id)
        return calculate_dynamic_difficulty(
            activity.difficulty or 0,
            self._relationships.get_difficulty_modifier(player_id, npc_id),
            get_trait_activity_bonus(npc.traits, activity.tags),
            get_trait_activity_breakdown(npc.traits, activity.tags),
        )

    # ── 실행 ─────────────────────────────────────────────────

    def perform_activity(
        self,
        player_id: str,
        activity_id: str,
        npc_id: Optional[str] = None,
        roll: Optional[int] = None,
    ) -> ActivityResult:
        """활동 수행.

        Args:
            roll: 고정 주사위 값 (테스트/디버그용)
        """
        activity = self.get_activity(activity_id)
        social = is_social_activity(activity)
        if social and not npc_id:
            raise ActivityValidationError(
                "Social activities require an NPC. Provide npc_id in the request."
            )

        player = self._players.get_or_create_player(player_id)
        npc = self._require_npc(npc_id) if social else None

        self._validate(activity, player, npc)

        result = ActivityResult(
            player_id=player_id,
            activity_id=activity.id,
            activity_name=activity.name,
            npc_id=npc.npc_id if npc else None,
        )

        relationship = (
            self._relationships.get_or_create_relationship(player, npc) if npc else None
        )

        # 판정: 난이도가 없는 활동은 굴리지 않고 okay로 처리
        if activity.has_difficulty:
            if npc is not None:
                breakdown = calculate_dynamic_difficulty(
                    activity.difficulty,
                    get_relationship_difficulty_modifier(relationship.axes),
                    get_trait_activity_bonus(npc.traits, activity.tags),
                    get_trait_activity_breakdown(npc.traits, activity.tags),
                )
            else:
                breakdown = calculate_solo_difficulty(activity.difficulty)
            result.difficulty = breakdown
            result.roll = roll_outcome(
                player.stats,
                activity.relevant_stats,
                breakdown.difficulty,
                roll=roll,
                rng=self._rng,
            )
            tier = result.roll.tier
        else:
            tier = OutcomeTier.OKAY
        result.tier = tier
        result.description = get_default_outcome_description(activity.name, tier)

        # 스탯 효과
        generated = GeneratedOutcome()
        if activity.outcome_profile is not None:
            generated = generate_outcome(tier, activity.outcome_profile, self._rng)
            player.stats, result.stat_changes = apply_stat_effects(
                player.stats, generated.stat_effects
            )
            result.stats_trained = [s for s, v in generated.stat_effects.items() if v > 0]

        # 관계 효과
        if relationship is not None and activity.relationship_effects:
            change = self._relationships.apply_activity_outcome(
                relationship, activity.relationship_effects, tier
            )
            result.relationship_change = change
            result.emotional_state = get_contextual_emotional_state(
                change.deltas, change.new_state
            )

        if npc is not None:
            trait = get_contributing_trait(npc.traits, npc.revealed_traits, activity.tags)
            if trait is not None and self._npcs.reveal_trait(npc.npc_id, trait):
                result.discovered_trait = trait

        # 자원
        new_energy = max(
            0,
            min(
                player.max_energy,
                player.current_energy + activity.energy_cost + generated.additional_energy_cost,
            ),
        )
        new_money = (
            player.money
            + activity.money_cost
            + generated.money_gain
            + generated.additional_money_cost
        )
        time_spent = activity.time_cost + generated.additional_time_cost
        _, result.ends_after_midnight = check_activity_end_time(player.current_time, time_spent)

        result.energy_delta = new_energy - player.current_energy
        result.money_delta = new_money - player.money
        result.time_spent = time_spent

        self._record(player, activity, npc, result)

        # 추적 카운터
        tracking = player.tracking
        tracking.min_energy_today = min(tracking.min_energy_today, new_energy)
        tracking.ending_energy_today = new_energy
        tracking.worked_today = tracking.worked_today or is_work_activity(activity)
        tracking.had_catastrophic_failure_today = (
            tracking.had_catastrophic_failure_today or tier == OutcomeTier.CATASTROPHIC
        )
        for stat in result.stats_trained:
            if stat not in tracking.stats_trained_today:
                tracking.stats_trained_today.append(stat)

        player.current_energy = new_energy
        player.money = new_money
        player.current_time = add_minutes(player.current_time, time_spent)
        self._players.save_player(player)

        result.new_energy = player.current_energy
        result.new_money = player.money
        result.new_time = player.current_time

        logger.info(
            f"Activity performed: {player_id} {activity.id} tier={tier.value}"
            + (f" with {npc.npc_id}" if npc else "")
            + (
                f" [state {result.relationship_change.previous_state.value}"
                f"→{result.relationship_change.new_state.value}]"
                if result.relationship_change and result.relationship_change.state_changed
                else ""
            )
            + (f" [discovered {result.discovered_trait.value}]" if result.discovered_trait else "")
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ACTIVITY_RESOLVED,
                data={
                    "player_id": player_id,
                    "activity_id": activity.id,
                    "npc_id": result.npc_id,
                    "tier": tier.value,
                },
                source="activity_service",
            )
        )
        self._bus.reset_chain()
        return result

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _require_npc(self, npc_id: str) -> NPC:
        npc = self._npcs.get_npc(npc_id)
        if npc is None:
            raise ActivityValidationError(f"NPC not found: {npc_id}", 404)
        return npc

    def _validate(
        self, activity: Activity, player: PlayerCharacter, npc: Optional[NPC]
    ) -> None:
        requirements = meets_stat_requirements(player.stats, activity.stat_requirements)
        if not requirements.meets:
            unmet = ", ".join(
                f"{u.stat.value} {u.actual:g}/{u.required:g}" for u in requirements.unmet
            )
            raise ActivityValidationError(f"Stat requirements not met: {unmet}")

        availability = can_perform_activity(activity, player)
        if not availability.available:
            raise ActivityValidationError(availability.reason or "Activity cannot be performed")

        if npc is not None:
            if not can_meet_npcs_at(player.current_location, self._home):
                raise ActivityValidationError("You can't meet NPCs at home")
            if npc.current_location != player.current_location:
                raise ActivityValidationError(f"{npc.name} is not here")

    def _record(
        self,
        player: PlayerCharacter,
        activity: Activity,
        npc: Optional[NPC],
        result: ActivityResult,
    ) -> None:
        """활동 기록 1건 (수행 시작 시각 기준)."""
        roll = result.roll
        self._db.add(
            PlayerActivityModel(
                player_id=player.player_id,
                activity_id=activity.id,
                category=activity.category.value,
                npc_id=npc.npc_id if npc else None,
                day_number=player.current_day,
                time_of_day=player.current_time,
                time_cost=activity.time_cost,
                difficulty=activity.difficulty,
                relevant_stats=[s.value for s in activity.relevant_stats],
                outcome_tier=result.tier.value if roll else None,
                roll=roll.roll if roll else None,
                stat_bonus=roll.stat_bonus if roll else None,
                dc=roll.dc if roll else None,
                stat_effects={s.value: v for s, v in result.stat_changes.items()},
                relationship_effects=(
                    dict(result.relationship_change.deltas) if result.relationship_change else {}
                ),
                energy_delta=result.energy_delta,
                money_delta=result.money_delta,
            )
        )
        self._db.flush()
