"""Player Service — 캐릭터 생성/초기화/조회/이동 + 활동 기록 조회

Core(player, stats, locations)와 DB를 연결한다.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from src.config import settings
from src.core.activity.models import ActivityCategory
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.lifestyle.snapshot import LONG_WINDOW_DAYS, ActivityRecord
from src.core.locations import calculate_travel_time, get_location
from src.core.logging import get_logger
from src.core.outcome.models import OutcomeTier
from src.core.player.models import PlayerCharacter, create_player_character
from src.core.relationship.models import SexualPreference
from src.core.stats.models import PlayerArchetype, StatTracking, StatVector, to_stat_name
from src.core.time import add_minutes
from src.db.models import PlayerActivityModel, PlayerCharacterModel, RelationshipModel

logger = get_logger(__name__)


@dataclass(frozen=True)
class TravelResult:
    new_location: str
    travel_time: int
    arrived_at: str


class PlayerService:
    """플레이어 캐릭터 CRUD"""

    def __init__(self, db_session: Session, event_bus: EventBus) -> None:
        self._db = db_session
        self._bus = event_bus

    # ── 조회 ─────────────────────────────────────────────────

    def get_player(self, player_id: str) -> Optional[PlayerCharacter]:
        """DB 조회 → Core 모델 변환. 없으면 None."""
        row = self._get_player_row(player_id)
        if row is None:
            return None
        return self._player_from_orm(row)

    def get_or_create_player(self, player_id: str) -> PlayerCharacter:
        """없으면 기본 아키타입으로 생성."""
        player = self.get_player(player_id)
        if player is not None:
            return player
        return self.create_player(player_id)

    def get_activity_records(self, player_id: str, day: int) -> List[ActivityRecord]:
        """해당 일자의 활동 기록 (수행 순)."""
        rows = (
            self._db.query(PlayerActivityModel)
            .filter(
                PlayerActivityModel.player_id == player_id,
                PlayerActivityModel.day_number == day,
            )
            .order_by(PlayerActivityModel.id)
            .all()
        )
        return [self._record_from_orm(row) for row in rows]

    def get_recent_activity_records(
        self, player_id: str, current_day: int, days: int = LONG_WINDOW_DAYS
    ) -> List[ActivityRecord]:
        """최근 N일(오늘 포함) 활동 기록. 일자 → 수행 순."""
        rows = (
            self._db.query(PlayerActivityModel)
            .filter(
                PlayerActivityModel.player_id == player_id,
                PlayerActivityModel.day_number > current_day - days,
                PlayerActivityModel.day_number <= current_day,
            )
            .order_by(PlayerActivityModel.day_number, PlayerActivityModel.id)
            .all()
        )
        return [self._record_from_orm(row) for row in rows]

    def get_last_contact_days(self, player_id: str) -> Dict[str, int]:
        """NPC별 마지막으로 함께 활동한 일자."""
        rows = (
            self._db.query(PlayerActivityModel.npc_id, func.max(PlayerActivityModel.day_number))
            .filter(
                PlayerActivityModel.player_id == player_id,
                PlayerActivityModel.npc_id.isnot(None),
            )
            .group_by(PlayerActivityModel.npc_id)
            .all()
        )
        return {npc_id: day for npc_id, day in rows}

    # ── 생성 / 초기화 ────────────────────────────────────────

    def create_player(
        self,
        player_id: str,
        archetype: Optional[str] = None,
        sexual_preference: str = SexualPreference.EVERYONE.value,
    ) -> PlayerCharacter:
        """새 캐릭터 생성. 이미 있으면 초기화 (스탯 재설정 + 관계 / 활동 기록 삭제)."""
        player = create_player_character(
            player_id,
            archetype=archetype or settings.DEFAULT_ARCHETYPE,
            sexual_preference=sexual_preference,
            money=settings.STARTING_MONEY,
            max_energy=settings.MAX_ENERGY,
            starting_time=settings.STARTING_TIME,
            home_location=settings.HOME_LOCATION,
        )

        row = self._get_player_row(player_id)
        if row is None:
            self._db.add(PlayerCharacterModel(player_id=player_id, **self._player_columns(player)))
            self._db.flush()
            logger.info(f"Player created: {player_id} ({player.archetype.value})")
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.PLAYER_CREATED,
                    data={"player_id": player_id, "archetype": player.archetype.value},
                    source="player_service",
                )
            )
            self._bus.reset_chain()
            return player

        deleted = (
            self._db.query(RelationshipModel)
            .filter(RelationshipModel.player_id == player_id)
            .delete(synchronize_session=False)
        )
        activities_deleted = (
            self._db.query(PlayerActivityModel)
            .filter(PlayerActivityModel.player_id == player_id)
            .delete(synchronize_session=False)
        )
        for key, value in self._player_columns(player).items():
            setattr(row, key, value)
        self._db.flush()

        logger.info(
            f"Player reset: {player_id} ({player.archetype.value}), "
            f"relationships deleted={deleted}, activities deleted={activities_deleted}"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PLAYER_RESET,
                data={
                    "player_id": player_id,
                    "archetype": player.archetype.value,
                    "relationships_deleted": deleted,
                    "activities_deleted": activities_deleted,
                },
                source="player_service",
            )
        )
        self._bus.reset_chain()
        return player

    # ── 저장 ─────────────────────────────────────────────────

    def save_player(self, player: PlayerCharacter) -> None:
        """Core 모델 → DB 반영 (flush만, commit은 호출자)."""
        row = self._get_player_row(player.player_id)
        if row is None:
            raise ValueError(f"Player not found: {player.player_id}")
        for key, value in self._player_columns(player).items():
            setattr(row, key, value)
        self._db.flush()

    # ── 이동 ─────────────────────────────────────────────────

    def travel(self, player_id: str, destination_id: str) -> TravelResult:
        """목적지로 이동. 이동 시간만큼 시계가 흐른다."""
        destination = get_location(destination_id)
        player = self.get_or_create_player(player_id)

        travel_time = calculate_travel_time(player.current_location, destination.id)
        if travel_time == 0:
            return TravelResult(destination.id, 0, player.current_time)

        previous_location = player.current_location
        player.current_location = destination.id
        player.current_time = add_minutes(player.current_time, travel_time)
        self.save_player(player)

        logger.info(
            f"Player traveled: {player_id} {previous_location} → {destination.id} "
            f"({travel_time}min, arrived {player.current_time})"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PLAYER_TRAVELED,
                data={
                    "player_id": player_id,
                    "from": previous_location,
                    "to": destination.id,
                    "travel_time": travel_time,
                },
                source="player_service",
            )
        )
        self._bus.reset_chain()
        return TravelResult(destination.id, travel_time, player.current_time)

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _get_player_row(self, player_id: str) -> Optional[PlayerCharacterModel]:
        return (
            self._db.query(PlayerCharacterModel)
            .filter(PlayerCharacterModel.player_id == player_id)
            .first()
        )

    @staticmethod
    def _player_columns(player: PlayerCharacter) -> dict:
        return {
            "archetype": player.archetype.value,
            "sexual_preference": player.sexual_preference.value,
            "current_energy": player.current_energy,
            "max_energy": player.max_energy,
            "money": player.money,
            "current_day": player.current_day,
            "current_time": player.current_time,
            "last_slept_at": player.last_slept_at,
            "current_location": player.current_location,
            "stats": player.stats.to_dict(),
            "tracking": player.tracking.to_dict(),
        }

    @staticmethod
    def _record_from_orm(row: PlayerActivityModel) -> ActivityRecord:
        return ActivityRecord(
            activity_id=row.activity_id,
            category=ActivityCategory(row.category),
            difficulty=row.difficulty,
            relevant_stats=[to_stat_name(s) for s in row.relevant_stats or []],
            tier=OutcomeTier(row.outcome_tier) if row.outcome_tier else None,
            npc_id=row.npc_id,
            day_number=row.day_number,
            time_cost=row.time_cost,
            stat_effects={to_stat_name(k): v for k, v in (row.stat_effects or {}).items()},
        )

    @staticmethod
    def _player_from_orm(row: PlayerCharacterModel) -> PlayerCharacter:
        return PlayerCharacter(
            player_id=row.player_id,
            archetype=PlayerArchetype(row.archetype),
            stats=StatVector.from_dict(row.stats),
            tracking=StatTracking.from_dict(row.tracking),
            sexual_preference=SexualPreference(row.sexual_preference),
            current_energy=row.current_energy,
            max_energy=row.max_energy,
            money=row.money,
            current_day=row.current_day,
            current_time=row.current_time,
            last_slept_at=row.last_slept_at,
            current_location=row.current_location,
        )
