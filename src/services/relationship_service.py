"""Relationship Service — 관계 Core와 DB를 연결

축 값이 진실. current_state 컬럼은 표시용 캐시로 매번 다시 계산해 저장한다.
"""

import uuid
from typing import List, Mapping, Optional

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.npc.models import NPC
from src.core.outcome.models import OutcomeTier
from src.core.player.models import PlayerCharacter
from src.core.relationship.calculations import (
    calculate_desire_cap,
    evaluate_relationship_change,
)
from src.core.relationship.models import (
    Relationship,
    RelationshipChange,
    RelationshipState,
)
from src.core.relationship.states import (
    calculate_relationship_state,
    get_relationship_difficulty_modifier,
)
from src.db.models import RelationshipModel

logger = get_logger(__name__)


class RelationshipService:
    """플레이어-NPC 관계 CRUD + 활동 결과 반영"""

    def __init__(self, db_session: Session, event_bus: EventBus) -> None:
        self._db = db_session
        self._bus = event_bus

    # ── 조회 ─────────────────────────────────────────────────

    def get_relationship(self, player_id: str, npc_id: str) -> Optional[Relationship]:
        """DB 조회 → Core 모델 변환"""
        row = self._get_relationship_row(player_id, npc_id)
        if row is None:
            return None
        return self._relationship_from_orm(row)

    def get_relationships_for(self, player_id: str) -> List[Relationship]:
        """플레이어의 전체 관계"""
        rows = (
            self._db.query(RelationshipModel)
            .filter(RelationshipModel.player_id == player_id)
            .all()
        )
        return [self._relationship_from_orm(r) for r in rows]

    def get_difficulty_modifier(self, player_id: str, npc_id: str) -> int:
        """관계가 없으면 stranger (0)."""
        relationship = self.get_relationship(player_id, npc_id)
        if relationship is None:
            return 0
        return get_relationship_difficulty_modifier(relationship.axes)

    # ── 생성 ─────────────────────────────────────────────────

    def get_or_create_relationship(self, player: PlayerCharacter, npc: NPC) -> Relationship:
        """처음 만나면 0/0/0 관계 생성. 욕망 상한은 지향 + 성별로 결정."""
        existing = self.get_relationship(player.player_id, npc.npc_id)
        if existing is not None:
            return existing

        relationship = Relationship(
            relationship_id=str(uuid.uuid4()),
            player_id=player.player_id,
            npc_id=npc.npc_id,
            desire_cap=calculate_desire_cap(player.sexual_preference, npc.gender),
        )
        self._db.add(
            RelationshipModel(
                relationship_id=relationship.relationship_id,
                player_id=relationship.player_id,
                npc_id=relationship.npc_id,
                trust=0,
                affection=0,
                desire=0,
                desire_cap=relationship.desire_cap,
                current_state=relationship.current_state.value,
                unlocked_states=[s.value for s in relationship.unlocked_states],
            )
        )
        self._db.flush()

        logger.info(
            f"Relationship created: {player.player_id} → {npc.npc_id} "
            f"(desire_cap={relationship.desire_cap})"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.RELATIONSHIP_CREATED,
                data={
                    "relationship_id": relationship.relationship_id,
                    "player_id": player.player_id,
                    "npc_id": npc.npc_id,
                },
                source="relationship_service",
            )
        )
        return relationship

    # ── 활동 결과 반영 ───────────────────────────────────────

    def apply_activity_outcome(
        self,
        relationship: Relationship,
        base_effects: Mapping[str, float],
        tier: OutcomeTier,
    ) -> RelationshipChange:
        """기본 관계 효과 × 티어 배율 → 축 갱신 → 상태 재계산 → DB 반영."""
        row = self._get_relationship_row(relationship.player_id, relationship.npc_id)
        if row is None:
            raise ValueError(
                f"Relationship not found: {relationship.player_id} → {relationship.npc_id}"
            )

        change = evaluate_relationship_change(relationship, base_effects, tier)

        row.trust = change.new_axes.trust
        row.affection = change.new_axes.affection
        row.desire = change.new_axes.desire
        row.current_state = change.new_state.value
        row.unlocked_states = [s.value for s in change.unlocked_states]
        self._db.flush()

        logger.info(
            f"Relationship changed: {relationship.player_id} → {relationship.npc_id} "
            f"deltas={change.deltas} tier={OutcomeTier(tier).value} "
            f"state={change.previous_state.value}→{change.new_state.value}"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.RELATIONSHIP_CHANGED,
                data={
                    "player_id": relationship.player_id,
                    "npc_id": relationship.npc_id,
                    "deltas": dict(change.deltas),
                },
                source="relationship_service",
            )
        )
        if change.state_changed:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.RELATIONSHIP_STATE_CHANGED,
                    data={
                        "player_id": relationship.player_id,
                        "npc_id": relationship.npc_id,
                        "old_state": change.previous_state.value,
                        "new_state": change.new_state.value,
                    },
                    source="relationship_service",
                )
            )
        return change

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _get_relationship_row(self, player_id: str, npc_id: str) -> Optional[RelationshipModel]:
        return (
            self._db.query(RelationshipModel)
            .filter(
                RelationshipModel.player_id == player_id,
                RelationshipModel.npc_id == npc_id,
            )
            .first()
        )

    @staticmethod
    def _relationship_from_orm(row: RelationshipModel) -> Relationship:
        """current_state는 저장값을 믿지 않고 축 값에서 재계산."""
        unlocked = [RelationshipState(s) for s in row.unlocked_states or []]
        return Relationship(
            relationship_id=row.relationship_id,
            player_id=row.player_id,
            npc_id=row.npc_id,
            trust=row.trust,
            affection=row.affection,
            desire=row.desire,
            desire_cap=row.desire_cap,
            current_state=calculate_relationship_state(row.trust, row.affection, row.desire),
            unlocked_states=unlocked or [RelationshipState.STRANGER],
            created_at=row.created_at.isoformat() if row.created_at else "",
            updated_at=row.updated_at.isoformat() if row.updated_at else "",
        )
