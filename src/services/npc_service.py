"""NPC Service — NPC 생성/조회 + 특성 발견

Core(npc, traits)와 DB를 연결한다.
"""

import random
import uuid
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.locations import get_location
from src.core.logging import get_logger
from src.core.npc.models import NPC, Gender
from src.core.traits.calculations import get_trait_name, select_random_traits, to_trait
from src.core.traits.config import NPCTrait
from src.db.models import NPCModel

logger = get_logger(__name__)

DEFAULT_TRAIT_COUNT = 3


class NPCService:
    """NPC CRUD, 특성 공개"""

    def __init__(
        self,
        db_session: Session,
        event_bus: EventBus,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._db = db_session
        self._bus = event_bus
        self._rng = rng or random.Random()

    # ── 조회 ─────────────────────────────────────────────────

    def get_npc(self, npc_id: str) -> Optional[NPC]:
        """ID로 NPC 조회"""
        row = self._get_npc_row(npc_id)
        if row is None:
            return None
        return self._npc_from_orm(row)

    def get_npcs_at(self, location_id: str) -> List[NPC]:
        """장소의 NPC 목록"""
        rows = self._db.query(NPCModel).filter(NPCModel.current_location == location_id).all()
        return [self._npc_from_orm(r) for r in rows]

    def get_all_npcs(self) -> List[NPC]:
        return [self._npc_from_orm(r) for r in self._db.query(NPCModel).all()]

    # ── 생성 ─────────────────────────────────────────────────

    def create_npc(
        self,
        name: str,
        gender: str = Gender.OTHER.value,
        location: str = "coffee_shop",
        traits: Optional[Sequence[str]] = None,
        npc_id: Optional[str] = None,
    ) -> NPC:
        """NPC 생성 + DB 저장. traits가 없으면 충돌 없는 특성을 무작위로 배정."""
        get_location(location)
        chosen = (
            list(traits)
            if traits is not None
            else select_random_traits(DEFAULT_TRAIT_COUNT, self._rng)
        )
        npc = NPC(
            npc_id=npc_id or str(uuid.uuid4()),
            name=name,
            gender=gender,
            traits=chosen,
            current_location=location,
        )

        self._db.add(
            NPCModel(
                npc_id=npc.npc_id,
                name=npc.name,
                gender=npc.gender.value,
                traits=[t.value for t in npc.traits],
                revealed_traits=[],
                current_location=npc.current_location,
            )
        )
        self._db.flush()

        logger.info(f"NPC created: {npc.name} ({npc.npc_id}) at {npc.current_location}")
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.NPC_CREATED,
                data={"npc_id": npc.npc_id, "location": npc.current_location},
                source="npc_service",
            )
        )
        self._bus.reset_chain()
        return npc

    # ── 특성 공개 ────────────────────────────────────────────

    def reveal_trait(self, npc_id: str, trait: NPCTrait) -> bool:
        """특성 공개. 새로 공개되면 True, 이미 공개된 특성이면 False."""
        row = self._get_npc_row(npc_id)
        if row is None:
            raise ValueError(f"NPC not found: {npc_id}")

        trait = to_trait(trait)
        if trait.value not in row.traits:
            raise ValueError(f"NPC {npc_id} does not have trait {trait.value}")
        if trait.value in row.revealed_traits:
            return False

        row.revealed_traits = [*row.revealed_traits, trait.value]
        self._db.flush()

        logger.info(f"Trait discovered: {npc_id} → {trait.value}")
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.TRAIT_DISCOVERED,
                data={"npc_id": npc_id, "trait": trait.value, "trait_name": get_trait_name(trait)},
                source="npc_service",
            )
        )
        return True

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _get_npc_row(self, npc_id: str) -> Optional[NPCModel]:
        return self._db.query(NPCModel).filter(NPCModel.npc_id == npc_id).first()

    @staticmethod
    def _npc_from_orm(row: NPCModel) -> NPC:
        return NPC(
            npc_id=row.npc_id,
            name=row.name,
            gender=Gender(row.gender),
            traits=list(row.traits or []),
            revealed_traits=list(row.revealed_traits or []),
            current_location=row.current_location,
        )
