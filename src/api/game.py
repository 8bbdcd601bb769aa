"""Game API endpoints."""

import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from src.api.schemas import (
    ActivityInfo,
    ActivityResultResponse,
    CreateNPCRequest,
    CreatePlayerRequest,
    DifficultyContributorInfo,
    DifficultyInfo,
    DifficultyPreviewResponse,
    ErrorResponse,
    NPCInfo,
    PerformActivityRequest,
    PlayerInfo,
    RelationshipChangeInfo,
    RelationshipInfo,
    RollInfo,
    SleepRequest,
    SleepResponse,
    StatBreakdownInfo,
    StatComponentInfo,
    StatsInfo,
    TravelRequest,
    TravelResponse,
)
from src.core.activity.catalog import ActivityCatalog, is_social_activity
from src.core.difficulty import DifficultyBreakdown
from src.core.event_bus import EventBus
from src.core.logging import get_logger
from src.core.npc.models import NPC
from src.core.outcome.resolver import calculate_outcome_probabilities, calculate_stat_bonus
from src.core.player.models import PlayerCharacter
from src.core.relationship.states import get_state_description, get_state_display_name
from src.db.database import get_db
from src.services.activity_service import (
    ActivityResult,
    ActivityService,
    ActivityValidationError,
)
from src.services.npc_service import NPCService
from src.services.player_service import PlayerService
from src.services.relationship_service import RelationshipService
from src.services.sleep_service import SleepOutcome, SleepService

logger = get_logger(__name__)

router = APIRouter(prefix="/game", tags=["game"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


# ── 의존성 주입 ──────────────────────────────────────────────


def get_event_bus(request: Request) -> EventBus:
    """EventBus 인스턴스 반환 (앱 단위 공유)"""
    bus: EventBus = request.app.state.event_bus
    return bus


def get_catalog(request: Request) -> ActivityCatalog:
    """ActivityCatalog 인스턴스 반환 (앱 단위 공유)"""
    catalog: ActivityCatalog = request.app.state.activity_catalog
    return catalog


def get_rng(request: Request) -> random.Random:
    rng: random.Random = request.app.state.rng
    return rng


def get_player_service(
    db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus)
) -> PlayerService:
    return PlayerService(db, bus)


def get_npc_service(
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    rng: random.Random = Depends(get_rng),
) -> NPCService:
    return NPCService(db, bus, rng)


def get_relationship_service(
    db: Session = Depends(get_db), bus: EventBus = Depends(get_event_bus)
) -> RelationshipService:
    return RelationshipService(db, bus)


def get_activity_service(
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    catalog: ActivityCatalog = Depends(get_catalog),
    rng: random.Random = Depends(get_rng),
    players: PlayerService = Depends(get_player_service),
    npcs: NPCService = Depends(get_npc_service),
    relationships: RelationshipService = Depends(get_relationship_service),
) -> ActivityService:
    return ActivityService(db, bus, catalog, players, npcs, relationships, rng)


def get_sleep_service(
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    players: PlayerService = Depends(get_player_service),
) -> SleepService:
    return SleepService(db, bus, players)


# ── 변환 헬퍼 ────────────────────────────────────────────────


def _build_player_info(player: PlayerCharacter) -> PlayerInfo:
    """PlayerCharacter를 PlayerInfo로 변환"""
    stats = player.stats.to_dict()
    return PlayerInfo(
        player_id=player.player_id,
        archetype=player.archetype.value,
        sexual_preference=player.sexual_preference.value,
        current_energy=player.current_energy,
        max_energy=player.max_energy,
        money=player.money,
        current_day=player.current_day,
        current_time=player.current_time,
        current_location=player.current_location,
        last_slept_at=player.last_slept_at,
        stats=StatsInfo(base=stats["base"], current=stats["current"]),
        tracking=player.tracking.to_dict(),
    )


def _build_npc_info(npc: NPC) -> NPCInfo:
    return NPCInfo(
        npc_id=npc.npc_id,
        name=npc.name,
        gender=npc.gender.value,
        current_location=npc.current_location,
        revealed_traits=[t.value for t in npc.revealed_traits],
    )


def _build_difficulty_info(breakdown: DifficultyBreakdown) -> DifficultyInfo:
    return DifficultyInfo(
        final_dc=breakdown.final_dc,
        base_dc=breakdown.base_dc,
        activity_difficulty=breakdown.activity_difficulty,
        relationship_modifier=breakdown.relationship_modifier,
        trait_score=breakdown.trait_score,
        contributors=[
            DifficultyContributorInfo(source=c.source, label=c.label, value=c.value)
            for c in breakdown.contributors
        ],
    )


def _build_activity_response(result: ActivityResult) -> ActivityResultResponse:
    roll = result.roll
    change = result.relationship_change
    return ActivityResultResponse(
        player_id=result.player_id,
        activity_id=result.activity_id,
        npc_id=result.npc_id,
        tier=result.tier.value,
        description=result.description,
        roll=(
            RollInfo(
                roll=roll.roll,
                stat_bonus=roll.stat_bonus,
                dc=roll.dc,
                total=roll.total,
                base_tier=roll.base_tier.value,
                is_critical_success=roll.is_critical_success,
                is_critical_failure=roll.is_critical_failure,
            )
            if roll
            else None
        ),
        difficulty=_build_difficulty_info(result.difficulty) if result.difficulty else None,
        stat_changes={s.value: v for s, v in result.stat_changes.items()},
        stats_trained=[s.value for s in result.stats_trained],
        energy_delta=result.energy_delta,
        money_delta=result.money_delta,
        time_spent=result.time_spent,
        new_energy=result.new_energy,
        new_money=result.new_money,
        new_time=result.new_time,
        ends_after_midnight=result.ends_after_midnight,
        relationship=(
            RelationshipChangeInfo(
                previous=change.previous_axes.to_dict(),
                new=change.new_axes.to_dict(),
                deltas=dict(change.deltas),
                previous_state=change.previous_state.value,
                new_state=change.new_state.value,
                state_changed=change.state_changed,
            )
            if change
            else None
        ),
        emotional_state=result.emotional_state.value if result.emotional_state else None,
        discovered_trait=result.discovered_trait.value if result.discovered_trait else None,
    )


def _build_sleep_response(outcome: SleepOutcome) -> SleepResponse:
    return SleepResponse(
        player_id=outcome.player_id,
        wake_time=outcome.wake_time,
        hours_slept=outcome.hours_slept,
        energy_restored=outcome.energy_restored,
        new_day=outcome.new_day,
        new_energy=outcome.new_energy,
        bedtime=outcome.bedtime,
        traveled_home=outcome.traveled_home,
        travel_time=outcome.travel_time,
        breakdowns=[
            StatBreakdownInfo(
                stat=b.stat.value,
                previous_base=b.previous_base,
                new_base=b.new_base,
                previous_current=b.previous_current,
                new_current=b.new_current,
                base_change=b.base_change,
                current_change=b.current_change,
                components=[
                    StatComponentInfo(
                        source=c.source,
                        category=c.category,
                        description=c.description,
                        value=c.value,
                        details=c.details,
                    )
                    for c in b.components
                ],
            )
            for b in outcome.breakdowns.values()
        ],
        defensive_changes={s.value: v for s, v in outcome.defensive_changes.items()},
        mixed_changes={s.value: v for s, v in outcome.mixed_changes.items()},
    )


# ── 플레이어 ─────────────────────────────────────────────────


@router.post("/players", response_model=PlayerInfo, responses=_ERRORS)
def create_player(
    request: CreatePlayerRequest,
    players: PlayerService = Depends(get_player_service),
) -> PlayerInfo:
    """
    캐릭터 생성

    이미 있는 플레이어면 스탯을 다시 뽑고 관계를 전부 삭제합니다.
    """
    try:
        player = players.create_player(
            request.player_id,
            archetype=request.archetype,
            sexual_preference=request.sexual_preference,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _build_player_info(player)


@router.get("/players/{player_id}", response_model=PlayerInfo, responses=_ERRORS)
def get_player(
    player_id: str,
    players: PlayerService = Depends(get_player_service),
) -> PlayerInfo:
    player = players.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return _build_player_info(player)


@router.get(
    "/players/{player_id}/relationships",
    response_model=list[RelationshipInfo],
    responses=_ERRORS,
)
def get_relationships(
    player_id: str,
    players: PlayerService = Depends(get_player_service),
    relationships: RelationshipService = Depends(get_relationship_service),
) -> list[RelationshipInfo]:
    """플레이어의 전체 관계 (상태는 축 값에서 재계산)"""
    if players.get_player(player_id) is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return [
        RelationshipInfo(
            npc_id=r.npc_id,
            trust=r.trust,
            affection=r.affection,
            desire=r.desire,
            desire_cap=r.desire_cap,
            state=r.current_state.value,
            state_name=get_state_display_name(r.current_state),
            description=get_state_description(r.current_state),
            unlocked_states=[s.value for s in r.unlocked_states],
        )
        for r in relationships.get_relationships_for(player_id)
    ]


# ── NPC ──────────────────────────────────────────────────────


@router.post("/npcs", response_model=NPCInfo, responses=_ERRORS)
def create_npc(
    request: CreateNPCRequest,
    npcs: NPCService = Depends(get_npc_service),
) -> NPCInfo:
    try:
        npc = npcs.create_npc(
            request.name,
            gender=request.gender,
            location=request.location,
            traits=request.traits,
            npc_id=request.npc_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _build_npc_info(npc)


# ── 활동 ─────────────────────────────────────────────────────


@router.get("/activities", response_model=list[ActivityInfo])
def list_activities(
    category: Optional[str] = None,
    catalog: ActivityCatalog = Depends(get_catalog),
) -> list[ActivityInfo]:
    """활동 목록 (category로 필터)"""
    try:
        activities = catalog.by_category(category) if category else catalog.get_all()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [
        ActivityInfo(
            id=a.id,
            name=a.name,
            description=a.description,
            category=a.category.value,
            time_cost=a.time_cost,
            energy_cost=a.energy_cost,
            money_cost=a.money_cost,
            difficulty=a.difficulty,
            relevant_stats=[s.value for s in a.relevant_stats],
            tags=[t.value for t in a.tags],
            location=a.location,
            is_social=is_social_activity(a),
        )
        for a in activities
    ]


@router.post("/activities/perform", response_model=ActivityResultResponse, responses=_ERRORS)
def perform_activity(
    request: PerformActivityRequest,
    activities: ActivityService = Depends(get_activity_service),
) -> ActivityResultResponse:
    """
    활동 수행

    검증 실패는 400, 존재하지 않는 활동/NPC는 404.
    """
    try:
        result = activities.perform_activity(
            request.player_id, request.activity_id, npc_id=request.npc_id
        )
    except ActivityValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return _build_activity_response(result)


@router.get("/difficulty/preview", response_model=DifficultyPreviewResponse, responses=_ERRORS)
def preview_difficulty(
    player_id: str,
    activity_id: str,
    npc_id: Optional[str] = None,
    players: PlayerService = Depends(get_player_service),
    activities: ActivityService = Depends(get_activity_service),
) -> DifficultyPreviewResponse:
    """판정 전 최종 DC와 티어별 확률"""
    player = players.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    try:
        activity = activities.get_activity(activity_id)
        breakdown = activities.preview_difficulty(player_id, activity_id, npc_id)
    except ActivityValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    stat_bonus = calculate_stat_bonus(player.stats, activity.relevant_stats)
    probabilities = calculate_outcome_probabilities(stat_bonus, breakdown.final_dc)
    return DifficultyPreviewResponse(
        activity_id=activity_id,
        npc_id=npc_id,
        stat_bonus=stat_bonus,
        difficulty=_build_difficulty_info(breakdown),
        probabilities={tier.value: p for tier, p in probabilities.items()},
    )


# ── 이동 / 수면 ──────────────────────────────────────────────


@router.post("/travel", response_model=TravelResponse, responses=_ERRORS)
def travel(
    request: TravelRequest,
    players: PlayerService = Depends(get_player_service),
) -> TravelResponse:
    try:
        result = players.travel(request.player_id, request.destination)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TravelResponse(
        player_id=request.player_id,
        location=result.new_location,
        travel_time=result.travel_time,
        current_time=result.arrived_at,
    )


@router.post("/sleep", response_model=SleepResponse)
def sleep(
    request: SleepRequest,
    sleeper: SleepService = Depends(get_sleep_service),
) -> SleepResponse:
    """
    수면

    귀가 → 에너지 회복 → 생활 패턴 평가 → surplus 전환 → 다음 날.
    """
    outcome = sleeper.process_sleep(request.player_id)
    return _build_sleep_response(outcome)
