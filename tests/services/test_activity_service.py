"""Activity Service 통합 테스트 — 고정 주사위 + 시드 RNG"""

import random

import pytest

from src.core.event_types import EventTypes
from src.core.outcome.models import OutcomeTier
from src.core.relationship.models import EmotionalState, RelationshipState
from src.core.stats.models import StatName
from src.core.traits import NPCTrait
from src.db.models import PlayerActivityModel
from src.services.activity_service import ActivityService, ActivityValidationError
from src.services.npc_service import NPCService
from src.services.player_service import PlayerService
from src.services.relationship_service import RelationshipService

# confidence / knowledge 15 (balanced) 기준
OKAY_ROLL = 150
CRIT_FAIL_ROLL = 10


@pytest.fixture()
def setup(db_session, bus, catalog):
    players = PlayerService(db_session, bus)
    npcs = NPCService(db_session, bus, rng=random.Random(1))
    relationships = RelationshipService(db_session, bus)
    service = ActivityService(
        db_session,
        bus,
        catalog,
        players,
        npcs,
        relationships,
        rng=random.Random(3),
    )
    players.create_player("p1")
    return service, players, npcs, relationships


def _make_cafe_npc(npcs, **kwargs):
    defaults = dict(
        name="Mina",
        gender="female",
        location="coffee_shop",
        traits=["coffee_lover", "gamer"],
        npc_id="npc_mina",
    )
    defaults.update(kwargs)
    return npcs.create_npc(**defaults)


class TestSoloActivity:
    def test_okay_read_at_home(self, setup, db_session):
        service, players, _, _ = setup

        result = service.perform_activity("p1", "read_book", roll=OKAY_ROLL)

        assert result.tier == OutcomeTier.OKAY
        assert result.roll.stat_bonus == 15
        assert result.roll.dc == 125
        assert result.difficulty.final_dc == 125
        assert result.stats_trained == [StatName.KNOWLEDGE]
        assert result.stat_changes[StatName.KNOWLEDGE] > 0
        assert result.energy_delta == -5
        assert result.new_energy == 95
        assert result.new_time == "09:30"
        assert result.description

        player = players.get_player("p1")
        assert player.current_energy == 95
        assert player.current_time == "09:30"
        assert player.tracking.min_energy_today == 95
        assert player.tracking.stats_trained_today == [StatName.KNOWLEDGE]
        assert not player.tracking.worked_today

        row = db_session.query(PlayerActivityModel).one()
        assert row.day_number == 1
        assert row.time_of_day == "08:00"
        assert row.outcome_tier == "okay"
        assert row.roll == OKAY_ROLL

    def test_work_pays_and_marks_worked(self, setup):
        service, players, _, _ = setup
        players.travel("p1", "coffee_shop")

        result = service.perform_activity("p1", "work_barista", roll=OKAY_ROLL)

        assert result.tier == OutcomeTier.OKAY
        assert result.money_delta == 70
        assert result.new_money == 270
        assert result.new_energy == 65
        assert result.new_time == "12:05"
        assert players.get_player("p1").tracking.worked_today

    def test_catastrophe_costs_time_and_flags_day(self, setup):
        service, players, _, _ = setup

        result = service.perform_activity("p1", "read_book", roll=CRIT_FAIL_ROLL)

        assert result.tier == OutcomeTier.CATASTROPHIC
        assert result.roll.is_critical_failure
        assert result.time_spent == 113
        assert result.stats_trained == []
        assert players.get_player("p1").tracking.had_catastrophic_failure_today

    def test_no_difficulty_skips_roll(self, setup, db_session):
        service, players, _, _ = setup
        players.travel("p1", "park")

        result = service.perform_activity("p1", "stroll_park")

        assert result.tier == OutcomeTier.OKAY
        assert result.roll is None
        assert result.difficulty is None
        assert result.stat_changes == {}
        assert result.new_time == "09:05"
        row = db_session.query(PlayerActivityModel).one()
        assert row.roll is None
        assert row.outcome_tier is None

    def test_energy_clamped_to_max(self, setup):
        service, players, _, _ = setup
        player = players.get_player("p1")
        player.current_energy = 98
        players.save_player(player)

        result = service.perform_activity("p1", "take_nap")

        assert result.new_energy == 100
        assert result.energy_delta == 2

    def test_random_roll_in_range(self, setup):
        service, _, _, _ = setup
        result = service.perform_activity("p1", "read_book")
        assert 2 <= result.roll.roll <= 200

    def test_emits_activity_resolved(self, setup, bus):
        service, _, _, _ = setup
        resolved = []
        bus.subscribe(EventTypes.ACTIVITY_RESOLVED, resolved.append)

        service.perform_activity("p1", "read_book", roll=OKAY_ROLL)
        service.perform_activity("p1", "watch_tv")

        assert [e.data["activity_id"] for e in resolved] == ["read_book", "watch_tv"]
        assert resolved[0].data["tier"] == "okay"


class TestSocialActivity:
    def test_have_coffee_with_trait_bonus(self, setup, bus):
        service, players, npcs, relationships = setup
        _make_cafe_npc(npcs)
        players.travel("p1", "coffee_shop")
        received = []
        bus.subscribe_all(received.append)

        result = service.perform_activity("p1", "have_coffee", npc_id="npc_mina", roll=OKAY_ROLL)

        # 100 + 10 (활동) + 0 (stranger) - 15 (coffee_lover)
        assert result.difficulty.final_dc == 95
        assert result.tier == OutcomeTier.BEST
        assert result.relationship_change.deltas == {"affection": 15}
        assert result.relationship_change.new_state == RelationshipState.ACQUAINTANCE
        assert result.emotional_state == EmotionalState.HAPPY
        assert result.discovered_trait == NPCTrait.COFFEE_LOVER
        assert result.new_money == 195

        assert npcs.get_npc("npc_mina").revealed_traits == [NPCTrait.COFFEE_LOVER]
        assert relationships.get_relationship("p1", "npc_mina").affection == 15
        types = [e.event_type for e in received]
        assert EventTypes.RELATIONSHIP_CREATED in types
        assert EventTypes.TRAIT_DISCOVERED in types
        assert types[-1] == EventTypes.ACTIVITY_RESOLVED

    def test_second_meeting_uses_relationship(self, setup):
        service, players, npcs, _ = setup
        _make_cafe_npc(npcs)
        players.travel("p1", "coffee_shop")
        service.perform_activity("p1", "have_coffee", npc_id="npc_mina", roll=OKAY_ROLL)

        result = service.perform_activity("p1", "have_coffee", npc_id="npc_mina", roll=OKAY_ROLL)

        assert result.difficulty.relationship_modifier == -3
        assert result.difficulty.final_dc == 92
        assert result.discovered_trait is None

    def test_preview_matches_resolution(self, setup):
        service, players, npcs, _ = setup
        _make_cafe_npc(npcs)

        preview = service.preview_difficulty("p1", "have_coffee", "npc_mina")

        assert preview.final_dc == 95
        assert [c.source for c in preview.contributors][-1] == "trait:coffee_lover"

    def test_preview_solo(self, setup):
        service, _, npcs, _ = setup
        _make_cafe_npc(npcs)
        assert service.preview_difficulty("p1", "read_book").final_dc == 125
        assert service.preview_difficulty("p1", "read_book", "npc_mina").trait_score == 0


class TestValidation:
    def test_unknown_activity(self, setup):
        service, _, _, _ = setup
        with pytest.raises(ActivityValidationError) as exc:
            service.perform_activity("p1", "skydiving")
        assert exc.value.status_code == 404

    def test_social_requires_npc(self, setup):
        service, _, _, _ = setup
        with pytest.raises(ActivityValidationError, match="require an NPC") as exc:
            service.perform_activity("p1", "quick_chat")
        assert exc.value.status_code == 400

    def test_unknown_npc(self, setup):
        service, _, _, _ = setup
        with pytest.raises(ActivityValidationError) as exc:
            service.perform_activity("p1", "quick_chat", npc_id="ghost")
        assert exc.value.status_code == 404

    def test_no_npcs_at_home(self, setup):
        service, _, npcs, _ = setup
        _make_cafe_npc(npcs)
        with pytest.raises(ActivityValidationError, match="can't meet NPCs at home"):
            service.perform_activity("p1", "quick_chat", npc_id="npc_mina")

    def test_npc_elsewhere(self, setup):
        service, players, npcs, _ = setup
        _make_cafe_npc(npcs)
        players.travel("p1", "park")
        with pytest.raises(ActivityValidationError, match="Mina is not here"):
            service.perform_activity("p1", "quick_chat", npc_id="npc_mina")

    def test_configured_home(self, db_session, bus, catalog, setup):
        _, players, npcs, relationships = setup
        service = ActivityService(
            db_session, bus, catalog, players, npcs, relationships, home_location="park"
        )
        _make_cafe_npc(npcs, location="park")
        players.travel("p1", "park")
        with pytest.raises(ActivityValidationError, match="can't meet NPCs at home"):
            service.perform_activity("p1", "quick_chat", npc_id="npc_mina")

    def test_stat_requirements_checked_first(self, setup):
        service, _, npcs, _ = setup
        _make_cafe_npc(npcs)
        with pytest.raises(ActivityValidationError, match="empathy 15/25"):
            service.perform_activity("p1", "deep_conversation", npc_id="npc_mina")

    def test_wrong_location(self, setup):
        service, _, _, _ = setup
        with pytest.raises(ActivityValidationError, match="Must be at Corner Coffee Shop"):
            service.perform_activity("p1", "work_barista")

    def test_failed_validation_changes_nothing(self, setup, db_session):
        service, players, _, _ = setup
        with pytest.raises(ActivityValidationError):
            service.perform_activity("p1", "work_barista")
        player = players.get_player("p1")
        assert player.current_energy == 100
        assert player.current_time == "08:00"
        assert db_session.query(PlayerActivityModel).count() == 0
