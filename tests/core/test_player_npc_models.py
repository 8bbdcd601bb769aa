"""플레이어 / NPC 도메인 모델 테스트"""

import pytest

from src.core.npc import NPC, Gender
from src.core.player import PlayerCharacter, create_player_character
from src.core.relationship.models import SexualPreference
from src.core.stats import StatName, get_starting_stats
from src.core.traits import NPCTrait


class TestPlayerCharacter:
    def test_create_defaults(self):
        player = create_player_character("p1", archetype="scholar")
        assert player.current_day == 1
        assert player.current_energy == player.max_energy == 100
        assert player.stats.base[StatName.KNOWLEDGE] == 25
        assert player.sexual_preference == SexualPreference.EVERYONE
        assert player.last_slept_at is None

    def test_custom_start(self):
        player = create_player_character(
            "p1", money=50, max_energy=80, starting_time="07:30", home_location="park"
        )
        assert player.money == 50
        assert player.current_energy == 80
        assert player.current_time == "07:30"
        assert player.current_location == "park"

    def test_energy_out_of_range(self):
        with pytest.raises(ValueError, match="current_energy"):
            PlayerCharacter(
                player_id="p1",
                archetype="balanced",
                stats=get_starting_stats("balanced"),
                current_energy=120,
            )

    def test_bad_time(self):
        with pytest.raises(ValueError):
            create_player_character("p1", starting_time="26:00")

    def test_strings_normalized(self):
        player = create_player_character("p1", archetype="artist", sexual_preference="men")
        assert player.sexual_preference == SexualPreference.MEN


class TestNPC:
    def test_hidden_traits(self):
        npc = NPC(npc_id="n1", name="Mina", traits=["gamer", "foodie"], revealed_traits=["foodie"])
        assert npc.hidden_traits == [NPCTrait.GAMER]
        assert npc.gender == Gender.OTHER

    def test_revealed_must_be_owned(self):
        with pytest.raises(ValueError, match="Revealed traits not owned"):
            NPC(npc_id="n1", name="Mina", traits=["gamer"], revealed_traits=["foodie"])

    def test_conflicting_traits(self):
        with pytest.raises(ValueError):
            NPC(npc_id="n1", name="Mina", traits=["adventurous", "introverted"])

    def test_unknown_gender(self):
        with pytest.raises(ValueError):
            NPC(npc_id="n1", name="Mina", gender="robot")
