"""활동 카탈로그 / 정의 검증 / 수행 가능 여부 테스트"""

import json

import pytest

from src.config import settings
from src.core.activity import (
    Activity,
    ActivityCatalog,
    ActivityCategory,
    ActivityEffectProfile,
    NegativeEffects,
    can_meet_npcs_at,
    is_social_activity,
    is_work_activity,
)
from src.core.activity.availability import can_perform_activity
from src.core.player import create_player_character
from src.core.stats import StatName
from src.core.time import TimeSlot


def _make_activity(**kwargs) -> Activity:
    defaults = dict(
        id="test_activity",
        name="Test Activity",
        category=ActivityCategory.LEISURE,
        time_cost=60,
    )
    defaults.update(kwargs)
    return Activity(**defaults)


def _write_catalog(tmp_path, entries):
    path = tmp_path / "activities.json"
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


class TestBundledCatalog:
    @pytest.fixture()
    def catalog(self):
        catalog = ActivityCatalog()
        catalog.load_from_json(settings.ACTIVITY_CATALOG_PATH)
        return catalog

    def test_loads_all(self, catalog):
        assert catalog.count() == 17

    def test_lookup(self, catalog):
        coffee = catalog.get("have_coffee")
        assert coffee.category == ActivityCategory.SOCIAL
        assert coffee.location == "coffee_shop"
        assert coffee.relationship_effects
        assert catalog.get("does_not_exist") is None

    def test_by_category(self, catalog):
        ids = {a.id for a in catalog.by_category("leisure")}
        assert ids == {"stroll_park", "watch_tv"}

    def test_restful_activities_have_no_difficulty(self, catalog):
        assert not catalog.get("watch_tv").has_difficulty
        assert catalog.get("take_nap").energy_cost > 0

    def test_profiles_parsed(self, catalog):
        profile = catalog.get("work_part_time").outcome_profile
        assert profile.main_money_gain == 80
        assert profile.negative_effects.stats == [StatName.CONFIDENCE, StatName.AMBITION]

    def test_time_slots_parsed(self, catalog):
        assert catalog.get("morning_jog").allowed_time_slots == [TimeSlot.MORNING]


class TestCatalogLoading:
    def test_load_returns_count(self, tmp_path):
        path = _write_catalog(
            tmp_path,
            [
                {"id": "a", "name": "A", "category": "leisure", "time_cost": 30},
                {"id": "b", "name": "B", "category": "work", "time_cost": 60},
            ],
        )
        catalog = ActivityCatalog()
        assert catalog.load_from_json(path) == 2
        assert [a.id for a in catalog.get_all()] == ["a", "b"]

    def test_missing_field_names_activity(self, tmp_path):
        path = _write_catalog(tmp_path, [{"id": "broken", "category": "leisure", "time_cost": 1}])
        with pytest.raises(ValueError, match="Invalid activity definition 'broken'"):
            ActivityCatalog().load_from_json(path)

    def test_unknown_category(self, tmp_path):
        path = _write_catalog(
            tmp_path, [{"id": "x", "name": "X", "category": "gardening", "time_cost": 1}]
        )
        with pytest.raises(ValueError, match="'x'"):
            ActivityCatalog().load_from_json(path)

    def test_unknown_stat_in_profile(self, tmp_path):
        path = _write_catalog(
            tmp_path,
            [
                {
                    "id": "x",
                    "name": "X",
                    "category": "work",
                    "time_cost": 1,
                    "outcome_profile": {"main_stats": ["luck"]},
                }
            ],
        )
        with pytest.raises(ValueError):
            ActivityCatalog().load_from_json(path)

    def test_duplicate_in_file(self, tmp_path):
        entry = {"id": "dup", "name": "Dup", "category": "leisure", "time_cost": 1}
        path = _write_catalog(tmp_path, [entry, entry])
        with pytest.raises(ValueError, match="Duplicate activity id"):
            ActivityCatalog().load_from_json(path)

    def test_register_dynamic(self):
        catalog = ActivityCatalog()
        catalog.register(_make_activity(id="custom"))
        assert catalog.get("custom").name == "Test Activity"
        with pytest.raises(ValueError):
            catalog.register(_make_activity(id="custom"))


class TestActivityModel:
    def test_negative_time_cost(self):
        with pytest.raises(ValueError, match="time_cost"):
            _make_activity(time_cost=-1)

    def test_unknown_relationship_axis(self):
        with pytest.raises(ValueError, match="unknown relationship axes"):
            _make_activity(relationship_effects={"respect": 5})

    def test_negative_profile_values(self):
        with pytest.raises(ValueError):
            ActivityEffectProfile(main_stat_gain=-1)
        with pytest.raises(ValueError):
            NegativeEffects(energy_cost=-5)

    def test_string_values_normalized(self):
        activity = _make_activity(relevant_stats=["wit"], stat_requirements={"empathy": 25})
        assert activity.relevant_stats == [StatName.WIT]
        assert activity.stat_requirements == {StatName.EMPATHY: 25}

    def test_has_difficulty(self):
        assert _make_activity(difficulty=10).has_difficulty
        assert not _make_activity(difficulty=0).has_difficulty
        assert not _make_activity().has_difficulty


class TestPredicates:
    def test_social_and_work(self):
        assert is_social_activity(_make_activity(category="social"))
        assert not is_social_activity(_make_activity(category="discovery"))
        assert is_work_activity(_make_activity(category="work"))

    def test_no_npcs_at_home(self):
        assert not can_meet_npcs_at("home", "home")
        assert can_meet_npcs_at("park", "home")
        assert can_meet_npcs_at("home", "dorm")
        assert not can_meet_npcs_at("dorm", "dorm")


class TestAvailability:
    def test_available(self):
        player = create_player_character("p1")
        result = can_perform_activity(_make_activity(energy_cost=-30), player)
        assert result.available
        assert result.reason is None
        assert not result.ends_after_midnight

    def test_energy_exactly_enough(self):
        player = create_player_character("p1")
        player.current_energy = 30
        assert can_perform_activity(_make_activity(energy_cost=-30), player).available

    def test_not_enough_energy_checked_first(self):
        player = create_player_character("p1")
        player.current_energy = 10
        activity = _make_activity(energy_cost=-30, money_cost=-500)
        assert can_perform_activity(activity, player).reason == "Not enough energy"

    def test_not_enough_money(self):
        player = create_player_character("p1")
        result = can_perform_activity(_make_activity(money_cost=-250), player)
        assert result.reason == "Not enough money"

    def test_wrong_time_slot(self):
        player = create_player_character("p1")
        activity = _make_activity(allowed_time_slots=["evening", "night"])
        assert can_perform_activity(activity, player).reason == "Not available at this time"

    def test_ends_too_late(self):
        player = create_player_character("p1", starting_time="23:00")
        result = can_perform_activity(_make_activity(time_cost=330), player)
        assert result.reason == "Would end too late (after 4 AM)"

    def test_crossing_midnight_allowed_with_flag(self):
        player = create_player_character("p1", starting_time="23:00")
        result = can_perform_activity(_make_activity(time_cost=120), player)
        assert result.available
        assert result.ends_after_midnight

    def test_wrong_location(self):
        player = create_player_character("p1")
        result = can_perform_activity(_make_activity(location="park"), player)
        assert result.reason == "Must be at Neighborhood Park"

    def test_location_closed(self):
        player = create_player_character("p1", starting_time="07:00", home_location="library")
        result = can_perform_activity(_make_activity(location="library"), player)
        assert result.reason == "Public Library is closed"

    def test_time_slot_checked_before_location(self):
        player = create_player_character("p1")
        activity = _make_activity(location="bar", allowed_time_slots=["evening"])
        assert can_perform_activity(activity, player).reason == "Not available at this time"
