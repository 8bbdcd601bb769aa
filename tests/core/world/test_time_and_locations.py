"""게임 내 시계 / 수면 테이블 / 장소 테스트"""

import pytest

from src.core.locations import (
    LOCATIONS,
    District,
    calculate_travel_time,
    get_location,
    get_locations_by_district,
    is_location_open,
)
from src.core.time import (
    TimeSlot,
    add_minutes,
    calculate_energy_restored,
    calculate_sleep_results,
    check_activity_end_time,
    get_time_slot,
    parse_time,
)


class TestClock:
    def test_add_minutes_wraps_midnight(self):
        assert add_minutes("23:30", 45) == "00:15"
        assert add_minutes("08:00", 90) == "09:30"

    @pytest.mark.parametrize("bad", ["25:00", "12:60", "abc", "8", "1:2:3"])
    def test_parse_time_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            parse_time(bad)

    @pytest.mark.parametrize(
        "time,slot",
        [
            ("06:00", TimeSlot.MORNING),
            ("11:59", TimeSlot.MORNING),
            ("12:00", TimeSlot.AFTERNOON),
            ("17:59", TimeSlot.AFTERNOON),
            ("18:00", TimeSlot.EVENING),
            ("23:59", TimeSlot.EVENING),
            ("00:00", TimeSlot.NIGHT),
            ("05:59", TimeSlot.NIGHT),
        ],
    )
    def test_time_slots(self, time, slot):
        assert get_time_slot(time) == slot


class TestActivityEndTime:
    def test_crossing_midnight_is_warning(self):
        assert check_activity_end_time("23:00", 120) == (False, True)

    def test_ending_after_4am_forbidden(self):
        assert check_activity_end_time("23:00", 330) == (True, False)

    def test_early_start_into_forbidden_window(self):
        assert check_activity_end_time("02:00", 150) == (True, False)

    def test_normal_daytime(self):
        assert check_activity_end_time("20:00", 60) == (False, False)


class TestSleepTable:
    def test_evening_bedtime_wakes_at_six(self):
        result = calculate_sleep_results("21:00")
        assert result.wake_time == "06:00"
        assert result.hours_slept == 8.0
        assert result.energy_restored == 80

    def test_late_evening_sleeps_eight_hours(self):
        result = calculate_sleep_results("23:00")
        assert result.wake_time == "07:00"
        assert result.hours_slept == 8.0

    def test_after_midnight_wakes_at_eight(self):
        result = calculate_sleep_results("01:00")
        assert result.wake_time == "08:00"
        assert result.hours_slept == pytest.approx(7.0)
        assert result.energy_restored == 70

    def test_very_late_bedtime(self):
        result = calculate_sleep_results("05:30")
        assert result.hours_slept == pytest.approx(2.5)
        assert result.energy_restored == 25

    def test_energy_restored_floored_and_capped(self):
        assert calculate_energy_restored(0.95) == 9
        assert calculate_energy_restored(12) == 80


class TestLocations:
    def test_ten_locations_in_three_districts(self):
        assert len(LOCATIONS) == 10
        assert {loc.id for loc in get_locations_by_district(District.RESIDENTIAL)} == {
            "home",
            "park",
            "coffee_shop",
        }

    def test_travel_time(self):
        assert calculate_travel_time("home", "home") == 0
        assert calculate_travel_time("home", "park") == 5
        assert calculate_travel_time("home", "gym") == 15
        assert calculate_travel_time("bar", "beach") == 5

    def test_unknown_location(self):
        with pytest.raises(ValueError, match="Unknown location"):
            get_location("moon")
        with pytest.raises(ValueError):
            calculate_travel_time("home", "moon")

    def test_opening_hours(self):
        assert not is_location_open("coffee_shop", "05:59")
        assert is_location_open("coffee_shop", "06:00")
        assert not is_location_open("coffee_shop", "22:00")

    def test_hours_spanning_midnight(self):
        assert is_location_open("bar", "01:00")
        assert not is_location_open("bar", "03:00")
        assert is_location_open("bar", "11:00")

    def test_always_open(self):
        assert is_location_open("park", "03:00")
        assert is_location_open("home", "12:00")
