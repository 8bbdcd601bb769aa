"""스탯 계산 테스트 — 감소 수익, 상한, surplus 전환, 활동 효과"""

import pytest

from src.core.stats import (
    ALL_STATS,
    StatName,
    StatTracking,
    StatVector,
    apply_diminishing_returns,
    apply_stat_effects,
    calculate_surplus_conversion,
    cap_current_stat,
    get_starting_stats,
    process_daily_stat_changes,
    round_half_away,
    set_base_stat,
    set_current_stat,
    to_stat_name,
)


def _make_stats(base: float = 15, **current_overrides) -> StatVector:
    """모든 스탯 base = current = base, 일부 current만 덮어쓰기"""
    current = {s: float(base) for s in ALL_STATS}
    for name, value in current_overrides.items():
        current[StatName(name)] = float(value)
    return StatVector(base={s: float(base) for s in ALL_STATS}, current=current)


class TestRounding:
    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (-1.5, -2), (0.4, 0), (-0.4, 0), (7.0, 7), (44.5, 45)],
    )
    def test_round_half_away_from_zero(self, value, expected):
        assert round_half_away(value) == expected


class TestDiminishingReturns:
    def test_halfway_halves_gain(self):
        assert apply_diminishing_returns(2, 75) == pytest.approx(1.0)

    def test_zero_current_full_gain(self):
        assert apply_diminishing_returns(3, 0) == pytest.approx(3.0)

    def test_ceiling_and_above_gives_nothing(self):
        assert apply_diminishing_returns(2, 150) == 0
        assert apply_diminishing_returns(2, 200) == 0

    @pytest.mark.parametrize("gain", [0.5, 2, 10])
    def test_non_increasing_as_current_grows(self, gain):
        currents = [c * 2.5 for c in range(0, 81)]
        gains = [apply_diminishing_returns(gain, c) for c in currents]
        assert all(later <= earlier for earlier, later in zip(gains, gains[1:]))
        assert all(0 <= g <= gain for g in gains)


class TestCapCurrent:
    def test_capped_at_base_plus_30(self):
        assert cap_current_stat(50, 90) == 80

    def test_hard_cap_130(self):
        assert cap_current_stat(100, 140) == 130

    def test_floor_zero(self):
        assert cap_current_stat(10, -5) == 0

    def test_within_range_untouched(self):
        assert cap_current_stat(40, 55.5) == 55.5


class TestSurplusConversion:
    def test_quarter_to_base_half_decays(self):
        conversion = calculate_surplus_conversion(30, 46)
        assert conversion.base_growth == pytest.approx(4)
        assert conversion.current_decay == pytest.approx(8)

    def test_no_surplus(self):
        conversion = calculate_surplus_conversion(40, 40)
        assert conversion.base_growth == 0
        assert conversion.current_decay == 0

    def test_below_base_no_conversion(self):
        conversion = calculate_surplus_conversion(40, 20)
        assert conversion.base_growth == 0
        assert conversion.current_decay == 0

    def test_base_growth_capped_at_100(self):
        conversion = calculate_surplus_conversion(99, 119)
        assert conversion.base_growth == pytest.approx(1)
        assert conversion.current_decay == pytest.approx(10)


class TestSetters:
    def test_set_current_respects_cap(self):
        stats = set_current_stat(_make_stats(20), "fitness", 99)
        assert stats.current[StatName.FITNESS] == 50

    def test_set_base_capped_at_100(self):
        stats = set_base_stat(_make_stats(20), StatName.WIT, 120)
        assert stats.base[StatName.WIT] == 100

    def test_setters_return_new_vector(self):
        original = _make_stats(20)
        set_current_stat(original, "fitness", 30)
        assert original.current[StatName.FITNESS] == 20

    def test_unknown_stat_raises(self):
        with pytest.raises(ValueError):
            to_stat_name("strength")
        with pytest.raises(ValueError):
            set_current_stat(_make_stats(), "strength", 10)

    def test_missing_stat_rejected(self):
        with pytest.raises(ValueError, match="missing"):
            StatVector(base={StatName.FITNESS: 1.0}, current={StatName.FITNESS: 1.0})


class TestApplyStatEffects:
    def test_gain_uses_diminishing_returns(self):
        new_stats, changes = apply_stat_effects(_make_stats(15), {"fitness": 3.0})
        assert changes[StatName.FITNESS] == pytest.approx(2.7)
        assert new_stats.current[StatName.FITNESS] == pytest.approx(17.7)

    def test_penalty_stops_at_base(self):
        stats = _make_stats(15, confidence=17)
        new_stats, changes = apply_stat_effects(stats, {"confidence": -5})
        assert new_stats.current[StatName.CONFIDENCE] == 15
        assert changes[StatName.CONFIDENCE] == pytest.approx(-2)

    def test_penalty_below_base_is_noop(self):
        stats = _make_stats(15, confidence=10)
        new_stats, changes = apply_stat_effects(stats, {"confidence": -3})
        assert new_stats.current[StatName.CONFIDENCE] == 10
        assert changes[StatName.CONFIDENCE] == 0

    def test_zero_effect_skipped(self):
        _, changes = apply_stat_effects(_make_stats(), {"wit": 0})
        assert changes == {}

    def test_input_not_mutated(self):
        stats = _make_stats(15)
        apply_stat_effects(stats, {"fitness": 3.0, "wit": -1})
        assert stats.current[StatName.FITNESS] == 15


class TestDailyStatChanges:
    def test_surplus_converted_and_decayed(self):
        stats = _make_stats(15, fitness=31)
        result = process_daily_stat_changes(stats)

        assert result.new_stats.base[StatName.FITNESS] == pytest.approx(19)
        assert result.new_stats.current[StatName.FITNESS] == pytest.approx(23)
        assert len(result.changes) == 1
        assert result.changes[0].stat == StatName.FITNESS
        assert [c.source for c in result.components[StatName.FITNESS]] == [
            "surplus_to_base",
            "surplus_decay",
        ]

    def test_no_surplus_no_changes(self):
        result = process_daily_stat_changes(_make_stats(15))
        assert result.changes == []
        assert result.components == {}
        assert result.new_stats == _make_stats(15)

    def test_runs_on_every_stat(self):
        stats = _make_stats(10, fitness=20, wit=14)
        result = process_daily_stat_changes(stats)
        assert {c.stat for c in result.changes} == {StatName.FITNESS, StatName.WIT}


class TestArchetypes:
    def test_athlete_template(self):
        stats = get_starting_stats("athlete")
        assert stats.base[StatName.FITNESS] == 25
        assert stats.base[StatName.CONFIDENCE] == 15
        assert stats.base[StatName.KNOWLEDGE] == 5
        assert stats.base == stats.current

    def test_balanced_and_debug(self):
        assert set(get_starting_stats("balanced").base.values()) == {15}
        assert set(get_starting_stats("debug_master").current.values()) == {80}

    def test_unknown_archetype(self):
        with pytest.raises(ValueError):
            get_starting_stats("wizard")


class TestSerialization:
    def test_stat_vector_dict_roundtrip(self):
        stats = _make_stats(12, wit=20.5)
        assert StatVector.from_dict(stats.to_dict()) == stats

    def test_tracking_from_dict_restores_enums(self):
        tracking = StatTracking.from_dict(
            {"worked_today": True, "stats_trained_today": ["fitness", "wit"]}
        )
        assert tracking.worked_today is True
        assert tracking.stats_trained_today == [StatName.FITNESS, StatName.WIT]
        assert tracking.min_energy_today == 100
