"""결과 효과 생성기 테스트"""

import random

import pytest

from src.core.activity.models import ActivityEffectProfile, NegativeEffects
from src.core.outcome.effects import OUTCOME_SCALING, generate_outcome, select_random
from src.core.outcome.models import OutcomeTier
from src.core.stats import StatName


class _FirstPicks:
    """sample()이 항상 앞쪽 원소를 고르는 스텁 RNG"""

    def sample(self, population, k):
        return list(population)[:k]


def _make_profile(**kwargs) -> ActivityEffectProfile:
    defaults = dict(
        main_stats=["fitness"],
        main_stat_gain=2,
        main_money_gain=10,
        secondary_stats=["wit", "poise", "confidence"],
        secondary_stat_gain=0.5,
        negative_effects=NegativeEffects(
            stats=["confidence", "wit"],
            stat_penalty=1,
            energy_cost=10,
            money_cost=5,
            time_cost=15,
        ),
    )
    defaults.update(kwargs)
    return ActivityEffectProfile(**defaults)


class TestBest:
    def test_main_gain_multiplied(self):
        outcome = generate_outcome(OutcomeTier.BEST, _make_profile(), _FirstPicks())
        assert outcome.stat_effects[StatName.FITNESS] == pytest.approx(3.5)
        assert outcome.money_gain == 18  # 17.5 → 18

    def test_two_secondary_stats(self):
        outcome = generate_outcome(OutcomeTier.BEST, _make_profile(), _FirstPicks())
        assert outcome.stat_effects[StatName.WIT] == pytest.approx(0.5)
        assert outcome.stat_effects[StatName.POISE] == pytest.approx(0.5)
        assert StatName.CONFIDENCE not in outcome.stat_effects

    def test_no_costs(self):
        outcome = generate_outcome(OutcomeTier.BEST, _make_profile(), random.Random(1))
        assert outcome.additional_energy_cost == 0
        assert outcome.additional_money_cost == 0
        assert outcome.additional_time_cost == 0
        assert outcome.friendship_multiplier == 1.5


class TestOkay:
    def test_main_only(self):
        outcome = generate_outcome(OutcomeTier.OKAY, _make_profile(), random.Random(1))
        assert outcome.stat_effects == {StatName.FITNESS: 2}
        assert outcome.money_gain == 10
        assert outcome.friendship_multiplier == 1.0
        assert outcome.romance_multiplier == 1.0


class TestMixed:
    def test_half_gain_one_penalty_one_cost(self):
        outcome = generate_outcome(OutcomeTier.MIXED, _make_profile(), _FirstPicks())
        assert outcome.stat_effects[StatName.FITNESS] == pytest.approx(1.0)
        assert outcome.stat_effects[StatName.CONFIDENCE] == pytest.approx(-1.0)
        assert StatName.WIT not in outcome.stat_effects
        assert outcome.money_gain == 5
        # 비용 후보는 이름순: energy, money, time
        assert outcome.additional_energy_cost == -10
        assert outcome.additional_money_cost == 0
        assert outcome.additional_time_cost == 0
        assert outcome.friendship_multiplier == pytest.approx(0.3)

    def test_exactly_one_cost_drawn(self):
        for seed in range(20):
            outcome = generate_outcome(
                OutcomeTier.MIXED, _make_profile(), random.Random(seed)
            )
            drawn = [
                outcome.additional_energy_cost,
                outcome.additional_money_cost,
                outcome.additional_time_cost,
            ]
            assert sum(1 for c in drawn if c) == 1

    def test_no_negative_profile(self):
        outcome = generate_outcome(
            OutcomeTier.MIXED, _make_profile(negative_effects=None), random.Random(0)
        )
        assert outcome.stat_effects == {StatName.FITNESS: 1.0}
        assert outcome.additional_energy_cost == 0


class TestCatastrophic:
    def test_no_main_gain_and_severe_penalties(self):
        outcome = generate_outcome(
            OutcomeTier.CATASTROPHIC, _make_profile(), random.Random(5)
        )
        assert StatName.FITNESS not in outcome.stat_effects
        assert outcome.money_gain == 0
        assert outcome.stat_effects[StatName.CONFIDENCE] == pytest.approx(-1.5)
        assert outcome.stat_effects[StatName.WIT] == pytest.approx(-1.5)

    def test_all_costs_scaled(self):
        outcome = generate_outcome(
            OutcomeTier.CATASTROPHIC, _make_profile(), random.Random(5)
        )
        assert outcome.additional_energy_cost == -15
        assert outcome.additional_money_cost == -8  # 7.5 → 8
        assert outcome.additional_time_cost == 23  # 22.5 → 23

    def test_relationship_multiplier_negative(self):
        outcome = generate_outcome(OutcomeTier.CATASTROPHIC, _make_profile())
        assert outcome.friendship_multiplier == -0.5
        assert outcome.romance_multiplier == -0.5

    def test_penalty_pool_smaller_than_count(self):
        profile = _make_profile(negative_effects=NegativeEffects(stats=["poise"]))
        outcome = generate_outcome(OutcomeTier.CATASTROPHIC, profile, random.Random(0))
        assert outcome.stat_effects == {StatName.POISE: -1.5}


class TestDeterminism:
    def test_same_seed_same_outcome(self):
        profile = _make_profile()
        for tier in OutcomeTier:
            a = generate_outcome(tier, profile, random.Random(42))
            b = generate_outcome(tier, profile, random.Random(42))
            assert a == b

    def test_scaling_table_covers_all_tiers(self):
        assert set(OUTCOME_SCALING) == set(OutcomeTier)


class TestSelectRandom:
    def test_without_replacement(self):
        picks = select_random(["a", "b", "c"], 3, random.Random(0))
        assert sorted(picks) == ["a", "b", "c"]

    def test_small_pool(self):
        assert len(select_random(["a"], 2, random.Random(0))) == 1

    def test_empty_pool(self):
        assert select_random([], 2, random.Random(0)) == []
