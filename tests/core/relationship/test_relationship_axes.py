"""관계 3축 엔진 테스트 — 상태 판정, 변동, 욕망 상한, 감정"""

import pytest

from src.core.outcome.models import OutcomeTier
from src.core.relationship.calculations import (
    apply_relationship_delta,
    calculate_desire_cap,
    clamp_axis,
    evaluate_relationship_change,
    get_repair_difficulty,
    scale_relationship_effects,
)
from src.core.relationship.models import (
    EmotionalState,
    Relationship,
    RelationshipAxes,
    RelationshipState,
    SexualPreference,
)
from src.core.relationship.states import (
    calculate_relationship_state,
    get_contextual_emotional_state,
    get_emotional_state,
    get_relationship_difficulty_modifier,
    get_state_description,
    get_state_display_name,
    update_unlocked_states,
)


def _make_relationship(**kwargs) -> Relationship:
    defaults = dict(relationship_id="rel_1", player_id="p1", npc_id="npc_1")
    defaults.update(kwargs)
    return Relationship(**defaults)


class TestStateCalculation:
    @pytest.mark.parametrize(
        "axes,expected",
        [
            ((70, 70, 60), RelationshipState.PARTNER),
            ((30, 50, 70), RelationshipState.LOVER),
            ((50, 70, 10), RelationshipState.CLOSE_FRIEND),
            ((25, 35, 0), RelationshipState.FRIEND),
            ((0, 10, 45), RelationshipState.CRUSH),
            ((-60, -60, 0), RelationshipState.ENEMY),
            ((-35, 0, 0), RelationshipState.RIVAL),
            ((30, -25, 0), RelationshipState.COMPLICATED),
            ((15, 0, 0), RelationshipState.ACQUAINTANCE),
            ((0, 0, 0), RelationshipState.STRANGER),
            ((15, -10, 0), RelationshipState.STRANGER),
            ((59, 80, 60), RelationshipState.LOVER),
            ((60, 60, 50), RelationshipState.PARTNER),
            ((-51, -51, 0), RelationshipState.ENEMY),
            ((-50, -50, 0), RelationshipState.RIVAL),
            ((-30, -30, 0), RelationshipState.STRANGER),
        ],
    )
    def test_priority_table(self, axes, expected):
        assert calculate_relationship_state(*axes) == expected

    def test_ten_states(self):
        assert len(RelationshipState) == 10

    def test_difficulty_modifier(self):
        assert get_relationship_difficulty_modifier(RelationshipAxes(25, 35, 0)) == -8
        assert get_relationship_difficulty_modifier(RelationshipAxes()) == 0
        assert get_relationship_difficulty_modifier(RelationshipAxes(-60, -60, 0)) == 30


class TestApplyDelta:
    def test_clamped_to_100(self):
        axes = apply_relationship_delta(RelationshipAxes(trust=95), {"trust": 10})
        assert axes.trust == 100

    def test_clamped_to_minus_100(self):
        axes = apply_relationship_delta(RelationshipAxes(affection=-95), {"affection": -10})
        assert axes.affection == -100

    def test_desire_cap_bounds_upward_only(self):
        axes = apply_relationship_delta(RelationshipAxes(desire=20), {"desire": 15}, 25)
        assert axes.desire == 25
        axes = apply_relationship_delta(RelationshipAxes(desire=-10), {"desire": -5}, 0)
        assert axes.desire == -15

    def test_missing_axes_unchanged(self):
        axes = apply_relationship_delta(RelationshipAxes(1, 2, 3), {"affection": 5})
        assert axes == RelationshipAxes(1, 7, 3)

    def test_unknown_axis_raises(self):
        with pytest.raises(ValueError, match="friendship"):
            apply_relationship_delta(RelationshipAxes(), {"friendship": 5})

    def test_clamp_axis(self):
        assert clamp_axis(150) == 100
        assert clamp_axis(-101) == -100
        assert clamp_axis(42) == 42

    @pytest.mark.parametrize(
        "value,expected",
        [(-0.7, -1), (-1.6, -2), (0.5, 1), (2.4, 2), (-0.4, 0), (99.6, 100)],
    )
    def test_clamp_axis_rounds_fractions(self, value, expected):
        assert clamp_axis(value) == expected

    def test_fractional_delta_not_dropped(self):
        axes = apply_relationship_delta(RelationshipAxes(trust=10), {"trust": -0.7})
        assert axes.trust == 9

    @pytest.mark.parametrize("start", [-100, -40, 0, 55, 100])
    @pytest.mark.parametrize("delta", [-1000, -201, 201, 1000])
    def test_huge_deltas_stay_in_range(self, start, delta):
        axes = apply_relationship_delta(
            RelationshipAxes(start, start, start),
            {"trust": delta, "affection": delta, "desire": delta},
        )
        expected = 100 if delta > 0 else -100
        assert axes == RelationshipAxes(expected, expected, expected)

    @pytest.mark.parametrize("cap", [0, 25, 100])
    @pytest.mark.parametrize("delta", [-500, 500])
    def test_huge_desire_delta_respects_cap(self, cap, delta):
        axes = apply_relationship_delta(RelationshipAxes(desire=cap), {"desire": delta}, cap)
        assert -100 <= axes.desire <= cap
        assert axes.desire == (cap if delta > 0 else -100)


class TestDesireCap:
    @pytest.mark.parametrize(
        "preference,gender,expected",
        [
            (SexualPreference.EVERYONE, "male", 100),
            (SexualPreference.NO_ONE, "female", 0),
            (SexualPreference.WOMEN, "female", 100),
            (SexualPreference.WOMEN, "male", 25),
            ("men", "male", 100),
            ("men", "other", 25),
        ],
    )
    def test_preference_and_gender(self, preference, gender, expected):
        assert calculate_desire_cap(preference, gender) == expected


class TestScaling:
    @pytest.mark.parametrize(
        "tier,expected",
        [
            (OutcomeTier.BEST, 15),
            (OutcomeTier.OKAY, 10),
            (OutcomeTier.MIXED, 3),
            (OutcomeTier.CATASTROPHIC, -5),
        ],
    )
    def test_tier_multiplier(self, tier, expected):
        assert scale_relationship_effects({"affection": 10}, tier) == {"affection": expected}

    def test_rounding_half_away(self):
        assert scale_relationship_effects({"desire": 15}, "mixed") == {"desire": 5}
        assert scale_relationship_effects({"trust": 5}, "catastrophic") == {"trust": -3}


class TestRepairDifficulty:
    def test_deeper_is_harder(self):
        assert get_repair_difficulty(-50) == 100
        assert get_repair_difficulty(-25) == 75

    def test_non_negative_is_base(self):
        assert get_repair_difficulty(10) == 50
        assert get_repair_difficulty(0, base=40) == 40


class TestEvaluateChange:
    def test_acquaintance_to_friend(self):
        relationship = _make_relationship(
            trust=15,
            affection=25,
            unlocked_states=[RelationshipState.STRANGER, RelationshipState.ACQUAINTANCE],
        )
        change = evaluate_relationship_change(
            relationship, {"affection": 10, "trust": 10}, OutcomeTier.OKAY
        )
        assert change.previous_state == RelationshipState.ACQUAINTANCE
        assert change.new_axes == RelationshipAxes(trust=25, affection=35, desire=0)
        assert change.new_state == RelationshipState.FRIEND
        assert change.state_changed
        assert change.unlocked_states == [
            RelationshipState.STRANGER,
            RelationshipState.ACQUAINTANCE,
            RelationshipState.FRIEND,
        ]

    def test_catastrophic_reverses_effect(self):
        relationship = _make_relationship(affection=20)
        change = evaluate_relationship_change(
            relationship, {"affection": 10}, OutcomeTier.CATASTROPHIC
        )
        assert change.deltas == {"affection": -5}
        assert change.new_axes.affection == 15

    def test_desire_cap_applied(self):
        relationship = _make_relationship(desire=20, desire_cap=25)
        change = evaluate_relationship_change(relationship, {"desire": 15}, OutcomeTier.BEST)
        assert change.new_axes.desire == 25

    def test_input_not_mutated(self):
        relationship = _make_relationship(trust=10)
        evaluate_relationship_change(relationship, {"trust": 10}, OutcomeTier.BEST)
        assert relationship.trust == 10
        assert relationship.unlocked_states == [RelationshipState.STRANGER]

    def test_state_recomputed_not_trusted(self):
        """캐시된 current_state가 틀려도 축 값에서 재계산"""
        relationship = _make_relationship(current_state=RelationshipState.ENEMY)
        change = evaluate_relationship_change(relationship, {"trust": 1}, OutcomeTier.OKAY)
        assert change.previous_state == RelationshipState.STRANGER


class TestUnlockedStates:
    def test_appends_new_state(self):
        unlocked = [RelationshipState.STRANGER]
        result = update_unlocked_states(unlocked, RelationshipState.FRIEND)
        assert result == [RelationshipState.STRANGER, RelationshipState.FRIEND]
        assert unlocked == [RelationshipState.STRANGER]

    def test_no_duplicates(self):
        unlocked = [RelationshipState.STRANGER, RelationshipState.FRIEND]
        assert update_unlocked_states(unlocked, RelationshipState.FRIEND) == unlocked


class TestEmotionAndText:
    @pytest.mark.parametrize(
        "deltas,expected",
        [
            ({"trust": -20}, EmotionalState.ANGRY),
            ({"affection": -3}, EmotionalState.SAD),
            ({"desire": 5}, EmotionalState.FLIRTY),
            ({"affection": 5}, EmotionalState.HAPPY),
        ],
    )
    def test_contextual_emotion(self, deltas, expected):
        assert get_contextual_emotional_state(deltas, RelationshipState.STRANGER) == expected

    def test_falls_back_to_state_emotion(self):
        assert (
            get_contextual_emotional_state({}, RelationshipState.RIVAL)
            == EmotionalState.ANGRY
        )
        assert get_emotional_state(RelationshipState.CRUSH) == EmotionalState.FLIRTY

    def test_display_name_and_description(self):
        assert get_state_display_name(RelationshipState.CLOSE_FRIEND) == "Close Friend"
        assert get_state_description(RelationshipState.STRANGER) == "Just met, neutral feelings"
