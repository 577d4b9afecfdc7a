"""
Rule-focused unit tests for the plan model.

Each test pins one lookup or formula: goal classification, pattern tiling,
base intensity/volume, adherence modulation and set templates.
Expected values are hand-computed from the constants in core/config.py.
"""

import pytest

from week_scheduler.core.adherence import adherence_signal, lookback_window, modulate
from week_scheduler.core.classifier import classify_goal
from week_scheduler.core.config import BASE_PATTERNS, round_half_up
from week_scheduler.core.intensity import base_intensity, base_volume
from week_scheduler.core.models import ARCHETYPES, EXPERIENCE_LEVELS, WorkoutRecord
from week_scheduler.core.patterns import clamp_day_count, pattern_for
from week_scheduler.core.templates import known_day_types, templates_for
from week_scheduler.core.templates.base import MovementTemplate


def _row(date: str, volume: int, user_id: str = "u1") -> WorkoutRecord:
    return WorkoutRecord(user_id=user_id, workout_date=date, type="Push", target_volume=volume)


# ---------------------------------------------------------------------------
# Goal classifier
# ---------------------------------------------------------------------------

class TestClassifyGoal:

    @pytest.mark.parametrize("goal,expected", [
        ("strength", "strength"),
        ("Get much stronger", "strength"),
        ("STRENGTH and size", "strength"),
        ("half marathon endurance", "endurance"),
        ("body recomp", "recomposition"),
        ("recomposition", "recomposition"),
        ("hypertrophy", "hypertrophy"),
        ("build muscle", "hypertrophy"),
        ("increase bench press by 25 lbs", "general"),
        ("unknown", "general"),
        ("", "general"),
        (None, "general"),
    ])
    def test_classification(self, goal, expected):
        assert classify_goal(goal) == expected

    def test_first_keyword_group_wins(self):
        """'strength' is checked before 'muscle'."""
        assert classify_goal("muscle strength") == "strength"
        # endurance precedes hypertrophy
        assert classify_goal("muscle endurance") == "endurance"


# ---------------------------------------------------------------------------
# Pattern library
# ---------------------------------------------------------------------------

class TestPatterns:

    def test_strength_canonical_week(self):
        assert pattern_for("strength", 7) == ["Push", "Pull", "Legs", "Rest", "Push", "Rest", "Legs"]

    def test_short_week_truncates(self):
        assert pattern_for("endurance", 3) == ["Conditioning", "Upper", "Conditioning"]

    def test_long_week_wraps(self):
        assert pattern_for("hypertrophy", 10) == [
            "Push", "Pull", "Legs", "Push", "Pull", "Legs", "Rest",
            "Push", "Pull", "Legs",
        ]

    @pytest.mark.parametrize("archetype", ARCHETYPES)
    def test_length_and_tiling_for_all_day_counts(self, archetype):
        base = BASE_PATTERNS[archetype]
        for n in range(1, 15):
            pattern = pattern_for(archetype, n)
            assert len(pattern) == n
            assert pattern == [base[i % 7] for i in range(n)]

    @pytest.mark.parametrize("bad", [0, 15, -3])
    def test_out_of_range_rejected(self, bad):
        with pytest.raises(ValueError):
            pattern_for("general", bad)

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-5, 1), (1, 1), (7, 7), (14, 14), (30, 14)])
    def test_clamp_day_count(self, requested, expected):
        assert clamp_day_count(requested) == expected


# ---------------------------------------------------------------------------
# Intensity / volume model
# ---------------------------------------------------------------------------

class TestIntensityVolume:

    @pytest.mark.parametrize("archetype,expected", [
        ("strength", 0.80),
        ("hypertrophy", 0.65),
        ("endurance", 0.60),
        ("recomposition", 0.70),
        ("general", 0.70),
    ])
    def test_base_intensity_intermediate(self, archetype, expected):
        assert base_intensity(archetype, "intermediate") == expected

    def test_experience_shifts_intensity(self):
        assert base_intensity("strength", "beginner") == 0.75
        assert base_intensity("strength", "advanced") == 0.85

    def test_base_volume_day_count_nudges(self):
        # strength base 10
        assert base_volume("strength", "intermediate", 4) == 10
        assert base_volume("strength", "intermediate", 5) == 11
        assert base_volume("strength", "intermediate", 7) == 11
        assert base_volume("strength", "intermediate", 3) == 9

    def test_experience_shifts_volume(self):
        # hypertrophy 14, 4 days (no nudge)
        assert base_volume("hypertrophy", "beginner", 4) == 12
        assert base_volume("hypertrophy", "advanced", 4) == 16

    def test_volume_floor(self):
        # endurance 8 - 2 (beginner) - 1 (3 days) = 5 -> floored to 6
        assert base_volume("endurance", "beginner", 3) == 6

    def test_volume_never_below_floor(self):
        for archetype in ARCHETYPES:
            for experience in EXPERIENCE_LEVELS:
                for n in range(1, 15):
                    assert base_volume(archetype, experience, n) >= 6


# ---------------------------------------------------------------------------
# Adherence modulator
# ---------------------------------------------------------------------------

class TestAdherence:

    def test_lookback_window_is_previous_seven_days(self):
        assert lookback_window("2026-03-02") == ("2026-02-23", "2026-03-01")

    def test_signal_without_rows(self):
        signal = adherence_signal([])
        assert signal.session_count == 0
        assert signal.average_volume == 0.0

    def test_signal_mean_volume(self):
        rows = [_row("2026-02-23", 10), _row("2026-02-24", 12), _row("2026-02-25", 8)]
        signal = adherence_signal(rows)
        assert signal.session_count == 3
        assert signal.average_volume == pytest.approx(10.0)

    def test_high_adherence(self):
        mod = modulate(5, 0.0, 10)
        assert mod.volume_factor == 1.1
        assert mod.intensity_adjustment == 0.02
        assert mod.blended_volume == 11  # 10 * 1.1

    def test_low_adherence(self):
        mod = modulate(2, 0.0, 10)
        assert mod.volume_factor == 0.9
        assert mod.intensity_adjustment == -0.02
        assert mod.blended_volume == 9  # 10 * 0.9

    def test_neutral_adherence(self):
        for count in (3, 4):
            mod = modulate(count, 0.0, 10)
            assert mod.volume_factor == 1.0
            assert mod.intensity_adjustment == 0.0
            assert mod.blended_volume == 10

    def test_history_blend(self):
        # (11 * 0.7 + 20 * 0.3) * 1.0 = 7.7 + 6.0 = 13.7 -> 14
        assert modulate(4, 20.0, 11).blended_volume == 14
        # (11 * 0.7 + 10 * 0.3) * 1.1 = 10.7 * 1.1 = 11.77 -> 12
        assert modulate(6, 10.0, 11).blended_volume == 12

    def test_rounds_half_up(self):
        # no history: base * factor, no blend
        assert modulate(3, 0.0, 15).blended_volume == 15
        assert round_half_up(10.5) == 11
        assert round_half_up(2.5) == 3  # round() gives 2
        assert round_half_up(9.49) == 9

    def test_heavy_history_beats_light_history(self):
        for base in range(6, 20):
            for avg in (0.0, 6.0, 12.0, 20.0):
                heavy = modulate(6, avg, base).blended_volume
                light = modulate(1, avg, base).blended_volume
                assert heavy > light


# ---------------------------------------------------------------------------
# Set templates
# ---------------------------------------------------------------------------

def _by_movement(templates):
    return {t.movement: t for t in templates}


class TestSetTemplates:

    def test_rest_and_unknown_are_empty(self):
        assert templates_for("Rest", "advanced") == []
        assert templates_for("Yoga", "intermediate") == []

    def test_known_day_types(self):
        assert known_day_types() == ["Push", "Pull", "Legs", "Upper", "Lower", "Conditioning"]

    @pytest.mark.parametrize("day_type", ["Push", "Pull", "Legs", "Upper", "Lower", "Conditioning"])
    def test_every_day_has_two_or_three_movements(self, day_type):
        for experience in EXPERIENCE_LEVELS:
            assert 2 <= len(templates_for(day_type, experience)) <= 3

    def test_push_intermediate_baseline(self):
        push = templates_for("Push", "intermediate")
        assert [t.movement for t in push] == ["Barbell Bench Press", "Overhead Press", "Triceps Dip"]
        bench = push[0]
        assert (bench.target_sets, bench.target_reps, bench.target_rpe) == (4, 6, 8.0)

    def test_bench_press_gets_extra_set_for_advanced_only(self):
        advanced = _by_movement(templates_for("Push", "advanced"))
        beginner = _by_movement(templates_for("Push", "beginner"))
        assert advanced["Barbell Bench Press"].target_sets == 5
        assert beginner["Barbell Bench Press"].target_sets == 4
        # Overhead press has no exception
        assert advanced["Overhead Press"].target_sets == 3
        assert beginner["Overhead Press"].target_sets == 3

    def test_deadlift_loses_a_set_for_beginner_only(self):
        beginner = _by_movement(templates_for("Pull", "beginner"))
        advanced = _by_movement(templates_for("Pull", "advanced"))
        assert beginner["Deadlift"].target_sets == 2
        assert advanced["Deadlift"].target_sets == 3
        assert advanced["Pull-Up"].target_sets == 4
        assert beginner["Barbell Row"].target_sets == 3

    def test_legs_exceptions(self):
        advanced = _by_movement(templates_for("Legs", "advanced"))
        beginner = _by_movement(templates_for("Legs", "beginner"))
        assert advanced["Back Squat"].target_sets == 5
        assert beginner["Romanian Deadlift"].target_sets == 2
        assert advanced["Walking Lunge"].target_sets == beginner["Walking Lunge"].target_sets == 3

    def test_sets_never_below_one(self):
        tpl = MovementTemplate(movement="Plank", sets=1, reps=1, rpe=6.0, beginner_sets_delta=-3)
        assert tpl.for_experience("beginner").target_sets == 1
