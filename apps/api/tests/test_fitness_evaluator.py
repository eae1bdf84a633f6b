"""
Unit tests for the Fitness Evaluator

Covers each scoring term in isolation, the score bands, clamping, the
all-missing-data fallback, and randomized sweeps for bounds and
determinism.
"""

import random
import pytest
from datetime import date

from models import MedicalCondition, Profile
from services.fitness_engine.constants import (
    ActivityLevel,
    EvaluatedLevel,
    ExperienceLevel,
    IntensityPreference,
    LEVEL_BANDS,
)
from services.fitness_engine.evaluator import (
    activity_points,
    age_points,
    bmi_points,
    build_recommendations,
    evaluate_fitness,
    experience_points,
    intensity_points,
    level_for_score,
    max_weekly_workouts_for_score,
    max_workout_duration_for_score,
    recommended_intensity_for_score,
)

LEVEL_ORDER = [
    EvaluatedLevel.BEGINNER,
    EvaluatedLevel.NOVICE,
    EvaluatedLevel.INTERMEDIATE,
    EvaluatedLevel.ADVANCED,
    EvaluatedLevel.EXPERT,
]


class TestScoringTerms:
    """Each term of the additive score."""

    @pytest.mark.parametrize("age,expected", [
        (13, 25), (24, 25), (25, 20), (34, 20), (35, 15),
        (44, 15), (45, 10), (54, 10), (55, 5), (90, 5), (None, 0),
    ])
    def test_age_points(self, age, expected):
        assert age_points(age) == expected

    @pytest.mark.parametrize("bmi,expected", [
        (18.5, 20), (22.0, 20), (24.9, 20),
        (25.0, 15), (29.9, 15),
        (18.4, 10), (16.0, 10),
        (30.0, 5), (41.2, 5),
        (None, 0),
    ])
    def test_bmi_points(self, bmi, expected):
        assert bmi_points(bmi) == expected

    @pytest.mark.parametrize("level,expected", [
        ("sedentary", 0),
        ("lightly_active", 8.75),
        ("moderately_active", 17.5),
        ("very_active", 25),      # 26.25 capped
        ("extremely_active", 25), # 35 capped
        (None, 0),
        ("couch", 0),
    ])
    def test_activity_points(self, level, expected):
        assert activity_points(level) == pytest.approx(expected)

    def test_experience_points(self):
        assert experience_points(ExperienceLevel.BEGINNER.value) == 5
        assert experience_points(ExperienceLevel.INTERMEDIATE.value) == 15
        assert experience_points(ExperienceLevel.EXPERT.value) == 25
        assert experience_points(None) == 0

    def test_intensity_points(self):
        assert intensity_points(IntensityPreference.LOW.value) == 3
        assert intensity_points(IntensityPreference.EXTREME.value) == 12
        assert intensity_points(None) == 0


class TestScoreBands:
    """Level and limits derived from the final score."""

    @pytest.mark.parametrize("score,level,weekly,duration,intensity", [
        (100, EvaluatedLevel.EXPERT, 7, 90, "High to Extreme"),
        (80, EvaluatedLevel.EXPERT, 7, 90, "High to Extreme"),
        (79, EvaluatedLevel.ADVANCED, 5, 75, "Moderate to High"),
        (60, EvaluatedLevel.ADVANCED, 5, 75, "Moderate to High"),
        (59, EvaluatedLevel.INTERMEDIATE, 4, 60, "Low to Moderate"),
        (40, EvaluatedLevel.INTERMEDIATE, 4, 60, "Low to Moderate"),
        (39, EvaluatedLevel.NOVICE, 3, 45, "Low"),
        (20, EvaluatedLevel.NOVICE, 3, 45, "Low"),
        (19, EvaluatedLevel.BEGINNER, 2, 30, "Low"),
        (0, EvaluatedLevel.BEGINNER, 2, 30, "Low"),
    ])
    def test_band_edges(self, score, level, weekly, duration, intensity):
        assert level_for_score(score) == level
        assert max_weekly_workouts_for_score(score) == weekly
        assert max_workout_duration_for_score(score) == duration
        assert recommended_intensity_for_score(score) == intensity

    def test_level_is_monotonic_in_score(self):
        """Higher score never maps to a lower level or lower limits."""
        previous = (-1, -1, -1)
        for score in range(0, 101):
            current = (
                LEVEL_ORDER.index(level_for_score(score)),
                max_weekly_workouts_for_score(score),
                max_workout_duration_for_score(score),
            )
            assert all(c >= p for c, p in zip(current, previous)), f"regression at score {score}"
            previous = current

    def test_level_bands_cover_zero(self):
        assert LEVEL_BANDS[-1][0] == 0

    def test_recommendation_band_edges(self):
        assert build_recommendations(29, False, False)[0].startswith("Start with low-intensity")
        assert build_recommendations(30, False, False)[0].startswith("Mix cardiovascular")
        assert build_recommendations(59, False, False)[0].startswith("Mix cardiovascular")
        assert build_recommendations(60, False, False)[0].startswith("Challenge yourself")

    def test_recommendation_notes(self):
        recs = build_recommendations(50, True, True)
        assert len(recs) == 5
        assert "Consult with healthcare provider before starting new programs" in recs
        assert "Pay attention to previous injury areas and modify exercises accordingly" in recs


class TestEvaluateFitness:
    """End-to-end evaluation of profiles."""

    def test_moderately_active_adult(self):
        """29y, 180cm/75kg, moderately active: 20 + 20 + 17.5 -> 58."""
        profile = Profile(age=29, height_cm=180, weight_kg=75, activity_level="moderately_active")
        result = evaluate_fitness(profile)

        assert result.bmi == pytest.approx(23.1)
        assert result.components["age"] == 20
        assert result.components["bmi"] == 20
        assert result.components["activity"] == pytest.approx(17.5)
        assert result.score == 58
        assert result.level == EvaluatedLevel.INTERMEDIATE
        assert result.max_weekly_workouts == 4
        assert result.max_workout_duration_minutes == 60
        assert result.recommended_intensity == "Low to Moderate"

    def test_empty_profile_scores_zero(self):
        result = evaluate_fitness(Profile())
        assert result.score == 0
        assert result.level == EvaluatedLevel.BEGINNER
        assert result.max_weekly_workouts == 2
        assert result.bmi is None
        assert len(result.recommendations) == 3

    def test_missing_profile_treated_as_empty(self):
        assert evaluate_fitness(None) == evaluate_fitness(Profile())

    def test_score_clamped_at_100(self):
        profile = Profile(
            age=22,
            height_cm=175,
            weight_kg=68,
            activity_level=ActivityLevel.EXTREMELY_ACTIVE.value,
            exercise_experience=ExperienceLevel.EXPERT.value,
            preferred_intensity=IntensityPreference.EXTREME.value,
        )
        result = evaluate_fitness(profile)
        assert sum(result.components.values()) > 100
        assert result.score == 100
        assert result.level == EvaluatedLevel.EXPERT
        assert result.recommended_intensity == "High to Extreme"

    def test_penalties_clamped_at_zero(self):
        profile = Profile(
            age=60,
            activity_level="sedentary",
            exercise_experience="beginner",
            preferred_intensity="low",
            medical_conditions=[MedicalCondition(condition=c) for c in ("asthma", "hypertension", "diabetes")],
            previous_injuries=["knee", "shoulder"],
        )
        result = evaluate_fitness(profile)
        assert result.components["medical_penalty"] == -15
        assert result.components["injury_penalty"] == -6
        assert result.score == 0
        assert result.recommendations[-2:] == [
            "Consult with healthcare provider before starting new programs",
            "Pay attention to previous injury areas and modify exercises accordingly",
        ]

    def test_age_derived_from_date_of_birth(self):
        profile = Profile(date_of_birth=date(2000, 6, 1))
        result = evaluate_fitness(profile, today=date(2026, 6, 1))
        assert result.components["age"] == 20

    def test_fractional_total_rounds_half_up(self):
        """Lightly active alone is 8.75 points."""
        assert evaluate_fitness(Profile(activity_level="lightly_active")).score == 9


def _random_profile(rng: random.Random) -> Profile:
    def maybe(values):
        return rng.choice(list(values) + [None])

    height = rng.choice([None, rng.uniform(140, 210)])
    weight = rng.choice([None, rng.uniform(40, 160)])
    return Profile(
        age=rng.choice([None, rng.randint(13, 120)]),
        height_cm=height,
        weight_kg=weight,
        activity_level=maybe(a.value for a in ActivityLevel),
        exercise_experience=maybe(e.value for e in ExperienceLevel),
        preferred_intensity=maybe(i.value for i in IntensityPreference),
        medical_conditions=[MedicalCondition(condition="c")] * rng.randint(0, 4),
        previous_injuries=["injury"] * rng.randint(0, 4),
    )


class TestEvaluatorProperties:
    """Randomized sweeps over the input space."""

    @pytest.mark.parametrize("seed", range(5))
    def test_score_always_in_bounds(self, seed):
        rng = random.Random(seed)
        for _ in range(200):
            result = evaluate_fitness(_random_profile(rng))
            assert 0 <= result.score <= 100
            assert isinstance(result.score, int)

    @pytest.mark.parametrize("seed", range(3))
    def test_deterministic(self, seed):
        rng = random.Random(1000 + seed)
        for _ in range(50):
            profile = _random_profile(rng)
            assert evaluate_fitness(profile, today=date(2026, 1, 1)) == evaluate_fitness(profile, today=date(2026, 1, 1))

    def test_level_matches_score_band(self):
        rng = random.Random(42)
        for _ in range(200):
            result = evaluate_fitness(_random_profile(rng))
            assert result.level == level_for_score(result.score)
            assert result.max_weekly_workouts == max_weekly_workouts_for_score(result.score)
