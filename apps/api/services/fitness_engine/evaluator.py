"""
Fitness Evaluator

Converts a user's self-reported physical and activity data into a bounded
fitness score (0-100), then derives a level and workout limits from the
score bands in constants.py.

    score = age + bmi + activity + experience + intensity
            - 5 x medical conditions - 3 x previous injuries

Missing inputs contribute nothing to the score; they never raise.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from models import Profile
from services.fitness_engine.constants import (
    ACTIVITY_BASELINE_MULTIPLIER,
    ACTIVITY_MULTIPLIERS,
    ACTIVITY_POINTS_CAP,
    ACTIVITY_POINTS_PER_MULTIPLIER,
    AGE_POINT_BANDS,
    AGE_POINTS_FLOOR,
    BMI_NORMAL_RANGE,
    BMI_OVERWEIGHT_RANGE,
    BMI_POINTS,
    BMI_UNDERWEIGHT_LIMIT,
    EXPERIENCE_ORDINALS,
    EXPERIENCE_POINTS_PER_LEVEL,
    INJURY_RECOMMENDATION,
    INTENSITY_BANDS,
    INTENSITY_ORDINALS,
    INTENSITY_POINTS_PER_LEVEL,
    LEVEL_BANDS,
    MAX_DURATION_BANDS,
    MAX_WEEKLY_WORKOUT_BANDS,
    MEDICAL_CONDITION_PENALTY,
    MEDICAL_CONDITION_RECOMMENDATION,
    PREVIOUS_INJURY_PENALTY,
    RECOMMENDATION_BANDS,
    SCORE_MAX,
    SCORE_MIN,
    ActivityLevel,
    EvaluatedLevel,
    ExperienceLevel,
    IntensityPreference,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FitnessEvaluation:
    """Result of a fitness evaluation."""
    score: int                               # 0-100
    level: EvaluatedLevel
    max_weekly_workouts: int
    max_workout_duration_minutes: int
    recommended_intensity: str
    recommendations: List[str]
    bmi: Optional[float] = None
    components: Dict[str, float] = field(default_factory=dict)  # per-term points


def _band_value(score: int, bands: Sequence[Tuple[int, T]]) -> T:
    """First value whose lower bound the score reaches (bands are highest first)."""
    for lower_bound, value in bands:
        if score >= lower_bound:
            return value
    return bands[-1][1]


def _coerce(enum_cls, raw):
    if raw is None:
        return None
    try:
        return enum_cls(raw)
    except ValueError:
        return None


def age_points(age: Optional[int]) -> int:
    if age is None:
        return 0
    for upper_bound, points in AGE_POINT_BANDS:
        if age < upper_bound:
            return points
    return AGE_POINTS_FLOOR


def bmi_points(bmi: Optional[float]) -> int:
    if bmi is None:
        return 0
    low, high = BMI_NORMAL_RANGE
    if low <= bmi <= high:
        return BMI_POINTS["normal"]
    low, high = BMI_OVERWEIGHT_RANGE
    if low <= bmi <= high:
        return BMI_POINTS["overweight"]
    if bmi < BMI_UNDERWEIGHT_LIMIT:
        return BMI_POINTS["underweight"]
    return BMI_POINTS["other"]


def activity_points(activity_level: Optional[str]) -> float:
    level = _coerce(ActivityLevel, activity_level)
    multiplier = ACTIVITY_MULTIPLIERS.get(level, ACTIVITY_BASELINE_MULTIPLIER)
    # Float noise: (1.55 - 1.2) * 50 is 17.500000000000004
    points = round((multiplier - ACTIVITY_BASELINE_MULTIPLIER) * ACTIVITY_POINTS_PER_MULTIPLIER, 4)
    return min(ACTIVITY_POINTS_CAP, points)


def experience_points(experience: Optional[str]) -> int:
    level = _coerce(ExperienceLevel, experience)
    return EXPERIENCE_ORDINALS.get(level, 0) * EXPERIENCE_POINTS_PER_LEVEL


def intensity_points(intensity: Optional[str]) -> int:
    preference = _coerce(IntensityPreference, intensity)
    return INTENSITY_ORDINALS.get(preference, 0) * INTENSITY_POINTS_PER_LEVEL


def level_for_score(score: int) -> EvaluatedLevel:
    return _band_value(score, LEVEL_BANDS)


def max_weekly_workouts_for_score(score: int) -> int:
    return _band_value(score, MAX_WEEKLY_WORKOUT_BANDS)


def max_workout_duration_for_score(score: int) -> int:
    return _band_value(score, MAX_DURATION_BANDS)


def recommended_intensity_for_score(score: int) -> str:
    return _band_value(score, INTENSITY_BANDS)


def build_recommendations(score: int, has_conditions: bool, has_injuries: bool) -> List[str]:
    recommendations = list(_band_value(score, RECOMMENDATION_BANDS))
    if has_conditions:
        recommendations.append(MEDICAL_CONDITION_RECOMMENDATION)
    if has_injuries:
        recommendations.append(INJURY_RECOMMENDATION)
    return recommendations


def _clamp_score(raw: float) -> int:
    # Half-up, so 57.5 -> 58 regardless of float representation
    rounded = int(Decimal(str(round(raw, 4))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(SCORE_MIN, min(SCORE_MAX, rounded))


def evaluate_fitness(profile: Optional[Profile], today: Optional[date] = None) -> FitnessEvaluation:
    """
    Score a profile and derive its level and workout limits.

    Args:
        profile: Profile record, or None (evaluated as a profile with no data)
        today: Reference date for deriving age from date of birth

    Returns:
        FitnessEvaluation; deterministic for identical input.
    """
    if profile is None:
        profile = Profile()

    bmi = profile.bmi
    conditions = len(profile.medical_conditions or [])
    injuries = len(profile.previous_injuries or [])

    components: Dict[str, float] = {
        "age": age_points(profile.resolved_age(today)),
        "bmi": bmi_points(bmi),
        "activity": activity_points(profile.activity_level),
        "experience": experience_points(profile.exercise_experience),
        "intensity": intensity_points(profile.preferred_intensity),
        "medical_penalty": -MEDICAL_CONDITION_PENALTY * conditions,
        "injury_penalty": -PREVIOUS_INJURY_PENALTY * injuries,
    }
    score = _clamp_score(sum(components.values()))

    evaluation = FitnessEvaluation(
        score=score,
        level=level_for_score(score),
        max_weekly_workouts=max_weekly_workouts_for_score(score),
        max_workout_duration_minutes=max_workout_duration_for_score(score),
        recommended_intensity=recommended_intensity_for_score(score),
        recommendations=build_recommendations(score, conditions > 0, injuries > 0),
        bmi=bmi,
        components=components,
    )

    logger.debug(
        f"Fitness evaluation: score={score} level={evaluation.level.value}",
        extra={"extra_fields": {"score": score, "components": components}},
    )
    return evaluation
