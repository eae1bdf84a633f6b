"""
Goal Realism Checker

Advisory sanity check of a proposed goal's weekly load against the user's
profile. Never blocks goal creation; the caller returns the warnings
alongside the created goal.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

from core.engine_config import engine_config
from models import Profile
from services.fitness_engine.constants import (
    MAX_RECOMMENDED_WORKOUTS_PER_WEEK,
    MEDICAL_CONDITION_WARNING,
    SEDENTARY_WARNING,
    ActivityLevel,
    FitnessLevel,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class RealismCheck:
    is_realistic: bool
    warnings: List[str] = field(default_factory=list)
    workouts_per_week: Optional[float] = None


def goal_duration_days(start_date: Union[date, datetime], end_date: Union[date, datetime]) -> int:
    """Whole days spanned by the goal, rounding partial days up."""
    if isinstance(start_date, datetime) != isinstance(end_date, datetime):
        start_date = start_date if isinstance(start_date, datetime) else datetime.combine(start_date, datetime.min.time())
        end_date = end_date if isinstance(end_date, datetime) else datetime.combine(end_date, datetime.min.time())
    span = end_date - start_date
    return math.ceil(span.total_seconds() / SECONDS_PER_DAY)


def weekly_load(proposed_workout_count: int, duration_days: int) -> float:
    return proposed_workout_count / duration_days * 7


def check_goal_realism(
    profile: Optional[Profile],
    proposed_workout_count: int,
    start_date: Union[date, datetime],
    end_date: Union[date, datetime],
) -> RealismCheck:
    """
    Compare a proposed goal's weekly workout load with the profile.

    Raises:
        ValueError: if end_date is not after start_date (the request
            validation layer rejects these before they get here)
    """
    if profile is None:
        return RealismCheck(is_realistic=True, warnings=[])

    duration_days = goal_duration_days(start_date, end_date)
    if duration_days <= 0:
        raise ValueError("End date must be after start date")

    per_week = weekly_load(proposed_workout_count, duration_days)
    warnings: List[str] = []

    try:
        level = FitnessLevel(profile.fitness_level) if profile.fitness_level else None
    except ValueError:
        level = None
    if level is not None:
        max_per_week = MAX_RECOMMENDED_WORKOUTS_PER_WEEK[level]
        if per_week > max_per_week:
            warnings.append(
                f"Based on your {level.value} fitness level, we recommend no more than "
                f"{max_per_week} workouts per week"
            )

    if profile.medical_conditions:
        warnings.append(MEDICAL_CONDITION_WARNING)

    if (
        profile.activity_level == ActivityLevel.SEDENTARY.value
        and per_week > engine_config.realism_sedentary_max_per_week
    ):
        warnings.append(SEDENTARY_WARNING)

    if warnings:
        logger.warning(
            f"Goal realism: {len(warnings)} warning(s) for {per_week:.1f} workouts/week",
            extra={"extra_fields": {"workouts_per_week": round(per_week, 2), "warnings": warnings}},
        )

    return RealismCheck(
        is_realistic=not warnings,
        warnings=warnings,
        workouts_per_week=round(per_week, 2),
    )


def realism_level(check: RealismCheck) -> str:
    """Coarse label for display: excellent, moderate or challenging."""
    if check.is_realistic:
        return "excellent"
    if len(check.warnings) <= 2:
        return "moderate"
    return "challenging"
