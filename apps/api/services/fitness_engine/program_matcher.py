"""
Program Matcher

Ranks catalog programs against a profile and explains each suggestion.

Two stages:
    1. Filter - shrink the candidate set by difficulty, goal categories,
       session length and weekly frequency (low-impact categories only when
       the profile lists medical conditions).
    2. Score  - additive 0-100 match score, computed independently of the
       filter so it can also rank unfiltered lists.

Without a profile every beginner program scores a flat 50 and the catalog's
own ordering (rating, then recency) is kept.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Set

from core.engine_config import engine_config
from models import Profile, Program
from services.fitness_engine.constants import (
    DEFAULT_REASON,
    DIFFICULTY_ORDINALS,
    GOAL_CATEGORY_SYNONYMS,
    LOW_IMPACT_CATEGORIES,
    MATCH_POINTS,
    NO_PROFILE_MATCH_SCORE,
    NO_PROFILE_REASON,
    RATING_GOOD_THRESHOLD,
    RATING_HIGH_THRESHOLD,
    REASON_LABELS,
    FitnessLevel,
    GoalTag,
)

logger = logging.getLogger(__name__)


@dataclass
class ProgramSuggestion:
    program: Program
    match_score: int   # 0-100
    reason: str


@dataclass
class MatchResult:
    score: int
    factors: List[str]  # keys into REASON_LABELS that fired


def expand_goal_categories(goals: Iterable[str]) -> FrozenSet[str]:
    """Union of program categories that serve any of the given goal tags."""
    categories: Set[str] = set()
    for goal in goals or []:
        try:
            tag = GoalTag(goal)
        except ValueError:
            # Unknown tags still match a category of the same name
            categories.add(goal)
            continue
        categories |= GOAL_CATEGORY_SYNONYMS[tag]
    return frozenset(categories)


def _difficulty_ordinal(difficulty: Optional[str]) -> Optional[int]:
    try:
        return DIFFICULTY_ORDINALS[FitnessLevel(difficulty)]
    except ValueError:
        return None


def target_difficulty(profile: Optional[Profile]) -> str:
    if profile is None or not profile.fitness_level:
        return FitnessLevel.BEGINNER.value
    return profile.fitness_level


def allowed_categories(profile: Optional[Profile]) -> Optional[FrozenSet[str]]:
    """Category restriction for the filter stage, or None for no restriction."""
    if profile is None:
        return None
    if profile.medical_conditions:
        return LOW_IMPACT_CATEGORIES
    if profile.fitness_goals:
        return expand_goal_categories(profile.fitness_goals)
    return None


def filter_candidates(profile: Optional[Profile], programs: Iterable[Program]) -> List[Program]:
    """Apply the filter stage, keeping the input order."""
    difficulty = target_difficulty(profile)
    categories = allowed_categories(profile)
    preferences = profile.preferences if profile is not None else None
    max_session = None
    max_frequency = None
    if preferences is not None:
        if preferences.workout_duration is not None:
            max_session = preferences.workout_duration + engine_config.duration_tolerance_minutes
        max_frequency = preferences.workout_frequency

    candidates = []
    for program in programs:
        if program.difficulty != difficulty:
            continue
        if categories is not None and program.category not in categories:
            continue
        if max_session is not None and program.estimated_time_per_session > max_session:
            continue
        if max_frequency is not None and program.workouts_per_week > max_frequency:
            continue
        candidates.append(program)
    return candidates


def score_program(profile: Profile, program: Program) -> MatchResult:
    """Additive match score of one program against a profile."""
    score = 0
    factors: List[str] = []

    wanted = _difficulty_ordinal(profile.fitness_level)
    offered = _difficulty_ordinal(program.difficulty)
    if wanted is not None and offered is not None:
        if wanted == offered:
            score += MATCH_POINTS["difficulty_exact"]
            factors.append("difficulty")
        elif abs(wanted - offered) == 1:
            score += MATCH_POINTS["difficulty_adjacent"]

    if profile.fitness_goals and program.category in expand_goal_categories(profile.fitness_goals):
        score += MATCH_POINTS["goal_alignment"]
        factors.append("goals")

    preferences = profile.preferences
    preferred_duration = preferences.workout_duration if preferences is not None else None
    if preferred_duration is not None:
        gap = abs(program.estimated_time_per_session - preferred_duration)
        if gap <= engine_config.duration_tolerance_minutes:
            score += MATCH_POINTS["duration_close"]
            factors.append("duration")
        elif gap <= engine_config.duration_close_minutes:
            score += MATCH_POINTS["duration_near"]

    preferred_frequency = preferences.workout_frequency if preferences is not None else None
    if preferred_frequency is not None and program.workouts_per_week <= preferred_frequency:
        score += MATCH_POINTS["frequency_fit"]

    rating = program.rating_average or 0.0
    if rating >= RATING_HIGH_THRESHOLD:
        score += MATCH_POINTS["rating_high"]
        factors.append("rating")
    elif rating >= RATING_GOOD_THRESHOLD:
        score += MATCH_POINTS["rating_good"]

    return MatchResult(score=max(0, min(100, score)), factors=factors)


def explain(factors: List[str]) -> str:
    if not factors:
        return DEFAULT_REASON
    return ", ".join(REASON_LABELS[factor] for factor in factors)


def suggest_programs(
    profile: Optional[Profile],
    programs: List[Program],
    limit: int = 5,
) -> List[ProgramSuggestion]:
    """
    Rank catalog programs for a profile.

    Args:
        profile: The user's profile, or None when the user has none yet
        programs: Catalog entries in the catalog's default order
        limit: Maximum number of suggestions

    Returns:
        Suggestions, best first.
    """
    if limit <= 0:
        return []

    candidates = filter_candidates(profile, programs)

    if profile is None:
        suggestions = [
            ProgramSuggestion(program=p, match_score=NO_PROFILE_MATCH_SCORE, reason=NO_PROFILE_REASON)
            for p in candidates
        ]
    else:
        suggestions = []
        for program in candidates:
            result = score_program(profile, program)
            suggestions.append(
                ProgramSuggestion(program=program, match_score=result.score, reason=explain(result.factors))
            )
        if profile.medical_conditions:
            # Gentlest first, best rated within a difficulty
            suggestions.sort(
                key=lambda s: (
                    _difficulty_ordinal(s.program.difficulty) or len(DIFFICULTY_ORDINALS) + 1,
                    -(s.program.rating_average or 0.0),
                )
            )
        else:
            # sort() is stable, so ties keep catalog order
            suggestions.sort(key=lambda s: -s.match_score)

    logger.debug(
        f"Program suggestions: {len(candidates)} of {len(programs)} candidates passed filters",
        extra={"extra_fields": {
            "has_profile": profile is not None,
            "candidates": len(candidates),
            "catalog_size": len(programs),
        }},
    )
    return suggestions[:limit]


def update_program_rating(average: float, count: int, new_rating: float):
    """
    Fold one user rating into a program's running average.

    Returns:
        (new_average rounded to 1 decimal, new_count)
    """
    if new_rating is None or new_rating < 1 or new_rating > 5:
        raise ValueError("Rating must be between 1 and 5")
    total = (average or 0.0) * (count or 0)
    new_count = (count or 0) + 1
    return round((total + new_rating) / new_count, 1), new_count
