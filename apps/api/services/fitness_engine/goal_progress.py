"""
Goal Progress Tracker

Advances a goal as its scheduled workouts are marked done.

    apply_completion(goal, completion)
        -> mark the workout complete
        -> recompute progress from the whole workout list
        -> append count milestones (1, 5, 10) exactly once
        -> at 100%: active -> completed, "Goal completed!" milestone

Progress is always recomputed from the full list, never incremented, so a
goal reloaded after an out-of-band edit comes out consistent. The store is
still last-write-wins: two completions racing on one goal need optimistic
concurrency in the store, not here.

All status changes go through transition_status(); completed and cancelled
are terminal.
"""

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from models import Achievement, Goal, GoalProgress, GoalWorkout
from services.fitness_engine.constants import (
    GOAL_COMPLETED_DESCRIPTION,
    GOAL_STATUS_TRANSITIONS,
    WORKOUT_COUNT_MILESTONES,
    AchievementType,
    GoalStatus,
)
from services.fitness_engine.errors import (
    GoalWorkoutNotFoundError,
    InvalidStatusTransitionError,
    WorkoutAlreadyCompletedError,
)

logger = logging.getLogger(__name__)


@dataclass
class WorkoutCompletion:
    """A "workout done" event for one goal workout."""
    goal_workout_id: str
    actual_duration: Optional[int] = None
    calories_burned: Optional[int] = None
    notes: Optional[str] = None
    difficulty_rating: Optional[str] = None
    enjoyment: Optional[int] = None


def recompute_progress(workouts: List[GoalWorkout]) -> GoalProgress:
    completed = sum(1 for w in workouts if w.completed)
    total = len(workouts)
    return GoalProgress(
        completed_workouts=completed,
        total_calories_burned=sum(w.calories_burned or 0 for w in workouts),
        total_duration=sum(w.actual_duration or 0 for w in workouts),
        # Half-up integer rounding of completed / total * 100
        completion_percentage=(completed * 200 + total) // (2 * total) if total > 0 else 0,
    )


def transition_status(current: GoalStatus, target: GoalStatus) -> GoalStatus:
    """
    The only place a goal status changes.

    Raises:
        InvalidStatusTransitionError: target not reachable from current
    """
    current = GoalStatus(current)
    target = GoalStatus(target)
    if current == target:
        return current
    if target not in GOAL_STATUS_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current, target)
    return target


def _has_achievement(goal: Goal, description: str) -> bool:
    return any(a.description == description for a in goal.achievements)


def _copy_through(workout: GoalWorkout, completion: WorkoutCompletion) -> None:
    # Absent fields leave whatever the workout already has
    for name in ("actual_duration", "calories_burned", "notes", "difficulty_rating", "enjoyment"):
        value = getattr(completion, name)
        if value is not None:
            setattr(workout, name, value)


def _mark_completed(goal: Goal, now: datetime) -> None:
    goal.status = transition_status(goal.status, GoalStatus.COMPLETED)
    if not _has_achievement(goal, GOAL_COMPLETED_DESCRIPTION):
        goal.achievements.append(
            Achievement(
                type=AchievementType.MILESTONE,
                description=GOAL_COMPLETED_DESCRIPTION,
                earned_at=now,
                value={"goal_id": goal.id},
            )
        )


def apply_completion(goal: Goal, completion: WorkoutCompletion, now: Optional[datetime] = None) -> Goal:
    """
    Mark one goal workout completed and return the updated goal.

    The input goal is not modified.

    Raises:
        GoalWorkoutNotFoundError: no workout with that id in the goal
        WorkoutAlreadyCompletedError: the workout was completed before
    """
    now = now or datetime.now(timezone.utc)

    updated = copy.deepcopy(goal)
    workout = updated.find_workout(completion.goal_workout_id)
    if workout is None:
        raise GoalWorkoutNotFoundError(completion.goal_workout_id)
    if workout.completed:
        raise WorkoutAlreadyCompletedError(completion.goal_workout_id)

    workout.completed = True
    workout.completed_at = now
    _copy_through(workout, completion)

    updated.progress = recompute_progress(updated.workouts)
    count = updated.progress.completed_workouts

    milestone = WORKOUT_COUNT_MILESTONES.get(count)
    if milestone and not _has_achievement(updated, milestone):
        updated.achievements.append(
            Achievement(
                type=AchievementType.MILESTONE,
                description=milestone,
                earned_at=now,
                value={"count": count},
            )
        )

    if updated.progress.completion_percentage == 100 and updated.status == GoalStatus.ACTIVE:
        _mark_completed(updated, now)
        logger.info(
            f"Goal {updated.id} completed",
            extra={"extra_fields": {"goal_id": updated.id, "completed_workouts": count}},
        )

    logger.debug(
        f"Workout {completion.goal_workout_id} completed ({count}/{len(updated.workouts)})",
        extra={"extra_fields": {
            "goal_id": updated.id,
            "completion_percentage": updated.progress.completion_percentage,
        }},
    )
    return updated


def update_goal_status(goal: Goal, new_status: GoalStatus, now: Optional[datetime] = None) -> Goal:
    """
    Owner status edit: pause, resume or cancel.

    Owners may only mark a goal completed once every workout is done. That
    covers a goal that reached 100% while paused and was resumed afterwards.
    """
    new_status = GoalStatus(new_status)
    current = GoalStatus(goal.status)
    updated = copy.deepcopy(goal)
    if new_status == GoalStatus.COMPLETED and current != GoalStatus.COMPLETED:
        if recompute_progress(goal.workouts).completion_percentage < 100:
            raise InvalidStatusTransitionError(current, new_status)
        _mark_completed(updated, now or datetime.now(timezone.utc))
        return updated
    updated.status = transition_status(current, new_status)
    return updated
