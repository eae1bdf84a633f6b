"""
Goal Scheduling

Builds new goals (from a program's weekly schedule or an explicit workout
list) and computes the date-window views shown on the dashboard.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from models import Goal, GoalTargets, GoalWorkout, Profile, Program
from services.fitness_engine.constants import GoalStatus, GoalType
from services.fitness_engine.goal_progress import recompute_progress
from services.fitness_engine.goal_realism import RealismCheck, check_goal_realism

logger = logging.getLogger(__name__)


@dataclass
class WeekProgress:
    completed: int = 0
    total: int = 0
    percentage: int = 0


@dataclass
class DashboardStats:
    total_goals: int
    completed_goals: int
    total_workouts_completed: int
    week_progress: WeekProgress
    current_goal: Optional[Goal] = None
    current_goal_days_remaining: Optional[int] = None


@dataclass
class TargetOverrides:
    workouts_per_week: Optional[int] = None
    total_calories: Optional[int] = None
    total_duration: Optional[int] = None


def build_schedule_from_program(program: Program, start_date: date, end_date: date) -> List[GoalWorkout]:
    """
    Lay the program's weekly schedule over the goal window.

    Every schedule entry repeats each week on its day offset from the start
    date; entries falling after end_date are dropped.
    """
    span_days = (end_date - start_date).days
    weeks = math.ceil(span_days / 7)

    workouts: List[GoalWorkout] = []
    for week in range(weeks):
        for entry in program.workouts:
            scheduled = start_date + timedelta(days=week * 7 + (entry.day_of_week or 0))
            if scheduled <= end_date:
                workouts.append(GoalWorkout(workout_id=entry.workout_id, scheduled_date=scheduled))
    return workouts


def default_targets(
    workouts: Sequence[GoalWorkout],
    start_date: date,
    end_date: date,
    overrides: Optional[TargetOverrides] = None,
) -> GoalTargets:
    overrides = overrides or TargetOverrides()
    weeks = (end_date - start_date).days / 7
    per_week = overrides.workouts_per_week
    if not per_week:
        per_week = math.ceil(len(workouts) / weeks) if weeks > 0 else 0
    return GoalTargets(
        total_workouts=len(workouts),
        workouts_per_week=per_week,
        total_calories=overrides.total_calories or 0,
        total_duration=overrides.total_duration or 0,
    )


def create_goal(
    title: str,
    start_date: date,
    end_date: date,
    profile: Optional[Profile] = None,
    program: Optional[Program] = None,
    workouts: Optional[Iterable[Tuple[str, date]]] = None,
    overrides: Optional[TargetOverrides] = None,
    goal_type: GoalType = GoalType.WEEKLY,
    user_id: Optional[str] = None,
    description: Optional[str] = None,
) -> Tuple[Goal, RealismCheck]:
    """
    Build a new active goal and its realism check.

    An explicit (workout_id, scheduled_date) list wins over the program's
    schedule. The realism check is advisory and never stops creation.

    Raises:
        ValueError: end_date is not after start_date
    """
    if end_date <= start_date:
        raise ValueError("End date must be after start date")

    explicit = list(workouts or [])
    if explicit:
        goal_workouts = [GoalWorkout(workout_id=w_id, scheduled_date=day) for w_id, day in explicit]
    elif program is not None:
        goal_workouts = build_schedule_from_program(program, start_date, end_date)
    else:
        goal_workouts = []

    realism = check_goal_realism(profile, len(goal_workouts), start_date, end_date)

    goal = Goal(
        title=title,
        description=description,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        status=GoalStatus.ACTIVE,
        type=GoalType(goal_type),
        program_id=program.id if program is not None else None,
        targets=default_targets(goal_workouts, start_date, end_date, overrides),
        workouts=goal_workouts,
        progress=recompute_progress(goal_workouts),
    )

    logger.info(
        f"Goal created with {len(goal_workouts)} workouts",
        extra={"extra_fields": {
            "goal_id": goal.id,
            "program_id": goal.program_id,
            "is_realistic": realism.is_realistic,
        }},
    )
    return goal, realism


def days_remaining(goal: Goal, today: Optional[date] = None) -> int:
    today = today or date.today()
    return max(0, (goal.end_date - today).days)


def week_bounds(today: date) -> Tuple[date, date]:
    """Sunday-to-Saturday week containing today."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def week_progress(goal: Optional[Goal], today: Optional[date] = None) -> WeekProgress:
    if goal is None:
        return WeekProgress()
    start, end = week_bounds(today or date.today())
    this_week = [w for w in goal.workouts if start <= w.scheduled_date <= end]
    done = sum(1 for w in this_week if w.completed)
    return WeekProgress(
        completed=done,
        total=len(this_week),
        percentage=(done * 200 + len(this_week)) // (2 * len(this_week)) if this_week else 0,
    )


def current_goal(goals: Iterable[Goal], today: Optional[date] = None) -> Optional[Goal]:
    """First active goal whose window contains today."""
    today = today or date.today()
    for goal in goals:
        if goal.status == GoalStatus.ACTIVE and goal.start_date <= today <= goal.end_date:
            return goal
    return None


def dashboard_stats(goals: List[Goal], today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    active = current_goal(goals, today)
    return DashboardStats(
        total_goals=len(goals),
        completed_goals=sum(1 for g in goals if g.status == GoalStatus.COMPLETED),
        total_workouts_completed=sum(1 for g in goals for w in g.workouts if w.completed),
        week_progress=week_progress(active, today),
        current_goal=active,
        current_goal_days_remaining=days_remaining(active, today) if active else None,
    )
