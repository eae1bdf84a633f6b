"""
Pytest configuration and fixtures

The engine is pure, so fixtures are plain record factories. Nothing here
touches a database or the network.
"""
import pytest
import sys
import os
from datetime import date, datetime, timedelta, timezone

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import (
    Goal,
    GoalWorkout,
    MedicalCondition,
    Preferences,
    Profile,
    Program,
    ProgramScheduleEntry,
)
from services.fitness_engine.goal_progress import recompute_progress

GOAL_START = date(2026, 3, 1)   # a Sunday
FIXED_NOW = datetime(2026, 3, 10, 7, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_profile():
    """Build a Profile, preferences given as keyword arguments."""
    def _make(
        workout_duration=None,
        workout_frequency=None,
        conditions=0,
        **kwargs,
    ) -> Profile:
        profile = Profile(**kwargs)
        profile.preferences = Preferences(
            workout_duration=workout_duration,
            workout_frequency=workout_frequency,
        )
        if conditions:
            profile.medical_conditions = [
                MedicalCondition(condition=f"condition-{i}", severity="mild")
                for i in range(conditions)
            ]
        return profile
    return _make


@pytest.fixture
def make_program():
    counter = {"n": 0}

    def _make(**kwargs) -> Program:
        counter["n"] += 1
        defaults = dict(
            id=f"prog-{counter['n']}",
            name=f"Program {counter['n']}",
            category="general_fitness",
            difficulty="beginner",
            estimated_time_per_session=45,
            workouts_per_week=3,
            rating_average=0.0,
        )
        defaults.update(kwargs)
        return Program(**defaults)
    return _make


@pytest.fixture
def make_goal():
    """Goal with `total` workouts, the first `completed` already done."""
    def _make(total=4, completed=0, **kwargs) -> Goal:
        workouts = []
        for i in range(total):
            done = i < completed
            workouts.append(
                GoalWorkout(
                    id=f"gw-{i + 1}",
                    workout_id=f"w-{i + 1}",
                    scheduled_date=GOAL_START + timedelta(days=i),
                    completed=done,
                    completed_at=FIXED_NOW - timedelta(days=1) if done else None,
                    actual_duration=30 if done else None,
                    calories_burned=200 if done else None,
                )
            )
        goal = Goal(
            id=kwargs.pop("id", "goal-1"),
            title=kwargs.pop("title", "Spring block"),
            start_date=kwargs.pop("start_date", GOAL_START),
            end_date=kwargs.pop("end_date", GOAL_START + timedelta(days=28)),
            workouts=workouts,
            **kwargs,
        )
        goal.progress = recompute_progress(goal.workouts)
        return goal
    return _make


@pytest.fixture
def weekly_program(make_program):
    """Intermediate program training Monday/Wednesday/Friday."""
    return make_program(
        id="prog-mwf",
        difficulty="intermediate",
        workouts=[
            ProgramScheduleEntry(workout_id="w-mon", day_of_week=1),
            ProgramScheduleEntry(workout_id="w-wed", day_of_week=3),
            ProgramScheduleEntry(workout_id="w-fri", day_of_week=5),
        ],
    )
