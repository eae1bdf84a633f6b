"""
Domain records consumed and produced by the recommendation engine.

These are plain data carriers. The document store, auth and HTTP layers
translate their own representations into these before calling the engine,
and translate results back afterwards.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional
from uuid import uuid4

from services.bmi_calculator import calculate_age, calculate_bmi
from services.fitness_engine.constants import (
    AchievementType,
    GoalStatus,
    GoalType,
)


def _new_id() -> str:
    return uuid4().hex


@dataclass
class MedicalCondition:
    condition: str
    severity: Optional[str] = None  # mild | moderate | severe
    notes: Optional[str] = None


@dataclass
class Preferences:
    workout_types: List[str] = field(default_factory=list)
    workout_duration: Optional[int] = None   # minutes
    workout_frequency: Optional[int] = None  # days per week, 1-7


@dataclass
class Profile:
    """A user's fitness profile (1:1 with the user)."""
    fitness_level: Optional[str] = None
    activity_level: Optional[str] = None
    date_of_birth: Optional[date] = None
    age: Optional[int] = None                # explicit age wins over date_of_birth
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    medical_conditions: List[MedicalCondition] = field(default_factory=list)
    previous_injuries: List[str] = field(default_factory=list)
    fitness_goals: List[str] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)
    exercise_experience: Optional[str] = None
    preferred_intensity: Optional[str] = None

    def resolved_age(self, today: Optional[date] = None) -> Optional[int]:
        if self.age is not None:
            return self.age
        return calculate_age(self.date_of_birth, today)

    @property
    def bmi(self) -> Optional[float]:
        value = calculate_bmi(self.weight_kg, self.height_cm)
        return float(value) if value is not None else None


@dataclass
class ProgramScheduleEntry:
    workout_id: str
    day_of_week: int = 0     # 0 = Sunday
    week_number: Optional[int] = None
    order: int = 1


@dataclass
class Program:
    """Catalog entry. Read-only to the engine."""
    id: str
    name: str
    category: str
    difficulty: str
    estimated_time_per_session: int   # minutes
    workouts_per_week: int
    rating_average: float = 0.0
    rating_count: int = 0
    duration_weeks: int = 1
    workouts: List[ProgramScheduleEntry] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass
class GoalWorkout:
    workout_id: str
    scheduled_date: date
    id: str = field(default_factory=_new_id)
    completed: bool = False
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = None   # minutes
    calories_burned: Optional[int] = None
    notes: Optional[str] = None
    difficulty_rating: Optional[str] = None  # too_easy | just_right | too_hard
    enjoyment: Optional[int] = None          # 1-5


@dataclass(frozen=True)
class Achievement:
    type: AchievementType
    description: str
    earned_at: datetime
    value: Any = None


@dataclass
class GoalTargets:
    total_workouts: int = 0
    workouts_per_week: int = 0
    total_calories: int = 0
    total_duration: int = 0


@dataclass
class GoalProgress:
    """Derived aggregate; always recomputed from the workout list."""
    completed_workouts: int = 0
    total_calories_burned: int = 0
    total_duration: int = 0
    completion_percentage: int = 0


@dataclass
class Goal:
    title: str
    start_date: date
    end_date: date
    id: str = field(default_factory=_new_id)
    user_id: Optional[str] = None
    description: Optional[str] = None
    status: GoalStatus = GoalStatus.ACTIVE
    type: GoalType = GoalType.WEEKLY
    program_id: Optional[str] = None
    targets: GoalTargets = field(default_factory=GoalTargets)
    workouts: List[GoalWorkout] = field(default_factory=list)
    progress: GoalProgress = field(default_factory=GoalProgress)
    achievements: List[Achievement] = field(default_factory=list)

    def find_workout(self, goal_workout_id: str) -> Optional[GoalWorkout]:
        for workout in self.workouts:
            if workout.id == goal_workout_id:
                return workout
        return None
