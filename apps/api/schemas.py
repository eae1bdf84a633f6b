from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import datetime, date
from typing import Any, Dict, List, Optional

from models import (
    Achievement,
    Goal,
    GoalProgress,
    GoalTargets,
    GoalWorkout,
    MedicalCondition,
    Preferences,
    Profile,
    Program,
    ProgramScheduleEntry,
)
from services.fitness_engine.constants import (
    AchievementType,
    ActivityLevel,
    EvaluatedLevel,
    ExperienceLevel,
    FitnessLevel,
    GoalStatus,
    GoalTag,
    GoalType,
    IntensityPreference,
    WorkoutDifficultyRating,
)


def _value(enum_member):
    return enum_member.value if enum_member is not None else None


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class MedicalConditionSchema(BaseModel):
    condition: str
    severity: Optional[str] = Field(default=None, pattern=r"^(mild|moderate|severe)$")
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PreferencesSchema(BaseModel):
    workout_types: List[str] = []
    workout_duration: Optional[int] = Field(default=None, ge=15, le=180)  # minutes
    workout_frequency: Optional[int] = Field(default=None, ge=1, le=7)    # days per week

    model_config = ConfigDict(from_attributes=True)


class ProfileInput(BaseModel):
    """Profile facts the engine consumes. Every field is optional."""
    fitness_level: Optional[FitnessLevel] = None
    activity_level: Optional[ActivityLevel] = None
    date_of_birth: Optional[date] = None
    age: Optional[int] = Field(default=None, ge=13, le=120)
    height_cm: Optional[float] = Field(default=None, gt=0)
    weight_kg: Optional[float] = Field(default=None, gt=0)
    medical_conditions: List[MedicalConditionSchema] = []
    previous_injuries: List[str] = []
    fitness_goals: List[GoalTag] = []
    preferences: PreferencesSchema = PreferencesSchema()
    exercise_experience: Optional[ExperienceLevel] = None
    preferred_intensity: Optional[IntensityPreference] = None

    def to_record(self) -> Profile:
        return Profile(
            fitness_level=_value(self.fitness_level),
            activity_level=_value(self.activity_level),
            date_of_birth=self.date_of_birth,
            age=self.age,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            medical_conditions=[
                MedicalCondition(condition=c.condition, severity=c.severity, notes=c.notes)
                for c in self.medical_conditions
            ],
            previous_injuries=list(self.previous_injuries),
            fitness_goals=[g.value for g in self.fitness_goals],
            preferences=Preferences(
                workout_types=list(self.preferences.workout_types),
                workout_duration=self.preferences.workout_duration,
                workout_frequency=self.preferences.workout_frequency,
            ),
            exercise_experience=_value(self.exercise_experience),
            preferred_intensity=_value(self.preferred_intensity),
        )


class FitnessEvaluationResponse(BaseModel):
    score: int
    level: EvaluatedLevel
    max_weekly_workouts: int
    max_workout_duration_minutes: int
    recommended_intensity: str
    recommendations: List[str]
    bmi: Optional[float] = None
    components: Dict[str, float] = {}

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Programs
# ---------------------------------------------------------------------------

class ProgramScheduleEntrySchema(BaseModel):
    workout_id: str
    day_of_week: int = Field(default=0, ge=0, le=6)  # 0 = Sunday
    week_number: Optional[int] = Field(default=None, ge=1)
    order: int = 1

    model_config = ConfigDict(from_attributes=True)


class ProgramSchema(BaseModel):
    id: str
    name: str
    category: str
    difficulty: FitnessLevel
    estimated_time_per_session: int = Field(gt=0)
    workouts_per_week: int = Field(ge=1, le=7)
    rating_average: float = Field(default=0.0, ge=0, le=5)
    rating_count: int = Field(default=0, ge=0)
    duration_weeks: int = Field(default=1, ge=1)
    workouts: List[ProgramScheduleEntrySchema] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_record(self) -> Program:
        return Program(
            id=self.id,
            name=self.name,
            category=self.category,
            difficulty=self.difficulty.value,
            estimated_time_per_session=self.estimated_time_per_session,
            workouts_per_week=self.workouts_per_week,
            rating_average=self.rating_average,
            rating_count=self.rating_count,
            duration_weeks=self.duration_weeks,
            workouts=[
                ProgramScheduleEntry(
                    workout_id=w.workout_id,
                    day_of_week=w.day_of_week,
                    week_number=w.week_number,
                    order=w.order,
                )
                for w in self.workouts
            ],
            created_at=self.created_at,
        )


class ProgramSuggestionsRequest(BaseModel):
    profile: Optional[ProfileInput] = None
    programs: List[ProgramSchema]
    limit: Optional[int] = Field(default=None, ge=1, le=50)


class ProgramSuggestionResponse(BaseModel):
    program: ProgramSchema
    match_score: int
    reason: str

    model_config = ConfigDict(from_attributes=True)


class ProgramRatingRequest(BaseModel):
    average: float = Field(ge=0, le=5)
    count: int = Field(ge=0)
    rating: float = Field(ge=1, le=5)


class ProgramRatingResponse(BaseModel):
    average: float
    count: int


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class GoalWorkoutSchema(BaseModel):
    id: str
    workout_id: str
    scheduled_date: date
    completed: bool = False
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    difficulty_rating: Optional[WorkoutDifficultyRating] = None
    enjoyment: Optional[int] = Field(default=None, ge=1, le=5)

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='after')
    def validate_completion_timestamp(self):
        if self.completed != (self.completed_at is not None):
            raise ValueError('completed_at must be set exactly when completed is true')
        return self

    def to_record(self) -> GoalWorkout:
        return GoalWorkout(
            id=self.id,
            workout_id=self.workout_id,
            scheduled_date=self.scheduled_date,
            completed=self.completed,
            completed_at=self.completed_at,
            actual_duration=self.actual_duration,
            calories_burned=self.calories_burned,
            notes=self.notes,
            difficulty_rating=_value(self.difficulty_rating),
            enjoyment=self.enjoyment,
        )


class AchievementSchema(BaseModel):
    type: AchievementType
    description: str
    earned_at: datetime
    value: Any = None

    model_config = ConfigDict(from_attributes=True)


class GoalTargetsSchema(BaseModel):
    total_workouts: int = Field(default=0, ge=0)
    workouts_per_week: int = Field(default=0, ge=0)  # derived; may exceed 7 for overloaded goals
    total_calories: int = Field(default=0, ge=0)
    total_duration: int = Field(default=0, ge=0)

    model_config = ConfigDict(from_attributes=True)


class GoalProgressSchema(BaseModel):
    completed_workouts: int = 0
    total_calories_burned: int = 0
    total_duration: int = 0
    completion_percentage: int = Field(default=0, ge=0, le=100)

    model_config = ConfigDict(from_attributes=True)


class GoalSchema(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    status: GoalStatus = GoalStatus.ACTIVE
    type: GoalType = GoalType.WEEKLY
    program_id: Optional[str] = None
    targets: GoalTargetsSchema = GoalTargetsSchema()
    workouts: List[GoalWorkoutSchema] = []
    progress: GoalProgressSchema = GoalProgressSchema()
    achievements: List[AchievementSchema] = []

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='after')
    def validate_window(self):
        if self.end_date <= self.start_date:
            raise ValueError('end_date must be after start_date')
        return self

    def to_record(self) -> Goal:
        return Goal(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status,
            type=self.type,
            program_id=self.program_id,
            targets=GoalTargets(**self.targets.model_dump()),
            workouts=[w.to_record() for w in self.workouts],
            progress=GoalProgress(**self.progress.model_dump()),
            achievements=[
                Achievement(type=a.type, description=a.description, earned_at=a.earned_at, value=a.value)
                for a in self.achievements
            ],
        )


class RealismCheckRequest(BaseModel):
    profile: Optional[ProfileInput] = None
    proposed_workout_count: int = Field(ge=0)
    start_date: date
    end_date: date

    @model_validator(mode='after')
    def validate_window(self):
        if self.end_date <= self.start_date:
            raise ValueError('end_date must be after start_date')
        return self


class RealismCheckResponse(BaseModel):
    is_realistic: bool
    warnings: List[str]
    workouts_per_week: Optional[float] = None
    level: str

    model_config = ConfigDict(from_attributes=True)


class ScheduledWorkoutInput(BaseModel):
    workout_id: str
    scheduled_date: date


class GoalTargetsInput(BaseModel):
    workouts_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    total_calories: Optional[int] = Field(default=None, ge=0)
    total_duration: Optional[int] = Field(default=None, ge=0)


class GoalCreateRequest(BaseModel):
    title: str = Field(min_length=2, max_length=100)
    description: Optional[str] = None
    start_date: date
    end_date: date
    type: GoalType = GoalType.WEEKLY
    user_id: Optional[str] = None
    profile: Optional[ProfileInput] = None
    program: Optional[ProgramSchema] = None
    workouts: List[ScheduledWorkoutInput] = []
    targets: Optional[GoalTargetsInput] = None

    @model_validator(mode='after')
    def validate_window(self):
        if self.end_date <= self.start_date:
            raise ValueError('end_date must be after start_date')
        return self


class GoalCreateResponse(BaseModel):
    goal: GoalSchema
    realism_check: RealismCheckResponse


class CompleteWorkoutRequest(BaseModel):
    goal: GoalSchema
    workout_id: str
    actual_duration: Optional[int] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    difficulty: Optional[WorkoutDifficultyRating] = None
    enjoyment: Optional[int] = Field(default=None, ge=1, le=5)


class GoalStatusRequest(BaseModel):
    goal: GoalSchema
    status: GoalStatus


class WeekProgressSchema(BaseModel):
    completed: int
    total: int
    percentage: int

    model_config = ConfigDict(from_attributes=True)


class GoalSummaryRequest(BaseModel):
    goal: GoalSchema
    today: Optional[date] = None


class GoalSummaryResponse(BaseModel):
    goal_id: str
    status: GoalStatus
    progress: GoalProgressSchema
    days_remaining: int
    week_progress: WeekProgressSchema


class DashboardRequest(BaseModel):
    goals: List[GoalSchema] = []
    today: Optional[date] = None


class DashboardResponse(BaseModel):
    total_goals: int
    completed_goals: int
    total_workouts_completed: int
    week_progress: WeekProgressSchema
    current_goal: Optional[GoalSummaryResponse] = None
