"""
Constants for the recommendation engine.

Every weight and band the engine uses lives here as a named table so the
numbers can be audited and unit-tested separately from the arithmetic.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Tuple


class FitnessLevel(str, Enum):
    """Self-reported profile tier (also the program difficulty scale)."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class ExperienceLevel(str, Enum):
    """Training history from the self-evaluation questionnaire."""
    BEGINNER = "beginner"          # 0-6 months
    NOVICE = "novice"              # 6-12 months
    INTERMEDIATE = "intermediate"  # 1-3 years
    ADVANCED = "advanced"          # 3+ years
    EXPERT = "expert"              # Professional


class IntensityPreference(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXTREME = "extreme"


class EvaluatedLevel(str, Enum):
    """Five-tier scale derived from the fitness score."""
    BEGINNER = "Beginner"
    NOVICE = "Novice"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class ProgramCategory(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_BUILDING = "muscle_building"
    STRENGTH_TRAINING = "strength_training"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    REHABILITATION = "rehabilitation"
    SPORTS_SPECIFIC = "sports_specific"
    GENERAL_FITNESS = "general_fitness"
    CARDIO = "cardio"


class GoalTag(str, Enum):
    """Profile fitness goals."""
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    ENDURANCE = "endurance"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    GENERAL_FITNESS = "general_fitness"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class GoalType(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class AchievementType(str, Enum):
    MILESTONE = "milestone"
    PERSONAL_BEST = "personal_best"
    STREAK = "streak"
    CONSISTENCY = "consistency"


class WorkoutDifficultyRating(str, Enum):
    TOO_EASY = "too_easy"
    JUST_RIGHT = "just_right"
    TOO_HARD = "too_hard"


# ---------------------------------------------------------------------------
# Fitness evaluation
# ---------------------------------------------------------------------------

# (exclusive upper age bound, points); anything older gets AGE_POINTS_FLOOR
AGE_POINT_BANDS: List[Tuple[int, int]] = [
    (25, 25),
    (35, 20),
    (45, 15),
    (55, 10),
]
AGE_POINTS_FLOOR = 5

BMI_NORMAL_RANGE = (18.5, 24.9)
BMI_OVERWEIGHT_RANGE = (25.0, 29.9)
BMI_UNDERWEIGHT_LIMIT = 18.5
BMI_POINTS = {
    "normal": 20,
    "overweight": 15,
    "underweight": 10,
    "other": 5,
}

# Activity-level multipliers (Harris-Benedict style)
ACTIVITY_MULTIPLIERS: Dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}
ACTIVITY_BASELINE_MULTIPLIER = 1.2
ACTIVITY_POINTS_PER_MULTIPLIER = 50
ACTIVITY_POINTS_CAP = 25

EXPERIENCE_ORDINALS: Dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 1,
    ExperienceLevel.NOVICE: 2,
    ExperienceLevel.INTERMEDIATE: 3,
    ExperienceLevel.ADVANCED: 4,
    ExperienceLevel.EXPERT: 5,
}
EXPERIENCE_POINTS_PER_LEVEL = 5

INTENSITY_ORDINALS: Dict[IntensityPreference, int] = {
    IntensityPreference.LOW: 1,
    IntensityPreference.MODERATE: 2,
    IntensityPreference.HIGH: 3,
    IntensityPreference.EXTREME: 4,
}
INTENSITY_POINTS_PER_LEVEL = 3

MEDICAL_CONDITION_PENALTY = 5
PREVIOUS_INJURY_PENALTY = 3

SCORE_MIN = 0
SCORE_MAX = 100

# Score bands, highest first: (min score, value)
LEVEL_BANDS: List[Tuple[int, EvaluatedLevel]] = [
    (80, EvaluatedLevel.EXPERT),
    (60, EvaluatedLevel.ADVANCED),
    (40, EvaluatedLevel.INTERMEDIATE),
    (20, EvaluatedLevel.NOVICE),
    (0, EvaluatedLevel.BEGINNER),
]

MAX_WEEKLY_WORKOUT_BANDS: List[Tuple[int, int]] = [
    (80, 7),
    (60, 5),
    (40, 4),
    (20, 3),
    (0, 2),
]

MAX_DURATION_BANDS: List[Tuple[int, int]] = [
    (80, 90),
    (60, 75),
    (40, 60),
    (20, 45),
    (0, 30),
]

INTENSITY_BANDS: List[Tuple[int, str]] = [
    (80, "High to Extreme"),
    (60, "Moderate to High"),
    (40, "Low to Moderate"),
    (0, "Low"),
]

RECOMMENDATION_BANDS: List[Tuple[int, List[str]]] = [
    (60, [
        "Challenge yourself with varied workout routines",
        "Consider high-intensity interval training",
        "Focus on specific fitness goals",
    ]),
    (30, [
        "Mix cardiovascular and strength training exercises",
        "Gradually increase workout intensity",
        "Ensure proper rest between workout days",
    ]),
    (0, [
        "Start with low-intensity exercises and gradually increase",
        "Focus on building basic cardiovascular fitness",
        "Consider working with a fitness professional",
    ]),
]
MEDICAL_CONDITION_RECOMMENDATION = "Consult with healthcare provider before starting new programs"
INJURY_RECOMMENDATION = "Pay attention to previous injury areas and modify exercises accordingly"


# ---------------------------------------------------------------------------
# Program matching
# ---------------------------------------------------------------------------

DIFFICULTY_ORDINALS: Dict[FitnessLevel, int] = {
    FitnessLevel.BEGINNER: 1,
    FitnessLevel.INTERMEDIATE: 2,
    FitnessLevel.ADVANCED: 3,
}

GOAL_CATEGORY_SYNONYMS: Dict[GoalTag, FrozenSet[str]] = {
    GoalTag.WEIGHT_LOSS: frozenset({"weight_loss", "cardio", "general_fitness"}),
    GoalTag.MUSCLE_GAIN: frozenset({"muscle_building", "strength_training"}),
    GoalTag.STRENGTH: frozenset({"strength_training", "muscle_building"}),
    GoalTag.ENDURANCE: frozenset({"endurance", "cardio"}),
    GoalTag.FLEXIBILITY: frozenset({"flexibility", "rehabilitation"}),
    GoalTag.GENERAL_FITNESS: frozenset({"general_fitness"}),
}

LOW_IMPACT_CATEGORIES: FrozenSet[str] = frozenset({
    ProgramCategory.FLEXIBILITY.value,
    ProgramCategory.REHABILITATION.value,
    ProgramCategory.GENERAL_FITNESS.value,
})

MATCH_POINTS = {
    "difficulty_exact": 30,
    "difficulty_adjacent": 15,
    "goal_alignment": 25,
    "duration_close": 20,
    "duration_near": 10,
    "frequency_fit": 15,
    "rating_high": 10,
    "rating_good": 5,
}
RATING_HIGH_THRESHOLD = 4.0
RATING_GOOD_THRESHOLD = 3.0

NO_PROFILE_MATCH_SCORE = 50
NO_PROFILE_REASON = "Great starting program for beginners"
DEFAULT_REASON = "Recommended for you"

REASON_LABELS = {
    "difficulty": "Matches your fitness level",
    "goals": "Aligns with your fitness goals",
    "duration": "Fits your preferred workout duration",
    "rating": "Highly rated by other users",
}


# ---------------------------------------------------------------------------
# Goal realism
# ---------------------------------------------------------------------------

MAX_RECOMMENDED_WORKOUTS_PER_WEEK: Dict[FitnessLevel, int] = {
    FitnessLevel.BEGINNER: 4,
    FitnessLevel.INTERMEDIATE: 5,
    FitnessLevel.ADVANCED: 7,
}

MEDICAL_CONDITION_WARNING = (
    "Please consult with a healthcare provider before starting this goal "
    "due to your medical conditions"
)
SEDENTARY_WARNING = (
    "Consider starting with fewer workouts per week given your current activity level"
)


# ---------------------------------------------------------------------------
# Goal progress
# ---------------------------------------------------------------------------

# completed-workout count -> milestone text
WORKOUT_COUNT_MILESTONES: Dict[int, str] = {
    1: "First workout completed!",
    5: "5 workouts completed!",
    10: "10 workouts completed!",
}
GOAL_COMPLETED_DESCRIPTION = "Goal completed!"

# Allowed owner/tracker status edits. COMPLETED and CANCELLED are terminal.
GOAL_STATUS_TRANSITIONS: Dict[GoalStatus, FrozenSet[GoalStatus]] = {
    GoalStatus.ACTIVE: frozenset({GoalStatus.PAUSED, GoalStatus.CANCELLED, GoalStatus.COMPLETED}),
    GoalStatus.PAUSED: frozenset({GoalStatus.ACTIVE, GoalStatus.CANCELLED}),
    GoalStatus.COMPLETED: frozenset(),
    GoalStatus.CANCELLED: frozenset(),
}
