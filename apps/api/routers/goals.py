"""
Goal API Endpoints

Goal creation (with the advisory realism check), workout completion,
owner status edits and dashboard views. The caller loads the goal, posts
it here, and saves whatever comes back; nothing is stored by this service.
"""
from fastapi import APIRouter
import logging

from core.exceptions import BadRequestError, ConflictError, NotFoundError
from models import Goal
from schemas import (
    CompleteWorkoutRequest,
    DashboardRequest,
    DashboardResponse,
    GoalCreateRequest,
    GoalCreateResponse,
    GoalProgressSchema,
    GoalSchema,
    GoalStatusRequest,
    GoalSummaryRequest,
    GoalSummaryResponse,
    RealismCheckRequest,
    RealismCheckResponse,
    WeekProgressSchema,
)
from services.fitness_engine.errors import (
    GoalWorkoutNotFoundError,
    InvalidStatusTransitionError,
    WorkoutAlreadyCompletedError,
)
from services.fitness_engine.goal_progress import (
    WorkoutCompletion,
    apply_completion,
    update_goal_status,
)
from services.fitness_engine.goal_realism import (
    RealismCheck,
    check_goal_realism,
    realism_level,
)
from services.fitness_engine.goal_schedule import (
    TargetOverrides,
    create_goal,
    dashboard_stats,
    days_remaining,
    week_progress,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/goals", tags=["goals"])


def _realism_response(check: RealismCheck) -> RealismCheckResponse:
    return RealismCheckResponse(
        is_realistic=check.is_realistic,
        warnings=check.warnings,
        workouts_per_week=check.workouts_per_week,
        level=realism_level(check),
    )


def _summary(goal: Goal, today=None) -> GoalSummaryResponse:
    return GoalSummaryResponse(
        goal_id=goal.id,
        status=goal.status,
        progress=GoalProgressSchema.model_validate(goal.progress),
        days_remaining=days_remaining(goal, today),
        week_progress=WeekProgressSchema.model_validate(week_progress(goal, today)),
    )


@router.post("/realism", response_model=RealismCheckResponse)
def check_realism(request: RealismCheckRequest):
    """Advisory check of a proposed goal's weekly load."""
    profile = request.profile.to_record() if request.profile is not None else None
    check = check_goal_realism(
        profile,
        request.proposed_workout_count,
        request.start_date,
        request.end_date,
    )
    return _realism_response(check)


@router.post("", response_model=GoalCreateResponse, status_code=201)
def create(request: GoalCreateRequest):
    """
    Build a new goal.
    
    Explicit workouts win over the program's schedule. The realism check is
    returned alongside the goal and never blocks creation.
    """
    overrides = None
    if request.targets is not None:
        overrides = TargetOverrides(**request.targets.model_dump())
    goal, realism = create_goal(
        title=request.title,
        description=request.description,
        start_date=request.start_date,
        end_date=request.end_date,
        profile=request.profile.to_record() if request.profile is not None else None,
        program=request.program.to_record() if request.program is not None else None,
        workouts=[(w.workout_id, w.scheduled_date) for w in request.workouts],
        overrides=overrides,
        goal_type=request.type,
        user_id=request.user_id,
    )
    return GoalCreateResponse(
        goal=GoalSchema.model_validate(goal),
        realism_check=_realism_response(realism),
    )


@router.post("/complete-workout", response_model=GoalSchema)
def complete_workout(request: CompleteWorkoutRequest):
    """Mark a goal workout done; returns the goal to save back."""
    completion = WorkoutCompletion(
        goal_workout_id=request.workout_id,
        actual_duration=request.actual_duration,
        calories_burned=request.calories_burned,
        notes=request.notes,
        difficulty_rating=request.difficulty.value if request.difficulty else None,
        enjoyment=request.enjoyment,
    )
    try:
        updated = apply_completion(request.goal.to_record(), completion)
    except GoalWorkoutNotFoundError:
        logger.info(f"Workout {request.workout_id} not found in goal {request.goal.id}")
        raise NotFoundError("Workout in goal", request.workout_id)
    except WorkoutAlreadyCompletedError:
        logger.info(f"Workout {request.workout_id} in goal {request.goal.id} already completed")
        raise BadRequestError("Workout already completed", error_code="ALREADY_COMPLETED")
    return GoalSchema.model_validate(updated)


@router.post("/status", response_model=GoalSchema)
def change_status(request: GoalStatusRequest):
    """Owner status edit (pause, resume, cancel)."""
    try:
        updated = update_goal_status(request.goal.to_record(), request.status)
    except InvalidStatusTransitionError as e:
        logger.warning(f"Rejected status change for goal {request.goal.id}: {e}")
        raise ConflictError(str(e))
    return GoalSchema.model_validate(updated)


@router.post("/summary", response_model=GoalSummaryResponse)
def summary(request: GoalSummaryRequest):
    """Days remaining and this week's progress for one goal."""
    return _summary(request.goal.to_record(), request.today)


@router.post("/dashboard", response_model=DashboardResponse)
def dashboard(request: DashboardRequest):
    """Totals across a user's goals plus the current active goal."""
    stats = dashboard_stats([g.to_record() for g in request.goals], request.today)
    return DashboardResponse(
        total_goals=stats.total_goals,
        completed_goals=stats.completed_goals,
        total_workouts_completed=stats.total_workouts_completed,
        week_progress=WeekProgressSchema.model_validate(stats.week_progress),
        current_goal=_summary(stats.current_goal, request.today) if stats.current_goal else None,
    )
