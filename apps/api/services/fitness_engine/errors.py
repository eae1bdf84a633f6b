"""Domain errors raised by the goal progress tracker."""


class GoalProgressError(Exception):
    """Base class for expected goal bookkeeping failures."""


class GoalWorkoutNotFoundError(GoalProgressError):
    """The workout id does not belong to the goal."""

    def __init__(self, goal_workout_id: str):
        super().__init__(f"Workout not found in goal: {goal_workout_id}")
        self.goal_workout_id = goal_workout_id


class WorkoutAlreadyCompletedError(GoalProgressError):
    """Raised when a goal workout is marked complete a second time."""

    def __init__(self, goal_workout_id: str):
        super().__init__(f"Workout already completed: {goal_workout_id}")
        self.goal_workout_id = goal_workout_id


class InvalidStatusTransitionError(GoalProgressError):
    def __init__(self, current, target):
        super().__init__(f"Cannot change goal status from {current.value} to {target.value}")
        self.current = current
        self.target = target
