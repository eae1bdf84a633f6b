"""
Tests for goal creation and the dashboard date-window views.
"""

import pytest
from datetime import date, timedelta

from services.fitness_engine.constants import GoalStatus, GoalType
from services.fitness_engine.goal_schedule import (
    TargetOverrides,
    build_schedule_from_program,
    create_goal,
    current_goal,
    dashboard_stats,
    days_remaining,
    default_targets,
    week_bounds,
    week_progress,
)


GOAL_START = date(2026, 3, 1)  # Sunday
TODAY = date(2026, 3, 10)  # Tuesday


class TestBuildSchedule:

    def test_two_full_weeks(self, weekly_program):
        workouts = build_schedule_from_program(weekly_program, GOAL_START, GOAL_START + timedelta(days=14))
        assert [w.scheduled_date for w in workouts] == [
            date(2026, 3, 2), date(2026, 3, 4), date(2026, 3, 6),
            date(2026, 3, 9), date(2026, 3, 11), date(2026, 3, 13),
        ]
        assert [w.workout_id for w in workouts[:3]] == ["w-mon", "w-wed", "w-fri"]
        assert all(not w.completed for w in workouts)

    def test_entries_past_end_date_dropped(self, weekly_program):
        workouts = build_schedule_from_program(weekly_program, GOAL_START, date(2026, 3, 10))
        assert [w.scheduled_date for w in workouts] == [
            date(2026, 3, 2), date(2026, 3, 4), date(2026, 3, 6), date(2026, 3, 9),
        ]

    def test_program_without_schedule(self, make_program):
        assert build_schedule_from_program(make_program(), GOAL_START, GOAL_START + timedelta(days=28)) == []

    def test_goal_workout_ids_unique(self, weekly_program):
        workouts = build_schedule_from_program(weekly_program, GOAL_START, GOAL_START + timedelta(days=28))
        assert len({w.id for w in workouts}) == len(workouts) == 12


class TestDefaultTargets:

    def test_per_week_from_schedule(self, weekly_program):
        end = GOAL_START + timedelta(days=14)
        targets = default_targets(build_schedule_from_program(weekly_program, GOAL_START, end), GOAL_START, end)
        assert targets.total_workouts == 6
        assert targets.workouts_per_week == 3
        assert targets.total_calories == 0

    def test_partial_week_rounds_up(self, weekly_program):
        end = date(2026, 3, 10)
        targets = default_targets(build_schedule_from_program(weekly_program, GOAL_START, end), GOAL_START, end)
        # 4 workouts over 9/7 weeks
        assert targets.workouts_per_week == 4

    def test_overrides(self, weekly_program):
        end = GOAL_START + timedelta(days=14)
        targets = default_targets(
            build_schedule_from_program(weekly_program, GOAL_START, end),
            GOAL_START,
            end,
            TargetOverrides(workouts_per_week=2, total_calories=3000, total_duration=600),
        )
        assert targets.workouts_per_week == 2
        assert targets.total_calories == 3000
        assert targets.total_duration == 600


class TestCreateGoal:

    def test_from_program(self, make_profile, weekly_program):
        profile = make_profile(fitness_level="intermediate")
        goal, realism = create_goal(
            "March block",
            GOAL_START,
            GOAL_START + timedelta(days=28),
            profile=profile,
            program=weekly_program,
            user_id="user-1",
        )
        assert goal.status == GoalStatus.ACTIVE
        assert goal.type == GoalType.WEEKLY
        assert goal.program_id == "prog-mwf"
        assert goal.user_id == "user-1"
        assert len(goal.workouts) == 12
        assert goal.progress.completed_workouts == 0
        assert goal.progress.completion_percentage == 0
        assert goal.achievements == []
        assert realism.is_realistic is True
        assert realism.workouts_per_week == 3.0

    def test_explicit_workouts_win(self, weekly_program):
        goal, _ = create_goal(
            "Custom",
            GOAL_START,
            GOAL_START + timedelta(days=7),
            program=weekly_program,
            workouts=[("w-a", date(2026, 3, 3)), ("w-b", date(2026, 3, 5))],
        )
        assert [w.workout_id for w in goal.workouts] == ["w-a", "w-b"]
        assert goal.targets.total_workouts == 2

    def test_unrealistic_goal_still_created(self, make_profile):
        """Beginner asking for ten workouts in one week gets a warning, not a refusal."""
        profile = make_profile(fitness_level="beginner")
        workouts = [(f"w-{i}", GOAL_START + timedelta(days=i % 7)) for i in range(10)]
        goal, realism = create_goal("Too much", GOAL_START, GOAL_START + timedelta(days=7),
                                    profile=profile, workouts=workouts)
        assert len(goal.workouts) == 10
        assert realism.is_realistic is False
        assert any("no more than 4 workouts per week" in w for w in realism.warnings)

    def test_without_profile_is_realistic(self):
        goal, realism = create_goal("Empty", GOAL_START, GOAL_START + timedelta(days=7))
        assert goal.workouts == []
        assert realism.is_realistic is True
        assert realism.warnings == []

    @pytest.mark.parametrize("end", [GOAL_START, GOAL_START - timedelta(days=1)])
    def test_end_must_follow_start(self, end):
        with pytest.raises(ValueError):
            create_goal("Backwards", GOAL_START, end)


class TestDateWindows:

    def test_days_remaining(self, make_goal):
        goal = make_goal(end_date=date(2026, 3, 29))
        assert days_remaining(goal, TODAY) == 19
        assert days_remaining(goal, date(2026, 4, 5)) == 0

    @pytest.mark.parametrize("today,expected_start", [
        (date(2026, 3, 8), date(2026, 3, 8)),    # Sunday
        (date(2026, 3, 10), date(2026, 3, 8)),   # Tuesday
        (date(2026, 3, 14), date(2026, 3, 8)),   # Saturday
    ])
    def test_week_bounds(self, today, expected_start):
        assert week_bounds(today) == (expected_start, expected_start + timedelta(days=6))

    def test_week_progress(self, make_goal):
        # Daily workouts from March 1; March 8-14 holds seven, two of them done
        goal = make_goal(total=14, completed=9)
        week = week_progress(goal, TODAY)
        assert week.total == 7
        assert week.completed == 2
        assert week.percentage == 29

    def test_week_progress_without_goal(self):
        week = week_progress(None, TODAY)
        assert (week.completed, week.total, week.percentage) == (0, 0, 0)


class TestDashboard:

    def test_stats(self, make_goal):
        goals = [
            make_goal(id="goal-1", total=14, completed=9),
            make_goal(id="goal-2", total=2, completed=2, status=GoalStatus.COMPLETED),
            make_goal(id="goal-3", total=3, completed=1, status=GoalStatus.CANCELLED),
        ]
        stats = dashboard_stats(goals, TODAY)
        assert stats.total_goals == 3
        assert stats.completed_goals == 1
        assert stats.total_workouts_completed == 12
        assert stats.current_goal.id == "goal-1"
        assert stats.current_goal_days_remaining == 19
        assert stats.week_progress.completed == 2

    def test_no_current_goal(self, make_goal):
        goals = [make_goal(status=GoalStatus.PAUSED)]
        stats = dashboard_stats(goals, TODAY)
        assert stats.current_goal is None
        assert stats.current_goal_days_remaining is None
        assert stats.week_progress.total == 0

    def test_current_goal_must_contain_today(self, make_goal):
        future = make_goal(id="later", start_date=date(2026, 4, 1), end_date=date(2026, 4, 29))
        running = make_goal(id="now")
        assert current_goal([future, running], TODAY).id == "now"
