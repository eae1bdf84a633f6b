# Fitness Recommendation & Goal Progress Engine
#
# Pure functions over plain records (see models.py); no I/O.
#
# - evaluator:        profile facts -> bounded score -> level and workout limits
# - program_matcher:  profile + catalog -> ranked, explained suggestions
# - goal_realism:     profile + proposed goal load -> advisory warnings
# - goal_progress:    goal + completion event -> recomputed goal, achievements
# - goal_schedule:    goal construction from programs, date-window views
#
# Import the submodules directly; models.py depends on .constants, so this
# package does not re-export anything.
