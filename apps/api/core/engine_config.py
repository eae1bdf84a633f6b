"""
Recommendation Engine Configuration

Backend-configurable tolerances for program matching and goal realism.
Allows adjustment of matching windows without code changes.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseSettings):
    """
    Configurable engine settings.
    
    These can be adjusted via environment variables without
    requiring code changes.
    """
    model_config = SettingsConfigDict(env_prefix="FITCORE_", case_sensitive=False)
    
    # Programs longer than the preferred session by more than this are filtered out.
    # Also the "close" window for the duration-fit score bonus.
    # Default: 15 minutes
    duration_tolerance_minutes: int = 15
    
    # Wider window that still earns a partial duration-fit bonus
    # Default: 30 minutes
    duration_close_minutes: int = 30
    
    # Sedentary users planning more than this per week get a realism warning
    # Default: 3 workouts
    realism_sedentary_max_per_week: int = 3


# Global config instance
engine_config = EngineConfig()
