"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Visit (stationary) thresholds
    visit_minimum_valid_duration: float = 10.0
    visit_minimum_keeper_duration: float = 120.0

    # Path (moving) thresholds
    path_minimum_valid_samples: int = 2
    path_minimum_valid_duration: float = 10.0
    path_minimum_valid_distance: float = 10.0
    path_minimum_keeper_duration: float = 60.0
    path_minimum_keeper_distance: float = 20.0

    model_config = {"env_prefix": "SEGMENTS_"}


settings = Settings()
