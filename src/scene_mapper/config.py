"""
Configuration management for Scene Mapper.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Reference canvas extent shared by the renderer and the position model
CANVAS_WIDTH = 600.0
CANVAS_HEIGHT = 400.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # Canvas placement (must lie within CANVAS_WIDTH x CANVAS_HEIGHT)
    # ==========================================================================
    spawn_x_min: float = 100.0
    spawn_x_max: float = 500.0
    spawn_y_min: float = 100.0
    spawn_y_max: float = 400.0

    # ==========================================================================
    # Interpretation
    # ==========================================================================
    connection_probability: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Chance of linking adjacent elements"
    )
    random_seed: int | None = Field(
        default=None, description="Fixed seed for reproducible scenes (None = entropy)"
    )

    # ==========================================================================
    # Rendering
    # ==========================================================================
    render_connect_delay: float = Field(
        default=0.8, ge=0.0, description="Seconds between elements and connections"
    )
    render_element_stagger: float = Field(
        default=0.1, ge=0.0, description="Per-element appear delay in seconds"
    )

    # ==========================================================================
    # Processing stages
    # ==========================================================================
    processing_stage_delay: float = Field(
        default=0.5, ge=0.0, description="Seconds spent on each processing stage"
    )

    # ==========================================================================
    # Confidence
    # ==========================================================================
    confidence_high_threshold: float = 0.8
    confidence_medium_threshold: float = 0.6
    estimated_confidence_min: float = 0.7
    estimated_confidence_max: float = 1.0

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    @model_validator(mode="after")
    def check_ranges(self) -> "Settings":
        """Keep spawn bounds inside the canvas and thresholds ordered."""
        if not (0 <= self.spawn_x_min <= self.spawn_x_max <= CANVAS_WIDTH):
            raise ValueError("spawn_x range must lie within the canvas width")
        if not (0 <= self.spawn_y_min <= self.spawn_y_max <= CANVAS_HEIGHT):
            raise ValueError("spawn_y range must lie within the canvas height")
        if self.confidence_medium_threshold > self.confidence_high_threshold:
            raise ValueError("confidence_medium_threshold exceeds confidence_high_threshold")
        if self.estimated_confidence_min > self.estimated_confidence_max:
            raise ValueError("estimated_confidence_min exceeds estimated_confidence_max")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
