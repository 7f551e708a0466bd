"""
Configuration settings for the practice-spot scheduler.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with SPOT_SCHEDULER_ (nested fields use "__", e.g.
SPOT_SCHEDULER_BALANCED_QUOTA__RED=0.5).
"""
from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spot_scheduler.core.models import SpotColor, SRSProfile


class BalancedQuota(BaseModel):
    """Share of a balanced session reserved for each color."""

    red: float = Field(default=0.4, ge=0.0, le=1.0)
    yellow: float = Field(default=0.3, ge=0.0, le=1.0)
    green: float = Field(default=0.2, ge=0.0, le=1.0)
    blue: float = Field(default=0.1, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_total(self) -> BalancedQuota:
        total = self.red + self.yellow + self.green + self.blue
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"balanced quota shares must sum to 1.0, got {total:.3f}")
        return self

    def share(self, color: SpotColor) -> float:
        return {
            SpotColor.RED: self.red,
            SpotColor.YELLOW: self.yellow,
            SpotColor.GREEN: self.green,
            SpotColor.BLUE: self.blue,
        }[color]


class SchedulerSettings(BaseSettings):
    """Scheduler settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPOT_SCHEDULER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # SRS
    # ========================================
    profile: SRSProfile = Field(
        default=SRSProfile.STANDARD,
        description="Pacing profile (sets the minimum scheduling interval)",
    )
    retry_lag_minutes: int = Field(
        default=30,
        ge=1,
        description="Delay before an immediate retry after a failed attempt",
    )
    low_reliability_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Success rate below which quality is penalized",
    )
    high_reliability_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Success rate above which quality is boosted",
    )
    low_reliability_factor: float = Field(default=0.8, gt=0.0)
    high_reliability_factor: float = Field(default=1.1, gt=0.0)

    # ========================================
    # Sleep Gate
    # ========================================
    sleep_gate_hour: int = Field(
        default=22,
        ge=0,
        le=23,
        description="Reviews due at or after this hour move to the next morning",
    )
    wake_gate_hour: int = Field(
        default=6,
        ge=0,
        le=23,
        description="Reviews due before this hour move to later the same morning",
    )
    morning_hour: int = Field(
        default=8,
        ge=0,
        le=23,
        description="Hour that gated reviews are moved to",
    )
    gate_retries: bool = Field(
        default=False,
        description="Also apply the sleep gate to immediate retries",
    )

    # ========================================
    # Sessions
    # ========================================
    default_max_spots: int = Field(default=20, ge=1)
    default_session_minutes: int = Field(default=30, ge=1)
    balanced_quota: BalancedQuota = Field(default_factory=BalancedQuota)

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(default="INFO", description="loguru level for configure_logging")

    @model_validator(mode="after")
    def _check_thresholds(self) -> SchedulerSettings:
        if self.low_reliability_threshold > self.high_reliability_threshold:
            raise ValueError("low_reliability_threshold must not exceed high_reliability_threshold")
        return self

    @model_validator(mode="after")
    def _check_gate_hours(self) -> SchedulerSettings:
        if not self.wake_gate_hour <= self.morning_hour < self.sleep_gate_hour:
            raise ValueError(
                "gate hours must satisfy wake_gate_hour <= morning_hour < sleep_gate_hour, got "
                f"{self.wake_gate_hour} / {self.morning_hour} / {self.sleep_gate_hour}"
            )
        return self

    @property
    def retry_lag(self) -> timedelta:
        return timedelta(minutes=self.retry_lag_minutes)


@lru_cache(maxsize=1)
def get_settings() -> SchedulerSettings:
    """Get cached settings instance."""
    return SchedulerSettings()
