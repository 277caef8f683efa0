"""Configuration models for Chronicle CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from chronicle_cli.models.focus.engine import FocusConfiguration


class FocusSettings(BaseModel):
    """Focus timer settings, in minutes."""

    work_minutes: int = Field(default=25, description="Work phase length")
    short_break_minutes: int = Field(default=5, description="Short break length")
    long_break_minutes: int = Field(default=15, description="Long break length")
    sound: bool = Field(default=True, description="Ring the bell on phase change")
    haptic: bool = Field(default=True, description="Vibrate on phase change")

    @field_validator("work_minutes", "short_break_minutes", "long_break_minutes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("duration must be a positive number of minutes")
        return v

    def to_configuration(self) -> FocusConfiguration:
        return FocusConfiguration.from_minutes(
            work=self.work_minutes,
            short_break=self.short_break_minutes,
            long_break=self.long_break_minutes,
            sound=self.sound,
            haptic=self.haptic,
        )


class AnalyticsSettings(BaseModel):
    """Analytics storage settings."""

    snapshot_path: str | None = Field(
        default=None, description="Snapshot file (defaults to the user data dir)"
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "yaml"] = Field(
        default="pretty", description="Default format for stats output"
    )


class AppConfig(BaseModel):
    """Main Chronicle configuration."""

    focus: FocusSettings = Field(default_factory=FocusSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
