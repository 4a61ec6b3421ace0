"""
Application configuration for the rate spike detector.

Provides environment-aware settings with conservative defaults. Detector
parameters are configurable to avoid hard-coded "magic numbers".
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectorConfig(BaseModel):
    """
    Configuration for a single-stream rate spike detector.

    Notes:
    - capacity: number of recent timestamps kept in the history ring buffer.
    - threshold: rate / filtered rate above which an event is a spike.
    - decay_constant: per-time-unit rate at which the admit probability
      recovers towards 1 after a spike.
    - origin: value held by history slots that were never written. Streams
      are expected to start strictly after it.
    """

    capacity: int = Field(256, ge=2, description="History ring buffer size")
    threshold: float = Field(2.0, gt=0.0, description="Spike ratio cutoff")
    decay_constant: float = Field(
        0.00001, ge=0.0, description="Admit probability decay rate per time unit"
    )
    origin: Union[int, float] = Field(
        0, description="Fill value for unwritten history slots"
    )


class Config(BaseSettings):
    """
    Global configuration with environment overrides.

    Nested fields use a double underscore, e.g. RATESPIKE_DETECTOR__CAPACITY=512.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATESPIKE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Default logging level")
    logs_dir: Path = Field(Path("logs"), description="Directory for log files")
    log_to_file: bool = Field(False, description="Also write logs to logs_dir")
    detector: DetectorConfig = DetectorConfig()


config = Config()
