"""
Schema definitions for rate spike detection.

RateSample is produced once per event and is kept deliberately light.
Snapshots and spike events are Pydantic models for validation and export.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Union
from uuid import uuid4

from pydantic import BaseModel, Field


class DetectorState(str, Enum):
    """Recovery state of a detector."""

    NOMINAL = "nominal"
    RECOVERING = "recovering"


@dataclass(frozen=True)
class RateSample:
    """
    Outputs for one processed event.

    Fields:
    - timestamp: event timestamp as supplied by the caller
    - ratio: instantaneous rate / filtered rate
    - is_spike: ratio exceeded the detector threshold
    - admit_probability: recovery signal in (0, 1]
    """

    timestamp: Union[int, float]
    ratio: float
    is_spike: bool
    admit_probability: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DetectorSnapshot(BaseModel):
    """
    Point-in-time view of a detector, for diagnostics.

    Fields:
    - capacity/count: history size and fill level
    - is_warm: history buffer is full
    - filtered_rate: current smoothed rate (events per time unit)
    - last_spike_time/last_spike_excess: most recent spike, (0, 0) if none
    - state: nominal or recovering
    - events_processed/spikes_detected: lifetime counters
    """

    capacity: int = Field(ge=2)
    count: int = Field(ge=0)
    is_warm: bool
    filtered_rate: float = Field(ge=0.0)
    last_spike_time: Union[int, float]
    last_spike_excess: float = Field(ge=0.0)
    state: DetectorState
    events_processed: int = Field(ge=0)
    spikes_detected: int = Field(ge=0)


class SpikeEvent(BaseModel):
    """
    A detected spike on a named stream.

    Fields:
    - event_id: unique identifier
    - stream: stream name the event belongs to
    - timestamp: event timestamp in stream time units
    - ratio: rate / filtered rate at the event
    - excess: ratio - 1, the amplitude used for the recovery curve
    - admit_probability: probability right after the spike
    - detected_at: wall-clock detection time (UTC)
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    stream: str = Field(..., min_length=1)
    timestamp: Union[int, float]
    ratio: float
    excess: float
    admit_probability: float = Field(gt=0.0, le=1.0)
    detected_at: datetime
