import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def new_log_id() -> str:
    """Return a unique identifier for a log entry."""
    return f"log_{uuid.uuid4()}"


class BaseLogEntry(BaseModel):
    """Common metadata for all log entries."""

    log_id: str = Field(default_factory=new_log_id)
    run_id: str
    rule: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SweepPayload(BaseModel):
    sweep: int
    moves: int
    total_moves: int


class SweepLog(BaseLogEntry):
    event_type: str = "SweepCompleted"
    payload: SweepPayload


class RunSummaryPayload(BaseModel):
    order: int
    rounds: int
    sweeps: int
    moves: int
    elapsed_ns: int
    seed: Optional[int] = None
    final_state: List[int]


class RunSummaryLog(BaseLogEntry):
    event_type: str = "RunStabilized"
    payload: RunSummaryPayload


class TimeoutPayload(BaseModel):
    sweeps: int
    moves: int


class TimeoutLog(BaseLogEntry):
    event_type: str = "StabilizationTimeout"
    payload: TimeoutPayload
