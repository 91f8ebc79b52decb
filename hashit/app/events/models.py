from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# ----------------------------------------------------------------------
# Event Types
# ----------------------------------------------------------------------
class HashEventType(str, Enum):
    """
    Progression events emitted during a run.

    Events are observational; nothing in the pipeline reads them back.
    """

    RUN_STARTED = "run_started"
    RUN_COMPLETED = "run_completed"
    RUN_FAILED = "run_failed"

    DISCOVERY_COMPLETED = "discovery_completed"

    FILE_PROCESSED = "file_processed"
    FILE_FAILED = "file_failed"


# ----------------------------------------------------------------------
# Event Model
# ----------------------------------------------------------------------
class HashEvent(BaseModel):
    """
    An immutable observation of pipeline progress.

    FILE_* events carry the DigestSet JSON under ``details["result"]``.
    """

    event_id: UUID = Field(default_factory=uuid4)
    run_id: str = Field(..., description="Identifier of the run")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    event_type: HashEventType

    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
