"""Models describing the fields packed into a snowflake ID."""

from datetime import datetime

from pydantic import BaseModel, Field


class SnowflakeParts(BaseModel):
    """The fields recovered from a single snowflake ID."""

    id: int = Field(ge=0, description="The decomposed ID")
    elapsed_ms: int = Field(description="Milliseconds since the generator epoch")
    timestamp_ms: int = Field(description="Absolute Unix time in milliseconds")
    timestamp: datetime = Field(description="Generation time as an aware UTC datetime")
    group_id: int = Field(ge=0, le=31, description="Region/data center id (5 bits)")
    worker_id: int = Field(ge=0, le=31, description="Worker id (5 bits)")
    sequence: int = Field(ge=0, le=4095, description="Per-millisecond counter (12 bits)")
