"""Coordination-free 64-bit Snowflake ID generation."""

from flakeid.errors import ClockMovedBackwardsError, FlakeIdError, InvalidSnowflakeError
from flakeid.generator import Generator, decompose
from flakeid.models import SnowflakeParts

__all__ = [
    "ClockMovedBackwardsError",
    "FlakeIdError",
    "Generator",
    "InvalidSnowflakeError",
    "SnowflakeParts",
    "decompose",
]
