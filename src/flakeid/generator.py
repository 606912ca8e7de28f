"""Snowflake ID generator.

Structure of a generated ID (most significant bit first):

- 1 bit unused (sign, always 0)
- 41 bits timestamp (milliseconds since the generator epoch)
- 5 bits group id (region / data center)
- 5 bits worker id
- 12 bits sequence number

41 bits of milliseconds last about 69 years from the epoch.
"""

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from flakeid.errors import ClockMovedBackwardsError, InvalidSnowflakeError
from flakeid.models import SnowflakeParts
from flakeid.node import machine_id

logger = logging.getLogger(__name__)

SEQUENCE_MASK = (1 << 12) - 1
WORKER_MASK = (1 << 5) - 1
GROUP_MASK = (1 << 5) - 1

WORKER_SHIFT = 12
GROUP_SHIFT = 17
TIMESTAMP_SHIFT = 22

MAX_ID = 1 << 63

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Clock = Callable[[], int]


def current_millis() -> int:
    """Current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def _to_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_millis(value: datetime) -> int:
    return (value - UNIX_EPOCH) // timedelta(milliseconds=1)


def start_of_day(now: datetime | None = None) -> datetime:
    """Midnight UTC of the day containing ``now`` (default: today)."""
    now = _to_utc(now) if now is not None else datetime.now(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def decompose(snowflake: int, epoch: datetime) -> SnowflakeParts:
    """Split an ID back into its fields, relative to ``epoch``."""
    if not 0 <= snowflake < MAX_ID:
        raise InvalidSnowflakeError(f"Snowflake IDs fit in 0..2**63-1, got {snowflake}")

    elapsed = snowflake >> TIMESTAMP_SHIFT
    timestamp_ms = _to_millis(_to_utc(epoch)) + elapsed
    return SnowflakeParts(
        id=snowflake,
        elapsed_ms=elapsed,
        timestamp_ms=timestamp_ms,
        timestamp=UNIX_EPOCH + timedelta(milliseconds=timestamp_ms),
        group_id=(snowflake >> GROUP_SHIFT) & GROUP_MASK,
        worker_id=(snowflake >> WORKER_SHIFT) & WORKER_MASK,
        sequence=snowflake & SEQUENCE_MASK,
    )


class Generator:
    """Thread-safe Twitter Snowflake style ID generator.

    Args:
        epoch: Reference time IDs count from. Converted to UTC.
        *ids: Optional node identity. None resolves it from the host's
            IPv4 address, one value is used for both the group and worker
            id, two values are (group_id, worker_id). Values are masked to
            5 bits rather than rejected.
        clock: Zero-argument callable returning Unix time in milliseconds.
            Defaults to the system clock.
    """

    def __init__(self, epoch: datetime, *ids: int, clock: Clock | None = None) -> None:
        if len(ids) >= 2:
            group_id, worker_id = ids[0], ids[1]
        elif len(ids) == 1:
            group_id = worker_id = ids[0]
        else:
            group_id, worker_id = machine_id()

        self.epoch = _to_utc(epoch)
        self.group_id = group_id & GROUP_MASK
        self.worker_id = worker_id & WORKER_MASK

        self._epoch_ms = _to_millis(self.epoch)
        self._clock = clock or current_millis
        self._sequence = 0
        self._last_timestamp = 0
        self._lock = threading.Lock()

        if self._epoch_ms > current_millis():
            logger.warning("Epoch %s is in the future, IDs will be negative until then", self.epoch.isoformat())
        logger.debug("Generator created: %s", self.describe())

    @classmethod
    def default(cls, clock: Clock | None = None) -> "Generator":
        """Generator with today's midnight (UTC) epoch and a host-derived identity."""
        group_id, worker_id = machine_id()
        return cls(start_of_day(), group_id, worker_id, clock=clock)

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def last_timestamp(self) -> int:
        return self._last_timestamp

    def next_id(self) -> int:
        """Return the next ID.

        Raises:
            ClockMovedBackwardsError: the clock is behind the last issued ID.
                This must not be caught and ignored.
        """
        with self._lock:
            timestamp = self._clock()

            if timestamp < self._last_timestamp:
                logger.critical(
                    "Clock moved backwards: last=%d now=%d", self._last_timestamp, timestamp
                )
                raise ClockMovedBackwardsError(self._last_timestamp, timestamp)

            if timestamp == self._last_timestamp:
                self._sequence = (self._sequence + 1) & SEQUENCE_MASK
                if self._sequence == 0:
                    # Sequence exhausted, spin until the next millisecond
                    logger.debug("Sequence exhausted at %d, waiting for next millisecond", timestamp)
                    while timestamp <= self._last_timestamp:
                        timestamp = self._clock()
            else:
                self._sequence = 0

            self._last_timestamp = timestamp
            sequence = self._sequence

        elapsed = timestamp - self._epoch_ms
        return (
            (elapsed << TIMESTAMP_SHIFT)
            | (self.group_id << GROUP_SHIFT)
            | (self.worker_id << WORKER_SHIFT)
            | sequence
        )

    def decompose(self, snowflake: int) -> SnowflakeParts:
        """Split an ID issued by this generator back into its fields."""
        return decompose(snowflake, self.epoch)

    def describe(self) -> str:
        return (
            f"start_time:{self.epoch.isoformat()}, data_center:{self.group_id}, "
            f"worker_id:{self.worker_id}, sequence:{self._sequence}"
        )

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"Generator(epoch={self.epoch.isoformat()!r}, "
            f"group_id={self.group_id}, worker_id={self.worker_id})"
        )
