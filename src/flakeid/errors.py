"""Exceptions raised by flakeid."""


class FlakeIdError(Exception):
    """Base class for recoverable flakeid errors."""


class InvalidSnowflakeError(FlakeIdError, ValueError):
    """Raised when a value cannot be decomposed as a snowflake ID."""


class ClockMovedBackwardsError(BaseException):
    """The system clock reported a time earlier than the last issued ID.

    This is fatal. Once the clock has gone backwards the generator can no
    longer promise unique, increasing IDs, so the process is expected to
    stop rather than catch this and carry on. It derives from BaseException
    so that generic ``except Exception`` handlers let it through.
    """

    def __init__(self, last_timestamp: int, current_timestamp: int) -> None:
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        super().__init__(
            f"Clock moved backwards by {last_timestamp - current_timestamp}ms, "
            "refusing to generate id"
        )
