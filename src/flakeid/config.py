"""Configuration management using pydantic-settings."""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from flakeid.generator import Generator, start_of_day


class GeneratorSettings(BaseModel):
    """Generator epoch and node identity."""
    epoch: datetime | None = Field(
        default=None, description="Reference time; midnight UTC today when unset"
    )
    group_id: int | None = None
    worker_id: int | None = None


class LoggingSettings(BaseModel):
    """Logging output settings."""
    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FLAKEID_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings() -> Settings:
    """Load settings from environment and .env file."""
    return Settings()


def from_settings(settings: Settings) -> Generator:
    """Build a generator from settings.

    With neither id configured the identity is resolved from the host. With
    only one, it is used for both fields.
    """
    conf = settings.generator
    epoch = conf.epoch if conf.epoch is not None else start_of_day()
    ids = [i for i in (conf.group_id, conf.worker_id) if i is not None]
    return Generator(epoch, *ids)
