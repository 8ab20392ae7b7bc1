from pathlib import Path
import sys

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


package_data_dir = Path(__file__).resolve().parent / "data"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PASSIT_")

    data_dir: Path = package_data_dir
    # Consume one extra byte on the first sample in the process, half the time.
    maybe_read_byte: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {LOG_LEVELS}")
        return level


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logger.enable("passit")
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        backtrace=True,
        diagnose=False,
    )
