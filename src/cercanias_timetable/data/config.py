from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimetableConfig(BaseSettings):
    """Configuration for feed location, download and PDF output.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    gtfs_path: Path | None = Field(default=None, alias="CERCANIAS_GTFS_PATH")
    feed_url: str = Field(
        default="https://ssl.renfe.com/ftransit/Fichero_CER_FOMENTO/fomento_transit.zip",
        alias="CERCANIAS_FEED_URL",
    )
    download_timeout_seconds: float = Field(default=60.0, alias="CERCANIAS_DOWNLOAD_TIMEOUT")
    output_dir: Path = Field(default=Path("."), alias="CERCANIAS_OUTPUT_DIR")


@lru_cache
def get_config() -> TimetableConfig:
    """Get timetable configuration (cached singleton).

    Returns:
        TimetableConfig with values from .env file or environment variables.
    """
    return TimetableConfig()
