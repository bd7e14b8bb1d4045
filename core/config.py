# core/config.py

"""
Environment-driven settings for the Student Records CLI.

Values are read from `STUDENT_RECORDS_*` environment variables or a local `.env` file.
`get_settings()` is cached, so the process sees one settings instance.
"""

import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_FILE = os.path.join(
    os.path.expanduser("~"), "Documents", "StudentRecords", "students.json"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STUDENT_RECORDS_",
        env_file=".env",
        extra="ignore",
    )

    data_file: str = DEFAULT_DATA_FILE
    log_level: str = "WARNING"
    log_file: str | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
