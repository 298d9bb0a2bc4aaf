"""
Configuration settings for DataMirror.

Uses Pydantic Settings to load environment variables for the mapping engine
conventions (legacy text encoding, indexed-parameter separator, error ledger
size, key-field marker, fallback number format), logging, and the database
used by the integration tests.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Mapping conventions
    text_encoding: str = Field("ISO-8859-15", alias="DATAMIRROR_TEXT_ENCODING")
    index_separator: str = Field(
        "_", alias="DATAMIRROR_INDEX_SEPARATOR", min_length=1, max_length=1
    )
    error_ledger_size: int = Field(10, alias="DATAMIRROR_ERROR_LEDGER_SIZE", ge=0)
    key_marker: str = Field("PKID", alias="DATAMIRROR_KEY_MARKER", min_length=1)

    # Fallback (Italian locale) number format
    decimal_separator: str = Field(
        ",", alias="DATAMIRROR_DECIMAL_SEPARATOR", min_length=1, max_length=1
    )
    grouping_separator: str = Field(
        ".", alias="DATAMIRROR_GROUPING_SEPARATOR", min_length=1, max_length=1
    )

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Database (integration tests only)
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("datamirror", alias="DB_NAME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def dsn(self) -> str:
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
