"""
Configuration module for Excel Cell Differ.
Settings are loaded from environment variables (and a .env file if present).
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REPORT_MODES = ("compact", "visual")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIR: Optional[Path] = Field(
        default=None,
        description="Directory for log files (no file logging when unset)"
    )

    # Report rendering
    MAX_TABLE_ROWS: int = Field(
        default=200,
        ge=1,
        description="Maximum rows per compact change table"
    )
    TOP_N: int = Field(
        default=10,
        ge=0,
        description="Rows/columns listed in touch summaries"
    )
    REPORT_MODE: str = Field(
        default="compact",
        description="Report mode: 'compact' or 'visual'"
    )
    OUTPUT_PATH: Path = Field(
        default=Path("custom-diff.md"),
        description="Where the report command writes its output"
    )

    # Git revisions (as provided by CI)
    REPO_PATH: Path = Field(default=Path("."), description="Git repository to read snapshots from")
    BASE_SHA: Optional[str] = Field(default=None, description="Base revision")
    HEAD_SHA: Optional[str] = Field(default=None, description="Head revision")
    XLSX_LIST: str = Field(
        default="",
        description="Newline-separated list of changed spreadsheet paths"
    )

    @field_validator("REPORT_MODE")
    @classmethod
    def validate_report_mode(cls, v):
        """Ensure report mode is valid."""
        v = v.lower()
        if v not in REPORT_MODES:
            raise ValueError("REPORT_MODE must be 'compact' or 'visual'")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize log level name."""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v

    @property
    def xlsx_files(self) -> List[str]:
        """XLSX_LIST split into paths, blank lines dropped."""
        return [line.strip() for line in self.XLSX_LIST.splitlines() if line.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get the global settings instance."""
    return Settings()
