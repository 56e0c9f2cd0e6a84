"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

from eligibility_engine import __version__

DEFAULT_DECISION_TABLE = (
    Path(__file__).resolve().parent.parent
    / "unpaid_leave"
    / "data"
    / "unpaid-leave-assistance-2025.json"
)


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API
    app_name: str = "Eligibility Engine"
    app_version: str = __version__
    bind_address: str = "127.0.0.1:8001"
    cors_origins: str = "*"

    # Evaluation
    decision_table_path: str = str(DEFAULT_DECISION_TABLE)
    evaluation_workers: int = 4

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def host(self) -> str:
        return self.bind_address.rsplit(":", 1)[0]

    @property
    def port(self) -> int:
        return int(self.bind_address.rsplit(":", 1)[1])


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
