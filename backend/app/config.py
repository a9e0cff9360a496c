"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All deployment-specific values come from environment variables or .env
    - get_settings() is cached (lru_cache) — single instance per process
    - Pool sizing is validated at load time: max_size >= core_size >= 0

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with a local SQLite file
    - Pool defaults mirror production sizing; tests build their own small pools
      instead of overriding these
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite:///./players.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but SQLAlchemy needs the driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Single-record lookup
    player_lookup_delay_seconds: float = 2.0

    # Pagination
    default_page_size: int = 10

    # Record pool (get-all, get-by-id, save)
    record_pool_core_size: int = 5
    record_pool_max_size: int = 20
    record_pool_queue_capacity: int = 100
    record_pool_keep_alive_seconds: float = 60
    record_pool_thread_prefix: str = "Player-"

    # Pagination pool (get-page)
    pagination_pool_core_size: int = 3
    pagination_pool_max_size: int = 10
    pagination_pool_queue_capacity: int = 50
    pagination_pool_keep_alive_seconds: float = 30
    pagination_pool_thread_prefix: str = "Paginated-"

    @model_validator(mode="after")
    def check_pool_sizing(self) -> "Settings":
        for prefix in ("record_pool", "pagination_pool"):
            core = getattr(self, f"{prefix}_core_size")
            maximum = getattr(self, f"{prefix}_max_size")
            if core < 0 or maximum < max(core, 1):
                raise ValueError(
                    f"{prefix}: max_size ({maximum}) must be >= core_size ({core}) and >= 1",
                )
        return self

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
