from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://moodlog:moodlog@db:5432/moodlog"
    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://moods.example.com,https://api.example.com"
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"
    # JSON log lines instead of the console renderer. Defaults on in production.
    LOG_JSON: bool | None = None

    # Which schema generation the stats endpoint aggregates by default.
    MOOD_GENERATION: Literal["score", "intensity"] = "score"
    HISTORY_DEFAULT_DAYS: int = 7
    STATS_DEFAULT_DAYS: int = 30

    # Agent tool adapter
    TOOL_BACKEND: Literal["store", "http"] = "store"
    MOODLOG_API_URL: str = "http://localhost:8000"
    DASHBOARD_URL: str = "http://localhost:3000"
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def log_json(self) -> bool:
        if self.LOG_JSON is not None:
            return self.LOG_JSON
        return self.APP_ENV == "production"


settings = Settings()
