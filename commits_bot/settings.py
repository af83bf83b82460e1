from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Bot settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_repo: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_user_agent: str = "commits-bot"
    github_timeout_seconds: float = 15.0
    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
