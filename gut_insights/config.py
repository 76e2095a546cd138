from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql://postgres:postgres@db:5432/gut_insights"
    anthropic_api_key: str = ""  # Empty disables the narrative summary

    narrative_model: str = "claude-sonnet-4-5-20250929"
    narrative_max_tokens: int = 1024

    # Anthropic API timeout settings (seconds)
    anthropic_timeout: int = 30
    anthropic_connect_timeout: int = 10
    narrative_timeout_seconds: float = 30.0  # Hard ceiling on the whole narrative call

    # Analysis thresholds
    analysis_default_lookback_days: int = 30
    analysis_max_lookback_days: int = 365
    analysis_min_logs: int = 3
    analysis_min_logs_for_narrative: int = 5
    analysis_top_n: int = 10
    analysis_window_hours: int = 72
    analysis_min_occurrences: int = 2

    # Auth settings
    session_cookie_name: str = "gut_insights_session"
    session_max_age: int = 86400 * 7  # 7 days
    session_cookie_secure: bool = False  # True in production

    class Config:
        env_file = ".env"


settings = Settings()
