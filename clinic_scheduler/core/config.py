from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CLINIC_ID: str | None = None

    # Calendar grid rows, inclusive
    CALENDAR_START_HOUR: int = 8
    CALENDAR_END_HOUR: int = 20

    SLOT_INTERVAL_MINUTES: int = 30
    RECURRENCE_MAX_COUNT: int = 52

    STORE_PROVIDER: str = "memory"  # "memory", "json", "supabase"
    DATA_DIR: str = "./data/appointments"

    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
