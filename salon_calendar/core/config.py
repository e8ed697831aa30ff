from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Europe/Istanbul is UTC+3 year-round (no DST since 2016)
    BUSINESS_TIMEZONE: str = "Europe/Istanbul"

    DAY_START_HOUR: int = 8
    DAY_END_HOUR: int = 20
    LANE_GAP_PX: int = 6
    MONTH_CELL_MAX_CHIPS: int = 3

    ADMIN_API_BASE_URL: str | None = None
    ADMIN_API_TOKEN: str | None = None
    HTTP_TIMEOUT_SECONDS: float = 10.0

    REALTIME_ROOM: str = "adminRoom"
    REALTIME_WEBHOOK_SECRET: str | None = None
    REALTIME_CALLBACK_URL: str | None = None
    REALTIME_RETRY_SECONDS: float = 5.0
    REALTIME_RENEW_SECONDS: float = 300.0

    TOAST_HISTORY_SIZE: int = 50


settings = Settings()
