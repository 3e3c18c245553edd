from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "QAXP"
    ADMIN_EMAIL: str = "nikita@kedrov.com"
    FROM_EMAIL: str = "no-reply@qaxp.com"
    MEETING_LOCATION: str = "Online Meeting"
    BOOKING_URL: str = "https://qaxp.com"

    # Daily service window, local wall-clock "HH:MM"
    SERVICE_WINDOW_OPEN: str = "12:00"
    SERVICE_WINDOW_CLOSE: str = "18:00"
    BOOKING_DURATIONS: list[int] = [30]

    BOOKINGS_KEY: str = "qaxp-bookings"
    BOOKINGS_DATA_DIR: str = "./data"

    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str | None = None
    SMTP_PASS: str | None = None
    SMTP_TIMEOUT_SECONDS: float = 20.0

    EMAIL_API_URL: str | None = None
    NOTIFICATIONS_ENABLED: bool = True


settings = Settings()
