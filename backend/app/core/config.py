from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "vidmod"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/vidmod.db"
    LOG_LEVEL: str = "INFO"

    # Identity provider tokens (HS256 shared secret, sub = user external id)
    AUTH_JWT_SECRET: str = "change-me"
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: str = ""

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Admin console clients re-fetch the unread count on this interval
    NOTIFICATION_POLL_INTERVAL_SECONDS: int = 30

    # Classifier score thresholds (0.0 - 1.0)
    NSFW_FLAG_THRESHOLD: float = 0.8
    TOXICITY_FLAG_THRESHOLD: float = 0.7
    TOXICITY_HIDE_THRESHOLD: float = 0.9

    # Activity timeline fan-out
    ACTIVITY_MAX_WORKERS: int = 6


settings = Settings()
