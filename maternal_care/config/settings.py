from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_CHANNELS = ("whatsapp", "sms")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and `.env`.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Maternal Care API"
    PROJECT_DESCRIPTION: str = "Pregnancy tracking, medical reminders and multi-channel notifications"
    VERSION: str = "0.1.0"

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")

    # WhatsApp Cloud API settings
    WHATSAPP_API_BASE: str = Field("https://graph.facebook.com", description="Base URL for the WhatsApp API")
    WHATSAPP_API_VERSION: str = Field("v22.0", description="WhatsApp API version")
    WHATSAPP_PHONE_NUMBER_ID: str | None = Field(None, description="WhatsApp sender phone number ID")
    WHATSAPP_ACCESS_TOKEN: str | None = Field(None, description="Permanent access token for the WhatsApp API")

    # Twilio SMS settings
    TWILIO_ACCOUNT_SID: str | None = Field(None, description="Twilio account SID")
    TWILIO_AUTH_TOKEN: str | None = Field(None, description="Twilio auth token")
    TWILIO_PHONE_NUMBER: str | None = Field(None, description="Twilio sender phone number")
    SMS_MAX_LENGTH: int = Field(150, description="Maximum characters sent in a single SMS")

    # PostgreSQL Database Settings
    DATABASE_URL: str | None = Field(None, description="Full async database URL, overrides DB_* when set")
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("maternal_care", description="Database name")
    DB_USER: str = Field("postgres", description="PostgreSQL user")
    DB_PASSWORD: str | None = Field(None, description="PostgreSQL password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(20, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every X seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Timeout waiting for a pooled connection")

    # Text generation (Ollama)
    OLLAMA_API_URL: str = Field("http://localhost:11434", description="Ollama service URL")
    OLLAMA_API_MODEL: str = Field("llama3.2:latest", description="Model used for daily tips")
    OLLAMA_TEMPERATURE: float = Field(0.7, description="Sampling temperature for generated tips")
    OLLAMA_MAX_TOKENS: int = Field(200, description="Maximum tokens per generated tip")

    # Reminder scheduler
    REMINDER_SCHEDULER_ENABLED: bool = Field(True, description="Start the reminder scheduler on startup")
    REMINDER_TIMEZONE: str = Field("Africa/Kigali", description="Timezone used for reminder cadences")
    ANTENATAL_SWEEP_HOUR: int = Field(8, description="Hour of the daily antenatal sweep")
    VACCINATION_SWEEP_HOUR: int = Field(9, description="Hour of the daily vaccination sweep")
    MILESTONE_SWEEP_DAY: str = Field("mon", description="Day of week of the milestone sweep")
    MILESTONE_SWEEP_HOUR: int = Field(7, description="Hour of the weekly milestone sweep")
    DAILY_TIPS_ENABLED: bool = Field(False, description="Send an AI generated tip once a day")
    DAILY_TIPS_HOUR: int = Field(10, description="Hour of the daily tips run")
    DISPATCH_INTERVAL_MINUTES: int = Field(15, description="Minutes between delivery dispatcher runs")
    DISPATCH_BATCH_SIZE: int = Field(50, description="Maximum reminders delivered per dispatcher run")
    MAX_DELIVERY_ATTEMPTS: int = Field(3, description="Failed attempts before a reminder is marked failed")
    RETRY_BACKOFF_MINUTES: int = Field(30, description="Delay before a failed reminder is retried")
    SEND_TIMEOUT_SECONDS: float = Field(20.0, description="Timeout for a single channel send")
    CONTENT_TIMEOUT_SECONDS: float = Field(30.0, description="Timeout for generated content")
    NOTIFICATION_CHANNELS: str = Field("whatsapp,sms", description="Ordered, comma-separated delivery channels")
    DEFAULT_LANGUAGE: str = Field("en", description="Language used when a subject has none")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("ANTENATAL_SWEEP_HOUR", "VACCINATION_SWEEP_HOUR", "MILESTONE_SWEEP_HOUR", "DAILY_TIPS_HOUR")
    @classmethod
    def validate_hour(cls, v):
        if not 0 <= v <= 23:
            raise ValueError("Sweep hours must be between 0 and 23")
        return v

    @field_validator("DISPATCH_INTERVAL_MINUTES")
    @classmethod
    def validate_dispatch_interval(cls, v):
        if not 1 <= v <= 59:
            raise ValueError("DISPATCH_INTERVAL_MINUTES must be between 1 and 59")
        return v

    @field_validator("MAX_DELIVERY_ATTEMPTS", "DISPATCH_BATCH_SIZE")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Value must be at least 1")
        return v

    @field_validator("NOTIFICATION_CHANNELS")
    @classmethod
    def validate_channels(cls, v):
        channels = [channel.strip().lower() for channel in v.split(",") if channel.strip()]
        if not channels:
            raise ValueError("NOTIFICATION_CHANNELS needs at least one channel")
        unknown = [channel for channel in channels if channel not in SUPPORTED_CHANNELS]
        if unknown:
            raise ValueError(f"Unsupported notification channels: {', '.join(unknown)}")
        return ",".join(channels)

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @computed_field
    @property
    def notification_channels(self) -> list[str]:
        """Delivery channels in the order they are tried."""
        return self.NOTIFICATION_CHANNELS.split(",")

    @computed_field
    @property
    def database_url(self) -> str:
        """Synchronous PostgreSQL URL, used by Alembic."""
        if self.DB_PASSWORD:
            return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def async_database_url(self) -> str:
        """Async URL used by the application engine."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            password = quote_plus(self.DB_PASSWORD)
            return f"postgresql+asyncpg://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql+asyncpg://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Settings singleton
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.

    Avoids reading the environment more than once per process.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
