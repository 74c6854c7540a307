from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file="../.env", extra="ignore")

    # Development
    DEV_MODE: bool = Field(default=True, description="Enable debug mode")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./parking.db", description="Database connection URL")

    # Formatting
    CURRENCY_SYMBOL: str = Field(default="₹", description="Currency symbol prefixed to formatted amounts")

    # Analytics
    TOP_PARKINGS_LIMIT: int = Field(default=5, description="Default number of top parkings by earnings")
    RECENT_BOOKINGS_LIMIT: int = Field(default=10, description="Default number of recent bookings")
    REPORT_DEFAULT_DAYS: int = Field(default=30, description="Days in period when the report has no date range")
    MAX_DAILY_POINTS: int = Field(default=30, description="Trailing points kept for the daily trend chart")


# Create settings instance
settings = Settings()
