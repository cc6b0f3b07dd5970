"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAYMENT_SCHEDULER_",
        extra="ignore",
    )

    # Service
    service_name: str = "payment-scheduler"
    log_level: str = "INFO"

    # Priority reasons
    reason_separator: str = ", "
    fallback_reason: str = "general item"

    # Normalization of raw payment rows
    late_fee_categories: List[str] = ["rent", "insurance"]

    # Overdue reschedule proposals land on this day of the target month
    reschedule_day: int = 1


settings = Settings()
