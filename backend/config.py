"""Configuration management for Masrofy."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("masrofy.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Money display
    currency: str = "ج.م"

    # Advice thresholds
    savings_target_percent: float = 20.0

    # Dashboard limits
    recent_transactions_limit: int = 10
    history_months: int = 12

    # Development mode
    dev_mode: bool = True
    log_level: str = "INFO"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # LOG_LEVEL and log_level both work
        extra="ignore",  # Ignore extra environment variables
    )

    def log_config(self) -> None:
        """Log current configuration."""
        logger.info("=" * 60)
        logger.info("CONFIGURATION LOADED")
        logger.info("-" * 60)
        logger.info("Currency:            %s", self.currency)
        logger.info("Savings Target:      %.1f%%", self.savings_target_percent)
        logger.info("Recent Limit:        %d", self.recent_transactions_limit)
        logger.info("History Months:      %d", self.history_months)
        logger.info("Dev Mode:            %s", self.dev_mode)
        logger.info("Log Level:           %s", self.log_level)
        logger.info("API Host:            %s:%d", self.api_host, self.api_port)
        logger.info("CORS Origins:        %s", ", ".join(self.cors_origins))
        logger.info("=" * 60)


# Global settings instance
settings = Settings()
