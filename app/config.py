# change_cab_project/app/config.py

import logging
import sys

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from pythonjsonlogger.json import JsonFormatter

load_dotenv()

# Custom JSON formatter that excludes null/None fields
class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that only includes fields with non-None values."""

    def add_fields(self, log_record, record, message_dict):
        """Override to filter out None values before adding to JSON output."""
        super().add_fields(log_record, record, message_dict)

        # Remove keys with None values
        log_record_copy = dict(log_record)
        for key, value in log_record_copy.items():
            if value is None:
                del log_record[key]

def setup_json_logging(log_level: int = logging.INFO) -> None:
    """Initialize JSON logging configuration for the application."""
    handler = logging.StreamHandler(sys.stdout)

    # JSON formatter with common fields used across the application
    formatter = CustomJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(change_id)s %(request_number)s %(reviewer_id)s %(decision)s "
        "%(from_status)s %(to_status)s %(kind)s %(factor)s "
        "%(score)s %(level)s %(warning)s %(reason)s %(count)s"
    )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger("app")
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    root_logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    root_logger.propagate = False


class Settings(BaseSettings):
    # App
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CHANGEFLOW_API_SECRET: str = ""

    # Database
    DATABASE_URL: str = "sqlite:///./change_requests.db"

    # Requests
    REQUEST_NUMBER_PREFIX: str = "CHG"
    CAB_DEFAULT_REJECT_COMMENT: str = "Rejected after CAB review"

    # Scoring
    SCORING_ENABLE_HISTORY: bool = True  # write ChangeScoreSnapshot rows for audit trail
    # Use the built-in benefit/effort configs when the config tables hold no active rows
    SCORING_CONFIG_FALLBACK_TO_DEFAULTS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
