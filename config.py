"""
Central configuration management using environment variables.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


# Logging configuration
class LogConfig:
    LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    FILE_NAME = os.getenv("LOG_FILE")  # None = stderr only

# Quote fetching configuration
class QuoteConfig:
    TIMEOUT = float(os.getenv("QUOTE_TIMEOUT", "10"))  # seconds per quote call

# Sector aggregation configuration
class AggregationConfig:
    MAX_WORKERS = _optional_int("AGGREGATION_MAX_WORKERS")  # None = one per sector
