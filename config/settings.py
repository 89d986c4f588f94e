"""
Application configuration for api-market-views.

Centralizes environment variables using python-dotenv.

Note:
- Raw order records are owned by the ingestion side and kept in memory only.
- The .env may point to a bootstrap JSON file and declare the known tokens.
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """
    Configuration settings for the api-market-views service.
    """

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    APP_NAME: str = os.getenv("APP_NAME", "api-market-views")

    # Decoration
    DEFAULT_TOKEN_DECIMALS: int = int(os.getenv("DEFAULT_TOKEN_DECIMALS", "18"))
    PRICE_PRECISION: int = int(os.getenv("PRICE_PRECISION", "5"))

    # Views
    ASK_SORT_ORDER: str = os.getenv("ASK_SORT_ORDER", "desc").strip().lower()
    CANDLE_INTERVAL: str = os.getenv("CANDLE_INTERVAL", "1d").strip().lower()
    SKIPPED_SAMPLE_SIZE: int = int(os.getenv("SKIPPED_SAMPLE_SIZE", "5"))
    CACHE_MAX_ENTRIES: int = int(os.getenv("CACHE_MAX_ENTRIES", "256"))

    # Bootstrap (optional): "DAPP:0xabc...:18,mETH:0xdef...:18"
    BOOTSTRAP_TOKENS: str = os.getenv("BOOTSTRAP_TOKENS", "")
    BOOTSTRAP_RECORDS_PATH: str = os.getenv("BOOTSTRAP_RECORDS_PATH", "")


settings = Settings()
