# clinic_reporting_root/config/settings.py
# CENTRALIZED CONFIGURATION HUB - REPORTING CORE

import logging
from typing import Dict, List, Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

settings_logger = logging.getLogger(__name__)

# --- Nested Models for Structured Configuration ---
class CurrencyLocaleConfig(BaseModel):
    group_separator: str
    decimal_separator: str
    code_first: bool = False

class AnalyticsConfig(BaseModel):
    # Python weekday numbering: 0=Monday ... 6=Sunday.
    week_start_day: int = 6
    currency_decimals: int = 0
    unknown_label: str = "unknown"

# --- Main Settings Class ---
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='CLINIC_ANALYTICS_', case_sensitive=False, env_file='.env', env_file_encoding='utf-8', extra='ignore')

    APP_NAME: str = "Clinic Reporting Core"; APP_VERSION: str = "1.0.0"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    CURRENCY_CODE: str = "MAD"
    DEFAULT_LOCALE: str = "fr-MA"
    CURRENCY_LOCALES: Dict[str, CurrencyLocaleConfig] = {
        "fr-MA": CurrencyLocaleConfig(group_separator=".", decimal_separator=","),
        "ar-MA": CurrencyLocaleConfig(group_separator=".", decimal_separator=","),
        "en-US": CurrencyLocaleConfig(group_separator=",", decimal_separator=".", code_first=True),
    }

    ANALYTICS: AnalyticsConfig = AnalyticsConfig()

    @computed_field
    @property
    def SUPPORTED_LOCALES(self) -> List[str]: return sorted(self.CURRENCY_LOCALES.keys())

try:
    settings = Settings()
    settings_logger.info(f"Reporting settings loaded successfully. App: {settings.APP_NAME} v{settings.APP_VERSION}")
except Exception as e:
    settings_logger.critical(f"FATAL: Could not initialize Pydantic settings. Error: {e}", exc_info=True)
    raise
