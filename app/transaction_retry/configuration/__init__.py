"""Configuration module - public API.

Settings are loaded from the environment (and ``.env``) with pydantic-settings.

Exports:
    get_settings: Cached Settings provider
    Settings: Main settings class (for testing/overrides)
    TransactionRetrySettings: Retry policy settings class
"""

from transaction_retry.configuration.retry import TransactionRetrySettings
from transaction_retry.configuration.settings import Settings, get_settings

__all__ = ["Settings", "TransactionRetrySettings", "get_settings"]
