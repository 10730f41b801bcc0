"""Transaction retry configuration settings - main aggregator."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from transaction_retry.configuration.retry import TransactionRetrySettings


class Settings(BaseSettings):
    """Application settings aggregator.

    Environment Variables:
        PREFIX: Environment prefix; empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from transaction_retry.configuration import get_settings

        settings = get_settings()
        if settings.retry.auto_retry:
            ...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    retry: TransactionRetrySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        if "retry" not in kwargs:
            kwargs["retry"] = TransactionRetrySettings()
        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings singleton.

    The ``lru_cache`` ensures only one instance is created per process.
    Tests reset it with ``get_settings.cache_clear()``.

    Returns:
        Settings: Cached settings instance loaded from the environment.
    """
    return Settings()
