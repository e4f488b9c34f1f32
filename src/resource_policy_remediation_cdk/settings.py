"""Settings and configuration access.

Settings are automatically loaded from .env file via pydantic-settings.

Usage:
    >>> from resource_policy_remediation_cdk.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.remediation.runtime_name)
    nodejs16.x

Testing with custom settings:
    >>> def test_example(monkeypatch):
    ...     monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    ...     get_settings.cache_clear()
    ...     assert get_settings().log_level.value == "DEBUG"
"""

from functools import lru_cache

from .config import Settings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Priority order (highest to lowest):
        1. Environment variables
        2. .env file in project root
        3. Default values from config.py

    Note:
        In tests, call get_settings.cache_clear() after changing environment
        variables to force reload of settings.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
