from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from boilerplate import __version__
from boilerplate.core.logging import get_logger
from boilerplate.core.paths import ENV_FILE_PATH

from .configs import (
    ConfigValidationError,
    ObservabilityConfiguration,
    default_observability_config,
)

logger = get_logger(__name__)


class Configuration(BaseSettings):
    """Application configuration.

    Nested values are read from the environment with ``__`` as the separator,
    e.g. ``OBSERVABILITY__LOGGING__LEVEL=warn``.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ENV_FILE_PATH,
        env_file_encoding='utf-8',
        env_nested_delimiter='__',
        extra='ignore',
        frozen=True,
    )

    app_name: str = Field('boilerplate', description='Application name')
    app_version: str = __version__

    observability: ObservabilityConfiguration = Field(
        default_factory=default_observability_config,
        description='Logging, external APM and health check settings',
    )


def load_config(**overrides: Any) -> Configuration:
    """
    Load the configuration and validate it.

    A :class:`ConfigValidationError` is fatal for startup and is re-raised.
    """
    config = Configuration(**overrides)

    try:
        config.observability.ensure_valid()

    except ConfigValidationError as e:
        logger.error(f'invalid configuration for field {e.field}: {e}')
        raise

    logger.debug(
        f'configuration loaded for {config.observability.service_name} '
        f'({config.observability.environment})'
    )
    return config


@lru_cache
def get_config() -> Configuration:
    """
    Get cached application settings.
    """
    return load_config()
