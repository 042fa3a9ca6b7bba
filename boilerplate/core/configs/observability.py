import json
from datetime import timedelta
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
)
from pydantic_settings import NoDecode

from boilerplate.domain.common.utils import DurationUtils

PRODUCTION = 'production'
DEVELOPMENT = 'development'


def _coerce_duration(value: Any) -> Any:
    """Accept Go-style duration strings on top of pydantic's own timedelta input."""
    if isinstance(value, str) and DurationUtils.is_duration(value.strip()):
        return DurationUtils.parse(value)
    return value


class LoggingConfiguration(BaseModel):
    """Service log output settings."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    level: str = Field('info', description='Minimum log level')
    format: str = Field('json', description='Log output format')
    slow_query_threshold: timedelta = Field(
        timedelta(milliseconds=100),
        description='Queries slower than this are logged as slow',
    )

    @field_validator('slow_query_threshold', mode='before')
    @classmethod
    def parse_threshold(cls, value: Any) -> Any:
        return _coerce_duration(value)


class ExternalAPMConfiguration(BaseModel):
    """External APM agent (New Relic style) settings."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    license_key: SecretStr = Field(
        SecretStr(''), description='APM license key', repr=False
    )
    app_log_forwarding_enabled: bool = Field(
        True, description='Forward application logs to the APM backend'
    )
    distributed_tracing_enabled: bool = Field(
        True, description='Enable distributed tracing'
    )
    # off so the agent's debug stream does not interleave with the json logs
    debug_logging: bool = Field(False, description='Enable APM agent debug logs')


class HealthChecksConfiguration(BaseModel):
    """Periodic health probe settings."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    enabled: bool = Field(True, description='Enable periodic health checks')
    interval: timedelta = Field(
        timedelta(seconds=30),
        description='Time between health check runs',
        json_schema_extra={'minimum': '1s'},
    )
    timeout: timedelta = Field(
        timedelta(seconds=3),
        description='Per check timeout',
        json_schema_extra={'minimum': '1s'},
    )
    checks: Annotated[tuple[str, ...], NoDecode] = Field(
        ('database', 'redis'),
        description='Names of the subsystems to probe',
    )

    @field_validator('interval', 'timeout', mode='before')
    @classmethod
    def parse_durations(cls, value: Any) -> Any:
        return _coerce_duration(value)

    @field_validator('checks', mode='before')
    @classmethod
    def split_checks(cls, value: Any) -> Any:
        if isinstance(value, str):
            if value.lstrip().startswith('['):
                return tuple(json.loads(value))
            return tuple(
                check.strip() for check in value.split(',') if check.strip()
            )
        return value


class ObservabilityConfiguration(BaseModel):
    """Observability settings (logging, external APM, health checks)."""

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)

    service_name: str = Field('boilerplate', description='Emitting service name')
    environment: str = Field(DEVELOPMENT, description='Deployment environment')
    logging: LoggingConfiguration = Field(default_factory=LoggingConfiguration)
    external_apm: ExternalAPMConfiguration = Field(
        default_factory=ExternalAPMConfiguration,
        validation_alias=AliasChoices('external_apm', 'new_relic'),
    )
    health_checks: HealthChecksConfiguration = Field(
        default_factory=HealthChecksConfiguration
    )

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def effective_logging_level(self) -> str:
        """Logging level with the per-environment fallback for an empty level.

        Only ``production`` (``info``) and ``development`` (``debug``) have a
        fallback; any other environment returns the configured level as is.
        """
        if not self.logging.level:
            if self.environment == PRODUCTION:
                return 'info'
            if self.environment == DEVELOPMENT:
                return 'debug'
        return self.logging.level

    def ensure_valid(self) -> 'ObservabilityConfiguration':
        from .validation import validate  # noqa: PLC0415

        validate(self)
        return self


def default_observability_config() -> ObservabilityConfiguration:
    """
    Build a fresh observability configuration holding the documented defaults.
    """
    return ObservabilityConfiguration()


def effective_logging_level(config: ObservabilityConfiguration) -> str:
    return config.effective_logging_level


def is_production(config: ObservabilityConfiguration) -> bool:
    return config.is_production
