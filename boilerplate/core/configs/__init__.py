from .errors import ConfigValidationError, InvalidValueError, MissingFieldError
from .observability import (
    ExternalAPMConfiguration,
    HealthChecksConfiguration,
    LoggingConfiguration,
    ObservabilityConfiguration,
    default_observability_config,
    effective_logging_level,
    is_production,
)
from .validation import (
    LOG_LEVELS,
    OBSERVABILITY_RULES,
    FieldRule,
    decode,
    validate,
)

__all__ = [
    'LOG_LEVELS',
    'OBSERVABILITY_RULES',
    'ConfigValidationError',
    'ExternalAPMConfiguration',
    'FieldRule',
    'HealthChecksConfiguration',
    'InvalidValueError',
    'LoggingConfiguration',
    'MissingFieldError',
    'ObservabilityConfiguration',
    'decode',
    'default_observability_config',
    'effective_logging_level',
    'is_production',
    'validate',
]
