"""Unit tests for the observability configuration models."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from boilerplate.core.configs import (
    ExternalAPMConfiguration,
    HealthChecksConfiguration,
    LoggingConfiguration,
    ObservabilityConfiguration,
    default_observability_config,
    effective_logging_level,
    is_production,
)


class TestDefaults:
    def test_top_level_defaults(self) -> None:
        config = default_observability_config()
        assert config.service_name == 'boilerplate'
        assert config.environment == 'development'

    def test_logging_defaults(self) -> None:
        logging = default_observability_config().logging
        assert logging.level == 'info'
        assert logging.format == 'json'
        assert logging.slow_query_threshold == timedelta(milliseconds=100)

    def test_external_apm_defaults(self) -> None:
        apm = default_observability_config().external_apm
        assert apm.license_key.get_secret_value() == ''
        assert apm.app_log_forwarding_enabled is True
        assert apm.distributed_tracing_enabled is True
        assert apm.debug_logging is False

    def test_health_check_defaults(self) -> None:
        checks = default_observability_config().health_checks
        assert checks.enabled is True
        assert checks.interval == timedelta(seconds=30)
        assert checks.timeout == timedelta(seconds=3)
        assert checks.checks == ('database', 'redis')

    def test_each_call_returns_a_fresh_value(self) -> None:
        first = default_observability_config()
        second = default_observability_config()
        assert first == second
        assert first is not second
        assert first.health_checks is not second.health_checks

    def test_is_frozen(self) -> None:
        config = default_observability_config()
        with pytest.raises(ValidationError):
            config.service_name = 'other'  # type: ignore[misc]

    def test_checks_cannot_be_changed_in_place(self) -> None:
        checks = default_observability_config().health_checks.checks
        assert isinstance(checks, tuple)
        with pytest.raises(AttributeError):
            checks.append('kafka')  # type: ignore[attr-defined]


class TestDecodingFields:
    def test_go_style_durations(self) -> None:
        config = ObservabilityConfiguration(
            logging=LoggingConfiguration(slow_query_threshold='250ms'),
            health_checks=HealthChecksConfiguration(interval='1m', timeout='1.5s'),
        )
        assert config.logging.slow_query_threshold == timedelta(milliseconds=250)
        assert config.health_checks.interval == timedelta(minutes=1)
        assert config.health_checks.timeout == timedelta(seconds=1.5)

    def test_numeric_durations_are_seconds(self) -> None:
        checks = HealthChecksConfiguration(interval=10)
        assert checks.interval == timedelta(seconds=10)

    def test_invalid_duration_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HealthChecksConfiguration(interval='soon')

    def test_negative_threshold_is_accepted_at_construction(self) -> None:
        logging = LoggingConfiguration(slow_query_threshold='-1ms')
        assert logging.slow_query_threshold == timedelta(milliseconds=-1)

    def test_unknown_level_is_accepted_at_construction(self) -> None:
        assert LoggingConfiguration(level='trace').level == 'trace'

    def test_checks_from_comma_separated_string(self) -> None:
        checks = HealthChecksConfiguration(checks='database, redis,queue')
        assert checks.checks == ('database', 'redis', 'queue')

    def test_checks_keep_insertion_order(self) -> None:
        checks = HealthChecksConfiguration(checks=['redis', 'database'])
        assert checks.checks == ('redis', 'database')

    def test_new_relic_alias(self) -> None:
        config = ObservabilityConfiguration.model_validate(
            {'new_relic': {'license_key': 'abc', 'debug_logging': True}}
        )
        assert config.external_apm.license_key.get_secret_value() == 'abc'
        assert config.external_apm.debug_logging is True

    def test_license_key_is_not_shown(self) -> None:
        apm = ExternalAPMConfiguration(license_key='super-secret')
        assert 'super-secret' not in repr(apm)
        assert 'super-secret' not in repr(ObservabilityConfiguration(external_apm=apm))


class TestEffectiveLoggingLevel:
    @pytest.mark.parametrize(
        ('environment', 'level', 'expected'),
        [
            ('production', '', 'info'),
            ('development', '', 'debug'),
            ('production', 'warn', 'warn'),
            ('development', 'error', 'error'),
            ('staging', '', ''),
            ('staging', 'debug', 'debug'),
            ('Production', '', ''),
        ],
    )
    def test_fallbacks(self, environment: str, level: str, expected: str) -> None:
        config = ObservabilityConfiguration(
            environment=environment, logging={'level': level}
        )
        assert config.effective_logging_level == expected
        assert effective_logging_level(config) == expected

    def test_does_not_mutate(self) -> None:
        config = ObservabilityConfiguration(
            environment='production', logging={'level': ''}
        )
        _ = config.effective_logging_level
        assert config.logging.level == ''


class TestIsProduction:
    @pytest.mark.parametrize(
        ('environment', 'expected'),
        [
            ('production', True),
            ('Production', False),
            ('development', False),
            ('prod', False),
        ],
    )
    def test_exact_match(self, environment: str, expected: bool) -> None:
        config = ObservabilityConfiguration(environment=environment)
        assert config.is_production is expected
        assert is_production(config) is expected
