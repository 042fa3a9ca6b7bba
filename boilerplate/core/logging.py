import sys
from typing import Any

from kink import di
from loguru import logger
from opentelemetry.trace import get_current_span

from boilerplate.core.configs.observability import ObservabilityConfiguration

LOGURU_LEVELS: dict[str, str] = {
    'debug': 'DEBUG',
    'info': 'INFO',
    'warn': 'WARNING',
    'error': 'ERROR',
}


def _inject_trace_context(record: dict[str, Any]) -> None:
    """Populate ``trace_id`` / ``span_id`` in ``record['extra']`` if absent."""
    span_ctx = get_current_span().get_span_context()

    if span_ctx and span_ctx.trace_id:
        record.setdefault('extra', {})
        record['extra'].setdefault('trace_id', f'{span_ctx.trace_id:032x}')
        record['extra'].setdefault('span_id', f'{span_ctx.span_id:016x}')


def _skip_trace_context(_record: dict[str, Any]) -> None: ...


def format_log_record(record: dict[str, Any]) -> str:
    """Human readable formatter used when the log format is not json."""
    extra = record.get('extra', {})

    fmt = (
        '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
        '<level>{level: <8}</level> | '
        '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>'
    )

    if 'trace_id' in extra:
        fmt += ' | <blue>{extra[trace_id]}</blue>/<yellow>{extra[span_id]}</yellow>'

    fmt += ' | <level>{message}</level>'

    if record.get('exception'):
        fmt += '\n{exception}'

    return fmt + '\n'


def loguru_level(level: str) -> str:
    """Map a configured level name onto loguru's level names."""
    if not level:
        return 'INFO'
    return LOGURU_LEVELS.get(level.lower(), level.upper())


# noinspection PyTypeChecker
def setup_logging(config: ObservabilityConfiguration | None = None) -> None:
    """Setup Loguru logging from the observability configuration."""
    if config is None:
        config = di[ObservabilityConfiguration]

    level = loguru_level(config.effective_logging_level)

    # Remove default handler
    logger.remove()

    logger.configure(
        extra={
            'service_name': config.service_name,
            'environment': config.environment,
        },
        patcher=(
            _inject_trace_context  # type: ignore [arg-type]
            if config.external_apm.distributed_tracing_enabled
            else _skip_trace_context
        ),
    )

    if config.logging.format == 'json':
        logger.add(
            sys.stderr,
            level=level,
            format='{message}',
            serialize=True,
            backtrace=not config.is_production,
            diagnose=not config.is_production,
        )

    else:
        logger.add(
            sys.stderr,
            level=level,
            format=format_log_record,  # type: ignore [arg-type]
            colorize=not config.is_production,
            backtrace=True,
            diagnose=not config.is_production,
        )


def get_logger(name: str | None = None) -> Any:
    """Get a Loguru logger instance."""
    return logger.bind(name=name) if name else logger
