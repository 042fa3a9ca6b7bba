"""Table driven validation and decoding for the observability configuration.

Each :class:`FieldRule` names the attribute path on the model, the key the
configuration source uses for it, and the check to run. :func:`validate` walks
the table in order and stops at the first failure.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from boilerplate.domain.common.utils import DurationUtils

from .errors import InvalidValueError, MissingFieldError
from .observability import ObservabilityConfiguration

LOG_LEVELS: tuple[str, ...] = ('debug', 'info', 'warn', 'error')

Check = Callable[[str, Any], None]


@dataclass(frozen=True, slots=True)
class FieldRule:
    path: str
    key: str
    check: Check

    def resolve(self, config: Any) -> Any:
        value = config
        for attr in self.path.split('.'):
            value = getattr(value, attr)
        return value

    def apply(self, config: Any) -> None:
        self.check(self.key, self.resolve(config))


def required(field: str, value: Any) -> None:
    if value is None or value == '':
        raise MissingFieldError(field)


def one_of(*allowed: str) -> Check:
    allowed_set = frozenset(allowed)

    def _check(field: str, value: Any) -> None:
        if value not in allowed_set:
            raise InvalidValueError(field, value, allowed=allowed)

    return _check


def non_negative(field: str, value: Any) -> None:
    zero = timedelta(0) if isinstance(value, timedelta) else 0

    if value < zero:
        shown = DurationUtils.format(value) if isinstance(value, timedelta) else value
        raise InvalidValueError(field, shown, reason='must be non-negative')


OBSERVABILITY_RULES: tuple[FieldRule, ...] = (
    FieldRule('service_name', 'service_name', required),
    FieldRule('logging.level', 'logging.level', one_of(*LOG_LEVELS)),
    FieldRule(
        'logging.slow_query_threshold',
        'logging.slow_query_threshold',
        non_negative,
    ),
)


def validate(
    config: ObservabilityConfiguration,
    rules: Sequence[FieldRule] = OBSERVABILITY_RULES,
) -> None:
    """Run *rules* against *config* in order.

    Raises:
        ConfigValidationError: for the first rule that fails.
    """
    for rule in rules:
        rule.apply(config)


def _unflatten(data: Mapping[str, Any]) -> dict[str, Any]:
    nested: dict[str, Any] = {}

    for key, value in data.items():
        if isinstance(value, Mapping):
            value = _unflatten(value)

        *parents, leaf = key.split('.')
        node = nested
        for parent in parents:
            child = node.get(parent)
            if child is None:
                child = node[parent] = {}
            elif not isinstance(child, dict):
                msg = f'cannot set {key!r}: {parent!r} is not a mapping'
                raise ValueError(msg)
            node = child

        if isinstance(value, dict) and isinstance(node.get(leaf), dict):
            node[leaf].update(value)
        else:
            node[leaf] = value

    return nested


def decode(data: Mapping[str, Any]) -> ObservabilityConfiguration:
    """Build a configuration from nested or dotted keys over the defaults.

    ``{'logging.level': 'warn'}`` and ``{'logging': {'level': 'warn'}}`` are
    equivalent. Keys the model does not know are ignored. The result is not
    validated; call :func:`validate` on it.
    """
    return ObservabilityConfiguration.model_validate(_unflatten(data))
