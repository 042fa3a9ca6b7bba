"""Duration Utilities Module
Parses and renders Go-style duration strings such as ``100ms`` or ``1m30s``.
"""

import datetime as _dt
import math
import re
from decimal import Decimal
from typing import ClassVar


class DurationUtils:
    _PART_RE = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)')
    _FULL_RE = re.compile(r'^[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+$')

    UNITS_IN_MICROSECONDS: ClassVar = {
        'ns': Decimal('0.001'),
        'us': Decimal(1),
        'µs': Decimal(1),
        'μs': Decimal(1),
        'ms': Decimal(1000),
        's': Decimal(1_000_000),
        'm': Decimal(60_000_000),
        'h': Decimal(3_600_000_000),
    }

    @staticmethod
    def is_duration(text: str) -> bool:
        return text in {'0', '+0', '-0'} or bool(DurationUtils._FULL_RE.match(text))

    @staticmethod
    def parse(text: str) -> _dt.timedelta:
        """Parse a Go-style duration string into a :class:`datetime.timedelta`.

        Sub-microsecond precision is floored since ``timedelta`` cannot hold it,
        so a negative duration never rounds up to zero.
        """
        value = text.strip()
        if not DurationUtils.is_duration(value):
            msg = f'invalid duration: {text!r}'
            raise ValueError(msg)

        sign = -1 if value.startswith('-') else 1
        micros = sum(
            (
                Decimal(number) * DurationUtils.UNITS_IN_MICROSECONDS[unit]
                for number, unit in DurationUtils._PART_RE.findall(value)
            ),
            Decimal(0),
        )
        try:
            return _dt.timedelta(microseconds=math.floor(sign * micros))

        except OverflowError as e:
            msg = f'duration out of range: {text!r}'
            raise ValueError(msg) from e

    @staticmethod
    def format(delta: _dt.timedelta) -> str:
        """Render *delta* in the same notation :meth:`parse` accepts."""
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        if micros == 0:
            return '0s'

        sign = '-' if micros < 0 else ''
        micros = abs(micros)

        if micros < 1000:
            return f'{sign}{micros}us'

        if micros < 1_000_000:
            millis = Decimal(micros) / 1000
            return f'{sign}{millis.normalize():f}ms'

        hours, rest = divmod(micros, 3_600_000_000)
        minutes, rest = divmod(rest, 60_000_000)
        seconds = (Decimal(rest) / 1_000_000).normalize()

        out = ''
        if hours:
            out += f'{hours}h'
        if hours or minutes:
            out += f'{minutes}m'
        return f'{sign}{out}{seconds:f}s'
