from .duration import DurationUtils

__all__ = ['DurationUtils']
