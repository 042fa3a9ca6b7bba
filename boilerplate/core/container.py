from kink import di

from boilerplate.core.config import Configuration, get_config
from boilerplate.core.configs import ObservabilityConfiguration
from boilerplate.core.logging import setup_logging


def wire_dependencies() -> None:
    _wire_core_dependencies()
    setup_logging()


# noinspection PyArgumentList
def _wire_core_dependencies() -> None:
    """Wire core application dependencies."""
    di[Configuration] = get_config()
    di[ObservabilityConfiguration] = di[Configuration].observability
