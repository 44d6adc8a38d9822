"""NavKit package."""

from .shared.core.result_bus import ResultBus
from .shared.navigation.coordinator import NavigationCoordinator

__all__ = ["NavigationCoordinator", "ResultBus"]
