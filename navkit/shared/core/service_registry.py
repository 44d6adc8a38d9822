"""Service registry for cross-module access to running coordinators."""

from __future__ import annotations

import atexit
import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from navkit.shared.navigation.coordinator import NavigationCoordinator

logger = logging.getLogger(__name__)

# Coordinators that must be torn down with the app session
_coordinators: Dict[str, "NavigationCoordinator"] = {}

# Global cleanup management
_cleanup_registered = False
_cleanup_handlers: List[Callable[[], None]] = []


def register_coordinator(name: str, coordinator: "NavigationCoordinator") -> None:
    """Register a coordinator so teardown can reach it."""
    _coordinators[name] = coordinator


def unregister_coordinator(name: str, coordinator: Optional["NavigationCoordinator"] = None) -> None:
    """Forget a coordinator; with ``coordinator`` given, only if it is the one registered."""
    if coordinator is None or _coordinators.get(name) is coordinator:
        _coordinators.pop(name, None)


def get_coordinator(name: str) -> Optional["NavigationCoordinator"]:
    """Get a registered coordinator by name."""
    return _coordinators.get(name)


def get_coordinators() -> Dict[str, "NavigationCoordinator"]:
    """Get all registered coordinators."""
    return _coordinators.copy()


def clear_coordinators() -> None:
    """Forget all registered coordinators."""
    _coordinators.clear()


def register_cleanup_handler(handler: Callable[[], None]) -> None:
    """Register a cleanup handler to be called on application exit."""
    global _cleanup_registered
    _cleanup_handlers.append(handler)
    if not _cleanup_registered:
        atexit.register(run_cleanup_handlers)
        _cleanup_registered = True
        logger.debug("Registered atexit cleanup handler")


def unregister_cleanup_handler(handler: Callable[[], None]) -> bool:
    """Remove a cleanup handler that is no longer needed; False if it was not registered."""
    if handler in _cleanup_handlers:
        _cleanup_handlers.remove(handler)
        return True
    return False


def run_cleanup_handlers() -> None:
    """Run and drain all registered cleanup handlers."""
    if not _cleanup_handlers:
        return
    logger.info("Running application cleanup...")
    while _cleanup_handlers:
        handler = _cleanup_handlers.pop(0)
        try:
            handler()
        except Exception as e:
            logger.warning(f"Error in cleanup handler: {e}")
    logger.info("Application cleanup completed")
