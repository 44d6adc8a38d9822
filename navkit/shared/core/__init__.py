"""
Shared Core Module
==================

Result bus, envelopes, errors, configuration and the service registry.
"""

# Result System
from .result_bus import ResultBus, ResultHandler
from .envelopes import (
    ResultEnvelope,
    ResultKind,
    create_cancellation_envelope,
    create_selection_envelope,
)

# Errors
from .errors import (
    AlreadyPendingError,
    ConfigurationError,
    CoordinatorNotStartedError,
    DoubleResolutionAttempt,
    NavigationError,
    NavigationSignal,
    NavKitException,
    StaleResolutionDiscarded,
)

# Service Registry
from .service_registry import (
    clear_coordinators,
    get_coordinator,
    get_coordinators,
    register_cleanup_handler,
    register_coordinator,
    run_cleanup_handlers,
    unregister_cleanup_handler,
    unregister_coordinator,
)

# Configuration
from .configuration import (
    ConfigManager,
    DemoConfig,
    NavigationConfig,
    OverlapPolicy,
    SystemConfig,
    ValidationLevel,
    get_config,
    get_config_manager,
)

__all__ = [
    # Result System
    "ResultBus",
    "ResultHandler",
    "ResultEnvelope",
    "ResultKind",
    "create_cancellation_envelope",
    "create_selection_envelope",
    # Errors
    "AlreadyPendingError",
    "ConfigurationError",
    "CoordinatorNotStartedError",
    "DoubleResolutionAttempt",
    "NavigationError",
    "NavigationSignal",
    "NavKitException",
    "StaleResolutionDiscarded",
    # Service Registry
    "clear_coordinators",
    "get_coordinator",
    "get_coordinators",
    "register_cleanup_handler",
    "register_coordinator",
    "run_cleanup_handlers",
    "unregister_cleanup_handler",
    "unregister_coordinator",
    # Configuration
    "ConfigManager",
    "DemoConfig",
    "NavigationConfig",
    "OverlapPolicy",
    "SystemConfig",
    "ValidationLevel",
    "get_config",
    "get_config_manager",
]
