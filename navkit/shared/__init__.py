"""
NavKit Shared Kernel
====================

Navigation building blocks shared by every feature module.

Architecture:
- core: ResultBus, envelopes, errors, configuration, service registry
- navigation: stack, sessions, waiter registry, coordinator
- domain: UI models and mock repositories
"""

__version__ = "0.1.0"

__all__ = []
