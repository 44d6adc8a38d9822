"""
Exception hierarchy for NavKit.

Two families live here:
- Navigation errors that surface to the caller (overlap, lifecycle misuse)
- Navigation signals that are absorbed by the registry: they are never
  raised to callers, only logged and counted to help debug races
"""

from __future__ import annotations

from typing import Optional


class NavKitException(Exception):
    """Base exception for all NavKit exceptions."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(NavKitException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str = "is missing or invalid"):
        self.config_key = config_key
        super().__init__(f"Configuration '{config_key}' {message}")


class NavigationError(NavKitException):
    """Base class for navigation failures."""


class AlreadyPendingError(NavigationError):
    """Raised when a navigate-and-await is attempted while another is outstanding."""

    def __init__(self, session_id: str, result_kind: str):
        self.session_id = session_id
        self.result_kind = result_kind
        super().__init__(
            f"Navigation session {session_id} is still awaiting '{result_kind}'"
        )


class CoordinatorNotStartedError(NavigationError):
    """Raised when a coordinator is used before start()."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Navigation coordinator '{name}' has not been started")


class NavigationSignal(NavigationError):
    """A navigation race that was absorbed rather than raised."""

    def __init__(self, session_id: Optional[str], message: str):
        self.session_id = session_id
        super().__init__(message)


class StaleResolutionDiscarded(NavigationSignal):
    """A result arrived for a session that is no longer registered."""

    def __init__(self, session_id: Optional[str], reason: str):
        self.reason = reason
        super().__init__(
            session_id, f"Discarded stale resolution for session {session_id} ({reason})"
        )


class DoubleResolutionAttempt(NavigationSignal):
    """A session that was already resolved received another resolution."""

    def __init__(self, session_id: Optional[str]):
        super().__init__(
            session_id, f"Session {session_id} was already resolved; ignoring repeat"
        )
