"""App state for the demo.

- Store: composition root owning the bus, stack, coordinator and screens
"""

from .store import ROOT_ROUTE, Store

__all__ = ["ROOT_ROUTE", "Store"]
