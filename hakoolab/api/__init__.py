"""
HakooLab API Routers
"""

from .calculators import router as calculators_router
from .favorites import router as favorites_router
from .history import router as history_router

__all__ = ["calculators_router", "favorites_router", "history_router"]
