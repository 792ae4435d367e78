"""HTTP routers for the Apothecary API."""

from .health import health_router
from .house import house_router
from .mastery import mastery_router
from .potions import potions_router
from .scrolls import scrolls_router
from .templates import templates_router

__all__ = [
    "health_router",
    "house_router",
    "mastery_router",
    "potions_router",
    "scrolls_router",
    "templates_router",
]
