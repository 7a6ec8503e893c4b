"""UI-agnostic controllers for prototype navigation."""
from __future__ import annotations

from .navigation_controller import NavigationController, NavigationResult

__all__ = [
    "NavigationController",
    "NavigationResult",
]
