"""Events emitted by the navigation engine to its observers."""
from __future__ import annotations

from dataclasses import dataclass

from protonav.domain.defs import TransitionAnimation
from protonav.services.errors import NavigationError


@dataclass(slots=True)
class NavigationEvent:
    """Base class for navigation events."""


@dataclass(slots=True)
class PageChangedEvent(NavigationEvent):
    prev_index: int
    next_index: int


@dataclass(slots=True)
class TransitionStartedEvent(NavigationEvent):
    from_index: int
    to_index: int
    animation: TransitionAnimation
    duration: float


@dataclass(slots=True)
class TransitionProgressEvent(NavigationEvent):
    fraction: float
    animation: TransitionAnimation
    eased: float


@dataclass(slots=True)
class TransitionFinishedEvent(NavigationEvent):
    cancelled: bool = False


@dataclass(slots=True)
class NavigationErrorEvent(NavigationEvent):
    error: NavigationError


@dataclass(slots=True)
class ScrollRequestedEvent(NavigationEvent):
    page_index: int
    target: int | None
