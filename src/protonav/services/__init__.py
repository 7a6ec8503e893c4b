"""Service layer exports."""

from .errors import (
    BrokenReferenceError,
    ConcurrentTransitionRejected,
    NavigationError,
    ReentrantCommandError,
    UnsupportedActionError,
)
from .hit_tester import hit_test, hotspots_to_highlight
from .navigation_events import (
    NavigationErrorEvent,
    NavigationEvent,
    PageChangedEvent,
    ScrollRequestedEvent,
    TransitionFinishedEvent,
    TransitionProgressEvent,
    TransitionStartedEvent,
)
from .story_graph_validator import Issue, format_issue, validate_story_graph

__all__ = [
    "BrokenReferenceError",
    "ConcurrentTransitionRejected",
    "NavigationError",
    "ReentrantCommandError",
    "UnsupportedActionError",
    "hit_test",
    "hotspots_to_highlight",
    "NavigationErrorEvent",
    "NavigationEvent",
    "PageChangedEvent",
    "ScrollRequestedEvent",
    "TransitionFinishedEvent",
    "TransitionProgressEvent",
    "TransitionStartedEvent",
    "Issue",
    "format_issue",
    "validate_story_graph",
]
