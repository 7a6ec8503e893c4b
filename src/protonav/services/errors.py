"""Runtime navigation errors.

None of these end a session; the controller reports them as
``NavigationErrorEvent`` and leaves the current page untouched.
"""
from __future__ import annotations


class NavigationError(Exception):
    """Base class for recoverable navigation failures."""


class BrokenReferenceError(NavigationError):
    """Raised when a reaction targets a page that does not exist."""

    def __init__(self, link_index: int, target: int) -> None:
        super().__init__(f"Link {link_index} targets missing page {target}.")
        self.link_index = link_index
        self.target = target


class UnsupportedActionError(NavigationError):
    """Raised when a reaction carries an action the engine cannot perform."""

    def __init__(self, link_index: int, raw_action: str) -> None:
        super().__init__(f"Link {link_index} has unsupported action {raw_action!r}.")
        self.link_index = link_index
        self.raw_action = raw_action


class ConcurrentTransitionRejected(NavigationError):
    """Raised when a transition is requested while another is animating."""


class ReentrantCommandError(NavigationError):
    """Raised when a command arrives while another command is still running."""
