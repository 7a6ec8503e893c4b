"""Cooperatively stepped page transition animation."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from protonav.config import DEFAULT_DURATION_MS_THRESHOLD
from protonav.core.types import SchedulerState
from protonav.domain.defs import TransitionAnimation
from protonav.services.errors import ConcurrentTransitionRejected
from protonav.services.navigation_events import (
    NavigationEvent,
    TransitionFinishedEvent,
    TransitionProgressEvent,
    TransitionStartedEvent,
)

logger = logging.getLogger(__name__)

_SLIDING_ANIMATIONS = {
    TransitionAnimation.MOVE_IN,
    TransitionAnimation.MOVE_OUT,
    TransitionAnimation.PUSH,
    TransitionAnimation.SLIDE_IN,
    TransitionAnimation.SLIDE_OUT,
}


def normalize_duration(value: object, threshold: float = DEFAULT_DURATION_MS_THRESHOLD) -> float:
    """Return a transition duration in seconds.

    Exports carry both ``0.3`` and ``300`` for the same transition; values
    above ``threshold`` are read as milliseconds. Unusable values become 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    seconds = float(value)
    if not math.isfinite(seconds) or seconds <= 0:
        return 0.0
    if seconds > threshold:
        seconds /= 1000.0
    return seconds


def _clamp_seconds(value: float) -> float:
    seconds = float(value)
    if not math.isfinite(seconds) or seconds <= 0:
        return 0.0
    return seconds


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out for smooth deceleration."""
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease(animation: TransitionAnimation, t: float) -> float:
    """Map linear progress to the eased value used for ``animation``."""
    t = min(max(t, 0.0), 1.0)
    if animation in _SLIDING_ANIMATIONS:
        return ease_out_cubic(t)
    if animation == TransitionAnimation.SMART_ANIMATE:
        return ease_in_out_cubic(t)
    return t


@dataclass(slots=True)
class Transition:
    """Holds transition animation state."""

    from_index: int
    to_index: int
    animation: TransitionAnimation
    duration: float
    elapsed: float = 0.0
    finished: bool = False
    cancelled: bool = False

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(self.elapsed / self.duration, 1.0)


class TransitionScheduler:
    """Runs at most one page transition at a time.

    The scheduler never blocks: callers drive it with ``advance(dt)`` from
    their frame clock. Events are passed to ``emit`` as they happen.
    """

    def __init__(
        self,
        emit: Callable[[NavigationEvent], None] | None = None,
        *,
        duration_ms_threshold: float = DEFAULT_DURATION_MS_THRESHOLD,
    ) -> None:
        self._emit = emit or (lambda event: None)
        self._duration_ms_threshold = duration_ms_threshold
        self._active: Transition | None = None

    @property
    def state(self) -> SchedulerState:
        return "animating" if self._active is not None else "idle"

    @property
    def is_animating(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> Transition | None:
        return self._active

    def normalize(self, value: object) -> float:
        return normalize_duration(value, self._duration_ms_threshold)

    def begin_transition(
        self,
        from_index: int,
        to_index: int,
        animation: TransitionAnimation,
        duration: float,
    ) -> Transition:
        """Start animating from one page to another.

        ``duration`` is in seconds; convert raw export values with
        ``normalize`` first. Raises ConcurrentTransitionRejected if a
        transition is already running; nothing is queued. A zero duration
        finishes before this returns.
        """
        if self._active is not None:
            raise ConcurrentTransitionRejected(
                f"Transition {self._active.from_index}->{self._active.to_index} is still animating."
            )
        transition = Transition(
            from_index=from_index,
            to_index=to_index,
            animation=TransitionAnimation(animation),
            duration=_clamp_seconds(duration),
        )
        self._active = transition
        logger.debug(
            "Transition %d->%d started (%s, %.3fs)",
            from_index,
            to_index,
            transition.animation.name,
            transition.duration,
        )
        self._emit(
            TransitionStartedEvent(
                from_index=from_index,
                to_index=to_index,
                animation=transition.animation,
                duration=transition.duration,
            )
        )
        if transition.duration <= 0:
            self._report_progress(transition)
            self._finish(cancelled=False)
        return transition

    def advance(self, dt: float) -> None:
        """Advance the running transition by ``dt`` seconds."""
        if dt < 0:
            raise ValueError("Cannot advance the transition clock backwards.")
        transition = self._active
        if transition is None:
            return
        transition.elapsed += dt
        self._report_progress(transition)
        if transition.progress >= 1.0:
            self._finish(cancelled=False)

    def cancel(self) -> bool:
        """Stop the running animation immediately; returns False when idle."""
        if self._active is None:
            return False
        self._finish(cancelled=True)
        return True

    def _report_progress(self, transition: Transition) -> None:
        fraction = transition.progress
        self._emit(
            TransitionProgressEvent(
                fraction=fraction,
                animation=transition.animation,
                eased=ease(transition.animation, fraction),
            )
        )

    def _finish(self, *, cancelled: bool) -> None:
        transition = self._active
        assert transition is not None
        transition.finished = True
        transition.cancelled = cancelled
        self._active = None
        logger.debug(
            "Transition %d->%d %s",
            transition.from_index,
            transition.to_index,
            "cancelled" if cancelled else "finished",
        )
        self._emit(TransitionFinishedEvent(cancelled=cancelled))
