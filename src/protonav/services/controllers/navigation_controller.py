"""UI-agnostic controller that drives a prototype navigation session."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple, Type, TypeVar

from protonav.config import EngineConfig
from protonav.core.types import SchedulerState, TriggerKind
from protonav.domain.actions import (
    Action,
    BackAction,
    NavigateAction,
    OverlayAction,
    ScrollAction,
)
from protonav.domain.defs import LinkDef, PageDef, TransitionAnimation
from protonav.domain.graph import StoryGraph
from protonav.domain.state import NavigationState
from protonav.services.errors import (
    ConcurrentTransitionRejected,
    NavigationError,
    ReentrantCommandError,
)
from protonav.services.hit_tester import Point, hit_test, hotspots_to_highlight
from protonav.services.navigation_events import (
    NavigationErrorEvent,
    NavigationEvent,
    PageChangedEvent,
    ScrollRequestedEvent,
    TransitionFinishedEvent,
    TransitionProgressEvent,
    TransitionStartedEvent,
)
from protonav.services.reaction_resolver import ReactionResolver
from protonav.services.transition_scheduler import TransitionScheduler

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=NavigationEvent)


@dataclass(slots=True)
class NavigationResult:
    """Outcome of one controller command."""

    events: List[NavigationEvent] = field(default_factory=list)
    link: LinkDef | None = None
    action: Action | None = None
    error: NavigationError | None = None

    @property
    def page_changed(self) -> bool:
        return any(isinstance(event, PageChangedEvent) for event in self.events)


class NavigationController:
    """
    Navigation state machine for one prototype session.

    The controller owns the current page and the back stack. It composes the
    hit tester, reaction resolver and transition scheduler, and publishes
    events to subscribers (typically a renderer).

    Every command runs to completion before the next one is accepted. A
    command issued while another is running (from a listener callback or a
    second thread) is rejected with ``ReentrantCommandError`` on the returned
    result; it is logged but not published, so a listener that reacts to
    errors cannot loop. Ticks are the exception: they are deferred, not
    rejected. A listener that raises is logged and skipped; it never
    interrupts the command that emitted the event.
    """

    def __init__(self, graph: StoryGraph, config: EngineConfig | None = None) -> None:
        self._graph = graph
        self._config = config or EngineConfig()
        self._state = NavigationState(current_page_index=graph.story.start_page_index)
        self._listeners: Dict[Type[NavigationEvent], List[Callable[[NavigationEvent], None]]] = {}
        self._scheduler = TransitionScheduler(
            self._emit, duration_ms_threshold=self._config.duration_ms_threshold
        )
        self._resolver = ReactionResolver(graph, self._config, report=self._report_error)
        self._command_lock = threading.Lock()
        self._deferred_lock = threading.Lock()
        self._deferred_dt = 0.0
        self._result: NavigationResult | None = None
        self._pressed_link: int | None = None
        self._hovered_link: int | None = None

    # -- queries -----------------------------------------------------------

    @property
    def graph(self) -> StoryGraph:
        return self._graph

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def current_page_index(self) -> int:
        return self._state.current_page_index

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self._state.history)

    @property
    def is_animating(self) -> bool:
        return self._scheduler.is_animating

    @property
    def scheduler_state(self) -> SchedulerState:
        return self._scheduler.state

    def current_page(self) -> PageDef:
        return self._graph.page_at(self._state.current_page_index)

    def visible_hotspots(self) -> List[LinkDef]:
        """Links on the current page the renderer should outline."""
        return hotspots_to_highlight(self.current_page(), self._graph.story.options)

    # -- subscriptions -----------------------------------------------------

    def subscribe(self, event_type: Type[E], callback: Callable[[E], None]) -> Callable[[], None]:
        """Register ``callback`` for ``event_type`` and its subclasses.

        Returns a function that removes the subscription.
        """
        self._listeners.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._listeners.get(event_type, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def on_page_changed(self, callback: Callable[[int, int], None]) -> Callable[[], None]:
        return self.subscribe(
            PageChangedEvent, lambda event: callback(event.prev_index, event.next_index)
        )

    def on_transition_started(
        self, callback: Callable[[int, int, TransitionAnimation, float], None]
    ) -> Callable[[], None]:
        return self.subscribe(
            TransitionStartedEvent,
            lambda event: callback(event.from_index, event.to_index, event.animation, event.duration),
        )

    def on_transition_progress(
        self, callback: Callable[[float, TransitionAnimation], None]
    ) -> Callable[[], None]:
        return self.subscribe(
            TransitionProgressEvent, lambda event: callback(event.fraction, event.animation)
        )

    def on_transition_finished(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self.subscribe(TransitionFinishedEvent, lambda event: callback())

    def on_navigation_error(self, callback: Callable[[NavigationError], None]) -> Callable[[], None]:
        return self.subscribe(NavigationErrorEvent, lambda event: callback(event.error))

    # -- commands ----------------------------------------------------------

    def activate(self, point: Point, trigger: TriggerKind | None = None) -> NavigationResult:
        """Fire the hotspot under ``point`` on the current page."""
        return self._run(self._activate, point, trigger or self._config.default_trigger)

    def go_back(self) -> NavigationResult:
        """Return to the previous page; does nothing when the history is empty."""
        return self._run(self._go_back)

    def jump_to_start(self) -> NavigationResult:
        """Return to the start page and clear the history."""
        return self._run(self._jump_to_start)

    def tick(self, dt: float) -> NavigationResult:
        """Advance the transition clock by ``dt`` seconds.

        A tick that arrives while another command is running is deferred and
        applied when a command next completes, so elapsed time is never lost.
        """
        if dt < 0:
            raise ValueError("Cannot advance the transition clock backwards.")
        if not self._command_lock.acquire(blocking=False):
            with self._deferred_lock:
                self._deferred_dt += dt
            logger.debug("Deferred tick of %.3fs while a command is running", dt)
            return NavigationResult()
        return self._run_locked(self._tick, dt)

    def pointer_down(self, x: float, y: float) -> NavigationResult:
        return self._run(self._pointer_down, (x, y))

    def pointer_up(self, x: float, y: float) -> NavigationResult:
        """Complete a click when the pointer is released over the pressed hotspot."""
        return self._run(self._pointer_up, (x, y))

    def pointer_move(self, x: float, y: float) -> NavigationResult:
        return self._run(self._pointer_move, (x, y))

    def back(self) -> NavigationResult:
        return self.go_back()

    def restart(self) -> NavigationResult:
        return self.jump_to_start()

    # -- internals ---------------------------------------------------------

    def _run(self, command: Callable[..., None], *args: object) -> NavigationResult:
        if not self._command_lock.acquire(blocking=False):
            error = ReentrantCommandError(
                f"{command.__name__.lstrip('_')} rejected: another command is still running."
            )
            logger.warning("%s", error)
            return NavigationResult(error=error)
        return self._run_locked(command, *args)

    def _run_locked(self, command: Callable[..., None], *args: object) -> NavigationResult:
        # caller holds _command_lock
        result = NavigationResult()
        self._result = result
        try:
            command(result, *args)
            self._apply_deferred_ticks()
        finally:
            self._result = None
            self._command_lock.release()
        return result

    def _activate(self, result: NavigationResult, point: Point, trigger: TriggerKind) -> None:
        link = self._hit(point)
        if link is None:
            return
        self._perform(result, link, trigger)

    def _perform(self, result: NavigationResult, link: LinkDef, trigger: TriggerKind) -> None:
        result.link = link
        action = self._resolver.resolve(link, trigger)
        result.action = action
        if isinstance(action, BackAction):
            self._go_back(result)
        elif isinstance(action, ScrollAction):
            self._emit(
                ScrollRequestedEvent(page_index=self._state.current_page_index, target=action.target)
            )
        elif isinstance(action, (NavigateAction, OverlayAction)):
            self._navigate(action)

    def _navigate(self, action: NavigateAction | OverlayAction) -> None:
        if self._scheduler.is_animating:
            if self._config.busy_policy == "reject":
                self._report_error(
                    ConcurrentTransitionRejected(
                        f"Navigation to page {action.target} rejected while a transition is animating."
                    )
                )
                return
            self._scheduler.cancel()
        prev_index = self._state.current_page_index
        self._state.history.append(prev_index)
        if self._config.max_history and len(self._state.history) > self._config.max_history:
            del self._state.history[0]
        self._change_page(action.target)
        self._scheduler.begin_transition(prev_index, action.target, action.animation, action.duration)

    def _go_back(self, result: NavigationResult) -> None:
        if not self._state.history:
            return
        self._scheduler.cancel()
        self._change_page(self._state.history.pop())

    def _jump_to_start(self, result: NavigationResult) -> None:
        self._scheduler.cancel()
        self._state.history.clear()
        start_index = self._graph.story.start_page_index
        if self._state.current_page_index != start_index:
            self._change_page(start_index)

    def _tick(self, result: NavigationResult, dt: float) -> None:
        self._scheduler.advance(dt)

    def _apply_deferred_ticks(self) -> None:
        with self._deferred_lock:
            dt, self._deferred_dt = self._deferred_dt, 0.0
        if dt:
            self._scheduler.advance(dt)

    def _pointer_down(self, result: NavigationResult, point: Point) -> None:
        link = self._hit(point)
        self._pressed_link = link.index if link is not None else None
        if link is not None:
            self._perform(result, link, "ON_PRESS")

    def _pointer_up(self, result: NavigationResult, point: Point) -> None:
        pressed = self._pressed_link
        self._pressed_link = None
        link = self._hit(point)
        if link is None or pressed != link.index:
            return
        self._perform(result, link, "ON_CLICK")

    def _pointer_move(self, result: NavigationResult, point: Point) -> None:
        link = self._hit(point)
        link_index = link.index if link is not None else None
        if link_index == self._hovered_link:
            return
        self._hovered_link = link_index
        if link is not None:
            self._perform(result, link, "ON_HOVER")

    def _hit(self, point: Point) -> LinkDef | None:
        return hit_test(
            self.current_page(),
            point,
            interactions_disabled=self._graph.story.options.disable_interactions,
        )

    def _change_page(self, next_index: int) -> None:
        prev_index = self._state.current_page_index
        self._state.current_page_index = next_index
        logger.debug("Page %d -> %d (history depth %d)", prev_index, next_index, len(self._state.history))
        self._emit(PageChangedEvent(prev_index=prev_index, next_index=next_index))

    def _report_error(self, error: NavigationError) -> None:
        logger.warning("%s", error)
        if self._result is not None:
            self._result.error = error
        self._emit(NavigationErrorEvent(error=error))

    def _emit(self, event: NavigationEvent) -> None:
        if self._result is not None:
            self._result.events.append(event)
        for event_type, callbacks in list(self._listeners.items()):
            if isinstance(event, event_type):
                for callback in list(callbacks):
                    try:
                        callback(event)
                    except Exception:
                        logger.exception("Listener %r failed on %s", callback, type(event).__name__)
