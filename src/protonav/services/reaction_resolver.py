"""Resolve a struck hotspot into a typed action."""
from __future__ import annotations

import logging
from typing import Callable

from protonav.config import EngineConfig
from protonav.core.types import TriggerKind
from protonav.domain.actions import (
    Action,
    NavigateAction,
    OverlayAction,
    UnsupportedAction,
    action_from_reaction,
)
from protonav.domain.defs import LinkDef
from protonav.domain.graph import StoryGraph
from protonav.services.errors import (
    BrokenReferenceError,
    NavigationError,
    UnsupportedActionError,
)
from protonav.services.transition_scheduler import normalize_duration

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[NavigationError], None]


def log_navigation_error(error: NavigationError) -> None:
    logger.warning("%s", error)


class ReactionResolver:
    """Maps (link, trigger) to at most one action.

    Broken targets and unsupported actions are passed to ``report`` and
    resolve to None, so a bad hotspot behaves like an empty area.
    """

    def __init__(
        self,
        graph: StoryGraph,
        config: EngineConfig | None = None,
        *,
        report: ErrorReporter | None = None,
    ) -> None:
        self._graph = graph
        self._config = config or EngineConfig()
        self._report = report or log_navigation_error

    def resolve(self, link: LinkDef, trigger: TriggerKind) -> Action | None:
        """Return the action of the first reaction on ``link`` matching ``trigger``."""
        for reaction in link.reactions:
            if reaction.is_inert or reaction.trigger != trigger:
                continue
            duration = normalize_duration(
                reaction.trans_anim_duration, self._config.duration_ms_threshold
            )
            action = action_from_reaction(reaction, duration)
            if isinstance(action, UnsupportedAction):
                self._report(UnsupportedActionError(link.index, action.raw))
                return None
            if isinstance(action, (NavigateAction, OverlayAction)) and not self._graph.has_page(
                action.target
            ):
                self._report(BrokenReferenceError(link.index, action.target))
                return None
            return action
        return None
