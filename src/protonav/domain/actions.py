"""Typed navigation actions produced by the reaction resolver."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from protonav.domain.defs import ReactionDef, TransitionAnimation


@dataclass(frozen=True, slots=True)
class NavigateAction:
    target: int
    animation: TransitionAnimation = TransitionAnimation.DISSOLVE
    duration: float = 0.0
    suppress_scroll: bool = False
    is_modal: bool = False


@dataclass(frozen=True, slots=True)
class OverlayAction:
    target: int
    animation: TransitionAnimation = TransitionAnimation.DISSOLVE
    duration: float = 0.0
    suppress_scroll: bool = False
    is_modal: bool = True


@dataclass(frozen=True, slots=True)
class ScrollAction:
    target: int | None = None


@dataclass(frozen=True, slots=True)
class BackAction:
    pass


@dataclass(frozen=True, slots=True)
class NoAction:
    pass


@dataclass(frozen=True, slots=True)
class UnsupportedAction:
    raw: str


Action = Union[NavigateAction, OverlayAction, ScrollAction, BackAction, NoAction, UnsupportedAction]
PageTransitionAction = Union[NavigateAction, OverlayAction]

_OVERLAY_NAVIGATION_TYPES = {"OVERLAY", "SWAP"}
_SCROLL_NAVIGATION_TYPES = {"SCROLL_TO", "SCROLL"}


def action_from_reaction(reaction: ReactionDef, duration: float) -> Action:
    """Map the flat exported reaction record onto an action variant.

    ``duration`` is the already-normalized transition length in seconds.
    Target indices are copied as-is; checking them against the graph is the
    resolver's job.
    """
    action_name = (reaction.action or "").upper()
    navigation_type = (reaction.navigation_type or "NAVIGATE").upper()
    if action_name in ("", "NONE"):
        return NoAction()
    if action_name == "BACK":
        return BackAction()
    if action_name in _SCROLL_NAVIGATION_TYPES:
        return ScrollAction(target=reaction.frame_index)
    if action_name != "FRAME":
        return UnsupportedAction(raw=reaction.action or "")
    if navigation_type in _SCROLL_NAVIGATION_TYPES:
        return ScrollAction(target=reaction.frame_index)
    if reaction.frame_index is None:
        return UnsupportedAction(raw=f"{action_name}/{navigation_type} without frameIndex")
    if navigation_type in _OVERLAY_NAVIGATION_TYPES:
        return OverlayAction(
            target=reaction.frame_index,
            animation=reaction.trans_anim_type,
            duration=duration,
            suppress_scroll=reaction.disable_auto_scroll,
        )
    if navigation_type != "NAVIGATE":
        return UnsupportedAction(raw=f"{action_name}/{navigation_type}")
    return NavigateAction(
        target=reaction.frame_index,
        animation=reaction.trans_anim_type,
        duration=duration,
        suppress_scroll=reaction.disable_auto_scroll,
        is_modal=reaction.dest_modal,
    )
