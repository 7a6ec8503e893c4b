"""Prototype story definition structures used by the navigation engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple

from protonav.core.types import TriggerKind


class TransitionAnimation(IntEnum):
    """Transition animation kinds as encoded by the exporting tool."""

    DISSOLVE = 0
    MOVE_IN = 1
    MOVE_OUT = 2
    PUSH = 3
    SLIDE_IN = 4
    SLIDE_OUT = 5
    SMART_ANIMATE = 6


@dataclass(frozen=True, slots=True)
class RectDef:
    """Axis-aligned rectangle in page-local coordinates."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """Return True if the point lies inside; right and bottom edges are excluded."""
        if self.width <= 0 or self.height <= 0:
            return False
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


@dataclass(frozen=True, slots=True)
class ReactionDef:
    """Trigger to action binding attached to a link."""

    trigger: TriggerKind | None
    action: str | None
    navigation_type: str | None = None
    src_page_index: int | None = None
    frame_index: int | None = None
    disable_auto_scroll: bool = False
    trans_anim_type: TransitionAnimation = TransitionAnimation.DISSOLVE
    trans_anim_duration: float = 0.0
    dest_modal: bool = False

    @property
    def is_inert(self) -> bool:
        return self.trigger is None or self.action is None


@dataclass(frozen=True, slots=True)
class LinkDef:
    """Clickable hotspot on a page. ``index`` is unique across the whole story."""

    name: str
    rect: RectDef
    index: int
    reactions: Tuple[ReactionDef, ...] = ()


@dataclass(frozen=True, slots=True)
class PageDef:
    """One navigable screen of the prototype."""

    id: str
    index: int
    title: str
    width: float
    height: float
    x: float = 0
    y: float = 0
    image: str | None = None
    group_index: int | None = None
    overflow_v: bool = False
    overflow_h: bool = False
    is_frame: bool = True
    page_type: str = "regular"
    fixed_panels: Tuple[object, ...] = ()
    links: Tuple[LinkDef, ...] = ()


@dataclass(frozen=True, slots=True)
class GroupDef:
    """Presentational grouping of pages; carried through untouched."""

    id: str
    index: int
    name: str
    back_color: str | None = None
    sections: Tuple[object, ...] = ()


@dataclass(frozen=True, slots=True)
class StoryMetadataDef:
    doc_name: str = ""
    doc_path: str = ""
    doc_version: int | None = None
    owner_name: str = ""
    owner_email: str = ""
    author_name: str = ""
    author_email: str = ""
    file_key: str = ""


@dataclass(frozen=True, slots=True)
class StoryOptionsDef:
    """Viewer switches exported alongside the story."""

    disable_interactions: bool = False
    highlight_hotspot: bool = False
    highlight_all_hotspots: bool = False
    hide_gallery: bool = False
    zoom_enabled: bool = True
    file_type: str = "png"


@dataclass(frozen=True, slots=True)
class StoryDef:
    """Complete prototype graph."""

    title: str
    pages: Tuple[PageDef, ...]
    start_page_index: int
    groups: Tuple[GroupDef, ...] = ()
    metadata: StoryMetadataDef = field(default_factory=StoryMetadataDef)
    options: StoryOptionsDef = field(default_factory=StoryOptionsDef)
