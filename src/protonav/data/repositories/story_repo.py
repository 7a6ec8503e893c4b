"""Repository for exported prototype stories."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping

from protonav.core.types import TRIGGER_KINDS
from protonav.data.errors import DataValidationError
from protonav.data.json_loader import load_json, load_story_js
from protonav.data.repositories.base import RepositoryBase
from protonav.domain.defs import (
    GroupDef,
    LinkDef,
    PageDef,
    ReactionDef,
    RectDef,
    StoryDef,
    StoryMetadataDef,
    StoryOptionsDef,
    TransitionAnimation,
)

logger = logging.getLogger(__name__)


class StoryRepository(RepositoryBase[StoryDef]):
    """Loads prototype stories and validates their shape.

    Only field shapes are checked here. Graph invariants (owner indices,
    duplicate hotspot indices, start page range) are the validator's concern
    and are enforced when a ``StoryGraph`` is built.
    """

    def _build(self, def_id: str, raw: dict[str, object]) -> StoryDef:
        story = self.build_story(raw)
        logger.info("Loaded prototype '%s' with %d pages", def_id, len(story.pages))
        return story

    def build_story(self, raw: Mapping[str, object]) -> StoryDef:
        """Convert an in-memory export mapping into a typed story."""
        data = self._require_mapping(raw, "story")
        pages_raw = self._require_type(data.get("pages"), list, "story pages")
        pages = tuple(self._parse_page(entry, position) for position, entry in enumerate(pages_raw))
        groups = tuple(self._parse_groups(data.get("groups")))
        start_page_index = data.get("startPageIndex", 0)
        start_page_index = self._require_index(start_page_index, "story startPageIndex")
        title = self._optional_str(data.get("title"), "story title") or ""
        return StoryDef(
            title=title,
            pages=pages,
            start_page_index=start_page_index,
            groups=groups,
            metadata=self._parse_metadata(data),
            options=self._parse_options(data),
        )

    def _parse_page(self, raw_page: object, position: int) -> PageDef:
        context = f"pages[{position}]"
        page = self._require_mapping(raw_page, context)
        page_id = self._require_str(page.get("id"), f"{context} id")
        context = f"page '{page_id}'"
        index = self._require_index(page.get("index"), f"{context} index")
        raw_links = page.get("links")
        links: List[LinkDef] = []
        if raw_links is not None:
            if not isinstance(raw_links, list):
                raise DataValidationError(f"{context} links must be a list if provided.")
            links = [
                self._parse_link(entry, f"{context} links[{link_position}]")
                for link_position, entry in enumerate(raw_links)
            ]
        fixed_panels = page.get("fixedPanels") or []
        self._require_type(fixed_panels, list, f"{context} fixedPanels")
        group_index = page.get("groupIndex")
        if group_index is not None:
            group_index = self._require_index(group_index, f"{context} groupIndex")
        return PageDef(
            id=page_id,
            index=index,
            title=self._optional_str(page.get("title"), f"{context} title") or "",
            width=self._require_number(page.get("width"), f"{context} width"),
            height=self._require_number(page.get("height"), f"{context} height"),
            x=self._require_number(page.get("x", 0), f"{context} x"),
            y=self._require_number(page.get("y", 0), f"{context} y"),
            image=self._optional_str(page.get("image"), f"{context} image"),
            group_index=group_index,
            overflow_v=self._optional_bool(page.get("protoOverflowV"), f"{context} protoOverflowV"),
            overflow_h=self._optional_bool(page.get("protoOverflowH"), f"{context} protoOverflowH"),
            is_frame=self._optional_bool(page.get("isFrame"), f"{context} isFrame", default=True),
            page_type=self._optional_str(page.get("type"), f"{context} type") or "regular",
            fixed_panels=tuple(fixed_panels),
            links=tuple(links),
        )

    def _parse_link(self, raw_link: object, context: str) -> LinkDef:
        link = self._require_mapping(raw_link, context)
        rect = self._require_mapping(link.get("rect"), f"{context} rect")
        raw_reactions = link.get("reactions")
        reactions: List[ReactionDef] = []
        if raw_reactions is not None:
            if not isinstance(raw_reactions, list):
                raise DataValidationError(f"{context} reactions must be a list if provided.")
            reactions = [
                self._parse_reaction(entry, f"{context} reactions[{position}]")
                for position, entry in enumerate(raw_reactions)
            ]
        return LinkDef(
            name=self._optional_str(link.get("name"), f"{context} name") or "",
            rect=RectDef(
                x=self._require_number(rect.get("x"), f"{context} rect x"),
                y=self._require_number(rect.get("y"), f"{context} rect y"),
                width=self._require_number(rect.get("width"), f"{context} rect width"),
                height=self._require_number(rect.get("height"), f"{context} rect height"),
            ),
            index=self._require_index(link.get("index"), f"{context} index"),
            reactions=tuple(reactions),
        )

    def _parse_reaction(self, raw_reaction: object, context: str) -> ReactionDef:
        reaction = self._require_mapping(raw_reaction, context)
        trigger = self._optional_str(reaction.get("trigger"), f"{context} trigger")
        if trigger is not None and trigger not in TRIGGER_KINDS:
            logger.debug("%s has unknown trigger %r; reaction is inert", context, trigger)
            trigger = None
        src_page_index = reaction.get("srcPageIndex")
        if src_page_index is not None:
            src_page_index = self._require_index(src_page_index, f"{context} srcPageIndex")
        frame_index = reaction.get("frameIndex")
        if frame_index is not None:
            frame_index = self._require_index(frame_index, f"{context} frameIndex")
        return ReactionDef(
            trigger=trigger,
            action=self._optional_str(reaction.get("action"), f"{context} action"),
            navigation_type=self._optional_str(reaction.get("navigationType"), f"{context} navigationType"),
            src_page_index=src_page_index,
            frame_index=frame_index,
            disable_auto_scroll=self._optional_bool(
                reaction.get("disableAutoScroll"), f"{context} disableAutoScroll"
            ),
            trans_anim_type=self._parse_animation(reaction.get("transAnimType"), context),
            trans_anim_duration=self._require_number(
                reaction.get("transAnimDuration", 0), f"{context} transAnimDuration"
            ),
            dest_modal=self._optional_bool(reaction.get("tmpDestModal"), f"{context} tmpDestModal"),
        )

    def _parse_animation(self, value: object, context: str) -> TransitionAnimation:
        if value is None:
            return TransitionAnimation.DISSOLVE
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} transAnimType must be an integer.")
        try:
            return TransitionAnimation(value)
        except ValueError:
            logger.debug("%s has unknown transAnimType %d; using DISSOLVE", context, value)
            return TransitionAnimation.DISSOLVE

    def _parse_groups(self, raw_groups: object) -> List[GroupDef]:
        if raw_groups is None:
            return []
        if not isinstance(raw_groups, list):
            raise DataValidationError("story groups must be a list if provided.")
        groups: List[GroupDef] = []
        for position, entry in enumerate(raw_groups):
            context = f"groups[{position}]"
            group = self._require_mapping(entry, context)
            sections = group.get("sections") or []
            self._require_type(sections, list, f"{context} sections")
            groups.append(
                GroupDef(
                    id=self._require_str(group.get("id"), f"{context} id"),
                    index=self._require_index(group.get("index", position), f"{context} index"),
                    name=self._optional_str(group.get("name"), f"{context} name") or "",
                    back_color=self._optional_str(group.get("backColor"), f"{context} backColor"),
                    sections=tuple(sections),
                )
            )
        return groups

    def _parse_metadata(self, data: Mapping[str, object]) -> StoryMetadataDef:
        doc_version = data.get("docVersion")
        if doc_version is not None:
            doc_version = self._require_index(doc_version, "story docVersion")
        return StoryMetadataDef(
            doc_name=self._optional_str(data.get("docName"), "story docName") or "",
            doc_path=self._optional_str(data.get("docPath"), "story docPath") or "",
            doc_version=doc_version,
            owner_name=self._optional_str(data.get("ownerName"), "story ownerName") or "",
            owner_email=self._optional_str(data.get("ownerEmail"), "story ownerEmail") or "",
            author_name=self._optional_str(data.get("authorName"), "story authorName") or "",
            author_email=self._optional_str(data.get("authorEmail"), "story authorEmail") or "",
            file_key=self._optional_str(data.get("fileKey"), "story fileKey") or "",
        )

    def _parse_options(self, data: Mapping[str, object]) -> StoryOptionsDef:
        return StoryOptionsDef(
            disable_interactions=self._optional_bool(
                data.get("disableInteractions"), "story disableInteractions"
            ),
            highlight_hotspot=self._optional_bool(data.get("highlightHotspot"), "story highlightHotspot"),
            highlight_all_hotspots=self._optional_bool(
                data.get("highlightAllHotspots"), "story highlightAllHotspots"
            ),
            hide_gallery=self._optional_bool(data.get("hideGallery"), "story hideGallery"),
            zoom_enabled=self._optional_bool(data.get("zoomEnabled"), "story zoomEnabled", default=True),
            file_type=self._optional_str(data.get("fileType"), "story fileType") or "png",
        )

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _optional_str(value: object, context: str) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string if provided.")
        return value

    @staticmethod
    def _optional_bool(value: object, context: str, *, default: bool = False) -> bool:
        if value is None:
            return default
        if not isinstance(value, bool):
            raise DataValidationError(f"{context} must be a boolean if provided.")
        return value

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(f"{context} must be a number.")
        return value

    @staticmethod
    def _require_index(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        if value < 0:
            raise DataValidationError(f"{context} must be non-negative.")
        return value


def parse_story(raw: Mapping[str, object]) -> StoryDef:
    """Build a typed story from an already-decoded export mapping."""
    return StoryRepository().build_story(raw)


def load_story_file(path: Path | str) -> StoryDef:
    """Load a single ``story.js`` or JSON export from disk."""
    file_path = Path(path)
    raw = load_story_js(file_path) if file_path.suffix == ".js" else load_json(file_path)
    return parse_story(raw)
