"""Read-only indexed view over a validated prototype story."""
from __future__ import annotations

from typing import Dict, Mapping, Tuple

from protonav.config import DEFAULT_DURATION_MS_THRESHOLD
from protonav.data.errors import StructuralError
from protonav.data.repositories import parse_story
from protonav.domain.defs import LinkDef, PageDef, StoryDef
from protonav.services.story_graph_validator import (
    Issue,
    errors_only,
    format_issue,
    outgoing_page_indices,
    validate_story_graph,
)


class PageNotFoundError(KeyError):
    """Raised when a page index is outside ``[0, page_count)``."""


class LinkNotFoundError(KeyError):
    """Raised when no link carries the requested global index."""


class StoryGraph:
    """Immutable lookups over pages and hotspots of one story.

    Building a graph validates the story; any ERROR-level issue raises
    ``StructuralError`` and no graph is produced. Instances hold no mutable
    state and may be shared between sessions and threads.
    """

    __slots__ = ("_story", "_links", "_link_owner", "_warnings")

    def __init__(
        self,
        story: StoryDef,
        *,
        duration_ms_threshold: float = DEFAULT_DURATION_MS_THRESHOLD,
    ) -> None:
        issues = validate_story_graph(story, duration_ms_threshold=duration_ms_threshold)
        errors = errors_only(issues)
        if errors:
            details = "\n".join(format_issue(issue) for issue in errors)
            raise StructuralError(f"Story '{story.title}' failed validation:\n{details}", errors)
        self._story = story
        self._warnings: Tuple[Issue, ...] = tuple(issue for issue in issues if issue.severity != "ERROR")
        self._links: Dict[int, LinkDef] = {}
        self._link_owner: Dict[int, int] = {}
        for page in story.pages:
            for link in page.links:
                self._links[link.index] = link
                self._link_owner[link.index] = page.index

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object], **kwargs) -> "StoryGraph":
        """Parse and validate an in-memory export mapping."""
        return cls(parse_story(raw), **kwargs)

    @property
    def story(self) -> StoryDef:
        return self._story

    @property
    def warnings(self) -> Tuple[Issue, ...]:
        """WARN-level issues found while validating the story."""
        return self._warnings

    @property
    def page_count(self) -> int:
        return len(self._story.pages)

    def has_page(self, index: int) -> bool:
        return 0 <= index < len(self._story.pages)

    def page_at(self, index: int) -> PageDef:
        """Return the page at ``index`` or raise PageNotFoundError."""
        if isinstance(index, bool) or not isinstance(index, int) or not self.has_page(index):
            raise PageNotFoundError(index)
        return self._story.pages[index]

    def link_by_global_index(self, index: int) -> LinkDef:
        """Return the link with global hotspot index ``index``."""
        try:
            return self._links[index]
        except KeyError as exc:
            raise LinkNotFoundError(index) from exc

    def owner_of(self, link_index: int) -> PageDef:
        """Return the page that owns the given link."""
        try:
            return self._story.pages[self._link_owner[link_index]]
        except KeyError as exc:
            raise LinkNotFoundError(link_index) from exc

    def start_page(self) -> PageDef:
        return self._story.pages[self._story.start_page_index]

    def pages_in_group(self, group_index: int) -> list[PageDef]:
        return [page for page in self._story.pages if page.group_index == group_index]

    def outgoing_targets(self, page_index: int) -> list[int]:
        """Return valid navigation targets reachable by one interaction from a page."""
        page = self.page_at(page_index)
        return [target for target in outgoing_page_indices(page) if self.has_page(target)]
