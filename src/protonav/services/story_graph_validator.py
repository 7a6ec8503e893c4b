"""Static prototype graph validation utilities."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

from protonav.config import DEFAULT_DURATION_MS_THRESHOLD
from protonav.data.repositories import parse_story
from protonav.domain.actions import (
    NavigateAction,
    OverlayAction,
    UnsupportedAction,
    action_from_reaction,
)
from protonav.domain.defs import PageDef, StoryDef


Severity = str


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def errors_only(issues: Sequence[Issue]) -> list[Issue]:
    return [issue for issue in issues if issue.severity == "ERROR"]


def validate_story_graph(
    story: StoryDef | Mapping[str, object],
    *,
    duration_ms_threshold: float = DEFAULT_DURATION_MS_THRESHOLD,
) -> list[Issue]:
    """Return every structural error and warning found in ``story``.

    ERROR issues are load-time invariant violations; a ``StoryGraph`` refuses
    to build over them. WARN issues are tolerated at runtime (broken targets
    are reported and ignored when clicked).
    """
    if not isinstance(story, StoryDef):
        story = parse_story(story)
    issues: list[Issue] = []
    if not story.pages:
        issues.append(
            Issue(
                severity="ERROR",
                code="EMPTY_STORY",
                message="Story has no pages.",
                context={"title": story.title},
            )
        )
        return issues

    page_count = len(story.pages)
    if story.start_page_index >= page_count:
        issues.append(
            Issue(
                severity="ERROR",
                code="INVALID_START_PAGE",
                message="startPageIndex does not reference a page.",
                context={
                    "start_page_index": str(story.start_page_index),
                    "page_count": str(page_count),
                },
            )
        )

    for position, page in enumerate(story.pages):
        if page.index != position:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="PAGE_INDEX_MISMATCH",
                    message="Page index must equal its position in the page list.",
                    context={"page_id": page.id, "index": str(page.index), "position": str(position)},
                )
            )

    _validate_links(story, issues)
    for page in story.pages:
        _validate_reactions(page, page_count, issues, duration_ms_threshold=duration_ms_threshold)
    _validate_reachability(story, issues)
    return issues


def _validate_links(story: StoryDef, issues: list[Issue]) -> None:
    owners: dict[int, str] = {}
    for page in story.pages:
        for link in page.links:
            if link.index in owners:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="DUPLICATE_LINK_INDEX",
                        message="Link index is already used by another link.",
                        context={
                            "page_id": page.id,
                            "link_index": str(link.index),
                            "first_page_id": owners[link.index],
                        },
                    )
                )
            else:
                owners[link.index] = page.id
            if link.rect.width < 0 or link.rect.height < 0:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="NEGATIVE_RECT",
                        message="Link rectangle has a negative width or height.",
                        context={"page_id": page.id, "link_index": str(link.index)},
                    )
                )


def _validate_reactions(
    page: PageDef,
    page_count: int,
    issues: list[Issue],
    *,
    duration_ms_threshold: float,
) -> None:
    for link in page.links:
        for position, reaction in enumerate(link.reactions):
            context = {
                "page_id": page.id,
                "link_index": str(link.index),
                "field_path": f"reactions[{position}]",
            }
            if reaction.src_page_index is not None and reaction.src_page_index != page.index:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="SRC_PAGE_MISMATCH",
                        message="srcPageIndex does not match the owning page.",
                        context={**context, "src_page_index": str(reaction.src_page_index)},
                    )
                )
            if reaction.is_inert:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="INERT_REACTION",
                        message="Reaction lacks a trigger or action and will never fire.",
                        context=context,
                    )
                )
                continue
            duration = reaction.trans_anim_duration
            if math.isfinite(duration) and duration > duration_ms_threshold:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="DURATION_UNIT_AMBIGUOUS",
                        message="Transition duration looks like milliseconds and will be divided by 1000.",
                        context={**context, "duration": str(duration)},
                    )
                )
            action = action_from_reaction(reaction, 0.0)
            if isinstance(action, UnsupportedAction):
                issues.append(
                    Issue(
                        severity="WARN",
                        code="UNSUPPORTED_ACTION",
                        message="Reaction action is not supported and will be ignored.",
                        context={**context, "action": action.raw},
                    )
                )
            elif isinstance(action, (NavigateAction, OverlayAction)) and action.target >= page_count:
                issues.append(
                    Issue(
                        severity="WARN",
                        code="BROKEN_FRAME_REF",
                        message="Reaction targets a page that does not exist.",
                        context={**context, "referenced_index": str(action.target)},
                    )
                )


def _validate_reachability(story: StoryDef, issues: list[Issue]) -> None:
    page_count = len(story.pages)
    if story.start_page_index >= page_count:
        return
    reachable: set[int] = set()
    stack: list[int] = [story.start_page_index]
    while stack:
        page_index = stack.pop()
        if page_index in reachable:
            continue
        reachable.add(page_index)
        for target in outgoing_page_indices(story.pages[page_index]):
            if 0 <= target < page_count:
                stack.append(target)
    for position, page in enumerate(story.pages):
        if position not in reachable:
            issues.append(
                Issue(
                    severity="WARN",
                    code="UNREACHABLE_PAGE",
                    message="Page is unreachable from the start page.",
                    context={"page_id": page.id, "title": page.title},
                )
            )


def outgoing_page_indices(page: PageDef) -> list[int]:
    """Return navigation targets of every active reaction on ``page``, in order."""
    targets: list[int] = []
    for link in page.links:
        for reaction in link.reactions:
            if reaction.is_inert:
                continue
            action = action_from_reaction(reaction, 0.0)
            if isinstance(action, (NavigateAction, OverlayAction)):
                targets.append(action.target)
    return targets
