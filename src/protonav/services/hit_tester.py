"""Pointer hit testing against page hotspots."""
from __future__ import annotations

from typing import List, Tuple

from protonav.domain.defs import LinkDef, PageDef, StoryOptionsDef

Point = Tuple[float, float]


def hit_test(page: PageDef, point: Point, *, interactions_disabled: bool = False) -> LinkDef | None:
    """Return the topmost link under ``point`` or None.

    Links later in the page's list sit above earlier ones, so the list is
    scanned from the end.
    """
    if interactions_disabled:
        return None
    px, py = point
    for link in reversed(page.links):
        if link.rect.contains(px, py):
            return link
    return None


def hotspots_to_highlight(page: PageDef, options: StoryOptionsDef) -> List[LinkDef]:
    """Return the links a renderer should outline on ``page``.

    ``highlight_all_hotspots`` outlines every link; ``highlight_hotspot`` alone
    outlines only links that can fire.
    """
    if options.disable_interactions:
        return []
    if options.highlight_all_hotspots:
        return list(page.links)
    if options.highlight_hotspot:
        return [
            link for link in page.links if any(not reaction.is_inert for reaction in link.reactions)
        ]
    return []
