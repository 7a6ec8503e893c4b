"""Domain definition exports."""

from .story_def import (
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

__all__ = [
    "GroupDef",
    "LinkDef",
    "PageDef",
    "ReactionDef",
    "RectDef",
    "StoryDef",
    "StoryMetadataDef",
    "StoryOptionsDef",
    "TransitionAnimation",
]
