"""Repository exports."""

from .story_repo import StoryRepository, load_story_file, parse_story

__all__ = [
    "StoryRepository",
    "load_story_file",
    "parse_story",
]
