"""Navigation engine for exported clickable prototypes."""
from __future__ import annotations

from protonav.config import EngineConfig, load_config
from protonav.data.errors import StructuralError
from protonav.data.repositories import StoryRepository, load_story_file, parse_story
from protonav.domain.graph import LinkNotFoundError, PageNotFoundError, StoryGraph
from protonav.services.controllers import NavigationController, NavigationResult

__all__ = [
    "EngineConfig",
    "LinkNotFoundError",
    "NavigationController",
    "NavigationResult",
    "PageNotFoundError",
    "StoryGraph",
    "StoryRepository",
    "StructuralError",
    "load_config",
    "load_story_file",
    "parse_story",
]
