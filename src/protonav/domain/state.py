"""Per-session navigation state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class NavigationState:
    """Current page pointer and back stack of one session."""

    current_page_index: int
    history: List[int] = field(default_factory=list)
