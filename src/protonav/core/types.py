"""Shared type aliases for the core and domain layers."""
from typing import Literal

TriggerKind = Literal["ON_CLICK", "ON_TAP", "ON_PRESS", "ON_HOVER", "ON_DRAG"]
TRIGGER_KINDS: frozenset[str] = frozenset({"ON_CLICK", "ON_TAP", "ON_PRESS", "ON_HOVER", "ON_DRAG"})

SchedulerState = Literal["idle", "animating"]
BusyPolicy = Literal["reject", "cancel"]

__all__ = ["BusyPolicy", "SchedulerState", "TRIGGER_KINDS", "TriggerKind"]
