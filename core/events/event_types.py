"""
Event type definitions for animated entities.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable


COMPLETE_SUFFIX = "Complete"


def completion_event(property_name: str) -> str:
    """Name of the event fired when ``property_name`` finishes animating."""
    return property_name + COMPLETE_SUFFIX


@dataclass
class Subscription:
    """Handle for one registered listener; pass it to ``off()`` to detach."""
    event_name: str
    callback: Callable[[Any], None]
    once: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    active: bool = True

    def __call__(self, owner: Any) -> None:
        if self.once:
            self.active = False
        self.callback(owner)


class EventType:
    """Event name constants for the camera."""
    POSITION_COMPLETE = completion_event("position")
    TARGET_COMPLETE = completion_event("target")
