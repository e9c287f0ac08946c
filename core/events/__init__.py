"""Event hub for animated entities."""

from .event_hub import EventHub
from .event_types import EventType, Subscription, completion_event

__all__ = ['EventHub', 'EventType', 'Subscription', 'completion_event']
