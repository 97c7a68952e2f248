"""Events published by the experience engine."""

from blinkscape.events.base import (
    BlinkHoldTriggeredEvent,
    Event,
    EventBus,
    PreloadCompleteEvent,
    SceneLoadedEvent,
    SceneLoadFailedEvent,
    SceneSwitchedEvent,
    TransitionCompletedEvent,
    TransitionFailedEvent,
    TransitionRejectedEvent,
    TransitionStartedEvent,
)

__all__ = [
    "BlinkHoldTriggeredEvent",
    "Event",
    "EventBus",
    "PreloadCompleteEvent",
    "SceneLoadFailedEvent",
    "SceneLoadedEvent",
    "SceneSwitchedEvent",
    "TransitionCompletedEvent",
    "TransitionFailedEvent",
    "TransitionRejectedEvent",
    "TransitionStartedEvent",
]
