"""Event system for decoupled experience event handling.

This module provides a publish/subscribe event system that lets the engine
report what happened (a scene finished loading, a transition was refused)
without knowing who listens. A UI layer typically subscribes to show a
loading bar or a "scene not ready yet" toast.

The event system consists of:
- Event: Base class for all events
- Concrete event classes for scene loading, switching and transitions
- EventBus: Central hub for subscribing to and publishing events

Example usage:
    event_bus = EventBus()

    def on_rejected(event: TransitionRejectedEvent):
        toast(f"Scene {event.to_index + 1} is still loading")

    event_bus.subscribe(TransitionRejectedEvent, on_rejected)
    event_bus.publish(TransitionRejectedEvent(2, "not_loaded"))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class Event:
    """Base event class."""


@dataclass
class SceneLoadedEvent(Event):
    """Fired when a scene's asset has been fetched and cached.

    Attributes:
        index: Scene index in the registry.
        scene_id: Identifier from the scene descriptor.
    """

    index: int
    scene_id: str


@dataclass
class SceneLoadFailedEvent(Event):
    """Fired when fetching a scene's asset failed.

    The cache slot stays empty, so the load can be retried.

    Attributes:
        index: Scene index in the registry.
        scene_id: Identifier from the scene descriptor.
        error: String form of the underlying error.
    """

    index: int
    scene_id: str
    error: str


@dataclass
class SceneSwitchedEvent(Event):
    """Fired after the active scene changed.

    Attributes:
        from_index: Previously active index, -1 if none was active.
        to_index: Newly active index.
        scene_id: Identifier of the new scene.
    """

    from_index: int
    to_index: int
    scene_id: str


@dataclass
class PreloadCompleteEvent(Event):
    """Fired when a background preload batch finishes.

    Attributes:
        loaded: Indices loaded by this batch.
        failed: Indices whose load failed.
    """

    loaded: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


@dataclass
class BlinkHoldTriggeredEvent(Event):
    """Fired when a sustained blink reached the required duration.

    Attributes:
        duration_ms: How long the hold lasted when it fired.
    """

    duration_ms: float


@dataclass
class TransitionStartedEvent(Event):
    """Fired when a transition request is accepted and the fade-out begins."""

    to_index: int


@dataclass
class TransitionCompletedEvent(Event):
    """Fired once the fade-in of a successful transition has finished."""

    from_index: int
    to_index: int


@dataclass
class TransitionFailedEvent(Event):
    """Fired when an accepted transition aborted mid-way.

    Attributes:
        to_index: Requested scene index.
        reason: Short description of the failure.
    """

    to_index: int
    reason: str


@dataclass
class TransitionRejectedEvent(Event):
    """Fired when a transition request was refused before it started.

    Attributes:
        to_index: Requested scene index.
        reason: ``"in_flight"`` or ``"not_loaded"``.
    """

    to_index: int
    reason: str


class EventBus:
    """Central event bus for publish/subscribe event handling.

    Publishers emit events without knowing who (if anyone) will handle them,
    and subscribers listen for events without knowing who publishes them.

    Thread safety: This implementation is NOT thread-safe. All subscribe,
    publish and unsubscribe calls should happen on the event loop thread.

    Example usage:
        bus = EventBus()

        def on_switched(event: SceneSwitchedEvent):
            print(f"Now showing {event.scene_id}")

        bus.subscribe(SceneSwitchedEvent, on_switched)
        bus.publish(SceneSwitchedEvent(0, 1, "scene2"))

        bus.unsubscribe(SceneSwitchedEvent, on_switched)
    """

    def __init__(self) -> None:
        """Initialize the event bus with no registered listeners."""
        self.listeners: dict[type[Event], list[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Subscribe a handler to an event type.

        Handlers for the same event type are called in the order they were
        registered. Subscribing the same handler twice calls it twice.

        Args:
            event_type: The type of event to listen for (e.g., SceneLoadedEvent).
            handler: Callback that takes the event as its only argument.
        """
        if event_type not in self.listeners:
            self.listeners[event_type] = []
        self.listeners[event_type].append(handler)

    def unsubscribe(self, event_type: type[Event], handler: Callable[[Event], None]) -> None:
        """Unsubscribe a handler from an event type.

        Removes every registration of the handler. Unknown handlers are ignored.

        Args:
            event_type: The type of event to stop listening for.
            handler: The handler function to remove.
        """
        if event_type in self.listeners:
            self.listeners[event_type] = [h for h in self.listeners[event_type] if h != handler]

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribed handlers.

        Handlers are called synchronously in registration order. Events with
        no subscribers are silently ignored. A handler exception propagates to
        the publisher and stops later handlers from running.

        Args:
            event: The event instance to publish.
        """
        event_type = type(event)
        if event_type in self.listeners:
            for handler in list(self.listeners[event_type]):
                handler(event)

    def clear(self) -> None:
        """Remove all listeners for all event types."""
        self.listeners.clear()

    def unregister_all(self, subscriber: object) -> None:
        """Unregister all bound-method handlers belonging to a subscriber.

        Args:
            subscriber: Instance whose bound methods should be removed.
        """
        for event_type in self.listeners:
            self.listeners[event_type] = [
                h for h in self.listeners[event_type] if not (hasattr(h, "__self__") and h.__self__ == subscriber)
            ]
