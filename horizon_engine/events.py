"""Blocking window and input events, and a dispatcher that routes them by type."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, ClassVar, TypeVar


class EventType(enum.IntEnum):
    """Concrete kind of an event."""

    NONE = 0
    WINDOW_CLOSE = 1
    WINDOW_RESIZE = 2
    WINDOW_FOCUS = 3
    WINDOW_LOST_FOCUS = 4
    WINDOW_MOVED = 5
    APP_TICK = 6
    APP_UPDATE = 7
    APP_RENDER = 8
    KEY_PRESSED = 9
    KEY_RELEASED = 10
    KEY_TYPED = 11
    MOUSE_BUTTON_PRESSED = 12
    MOUSE_BUTTON_RELEASED = 13
    MOUSE_MOVED = 14
    MOUSE_SCROLLED = 15


class EventCategory(enum.IntFlag):
    """Bit flags grouping events into broad categories."""

    NONE = 0
    APPLICATION = 1 << 0
    INPUT = 1 << 1
    KEYBOARD = 1 << 2
    MOUSE = 1 << 3
    MOUSE_BUTTON = 1 << 4


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass
class Event:
    """Base of all events; concrete subclasses set ``event_type``, ``name`` and ``category``."""

    event_type: ClassVar[EventType | None] = None
    name: ClassVar[str] = ""
    category: ClassVar[EventCategory] = EventCategory.NONE

    handled: bool = field(default=False, kw_only=True, compare=False, repr=False)

    def __post_init__(self) -> None:
        if type(self).event_type is None:
            raise TypeError(f"{type(self).__name__} is abstract and cannot be created")

    def is_in_category(self, category: EventCategory) -> bool:
        """Return True if this event belongs to ``category``."""
        return bool(self.category & category)

    def __str__(self) -> str:
        return self.name


@dataclass
class WindowResizeEvent(Event):
    width: int
    height: int

    event_type = EventType.WINDOW_RESIZE
    name = "WindowResize"
    category = EventCategory.APPLICATION

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.width < 0 or self.height < 0:
            raise ValueError("window dimensions must be non-negative")

    def __str__(self) -> str:
        return f"WindowResizeEvent: {self.width}, {self.height}"


@dataclass
class WindowCloseEvent(Event):
    event_type = EventType.WINDOW_CLOSE
    name = "WindowClose"
    category = EventCategory.APPLICATION


@dataclass
class AppTickEvent(Event):
    event_type = EventType.APP_TICK
    name = "AppTick"
    category = EventCategory.APPLICATION


@dataclass
class AppUpdateEvent(Event):
    event_type = EventType.APP_UPDATE
    name = "AppUpdate"
    category = EventCategory.APPLICATION


@dataclass
class AppRenderEvent(Event):
    event_type = EventType.APP_RENDER
    name = "AppRender"
    category = EventCategory.APPLICATION


@dataclass
class KeyEvent(Event):
    """Base of keyboard events; not created directly."""

    keycode: int

    category = EventCategory.KEYBOARD | EventCategory.INPUT


@dataclass
class KeyPressedEvent(KeyEvent):
    repeat_count: int

    event_type = EventType.KEY_PRESSED
    name = "KeyPressed"

    def __str__(self) -> str:
        return f"KeyPressedEvent: {self.keycode} ({self.repeat_count} repeats)"


@dataclass
class KeyReleasedEvent(KeyEvent):
    event_type = EventType.KEY_RELEASED
    name = "KeyReleased"

    def __str__(self) -> str:
        return f"KeyReleasedEvent: {self.keycode}"


@dataclass
class KeyTypedEvent(KeyEvent):
    event_type = EventType.KEY_TYPED
    name = "KeyTyped"

    def __str__(self) -> str:
        return f"KeyTypedEvent: {self.keycode}"


@dataclass
class MouseMovedEvent(Event):
    x: float
    y: float

    event_type = EventType.MOUSE_MOVED
    name = "MouseMoved"
    category = EventCategory.MOUSE | EventCategory.INPUT

    def __str__(self) -> str:
        return f"MouseMovedEvent: {_fmt(self.x)}, {_fmt(self.y)}"


@dataclass
class MouseScrolledEvent(Event):
    x_offset: float
    y_offset: float

    event_type = EventType.MOUSE_SCROLLED
    name = "MouseScrolled"
    category = EventCategory.MOUSE | EventCategory.INPUT

    def __str__(self) -> str:
        return f"MouseScrolledEvent: {_fmt(self.x_offset)}, {_fmt(self.y_offset)}"


@dataclass
class MouseButtonEvent(Event):
    """Base of mouse button events; not created directly."""

    button: int

    category = EventCategory.MOUSE | EventCategory.INPUT


@dataclass
class MouseButtonPressedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_PRESSED
    name = "MouseButtonPressed"

    def __str__(self) -> str:
        return f"MouseButtonPressedEvent: {self.button}"


@dataclass
class MouseButtonReleasedEvent(MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_RELEASED
    name = "MouseButtonReleased"

    def __str__(self) -> str:
        return f"MouseButtonReleasedEvent: {self.button}"


E = TypeVar("E", bound=Event)


class EventDispatcher:
    """Routes one event to a handler when the handler's event class matches."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: type[E], func: Callable[[E], bool]) -> bool:
        """Call ``func`` if the event is of ``event_class``; its result becomes ``handled``."""
        if event_class.event_type is None:
            raise TypeError(f"{event_class.__name__} has no concrete event type")
        if self.event.event_type != event_class.event_type:
            return False
        self.event.handled = bool(func(self.event))  # type: ignore[arg-type]
        return True