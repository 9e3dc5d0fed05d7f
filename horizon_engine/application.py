"""The application: a window, a renderer and a stack of layers driven frame by frame."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, ClassVar

from horizon_engine.events import Event, EventDispatcher, WindowCloseEvent, WindowResizeEvent
from horizon_engine.layers import Layer, LayerStack
from horizon_engine.renderer import Renderer
from horizon_engine.timing import Timestep

EventCallback = Callable[[Event], None]


@dataclass
class WindowProps:
    """Initial title and size of a window."""

    title: str = "Horizon Engine"
    width: int = 1280
    height: int = 720


class Window:
    """A window that queues events and delivers them on each update."""

    def __init__(self, props: WindowProps | None = None) -> None:
        props = props if props is not None else WindowProps()
        self.title = props.title
        self._width = props.width
        self._height = props.height
        self.vsync = True
        self.frame_count = 0
        self._callback: EventCallback | None = None
        self._pending: deque[Event] = deque()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def set_event_callback(self, callback: EventCallback) -> None:
        """Set the function that receives every delivered event."""
        self._callback = callback

    def post(self, event: Event) -> None:
        """Queue an event for delivery on the next update."""
        self._pending.append(event)

    def on_update(self) -> None:
        """Deliver queued events in order and present the frame."""
        while self._pending:
            if self._callback is None:
                raise RuntimeError("window has no event callback")
            event = self._pending.popleft()
            if isinstance(event, WindowResizeEvent):
                self._width = event.width
                self._height = event.height
            self._callback(event)
        self.frame_count += 1


class Application:
    """Owns the window, renderer and layers, and runs the frame loop."""

    _instance: ClassVar["Application | None"] = None

    def __init__(
        self,
        window: Window | None = None,
        renderer: Renderer | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        Application._instance = self
        self.window = window if window is not None else Window()
        self.window.set_event_callback(self.on_event)
        self.renderer = renderer if renderer is not None else Renderer()
        self.renderer.init()
        self.layer_stack = LayerStack()
        self.running = True
        self.minimized = False
        self._clock = clock
        self._last_frame_time = float(clock())

    @classmethod
    def get(cls) -> "Application":
        """The most recently created application."""
        if cls._instance is None:
            raise RuntimeError("no application has been created")
        return cls._instance

    def push_layer(self, layer: Layer) -> None:
        self.layer_stack.push_layer(layer)
        layer.on_attach()

    def push_overlay(self, layer: Layer) -> None:
        self.layer_stack.push_overlay(layer)
        layer.on_attach()

    def on_event(self, event: Event) -> None:
        """Handle window events, then offer the event to layers from the top down."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowCloseEvent, self._on_window_close)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resize)
        for layer in reversed(self.layer_stack):
            layer.on_event(event)
            if event.handled:
                break

    def run(self) -> None:
        """Run frames until the window is closed."""
        while self.running:
            now = float(self._clock())
            timestep = Timestep(now - self._last_frame_time)
            self._last_frame_time = now

            if not self.minimized:
                for layer in self.layer_stack:
                    layer.on_update(timestep)

            for layer in self.layer_stack:
                layer.on_imgui_render()

            self.window.on_update()

    def _on_window_close(self, event: WindowCloseEvent) -> bool:
        self.running = False
        return True

    def _on_window_resize(self, event: WindowResizeEvent) -> bool:
        if event.width == 0 or event.height == 0:
            self.minimized = True
            return False
        self.minimized = False
        self.renderer.on_window_resize(event.width, event.height)
        return False