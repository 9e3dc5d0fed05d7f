"""Layers that receive per-frame callbacks, and the ordered stack holding them."""

from __future__ import annotations

from typing import Iterator

from horizon_engine.events import Event
from horizon_engine.timing import Timestep


class Layer:
    """A unit of application logic attached to the layer stack.

    The default hooks only keep track of the layer's lifecycle; subclasses
    override the hooks they need.
    """

    def __init__(self, name: str = "Layer") -> None:
        self.name = name
        self.attached = False
        self.last_timestep: Timestep | None = None
        self.ui_frames = 0
        self.events_seen = 0

    def on_attach(self) -> None:
        """Called once when the layer is pushed onto the application."""
        self.attached = True

    def on_detach(self) -> None:
        """Called once when the layer is removed from the application."""
        self.attached = False

    def on_update(self, ts: Timestep) -> None:
        """Called every frame with the time since the previous frame."""
        self.last_timestep = ts

    def on_imgui_render(self) -> None:
        """Called every frame while the user interface is being built."""
        self.ui_frames += 1

    def on_event(self, event: Event) -> None:
        """Called for each event that earlier layers left unhandled."""
        self.events_seen += 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class LayerStack:
    """Ordered layers with overlays always kept after ordinary layers.

    Iteration runs from the bottom layer to the top overlay; events are
    usually delivered in reverse.
    """

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._insert_index = 0

    def push_layer(self, layer: Layer) -> None:
        """Add ``layer`` above the other ordinary layers but below every overlay."""
        self._layers.insert(self._insert_index, layer)
        self._insert_index += 1

    def push_overlay(self, overlay: Layer) -> None:
        """Add ``overlay`` on top of everything."""
        self._layers.append(overlay)

    def _find(self, layer: Layer) -> int | None:
        return next((i for i, item in enumerate(self._layers) if item is layer), None)

    def pop_layer(self, layer: Layer) -> bool:
        """Remove an ordinary layer; return False if it was not in the stack."""
        index = self._find(layer)
        if index is None:
            return False
        del self._layers[index]
        self._insert_index = max(0, self._insert_index - 1)
        return True

    def pop_overlay(self, overlay: Layer) -> bool:
        """Remove an overlay; return False if it was not in the stack."""
        index = self._find(overlay)
        if index is None:
            return False
        del self._layers[index]
        return True

    @property
    def layers(self) -> tuple[Layer, ...]:
        """The ordinary layers, bottom first."""
        return tuple(self._layers[: self._insert_index])

    @property
    def overlays(self) -> tuple[Layer, ...]:
        """The overlays, bottom first."""
        return tuple(self._layers[self._insert_index :])

    def __iter__(self) -> Iterator[Layer]:
        return iter(list(self._layers))

    def __reversed__(self) -> Iterator[Layer]:
        return reversed(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, layer: object) -> bool:
        return any(item is layer for item in self._layers)