"""Polling access to keyboard and mouse state through a pluggable backend."""

from __future__ import annotations

import abc


class InputBackend(abc.ABC):
    """Source of the current keyboard and mouse state, supplied by a window system."""

    @abc.abstractmethod
    def is_key_pressed(self, keycode: int) -> bool:
        """Return True while the key is held or repeating."""

    @abc.abstractmethod
    def is_mouse_button_pressed(self, button: int) -> bool:
        """Return True while the mouse button is held."""

    @abc.abstractmethod
    def mouse_position(self) -> tuple[float, float]:
        """Return the cursor position in window coordinates."""


_backend: InputBackend | None = None


def set_backend(backend: InputBackend | None) -> InputBackend | None:
    """Install the backend used for polling and return the one it replaces."""
    global _backend
    previous = _backend
    _backend = backend
    return previous


def _require_backend() -> InputBackend:
    if _backend is None:
        raise RuntimeError("no input backend has been installed")
    return _backend


def is_key_pressed(keycode: int) -> bool:
    """Return True while the key is held."""
    return bool(_require_backend().is_key_pressed(keycode))


def is_mouse_button_pressed(button: int) -> bool:
    """Return True while the mouse button is held."""
    return bool(_require_backend().is_mouse_button_pressed(button))


def mouse_position() -> tuple[float, float]:
    """The cursor position as ``(x, y)``."""
    x, y = _require_backend().mouse_position()
    return float(x), float(y)


def mouse_x() -> float:
    """The cursor's horizontal position."""
    return mouse_position()[0]


def mouse_y() -> float:
    """The cursor's vertical position."""
    return mouse_position()[1]