"""Keyboard and mouse driven controllers for orthographic and perspective cameras."""

from __future__ import annotations

import math

import numpy as np

from horizon_engine import input as hz_input
from horizon_engine.cameras import OrthographicCamera, PerspectiveCamera
from horizon_engine.events import Event, EventDispatcher, MouseScrolledEvent, WindowResizeEvent
from horizon_engine.keycodes import Key
from horizon_engine.timing import Timestep


class OrthographicCameraController:
    """Pans with W/A/S/D, optionally rotates with Q/E, and zooms with the scroll wheel."""

    MIN_ZOOM = 0.25
    ZOOM_STEP = 0.25

    def __init__(self, aspect_ratio: float, rotation: bool = False) -> None:
        self.aspect_ratio = float(aspect_ratio)
        self._zoom_level = 1.0
        self.camera = OrthographicCamera(*self._bounds())
        self.rotation_enabled = rotation
        self._position = np.zeros(3)
        self._camera_rotation = 0.0
        self.translation_speed = 1.0
        self.rotation_speed = 180.0

    def _bounds(self) -> tuple[float, float, float, float]:
        zoom = self._zoom_level
        return (-self.aspect_ratio * zoom, self.aspect_ratio * zoom, -zoom, zoom)

    @property
    def zoom_level(self) -> float:
        return self._zoom_level

    @zoom_level.setter
    def zoom_level(self, level: float) -> None:
        # The projection follows on the next scroll or resize.
        self._zoom_level = float(level)

    @property
    def camera_position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def camera_rotation(self) -> float:
        """Rotation in degrees, kept within (-180, 180]."""
        return self._camera_rotation

    def on_update(self, ts: Timestep | float) -> None:
        """Move and rotate the camera according to the keys held during this frame."""
        dt = float(ts)
        angle = math.radians(self._camera_rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        step = self.translation_speed * dt

        if hz_input.is_key_pressed(Key.A):
            self._position[0] -= cos_a * step
            self._position[1] -= sin_a * step
        elif hz_input.is_key_pressed(Key.D):
            self._position[0] += cos_a * step
            self._position[1] += sin_a * step

        if hz_input.is_key_pressed(Key.W):
            self._position[0] += -sin_a * step
            self._position[1] += cos_a * step
        elif hz_input.is_key_pressed(Key.S):
            self._position[0] -= -sin_a * step
            self._position[1] -= cos_a * step

        if self.rotation_enabled:
            if hz_input.is_key_pressed(Key.Q):
                self._camera_rotation += self.rotation_speed * dt
            if hz_input.is_key_pressed(Key.E):
                self._camera_rotation -= self.rotation_speed * dt

            if self._camera_rotation > 180.0:
                self._camera_rotation -= 360.0
            elif self._camera_rotation <= -180.0:
                self._camera_rotation += 360.0

            self.camera.rotation = self._camera_rotation

        self.camera.position = self._position
        self.translation_speed = self._zoom_level

    def on_event(self, event: Event) -> None:
        """React to scrolling and window resizing."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(MouseScrolledEvent, self._on_mouse_scrolled)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resized)

    def _on_mouse_scrolled(self, event: MouseScrolledEvent) -> bool:
        self._zoom_level -= event.y_offset * self.ZOOM_STEP
        self._zoom_level = max(self._zoom_level, self.MIN_ZOOM)
        self.camera.set_projection(*self._bounds())
        return False

    def _on_window_resized(self, event: WindowResizeEvent) -> bool:
        if event.width == 0 or event.height == 0:
            return False
        self.aspect_ratio = event.width / event.height
        self.camera.set_projection(*self._bounds())
        return False


class PerspectiveCameraController:
    """Flies with W/A/S/D/Q/E, optionally looks around with the arrow keys, and zooms the field of view."""

    NEAR_PLANE = 0.1
    FAR_PLANE = 100.0
    MIN_FOV = 10.0
    MAX_FOV = 90.0
    MAX_PITCH = 89.0
    FOV_STEP = 1.0

    def __init__(self, aspect_ratio: float, fov: float = 45.0, rotation: bool = False) -> None:
        self.aspect_ratio = float(aspect_ratio)
        self.fov = float(fov)
        self._zoom_level = 1.0
        self.camera = PerspectiveCamera(self.fov, self.aspect_ratio, self.NEAR_PLANE, self.FAR_PLANE)
        self.rotation_enabled = rotation
        self._position = np.zeros(3)
        self._rotation = np.zeros(3)
        self.translation_speed = 5.0
        self.rotation_speed = 180.0

        self._update_projection()
        self.camera.position = self._position
        self.camera.rotation = self._rotation

    @property
    def zoom_level(self) -> float:
        return self._zoom_level

    @zoom_level.setter
    def zoom_level(self, level: float) -> None:
        self._zoom_level = float(level)
        self._update_projection()

    @property
    def camera_position(self) -> np.ndarray:
        return self._position.copy()

    @property
    def camera_rotation(self) -> np.ndarray:
        """Pitch, yaw and roll in degrees."""
        return self._rotation.copy()

    def on_update(self, ts: Timestep | float) -> None:
        """Move and rotate the camera according to the keys held during this frame."""
        dt = float(ts)
        velocity = self.translation_speed * dt
        front, right, up = self.camera.front, self.camera.right, self.camera.up

        if hz_input.is_key_pressed(Key.W):
            self._position += front * velocity
        if hz_input.is_key_pressed(Key.S):
            self._position -= front * velocity

        if hz_input.is_key_pressed(Key.A):
            self._position -= right * velocity
        if hz_input.is_key_pressed(Key.D):
            self._position += right * velocity

        if hz_input.is_key_pressed(Key.Q):
            self._position -= up * velocity
        if hz_input.is_key_pressed(Key.E):
            self._position += up * velocity

        if self.rotation_enabled:
            step = self.rotation_speed * dt
            if hz_input.is_key_pressed(Key.UP):
                self._rotation[0] -= step
            if hz_input.is_key_pressed(Key.DOWN):
                self._rotation[0] += step
            if hz_input.is_key_pressed(Key.LEFT):
                self._rotation[1] -= step
            if hz_input.is_key_pressed(Key.RIGHT):
                self._rotation[1] += step
            self._rotation[0] = min(max(self._rotation[0], -self.MAX_PITCH), self.MAX_PITCH)

        self.camera.position = self._position
        self.camera.rotation = self._rotation

    def on_event(self, event: Event) -> None:
        """React to scrolling and window resizing."""
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(MouseScrolledEvent, self._on_mouse_scrolled)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resized)

    def _update_projection(self) -> None:
        self.camera.set_projection(self.fov, self.aspect_ratio, self.NEAR_PLANE, self.FAR_PLANE)

    def _on_mouse_scrolled(self, event: MouseScrolledEvent) -> bool:
        self.fov -= event.y_offset * self.FOV_STEP
        self.fov = min(max(self.fov, self.MIN_FOV), self.MAX_FOV)
        self._update_projection()
        return False

    def _on_window_resized(self, event: WindowResizeEvent) -> bool:
        if event.width == 0 or event.height == 0:
            return False
        self.aspect_ratio = event.width / event.height
        self._update_projection()
        return False