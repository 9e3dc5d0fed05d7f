"""Orthographic and perspective cameras producing view and projection matrices."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np


def _frozen(matrix: np.ndarray) -> np.ndarray:
    result = np.array(matrix, dtype=np.float64)
    result.setflags(write=False)
    return result


def _vec3(value: Iterable[float]) -> np.ndarray:
    vector = np.array(value, dtype=np.float64).reshape(-1)
    if vector.shape != (3,):
        raise ValueError("expected three components")
    return vector


def _ortho(left: float, right: float, bottom: float, top: float, near: float, far: float) -> np.ndarray:
    if left == right or bottom == top or near == far:
        raise ValueError("orthographic bounds must not be degenerate")
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def _perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    tan_half = math.tan(fovy / 2.0)
    if aspect == 0 or tan_half == 0 or near == far:
        raise ValueError("perspective parameters must not be degenerate")
    m = np.zeros((4, 4))
    m[0, 0] = 1.0 / (aspect * tan_half)
    m[1, 1] = 1.0 / tan_half
    m[2, 2] = -(far + near) / (far - near)
    m[3, 2] = -1.0
    m[2, 3] = -(2.0 * far * near) / (far - near)
    return m


def _rotation(angle: float, axis: Iterable[float]) -> np.ndarray:
    a = _vec3(axis)
    a = a / np.linalg.norm(a)
    c, s = math.cos(angle), math.sin(angle)
    cross = np.array([[0.0, -a[2], a[1]], [a[2], 0.0, -a[0]], [-a[1], a[0], 0.0]])
    m = np.identity(4)
    m[:3, :3] = c * np.identity(3) + s * cross + (1.0 - c) * np.outer(a, a)
    return m


def _translation(offset: Iterable[float]) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = _vec3(offset)
    return m


class OrthographicCamera:
    """A 2D camera with a position and a rotation in degrees about the z axis."""

    def __init__(self, left: float, right: float, bottom: float, top: float) -> None:
        self._projection = _frozen(_ortho(left, right, bottom, top, -1.0, 1.0))
        self._view = _frozen(np.identity(4))
        self._view_projection = _frozen(self._projection @ self._view)
        self._position = np.zeros(3)
        self._rotation = 0.0

    def set_projection(self, left: float, right: float, bottom: float, top: float) -> None:
        """Replace the visible bounds."""
        self._projection = _frozen(_ortho(left, right, bottom, top, -1.0, 1.0))
        self._view_projection = _frozen(self._projection @ self._view)

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = _vec3(value)
        self._recalculate_view()

    @property
    def rotation(self) -> float:
        """Rotation in degrees."""
        return self._rotation

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._rotation = float(value)
        self._recalculate_view()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection

    def _recalculate_view(self) -> None:
        transform = _translation(self._position) @ _rotation(math.radians(self._rotation), (0, 0, 1))
        self._view = _frozen(np.linalg.inv(transform))
        self._view_projection = _frozen(self._projection @ self._view)


class PerspectiveCamera:
    """A 3D camera; rotation holds pitch, yaw and roll in degrees."""

    def __init__(self, fov: float, aspect_ratio: float, near_plane: float, far_plane: float) -> None:
        self._position = np.zeros(3)
        self._rotation = np.zeros(3)
        self._view = _frozen(np.identity(4))
        self.set_projection(fov, aspect_ratio, near_plane, far_plane)
        self._recalculate_view()

    def set_projection(self, fov: float, aspect_ratio: float, near_plane: float, far_plane: float) -> None:
        """Replace the vertical field of view (degrees), aspect ratio and clip planes."""
        self.fov = float(fov)
        self.aspect_ratio = float(aspect_ratio)
        self.near_plane = float(near_plane)
        self.far_plane = float(far_plane)
        self._recalculate_projection()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = _vec3(value)
        self._recalculate_view()
        self._recalculate_projection()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Iterable[float]) -> None:
        self._rotation = _vec3(value)
        self._recalculate_view()
        self._recalculate_projection()

    @property
    def projection_matrix(self) -> np.ndarray:
        return self._projection

    @property
    def view_matrix(self) -> np.ndarray:
        return self._view

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection

    @property
    def front(self) -> np.ndarray:
        """Unit vector the camera moves along when going forward."""
        return self._unit(-self._view[:3, 2])

    @property
    def right(self) -> np.ndarray:
        return self._unit(self._view[:3, 0])

    @property
    def up(self) -> np.ndarray:
        return self._unit(self._view[:3, 1])

    @staticmethod
    def _unit(vector: np.ndarray) -> np.ndarray:
        return vector / np.linalg.norm(vector)

    def _recalculate_view(self) -> None:
        pitch, yaw, roll = (math.radians(a) for a in self._rotation)
        transform = (
            _rotation(pitch, (1, 0, 0))
            @ _rotation(yaw, (0, 1, 0))
            @ _rotation(roll, (0, 0, 1))
            @ _translation(-self._position)
        )
        self._view = _frozen(transform)
        self._update_view_projection()

    def _recalculate_projection(self) -> None:
        self._projection = _frozen(
            _perspective(math.radians(self.fov), self.aspect_ratio, self.near_plane, self.far_plane)
        )
        self._update_view_projection()

    def _update_view_projection(self) -> None:
        if hasattr(self, "_projection"):
            self._view_projection = _frozen(self._projection @ self._view)