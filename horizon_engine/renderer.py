"""Rendering commands, textures, and the scene, 2D and 3D renderers built on them.

Commands are carried out against an in-memory device: state changes are kept
and each indexed draw is recorded together with the shader, its uniform
values and the texture bound at the time.
"""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Mapping, Union

import numpy as np

from horizon_engine.buffer import BufferLayout, IndexBuffer, ShaderDataType, VertexArray, VertexBuffer
from horizon_engine.shader import Shader

TEXTURE_TINT = (0.2, 0.3, 0.8, 0.5)

_texture_units: dict[int, "Texture"] = {}


class Texture:
    """A 2D texture of RGB or RGBA bytes."""

    def __init__(self, width: int, height: int, channels: int = 4) -> None:
        width, height, channels = operator.index(width), operator.index(height), operator.index(channels)
        if width <= 0 or height <= 0:
            raise ValueError("texture dimensions must be positive")
        if channels not in (3, 4):
            raise ValueError("format not supported: only 3 or 4 channels")
        self.width = width
        self.height = height
        self.channels = channels
        pixels = np.zeros((height, width, channels), dtype=np.uint8)
        pixels.setflags(write=False)
        self._pixels = pixels

    @classmethod
    def from_array(cls, pixels: Any) -> "Texture":
        """Build a texture from an array of shape (height, width, channels)."""
        array = np.asarray(pixels, dtype=np.uint8)
        if array.ndim != 3:
            raise ValueError("pixels must have shape (height, width, channels)")
        height, width, channels = array.shape
        texture = cls(width, height, channels)
        texture.set_data(np.ascontiguousarray(array).tobytes())
        return texture

    @property
    def pixels(self) -> np.ndarray:
        """The pixel data, shape (height, width, channels)."""
        return self._pixels

    def set_data(self, data: Any) -> None:
        """Replace every pixel; ``data`` must cover the entire texture."""
        raw = bytes(memoryview(data))
        expected = self.width * self.height * self.channels
        if len(raw) != expected:
            raise ValueError(f"data must be the entire texture: expected {expected} bytes, got {len(raw)}")
        pixels = np.frombuffer(raw, dtype=np.uint8).reshape(self.height, self.width, self.channels).copy()
        pixels.setflags(write=False)
        self._pixels = pixels

    def bind(self, slot: int = 0) -> None:
        """Bind this texture to a texture unit."""
        slot = operator.index(slot)
        if slot < 0:
            raise ValueError("texture slot must be non-negative")
        _texture_units[slot] = self

    def __repr__(self) -> str:
        return f"Texture({self.width}x{self.height}, channels={self.channels})"


@dataclass(frozen=True)
class DrawCall:
    """One indexed draw as it was issued."""

    vertex_array: VertexArray
    index_count: int
    shader: Shader | None
    uniforms: Mapping[str, object] = field(default_factory=dict)
    texture: Texture | None = None


class RendererAPI:
    """The low-level command interface: viewport, clearing and indexed drawing."""

    class API(enum.Enum):
        NONE = 0
        OPENGL = 1

    api: ClassVar["RendererAPI.API"] = API.OPENGL

    def __init__(self) -> None:
        self.blending = False
        self.depth_test = False
        self.viewport: tuple[int, int, int, int] | None = None
        self.clear_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
        self.clear_count = 0
        self._draw_calls: list[DrawCall] = []
        self._shader: Shader | None = None

    def init(self) -> None:
        """Enable alpha blending and depth testing."""
        self.blending = True
        self.depth_test = True

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        values = tuple(operator.index(v) for v in (x, y, width, height))
        if any(v < 0 for v in values):
            raise ValueError("viewport values must be non-negative")
        self.viewport = values  # type: ignore[assignment]

    def set_clear_color(self, color: Iterable[float]) -> None:
        values = tuple(float(c) for c in color)
        if len(values) != 4:
            raise ValueError("clear color must have four components")
        self.clear_color = values  # type: ignore[assignment]

    def clear(self) -> None:
        """Clear the frame, discarding what was drawn since the last clear."""
        self.clear_count += 1
        self._draw_calls.clear()

    def draw_indexed(self, vertex_array: VertexArray) -> None:
        """Draw the triangles of ``vertex_array``, then unbind texture unit 0."""
        index_buffer = vertex_array.index_buffer
        if index_buffer is None:
            raise ValueError("vertex array has no index buffer")
        shader = self._shader if self._shader is not None and self._shader.bound else None
        uniforms = dict(shader.uniforms) if shader is not None else {}
        self._draw_calls.append(
            DrawCall(vertex_array, index_buffer.count, shader, uniforms, _texture_units.get(0))
        )
        _texture_units.pop(0, None)

    @property
    def draw_calls(self) -> tuple[DrawCall, ...]:
        """Draws issued since the last clear, oldest first."""
        return tuple(self._draw_calls)

    def _use(self, shader: Shader) -> None:
        shader.bind()
        self._shader = shader


def _identity() -> np.ndarray:
    return np.identity(4)


def _translate(position: np.ndarray) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = position
    return m


def _scale(size: np.ndarray) -> np.ndarray:
    return np.diag([size[0], size[1], size[2], 1.0])


def _vector(value: Iterable[float], lengths: tuple[int, ...], what: str) -> np.ndarray:
    vector = np.asarray(value, dtype=np.float64).reshape(-1)
    if vector.size not in lengths:
        raise ValueError(f"{what} must have {' or '.join(map(str, lengths))} components")
    return vector


class Renderer:
    """Submits shaded vertex arrays against the current scene's camera."""

    def __init__(self, api: RendererAPI | None = None) -> None:
        self.api = api if api is not None else RendererAPI()
        self._view_projection = _identity()
        self._in_scene = False

    def init(self) -> None:
        self.api.init()

    def on_window_resize(self, width: int, height: int) -> None:
        self.api.set_viewport(0, 0, width, height)

    def begin_scene(self, camera: Any) -> None:
        """Use ``camera``'s view-projection matrix for the following submissions."""
        self._view_projection = np.array(camera.view_projection_matrix, dtype=np.float64)
        self._in_scene = True

    def end_scene(self) -> None:
        """Finish the scene; submissions were drawn immediately."""
        self._in_scene = False

    @property
    def in_scene(self) -> bool:
        """True between ``begin_scene`` and ``end_scene``."""
        return self._in_scene

    @property
    def view_projection_matrix(self) -> np.ndarray:
        return self._view_projection.copy()

    def submit(self, shader: Shader, vertex_array: VertexArray, transform: Any = None) -> None:
        """Draw ``vertex_array`` with ``shader`` and a model ``transform`` (identity by default)."""
        self.api._use(shader)
        shader.set_mat4("u_ViewProjection", self._view_projection)
        shader.set_mat4("u_Transform", _identity() if transform is None else transform)
        self.api.draw_indexed(vertex_array)


Fill = Union[Texture, Iterable[float]]


class _PrimitiveRenderer:
    _VERTICES: ClassVar[tuple[float, ...]] = ()
    _INDICES: ClassVar[tuple[int, ...]] = ()

    def __init__(self, texture_shader: Shader, api: RendererAPI | None = None) -> None:
        self.api = api if api is not None else RendererAPI()
        self.shader = texture_shader
        layout = BufferLayout([(ShaderDataType.FLOAT3, "a_Position"), (ShaderDataType.FLOAT2, "a_TexCoord")])
        vertex_array = VertexArray()
        vertex_array.add_vertex_buffer(VertexBuffer(self._VERTICES, layout))
        vertex_array.set_index_buffer(IndexBuffer(self._INDICES))
        self.vertex_array = vertex_array
        self.white_texture = Texture(1, 1)
        self.white_texture.set_data(b"\xff" * 4)
        self.api._use(texture_shader)
        texture_shader.set_int("u_Texture", 0)
        self._in_scene = False

    @property
    def in_scene(self) -> bool:
        """True between ``begin_scene`` and ``end_scene``."""
        return self._in_scene

    def _begin(self, camera: Any) -> None:
        self.api._use(self.shader)
        self.shader.set_mat4("u_ViewProjection", camera.view_projection_matrix)
        self._in_scene = True

    def _end(self) -> None:
        self._in_scene = False

    def _draw(self, position: np.ndarray, size: np.ndarray, fill: Fill) -> None:
        if isinstance(fill, Texture):
            self.shader.set_float4("u_Color", TEXTURE_TINT)
            fill.bind()
        else:
            self.shader.set_float4("u_Color", fill)
            self.white_texture.bind()
        self.shader.set_mat4("u_Transform", _translate(position) @ _scale(size))
        self.api.draw_indexed(self.vertex_array)


class Renderer2D(_PrimitiveRenderer):
    """Draws flat-coloured or textured quads."""

    _VERTICES = (
        -0.5, -0.5, 0.0, 0.0, 0.0,
        0.5, -0.5, 0.0, 1.0, 0.0,
        0.5, 0.5, 0.0, 1.0, 1.0,
        -0.5, 0.5, 0.0, 0.0, 1.0,
    )
    _INDICES = (0, 1, 2, 2, 3, 0)

    def begin_scene(self, camera: Any) -> None:
        """Bind the shader and upload ``camera``'s view-projection matrix."""
        self._begin(camera)

    def end_scene(self) -> None:
        """Finish the scene; quads were drawn immediately."""
        self._end()

    def draw_quad(self, position: Iterable[float], size: Iterable[float], fill: Fill) -> None:
        """Draw a quad at a 2D or 3D ``position`` with a 2D ``size``, coloured or textured."""
        pos = _vector(position, (2, 3), "position")
        if pos.size == 2:
            pos = np.append(pos, 0.0)
        extent = _vector(size, (2,), "size")
        self._draw(pos, np.array([extent[0], extent[1], 1.0]), fill)


class Renderer3D(_PrimitiveRenderer):
    """Draws flat-coloured or textured cubes."""

    _VERTICES = (
        -0.5, -0.5, -0.5, 0.0, 0.0,
        0.5, -0.5, -0.5, 1.0, 0.0,
        0.5, 0.5, -0.5, 1.0, 1.0,
        -0.5, 0.5, -0.5, 0.0, 1.0,
        -0.5, -0.5, 0.5, 0.0, 0.0,
        0.5, -0.5, 0.5, 1.0, 0.0,
        0.5, 0.5, 0.5, 1.0, 1.0,
        -0.5, 0.5, 0.5, 0.0, 1.0,
        -0.5, -0.5, -0.5, 0.0, 0.0,
        0.5, -0.5, -0.5, 1.0, 0.0,
        0.5, -0.5, 0.5, 1.0, 1.0,
        -0.5, -0.5, 0.5, 0.0, 1.0,
        0.5, 0.5, -0.5, 0.0, 0.0,
        0.5, 0.5, 0.5, 1.0, 0.0,
        -0.5, 0.5, 0.5, 0.0, 1.0,
        -0.5, 0.5, -0.5, 1.0, 1.0,
    )
    _INDICES = (
        0, 1, 2, 2, 3, 0,
        4, 5, 6, 6, 7, 4,
        4, 0, 3, 3, 7, 4,
        1, 5, 6, 6, 2, 1,
        4, 5, 1, 1, 0, 4,
        3, 2, 6, 6, 7, 3,
    )

    def begin_scene(self, camera: Any) -> None:
        """Bind the shader and upload ``camera``'s view-projection matrix."""
        self._begin(camera)

    def end_scene(self) -> None:
        """Finish the scene; cubes were drawn immediately."""
        self._end()

    def draw_cube(self, position: Iterable[float], size: Iterable[float], fill: Fill) -> None:
        """Draw a cube at ``position`` with per-axis ``size``, coloured or textured."""
        self._draw(_vector(position, (3,), "position"), _vector(size, (3,), "size"), fill)