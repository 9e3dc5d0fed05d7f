"""Shader programs built from sectioned source files, and a library keyed by name."""

from __future__ import annotations

import enum
import operator
import re
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar, Iterable, Iterator, Mapping

import numpy as np

TYPE_TOKEN = "#type"
_EOL = re.compile(r"[\r\n]")


class ShaderError(ValueError):
    """A shader source or library operation is invalid."""


class ShaderType(enum.IntEnum):
    """Pipeline stage a shader source belongs to."""

    VERTEX = 0x8B31
    FRAGMENT = 0x8B30


_TYPE_NAMES = {
    "vertex": ShaderType.VERTEX,
    "fragment": ShaderType.FRAGMENT,
    "pixel": ShaderType.FRAGMENT,
}


def shader_type_from_string(name: str) -> ShaderType:
    """Map a ``#type`` name to its stage."""
    try:
        return _TYPE_NAMES[name]
    except KeyError:
        raise ShaderError(f"unknown shader type: {name!r}") from None


def preprocess(source: str) -> dict[ShaderType, str]:
    """Split a combined source at its ``#type`` lines into one source per stage.

    Each stage's text starts at the line break ending its ``#type`` line; a
    later section of the same stage replaces an earlier one.
    """
    sources: dict[ShaderType, str] = {}
    pos = source.find(TYPE_TOKEN)
    while pos != -1:
        match = _EOL.search(source, pos)
        if match is None:
            raise ShaderError("syntax error: '#type' line has no line break")
        eol = match.start()
        type_name = source[pos + len(TYPE_TOKEN) + 1 : eol]
        shader_type = shader_type_from_string(type_name)
        pos = source.find(TYPE_TOKEN, eol)
        sources[shader_type] = source[eol:] if pos == -1 else source[eol:pos]
    return sources


def shader_name_from_path(filepath: str | Path) -> str:
    """The file name without directory or extension."""
    path = str(filepath)
    start = max(path.rfind("/"), path.rfind("\\")) + 1
    dot = path.rfind(".")
    if dot == -1 or dot < start:
        return path[start:]
    return path[start:dot]


def read_shader_file(filepath: str | Path) -> str:
    """Read a shader file as UTF-8 text, keeping its line endings."""
    return Path(filepath).read_bytes().decode("utf-8")


def _array(value: Iterable, shape: tuple[int, ...], what: str) -> np.ndarray:
    result = np.array(value, dtype=np.float32)
    if result.shape != shape:
        raise ValueError(f"{what} must have shape {shape}, got {result.shape}")
    result.setflags(write=False)
    return result


class Shader:
    """A named program made of per-stage sources, holding its uniform values."""

    _current: ClassVar["Shader | None"] = None

    def __init__(self, name: str, sources: Mapping[ShaderType, str]) -> None:
        stages = {ShaderType(stage): str(text) for stage, text in dict(sources).items()}
        if not stages:
            raise ShaderError(f"shader {name!r} has no stages")
        self.name = name
        self._sources = MappingProxyType(stages)
        self._uniforms: dict[str, object] = {}

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Shader":
        """Build a shader from a sectioned file; its name comes from the file name."""
        sources = preprocess(read_shader_file(filepath))
        return cls(shader_name_from_path(filepath), sources)

    @classmethod
    def from_sources(cls, name: str, vertex_src: str, fragment_src: str) -> "Shader":
        """Build a shader from separate vertex and fragment sources."""
        return cls(name, {ShaderType.VERTEX: vertex_src, ShaderType.FRAGMENT: fragment_src})

    @property
    def sources(self) -> Mapping[ShaderType, str]:
        return self._sources

    @property
    def uniforms(self) -> Mapping[str, object]:
        return MappingProxyType(self._uniforms)

    @property
    def bound(self) -> bool:
        """True while this shader is the one in use."""
        return Shader._current is self

    def bind(self) -> None:
        """Make this shader the one in use."""
        Shader._current = self

    def unbind(self) -> None:
        """Leave no shader in use."""
        Shader._current = None

    def set_int(self, name: str, value: int) -> None:
        self._uniforms[name] = operator.index(value)

    def set_float(self, name: str, value: float) -> None:
        self._uniforms[name] = float(value)

    def set_float2(self, name: str, value: Iterable[float]) -> None:
        self._uniforms[name] = _array(value, (2,), name)

    def set_float3(self, name: str, value: Iterable[float]) -> None:
        self._uniforms[name] = _array(value, (3,), name)

    def set_float4(self, name: str, value: Iterable[float]) -> None:
        self._uniforms[name] = _array(value, (4,), name)

    def set_mat3(self, name: str, value: Iterable) -> None:
        self._uniforms[name] = _array(value, (3, 3), name)

    def set_mat4(self, name: str, value: Iterable) -> None:
        self._uniforms[name] = _array(value, (4, 4), name)

    def __repr__(self) -> str:
        return f"Shader(name={self.name!r}, stages={[s.name for s in self._sources]})"


class ShaderLibrary:
    """Shaders stored under unique names."""

    def __init__(self) -> None:
        self._shaders: dict[str, Shader] = {}

    def add(self, shader: Shader, name: str | None = None) -> None:
        """Store ``shader`` under ``name``, or under its own name."""
        key = shader.name if name is None else name
        if self.exists(key):
            raise ShaderError(f"shader already exists: {key!r}")
        self._shaders[key] = shader

    def load(self, filepath: str | Path, name: str | None = None) -> Shader:
        """Build a shader from a file, store it and return it."""
        shader = Shader.from_file(filepath)
        self.add(shader, name)
        return shader

    def get(self, name: str) -> Shader:
        """The shader stored under ``name``."""
        try:
            return self._shaders[name]
        except KeyError:
            raise KeyError(f"shader not found: {name!r}") from None

    def exists(self, name: str) -> bool:
        return name in self._shaders

    def __contains__(self, name: object) -> bool:
        return name in self._shaders

    def __len__(self) -> int:
        return len(self._shaders)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._shaders))