"""Vertex layouts, vertex and index buffers, and the vertex arrays that bind them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Sequence, Union

import numpy as np


class ComponentType(enum.Enum):
    """Scalar type of each component of a shader attribute."""

    FLOAT = "float"
    INT = "int"
    BOOL = "bool"


class ShaderDataType(enum.Enum):
    """Data types a vertex attribute may have."""

    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11

    def _props(self) -> tuple[int, int, ComponentType]:
        try:
            return _TYPE_PROPS[self]
        except KeyError:
            raise ValueError(f"unknown shader data type: {self.name}") from None

    @property
    def size(self) -> int:
        """Size in bytes."""
        return self._props()[0]

    @property
    def component_count(self) -> int:
        """Number of scalar components."""
        return self._props()[1]

    @property
    def component_type(self) -> ComponentType:
        """Scalar type of the components."""
        return self._props()[2]


_TYPE_PROPS: dict[ShaderDataType, tuple[int, int, ComponentType]] = {
    ShaderDataType.FLOAT: (4, 1, ComponentType.FLOAT),
    ShaderDataType.FLOAT2: (4 * 2, 2, ComponentType.FLOAT),
    ShaderDataType.FLOAT3: (4 * 3, 3, ComponentType.FLOAT),
    ShaderDataType.FLOAT4: (4 * 4, 4, ComponentType.FLOAT),
    ShaderDataType.MAT3: (4 * 3 * 3, 3 * 3, ComponentType.FLOAT),
    ShaderDataType.MAT4: (4 * 4 * 4, 4 * 4, ComponentType.FLOAT),
    ShaderDataType.INT: (4, 1, ComponentType.INT),
    ShaderDataType.INT2: (4 * 2, 2, ComponentType.INT),
    ShaderDataType.INT3: (4 * 3, 3, ComponentType.INT),
    ShaderDataType.INT4: (4 * 4, 4, ComponentType.INT),
    ShaderDataType.BOOL: (1, 1, ComponentType.BOOL),
}


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of one attribute of ``data_type``."""
    return data_type.size


@dataclass
class BufferElement:
    """One named attribute in a vertex layout."""

    data_type: ShaderDataType
    name: str
    normalized: bool = False
    size: int = field(init=False)
    offset: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.size = shader_data_type_size(self.data_type)

    @property
    def component_count(self) -> int:
        return self.data_type.component_count

    @property
    def component_type(self) -> ComponentType:
        return self.data_type.component_type


ElementSpec = Union[BufferElement, Sequence]


class BufferLayout:
    """Ordered attributes of a vertex, with their byte offsets and the stride."""

    def __init__(self, elements: Iterable[ElementSpec] = ()) -> None:
        self._elements: list[BufferElement] = []
        offset = 0
        for spec in elements:
            element = replace(spec) if isinstance(spec, BufferElement) else BufferElement(*spec)
            element.offset = offset
            offset += element.size
            self._elements.append(element)
        self._stride = offset

    @property
    def elements(self) -> tuple[BufferElement, ...]:
        return tuple(self._elements)

    @property
    def stride(self) -> int:
        """Bytes from one vertex to the next."""
        return self._stride

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"BufferLayout({self._elements!r})"


class VertexBuffer:
    """Vertex data as 32-bit floats together with the layout describing it."""

    def __init__(self, vertices: Iterable[float], layout: BufferLayout | None = None) -> None:
        data = np.array(vertices, dtype=np.float32).ravel()
        data.setflags(write=False)
        self.data = data
        self.layout = layout if layout is not None else BufferLayout()

    @property
    def size(self) -> int:
        """Size of the data in bytes."""
        return int(self.data.nbytes)


class IndexBuffer:
    """Triangle indices as unsigned 32-bit integers."""

    def __init__(self, indices: Iterable[int]) -> None:
        values = np.array(list(indices), dtype=np.int64).ravel()
        if values.size and (values.min() < 0 or values.max() > 0xFFFFFFFF):
            raise ValueError("indices must fit in an unsigned 32-bit integer")
        data = values.astype(np.uint32)
        data.setflags(write=False)
        self.indices = data

    @property
    def count(self) -> int:
        """Number of indices."""
        return int(self.indices.size)


class VertexArray:
    """Vertex buffers and the index buffer that together describe a mesh."""

    def __init__(self) -> None:
        self._vertex_buffers: list[VertexBuffer] = []
        self._index_buffer: IndexBuffer | None = None

    def add_vertex_buffer(self, vertex_buffer: VertexBuffer) -> None:
        """Attach a vertex buffer; its layout must describe at least one attribute."""
        if not vertex_buffer.layout.elements:
            raise ValueError("vertex buffer has no layout")
        self._vertex_buffers.append(vertex_buffer)

    def set_index_buffer(self, index_buffer: IndexBuffer) -> None:
        """Use ``index_buffer`` for indexed drawing."""
        self._index_buffer = index_buffer

    @property
    def vertex_buffers(self) -> tuple[VertexBuffer, ...]:
        return tuple(self._vertex_buffers)

    @property
    def index_buffer(self) -> IndexBuffer | None:
        return self._index_buffer