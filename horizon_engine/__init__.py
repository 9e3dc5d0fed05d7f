"""A layered application framework: events, layers, input polling, cameras, buffers, shaders and an in-memory renderer."""

__version__ = "0.1.0"