import numpy as np
import pytest

from horizon_engine.buffer import BufferLayout, IndexBuffer, ShaderDataType, VertexArray, VertexBuffer
from horizon_engine.cameras import OrthographicCamera
from horizon_engine.renderer import (
    TEXTURE_TINT,
    Renderer,
    Renderer2D,
    Renderer3D,
    RendererAPI,
    Texture,
)
from horizon_engine.shader import Shader


def _shader(name="Texture"):
    return Shader.from_sources(name, "vertex source", "fragment source")


def _triangle():
    va = VertexArray()
    layout = BufferLayout([(ShaderDataType.FLOAT3, "a_Position")])
    va.add_vertex_buffer(VertexBuffer([0, 0, 0, 1, 0, 0, 0, 1, 0], layout))
    va.set_index_buffer(IndexBuffer([0, 1, 2]))
    return va


def test_init_enables_blending_and_depth():
    api = RendererAPI()
    api.init()
    assert api.blending and api.depth_test


def test_viewport_recorded_and_validated():
    api = RendererAPI()
    api.set_viewport(0, 0, 640, 480)
    assert api.viewport == (0, 0, 640, 480)
    with pytest.raises(ValueError):
        api.set_viewport(0, 0, -1, 480)


def test_clear_color_requires_four_components():
    api = RendererAPI()
    api.set_clear_color((0.1, 0.2, 0.3, 1.0))
    assert api.clear_color == (0.1, 0.2, 0.3, 1.0)
    with pytest.raises(ValueError):
        api.set_clear_color((0.1, 0.2, 0.3))


def test_draw_without_index_buffer_raises():
    with pytest.raises(ValueError):
        RendererAPI().draw_indexed(VertexArray())


def test_draw_records_count_and_clear_discards():
    api = RendererAPI()
    va = _triangle()
    api.draw_indexed(va)
    assert api.draw_calls[0].index_count == 3
    assert api.draw_calls[0].vertex_array is va
    api.clear()
    assert api.draw_calls == ()
    assert api.clear_count == 1


def test_texture_unbound_after_draw():
    api = RendererAPI()
    texture = Texture(2, 2)
    texture.bind()
    api.draw_indexed(_triangle())
    api.draw_indexed(_triangle())
    assert api.draw_calls[0].texture is texture
    assert api.draw_calls[1].texture is None


def test_texture_set_data_size_checked():
    texture = Texture(2, 1, channels=3)
    with pytest.raises(ValueError):
        texture.set_data(b"\x00" * 5)
    texture.set_data(bytes(range(6)))
    assert texture.pixels.tolist() == [[[0, 1, 2], [3, 4, 5]]]


def test_texture_rejects_unsupported_channels():
    with pytest.raises(ValueError):
        Texture(1, 1, channels=2)


def test_texture_from_array_round_trip():
    pixels = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    texture = Texture.from_array(pixels)
    assert (texture.width, texture.height, texture.channels) == (3, 2, 4)
    assert np.array_equal(texture.pixels, pixels)


def test_texture_negative_slot_rejected():
    with pytest.raises(ValueError):
        Texture(1, 1).bind(-1)


def test_submit_uploads_scene_and_transform():
    renderer = Renderer()
    camera = OrthographicCamera(-2.0, 2.0, -1.0, 1.0)
    shader = _shader()
    renderer.begin_scene(camera)
    renderer.submit(shader, _triangle())
    renderer.end_scene()
    call = renderer.api.draw_calls[-1]
    assert call.shader is shader
    assert np.allclose(call.uniforms["u_ViewProjection"], camera.view_projection_matrix)
    assert np.allclose(call.uniforms["u_Transform"], np.identity(4))


def test_window_resize_sets_viewport():
    renderer = Renderer()
    renderer.on_window_resize(800, 600)
    assert renderer.api.viewport == (0, 0, 800, 600)


def test_renderer2d_initialises_shader_and_white_texture():
    shader = _shader()
    r2d = Renderer2D(shader)
    assert shader.uniforms["u_Texture"] == 0
    assert r2d.white_texture.pixels.tolist() == [[[255, 255, 255, 255]]]


def test_draw_quad_with_color():
    r2d = Renderer2D(_shader())
    r2d.begin_scene(OrthographicCamera(-1.0, 1.0, -1.0, 1.0))
    color = (0.8, 0.2, 0.3, 1.0)
    r2d.draw_quad((-1.0, 0.5), (0.8, 0.4), color)
    call = r2d.api.draw_calls[-1]
    assert call.index_count == 6
    assert call.texture is r2d.white_texture
    assert np.allclose(call.uniforms["u_Color"], color)
    transform = call.uniforms["u_Transform"]
    assert np.allclose(transform[:3, 3], (-1.0, 0.5, 0.0))
    assert np.allclose(np.diag(transform), (0.8, 0.4, 1.0, 1.0))


def test_draw_quad_with_texture_uses_tint():
    r2d = Renderer2D(_shader())
    texture = Texture(4, 4)
    r2d.draw_quad((0.0, 0.0, -0.1), (10.0, 10.0), texture)
    call = r2d.api.draw_calls[-1]
    assert call.texture is texture
    assert np.allclose(call.uniforms["u_Color"], (0.2, 0.3, 0.8, 0.5))
    assert np.allclose(TEXTURE_TINT, (0.2, 0.3, 0.8, 0.5))
    assert np.allclose(call.uniforms["u_Transform"][:3, 3], (0.0, 0.0, -0.1))


def test_draw_quad_rejects_bad_position():
    r2d = Renderer2D(_shader())
    with pytest.raises(ValueError):
        r2d.draw_quad((1.0,), (1.0, 1.0), (1, 1, 1, 1))


def test_draw_cube():
    r3d = Renderer3D(_shader())
    r3d.draw_cube((0.5, -0.5, -0.5), (0.5, 0.75, 0.5), (0.2, 0.3, 0.8, 1.0))
    call = r3d.api.draw_calls[-1]
    assert call.index_count == 36
    transform = call.uniforms["u_Transform"]
    assert np.allclose(transform[:3, 3], (0.5, -0.5, -0.5))
    assert np.allclose(np.diag(transform)[:3], (0.5, 0.75, 0.5))


def test_draw_cube_rejects_2d_size():
    r3d = Renderer3D(_shader())
    with pytest.raises(ValueError):
        r3d.draw_cube((0.0, 0.0, 0.0), (1.0, 1.0), (1, 1, 1, 1))