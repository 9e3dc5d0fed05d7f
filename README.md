# horizon_engine

This is a small framework for layered real-time applications. An `Application` owns three things: a `Window`, a `Renderer` and a `LayerStack`. On every frame it passes each layer the time since the previous frame. Events go to the layers from the top of the stack down, and delivery stops at the first layer that marks an event as handled.

## Modules

- `horizon_engine.events`
  - Window, application, key and mouse events, such as `WindowResizeEvent`, `KeyPressedEvent` and `MouseScrolledEvent`.
  - `EventType` and the `EventCategory` flags, with `Event.is_in_category()`.
  - `EventDispatcher.dispatch(event_class, func)`. It calls `func` only when the event's type matches `event_class`, and stores the result in `event.handled`.
- `horizon_engine.keycodes`
  - `Key` and `MouseButton` integer enums. `MouseButton.LEFT`, `RIGHT`, `MIDDLE` and `LAST` are aliases.
- `horizon_engine.timing`
  - `Timestep`, a float measured in seconds. It has the `seconds` and `milliseconds` properties.
  - `Timer`, with `reset()`, `elapsed()` and `elapsed_millis()`.
  - `ScopedTimer`, a context manager that prints `[TIMER] name - Nms` when its block ends.
  - `ProfileTimer`. It reports a `ProfileResult(name, time)` in milliseconds to a callback when `stop()` is called or when its block ends.
- `horizon_engine.log`
  - `init()` sets up the `HORIZON` and `APP` loggers at trace level. They write to standard output, in colour when that is a terminal.
  - `core_logger()` and `client_logger()` return those two loggers.
- `horizon_engine.layers`
  - `Layer` has the hooks `on_attach`, `on_detach`, `on_update`, `on_imgui_render` and `on_event`.
  - `LayerStack` always keeps overlays above ordinary layers, through `push_layer`, `push_overlay`, `pop_layer` and `pop_overlay`.
- `horizon_engine.input`
  - Polling functions: `is_key_pressed()`, `is_mouse_button_pressed()`, `mouse_position()`, `mouse_x()` and `mouse_y()`.
  - These functions go through an `InputBackend` that you install with `set_backend()`. They raise `RuntimeError` if no backend is installed.
- `horizon_engine.buffer`
  - `ShaderDataType` gives each type's size and component count.
  - `BufferLayout` works out offsets and stride.
  - `VertexBuffer` holds float32 data and `IndexBuffer` holds uint32 data.
  - `VertexArray` groups the buffers.
- `horizon_engine.cameras`
  - `OrthographicCamera` and `PerspectiveCamera`, with their projection, view and view-projection matrices as numpy arrays.
- `horizon_engine.camera_controllers`
  - `OrthographicCameraController` pans with W/A/S/D. It can also rotate with Q/E, and scrolling changes the zoom.
  - `PerspectiveCameraController` moves with W/A/S/D/Q/E. It can also look around with the arrow keys, and scrolling changes the field of view.
  - Both react to `MouseScrolledEvent` and `WindowResizeEvent`.
- `horizon_engine.shader`
  - `preprocess()` splits a source at its `#type vertex` and `#type fragment` (or `pixel`) lines.
  - `Shader` keeps the sources for each stage and the uniform values set on it. Build one with `Shader.from_file()` or `Shader.from_sources()`.
  - `ShaderLibrary` stores shaders under unique names.
- `horizon_engine.renderer`
  - `RendererAPI` keeps the viewport, clear colour and blend/depth state.
  - Each indexed draw is recorded as a `DrawCall` in `draw_calls`. A record holds the shader, a snapshot of its uniforms and the texture bound to unit 0.
  - `Renderer.submit()` draws a vertex array with a camera's view-projection matrix.
  - `Renderer2D.draw_quad()` and `Renderer3D.draw_cube()` draw primitives in a flat colour or with a `Texture`.
- `horizon_engine.application`
  - `Window` queues events posted with `post()`. It delivers them on `on_update()`.
  - `Application.run()` loops until a `WindowCloseEvent` arrives.
  - A resize to zero width or height sets `minimized`, which pauses `on_update` for the layers.

## Example

```python
from horizon_engine.application import Application, Window
from horizon_engine.events import EventDispatcher, WindowCloseEvent, WindowResizeEvent
from horizon_engine.layers import Layer


class GameLayer(Layer):
    def on_event(self, event):
        EventDispatcher(event).dispatch(WindowResizeEvent, self._resized)

    def _resized(self, event):
        print(event)  # WindowResizeEvent: 800, 600
        return False


window = Window()
app = Application(window=window)
app.push_layer(GameLayer("Game"))

window.post(WindowResizeEvent(800, 600))
window.post(WindowCloseEvent())
app.run()  # one frame: delivers both events, then stops

print(app.renderer.api.viewport)  # (0, 0, 800, 600)
```

This example draws a quad and looks at the draw that was recorded:

```python
from horizon_engine.cameras import OrthographicCamera
from horizon_engine.renderer import Renderer2D
from horizon_engine.shader import Shader

shader = Shader.from_sources("Texture", "vertex source", "fragment source")
r2d = Renderer2D(shader)
r2d.begin_scene(OrthographicCamera(-1.6, 1.6, -0.9, 0.9))
r2d.draw_quad((0.0, 0.0), (1.0, 1.0), (0.8, 0.2, 0.3, 1.0))
r2d.end_scene()

call = r2d.api.draw_calls[-1]
print(call.index_count)  # 6
```

## What it does not do

- It has no graphics device. `RendererAPI` records state and draw calls in memory. Nothing is rasterised or shown, and shader sources are stored but never compiled.
- It has no operating-system window. `Window` is an event queue, and events reach it only through `post()`.
- It has no keyboard or mouse of its own. The polling functions in `horizon_engine.input` need an `InputBackend` that you provide.
- It does not load images. A `Texture` is built from its dimensions or from an array with `Texture.from_array()`.
- It has no user-interface toolkit. `Layer.on_imgui_render` is only a per-frame hook.
- It has no command-line program.

## Installation

```
pip install .
```

## Tests

```
pip install .[test]
pytest
```