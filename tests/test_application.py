import pytest

from horizon_engine.application import Application, Window, WindowProps
from horizon_engine.events import KeyPressedEvent, WindowCloseEvent, WindowResizeEvent
from horizon_engine.layers import Layer


class Recorder(Layer):
    def __init__(self, name, log, handle=False):
        super().__init__(name)
        self.log = log
        self.handle = handle
        self.attached = False
        self.timesteps = []
        self.renders = 0

    def on_attach(self):
        self.attached = True

    def on_update(self, ts):
        self.timesteps.append(float(ts))

    def on_imgui_render(self):
        self.renders += 1

    def on_event(self, event):
        self.log.append(self.name)
        if self.handle:
            event.handled = True


def test_window_props_defaults():
    props = WindowProps()
    assert (props.title, props.width, props.height) == ("Horizon Engine", 1280, 720)


def test_window_without_callback_raises_on_delivery():
    window = Window()
    window.post(WindowCloseEvent())
    with pytest.raises(RuntimeError):
        window.on_update()


def test_window_resize_updates_size():
    window = Window(WindowProps("t", 100, 50))
    received = []
    window.set_event_callback(received.append)
    window.post(WindowResizeEvent(300, 200))
    window.on_update()
    assert (window.width, window.height) == (300, 200)
    assert received == [WindowResizeEvent(300, 200)]
    assert window.frame_count == 1


def test_construction_initialises_renderer_and_registers():
    app = Application()
    assert app.renderer.api.blending and app.renderer.api.depth_test
    assert Application.get() is app


def test_push_calls_on_attach_and_orders_overlays():
    app = Application()
    log = []
    layer, overlay = Recorder("layer", log), Recorder("overlay", log)
    app.push_overlay(overlay)
    app.push_layer(layer)
    assert layer.attached and overlay.attached
    assert list(app.layer_stack) == [layer, overlay]


def test_events_go_top_down_and_stop_when_handled():
    app = Application()
    log = []
    app.push_layer(Recorder("bottom", log))
    app.push_layer(Recorder("top", log, handle=True))
    app.on_event(KeyPressedEvent(65, 0))
    assert log == ["top"]


def test_unhandled_event_reaches_all_layers():
    app = Application()
    log = []
    app.push_layer(Recorder("bottom", log))
    app.push_layer(Recorder("top", log))
    app.on_event(KeyPressedEvent(65, 0))
    assert log == ["top", "bottom"]


def test_close_event_stops_running():
    app = Application()
    log = []
    app.push_layer(Recorder("bottom", log))
    app.push_layer(Recorder("top", log))
    event = WindowCloseEvent()
    app.on_event(event)
    assert app.running is False
    assert event.handled is True
    assert log == ["top"]


def test_resize_sets_viewport_or_minimizes():
    app = Application()
    app.on_event(WindowResizeEvent(800, 600))
    assert app.renderer.api.viewport == (0, 0, 800, 600)
    assert app.minimized is False
    app.on_event(WindowResizeEvent(0, 600))
    assert app.minimized is True


def test_run_passes_timesteps_and_stops_on_close():
    clock = iter([0.0, 0.5, 1.5]).__next__
    app = Application(clock=clock)

    class Closer(Recorder):
        def on_update(self, ts):
            super().on_update(ts)
            if len(self.timesteps) == 2:
                app.window.post(WindowCloseEvent())

    layer = Closer("closer", [])
    app.push_layer(layer)
    app.run()
    assert layer.timesteps == [0.5, 1.0]
    assert layer.renders == 2
    assert app.window.frame_count == 2


def test_minimized_application_skips_updates():
    app = Application(clock=iter([0.0, 1.0, 2.0]).__next__)

    class Closer(Recorder):
        def on_imgui_render(self):
            super().on_imgui_render()
            if self.renders == 2:
                app.window.post(WindowCloseEvent())

    layer = Closer("closer", [])
    app.push_layer(layer)
    app.window.post(WindowResizeEvent(0, 0))
    app.run()
    assert len(layer.timesteps) == 1
    assert layer.renders == 2
    assert app.minimized is True