from hang_compositor import build_scene, Drawable, VIEW_FRONT, VIEW_REAR
from hang_models import LAYER_FRONT, LAYER_BACK
from hang_renderer import ElevationRenderer


def test_render_writes_svg(tmp_path, sample_project):
    scene = build_scene(sample_project)
    renderer = ElevationRenderer(scene, scale=8.0, padding=10)
    assert renderer.width == 280
    out = tmp_path / "elevation.svg"
    renderer.render(str(out))

    text = out.read_text(encoding="utf-8")
    assert text.count("<circle") >= 15
    assert 'width="280px"' in text
    assert "stroke-dasharray" in text


def test_render_without_reference_lines(tmp_path, sample_project):
    out = tmp_path / "bare.svg"
    ElevationRenderer(build_scene(sample_project, view=VIEW_REAR)).render(
        str(out), show_reference_lines=False, background=None)
    text = out.read_text(encoding="utf-8")
    assert "stroke-dasharray" not in text


def test_transform_maps_bounds_to_padding(sample_project):
    renderer = ElevationRenderer(build_scene(sample_project), scale=4.0, padding=10)
    assert renderer._tx(renderer.min_x) == 10
    assert renderer._ty(renderer.min_y) == 10
    assert renderer._tx(0.0) == 4.25 * 4.0 + 10


def test_layer_opacity(sample_project):
    front = ElevationRenderer(build_scene(sample_project, view=VIEW_FRONT))
    rear = ElevationRenderer(build_scene(sample_project, view=VIEW_REAR))
    near = Drawable(0.0, None, layer=LAYER_FRONT)
    far = Drawable(0.0, None, layer=LAYER_BACK)
    swoop = Drawable(0.0, None, layer=LAYER_BACK, fade=False)

    assert front.opacity_for(near) == 1.0
    assert front.opacity_for(far) == 0.45
    assert rear.opacity_for(near) == 0.45
    assert rear.opacity_for(far) == 1.0
    assert front.opacity_for(swoop) == 1.0
