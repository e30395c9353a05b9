import pytest

pytest.importorskip("matplotlib")

from hang_compositor import build_scene
from hang_raster import render_scene_image, render_rotation_frames


def test_png_is_written(tmp_path, sample_project):
    out = tmp_path / "elevation.png"
    render_scene_image(build_scene(sample_project), str(out), dpi=50)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_pdf_is_written(tmp_path, sample_project):
    out = tmp_path / "elevation.pdf"
    render_scene_image(build_scene(sample_project), str(out), dpi=50)
    assert out.read_bytes()[:4] == b"%PDF"


def test_rotation_gif(tmp_path, sample_project):
    out = tmp_path / "spin.gif"
    assert render_rotation_frames(sample_project, str(out), frames=3, dpi=30) == 3
    assert out.read_bytes()[:4] == b"GIF8"


def test_frame_count_is_clamped(tmp_path, sample_project):
    out = tmp_path / "one.gif"
    assert render_rotation_frames(sample_project, str(out), frames=0, dpi=30) == 1
