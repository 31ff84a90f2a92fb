from __future__ import annotations

import numpy as np
import pytest

from engine.core.config import BLACK, WHITE, YELLOW, SceneConfig
from engine.core.scene import Scene, SceneSnapshot
from engine.render.framebuffer import allocate_frame, as_pixel_view
from engine.render.renderer import ShadowRenderer, resolve_backend, resolve_threads

BACKENDS = ["numba", "numpy"]


def _render(config: SceneConfig, backend: str, snapshot: SceneSnapshot | None = None) -> np.ndarray:
    frame = allocate_frame(config.width, config.height)
    with ShadowRenderer(config, backend=backend, threads=3) as renderer:
        renderer.render(snapshot or Scene(config).snapshot(), frame)
    return frame


@pytest.fixture(scope="module")
def default_frames() -> dict[str, np.ndarray]:
    cfg = SceneConfig()
    return {b: _render(cfg, b) for b in BACKENDS}


@pytest.mark.parametrize("backend", BACKENDS)
@pytest.mark.parametrize(
    "xy, expected",
    [
        ((850, 360), WHITE),  # 遮蔽円の中心
        ((200, 360), WHITE),  # 光源の中心
        ((1270, 360), BLACK),  # 遮蔽円の真後ろ
        ((1270, 10), YELLOW),
        ((10, 360), YELLOW),  # 光源の左側（遮蔽円は間に無い）
        ((600, 360), YELLOW),  # 光源と遮蔽円の間
    ],
)
def test_default_scene_pixels(default_frames, backend, xy, expected) -> None:
    x, y = xy
    assert tuple(default_frames[backend][y, x]) == expected


def test_backends_produce_identical_bytes(default_frames) -> None:
    assert default_frames["numba"].tobytes() == default_frames["numpy"].tobytes()


@pytest.mark.parametrize("backend", BACKENDS)
def test_alpha_always_opaque_and_only_palette_colors(default_frames, backend) -> None:
    frame = default_frames[backend]
    assert np.all(frame[..., 3] == 255)
    colors = {tuple(c) for c in frame.reshape(-1, 4)}
    assert colors <= {WHITE, BLACK, YELLOW}


@pytest.mark.parametrize("backend", BACKENDS)
def test_circle_boundaries_are_inclusive(small_config, backend) -> None:
    frame = _render(small_config, backend)
    # 光源 (10, 24) 半径 3: (13, 24) は境界上、(14, 24) は外側
    assert tuple(frame[24, 13]) == WHITE
    assert tuple(frame[24, 14]) == YELLOW
    # 遮蔽円 (40, 24) 半径 8: (40, 16) は境界上（白）
    assert tuple(frame[16, 40]) == WHITE
    # 遮蔽円の内側は影判定に該当しても白
    assert tuple(frame[24, 47]) == WHITE
    assert tuple(frame[24, 63]) == BLACK


@pytest.mark.parametrize("backend", BACKENDS)
def test_every_pixel_is_overwritten(small_config, backend) -> None:
    frame = allocate_frame(small_config.width, small_config.height)
    frame[...] = 7  # どの色とも一致しない値
    with ShadowRenderer(small_config, backend=backend, threads=2) as renderer:
        renderer.render(Scene(small_config).snapshot(), frame)
    assert np.all(frame[..., 3] == 255)
    assert not np.any(np.all(frame == 7, axis=-1))


@pytest.mark.parametrize("backend", BACKENDS)
def test_light_overrides_shadow_when_overlapping_occluder(small_config, backend) -> None:
    snap = SceneSnapshot(light_x=40.0, light_y=24.0, occluder_y=24.0, config=small_config)
    frame = _render(small_config, backend, snap)
    assert tuple(frame[24, 40]) == WHITE
    # 光源が遮蔽円の内側にある場合、円外の画素はすべて影になる
    assert tuple(frame[0, 0]) == BLACK
    assert tuple(frame[47, 63]) == BLACK


@pytest.mark.parametrize("backend", BACKENDS)
def test_renders_into_bytearray_and_flat_array(small_config, backend) -> None:
    expected = _render(small_config, backend).tobytes()
    snap = Scene(small_config).snapshot()
    buf = bytearray(small_config.buffer_size)
    flat = np.zeros(small_config.buffer_size, dtype=np.uint8)
    with ShadowRenderer(small_config, backend=backend) as renderer:
        renderer.render(snap, buf)
        renderer.render(snap, flat)
        assert renderer.frames == 2
    assert bytes(buf) == expected
    assert flat.tobytes() == expected


@pytest.mark.parametrize("threads", [1, 2, 5, 64])
def test_numpy_band_split_does_not_change_output(small_config, threads) -> None:
    snap = SceneSnapshot(light_x=3.0, light_y=5.0, occluder_y=30.0, config=small_config)
    ref = _render(small_config, "numba", snap)
    frame = allocate_frame(small_config.width, small_config.height)
    with ShadowRenderer(small_config, backend="numpy", threads=threads) as renderer:
        renderer.render(snap, frame)
    assert frame.tobytes() == ref.tobytes()


def test_wrong_buffer_size_raises(small_config) -> None:
    with ShadowRenderer(small_config, backend="numpy", threads=1) as renderer:
        with pytest.raises(ValueError):
            renderer.render(Scene(small_config).snapshot(), bytearray(small_config.buffer_size - 1))
        with pytest.raises(ValueError):
            renderer.render(Scene(small_config).snapshot(), bytes(small_config.buffer_size))
        with pytest.raises(ValueError):
            renderer.render(
                Scene(small_config).snapshot(),
                np.zeros((small_config.height, small_config.width, 4), dtype=np.float32),
            )


def test_snapshot_from_other_frame_size_raises(small_config) -> None:
    other = SceneSnapshot(
        light_x=0.0,
        light_y=0.0,
        occluder_y=24.0,
        config=SceneConfig(width=32, height=48, occluder_x=20.0, occluder_radius=8.0),
    )
    with ShadowRenderer(small_config, backend="numba") as renderer:
        with pytest.raises(ValueError):
            renderer.render(other, allocate_frame(small_config.width, small_config.height))


def test_closed_numpy_renderer_refuses_to_render(small_config) -> None:
    renderer = ShadowRenderer(small_config, backend="numpy", threads=2)
    renderer.close()
    renderer.close()
    with pytest.raises(RuntimeError):
        renderer.render(Scene(small_config).snapshot(), allocate_frame(64, 48))


def test_custom_palette_is_used(small_config) -> None:
    cfg = SceneConfig(
        width=small_config.width,
        height=small_config.height,
        light_start=small_config.light_start,
        light_radius=small_config.light_radius,
        occluder_x=small_config.occluder_x,
        occluder_start_y=small_config.occluder_start_y,
        occluder_radius=small_config.occluder_radius,
        background_color="#102030",
        shadow_color="#405060",
    )
    for backend in BACKENDS:
        frame = _render(cfg, backend)
        assert tuple(frame[0, 0]) == (0x10, 0x20, 0x30, 255)
        assert tuple(frame[24, 63]) == (0x40, 0x50, 0x60, 255)


def test_as_pixel_view_shares_memory() -> None:
    buf = bytearray(2 * 3 * 4)
    view = as_pixel_view(buf, 2, 3)
    view[2, 1] = (1, 2, 3, 4)
    assert buf[-4:] == bytearray([1, 2, 3, 4])


def test_resolve_backend_and_threads(clean_settings) -> None:
    assert resolve_backend(None) == "numba"
    assert resolve_backend(" NumPy ") == "numpy"
    with pytest.raises(ValueError):
        resolve_backend("opengl")
    clean_settings.setenv("PXS_USE_NUMBA", "0")
    from common import settings

    settings.reload_from_env()
    assert resolve_backend(None) == "numpy"
    assert resolve_threads(0) == 1
    assert resolve_threads(3) == 3
    clean_settings.setenv("PXS_RENDER_THREADS", "2")
    settings.reload_from_env()
    assert resolve_threads(None) == 2
