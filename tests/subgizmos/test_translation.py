import numpy as np
import pylinalg as la
import pytest

import pygizmo as gz

from ..testutils import down_ray, make_config, orthographic


def linear(config, direction="x"):
    return gz.SubGizmo(config, direction, "linear_translation")


def planar(config, direction="z"):
    return gz.SubGizmo(config, direction, "planar_translation")


def test_pick_linear_midpoint():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = linear(config)

    # The arrow runs from the origin to (1.5, 0, 0); aim at its middle
    distance = handle.pick(down_ray(0.75, 0), store)
    assert distance == pytest.approx(10)

    state = handle.load_state(store, gz.TranslationState)
    assert np.allclose(state.start_point, (0.75, 0, 0))
    assert np.allclose(state.last_point, (0.75, 0, 0))
    assert np.all(state.current_delta == 0)


def test_pick_linear_within_tolerance():
    config = make_config(mode="translate")
    store = gz.StateStore()

    # focus distance is 0.02 * 7 = 0.14
    assert linear(config).pick(down_ray(0.75, 0.1), store) is not None
    assert linear(config).pick(down_ray(0.75, 0.2), store) is None

    # Beyond the tip
    assert linear(config).pick(down_ray(1.8, 0), store) is None


def test_pick_linear_miss_keeps_state():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = linear(config)

    assert handle.pick(down_ray(0.75, 0), store) is not None
    assert handle.pick(down_ray(0.75, 1), store) is None
    state = handle.load_state(store, gz.TranslationState)
    assert np.allclose(state.start_point, (0.75, 0, 0))


def test_pick_linear_edge_on():
    # The z arrow points straight at the camera
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = linear(config, "z")

    assert not handle.is_visible()
    assert handle.pick(down_ray(0, 0), store) is None
    assert handle.pick(down_ray(0.01, 0.01), store) is None
    assert len(store) == 0

    assert linear(config, "x").is_visible()
    assert linear(config, "y").is_visible()


def test_update_linear():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = linear(config)
    handle.pick(down_ray(0.75, 0), store)

    # Pointer moves 3 units along x, and a bit off-axis, which is ignored
    result = handle.update(down_ray(3.75, 0.5), store)
    assert result.mode == "translate"
    assert np.allclose(result.translation, (3, 0, 0))
    assert np.allclose(result.value, (3, 0, 0))
    assert np.allclose(result.rotation, (0, 0, 0, 1))
    assert np.allclose(result.scale, (1, 1, 1))

    state = handle.load_state(store, gz.TranslationState)
    assert np.allclose(state.current_delta, (3, 0, 0))
    assert np.allclose(state.last_point, (3.75, 0, 0))
    assert np.allclose(state.start_point, (0.75, 0, 0))


def test_update_linear_round_trip():
    config = make_config(mode="translate")
    store = gz.StateStore()
    linear(config).pick(down_ray(0.75, 0), store)

    # Frame by frame, with the host applying each result
    for x in (1.75, 2.75, 3.75):
        result = linear(config).update(down_ray(x, 0), store)
        config = config.with_transform(translation=result.translation)

    assert np.allclose(config.translation, (3, 0, 0))
    state = linear(config).load_state(store, gz.TranslationState)
    assert np.allclose(state.current_delta, (3, 0, 0))

    # Release, and pick again: a new drag starts from zero
    distance = linear(config).pick(down_ray(3.75, 0), store)
    assert distance is not None
    state = linear(config).load_state(store, gz.TranslationState)
    assert np.allclose(state.start_point, (3.75, 0, 0))
    assert np.all(state.current_delta == 0)


def test_update_linear_snapping():
    config = make_config(mode="translate", snapping=True, snap_distance=0.5)
    store = gz.StateStore()
    linear(config).pick(down_ray(0.75, 0), store)

    result = linear(config).update(down_ray(2.05, 0), store)
    assert np.allclose(result.value, (1.5, 0, 0))
    assert np.allclose(result.translation, (1.5, 0, 0))

    # Backwards, the direction is kept
    result = linear(config).update(down_ray(0.75 - 1.1, 0), store)
    assert np.allclose(result.value, (-1, 0, 0))
    # The config still holds the start translation, so this is the step back
    assert np.allclose(result.translation, (-2.5, 0, 0))

    # Tiny deltas are left alone
    result = linear(config).update(down_ray(0.75, 0), store)
    assert np.allclose(result.value, (0, 0, 0))


def test_update_linear_local_space():
    rotation = la.quat_from_axis_angle((0, 0, 1), np.pi / 2)
    config = make_config(mode="translate", orientation="local", rotation=rotation)
    store = gz.StateStore()
    handle = linear(config)

    # The x arrow now points along world y
    assert np.allclose(handle.normal(), (0, 1, 0))
    assert handle.pick(down_ray(0.75, 0), store) is None
    assert handle.pick(down_ray(0, 0.75), store) is not None

    result = handle.update(down_ray(0.3, 2.75), store)
    assert np.allclose(result.translation, (0, 2, 0))
    assert np.allclose(result.rotation, rotation)

    # In world orientation the rotation is ignored
    config = make_config(mode="translate", orientation="world", rotation=rotation)
    assert np.allclose(linear(config).normal(), (1, 0, 0))


def test_pick_planar():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = planar(config, "z")

    # The xy patch is centered at (0.6, 0.6, 0) with a size of 0.31
    distance = handle.pick(down_ray(0.6, 0.6), store)
    assert distance == pytest.approx(10)
    state = handle.load_state(store, gz.TranslationState)
    assert np.allclose(state.start_point, (0.6, 0.6, 0))

    assert handle.pick(down_ray(0.8, 0.6), store) is not None
    assert handle.pick(down_ray(1.2, 0.6), store) is None
    assert handle.pick(down_ray(0, 0), store) is None


def test_update_planar():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = planar(config, "z")
    handle.pick(down_ray(0.6, 0.6), store)

    result = handle.update(down_ray(1.6, 2.6), store)
    assert result.mode == "translate"
    assert np.allclose(result.translation, (1, 2, 0))
    assert np.allclose(result.value, (1, 2, 0))

    # A ray parallel to the plane gives no result, and no state change
    assert handle.update(gz.Ray((0, 0, 1), (1, 0, 0)), store) is None
    state = handle.load_state(store, gz.TranslationState)
    assert np.allclose(state.current_delta, (1, 2, 0))


def test_update_planar_snapping_per_axis():
    config = make_config(mode="translate", snapping=True, snap_distance=0.5)
    store = gz.StateStore()
    handle = planar(config, "z")
    handle.pick(down_ray(0.6, 0.6), store)

    # Each in-plane axis snaps on its own
    result = handle.update(down_ray(0.6 + 1.2, 0.6 + 0.2), store)
    assert np.allclose(result.value, (1, 0, 0))

    result = handle.update(down_ray(0.6 - 0.8, 0.6 + 1.3), store)
    assert np.allclose(result.value, (-1, 1.5, 0))
    assert np.allclose(result.translation, (-2, 1.5, 0))


def test_planar_edge_on():
    # Camera above, looking down the y axis, so the xy and yz planes are edge-on
    config = make_config(
        (0, 10, 0), up=(0, 0, -1), projection=orthographic(), mode="translate"
    )
    store = gz.StateStore()

    for direction in ("z", "x"):
        handle = planar(config, direction)
        assert not handle.is_visible()
        for x, z in [(0.6, 0), (0.6, 0.1), (0, 0), (-1, 2)]:
            ray = gz.Ray((x, 10, z), (0, -1, 0))
            assert handle.pick(ray, store) is None
    assert len(store) == 0

    # The zx plane faces the camera
    handle = planar(config, "y")
    assert handle.is_visible()
    assert handle.pick(gz.Ray((0.6, 10, 0.6), (0, -1, 0)), store) is not None


def test_planar_local_space():
    rotation = la.quat_from_axis_angle((0, 0, 1), np.pi / 2)
    config = make_config(mode="translate", orientation="local", rotation=rotation)
    store = gz.StateStore()
    handle = planar(config, "z")

    # The patch moved with the rotation, to (-0.6, 0.6, 0)
    assert handle.pick(down_ray(0.6, 0.6), store) is None
    assert handle.pick(down_ray(-0.6, 0.6), store) is not None

    result = handle.update(down_ray(-0.6 + 1, 0.6), store)
    assert np.allclose(result.translation, (1, 0, 0))


def test_screen_plane():
    config = make_config(mode="translate")
    store = gz.StateStore()
    handle = planar(config, "screen")

    assert handle.is_visible()
    assert np.allclose(handle.normal(), (0, 0, -1))
    assert handle.pick(down_ray(0.05, 0.05), store) == pytest.approx(10)

    result = handle.update(down_ray(1.05, -0.95), store)
    assert np.allclose(result.translation, (1, -1, 0))

    # Linear handles have no screen variant
    assert not linear(config, "screen").is_visible()
    assert linear(config, "screen").pick(down_ray(0, 0), store) is None
