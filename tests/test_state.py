import numpy as np
import pytest

import pygizmo as gz


def test_store_load_default():
    store = gz.StateStore()
    key = ("rotation_axis", "x")

    state = store.load(key, gz.RotationState)
    assert isinstance(state, gz.RotationState)
    assert state.current_delta == 0
    assert state.start_rotation_angle == 0
    assert len(store) == 0

    state = store.load(key, gz.TranslationState)
    assert isinstance(state, gz.TranslationState)
    assert np.all(state.start_point == 0)
    assert np.all(state.current_delta == 0)


def test_store_save_and_load():
    store = gz.StateStore()
    key = ("linear_translation", "y")

    state = gz.TranslationState((1, 2, 3), (1, 2, 3), (0, 0, 0))
    store.save(key, state)
    assert key in store

    loaded = store.load(key, gz.TranslationState)
    assert np.all(loaded.start_point == (1, 2, 3))


def test_store_hands_out_copies():
    store = gz.StateStore()
    key = ("rotation_axis", "z")

    state = gz.RotationState(current_delta=1.0)
    store.save(key, state)
    state.current_delta = 2.0
    assert store.load(key, gz.RotationState).current_delta == 1.0

    loaded = store.load(key, gz.RotationState)
    loaded.current_delta = 3.0
    assert store.load(key, gz.RotationState).current_delta == 1.0

    # Arrays are copied too
    tstate = gz.TranslationState((1, 1, 1))
    store.save(("linear_scale", "x"), tstate)
    tstate.start_point[0] = 99
    assert store.load(("linear_scale", "x"), gz.TranslationState).start_point[0] == 1


def test_store_keys_are_isolated():
    store = gz.StateStore()
    store.save(("rotation_axis", "x"), gz.RotationState(current_delta=1.0))
    store.save(("rotation_axis", "y"), gz.RotationState(current_delta=2.0))

    assert store.load(("rotation_axis", "x"), gz.RotationState).current_delta == 1.0
    assert store.load(("rotation_axis", "y"), gz.RotationState).current_delta == 2.0

    # Asking for another kind of state gives a fresh one
    state = store.load(("rotation_axis", "x"), gz.TranslationState)
    assert isinstance(state, gz.TranslationState)

    store.clear()
    assert len(store) == 0


def test_result():
    result = gz.GizmoResult(
        scale=(2, 2, 2),
        rotation=(0, 0, 0, 1),
        translation=(1, 2, 3),
        mode="translate",
        value=(1, 0, 0),
    )
    m = result.transform
    assert m.shape == (4, 4)
    assert np.allclose(m[:3, 3], (1, 2, 3))
    assert np.allclose(np.diag(m)[:3], (2, 2, 2))

    with pytest.raises(ValueError):
        gz.GizmoResult((1, 1, 1), (0, 0, 0, 1), (0, 0, 0), "shear", (0, 0, 0))
