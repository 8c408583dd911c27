"""
Scale handles. They are picked and dragged with exactly the same
geometry as the translation handles; only the interpretation of the
delta differs. A drag over one handle length doubles the scale.
"""

import numpy as np

from ..utils.compgeo import round_to_interval, vec_normalize_safe
from ..utils.enums import GizmoDirection, GizmoMode
from .._result import GizmoResult
from .._state import TranslationState
from ._translation import (
    linear_length,
    pick_linear,
    pick_planar,
    plane_axes,
    plane_global_origin,
    plane_local_axes,
    point_on_axis,
    point_on_plane,
)


MIN_SCALE_FACTOR = 1e-4

_AXIS_INDEX = {GizmoDirection.x: 0, GizmoDirection.y: 1, GizmoDirection.z: 2}


pick_scale = pick_linear
pick_scale_plane = pick_planar


def scale_axes(subgizmo, planar):
    """A mask of the local axes that a scale handle affects."""
    if subgizmo.direction == GizmoDirection.screen:
        return np.ones(3)
    if planar:
        binormal, tangent = plane_local_axes(subgizmo.direction)
        return binormal + tangent
    mask = np.zeros(3)
    mask[_AXIS_INDEX[subgizmo.direction]] = 1.0
    return mask


def _measure_direction(subgizmo, planar):
    # The world direction along which dragging grows the object
    if not planar:
        return subgizmo.normal()
    binormal, tangent = plane_axes(subgizmo)
    return vec_normalize_safe(binormal + tangent)


def scale_factor_from_delta(subgizmo, delta, planar):
    """Convert a world offset since the start of the drag into a scale factor."""
    config = subgizmo.config
    length = linear_length(subgizmo)
    direction = _measure_direction(subgizmo, planar)
    if length < 1e-12 or direction is None:
        return 1.0

    amount = float(np.dot(delta, direction)) / length
    if config.snapping:
        # Snap the change, so that no drag is always a factor of exactly 1
        amount = round_to_interval(amount, config.snap_scale)
    return max(1.0 + amount, MIN_SCALE_FACTOR)


def _update(subgizmo, store, new_point, planar):
    config = subgizmo.config
    state = subgizmo.load_state(store, TranslationState)

    new_delta = new_point - state.start_point
    prev_factor = scale_factor_from_delta(subgizmo, state.current_delta, planar)
    factor = scale_factor_from_delta(subgizmo, new_delta, planar)

    state.last_point = new_point
    state.current_delta = new_delta
    subgizmo.save_state(store, state)

    # The config holds the scale of the previous frame, so apply the increment
    axes = scale_axes(subgizmo, planar)
    new_scale = config.scale * (1.0 + axes * (factor / prev_factor - 1.0))

    return GizmoResult(
        scale=new_scale,
        rotation=config.rotation,
        translation=config.translation,
        mode=GizmoMode.scale,
        value=1.0 + axes * (factor - 1.0),
    )


def update_scale(subgizmo, ray, store):
    """Drag an arrow scale handle. Returns a GizmoResult."""
    return _update(subgizmo, store, point_on_axis(subgizmo, ray), False)


def update_scale_plane(subgizmo, ray, store):
    """Drag a plane scale handle.

    Returns a GizmoResult, or None if the ray misses the plane.
    """
    new_point = point_on_plane(subgizmo.normal(), plane_global_origin(subgizmo), ray)
    if new_point is None:
        return None
    return _update(subgizmo, store, new_point, True)
