"""
Rotation handles: an arc around an axis, or a full circle facing the camera.

Picking happens in 3D, against the plane of the arc. Dragging happens
in screen space: the pointer angle around the projected object origin
drives the rotation, which stays stable even when the arc is seen
nearly edge-on.
"""

from math import atan2, inf, pi

import numpy as np
import pylinalg as la

from ..utils.compgeo import (
    ray_to_plane,
    round_to_interval,
    signed_angle,
    vec_normalize_safe,
    world_to_screen,
    wrap_angle,
)
from ..utils.enums import GizmoDirection, GizmoMode
from .._result import GizmoResult
from .._state import RotationState


# Between these view angles (cosines) the half arc widens to a full circle
ARC_MIN_DOT = 0.990
ARC_MAX_DOT = 0.995


def tangent(subgizmo):
    """The zero-angle reference direction in the plane of the arc."""
    direction = subgizmo.direction
    if direction == GizmoDirection.screen:
        return -subgizmo.config.view_right
    elif direction == GizmoDirection.z:
        local_tangent = (0.0, -1.0, 0.0)
    else:
        local_tangent = (0.0, 0.0, 1.0)
    return subgizmo.to_world(np.array(local_tangent))


def arc_radius(subgizmo):
    """The radius of the arc in world units."""
    config = subgizmo.config
    radius = config.gizmo_size
    if subgizmo.direction == GizmoDirection.screen:
        # A bit larger, so it does not overlap with the axis arcs
        radius += config.stroke_width + 5
    return config.scale_factor * radius


def arc_angle(subgizmo):
    """Half the angular span of the visible arc.

    The arc is a half circle (pi / 2 to each side), which widens into a
    full circle (pi to each side) as the axis turns toward the camera.
    """
    dot = abs(float(np.dot(subgizmo.normal(), subgizmo.config.view_forward)))
    if dot >= ARC_MAX_DOT:
        return pi
    elif dot <= ARC_MIN_DOT:
        return pi / 2
    return (dot - ARC_MIN_DOT) / (ARC_MAX_DOT - ARC_MIN_DOT) * pi / 2 + pi / 2


def rotation_angle(subgizmo, screen_pos):
    """The angle of the pointer around the object origin, in screen space.

    The sign is flipped when the axis points away from the camera, so
    that dragging feels the same from either side of the arc. Returns
    None if there is no pointer or no well-defined angle.
    """
    if screen_pos is None:
        return None
    config = subgizmo.config
    gizmo_pos = world_to_screen(
        config.viewport, config.view_projection, config.translation
    )
    if gizmo_pos is None:
        return None
    delta = vec_normalize_safe(np.asarray(screen_pos, dtype=float) - gizmo_pos)
    if delta is None:
        return None

    angle = atan2(delta[1], delta[0])
    if float(np.dot(config.view_forward, subgizmo.normal())) < 0:
        angle *= -1
    return angle


def _axis_angle(subgizmo, offset):
    # The angle of a point on the arc. For the screen circle it is measured
    # from the tangent, for axis arcs from the direction of the camera.
    normal = subgizmo.normal()
    if subgizmo.direction == GizmoDirection.screen:
        return signed_angle(offset, tangent(subgizmo), normal)

    forward = subgizmo.config.view_forward
    if subgizmo.config.left_handed:
        forward = -forward
    return signed_angle(offset, forward, normal)


def pick_rotation(subgizmo, ray, store):
    """Pick a rotation handle.

    Returns the distance along the ray to the plane of the arc, or None.
    The screen-space start angle is taken from ``ray.screen_pos``. A ray
    without one starts the drag at angle 0, so the first update that does
    have a pointer position may rotate by the angle of that pointer.
    """
    config = subgizmo.config
    origin = config.translation
    normal = subgizmo.normal()

    t, dist_from_gizmo_origin = ray_to_plane(normal, origin, ray.origin, ray.direction)
    if dist_from_gizmo_origin == inf:
        return None
    dist_from_gizmo_edge = abs(dist_from_gizmo_origin - arc_radius(subgizmo))
    if dist_from_gizmo_edge > config.focus_distance:
        return None

    # Direction from the origin to the nearest point on the circle
    offset = vec_normalize_safe(ray.at(t) - origin)
    if offset is None:
        return None
    angle = _axis_angle(subgizmo, offset)
    if abs(angle) > arc_angle(subgizmo):
        return None

    start_angle = rotation_angle(subgizmo, ray.screen_pos)
    if start_angle is None:
        start_angle = 0.0
    state = RotationState(
        start_axis_angle=angle,
        start_rotation_angle=start_angle,
        last_rotation_angle=start_angle,
        current_delta=0.0,
    )
    subgizmo.save_state(store, state)
    return t


def update_rotation(subgizmo, ray, store):
    """Drag a rotation handle. Returns a GizmoResult, or None without a pointer."""
    config = subgizmo.config
    state = subgizmo.load_state(store, RotationState)

    angle = rotation_angle(subgizmo, ray.screen_pos)
    if angle is None:
        return None
    if config.snapping:
        angle = (
            round_to_interval(angle - state.start_rotation_angle, config.snap_angle)
            + state.start_rotation_angle
        )

    angle_delta = wrap_angle(angle - state.last_rotation_angle)

    state.last_rotation_angle = angle
    state.current_delta += angle_delta
    subgizmo.save_state(store, state)

    # Apply the increment, so that wrapping never causes a jump
    normal = subgizmo.normal()
    increment = la.quat_from_axis_angle(normal, -angle_delta)
    new_rotation = la.quat_mul(increment, config.rotation)

    return GizmoResult(
        scale=config.scale,
        rotation=new_rotation,
        translation=config.translation,
        mode=GizmoMode.rotate,
        value=normal * state.current_delta,
    )
