"""
Translation handles: along an axis (an arrow) or in a plane (a small square).

The geometry defined here is shared with the scale handles.
"""

import numpy as np

from ..utils.compgeo import (
    intersect_plane,
    ray_to_plane,
    ray_to_ray,
    round_to_interval,
    segment_to_segment,
    vec_length,
    world_to_screen,
)
from ..utils.enums import GizmoDirection, GizmoMode
from .._result import GizmoResult
from .._state import TranslationState


# A ray is tested as a segment of this length
RAY_LENGTH = 1e14

# Handles that are shorter than this on screen (in pixels) are edge-on
MIN_SCREEN_LENGTH = 5.0

# Deltas shorter than this are not snapped
SNAP_EPSILON = 1e-5

_X = np.array((1.0, 0.0, 0.0))
_Y = np.array((0.0, 1.0, 0.0))
_Z = np.array((0.0, 0.0, 1.0))

# Cyclic: the plane of x is spanned by y and z, etc.
_PLANE_AXES = {
    GizmoDirection.x: (_Y, _Z),
    GizmoDirection.y: (_Z, _X),
    GizmoDirection.z: (_X, _Y),
}


# %% Linear geometry


def linear_length(subgizmo):
    """The length of an arrow handle in world units."""
    config = subgizmo.config
    return config.scale_factor * config.gizmo_size


def linear_is_visible(subgizmo):
    """Whether an arrow handle can be interacted with.

    An arrow that points (nearly) at the camera collapses to a dot on
    screen, and dragging it would be unstable.
    """
    if subgizmo.direction == GizmoDirection.screen:
        return False

    config = subgizmo.config
    width = config.scale_factor * config.stroke_width
    arrow_length = width * 2.4
    length = linear_length(subgizmo) - arrow_length

    origin = config.translation
    direction = subgizmo.normal()
    return _span_is_visible(
        config, origin + direction * width, origin + direction * length
    )


def _span_is_visible(config, start, end):
    screen_start = world_to_screen(config.viewport, config.view_projection, start)
    screen_end = world_to_screen(config.viewport, config.view_projection, end)
    if screen_start is not None and screen_end is not None:
        if vec_length(screen_end - screen_start) < MIN_SCREEN_LENGTH:
            return False
    return True


def point_on_axis(subgizmo, ray):
    """The point on the handle's (infinite) axis that is nearest to the ray."""
    origin = subgizmo.config.translation
    direction = subgizmo.normal()
    _, subgizmo_t = ray_to_ray(ray.origin, ray.direction, origin, direction)
    return origin + direction * subgizmo_t


def pick_linear(subgizmo, ray, store):
    """Pick an arrow handle. Used by both translation and scale.

    Returns the distance from the ray origin to the handle, or None.
    """
    if not linear_is_visible(subgizmo):
        return None

    origin = subgizmo.config.translation
    direction = subgizmo.normal()
    length = linear_length(subgizmo)

    ray_t, subgizmo_t = segment_to_segment(
        ray.origin,
        ray.at(RAY_LENGTH),
        origin,
        origin + direction * length,
    )
    ray_point = ray.at(RAY_LENGTH * ray_t)
    subgizmo_point = origin + direction * length * subgizmo_t
    dist = vec_length(ray_point - subgizmo_point)

    if dist > subgizmo.config.focus_distance:
        return None

    state = TranslationState(subgizmo_point, subgizmo_point, (0, 0, 0))
    subgizmo.save_state(store, state)
    return vec_length(ray_point - ray.origin)


def update_translation(subgizmo, ray, store):
    """Drag an arrow handle. Returns a GizmoResult."""
    config = subgizmo.config
    state = subgizmo.load_state(store, TranslationState)

    new_point = point_on_axis(subgizmo, ray)
    new_delta = new_point - state.start_point

    if config.snapping:
        new_delta = snap_translation_vector(new_delta, config.snap_distance)
        new_point = state.start_point + new_delta

    new_translation = config.translation + (new_point - state.last_point)

    state.last_point = new_point
    state.current_delta = new_delta
    subgizmo.save_state(store, state)

    return GizmoResult(
        scale=config.scale,
        rotation=config.rotation,
        translation=new_translation,
        mode=GizmoMode.translate,
        value=new_delta,
    )


def snap_translation_vector(delta, interval):
    """Snap the length of delta, keeping its direction."""
    delta_length = vec_length(delta)
    if delta_length <= SNAP_EPSILON:
        return delta
    return delta / delta_length * round_to_interval(delta_length, interval)


# %% Planar geometry


def plane_axes(subgizmo):
    """The (binormal, tangent) pair spanning the plane, in world space."""
    if subgizmo.direction == GizmoDirection.screen:
        config = subgizmo.config
        return config.view_right, config.view_up
    binormal, tangent = _PLANE_AXES[subgizmo.direction]
    return subgizmo.to_world(binormal), subgizmo.to_world(tangent)


def plane_local_axes(direction):
    """The (binormal, tangent) pair spanning the plane of an axis, in object space."""
    return _PLANE_AXES[direction]


def plane_size(subgizmo):
    """The side length of a plane handle in world units."""
    config = subgizmo.config
    return config.scale_factor * (config.gizmo_size * 0.1 + config.stroke_width * 2)


def plane_local_origin(subgizmo):
    """The center of the plane handle relative to the object.

    It sits diagonally between its two axes, so that it does not cover
    the arrows. The screen plane is centered on the object.
    """
    if subgizmo.direction == GizmoDirection.screen:
        return np.zeros(3)
    config = subgizmo.config
    offset = config.scale_factor * config.gizmo_size * 0.4
    binormal, tangent = _PLANE_AXES[subgizmo.direction]
    return (binormal + tangent) * offset


def plane_global_origin(subgizmo):
    """The center of the plane handle in world coordinates."""
    origin = plane_local_origin(subgizmo)
    return subgizmo.config.translation + subgizmo.to_world(origin)


def plane_is_visible(subgizmo):
    """Whether a plane handle can be interacted with.

    A plane seen edge-on collapses to a line on screen. The screen
    plane always faces the camera.
    """
    if subgizmo.direction == GizmoDirection.screen:
        return True

    config = subgizmo.config
    origin = plane_global_origin(subgizmo)
    half_size = plane_size(subgizmo) * 0.5
    for axis in plane_axes(subgizmo):
        a = axis * half_size
        if not _span_is_visible(config, origin - a, origin + a):
            return False
    return True


def point_on_plane(plane_normal, plane_origin, ray):
    """The intersection of the ray with the plane, or None."""
    t = intersect_plane(plane_normal, plane_origin, ray.origin, ray.direction)
    if t is None:
        return None
    return ray.at(t)


def pick_planar(subgizmo, ray, store):
    """Pick a plane handle. Used by both translation and scale.

    Returns the distance along the ray to the plane, or None.
    """
    if not plane_is_visible(subgizmo):
        return None

    origin = plane_global_origin(subgizmo)
    t, dist_from_origin = ray_to_plane(
        subgizmo.normal(), origin, ray.origin, ray.direction
    )
    if dist_from_origin > plane_size(subgizmo):
        return None

    ray_point = ray.at(t)
    state = TranslationState(ray_point, ray_point, (0, 0, 0))
    subgizmo.save_state(store, state)
    return t


def update_translation_plane(subgizmo, ray, store):
    """Drag a plane handle.

    Returns a GizmoResult, or None if the ray misses the plane.
    """
    config = subgizmo.config
    state = subgizmo.load_state(store, TranslationState)

    new_point = point_on_plane(subgizmo.normal(), plane_global_origin(subgizmo), ray)
    if new_point is None:
        return None
    new_delta = new_point - state.start_point

    if config.snapping:
        new_delta = snap_translation_plane(subgizmo, new_delta)
        new_point = state.start_point + new_delta

    new_translation = config.translation + (new_point - state.last_point)

    state.last_point = new_point
    state.current_delta = new_delta
    subgizmo.save_state(store, state)

    return GizmoResult(
        scale=config.scale,
        rotation=config.rotation,
        translation=new_translation,
        mode=GizmoMode.translate,
        value=new_delta,
    )


def snap_translation_plane(subgizmo, delta):
    """Snap delta along each of the two plane axes independently."""
    binormal, tangent = plane_axes(subgizmo)
    normal = np.cross(binormal, tangent)
    interval = subgizmo.config.snap_distance

    # Crossing with one axis and projecting on the normal gives the
    # signed component along the other axis.
    along_binormal = float(np.dot(np.cross(delta, tangent), normal))
    along_tangent = float(np.dot(np.cross(delta, -binormal), normal))

    result = np.zeros(3)
    for axis, component in ((binormal, along_binormal), (tangent, along_tangent)):
        if abs(component) > SNAP_EPSILON:
            component = round_to_interval(component, interval)
        result += axis * component
    return result
