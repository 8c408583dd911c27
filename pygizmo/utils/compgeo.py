"""Computational geometry.

Nearest-point queries between rays, segments and planes, plus the
projection and snapping helpers used by the handles. All functions are
pure. Degenerate input (parallel lines, zero-length vectors, points
behind the camera) produces a sentinel instead of an exception.
"""

from math import atan2, floor, inf, pi, sqrt

import numpy as np


TAU = 2 * pi

# Below this a denominator is considered zero.
PARALLEL_EPSILON = 1e-8


def vec_length(v):
    """The Euclidean length of a 3-vector, as a Python float."""
    return sqrt(float(np.dot(v, v)))


def vec_normalize_safe(v, eps=1e-10):
    """Normalize v, or return None if it has (near) zero length.

    Unlike ``pylinalg.vec_normalize`` this never divides by zero.
    """
    v = np.asarray(v, dtype=float)
    length = vec_length(v)
    if length < eps:
        return None
    return v / length


def intersect_plane(plane_normal, plane_origin, ray_origin, ray_dir):
    """Get the ray parameter where the ray hits the plane.

    Returns None when the ray is parallel to the plane, or when the
    plane is behind the ray origin.
    """
    denom = float(np.dot(plane_normal, ray_dir))
    if abs(denom) < 10 * PARALLEL_EPSILON:
        return None
    t = float(np.dot(np.subtract(plane_origin, ray_origin), plane_normal)) / denom
    if t < 0:
        return None
    return t


def ray_to_plane(normal, plane_point, ray_origin, ray_dir):
    """Intersect a ray with a plane.

    Returns ``(t, dist)``, with t the ray parameter of the intersection
    and dist the distance from ``plane_point`` to the intersection. If
    there is no intersection, dist is infinite and t is zero.
    """
    t = intersect_plane(normal, plane_point, ray_origin, ray_dir)
    if t is None:
        return 0.0, inf
    p = np.asarray(ray_origin, dtype=float) + np.asarray(ray_dir, dtype=float) * t
    return t, vec_length(p - plane_point)


def ray_to_ray(a1, adir, b1, bdir):
    """Get the parameters of the closest approach between two lines.

    Both direction vectors are assumed to be normalized. Returns
    ``(ta, tb)``. For (near) parallel lines, ta is zero and tb points
    at the projection of a1 onto the second line.
    """
    b = float(np.dot(adir, bdir))
    w = np.subtract(a1, b1)
    d = float(np.dot(adir, w))
    e = float(np.dot(bdir, w))
    dot = 1.0 - b * b

    if dot < PARALLEL_EPSILON:
        return 0.0, e
    return (b * e - d) / dot, (e - b * d) / dot


def segment_to_segment(a1, a2, b1, b2):
    """Get the parameters of the closest points between two segments.

    Returns ``(ta, tb)``, both clamped to [0, 1], so that
    ``a1 + (a2 - a1) * ta`` and ``b1 + (b2 - b1) * tb`` are the closest
    points. Suitable for very long segments, which is how a ray is
    tested against a finite handle.
    """
    da = np.subtract(a2, a1)
    db = np.subtract(b2, b1)
    la = float(np.dot(da, da))
    lb = float(np.dot(db, db))
    dd = float(np.dot(da, db))
    d1 = np.subtract(a1, b1)
    d = float(np.dot(da, d1))
    e = float(np.dot(db, d1))
    n = la * lb - dd * dd

    sd = td = n
    if n < PARALLEL_EPSILON:
        # Parallel, pick any point on a
        sn, sd = 0.0, 1.0
        tn, td = e, lb
    else:
        sn = dd * e - lb * d
        tn = la * e - dd * d
        if sn < 0.0:
            sn = 0.0
            tn, td = e, lb
        elif sn > sd:
            sn = sd
            tn, td = e + dd, lb

    if tn < 0.0:
        tn = 0.0
        if -d < 0.0:
            sn = 0.0
        elif -d > la:
            sn = sd
        else:
            sn, sd = -d, la
    elif tn > td:
        tn = td
        if (-d + dd) < 0.0:
            sn = 0.0
        elif (-d + dd) > la:
            sn = sd
        else:
            sn, sd = -d + dd, la

    # A zero-length segment gives a zero denominator
    ta = 0.0 if abs(sn) < PARALLEL_EPSILON or sd == 0 else sn / sd
    tb = 0.0 if abs(tn) < PARALLEL_EPSILON or td == 0 else tn / td
    return ta, tb


def round_to_interval(value, interval):
    """Round value to the nearest multiple of interval.

    Halfway cases round away from zero. An interval of zero or less
    means no snapping, and the value is returned unchanged.
    """
    if interval <= 0:
        return value
    steps = value / interval
    if steps >= 0:
        steps = floor(steps + 0.5)
    else:
        steps = -floor(-steps + 0.5)
    return steps * interval


def wrap_angle(angle):
    """Get the smallest representation of an angle difference, in (-pi, pi].

    E.g. a jump from 179 to -179 degrees is a step of +2 degrees, not -358.
    """
    if angle > pi:
        angle -= TAU
    elif angle <= -pi:
        angle += TAU
    return angle


def signed_angle(a, b, normal):
    """The angle from vector a to vector b, measured around normal."""
    return atan2(float(np.dot(np.cross(a, b), normal)), float(np.dot(a, b)))


def world_to_screen(viewport, mvp, pos):
    """Project a point to screen coordinates (logical pixels, y down).

    The viewport is ``(x, y, w, h)``. Returns a 2-element array, or
    None when the point is behind the camera.
    """
    clip = mvp @ np.array([pos[0], pos[1], pos[2], 1.0], dtype=float)
    w = float(clip[3])
    if w < 1e-10:
        return None
    ndc_x, ndc_y = clip[0] / w, -clip[1] / w
    x, y, width, height = viewport
    return np.array(
        (x + 0.5 * width + ndc_x * 0.5 * width, y + 0.5 * height + ndc_y * 0.5 * height)
    )


def screen_to_ndc(viewport, screen_pos):
    """Map a screen position (logical pixels, y down) to NDC x and y.

    Returns None if the position is outside the viewport.
    """
    x, y, width, height = viewport
    if width <= 0 or height <= 0:
        return None
    sx, sy = float(screen_pos[0]), float(screen_pos[1])
    if not (x <= sx <= x + width and y <= sy <= y + height):
        return None
    return (sx - x) / width * 2 - 1, -((sy - y) / height * 2 - 1)
