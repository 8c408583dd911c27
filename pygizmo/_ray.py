import numpy as np
import pylinalg as la

from .utils.compgeo import screen_to_ndc, vec_normalize_safe


class Ray:
    """A world-space pointer ray.

    Parameters
    ----------
    origin : tuple
        The start of the ray in world coordinates.
    direction : tuple
        The direction of the ray. It is normalized on construction.
    screen_pos : tuple | None
        The pointer position (x, y) in logical pixels that this ray was
        cast from. Rotation handles measure angles in screen space and
        need it; without it a rotation drag produces no result.
    """

    __slots__ = ["direction", "origin", "screen_pos"]

    def __init__(self, origin, direction, screen_pos=None):
        self.origin = np.array(origin, dtype=float)
        direction = vec_normalize_safe(direction)
        if direction is None:
            raise ValueError("Ray direction must not be a zero vector.")
        self.direction = direction
        self.screen_pos = None
        if screen_pos is not None:
            self.screen_pos = np.array(screen_pos[:2], dtype=float)

    def __repr__(self):
        o = ", ".join(f"{i:0.4g}" for i in self.origin)
        d = ", ".join(f"{i:0.4g}" for i in self.direction)
        return f"<Ray from ({o}) towards ({d}) at {hex(id(self))}>"

    def at(self, t):
        """Get the point at parameter t along the ray."""
        return self.origin + self.direction * t

    @classmethod
    def from_screen(cls, screen_pos, config):
        """Cast a ray from a pointer position through the camera of the config.

        Returns None if the pointer is outside the viewport, or the
        view-projection matrix cannot be inverted.
        """
        ndc = screen_to_ndc(config.viewport, screen_pos)
        if ndc is None:
            return None
        x, y = ndc

        vp = config.view_projection
        if abs(np.linalg.det(vp)) < 1e-30:
            return None
        screen_to_world = la.mat_inverse(vp)

        p0 = la.vec_transform((x, y, 0.0), screen_to_world)
        p1 = la.vec_transform((x, y, 1.0), screen_to_world)
        if not (np.all(np.isfinite(p0)) and np.all(np.isfinite(p1))):
            return None

        # Start at whichever point is nearest to the camera, so that the
        # ray works for both regular and reversed depth ranges.
        camera_pos = la.vec_transform((0, 0, 0), la.mat_inverse(config.view_matrix))
        if np.linalg.norm(p1 - camera_pos) < np.linalg.norm(p0 - camera_pos):
            p0, p1 = p1, p0

        direction = vec_normalize_safe(p1 - p0)
        if direction is None:
            return None
        return cls(p0, direction, screen_pos)
