"""
The configuration snapshot that the handles read from.
"""

from math import pi

import numpy as np
import pylinalg as la

from .utils import logger
from .utils.enums import GizmoMode, GizmoOrientation


DEFAULT_SNAP_ANGLE = pi / 32
DEFAULT_SNAP_DISTANCE = 0.1
DEFAULT_SNAP_SCALE = 0.1

DEFAULT_GIZMO_SIZE = 75.0
DEFAULT_STROKE_WIDTH = 4.0


def _readonly_array(value, shape, name):
    a = np.array(value, dtype=float)
    if a.shape != shape:
        raise ValueError(f"GizmoConfig.{name} must have shape {shape}, not {a.shape}")
    a.flags.writeable = False
    return a


class GizmoConfig:
    """An immutable snapshot of everything the handles need in one frame.

    Handles never modify the config. To apply a result, create a new
    config with ``with_transform()``.

    Parameters
    ----------
    view_matrix : array (4, 4)
        The world-to-camera matrix. Default identity.
    projection_matrix : array (4, 4)
        The camera-to-clip matrix. Default identity.
    viewport : tuple
        The viewport rect (x, y, w, h) in logical pixels. Default (0, 0, 800, 600).
    translation : tuple
        The position of the object.
    rotation : tuple
        The rotation of the object as a unit quaternion (x, y, z, w).
    scale : tuple
        The per-axis scale of the object.
    mode : str
        What the gizmo manipulates. See :obj:`pygizmo.utils.enums.GizmoMode`.
    orientation : str
        Whether handles follow the object's rotation ("local") or are aligned
        to the world axes ("world"). See :obj:`pygizmo.utils.enums.GizmoOrientation`.
    left_handed : bool
        Whether the camera uses a left-handed coordinate system.
    snapping : bool
        Whether to snap to the increments below.
    snap_angle : float
        Angle increment in radians. Default pi / 32.
    snap_distance : float
        Translation increment in world units. Default 0.1.
    snap_scale : float
        Scale factor increment. Default 0.1.
    gizmo_size : float
        Base size of the handles in logical pixels. Default 75.
    stroke_width : float
        Stroke width of the handles in logical pixels. Default 4.
    scale_factor : float | None
        World units per logical pixel at the location of the object. If
        None, it is derived from the matrices and the viewport.
    focus_distance : float | None
        How close (in world units) the pointer ray must pass a handle to
        pick it. If None, it is derived from the stroke width.
    """

    def __init__(
        self,
        *,
        view_matrix=None,
        projection_matrix=None,
        viewport=(0, 0, 800, 600),
        translation=(0, 0, 0),
        rotation=(0, 0, 0, 1),
        scale=(1, 1, 1),
        mode="rotate",
        orientation="world",
        left_handed=False,
        snapping=False,
        snap_angle=DEFAULT_SNAP_ANGLE,
        snap_distance=DEFAULT_SNAP_DISTANCE,
        snap_scale=DEFAULT_SNAP_SCALE,
        gizmo_size=DEFAULT_GIZMO_SIZE,
        stroke_width=DEFAULT_STROKE_WIDTH,
        scale_factor=None,
        focus_distance=None,
    ):
        if view_matrix is None:
            view_matrix = np.eye(4)
        if projection_matrix is None:
            projection_matrix = np.eye(4)
        self._view_matrix = _readonly_array(view_matrix, (4, 4), "view_matrix")
        self._projection_matrix = _readonly_array(
            projection_matrix, (4, 4), "projection_matrix"
        )

        if len(viewport) != 4:
            raise ValueError("GizmoConfig.viewport must be 4 numbers (x, y, w, h).")
        self._viewport = tuple(float(v) for v in viewport)

        self._translation = _readonly_array(translation, (3,), "translation")
        self._rotation = _readonly_array(rotation, (4,), "rotation")
        self._scale = _readonly_array(scale, (3,), "scale")

        mode = mode or "rotate"
        if mode not in GizmoMode:
            raise ValueError(
                f"GizmoConfig.mode must be a string in {GizmoMode}, not {repr(mode)}"
            )
        self._mode = mode

        orientation = orientation or "world"
        if orientation not in GizmoOrientation:
            raise ValueError(
                f"GizmoConfig.orientation must be a string in {GizmoOrientation}, not {repr(orientation)}"
            )
        self._orientation = orientation

        self._left_handed = bool(left_handed)
        self._snapping = bool(snapping)
        self._snap_angle = float(snap_angle)
        self._snap_distance = float(snap_distance)
        self._snap_scale = float(snap_scale)
        self._gizmo_size = float(gizmo_size)
        self._stroke_width = float(stroke_width)

        if self._snapping:
            for name in ("snap_angle", "snap_distance", "snap_scale"):
                if getattr(self, name) <= 0:
                    logger.warning(
                        f"GizmoConfig.{name} is not positive, snapping is disabled for it."
                    )

        self._view_projection = self._projection_matrix @ self._view_matrix
        self._view_projection.flags.writeable = False
        self._model_matrix = la.mat_compose(
            self._translation, self._rotation, self._scale
        )
        self._model_matrix.flags.writeable = False
        self._mvp = self._view_projection @ self._model_matrix
        self._mvp.flags.writeable = False

        self._given_scale_factor = scale_factor
        self._given_focus_distance = focus_distance

        if scale_factor is None:
            scale_factor = self._derive_scale_factor()
        self._scale_factor = float(scale_factor)

        if focus_distance is None:
            focus_distance = self._scale_factor * (self._stroke_width / 2 + 5)
        self._focus_distance = float(focus_distance)

    def __repr__(self):
        return (
            f"<GizmoConfig {self._mode} in {self._orientation} space"
            f" at {hex(id(self))}>"
        )

    def _derive_scale_factor(self):
        # The w of the object origin in clip space is its depth (perspective)
        # or 1 (orthographic). Divided by the horizontal focal length this
        # gives world units per NDC unit, and the viewport maps that to pixels.
        x_scale = float(self._projection_matrix[0, 0])
        width = self._viewport[2]
        if abs(x_scale) < 1e-12 or width <= 0:
            return 1.0
        return float(self._mvp[3, 3]) / x_scale / width * 2

    def with_transform(self, *, translation=None, rotation=None, scale=None):
        """Get a copy of this config with (part of) the object transform replaced."""
        kwargs = self._kwargs()
        if translation is not None:
            kwargs["translation"] = translation
        if rotation is not None:
            kwargs["rotation"] = rotation
        if scale is not None:
            kwargs["scale"] = scale
        # Derived values depend on the transform, unless they were given
        kwargs["scale_factor"] = self._given_scale_factor
        kwargs["focus_distance"] = self._given_focus_distance
        return GizmoConfig(**kwargs)

    def _kwargs(self):
        return dict(
            view_matrix=self._view_matrix,
            projection_matrix=self._projection_matrix,
            viewport=self._viewport,
            translation=self._translation,
            rotation=self._rotation,
            scale=self._scale,
            mode=self._mode,
            orientation=self._orientation,
            left_handed=self._left_handed,
            snapping=self._snapping,
            snap_angle=self._snap_angle,
            snap_distance=self._snap_distance,
            snap_scale=self._snap_scale,
            gizmo_size=self._gizmo_size,
            stroke_width=self._stroke_width,
        )

    # %% Matrices

    @property
    def view_matrix(self):
        """The world-to-camera matrix."""
        return self._view_matrix

    @property
    def projection_matrix(self):
        """The camera-to-clip matrix."""
        return self._projection_matrix

    @property
    def view_projection(self):
        """The world-to-clip matrix."""
        return self._view_projection

    @property
    def model_matrix(self):
        """The object-to-world matrix composed from translation, rotation and scale."""
        return self._model_matrix

    @property
    def mvp(self):
        """The object-to-clip matrix."""
        return self._mvp

    @property
    def viewport(self):
        """The viewport rect (x, y, w, h) in logical pixels."""
        return self._viewport

    # %% Camera directions

    @property
    def view_right(self):
        return np.array(self._view_matrix[0, :3])

    @property
    def view_up(self):
        return np.array(self._view_matrix[1, :3])

    @property
    def view_forward(self):
        """The third row of the view matrix.

        For a right-handed camera this points from the scene toward the camera.
        """
        return np.array(self._view_matrix[2, :3])

    # %% Object transform

    @property
    def translation(self):
        return self._translation

    @property
    def rotation(self):
        return self._rotation

    @property
    def scale(self):
        return self._scale

    # %% Behavior

    @property
    def mode(self):
        """See :obj:`pygizmo.utils.enums.GizmoMode`."""
        return self._mode

    @property
    def orientation(self):
        """See :obj:`pygizmo.utils.enums.GizmoOrientation`."""
        return self._orientation

    @property
    def local_space(self):
        """Whether the handle axes follow the rotation of the object."""
        return self._orientation == GizmoOrientation.local

    @property
    def left_handed(self):
        return self._left_handed

    @property
    def snapping(self):
        return self._snapping

    @property
    def snap_angle(self):
        return self._snap_angle

    @property
    def snap_distance(self):
        return self._snap_distance

    @property
    def snap_scale(self):
        return self._snap_scale

    # %% Sizes

    @property
    def gizmo_size(self):
        return self._gizmo_size

    @property
    def stroke_width(self):
        return self._stroke_width

    @property
    def scale_factor(self):
        """World units per logical pixel at the location of the object."""
        return self._scale_factor

    @property
    def focus_distance(self):
        """The pick tolerance in world units."""
        return self._focus_distance
