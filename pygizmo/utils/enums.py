"""
The enums used in pygizmo. They are all available from the root
``pygizmo`` namespace. Values are plain strings, so users can pass
e.g. ``mode="translate"`` directly.
"""

from wgpu.utils import BaseEnum


__all__ = [
    "GizmoDirection",
    "GizmoMode",
    "GizmoOrientation",
    "SubGizmoKind",
]


class Enum(BaseEnum):
    """Enum base class for pygizmo."""


class GizmoMode(Enum):
    """The GizmoMode enum specifies what kind of transform the gizmo manipulates."""

    rotate = None  #: Rotate the object around an axis.
    translate = None  #: Move the object along an axis or in a plane.
    scale = None  #: Scale the object along its local axes.


class GizmoOrientation(Enum):
    """The GizmoOrientation enum specifies the frame the handles are aligned to."""

    world = None  #: Handles are aligned to the world axes (global space).
    local = None  #: Handles follow the rotation of the object.


class GizmoDirection(Enum):
    """The GizmoDirection enum specifies the axis that a handle works on."""

    x = None  #: The x axis, or the plane spanned by y and z.
    y = None  #: The y axis, or the plane spanned by z and x.
    z = None  #: The z axis, or the plane spanned by x and y.
    screen = None  #: Aligned to the camera.


class SubGizmoKind(Enum):
    """The SubGizmoKind enum specifies the operation family of a single handle."""

    rotation_axis = None  #: Rotation around an axis.
    linear_translation = None  #: Translation along a vector.
    planar_translation = None  #: Translation in a plane.
    linear_scale = None  #: Scale along a vector.
    planar_scale = None  #: Scale in a plane.
