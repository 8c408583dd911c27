import numpy as np
import pylinalg as la

from .utils.enums import GizmoMode


class GizmoResult:
    """The outcome of one drag update.

    Parameters
    ----------
    scale : array (3,)
        The new scale of the object.
    rotation : array (4,)
        The new rotation of the object as a unit quaternion (x, y, z, w).
    translation : array (3,)
        The new position of the object.
    mode : str
        The operation family that produced the result. See
        :obj:`pygizmo.utils.enums.GizmoMode`.
    value : array (3,)
        The total change since the drag started: an axis-angle vector
        for rotation, a world offset for translation and per-axis
        factors for scale. Useful for a numeric readout.
    """

    __slots__ = ["mode", "rotation", "scale", "translation", "value"]

    def __init__(self, scale, rotation, translation, mode, value):
        if mode not in GizmoMode:
            raise ValueError(
                f"GizmoResult.mode must be a string in {GizmoMode}, not {repr(mode)}"
            )
        self.scale = np.array(scale, dtype=float)
        self.rotation = np.array(rotation, dtype=float)
        self.translation = np.array(translation, dtype=float)
        self.mode = mode
        self.value = np.array(value, dtype=float)

    def __repr__(self):
        v = ", ".join(f"{i:0.4g}" for i in self.value)
        return f"<GizmoResult {self.mode} ({v}) at {hex(id(self))}>"

    @property
    def transform(self):
        """The new object-to-world matrix."""
        return la.mat_compose(self.translation, self.rotation, self.scale)
