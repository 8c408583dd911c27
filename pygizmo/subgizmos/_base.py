import numpy as np
import pylinalg as la

from ..utils import logger
from ..utils.enums import GizmoDirection, GizmoMode, SubGizmoKind
from ._rotation import pick_rotation, update_rotation
from ._scale import pick_scale, pick_scale_plane, update_scale, update_scale_plane
from ._translation import (
    linear_is_visible,
    pick_linear,
    pick_planar,
    plane_is_visible,
    update_translation,
    update_translation_plane,
)


_LOCAL_AXES = {
    GizmoDirection.x: np.array((1.0, 0.0, 0.0)),
    GizmoDirection.y: np.array((0.0, 1.0, 0.0)),
    GizmoDirection.z: np.array((0.0, 0.0, 1.0)),
}

_SCALE_KINDS = (SubGizmoKind.linear_scale, SubGizmoKind.planar_scale)

# kind -> (pick, update, is_visible)
_BEHAVIOR = {
    SubGizmoKind.rotation_axis: (pick_rotation, update_rotation, None),
    SubGizmoKind.linear_translation: (
        pick_linear,
        update_translation,
        linear_is_visible,
    ),
    SubGizmoKind.planar_translation: (
        pick_planar,
        update_translation_plane,
        plane_is_visible,
    ),
    SubGizmoKind.linear_scale: (pick_scale, update_scale, linear_is_visible),
    SubGizmoKind.planar_scale: (pick_scale_plane, update_scale_plane, plane_is_visible),
}

assert set(_BEHAVIOR) == set(SubGizmoKind)


class SubGizmo:
    """A single handle of the gizmo, for one operation on one axis.

    Handles are cheap values that are created anew each frame from the
    current config. Anything that must survive between frames (the drag
    state) is kept in a ``StateStore``, under this handle's ``key``.

    Parameters
    ----------
    config : GizmoConfig
        The configuration of the current frame.
    direction : str
        The axis (or plane normal) of the handle. See
        :obj:`pygizmo.utils.enums.GizmoDirection`.
    kind : str
        The operation of the handle. See :obj:`pygizmo.utils.enums.SubGizmoKind`.
    focused : bool
        Whether the pointer is near enough to pick this handle.
    active : bool
        Whether this handle is being dragged.
    """

    __slots__ = ["active", "config", "direction", "focused", "kind"]

    def __init__(self, config, direction, kind, *, focused=False, active=False):
        if direction not in GizmoDirection:
            raise ValueError(
                f"SubGizmo.direction must be a string in {GizmoDirection}, not {repr(direction)}"
            )
        if kind not in SubGizmoKind:
            raise ValueError(
                f"SubGizmo.kind must be a string in {SubGizmoKind}, not {repr(kind)}"
            )
        self.config = config
        self.direction = direction
        self.kind = kind
        self.focused = bool(focused)
        self.active = bool(active)

    def __repr__(self):
        return f"<SubGizmo {self.kind} {self.direction} at {hex(id(self))}>"

    @property
    def key(self):
        """The identity under which the drag state of this handle is stored."""
        return (self.kind, self.direction)

    @property
    def local_space(self):
        """Whether the handle follows the rotation of the object.

        Scale handles always do, since scale is applied along the object's
        own axes.
        """
        return self.config.local_space or self.kind in _SCALE_KINDS

    def to_world(self, vector):
        """Rotate a vector from object space to world space, if in local space."""
        if self.local_space and self.direction != GizmoDirection.screen:
            return la.vec_transform_quat(vector, self.config.rotation)
        return np.asarray(vector, dtype=float)

    def local_normal(self):
        """The axis of the handle in object space."""
        if self.direction == GizmoDirection.screen:
            return -self.config.view_forward
        return _LOCAL_AXES[self.direction].copy()

    def normal(self):
        """The axis of the handle in world space."""
        return self.to_world(self.local_normal())

    # %% State

    def load_state(self, store, state_cls):
        """Get (a copy of) the drag state of this handle."""
        return store.load(self.key, state_cls)

    def save_state(self, store, state):
        """Store the drag state of this handle."""
        store.save(self.key, state)

    # %% Interaction

    def is_visible(self):
        """Whether the handle can be interacted with (and should be drawn).

        Handles seen edge-on are not.
        """
        is_visible = _BEHAVIOR[self.kind][2]
        return is_visible(self) if is_visible else True

    def pick(self, ray, store):
        """Test whether the ray picks this handle.

        On a hit, the drag state is reset to start a new drag, and the
        distance along the ray is returned so the caller can select the
        nearest handle. Returns None on a miss.
        """
        pick = _BEHAVIOR[self.kind][0]
        distance = pick(self, ray, store)
        if distance is not None:
            logger.debug(f"{self.kind} {self.direction} picked at {distance:0.4g}")
        return distance

    def update(self, ray, store):
        """Continue a drag with the given ray.

        Returns a GizmoResult, or None if nothing changes this frame
        (e.g. the pointer is unavailable or the ray misses the plane).
        """
        update = _BEHAVIOR[self.kind][1]
        result = update(self, ray, store)
        if result is not None:
            logger.debug(f"{self.kind} {self.direction} drag: {result}")
        return result


def create_subgizmos(config):
    """Create the handles for the mode of the given config.

    Which of these is focused or active is up to the caller.
    """
    axes = (GizmoDirection.x, GizmoDirection.y, GizmoDirection.z)
    if config.mode == GizmoMode.rotate:
        directions = axes + (GizmoDirection.screen,)
        return [SubGizmo(config, d, SubGizmoKind.rotation_axis) for d in directions]
    elif config.mode == GizmoMode.translate:
        linear = SubGizmoKind.linear_translation
        planar = SubGizmoKind.planar_translation
    else:  # config.mode == GizmoMode.scale
        linear = SubGizmoKind.linear_scale
        planar = SubGizmoKind.planar_scale

    subgizmos = [SubGizmo(config, d, linear) for d in axes]
    subgizmos += [SubGizmo(config, d, planar) for d in axes]
    subgizmos.append(SubGizmo(config, GizmoDirection.screen, planar))
    return subgizmos
