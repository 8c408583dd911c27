"""
The drag state that survives between frames.

Handles are created anew each frame, so anything that must persist
over a drag lives in a ``StateStore``, keyed by the handle's
(kind, direction) identity.
"""

import numpy as np


class RotationState:
    """The drag state of a rotation handle. All angles are in radians."""

    __slots__ = [
        "current_delta",
        "last_rotation_angle",
        "start_axis_angle",
        "start_rotation_angle",
    ]

    def __init__(
        self,
        start_axis_angle=0.0,
        start_rotation_angle=0.0,
        last_rotation_angle=0.0,
        current_delta=0.0,
    ):
        # Angle of the pointer on the arc at pick time, relative to the tangent
        self.start_axis_angle = float(start_axis_angle)
        # Screen-space angle of the pointer around the object at pick time
        self.start_rotation_angle = float(start_rotation_angle)
        # Screen-space angle of the pointer in the previous frame
        self.last_rotation_angle = float(last_rotation_angle)
        # The rotation accumulated since the drag started
        self.current_delta = float(current_delta)

    def __repr__(self):
        return (
            f"<RotationState start={self.start_rotation_angle:0.4g}"
            f" last={self.last_rotation_angle:0.4g}"
            f" delta={self.current_delta:0.4g} at {hex(id(self))}>"
        )

    def copy(self):
        return RotationState(
            self.start_axis_angle,
            self.start_rotation_angle,
            self.last_rotation_angle,
            self.current_delta,
        )


class TranslationState:
    """The drag state of a translation or scale handle, in world coordinates."""

    __slots__ = ["current_delta", "last_point", "start_point"]

    def __init__(
        self, start_point=(0, 0, 0), last_point=(0, 0, 0), current_delta=(0, 0, 0)
    ):
        self.start_point = np.array(start_point, dtype=float)
        self.last_point = np.array(last_point, dtype=float)
        self.current_delta = np.array(current_delta, dtype=float)

    def __repr__(self):
        p = ", ".join(f"{i:0.4g}" for i in self.start_point)
        d = ", ".join(f"{i:0.4g}" for i in self.current_delta)
        return f"<TranslationState start=({p}) delta=({d}) at {hex(id(self))}>"

    def copy(self):
        return TranslationState(self.start_point, self.last_point, self.current_delta)


class StateStore:
    """A key-value store for drag states.

    ``load()`` hands out copies, so a state only changes when it is
    explicitly saved back.
    """

    def __init__(self):
        self._states = {}

    def __len__(self):
        return len(self._states)

    def __contains__(self, key):
        return key in self._states

    def load(self, key, state_cls):
        """Get a copy of the state for key, or a zeroed state if there is none."""
        state = self._states.get(key, None)
        if not isinstance(state, state_cls):
            return state_cls()
        return state.copy()

    def save(self, key, state):
        """Store (a copy of) the state for key."""
        self._states[key] = state.copy()

    def clear(self):
        self._states.clear()
