"""The interaction core of a 3D transform gizmo.

Given a pointer ray and the transform of an object, find which handle
the pointer is over, and how the transform changes while a handle is
dragged.
"""

# ruff: noqa: F401, F403

from ._version import __version__, version_info

from .utils import enums, logger
from .utils.enums import *

from ._config import GizmoConfig
from ._ray import Ray
from ._result import GizmoResult
from ._state import RotationState, StateStore, TranslationState
from .subgizmos import SubGizmo, create_subgizmos
