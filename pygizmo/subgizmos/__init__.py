"""
The handles of the gizmo and their picking and drag behavior.

Each handle kind (see :obj:`pygizmo.utils.enums.SubGizmoKind`) has a
pick function that starts a drag and an update function that continues
it. Rotation lives in ``_rotation``, translation in ``_translation``,
and scale, which reuses the translation geometry, in ``_scale``.
"""

# ruff: noqa: F401

from ._base import SubGizmo, create_subgizmos
