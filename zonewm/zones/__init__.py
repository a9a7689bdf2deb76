"""
zonewm.zones - Zone assignment bookkeeping.

This package contains:
    - environment      : Collaborator protocols and the id/zone type aliases
    - assigned_windows : LayoutAssignedWindows - window <-> zone groups
    - zorder           : Front-to-back window order (pywin32)
    - win32_env        : Win32 implementations of the collaborators

Only `environment` and `assigned_windows` are imported here; the Win32
modules are imported explicitly by the entry point.
"""

from zonewm.zones.environment import (
    TabSortKeyStore,
    WindowEnvironment,
    WindowId,
    ZoneIndex,
    ZoneIndexSet,
)
from zonewm.zones.assigned_windows import (
    AssignmentCorruptedError,
    LayoutAssignedWindows,
)

__all__ = [
    "TabSortKeyStore",
    "WindowEnvironment",
    "WindowId",
    "ZoneIndex",
    "ZoneIndexSet",
    "AssignmentCorruptedError",
    "LayoutAssignedWindows",
]
