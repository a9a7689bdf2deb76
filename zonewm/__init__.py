"""
zonewm - Zone tab tracking for a zone-based window manager.

Windows snapped into the same zones form a group with a tab order that
can be cycled with the keyboard.  The bookkeeping lives in `zonewm.zones`;
`zonewm.core` holds the Win32 event loop, hotkeys and commands that drive
it, and `zonewm.config` the settings and keybindings.
"""

from zonewm.zones.assigned_windows import (
    AssignmentCorruptedError,
    LayoutAssignedWindows,
)

__version__ = "0.1.0"

__all__ = ["LayoutAssignedWindows", "AssignmentCorruptedError", "__version__"]
