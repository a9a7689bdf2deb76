"""
zonewm.zones.environment - Contracts for the collaborators of the zone core.

The zone bookkeeping never talks to the OS directly.  Everything it needs
to know about a window (does it still exist, is it on this virtual
desktop, where is it in the z-order) and every side effect it triggers
(activation, corner styling, persisted sort keys) goes through the two
protocols defined here.  The Win32 implementations live in
`zonewm.zones.win32_env`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol

# An HWND value.  Compared and hashed by value; may refer to a closed window.
WindowId = int

# Index of one zone in the active layout.
ZoneIndex = int

# Ordered zone combination.  Order and duplicates are part of its identity.
ZoneIndexSet = tuple[ZoneIndex, ...]


class TabSortKeyStore(Protocol):
    """Durable per-window storage for the tab sort key."""

    def get_tab_sort_key(self, window: WindowId) -> Optional[int]:
        ...

    def set_tab_sort_key(self, window: WindowId, key: Optional[int]) -> None:
        """Persist *key* for *window*; None clears it."""
        ...


class WindowEnvironment(Protocol):
    """Facts about live windows and best-effort actions on them."""

    def is_window_live(self, window: WindowId) -> bool:
        ...

    def is_on_current_desktop(self, window: WindowId) -> bool:
        ...

    def switch_to_window(self, window: WindowId) -> None:
        ...

    def disable_round_corners(self, window: WindowId) -> None:
        ...

    def reset_round_corners(self, window: WindowId) -> None:
        ...

    def find_topmost_window(
        self, windows: Sequence[WindowId]
    ) -> tuple[Optional[WindowId], int]:
        """
        Return the candidate nearest the front of the z-order and its
        ordinal depth (0 = frontmost), or (None, 0) if none was found.
        """
        ...
