"""
zonewm.zones.win32_env - Win32 side of the zone core.

WindowPropertyStore keeps the tab sort key on the window itself as a
window property, so it lives and dies with the HWND.  Win32WindowEnvironment
answers the liveness / desktop / z-order questions and performs the
best-effort actions (activation, corner styling).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from zonewm.core import win32
from zonewm.zones import zorder

log = logging.getLogger(__name__)


# Window property holding the tab sort key within the zone
TAB_SORT_KEY_PROPERTY = "ZoneWM_TabSortKeyWithinZone"


class WindowPropertyStore:
    """
    Tab sort keys stored as window properties.

    A property value of 0 (NULL) means "no property", so keys are
    stored shifted by one.
    """

    def __init__(self, name: str = TAB_SORT_KEY_PROPERTY) -> None:
        self._name = name

    def get_tab_sort_key(self, window: int) -> Optional[int]:
        raw = win32.get_prop(window, self._name)
        if not raw:
            return None
        return raw - 1

    def set_tab_sort_key(self, window: int, key: Optional[int]) -> None:
        if key is None:
            win32.remove_prop(window, self._name)
            return
        if not win32.set_prop(window, self._name, key + 1):
            log.debug("SetPropW failed for %#010x (key=%d)", window, key)


class Win32WindowEnvironment:
    """Live window facts and actions backed by user32 / dwmapi."""

    def is_window_live(self, window: int) -> bool:
        return win32.is_window_valid(window)

    def is_on_current_desktop(self, window: int) -> bool:
        return not win32.is_window_cloaked(window)

    def switch_to_window(self, window: int) -> None:
        """Bring window to the foreground, restoring if minimized."""
        if win32.is_window_iconic(window):
            win32.show_window(window, win32.SW_RESTORE)
        if not win32.set_foreground_window(window):
            log.debug("SetForegroundWindow refused for %#010x", window)

    def disable_round_corners(self, window: int) -> None:
        if not win32.set_window_corner_preference(window, win32.DWMWCP_DONOTROUND):
            log.debug("Could not disable round corners on %#010x", window)

    def reset_round_corners(self, window: int) -> None:
        if not win32.set_window_corner_preference(window, win32.DWMWCP_DEFAULT):
            log.debug("Could not reset round corners on %#010x", window)

    def find_topmost_window(
        self, windows: Sequence[int]
    ) -> tuple[Optional[int], int]:
        return zorder.find_topmost_window(windows)
