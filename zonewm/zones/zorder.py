"""
zonewm.zones.zorder - Front-to-back order of top-level windows.

EnumWindows yields top-level windows in z-order, frontmost first, so the
position of a window in that walk is its depth.  The order changes every
time the user clicks a window: it is re-read on every call.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

import pywintypes
import win32gui

log = logging.getLogger(__name__)


def z_order() -> list[int]:
    """HWNDs of all top-level windows, frontmost first."""
    hwnds: list[int] = []

    def _callback(hwnd: int, _: object) -> bool:
        hwnds.append(hwnd)
        return True

    try:
        win32gui.EnumWindows(_callback, None)
    except pywintypes.error:
        log.exception("EnumWindows failed, z-order unavailable")
        return []
    return hwnds


def find_topmost_window(windows: Sequence[int]) -> tuple[Optional[int], int]:
    """
    Return the window of *windows* nearest the front and its depth
    (0 = frontmost top-level window), or (None, 0) if none is found.
    """
    candidates = set(windows)
    for depth, hwnd in enumerate(z_order()):
        if hwnd in candidates:
            return hwnd, depth

    log.debug(
        "None of %s found in the z-order",
        [f"{hwnd:#010x}" for hwnd in windows],
    )
    return None, 0
