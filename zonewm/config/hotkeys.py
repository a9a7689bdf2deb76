"""
zonewm.config.hotkeys - Keybindings of the zone manager.

    Tabs (only with Settings.window_switching):
        Win + PgDn              -> Next window in the focused window's zones
        Win + PgUp              -> Previous window in the focused window's zones

    Snap:
        Win + Ctrl + Alt + 1..9 -> Snap focused window into zone 1..9
        Win + Ctrl + Alt + 0    -> Unsnap focused window

    Focus:
        Win + Alt + 1..9        -> Focus the topmost other window in zone 1..9

    Debug:
        Win + Ctrl + Alt + D    -> Log all zone groups
"""

from __future__ import annotations

import logging

from zonewm.config.settings import Settings
from zonewm.core import win32
from zonewm.core.commands import ZONE_HOTKEY_COUNT, CommandDispatcher
from zonewm.core.keybinds import HotkeyManager, MOD_ALT, MOD_CONTROL, MOD_WIN

log = logging.getLogger(__name__)


_SNAP_MODS = MOD_WIN | MOD_CONTROL | MOD_ALT
_FOCUS_MODS = MOD_WIN | MOD_ALT


def register_all_hotkeys(
    hk_manager: HotkeyManager,
    dispatcher: CommandDispatcher,
    settings: Settings,
) -> int:
    """
    Bind every key combination to its dispatcher command.

    Returns:
        Number of hotkeys registered successfully.
    """
    registered = 0

    def _bind(modifiers: int, vk: int, command: str, desc: str) -> None:
        nonlocal registered
        cmd = dispatcher.get(command)
        if cmd is None:
            log.warning("Hotkey bind: command %r not found, skipping", command)
            return
        if hk_manager.register(modifiers, vk, cmd.fn, desc) is not None:
            registered += 1

    if settings.window_switching:
        _bind(MOD_WIN, win32.VK_NEXT, "cycle_zone_windows_next", "Next zone tab")
        _bind(MOD_WIN, win32.VK_PRIOR, "cycle_zone_windows_prev", "Previous zone tab")
    else:
        log.info("Window switching disabled, cycling hotkeys not registered")

    for n in range(1, ZONE_HOTKEY_COUNT + 1):
        vk = win32.VK_DIGITS[n]
        _bind(_SNAP_MODS, vk, f"snap_to_zone_{n}", f"Snap to zone {n}")
        _bind(_FOCUS_MODS, vk, f"focus_zone_{n}", f"Focus zone {n}")

    _bind(_SNAP_MODS, win32.VK_DIGITS[0], "unsnap_window", "Unsnap window")
    _bind(_SNAP_MODS, win32.VK_D, "dump_zones", "Dump zone groups")

    log.info("Hotkeys registered: %d", registered)
    return registered
