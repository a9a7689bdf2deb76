"""
zonewm.core.keybinds - Global hotkeys.

Hotkeys are registered with RegisterHotKey and arrive as WM_HOTKEY in the
WindowManager's message loop, which hands the id to dispatch().

Usage:
    hk = HotkeyManager()
    hk.register(MOD_WIN, VK_NEXT, cycle_next, "Next tab")
    ...
    hk.unregister_all()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from zonewm.core import win32

log = logging.getLogger(__name__)


MOD_ALT = win32.MOD_ALT
MOD_CONTROL = win32.MOD_CONTROL
MOD_SHIFT = win32.MOD_SHIFT
MOD_WIN = win32.MOD_WIN
MOD_NOREPEAT = win32.MOD_NOREPEAT


HotkeyCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Hotkey:
    """A registered key combination."""

    id: int
    modifiers: int
    vk: int
    callback: HotkeyCallback
    description: str

    @property
    def combo(self) -> str:
        parts = [
            name
            for flag, name in (
                (MOD_WIN, "Win"),
                (MOD_CONTROL, "Ctrl"),
                (MOD_ALT, "Alt"),
                (MOD_SHIFT, "Shift"),
            )
            if self.modifiers & flag
        ]
        parts.append(f"0x{self.vk:02X}")
        return "+".join(parts)


class HotkeyManager:
    """Owns the registered hotkeys of this thread and dispatches them."""

    def __init__(self) -> None:
        self._hotkeys: dict[int, Hotkey] = {}
        self._next_id: int = 1

    def register(
        self,
        modifiers: int,
        vk: int,
        callback: HotkeyCallback,
        description: str = "",
    ) -> int | None:
        """
        Register a global hotkey.  MOD_NOREPEAT is always added so that
        holding the keys down does not cycle through a whole zone.

        Returns:
            The hotkey id, or None if the combination is taken.
        """
        hotkey = Hotkey(
            id=self._next_id,
            modifiers=modifiers,
            vk=vk,
            callback=callback,
            description=description,
        )
        if not win32.register_hotkey(hotkey.id, modifiers | MOD_NOREPEAT, vk):
            log.error("Failed to register hotkey %s (%s)", hotkey.combo, description)
            return None

        self._hotkeys[hotkey.id] = hotkey
        self._next_id += 1
        log.info("Hotkey id=%d %s  %s", hotkey.id, hotkey.combo, description)
        return hotkey.id

    def unregister_all(self) -> None:
        """Unregister every hotkey.  Call on shutdown."""
        for hotkey_id in self._hotkeys:
            win32.unregister_hotkey(hotkey_id)
        log.info("All hotkeys unregistered (%d total)", len(self._hotkeys))
        self._hotkeys.clear()

    def dispatch(self, hotkey_id: int) -> bool:
        """Run the callback for a WM_HOTKEY wParam.  False if unknown."""
        hotkey = self._hotkeys.get(hotkey_id)
        if hotkey is None:
            log.warning("Unknown hotkey id: %d", hotkey_id)
            return False

        log.debug("Hotkey %s", hotkey.description)
        try:
            hotkey.callback()
        except Exception:
            log.exception("Error in hotkey callback: %s", hotkey.description)
        return True

    def dump_state(self) -> str:
        lines = [f"=== HotkeyManager: {len(self._hotkeys)} hotkeys ==="]
        for hk in self._hotkeys.values():
            lines.append(f"  id={hk.id:3d}  {hk.combo:<22s} {hk.description}")
        return "\n".join(lines)
