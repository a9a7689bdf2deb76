"""
zonewm.core.manager - WindowManager: the Win32 event loop.

The zone core is passive; this loop is what drives it.  WindowManager:

  1. Installs a WinEvent hook for foreground changes and window
     destruction.
  2. Keeps track of the foreground window (the target of every hotkey
     command).
  3. Dispatches WM_HOTKEY messages to the HotkeyManager.
  4. Emits WMEvent notifications to subscribers, so that closed windows
     can be dismissed from their zones as soon as they go away.

Everything runs on the thread that called start().
"""

from __future__ import annotations

import enum
import logging
import signal
from collections.abc import Callable
from typing import Optional

from zonewm.core import win32
from zonewm.core.keybinds import HotkeyManager

log = logging.getLogger(__name__)


class WMEvent(enum.Enum):
    """Events emitted by the WindowManager."""

    # A top-level window was destroyed.
    WINDOW_DESTROYED = "window_destroyed"

    # The foreground window changed.
    FOCUS_CHANGED = "focus_changed"


# callback(event, hwnd, manager)
EventCallback = Callable[["WMEvent", int, "WindowManager"], None]


class WindowManager:
    """
    Event loop and foreground tracking.

    Usage:
        wm = WindowManager()
        wm.on(WMEvent.WINDOW_DESTROYED, on_destroyed)
        wm.start()   # blocks in the Win32 message loop
    """

    def __init__(self, hotkey_manager: Optional[HotkeyManager] = None) -> None:
        self._foreground: int = 0

        self._subscribers: dict[WMEvent, list[EventCallback]] = {
            ev: [] for ev in WMEvent
        }

        self._hook_handle: int = 0
        # Must prevent GC of the ctypes callback
        self._hook_proc: Optional[win32.WinEventProc] = None

        self._running: bool = False
        self._loop_thread_id: int = 0

        self._hotkey_manager = hotkey_manager

    # ------------------------------------------------------------------
    # Public: state
    # ------------------------------------------------------------------
    @property
    def foreground(self) -> int:
        """HWND of the foreground window, refreshed from the OS if unknown."""
        if not self._foreground:
            self._foreground = win32.get_foreground_window()
        return self._foreground

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Public: event subscription
    # ------------------------------------------------------------------
    def on(self, event: WMEvent, callback: EventCallback) -> None:
        self._subscribers[event].append(callback)

    def off(self, event: WMEvent, callback: EventCallback) -> None:
        try:
            self._subscribers[event].remove(callback)
        except ValueError:
            pass

    def on_all(self, callback: EventCallback) -> None:
        for ev in WMEvent:
            self._subscribers[ev].append(callback)

    def _emit(self, event: WMEvent, hwnd: int) -> None:
        for cb in self._subscribers[event]:
            try:
                cb(event, hwnd, self)
            except Exception:
                log.exception(
                    "Error in event callback for %s on %#010x", event.value, hwnd
                )

    # ------------------------------------------------------------------
    # Internal: WinEvent callback
    # ------------------------------------------------------------------
    def _on_win_event(
        self,
        hook: int,
        event: int,
        hwnd: int,
        id_object: int,
        id_child: int,
        thread_id: int,
        timestamp: int,
    ) -> None:
        """Called by Windows for every hooked event (top-level windows only)."""
        if id_object != win32.OBJID_WINDOW or id_child != win32.CHILDID_SELF:
            return
        if not hwnd:
            return

        try:
            if event == win32.EVENT_OBJECT_DESTROY:
                if hwnd == self._foreground:
                    self._foreground = 0
                self._emit(WMEvent.WINDOW_DESTROYED, hwnd)

            elif event == win32.EVENT_SYSTEM_FOREGROUND:
                if hwnd != self._foreground:
                    self._foreground = hwnd
                    log.debug("FOCUS -> %#010x", hwnd)
                    self._emit(WMEvent.FOCUS_CHANGED, hwnd)

        except Exception:
            log.exception("Error handling event %#06x for hwnd %#010x", event, hwnd)

    # ------------------------------------------------------------------
    # Public: lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        """
        Install the WinEvent hook and run the message loop until stop()
        is called or SIGINT/SIGTERM is received.
        """
        log.info("zonewm starting...")

        self._foreground = win32.get_foreground_window()

        self._hook_proc = win32.WinEventProc(self._on_win_event)
        self._hook_handle = win32.set_win_event_hook(
            event_min=win32.EVENT_SYSTEM_FOREGROUND,
            event_max=win32.EVENT_OBJECT_DESTROY,
            callback=self._hook_proc,
        )
        if not self._hook_handle:
            log.error("Failed to install WinEvent hook!")
            self._hook_proc = None
            raise RuntimeError("SetWinEventHook failed")

        log.info("WinEvent hook installed (handle=%#x)", self._hook_handle)

        def _signal_handler(sig: int, frame: object) -> None:
            log.info("Signal %d received, stopping...", sig)
            self.stop()

        signal.signal(signal.SIGINT, _signal_handler)
        signal.signal(signal.SIGTERM, _signal_handler)

        self._running = True
        self._loop_thread_id = win32.get_current_thread_id()
        log.info("Entering message loop (foreground %#010x)", self._foreground)

        while self._running:
            got_msg, msg = win32.get_message()
            if not got_msg:
                break

            if msg.message == win32.WM_HOTKEY and self._hotkey_manager is not None:
                self._hotkey_manager.dispatch(msg.wParam)
                continue

            win32.translate_and_dispatch(msg)

        self._cleanup()
        log.info("zonewm stopped.")

    def stop(self) -> None:
        """
        Request the event loop to stop.
        Safe to call from any thread or from within a callback.
        """
        self._running = False
        if self._loop_thread_id:
            win32.post_thread_message(self._loop_thread_id, win32.WM_QUIT)
        else:
            win32.post_quit_message(0)

    def _cleanup(self) -> None:
        if self._hotkey_manager is not None:
            self._hotkey_manager.unregister_all()

        if self._hook_handle:
            win32.unhook_win_event(self._hook_handle)
            self._hook_handle = 0
            log.info("WinEvent hook removed")

        self._hook_proc = None
