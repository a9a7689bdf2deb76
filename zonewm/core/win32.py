"""
zonewm.core.win32 - Low-level Win32 API bindings via ctypes.

Centralizes all ctypes calls used by the zone manager so that no other
module needs to import ctypes directly.
"""

from __future__ import annotations

import ctypes
import ctypes.wintypes
from typing import Optional

# ============================================================================
# DLL handles
# ============================================================================
user32 = ctypes.windll.user32
kernel32 = ctypes.windll.kernel32
dwmapi = ctypes.windll.dwmapi

# Window properties carry pointer-sized values: declare the signatures
# so 64-bit handles are not truncated to int.
user32.GetPropW.argtypes = [ctypes.wintypes.HWND, ctypes.wintypes.LPCWSTR]
user32.GetPropW.restype = ctypes.wintypes.HANDLE
user32.SetPropW.argtypes = [
    ctypes.wintypes.HWND,
    ctypes.wintypes.LPCWSTR,
    ctypes.wintypes.HANDLE,
]
user32.SetPropW.restype = ctypes.wintypes.BOOL
user32.RemovePropW.argtypes = [ctypes.wintypes.HWND, ctypes.wintypes.LPCWSTR]
user32.RemovePropW.restype = ctypes.wintypes.HANDLE

# ============================================================================
# Constants
# ============================================================================

# ShowWindow commands
SW_RESTORE = 9

# DWM attributes
DWMWA_CLOAKED = 14
DWMWA_WINDOW_CORNER_PREFERENCE = 33

# DWM_WINDOW_CORNER_PREFERENCE values
DWMWCP_DEFAULT = 0
DWMWCP_DONOTROUND = 1

S_OK = 0

# WinEvent constants
WINEVENT_OUTOFCONTEXT = 0x0000
WINEVENT_SKIPOWNPROCESS = 0x0002
EVENT_SYSTEM_FOREGROUND = 0x0003
EVENT_OBJECT_DESTROY = 0x8001

# Object identifiers
OBJID_WINDOW = 0
CHILDID_SELF = 0

# Messages
WM_QUIT = 0x0012
WM_HOTKEY = 0x0312

# Modifier keys for RegisterHotKey
MOD_ALT = 0x0001
MOD_CONTROL = 0x0002
MOD_SHIFT = 0x0004
MOD_WIN = 0x0008
MOD_NOREPEAT = 0x4000

# Virtual key codes
VK_PRIOR = 0x21  # Page Up
VK_NEXT = 0x22   # Page Down
VK_0 = 0x30
VK_D = 0x44

# VK_1 .. VK_9 are consecutive after VK_0
VK_DIGITS: dict[int, int] = {n: VK_0 + n for n in range(10)}

# ============================================================================
# Callback types
# ============================================================================

# WinEventProc: void callback(HWINEVENTHOOK, DWORD, HWND, LONG, LONG, DWORD, DWORD)
WinEventProc = ctypes.WINFUNCTYPE(
    None,
    ctypes.wintypes.HANDLE,   # hWinEventHook
    ctypes.wintypes.DWORD,    # event
    ctypes.wintypes.HWND,     # hwnd
    ctypes.c_long,            # idObject
    ctypes.c_long,            # idChild
    ctypes.wintypes.DWORD,    # idEventThread
    ctypes.wintypes.DWORD,    # dwmsEventTime
)

# ============================================================================
# Window state
# ============================================================================

def is_window_valid(hwnd: int) -> bool:
    """True if the window handle still refers to an existing window."""
    return bool(user32.IsWindow(hwnd))


def is_window_iconic(hwnd: int) -> bool:
    """True if the window is minimized."""
    return bool(user32.IsIconic(hwnd))


def is_window_cloaked(hwnd: int) -> bool:
    """
    True if the window is cloaked by DWM.
    Windows that live on another virtual desktop are cloaked.
    """
    cloaked = ctypes.c_int(0)
    hr = dwmapi.DwmGetWindowAttribute(
        hwnd, DWMWA_CLOAKED, ctypes.byref(cloaked), ctypes.sizeof(cloaked)
    )
    return hr == S_OK and cloaked.value != 0


def set_window_corner_preference(hwnd: int, preference: int) -> bool:
    """Set DWMWA_WINDOW_CORNER_PREFERENCE (Windows 11 only)."""
    value = ctypes.c_int(preference)
    hr = dwmapi.DwmSetWindowAttribute(
        hwnd,
        DWMWA_WINDOW_CORNER_PREFERENCE,
        ctypes.byref(value),
        ctypes.sizeof(value),
    )
    return hr == S_OK


def get_foreground_window() -> int:
    """Return the HWND of the current foreground window (0 if none)."""
    return user32.GetForegroundWindow() or 0


def set_foreground_window(hwnd: int) -> bool:
    return bool(user32.SetForegroundWindow(hwnd))


def show_window(hwnd: int, cmd: int) -> bool:
    return bool(user32.ShowWindow(hwnd, cmd))


# ============================================================================
# Window properties
# ============================================================================

def get_prop(hwnd: int, name: str) -> Optional[int]:
    """Return the raw value of a window property, or None if unset."""
    return user32.GetPropW(hwnd, name)


def set_prop(hwnd: int, name: str, value: int) -> bool:
    return bool(user32.SetPropW(hwnd, name, value))


def remove_prop(hwnd: int, name: str) -> None:
    user32.RemovePropW(hwnd, name)


# ============================================================================
# WinEvent hook
# ============================================================================

def set_win_event_hook(
    event_min: int,
    event_max: int,
    callback: WinEventProc,  # type: ignore[type-arg]
    flags: int = WINEVENT_OUTOFCONTEXT | WINEVENT_SKIPOWNPROCESS,
) -> int:
    """
    Install a WinEvent hook.  Returns a hook handle (0 on failure).
    The *callback* must be stored (prevent GC) for the lifetime of the hook.
    """
    return user32.SetWinEventHook(event_min, event_max, 0, callback, 0, 0, flags)


def unhook_win_event(hook_handle: int) -> bool:
    return bool(user32.UnhookWinEvent(hook_handle))


# ============================================================================
# Message loop helpers
# ============================================================================

def get_message() -> tuple[bool, ctypes.wintypes.MSG]:
    """
    Blocking call that retrieves one message from the thread queue.
    Returns (got_message, msg).  got_message is False on WM_QUIT.
    """
    msg = ctypes.wintypes.MSG()
    result = user32.GetMessageW(ctypes.byref(msg), 0, 0, 0)
    return (result > 0, msg)


def translate_and_dispatch(msg: ctypes.wintypes.MSG) -> None:
    user32.TranslateMessage(ctypes.byref(msg))
    user32.DispatchMessageW(ctypes.byref(msg))


def post_quit_message(exit_code: int = 0) -> None:
    user32.PostQuitMessage(exit_code)


def post_thread_message(thread_id: int, msg: int, wparam: int = 0, lparam: int = 0) -> bool:
    """Post a message to a specific thread's message queue (cross-thread safe)."""
    return bool(user32.PostThreadMessageW(thread_id, msg, wparam, lparam))


def get_current_thread_id() -> int:
    return kernel32.GetCurrentThreadId()


# ============================================================================
# Global hotkey registration
# ============================================================================

def register_hotkey(hotkey_id: int, modifiers: int, vk: int) -> bool:
    """Register a system-wide hotkey delivered as WM_HOTKEY to this thread."""
    return bool(user32.RegisterHotKey(None, hotkey_id, modifiers, vk))


def unregister_hotkey(hotkey_id: int) -> bool:
    return bool(user32.UnregisterHotKey(None, hotkey_id))
