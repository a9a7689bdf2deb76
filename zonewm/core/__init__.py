"""
zonewm.core - Event loop, hotkeys and commands.

This package contains:
    - win32    : Low-level Win32 API bindings via ctypes
    - manager  : WindowManager - the WinEvent / message loop
    - keybinds : Global hotkey registration and dispatch
    - commands : CommandDispatcher and the zone commands

win32, manager and keybinds load user32 at import time and are only
imported on Windows.
"""

from zonewm.core.commands import Command, CommandDispatcher, build_default_commands

__all__ = ["Command", "CommandDispatcher", "build_default_commands"]
