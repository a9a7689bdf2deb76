"""
zonewm - Entry point.

Run with:  python -m zonewm [--disable-round-corners] [--no-window-switching]
"""

from __future__ import annotations

import logging
import sys

from zonewm.config.settings import Settings
from zonewm.config.hotkeys import register_all_hotkeys
from zonewm.core.commands import CommandDispatcher, build_default_commands
from zonewm.core.keybinds import HotkeyManager
from zonewm.core.manager import WindowManager, WMEvent
from zonewm.zones.assigned_windows import LayoutAssignedWindows
from zonewm.zones.win32_env import Win32WindowEnvironment, WindowPropertyStore


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            self.stream.write(
                msg.encode(enc, errors="replace").decode(enc) + self.terminator
            )
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(level: str) -> None:
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Per-command registration lines are noise at DEBUG
    logging.getLogger("zonewm.core.commands").setLevel(logging.INFO)


def create_destroy_handler(layout: LayoutAssignedWindows):
    """Dismiss snapped windows as soon as they are destroyed."""

    def on_destroyed(event: WMEvent, hwnd: int, wm: WindowManager) -> None:
        if layout.contains(hwnd):
            layout.dismiss(hwnd)

    return on_destroyed


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_args(argv)
    setup_logging(settings.log_level)

    env = Win32WindowEnvironment()
    layout = LayoutAssignedWindows(env, WindowPropertyStore(), settings)

    hk_manager = HotkeyManager()
    wm = WindowManager(hotkey_manager=hk_manager)
    wm.on(WMEvent.WINDOW_DESTROYED, create_destroy_handler(layout))

    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, layout, env, lambda: wm.foreground)
    hk_count = register_all_hotkeys(hk_manager, dispatcher, settings)

    print("=" * 60)
    print("  zonewm event loop running. Press Ctrl+C to stop.")
    print(f"  Hotkeys: {hk_count}")
    print(f"  Commands: {dispatcher.count}")
    print(f"  Round corners disabled: {settings.disable_round_corners}")
    print("")
    print(hk_manager.dump_state())
    print("=" * 60 + "\n")

    wm.start()

    print("\n" + layout.dump_state())


if __name__ == "__main__":
    main()
