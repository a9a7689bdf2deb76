"""
zonewm.core.commands - Named commands for hotkeys.

The hotkey table refers to actions by name ("cycle_zone_windows_next",
"snap_to_zone_3", ...) and the CommandDispatcher resolves the name to a
callable at runtime:

    dispatcher = CommandDispatcher()
    build_default_commands(dispatcher, layout, env, wm_foreground)
    dispatcher.execute("cycle_zone_windows_next")

Functions can also be registered with the decorator form:

    @dispatcher.command("dump_zones", category="debug")
    def dump_zones():
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from zonewm.zones.assigned_windows import LayoutAssignedWindows
from zonewm.zones.environment import WindowEnvironment

log = logging.getLogger(__name__)


# Commands take no arguments
CommandFn = Callable[[], None]

# Returns the HWND commands act on (0 when there is none)
ForegroundFn = Callable[[], int]

# Hotkeys are 1-based, zone indices 0-based
ZONE_HOTKEY_COUNT = 9


@dataclass(frozen=True, slots=True)
class Command:
    """Metadata for a registered command."""

    name: str
    fn: CommandFn
    description: str
    category: str


class CommandDispatcher:
    """Registry mapping command names to callables."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    @property
    def count(self) -> int:
        return len(self._commands)

    def register(
        self,
        name: str,
        fn: CommandFn,
        description: str = "",
        category: str = "general",
    ) -> None:
        """Register *fn* under *name*, replacing any previous command."""
        if name in self._commands:
            log.info("Command replaced: %s", name)
        self._commands[name] = Command(name, fn, description, category)
        log.debug("Command registered: %s (%s)", name, category)

    def execute(self, name: str) -> bool:
        """
        Run a command by name.

        Returns:
            True if the command exists and finished without raising.
        """
        cmd = self._commands.get(name)
        if cmd is None:
            log.warning("Unknown command: %s", name)
            return False

        log.debug("Executing command: %s", name)
        try:
            cmd.fn()
        except Exception:
            log.exception("Error executing command: %s", name)
            return False
        return True

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def has(self, name: str) -> bool:
        return name in self._commands

    def command(
        self,
        name: str,
        description: str = "",
        category: str = "general",
    ) -> Callable[[CommandFn], CommandFn]:
        """Decorator form of register()."""

        def decorator(fn: CommandFn) -> CommandFn:
            self.register(name, fn, description=description, category=category)
            return fn

        return decorator

    def list_commands(self) -> list[Command]:
        """Commands sorted by name."""
        return sorted(self._commands.values(), key=lambda c: c.name)

    def dump_state(self) -> str:
        lines = [f"=== CommandDispatcher: {len(self._commands)} commands ==="]
        for cmd in self.list_commands():
            desc = f"  {cmd.description}" if cmd.description else ""
            lines.append(f"  [{cmd.category}] {cmd.name}{desc}")
        return "\n".join(lines)


def build_default_commands(
    dispatcher: CommandDispatcher,
    layout: LayoutAssignedWindows,
    env: WindowEnvironment,
    get_foreground: ForegroundFn,
) -> None:
    """
    Register the zone commands.  Every command acts on the window
    returned by *get_foreground* and does nothing if that is 0.
    """

    # -- Tab cycling ---------------------------------------------------
    @dispatcher.command(
        "cycle_zone_windows_next",
        description="Activate the next window sharing the focused window's zones",
        category="cycle",
    )
    def cycle_next() -> None:
        hwnd = get_foreground()
        if hwnd:
            layout.cycle_windows(hwnd, reverse=False)

    @dispatcher.command(
        "cycle_zone_windows_prev",
        description="Activate the previous window sharing the focused window's zones",
        category="cycle",
    )
    def cycle_prev() -> None:
        hwnd = get_foreground()
        if hwnd:
            layout.cycle_windows(hwnd, reverse=True)

    # -- Snap / unsnap -------------------------------------------------
    def _make_snap(zone: int) -> CommandFn:
        def _snap() -> None:
            hwnd = get_foreground()
            if hwnd:
                layout.assign(hwnd, (zone,))
        return _snap

    def _make_focus(zone: int) -> CommandFn:
        def _focus() -> None:
            hwnd = get_foreground()
            if not hwnd:
                return
            current = layout.get_zone_index_set_from_window(hwnd)
            target = layout.get_topmost_window_from_target_zone(zone, current)
            if target is None:
                log.debug("focus_zone: nothing else in zone %d", zone)
                return
            env.switch_to_window(target)
        return _focus

    for n in range(1, ZONE_HOTKEY_COUNT + 1):
        dispatcher.register(
            f"snap_to_zone_{n}",
            _make_snap(n - 1),
            description=f"Snap focused window into zone {n}",
            category="snap",
        )
        dispatcher.register(
            f"focus_zone_{n}",
            _make_focus(n - 1),
            description=f"Focus the topmost other window in zone {n}",
            category="focus",
        )

    @dispatcher.command(
        "unsnap_window",
        description="Remove focused window from its zones",
        category="snap",
    )
    def unsnap_window() -> None:
        hwnd = get_foreground()
        if not hwnd:
            return
        layout.dismiss(hwnd)
        env.reset_round_corners(hwnd)

    # -- Debug ---------------------------------------------------------
    @dispatcher.command("dump_zones", description="Log zone groups", category="debug")
    def dump_zones() -> None:
        log.info("\n%s", layout.dump_state())

    log.info("Default commands registered: %d", dispatcher.count)
