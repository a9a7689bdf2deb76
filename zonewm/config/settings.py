"""
zonewm.config.settings - Runtime settings.

A single immutable Settings object is built at startup (from the command
line) and handed explicitly to whoever needs it.  There is no settings
file: persisted configuration is owned by the host application.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass

log = logging.getLogger(__name__)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Behaviour switches for the zone window manager.

    Attributes:
        disable_round_corners: Ask DWM for square corners on every window
                               that gets snapped into a zone.
        window_switching:      Register the Win+PgUp / Win+PgDn hotkeys
                               that cycle through a zone's tabs.
        log_level:             Root logger level name.
    """

    disable_round_corners: bool = False
    window_switching: bool = True
    log_level: str = "DEBUG"

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> Settings:
        """Build settings from command-line arguments (sys.argv if None)."""
        parser = argparse.ArgumentParser(
            prog="zonewm",
            description="Zone tab tracking for snapped windows.",
        )
        parser.add_argument(
            "--disable-round-corners",
            action="store_true",
            help="remove rounded corners from windows snapped into zones",
        )
        parser.add_argument(
            "--no-window-switching",
            action="store_true",
            help="do not register the Win+PgUp/PgDn cycling hotkeys",
        )
        parser.add_argument(
            "--log-level",
            default="DEBUG",
            type=str.upper,
            choices=LOG_LEVELS,
            help="root log level (default: DEBUG)",
        )
        args = parser.parse_args(argv)

        settings = cls(
            disable_round_corners=args.disable_round_corners,
            window_switching=not args.no_window_switching,
            log_level=args.log_level,
        )
        log.debug("Settings: %s", settings)
        return settings
