"""
zonewm.zones.assigned_windows - Windows snapped into the zones of a layout.

LayoutAssignedWindows keeps two indexes that must always agree:

    window -> zone index set     (which zones a window occupies)
    zone index set -> [windows]  (tab order of the windows sharing them)

Both are private and only assign() / dismiss() mutate them, so one can
never be updated without the other.  A window appears in exactly one
group, the group keyed by its own zone index set, and a group that
becomes empty is deleted on the spot.

Zone index sets are tuples: (0, 1) and (1, 0) are different groups.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from zonewm.config.settings import Settings
from zonewm.zones.environment import (
    TabSortKeyStore,
    WindowEnvironment,
    WindowId,
    ZoneIndex,
    ZoneIndexSet,
)

log = logging.getLogger(__name__)


class AssignmentCorruptedError(AssertionError):
    """The two indexes disagree.  This is a bug, not a runtime condition."""


class LayoutAssignedWindows:
    """
    Tracks which windows are snapped to which zones of one layout, and
    the tab order of the windows that share the same zones.

    Usage:
        assigned = LayoutAssignedWindows(env, store, settings)
        assigned.assign(hwnd, (0, 1))
        assigned.cycle_windows(hwnd)
        assigned.dismiss(hwnd)
    """

    def __init__(
        self,
        env: WindowEnvironment,
        store: TabSortKeyStore,
        settings: Settings | None = None,
    ) -> None:
        self._env = env
        self._store = store
        self._settings = settings if settings is not None else Settings()

        self._window_index_set: dict[WindowId, ZoneIndexSet] = {}
        self._windows_by_index_set: dict[ZoneIndexSet, list[WindowId]] = {}

    # ------------------------------------------------------------------
    # Assignment / dismissal
    # ------------------------------------------------------------------
    def assign(self, window: WindowId, zones: Iterable[ZoneIndex]) -> None:
        """
        Snap *window* into *zones*, replacing any previous assignment.

        The window is placed in the tab order of its new group using the
        sort key persisted for it, or appended if it has none.
        """
        self.dismiss(window)

        index_set: ZoneIndexSet = tuple(zones)
        self._window_index_set[window] = index_set

        if self._settings.disable_round_corners:
            self._env.disable_round_corners(window)

        # dismiss() dropped our own key; one still present was written by
        # another owner of the window property.
        sort_key = self._store.get_tab_sort_key(window)
        self._insert_window_into_zone(window, sort_key, index_set)

        log.info("SNAP    %#010x -> zones %s", window, list(index_set))

    def dismiss(self, window: WindowId) -> None:
        """
        Forget *window*.  Untracked windows are a no-op, except that the
        persisted sort key is always cleared.
        """
        index_set = self._window_index_set.get(window)
        if index_set is not None:
            windows = self._windows_by_index_set.get(index_set)
            if windows is None or window not in windows:
                log.error(
                    "Assignment index corrupted: %#010x claims zones %s "
                    "but is not in that group (%s)",
                    window,
                    list(index_set),
                    windows,
                )
                raise AssignmentCorruptedError(
                    f"window {window:#010x} missing from group {index_set}"
                )

            windows.remove(window)
            if not windows:
                del self._windows_by_index_set[index_set]
            del self._window_index_set[window]

            log.info("UNSNAP  %#010x <- zones %s", window, list(index_set))

        self._store.set_tab_sort_key(window, None)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def snapped_windows(self) -> dict[WindowId, ZoneIndexSet]:
        """Copy of the window -> zone index set map."""
        return dict(self._window_index_set)

    def get_zone_index_set_from_window(self, window: WindowId) -> ZoneIndexSet:
        """Zones of *window*, or () if it is not snapped."""
        return self._window_index_set.get(window, ())

    def is_zone_empty(self, zone_index: ZoneIndex) -> bool:
        for zones in self._window_index_set.values():
            if zone_index in zones:
                return False
        return True

    def windows_in_zones(self, zones: Iterable[ZoneIndex]) -> list[WindowId]:
        """Tab order of the group keyed by *zones* (copy, [] if none)."""
        return list(self._windows_by_index_set.get(tuple(zones), ()))

    def contains(self, window: WindowId) -> bool:
        return window in self._window_index_set

    @property
    def window_count(self) -> int:
        return len(self._window_index_set)

    @property
    def group_count(self) -> int:
        return len(self._windows_by_index_set)

    # ------------------------------------------------------------------
    # Tab cycling
    # ------------------------------------------------------------------
    def cycle_windows(self, window: WindowId, reverse: bool = False) -> None:
        """
        Activate the next (or previous) tab of the group *window* is in.

        Closed windows met along the way are dismissed and skipped.  A
        live candidate on another virtual desktop ends the cycle without
        activating anything.
        """
        if window not in self._window_index_set:
            return
        index_set = self._window_index_set[window]

        # Every pass either stops or dismisses one member of the group.
        attempts = len(self._windows_by_index_set.get(index_set, ()))
        for _ in range(attempts):
            candidate = self._get_next_zone_window(index_set, window, reverse)
            if candidate is None:
                return

            if not self._env.is_window_live(candidate):
                log.debug("PRUNE   %#010x (window no longer exists)", candidate)
                self.dismiss(candidate)
                continue

            if self._env.is_on_current_desktop(candidate):
                log.debug(
                    "CYCLE   %#010x -> %#010x (%s)",
                    window,
                    candidate,
                    "prev" if reverse else "next",
                )
                self._env.switch_to_window(candidate)
            else:
                log.debug(
                    "CYCLE   %#010x -> %#010x is on another desktop, skipped",
                    window,
                    candidate,
                )
            return

    def _get_next_zone_window(
        self, index_set: ZoneIndexSet, current: WindowId, reverse: bool
    ) -> Optional[WindowId]:
        """Neighbour of *current* in the group, wrapping around."""
        windows = self._windows_by_index_set.get(index_set)
        if not windows:
            return None

        try:
            pos = windows.index(current)
        except ValueError:
            # The anchor itself was pruned: start from the matching end.
            return windows[-1] if reverse else windows[0]

        if reverse:
            return windows[pos - 1]
        return windows[(pos + 1) % len(windows)]

    # ------------------------------------------------------------------
    # Cross-group z-order
    # ------------------------------------------------------------------
    def get_topmost_window_from_target_zone(
        self,
        target_zone: ZoneIndex,
        current_window_zones: Iterable[ZoneIndex],
    ) -> Optional[WindowId]:
        """
        Frontmost window among the groups, other than
        *current_window_zones*, whose zones include *target_zone*.

        Groups are examined in sorted key order, so on equal depth the
        lexicographically smallest zone index set wins.
        """
        current: ZoneIndexSet = tuple(current_window_zones)
        target_index_sets = sorted(
            index_set
            for index_set in self._windows_by_index_set
            if index_set != current and target_zone in index_set
        )
        if not target_index_sets:
            return None

        topmost: Optional[WindowId] = None
        lowest_z_order: Optional[int] = None
        for index_set in target_index_sets:
            windows = self._windows_by_index_set[index_set]
            if not windows:
                log.error("Empty zone group %s in registry", list(index_set))
                return None

            window, z_order = self._env.find_topmost_window(list(windows))
            if window is None:
                log.warning(
                    "No window of zones %s found in the z-order",
                    list(index_set),
                )
                continue

            if lowest_z_order is None or z_order < lowest_z_order:
                lowest_z_order = z_order
                topmost = window

        return topmost

    # ------------------------------------------------------------------
    # Tab ordering
    # ------------------------------------------------------------------
    def _insert_window_into_zone(
        self,
        window: WindowId,
        sort_key: Optional[int],
        index_set: ZoneIndexSet,
    ) -> None:
        """
        Insert *window* into the tab order of *index_set* and persist the
        sort key it ended up with.

        With a key, the window goes right before the first tab whose own
        key is strictly greater (tabs without a key never qualify).
        Without one, it is appended and gets the last tab's key + 1, or 0.
        """
        windows = self._windows_by_index_set.setdefault(index_set, [])

        if sort_key is not None:
            position = len(windows)
            for i, tab in enumerate(windows):
                tab_key = self._store.get_tab_sort_key(tab)
                if tab_key is not None and tab_key > sort_key:
                    position = i
                    break
            windows.insert(position, window)
        else:
            sort_key = 0
            if windows:
                prev_key = self._store.get_tab_sort_key(windows[-1])
                if prev_key is not None:
                    sort_key = prev_key + 1
            windows.append(window)

        self._store.set_tab_sort_key(window, sort_key)

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        """Return a formatted string of all zone groups and their tabs."""
        lines = [
            f"=== LayoutAssignedWindows: {len(self._window_index_set)} windows "
            f"in {len(self._windows_by_index_set)} groups ===",
        ]
        for index_set in sorted(self._windows_by_index_set):
            lines.append(f"  zones {list(index_set)}:")
            for i, window in enumerate(self._windows_by_index_set[index_set]):
                key = self._store.get_tab_sort_key(window)
                lines.append(f"    [tab-{i}] {window:#010x}  key={key}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LayoutAssignedWindows(windows={len(self._window_index_set)}, "
            f"groups={len(self._windows_by_index_set)})"
        )
