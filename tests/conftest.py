from __future__ import annotations

import pytest

from zonewm.config.settings import Settings
from zonewm.zones.assigned_windows import LayoutAssignedWindows


class FakeStore:
    """In-memory tab sort key store."""

    def __init__(self) -> None:
        self.keys: dict[int, int] = {}
        self.cleared: list[int] = []
        # Windows whose key another process keeps writing back.
        self.pinned: set[int] = set()

    def get_tab_sort_key(self, window):
        return self.keys.get(window)

    def set_tab_sort_key(self, window, key):
        if key is None:
            self.cleared.append(window)
            if window in self.pinned:
                return
            self.keys.pop(window, None)
        else:
            self.keys[window] = key


class FakeEnv:
    """Scriptable window environment; records every action."""

    def __init__(self) -> None:
        self.dead: set[int] = set()
        self.other_desktop: set[int] = set()
        self.z_order: list[int] = []
        self.switched: list[int] = []
        self.square: list[int] = []
        self.rounded: list[int] = []

    def is_window_live(self, window):
        return window not in self.dead

    def is_on_current_desktop(self, window):
        return window not in self.other_desktop

    def switch_to_window(self, window):
        self.switched.append(window)

    def disable_round_corners(self, window):
        self.square.append(window)

    def reset_round_corners(self, window):
        self.rounded.append(window)

    def find_topmost_window(self, windows):
        for depth, hwnd in enumerate(self.z_order):
            if hwnd in windows:
                return hwnd, depth
        return None, 0


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def env() -> FakeEnv:
    return FakeEnv()


@pytest.fixture
def layout(env, store) -> LayoutAssignedWindows:
    return LayoutAssignedWindows(env, store, Settings())


def assert_consistent(layout: LayoutAssignedWindows) -> None:
    """Both indexes describe the same assignment and no group is empty."""
    snapped = layout.snapped_windows()
    groups = {zones for zones in snapped.values()}
    assert layout.group_count == len(groups)
    seen: list[int] = []
    for zones in groups:
        members = layout.windows_in_zones(zones)
        assert members, f"empty group {zones}"
        for window in members:
            assert snapped[window] == zones
        seen.extend(members)
    assert sorted(seen) == sorted(snapped)
    assert len(seen) == len(set(seen))
