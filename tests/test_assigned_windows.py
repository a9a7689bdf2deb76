from __future__ import annotations

import random

import pytest

from zonewm.config.settings import Settings
from zonewm.zones.assigned_windows import (
    AssignmentCorruptedError,
    LayoutAssignedWindows,
)

from conftest import assert_consistent

W1, W2, W3, W4 = 0x1001, 0x1002, 0x1003, 0x1004


# ----------------------------------------------------------------------
# Assign / dismiss
# ----------------------------------------------------------------------
def test_assign_then_dismiss_removes_empty_group(layout):
    layout.assign(W1, [0, 1])
    layout.assign(W2, [0, 1])
    assert layout.windows_in_zones((0, 1)) == [W1, W2]

    layout.dismiss(W1)
    assert layout.windows_in_zones((0, 1)) == [W2]

    layout.dismiss(W2)
    assert layout.windows_in_zones((0, 1)) == []
    assert layout.group_count == 0
    assert layout.snapped_windows() == {}


def test_reassign_moves_window_between_groups(layout):
    layout.assign(W1, [0])
    layout.assign(W2, [0])
    layout.assign(W1, [1, 2])

    assert layout.windows_in_zones((0,)) == [W2]
    assert layout.windows_in_zones((1, 2)) == [W1]
    assert layout.get_zone_index_set_from_window(W1) == (1, 2)
    assert_consistent(layout)


def test_zone_order_and_duplicates_are_part_of_the_key(layout):
    layout.assign(W1, [0, 1])
    layout.assign(W2, [1, 0])
    layout.assign(W3, [1, 1, 2])

    assert layout.group_count == 3
    assert layout.windows_in_zones((0, 1)) == [W1]
    assert layout.windows_in_zones((1, 0)) == [W2]
    assert layout.get_zone_index_set_from_window(W3) == (1, 1, 2)


def test_dismiss_untracked_only_clears_sort_key(layout, store):
    layout.assign(W1, [0])
    store.keys[W2] = 7

    layout.dismiss(W2)

    assert W2 not in store.keys
    assert layout.snapped_windows() == {W1: (0,)}


def test_dismiss_clears_sort_key_of_tracked_window(layout, store):
    layout.assign(W1, [0])
    assert store.keys[W1] == 0

    layout.dismiss(W1)
    assert W1 not in store.keys


def test_dismiss_missing_from_group_is_a_defect(layout):
    layout.assign(W1, [0])
    layout._windows_by_index_set[(0,)].remove(W1)

    with pytest.raises(AssignmentCorruptedError):
        layout.dismiss(W1)


def test_round_corners_disabled_only_when_configured(env, store):
    plain = LayoutAssignedWindows(env, store, Settings())
    plain.assign(W1, [0])
    assert env.square == []

    square = LayoutAssignedWindows(env, store, Settings(disable_round_corners=True))
    square.assign(W2, [0])
    assert env.square == [W2]


def test_default_settings_when_none_given(env, store):
    layout = LayoutAssignedWindows(env, store)
    layout.assign(W1, [0])
    assert env.square == []


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------
def test_is_zone_empty(layout):
    layout.assign(W1, [2])
    assert layout.is_zone_empty(2) is False
    assert layout.is_zone_empty(3) is True


def test_zone_covered_by_a_multi_zone_window_is_not_empty(layout):
    layout.assign(W1, [4, 5, 6])
    assert not layout.is_zone_empty(5)


def test_snapped_windows_is_a_copy(layout):
    layout.assign(W1, [0])
    snapshot = layout.snapped_windows()
    snapshot[W2] = (9,)
    del snapshot[W1]

    assert layout.snapped_windows() == {W1: (0,)}


def test_untracked_window_has_no_zones(layout):
    assert layout.get_zone_index_set_from_window(W1) == ()
    assert not layout.contains(W1)


def test_dump_state_lists_groups(layout):
    layout.assign(W1, [0, 1])
    text = layout.dump_state()
    assert "zones [0, 1]" in text
    assert f"{W1:#010x}" in text


# ----------------------------------------------------------------------
# Tab ordering
# ----------------------------------------------------------------------
def test_append_assigns_increasing_sort_keys(layout, store):
    for window in (W1, W2, W3):
        layout.assign(window, [0])

    assert layout.windows_in_zones([0]) == [W1, W2, W3]
    assert [store.keys[w] for w in (W1, W2, W3)] == [0, 1, 2]


def test_append_after_keyless_tab_restarts_at_zero(layout, store):
    layout.assign(W1, [0])
    layout.assign(W2, [0])
    del store.keys[W2]

    layout.assign(W3, [0])

    assert layout.windows_in_zones([0]) == [W1, W2, W3]
    assert store.keys[W3] == 0


def test_keyed_window_goes_before_first_greater_key(layout, store):
    for window in (W1, W2, W3):
        layout.assign(window, [0])          # keys 0, 1, 2
    store.keys[W4] = 1
    store.pinned.add(W4)

    layout.assign(W4, [0])

    assert layout.windows_in_zones([0]) == [W1, W2, W4, W3]
    assert store.keys[W4] == 1


def test_keyed_window_after_all_smaller_keys_is_appended(layout, store):
    layout.assign(W1, [0])
    layout.assign(W2, [0])
    store.keys[W3] = 10
    store.pinned.add(W3)

    layout.assign(W3, [0])
    assert layout.windows_in_zones([0]) == [W1, W2, W3]


def test_keyless_tabs_never_block_keyed_insertion(layout, store):
    for window in (W1, W2, W3):
        layout.assign(window, [0])
    del store.keys[W2]                      # W1=0, W2=None, W3=2
    store.keys[W4] = 1
    store.pinned.add(W4)

    layout.assign(W4, [0])
    assert layout.windows_in_zones([0]) == [W1, W2, W4, W3]


def test_reassigning_to_same_zones_moves_window_to_the_end(layout, store):
    for window in (W1, W2, W3):
        layout.assign(window, [0])

    layout.assign(W1, [0])
    assert layout.windows_in_zones([0]) == [W2, W3, W1]
    assert store.keys[W1] == 3

    layout.assign(W2, [0])
    assert layout.windows_in_zones([0]) == [W3, W1, W2]
    assert store.keys[W2] == 4


def test_key_from_previous_group_does_not_position_window(layout, store):
    layout.assign(W1, [0])                  # key 0 in group (0,)
    layout.assign(W2, [1])
    layout.assign(W3, [1])

    layout.assign(W1, [1])

    assert layout.windows_in_zones([1]) == [W2, W3, W1]
    assert [store.keys[w] for w in (W2, W3, W1)] == [0, 1, 2]
    assert_consistent(layout)


# ----------------------------------------------------------------------
# Cycling
# ----------------------------------------------------------------------
@pytest.fixture
def abc(layout):
    for window in (W1, W2, W3):
        layout.assign(window, [0, 1])
    return layout


def test_cycle_forward_wraps_around(abc, env):
    abc.cycle_windows(W3)
    assert env.switched == [W1]


def test_cycle_backward_wraps_around(abc, env):
    abc.cycle_windows(W1, reverse=True)
    assert env.switched == [W3]


def test_cycle_moves_to_neighbour(abc, env):
    abc.cycle_windows(W1)
    abc.cycle_windows(W3, reverse=True)
    assert env.switched == [W2, W2]


def test_cycle_untracked_window_is_noop(abc, env):
    abc.cycle_windows(W4)
    assert env.switched == []


def test_cycle_prunes_closed_windows(abc, env, store):
    env.dead.add(W2)

    abc.cycle_windows(W1)

    assert env.switched == [W3]
    assert abc.windows_in_zones((0, 1)) == [W1, W3]
    assert not abc.contains(W2)
    assert W2 not in store.keys
    assert_consistent(abc)


def test_cycle_falls_back_to_anchor_when_all_others_closed(abc, env):
    env.dead.update({W2, W3})

    abc.cycle_windows(W1)

    assert env.switched == [W1]
    assert abc.windows_in_zones((0, 1)) == [W1]


def test_cycle_terminates_when_whole_group_is_closed(abc, env):
    env.dead.update({W1, W2, W3})

    abc.cycle_windows(W1)

    assert env.switched == []
    assert abc.window_count == 0
    assert abc.group_count == 0


def test_cycle_stops_on_window_from_other_desktop(abc, env):
    env.other_desktop.add(W2)

    abc.cycle_windows(W1)

    assert env.switched == []
    assert abc.windows_in_zones((0, 1)) == [W1, W2, W3]


def test_cycle_single_window_activates_itself(layout, env):
    layout.assign(W1, [3])
    layout.cycle_windows(W1)
    assert env.switched == [W1]


def test_cycle_stays_inside_the_exact_zone_set(layout, env):
    layout.assign(W1, [0])
    layout.assign(W2, [0, 1])
    layout.assign(W3, [0])

    layout.cycle_windows(W1)
    assert env.switched == [W3]


# ----------------------------------------------------------------------
# Topmost window in a target zone
# ----------------------------------------------------------------------
@pytest.fixture
def three_groups(layout):
    wa, wb, wc = 0xA, 0xB, 0xC
    layout.assign(wa, [0])
    layout.assign(wb, [1])
    layout.assign(wc, [0, 1])
    return layout


def test_topmost_excludes_current_group(three_groups, env):
    env.z_order = [0xA, 0xC, 0xB]
    assert three_groups.get_topmost_window_from_target_zone(1, [0]) == 0xC

    env.z_order = [0xA, 0xB, 0xC]
    assert three_groups.get_topmost_window_from_target_zone(1, [0]) == 0xB


def test_topmost_never_returns_window_of_current_zones(three_groups, env):
    env.z_order = [0xA, 0xB, 0xC]
    assert three_groups.get_topmost_window_from_target_zone(0, [0]) == 0xC


def test_topmost_none_when_no_other_group_has_target(three_groups, env):
    env.z_order = [0xA, 0xB, 0xC]
    assert three_groups.get_topmost_window_from_target_zone(7, [0]) is None
    assert three_groups.get_topmost_window_from_target_zone(1, [0, 1]) == 0xB


def test_topmost_picks_frontmost_member_of_group(layout, env):
    layout.assign(W1, [2])
    layout.assign(W2, [2])
    env.z_order = [W2, W1]

    assert layout.get_topmost_window_from_target_zone(2, []) == W2


def test_topmost_skips_group_missing_from_z_order(three_groups, env):
    env.z_order = [0xC]
    assert three_groups.get_topmost_window_from_target_zone(1, [0]) == 0xC

    env.z_order = []
    assert three_groups.get_topmost_window_from_target_zone(1, [0]) is None


def test_topmost_aborts_on_empty_qualifying_group(three_groups, env, caplog):
    three_groups._windows_by_index_set[(0, 1)].clear()
    env.z_order = [0xB, 0xA]

    assert three_groups.get_topmost_window_from_target_zone(1, [0]) is None
    assert "Empty zone group [0, 1]" in caplog.text


# ----------------------------------------------------------------------
# Invariants under arbitrary operation sequences
# ----------------------------------------------------------------------
@pytest.mark.parametrize("seed", range(5))
def test_random_operations_keep_indexes_consistent(env, store, seed):
    rng = random.Random(seed)
    layout = LayoutAssignedWindows(env, store, Settings())
    windows = list(range(0x100, 0x10A))
    zone_sets = [(0,), (1,), (0, 1), (1, 0), (2, 2)]

    for _ in range(200):
        window = rng.choice(windows)
        op = rng.random()
        if op < 0.55:
            layout.assign(window, rng.choice(zone_sets))
        elif op < 0.85:
            layout.dismiss(window)
        else:
            env.dead = set(rng.sample(windows, 3))
            layout.cycle_windows(window, reverse=rng.random() < 0.5)
        assert_consistent(layout)
