# Project MUSE - tests/test_session.py
# (C) 2025 MUSE Corp. All rights reserved.

import pytest

from muse_booth.core.session import SessionState

from conftest import make_frame


def test_defaults():
    state = SessionState()
    assert state.mode == "original"
    assert state.background is None
    assert not state.segmenter_ready
    assert not state.running


def test_state_is_immutable():
    state = SessionState()
    with pytest.raises(AttributeError):
        state.mode = "remove"


def test_transitions_return_new_states():
    state = SessionState()
    removed = state.select_mode("remove")

    assert removed is not state
    assert state.mode == "original"
    assert removed.mode == "remove"


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        SessionState().select_mode("blur")
    with pytest.raises(ValueError):
        SessionState(mode="blur")


def test_select_background_switches_to_replace_and_drops_old_image():
    old = make_frame(2, 2)
    state = SessionState().select_background("a.png").with_background(old, "a.png")
    assert state.background is old

    switched = state.select_background("b.png")

    assert switched.mode == "replace"
    assert switched.background is None
    assert switched.background_path == "b.png"


def test_stale_background_load_is_ignored():
    state = SessionState().select_background("a.png").select_background("b.png")

    assert state.with_background(make_frame(2, 2), "a.png") is state
    assert state.background_failed("a.png") is state


def test_background_failure_reverts_to_original():
    state = SessionState().select_background("missing.png")

    reverted = state.background_failed("missing.png")

    assert reverted.mode == "original"
    assert reverted.background_path is None


def test_leaving_replace_clears_background():
    state = SessionState().select_background("a.png").with_background(make_frame(2, 2), "a.png")

    for mode in ("original", "remove"):
        other = state.select_mode(mode)
        assert other.background is None
        assert other.background_path is None


def test_load_after_leaving_replace_is_ignored():
    state = SessionState().select_background("a.png").select_mode("remove")

    assert state.with_background(make_frame(2, 2), "a.png").background is None


@pytest.mark.parametrize("mode,prefix", [
    ("original", "photo-booth"),
    ("remove", "no-background"),
    ("replace", "custom-background"),
])
def test_capture_prefix(mode, prefix):
    assert SessionState(mode=mode).capture_prefix == prefix


def test_needs_segmentation():
    assert not SessionState(mode="remove").needs_segmentation
    assert SessionState(mode="remove", segmenter_ready=True).needs_segmentation
    assert not SessionState(mode="original", segmenter_ready=True).needs_segmentation


def test_running_flag():
    state = SessionState().started()
    assert state.running
    assert not state.stopped().running


def test_with_segmenter_keeps_mode():
    state = SessionState().select_mode("remove").with_segmenter(True)
    assert state.mode == "remove"
    assert state.segmenter_ready
