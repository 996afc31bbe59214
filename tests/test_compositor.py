# Project MUSE - tests/test_compositor.py
# (C) 2025 MUSE Corp. All rights reserved.

import numpy as np
import pytest

from muse_booth.graphics.compositor import (
    composite, smoothstep, person_alpha,
    MODE_ORIGINAL, MODE_REMOVE, MODE_REPLACE,
)

from conftest import make_frame, make_mask


# ---------------------------------------------------------------------------
# smoothstep
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("value", [-1.0, 0.0, 0.1, 0.3])
def test_smoothstep_is_zero_at_or_below_low(value):
    assert smoothstep(value, 0.3, 0.7) == 0.0


@pytest.mark.parametrize("value", [0.7, 0.8, 1.0, 2.0])
def test_smoothstep_is_one_at_or_above_high(value):
    assert smoothstep(value, 0.3, 0.7) == 1.0


def test_smoothstep_midpoint_is_exactly_half():
    assert smoothstep(0.5, 0.3, 0.7) == 0.5
    assert smoothstep(np.array([0.5]), 0.3, 0.7)[0] == 0.5


def test_smoothstep_is_symmetric_about_midpoint():
    for d in (0.05, 0.1, 0.15):
        assert smoothstep(0.5 - d) + smoothstep(0.5 + d) == pytest.approx(1.0, abs=1e-12)


def test_smoothstep_is_monotonic_inside_band():
    values = smoothstep(np.linspace(0.3, 0.7, 101), 0.3, 0.7)
    assert np.all(np.diff(values) >= 0.0)
    assert values[0] == 0.0
    assert values[-1] == 1.0


def test_smoothstep_rejects_empty_band():
    with pytest.raises(ValueError):
        smoothstep(0.5, 0.7, 0.7)


def test_person_alpha_reads_mask_alpha_channel():
    mask = make_mask(2, 1)
    mask[0, 0, 3] = 0
    mask[0, 1, 3] = 255
    mask[:, :, :3] = 255  # RGB of the mask is ignored

    pa = person_alpha(mask)

    assert pa.tolist() == [[0.0, 1.0]]


# ---------------------------------------------------------------------------
# composite
# ---------------------------------------------------------------------------
def test_original_mode_returns_video_unchanged(rng):
    video = rng.integers(0, 256, size=(4, 5, 4), dtype=np.uint8)
    background = make_frame(5, 4, (1, 2, 3, 255))
    mask = make_mask(5, 4, alpha=255)

    out = composite(MODE_ORIGINAL, mask, video, background)

    assert np.array_equal(out, video)
    assert out is not video


def test_remove_with_full_foreground_keeps_video_opaque(rng):
    video = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    video[:, :, 3] = 255

    out = composite(MODE_REMOVE, make_mask(4, 4, alpha=255), video)

    assert np.array_equal(out[:, :, :3], video[:, :, :3])
    assert np.all(out[:, :, 3] == 255)


def test_remove_with_full_background_is_transparent():
    out = composite(MODE_REMOVE, make_mask(3, 3, alpha=0), make_frame(3, 3))

    assert np.all(out == 0)


def test_replace_with_full_background_equals_background(rng):
    background = rng.integers(0, 256, size=(4, 6, 4), dtype=np.uint8)
    background[:, :, 3] = 255

    out = composite(MODE_REPLACE, make_mask(6, 4, alpha=0), make_frame(6, 4), background)

    assert np.array_equal(out, background)


def test_replace_blends_inside_the_soft_band():
    # 153 / 255 = 0.6 -> t = 0.75 -> person alpha 0.84375
    mask = make_mask(1, 1, alpha=153)
    video = make_frame(1, 1, (200, 100, 0, 255))
    background = make_frame(1, 1, (100, 200, 255, 255))

    out = composite(MODE_REPLACE, mask, video, background)

    # 200*0.84375 + 100*0.15625 = 184.375 ; 100*0.84375 + 200*0.15625 = 115.625
    # 0*0.84375 + 255*0.15625 = 39.84375
    assert out[0, 0].tolist() == [184, 116, 40, 255]


def test_remove_alpha_follows_soft_ramp():
    mask = make_mask(1, 1, alpha=153)
    video = make_frame(1, 1, (10, 20, 30, 255))

    out = composite(MODE_REMOVE, mask, video)

    # round(255 * 0.84375) = round(215.15625)
    assert out[0, 0].tolist() == [10, 20, 30, 215]


def test_replace_without_background_falls_back_to_video():
    video = make_frame(3, 3, (90, 80, 70, 255))

    out = composite(MODE_REPLACE, make_mask(3, 3, alpha=255), video, None)

    assert np.array_equal(out, video)


def test_replace_without_background_pure_background_is_opaque_black():
    out = composite(MODE_REPLACE, make_mask(2, 2, alpha=0), make_frame(2, 2), None)

    assert np.all(out[:, :, :3] == 0)
    assert np.all(out[:, :, 3] == 255)


def test_unknown_mode_uses_fallback_rule():
    mask = make_mask(2, 1)
    mask[0, 1, 3] = 255
    video = make_frame(2, 1, (5, 6, 7, 255))

    out = composite("sepia", mask, video)

    assert out[0, 0].tolist() == [0, 0, 0, 255]
    assert out[0, 1].tolist() == [5, 6, 7, 255]


def test_mixed_mask_regions_in_one_frame():
    mask = make_mask(3, 1)
    mask[0, :, 3] = [0, 128, 255]
    video = make_frame(3, 1, (50, 60, 70, 255))
    background = make_frame(3, 1, (1, 2, 3, 255))

    out = composite(MODE_REPLACE, mask, video, background)

    assert out[0, 0].tolist() == [1, 2, 3, 255]
    assert out[0, 2].tolist() == [50, 60, 70, 255]
    assert out[0, 1, 3] == 255
    assert np.all(out[0, 1, :3] >= [1, 2, 3])
    assert np.all(out[0, 1, :3] <= [50, 60, 70])


def test_inputs_are_not_mutated(rng):
    video = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    mask = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    background = rng.integers(0, 256, size=(4, 4, 4), dtype=np.uint8)
    snapshot = (video.copy(), mask.copy(), background.copy())

    composite(MODE_REPLACE, mask, video, background)

    assert np.array_equal(video, snapshot[0])
    assert np.array_equal(mask, snapshot[1])
    assert np.array_equal(background, snapshot[2])


def test_mismatched_sizes_are_rejected():
    with pytest.raises(ValueError):
        composite(MODE_REMOVE, make_mask(4, 4), make_frame(5, 4))
    with pytest.raises(ValueError):
        composite(MODE_REPLACE, make_mask(4, 4), make_frame(4, 4), make_frame(4, 3))


def test_output_is_rgba_uint8(rng):
    video = rng.integers(0, 256, size=(3, 2, 4), dtype=np.uint8)
    mask = rng.integers(0, 256, size=(3, 2, 4), dtype=np.uint8)

    for mode in (MODE_REMOVE, MODE_REPLACE):
        out = composite(mode, mask, video, video)
        assert out.dtype == np.uint8
        assert out.shape == (3, 2, 4)
