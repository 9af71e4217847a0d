"""Tests for per-axis mapping and nearest-neighbour resampling."""
import numpy as np
import pytest

from ninepatch_preview.models.image_model import StretchAnchors
from ninepatch_preview.services.resample_service import NinePatchResampler, axis_map


def test_axis_map_single_anchor():
    """One anchor absorbs the whole difference: 4 / 1 + 1 = 5 copies"""
    mapping = axis_map([4], 4, 12)

    assert mapping.tolist() == [0, 1, 2, 3, 4, 4, 4, 4, 4, 5, 6, 7]


def test_axis_map_distributes_remainder_to_first_anchors():
    # diff 5 over 3 anchors: base 1, remainder 2 -> 3, 3, 2 copies
    mapping = axis_map([1, 3, 5], 5, 13)

    assert mapping.tolist() == [0, 1, 1, 1, 2, 3, 3, 3, 4, 5, 5, 6, 7]


@pytest.mark.parametrize(
    "anchors, source_extent, diff",
    [
        ([0], 1, 9),
        ([4], 8, 4),
        ([2, 3, 4], 10, 0),
        ([1, 3, 5], 8, 5),
        ([0, 9], 10, 7),
        (list(range(2, 30, 3)), 32, 101),
    ],
)
def test_axis_map_is_surjective_and_monotonic(anchors, source_extent, diff):
    target = source_extent + diff
    mapping = axis_map(anchors, diff, target)

    assert len(mapping) == target
    assert mapping[0] == 0
    assert np.all(np.diff(mapping) >= 0)
    assert set(mapping.tolist()) == set(range(source_extent))


@pytest.mark.parametrize("anchors, diff", [([3], 0), ([1, 3, 5], 5), ([0, 2, 4, 6], 13), ([5, 6], 1)])
def test_axis_map_fairness(anchors, diff):
    """Repeat counts over all anchors sum to diff + len(anchors)"""
    source_extent = 8
    mapping = axis_map(anchors, diff, source_extent + diff)
    counts = np.bincount(mapping, minlength=source_extent)

    anchor_counts = counts[anchors]
    assert anchor_counts.sum() == diff + len(anchors)
    base = diff // len(anchors) + 1
    assert int(np.sum(anchor_counts == base + 1)) == diff % len(anchors)
    # the extra copy goes to the leading anchors
    assert list(anchor_counts) == sorted(anchor_counts, reverse=True)

    others = np.delete(counts, anchors)
    assert np.all(others == 1)


def test_axis_map_identity_before_first_anchor():
    mapping = axis_map([5, 6], 10, 20)

    assert mapping[:5].tolist() == [0, 1, 2, 3, 4]


def test_axis_map_without_anchors():
    assert axis_map([], 0, 6).tolist() == [0, 1, 2, 3, 4, 5]
    with pytest.raises(ValueError):
        axis_map([], 3, 9)


@pytest.mark.parametrize("anchors", [[8], [-1], [3, 3], [4, 2]])
def test_axis_map_rejects_invalid_anchors(anchors):
    with pytest.raises(ValueError):
        axis_map(anchors, 2, 10)


def test_axis_map_rejects_negative_diff():
    with pytest.raises(ValueError):
        axis_map([1], -1, 4)


def _interior(w, h):
    ys, xs = np.mgrid[0:h, 0:w]
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[..., 0] = xs
    arr[..., 1] = ys
    arr[..., 3] = 255
    return arr


def test_resample_copies_mapped_pixels():
    interior = _interior(8, 8)
    anchors = StretchAnchors(top=(4,), left=(4,))

    out = NinePatchResampler().resample(interior, anchors, 12, 12)

    assert out.shape == (12, 12, 4)
    expected = axis_map([4], 4, 12)
    assert out[0, :, 0].tolist() == expected.tolist()
    assert out[:, 0, 1].tolist() == expected.tolist()
    assert np.all(out[..., 3] == 255)


def test_resample_same_size_returns_input_object():
    interior = _interior(5, 4)
    anchors = StretchAnchors(top=(2,), left=(1,))

    assert NinePatchResampler().resample(interior, anchors, 5, 4) is interior
    assert NinePatchResampler().resample(interior, anchors, 1, 1) is interior


def test_target_size_clamps_and_respects_rigid_axes():
    resampler = NinePatchResampler()
    both = StretchAnchors(top=(1,), left=(1,))
    rigid_x = StretchAnchors(top=(), left=(1,))

    assert resampler.target_size((8, 8), both, 3, 20) == (8, 20)
    assert resampler.target_size((8, 8), both, 30, 20) == (30, 20)
    assert resampler.target_size((8, 8), rigid_x, 30, 20) == (8, 20)


def test_resample_rigid_axis_keeps_source_extent():
    interior = _interior(6, 6)
    anchors = StretchAnchors(top=(), left=(2,))

    out = NinePatchResampler().resample(interior, anchors, 40, 9)

    assert out.shape == (9, 6, 4)
    assert out[0, :, 0].tolist() == list(range(6))
