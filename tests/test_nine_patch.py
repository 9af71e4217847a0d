"""End-to-end tests for NinePatch: loading, stretching, caching and disposal."""
import numpy as np
import pytest
from PIL import Image

from ninepatch_preview.services.image_service import ImageDecodeError, ImageService
from ninepatch_preview.services.nine_patch import NinePatch
from ninepatch_preview.services.resample_service import NinePatchResampler, axis_map


class CountingResampler(NinePatchResampler):
    def __init__(self):
        self.calls = 0

    def resample(self, interior, anchors, width, height):
        self.calls += 1
        return super().resample(interior, anchors, width, height)


def test_scenario_single_anchor_stretch(ninepatch_array):
    """10x10 source with anchors at 4: column/row 4 is repeated 5 times at 12x12"""
    with NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,))) as patch:
        assert patch.size == (10, 10)
        assert patch.interior_size == (8, 8)

        out = np.asarray(patch.image_size_of(12, 12))

    expected = [0, 1, 2, 3, 4, 4, 4, 4, 4, 5, 6, 7]
    assert out.shape == (12, 12, 4)
    assert out[0, :, 0].tolist() == expected
    assert out[:, 0, 1].tolist() == expected


def test_same_size_returns_original_unchanged(ninepatch_array):
    source = ninepatch_array(6, 5, top=(2,), left=(1,))
    with NinePatch.from_array(source) as patch:
        result = patch.image_size_of(6, 5)

        assert result is patch.original_image
        assert result.tobytes() == source[1:-1, 1:-1].tobytes()
        assert patch.cached_sizes == ()


def test_narrow_request_clamps_width_and_stretches_height(ninepatch_array):
    with NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,))) as patch:
        out = patch.image_size_of(3, 15)

        assert out.size == (8, 15)
        arr = np.asarray(out)
        assert arr[:, 0, 1].tolist() == axis_map([4], 7, 15).tolist()
        assert arr[0, :, 0].tolist() == list(range(8))


@pytest.mark.parametrize("w, h", [(8, 8), (9, 30), (64, 8), (100, 100)])
def test_requested_size_is_honoured(ninepatch_array, w, h):
    with NinePatch.from_array(ninepatch_array(8, 8, top=(1, 6), left=(3,))) as patch:
        assert patch.image_size_of(w, h).size == (w, h)


def test_repeated_request_hits_cache(ninepatch_array):
    resampler = CountingResampler()
    with NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,)), resampler=resampler) as patch:
        first = patch.image_size_of(20, 11)
        first_bytes = first.tobytes()
        second = patch.image_size_of(20, 11)

        assert resampler.calls == 1
        assert second is first
        assert second.tobytes() == first_bytes
        assert patch.cached_sizes == ((20, 11),)


def test_clamped_requests_share_a_cache_entry(ninepatch_array):
    resampler = CountingResampler()
    with NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,)), resampler=resampler) as patch:
        patch.image_size_of(1, 20)
        patch.image_size_of(5, 20)

        assert resampler.calls == 1
        assert patch.cached_sizes == ((8, 20),)


def test_rigid_axis_without_markers(ninepatch_array, caplog):
    with caplog.at_level("WARNING"):
        patch = NinePatch.from_array(ninepatch_array(6, 6, top=(), left=(2,)))
    assert "width is fixed" in caplog.text

    with patch:
        assert patch.image_size_of(40, 10).size == (6, 10)
        # no stretch capacity on either axis requested -> the original
        assert patch.image_size_of(40, 6) is patch.original_image


def test_clear_cache_rerenders(ninepatch_array):
    resampler = CountingResampler()
    with NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,)), resampler=resampler) as patch:
        before = patch.image_size_of(16, 16).tobytes()
        patch.clear_cache()
        assert patch.cached_sizes == ()

        after = patch.image_size_of(16, 16).tobytes()
        assert resampler.calls == 2
        assert after == before


def test_close_is_idempotent_and_blocks_use(ninepatch_array):
    patch = NinePatch.from_array(ninepatch_array(8, 8, top=(4,), left=(4,)))
    patch.image_size_of(12, 12)

    patch.close()
    patch.close()

    assert patch.closed
    assert patch.cached_sizes == ()
    with pytest.raises(RuntimeError):
        patch.image_size_of(12, 12)
    with pytest.raises(RuntimeError):
        _ = patch.original_image
    with pytest.raises(RuntimeError):
        _ = patch.anchors


def test_context_manager_releases_on_error(ninepatch_array):
    with pytest.raises(KeyError):
        with NinePatch.from_array(ninepatch_array(4, 4, top=(1,), left=(1,))) as patch:
            patch.image_size_of(10, 10)
            raise KeyError("boom")
    assert patch.closed


@pytest.mark.parametrize("w, h, exc", [(-1, 10, ValueError), (10, -5, ValueError), (2.5, 10, TypeError), (True, 3, TypeError)])
def test_invalid_dimensions(ninepatch_array, w, h, exc):
    with NinePatch.from_array(ninepatch_array(4, 4, top=(1,), left=(1,))) as patch:
        with pytest.raises(exc):
            patch.image_size_of(w, h)


def test_from_file(ninepatch_file):
    path = ninepatch_file(8, 6, top=(3, 4), left=(2,))
    with NinePatch.from_file(path) as patch:
        assert patch.anchors.top == (3, 4)
        assert patch.anchors.left == (2,)
        assert patch.image_data.path.name == "sample.9.png"
        assert patch.image_data.size_bytes > 0
        assert patch.image_size_of(10, 10).size == (10, 10)


def test_from_image_keeps_callers_handle_open(ninepatch_array):
    source = Image.fromarray(ninepatch_array(5, 5, top=(2,), left=(2,)))
    with NinePatch.from_image(source) as patch:
        assert patch.image_size_of(7, 7).size == (7, 7)
    # still usable after the patch released its own copy
    assert source.getpixel((3, 0)) == (0, 0, 0, 255)


def test_from_image_converts_mode(ninepatch_array):
    rgb = Image.fromarray(ninepatch_array(5, 5)).convert("RGB")
    with NinePatch.from_image(rgb) as patch:
        assert patch.image_data.mode == "RGBA"
        # RGB black becomes opaque black, so every border pixel is a marker
        assert patch.anchors.top == (0, 1, 2, 3, 4)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        NinePatch.from_file(tmp_path / "absent.9.png")


def test_undecodable_file_raises(tmp_path):
    path = tmp_path / "broken.9.png"
    path.write_bytes(b"definitely not a png")

    with pytest.raises(ImageDecodeError):
        NinePatch.from_file(path)


@pytest.mark.parametrize(
    "array",
    [
        np.zeros((5, 5, 3), dtype=np.uint8),
        np.zeros((5, 5, 4), dtype=np.float32),
        np.zeros((2, 5, 4), dtype=np.uint8),
    ],
)
def test_invalid_arrays_raise(array):
    with pytest.raises(ImageDecodeError):
        ImageService().from_array(array)


def test_decode_error_is_a_value_error():
    assert issubclass(ImageDecodeError, ValueError)
