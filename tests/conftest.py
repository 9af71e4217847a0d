"""Shared fixtures: synthetic 9-patch bitmaps built in memory."""
from typing import Callable, Sequence

import numpy as np
import pytest
from PIL import Image

MARKER = (0, 0, 0, 255)


def build_ninepatch(
    interior_w: int,
    interior_h: int,
    top: Sequence[int] = (),
    left: Sequence[int] = (),
) -> np.ndarray:
    """Bordered RGBA array whose interior pixel (x, y) is (x, y, 128, 255)."""
    arr = np.zeros((interior_h + 2, interior_w + 2, 4), dtype=np.uint8)
    ys, xs = np.mgrid[0:interior_h, 0:interior_w]
    arr[1:-1, 1:-1, 0] = xs
    arr[1:-1, 1:-1, 1] = ys
    arr[1:-1, 1:-1, 2] = 128
    arr[1:-1, 1:-1, 3] = 255
    for x in top:
        arr[0, x + 1] = MARKER
    for y in left:
        arr[y + 1, 0] = MARKER
    return arr


@pytest.fixture
def ninepatch_array() -> Callable[..., np.ndarray]:
    return build_ninepatch


@pytest.fixture
def ninepatch_file(tmp_path) -> Callable[..., str]:
    """Writes a synthetic 9-patch PNG and returns its path."""
    def _write(interior_w: int, interior_h: int, top=(), left=(), name: str = "sample.9.png") -> str:
        path = tmp_path / name
        Image.fromarray(build_ninepatch(interior_w, interior_h, top, left)).save(path)
        return str(path)
    return _write
