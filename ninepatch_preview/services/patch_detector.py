"""Поиск отмеченных для растяжения строк и столбцов по рамке 9-patch.

Читаются только верхняя и левая стороны рамки; нижняя и правая
(подсказки отступов в формате Android) игнорируются.
"""
from __future__ import annotations

import logging

import numpy as np

from ninepatch_preview import config
from ninepatch_preview.models.image_model import StretchAnchors

logger = logging.getLogger(__name__)


class PatchRegionDetector:
    def __init__(self, marker_rgba: tuple[int, int, int, int] = config.MARKER_RGBA) -> None:
        self._marker = np.asarray(marker_rgba, dtype=np.uint8)

    def detect(self, pixels: np.ndarray) -> StretchAnchors:
        """Возвращает якоря растяжения для исходного изображения с рамкой.

        Args:
            pixels: Массив `H×W×4` (`uint8`, RGBA) вместе с рамкой 1 px.

        Returns:
            `StretchAnchors`, где `top` содержит столбцы, а `left` строки
            внутренней области, чей пиксель рамки точно равен маркеру.
        """
        b = config.BORDER_WIDTH
        top_border = pixels[0, b:-b]   # row 0, columns 1..W-2
        left_border = pixels[b:-b, 0]  # column 0, rows 1..H-2

        top = self._marked_offsets(top_border)
        left = self._marked_offsets(left_border)
        logger.debug("Detected %d top and %d left stretch anchors", len(top), len(left))
        return StretchAnchors(top=top, left=left)

    def _marked_offsets(self, border: np.ndarray) -> tuple[int, ...]:
        # offsets are already interior-relative because the corner pixel was sliced off
        hits = np.all(border == self._marker, axis=-1)
        return tuple(int(i) for i in np.flatnonzero(hits))
