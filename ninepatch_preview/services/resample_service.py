"""Растяжение внутренней области 9-patch по таблицам соответствия координат.

Принципы:
- SRP: только вычисление таблиц `axis_map` и копирование пикселей, без загрузки и кэша.
- Чистый код: уменьшения нет, ось без меток не растягивается.
"""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np

from ninepatch_preview.models.image_model import StretchAnchors

logger = logging.getLogger(__name__)


def axis_map(anchors: Sequence[int], diff: int, target_extent: int) -> np.ndarray:
    """
    Таблица соответствия по одной оси: для каждой координаты результата
    возвращает координату исходника, из которой берётся пиксель.

    Каждый якорь повторяется `diff // n + 1` раз, первые `diff % n` якорей
    получают ещё по одному повтору. Остальные координаты копируются 1:1.
    """
    if diff < 0:
        raise ValueError(f"diff must be >= 0, got {diff}")
    source_extent = target_extent - diff
    if source_extent <= 0:
        raise ValueError(f"target_extent {target_extent} leaves no source pixels for diff {diff}")

    if len(anchors) == 0:
        if diff:
            raise ValueError("cannot stretch an axis without anchors")
        return np.arange(target_extent, dtype=np.intp)

    idx = np.asarray(anchors, dtype=np.intp)
    if idx[0] < 0 or idx[-1] >= source_extent or np.any(np.diff(idx) <= 0):
        raise ValueError(f"anchors must be strictly increasing within [0, {source_extent})")

    # Распределение остатка по первым якорям
    base, extra = divmod(diff, idx.size)
    repeats = np.ones(source_extent, dtype=np.intp)
    repeats[idx] = base + 1
    repeats[idx[:extra]] += 1

    # Fixed-length output: sum(repeats) == source_extent + diff == target_extent
    mapping = np.repeat(np.arange(source_extent, dtype=np.intp), repeats)
    return mapping


class NinePatchResampler:
    def target_size(
        self, source_size: Tuple[int, int], anchors: StretchAnchors, width: int, height: int
    ) -> Tuple[int, int]:
        """
        Итоговый размер: запрос не меньше исходника, ось без якорей не растягивается.
        """
        sw, sh = source_size
        tw = sw if anchors.is_rigid_x else max(sw, width)
        th = sh if anchors.is_rigid_y else max(sh, height)
        if (tw, th) != (width, height):
            logger.debug("Requested %dx%d clamped to %dx%d", width, height, tw, th)
        return tw, th

    def resample(self, interior: np.ndarray, anchors: StretchAnchors, width: int, height: int) -> np.ndarray:
        """
        Растягивает внутреннюю область `H×W×4` до запрошенного размера
        выборкой ближайшего пикселя по таблицам `axis_map`.
        При совпадении размеров возвращает тот же массив без копирования.
        """
        sh, sw = interior.shape[:2]
        tw, th = self.target_size((sw, sh), anchors, width, height)
        if (tw, th) == (sw, sh):
            return interior

        x_map = axis_map(anchors.top, tw - sw, tw)
        y_map = axis_map(anchors.left, th - sh, th)
        logger.debug("Resampling %dx%d -> %dx%d", sw, sh, tw, th)

        # Векторизованное копирование: все 4 байта пикселя переносятся как есть
        return interior[y_map[:, None], x_map[None, :]]
