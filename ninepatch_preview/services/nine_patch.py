"""Объект 9-patch: владеет исходником, якорями растяжения и кэшем размеров.

Принципы:
- SRP: собирает детектор, ресемплер и кэш, сам пиксели не обрабатывает.
- DIP: детектор и ресемплер передаются извне (по умолчанию — стандартные).
- Ресурсы: все изображения освобождаются вместе в `close()` (или при выходе из `with`).

Пример:
    with NinePatch.from_file("button.9.png") as patch:
        image = patch.image_size_of(500, 120)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from ninepatch_preview import config
from ninepatch_preview.models.image_model import ImageData, StretchAnchors
from ninepatch_preview.services.image_service import ImageService
from ninepatch_preview.services.patch_detector import PatchRegionDetector
from ninepatch_preview.services.resample_service import NinePatchResampler
from ninepatch_preview.services.size_cache import SizeCache

logger = logging.getLogger(__name__)


class NinePatch:
    def __init__(
        self,
        image_data: ImageData,
        detector: Optional[PatchRegionDetector] = None,
        resampler: Optional[NinePatchResampler] = None,
    ) -> None:
        self._image_data: Optional[ImageData] = image_data
        self._resampler = resampler or NinePatchResampler()
        self._cache = SizeCache()

        pixels = np.asarray(image_data.pil_image)
        self._anchors = (detector or PatchRegionDetector()).detect(pixels)

        b = config.BORDER_WIDTH
        self._interior_pixels: Optional[np.ndarray] = np.ascontiguousarray(pixels[b:-b, b:-b])
        self._interior_image: Optional[Image.Image] = Image.fromarray(self._interior_pixels)

        if self._anchors.is_rigid_x:
            logger.warning("No top stretch markers in %s; width is fixed", self._describe())
        if self._anchors.is_rigid_y:
            logger.warning("No left stretch markers in %s; height is fixed", self._describe())

    # ---- Constructors ----
    @classmethod
    def from_file(cls, file_path: str | Path, **kwargs) -> "NinePatch":
        return cls(ImageService().load_image(file_path), **kwargs)

    @classmethod
    def from_array(cls, array: np.ndarray, **kwargs) -> "NinePatch":
        return cls(ImageService().from_array(array), **kwargs)

    @classmethod
    def from_image(cls, image: Image.Image, **kwargs) -> "NinePatch":
        return cls(ImageService().from_pil(image), **kwargs)

    # ---- Public API ----
    @property
    def image_data(self) -> ImageData:
        self._ensure_open()
        return self._image_data

    @property
    def anchors(self) -> StretchAnchors:
        self._ensure_open()
        return self._anchors

    @property
    def size(self) -> Tuple[int, int]:
        """Размер исходника вместе с рамкой."""
        data = self.image_data
        return data.width, data.height

    @property
    def interior_size(self) -> Tuple[int, int]:
        return self.original_image.size

    @property
    def original_image(self) -> Image.Image:
        """Исходное изображение без рамки 1 px."""
        self._ensure_open()
        return self._interior_image

    @property
    def cached_sizes(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(self._cache.keys())

    @property
    def closed(self) -> bool:
        return self._image_data is None

    def image_size_of(self, width: int, height: int) -> Image.Image:
        """Возвращает изображение, растянутое до `width × height`.

        Размер меньше исходного по оси поднимается до исходного; ось без
        меток растяжения всегда остаётся исходного размера. Если итоговый
        размер совпадает с исходным, возвращается `original_image` как есть.
        Результаты кэшируются и принадлежат этому объекту.

        Raises:
            TypeError: если размеры не целые числа.
            ValueError: если размеры отрицательные.
            RuntimeError: если объект уже закрыт.
        """
        self._ensure_open()
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

        key = self._resampler.target_size(self.interior_size, self._anchors, int(width), int(height))
        if key == self.interior_size:
            return self._interior_image
        return self._cache.get_or_create(key, lambda: self._render(*key))

    def clear_cache(self) -> None:
        """Освобождает все закэшированные изображения; объект остаётся рабочим."""
        self._cache.clear()

    def close(self) -> None:
        """Освобождает исходник и все закэшированные изображения. Повторный вызов ничего не делает."""
        if self._image_data is None:
            return
        logger.debug("Closing %s", self._describe())
        try:
            self._cache.clear()
        finally:
            self._interior_image.close()
            self._image_data.pil_image.close()
            self._interior_image = None
            self._interior_pixels = None
            self._image_data = None

    def __enter__(self) -> "NinePatch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        if self.closed:
            return "<NinePatch closed>"
        return f"<NinePatch {self._describe()} top={list(self._anchors.top)} left={list(self._anchors.left)}>"

    # ---- Internals ----
    def _render(self, width: int, height: int) -> Image.Image:
        pixels = self._resampler.resample(self._interior_pixels, self._anchors, width, height)
        logger.info("Rendered %dx%d from %s", width, height, self._describe())
        return Image.fromarray(np.ascontiguousarray(pixels))

    def _ensure_open(self) -> None:
        if self._image_data is None:
            raise RuntimeError("NinePatch is closed")

    def _describe(self) -> str:
        data = self._image_data
        name = data.path.name if data.path is not None else "<memory>"
        return f"{name} ({data.width}x{data.height})"
