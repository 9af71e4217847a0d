"""Загрузка 9-patch изображений и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за загрузку и базовое извлечение свойств.
- OCP: три источника (файл, массив в памяти, готовый PIL-образ) сводятся к одному `ImageData`.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from ninepatch_preview import config
from ninepatch_preview.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Источник не удалось декодировать как RGBA 9-patch изображение."""


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ImageDecodeError: если файл не распознан как изображение или слишком мал.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as raw:
                pil_image = raw.convert("RGBA")
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageDecodeError(f"Файл не является изображением: {path}") from exc

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Loaded %s (%dx%d)", path, pil_image.width, pil_image.height)
        return self._wrap(pil_image, path=path, size_bytes=size_bytes)

    def from_pil(self, image: Image.Image) -> ImageData:
        """Оборачивает уже декодированное изображение PIL (приводится к RGBA)."""
        if not isinstance(image, Image.Image):
            raise TypeError(f"Ожидался PIL.Image.Image, получено {type(image).__name__}")
        # convert() always returns a new image, so the caller keeps ownership of theirs
        pil_image = image.convert("RGBA")
        return self._wrap(pil_image, path=None, size_bytes=None)

    def from_array(self, array: np.ndarray) -> ImageData:
        """Оборачивает битмап из памяти: массив `H×W×4` типа `uint8` в порядке RGBA."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != config.BYTES_PER_PIXEL:
            raise ImageDecodeError(f"Ожидался массив H×W×4, получено {arr.shape}")
        if arr.dtype != np.uint8:
            raise ImageDecodeError(f"Ожидался dtype uint8, получено {arr.dtype}")
        pil_image = Image.fromarray(np.ascontiguousarray(arr))
        return self._wrap(pil_image, path=None, size_bytes=None)

    # ---- Helpers ----
    def _wrap(self, pil_image: Image.Image, path: Optional[Path], size_bytes: Optional[int]) -> ImageData:
        width, height = pil_image.size
        if width < config.MIN_SOURCE_SIZE or height < config.MIN_SOURCE_SIZE:
            pil_image.close()
            raise ImageDecodeError(
                f"9-patch должен быть не меньше {config.MIN_SOURCE_SIZE}×{config.MIN_SOURCE_SIZE} px, "
                f"получено {width}×{height}"
            )
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
        )
