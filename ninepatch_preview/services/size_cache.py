"""Кэш готовых изображений по размеру.

Ключ — кортеж `(width, height)`. Вытеснения нет: каждый запрошенный размер
хранится до `clear()`. Потокобезопасность не обеспечивается.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

SizeKey = Tuple[int, int]


class SizeCache:
    def __init__(self) -> None:
        self._cache: Dict[SizeKey, Image.Image] = {}

    def get(self, key: SizeKey) -> Image.Image | None:
        return self._cache.get(key)

    def get_or_create(self, key: SizeKey, producer: Callable[[], Image.Image]) -> Image.Image:
        """Возвращает сохранённое изображение или создаёт его через `producer`."""
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %dx%d", *key)
            return cached
        logger.debug("Cache miss for %dx%d", *key)
        image = producer()
        self._cache[key] = image
        return image

    def keys(self) -> Iterator[SizeKey]:
        return iter(list(self._cache))

    def clear(self) -> None:
        """Закрывает все сохранённые изображения и очищает кэш."""
        count = len(self._cache)
        try:
            for image in self._cache.values():
                image.close()
        finally:
            self._cache.clear()
        if count:
            logger.debug("Released %d cached renditions", count)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)
