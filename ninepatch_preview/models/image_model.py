"""Модели данных для 9-patch изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель исходного изображения (вместе с рамкой 1 px).

    Fields:
        path: Путь к исходному файлу, `None` для изображений из памяти.
        pil_image: Загруженное изображение PIL в режиме "RGBA".
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, всегда "RGBA".
        size_bytes: Размер файла, если доступен.
    """
    path: Optional[Path]
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]


@dataclass(frozen=True)
class StretchAnchors:
    """Отмеченные для растяжения столбцы (`top`) и строки (`left`).

    Координаты отсчитываются от внутренней области, т.е. уже без рамки.
    Обе последовательности строго возрастают.
    """
    top: Tuple[int, ...]
    left: Tuple[int, ...]

    @property
    def is_rigid_x(self) -> bool:
        return not self.top

    @property
    def is_rigid_y(self) -> bool:
        return not self.left
