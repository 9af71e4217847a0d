"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от абстрактных ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from tkinter import filedialog, messagebox, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from ninepatch_preview import config
from ninepatch_preview.services.image_service import ImageDecodeError, ImageService
from ninepatch_preview.services.nine_patch import NinePatch
from ninepatch_preview.ui.image_viewer import ImageViewer
from ninepatch_preview.ui.sidebar import Sidebar
from ninepatch_preview.ui.status_bar import StatusBar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка 9-patch через `ImageService` и владение текущим `NinePatch`.
    - Построение растянутого изображения для выбранного пользователем размера.
    - Синхронизация состояния зума и режимов сравнения.

    Превью показывает один размер за раз, поэтому при смене целевого размера
    прежние результаты освобождаются: кэш `NinePatch` держит не больше одного
    изображения, сколько бы размеров ни перебрал пользователь.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    status_bar: StatusBar
    window: ctk.CTk

    _image_service: ImageService = ImageService()
    _nine_patch: Optional[NinePatch] = None
    _target_size: Tuple[int, int] = config.DEFAULT_TARGET_SIZE

    @property
    def nine_patch(self) -> Optional[NinePatch]:
        return self._nine_patch

    @property
    def target_size(self) -> Tuple[int, int]:
        return self._target_size

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_target_size_change = self._handle_target_size_change
        self.sidebar.on_clear_cache = self._handle_clear_cache
        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.status_bar.on_zoom_change = self._handle_zoom_change
        self.status_bar.on_zoom_fit = self._handle_zoom_fit
        self.status_bar.on_compare_mode_change = self._handle_compare_mode_change

        self.sidebar.set_target_size(*self._target_size)

    def load_file(self, file_path: str | Path) -> bool:
        """Открывает 9-patch и показывает его; ошибки загрузки выводятся в диалоге.

        Предыдущий `NinePatch` закрывается только после того, как просмотрщик
        переключён на новые изображения.
        """
        try:
            image_data = self._image_service.load_image(file_path)
        except (FileNotFoundError, ImageDecodeError) as exc:
            logger.error("Cannot open %s: %s", file_path, exc)
            messagebox.showerror("Ошибка загрузки", str(exc), parent=self.window)
            return False

        previous = self._nine_patch
        self._nine_patch = NinePatch(image_data)

        self.viewer.set_image(self._nine_patch.original_image)
        self._apply_rendition()
        self.sidebar.set_image_info(image_data, self._nine_patch.anchors)
        if previous is not None:
            previous.close()

        # Reset zoom to fit
        self.viewer.set_zoom_to_fit()
        self.status_bar.set_zoom_percent(self.viewer.get_zoom_percent())
        return True

    def shutdown(self) -> None:
        """Освобождает текущий 9-patch перед закрытием окна."""
        if self._nine_patch is not None:
            self._nine_patch.close()
            self._nine_patch = None

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите 9-patch изображение",
                filetypes=config.FILE_DIALOG_TYPES,
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if file_path:
            self.load_file(file_path)

    def _handle_target_size_change(self, width: int, height: int) -> None:
        if (width, height) == self._target_size:
            return
        self._target_size = (width, height)
        if self._nine_patch is None:
            return
        # the viewer gets the new rendition right below, nothing else shows the old ones
        self._nine_patch.clear_cache()
        self._apply_rendition()

    def _handle_clear_cache(self) -> None:
        if self._nine_patch is None:
            return
        self._nine_patch.clear_cache()
        # the viewer still points at a released rendition, rebuild it right away
        self._apply_rendition()

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync status bar when user zooms with mouse wheel
        self.status_bar.set_zoom_percent(zoom_percent)

    def _handle_compare_mode_change(self, mode: str) -> None:
        self.viewer.set_compare_mode(mode)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.status_bar.set_zoom_percent(self.viewer.get_zoom_percent())

    # ---- Helpers ----
    def _apply_rendition(self) -> None:
        """Строит растянутое изображение для текущего целевого размера.

        Результат берётся из кэша `NinePatch`; исходник не мутируется.
        """
        if self._nine_patch is None:
            return
        rendition = self._nine_patch.image_size_of(*self._target_size)
        self.viewer.set_processed_image(rendition)
        self.status_bar.set_result(self._target_size, rendition.size, len(self._nine_patch.cached_sizes))
