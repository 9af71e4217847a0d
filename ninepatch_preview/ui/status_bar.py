"""Строка состояния: фактический размер результата, кэш, масштаб и режим сравнения.

Пресеты масштаба и подписи режимов сравнения берутся у `ImageViewer`,
поэтому панель не дублирует его настройки.
"""
from __future__ import annotations

from typing import Callable, Mapping, Optional, Sequence, Tuple

import customtkinter as ctk

from ninepatch_preview import config

FIT_LABEL = "Fit"


def describe_result(requested: Tuple[int, int], actual: Tuple[int, int]) -> str:
    """Подпись результата; отмечает оси, где запрос был поднят до размера исходника."""
    (rw, rh), (aw, ah) = requested, actual
    text = f"{aw} × {ah} px"
    clamped = [axis for axis, r, a in (("ширина", rw, aw), ("высота", rh, ah)) if r != a]
    if clamped:
        text += f" (запрошено {rw} × {rh}; {', '.join(clamped)}: ограничено)"
    return text


class StatusBar(ctk.CTkFrame):
    def __init__(
        self,
        master: ctk.CTk,
        zoom_presets: Sequence[int],
        compare_modes: Mapping[str, str],
        **kwargs,
    ) -> None:
        super().__init__(master, height=56, **kwargs)

        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None
        self.on_compare_mode_change: Optional[Callable[[str], None]] = None

        self._presets = {f"{p}%": p for p in zoom_presets}
        compare_labels = list(compare_modes)

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(2, weight=1)  # zoom slider stretches

        # Result info
        self._result_val = ctk.StringVar(value="Результат: —")
        self._cache_val = ctk.StringVar(value="кэш: 0")
        ctk.CTkLabel(self, textvariable=self._result_val, anchor="w").grid(
            row=0, column=0, padx=(10, 6), pady=8, sticky="w"
        )
        ctk.CTkLabel(self, textvariable=self._cache_val, anchor="w", text_color="gray").grid(
            row=0, column=1, padx=(0, 12), pady=8, sticky="w"
        )

        # Zoom: slider plus a preset menu, both end up in on_zoom_change
        self._zoom_val = ctk.StringVar(value="100%")
        self._zoom_slider = ctk.CTkSlider(
            self,
            from_=config.MIN_ZOOM_PERCENT,
            to=config.MAX_ZOOM_PERCENT,
            number_of_steps=config.MAX_ZOOM_PERCENT - config.MIN_ZOOM_PERCENT,
            command=lambda value: self._emit_zoom(int(round(value))),
        )
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=2, padx=6, pady=8, sticky="ew")

        self._zoom_menu = ctk.CTkOptionMenu(
            self,
            values=[FIT_LABEL, *self._presets],
            variable=self._zoom_val,
            command=self._on_zoom_menu,
            width=90,
        )
        self._zoom_menu.grid(row=0, column=3, padx=6, pady=8)

        self._compare_buttons = ctk.CTkSegmentedButton(
            self, values=compare_labels, command=self._on_compare_mode
        )
        self._compare_buttons.set(compare_labels[0])
        self._compare_buttons.grid(row=0, column=4, padx=(6, 10), pady=8)

    # ---- Public API ----
    def set_result(self, requested: Tuple[int, int], actual: Tuple[int, int], cached_count: int) -> None:
        self._result_val.set(f"Результат: {describe_result(requested, actual)}")
        self._cache_val.set(f"кэш: {cached_count}")

    def set_zoom_percent(self, percent: int) -> None:
        """Синхронизирует слайдер и подпись без вызова `on_zoom_change`."""
        self._zoom_slider.set(percent)
        self._zoom_val.set(f"{percent}%")

    # ---- Events ----
    def _emit_zoom(self, percent: int) -> None:
        self._zoom_val.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_zoom_menu(self, label: str) -> None:
        if label == FIT_LABEL:
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        percent = self._presets[label]
        self._zoom_slider.set(percent)
        self._emit_zoom(percent)

    def _on_compare_mode(self, label: str) -> None:
        if self.on_compare_mode_change:
            self.on_compare_mode_change(label)
