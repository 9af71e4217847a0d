"""Боковая панель: открытие файла, информация, целевой размер и состояние кэша.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import customtkinter as ctk

from ninepatch_preview import config
from ninepatch_preview.models.image_model import ImageData, StretchAnchors


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def _format_anchors(anchors: Sequence[int]) -> str:
    if not anchors:
        return "нет (ось фиксирована)"
    return f"{len(anchors)}: {anchors[0]}…{anchors[-1]}" if len(anchors) > 1 else f"1: {anchors[0]}"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, размер, курсор, кэш."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_target_size_change: Optional[Callable[[int, int], None]] = None
        self.on_clear_cache: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть 9-patch…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._top_val = ctk.StringVar(value="—")
        self._left_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_top = ctk.CTkLabel(self, textvariable=self._top_val, anchor="w", justify="left")
        self._info_left = ctk.CTkLabel(self, textvariable=self._left_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_top.grid(row=6, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_left.grid(row=7, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Target size section
        self._size_title = ctk.CTkLabel(self, text="Целевой размер", font=ctk.CTkFont(size=16, weight="bold"))
        self._size_title.grid(row=8, column=0, padx=8, pady=(8, 4), sticky="w")

        default_w, default_h = config.DEFAULT_TARGET_SIZE
        self._width_val = ctk.StringVar(value=str(default_w))
        self._height_val = ctk.StringVar(value=str(default_h))

        self._width_label = ctk.CTkLabel(self, text="Ширина, px:")
        self._width_slider = ctk.CTkSlider(
            self, from_=1, to=config.MAX_TARGET_EXTENT, number_of_steps=config.MAX_TARGET_EXTENT - 1,
            command=self._on_width_slider,
        )
        self._width_slider.set(default_w)
        self._width_entry = ctk.CTkEntry(self, textvariable=self._width_val, width=80)

        self._height_label = ctk.CTkLabel(self, text="Высота, px:")
        self._height_slider = ctk.CTkSlider(
            self, from_=1, to=config.MAX_TARGET_EXTENT, number_of_steps=config.MAX_TARGET_EXTENT - 1,
            command=self._on_height_slider,
        )
        self._height_slider.set(default_h)
        self._height_entry = ctk.CTkEntry(self, textvariable=self._height_val, width=80)

        self._width_label.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="w")
        self._width_slider.grid(row=10, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._width_entry.grid(row=11, column=0, padx=8, pady=(0, 6), sticky="w")
        self._height_label.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="w")
        self._height_slider.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._height_entry.grid(row=14, column=0, padx=8, pady=(0, 6), sticky="w")

        for entry in (self._width_entry, self._height_entry):
            entry.bind("<FocusOut>", self._on_size_commit)
            entry.bind("<Return>", self._on_size_commit)
        for slider in (self._width_slider, self._height_slider):
            slider.bind("<ButtonRelease-1>", self._on_size_commit, add="+")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=16, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_hex_val = ctk.StringVar(value="—")

        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_hex = ctk.CTkLabel(self, textvariable=self._cursor_hex_val, anchor="w", justify="left")

        self._cursor_xy.grid(row=17, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=18, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_hex.grid(row=19, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Cache
        self._clear_btn = ctk.CTkButton(self, text="Очистить кэш", command=self._emit_clear_cache)
        self._clear_btn.grid(row=101, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData, anchors: StretchAnchors) -> None:
        """Отображает метаданные загруженного 9-patch и найденные метки."""
        self._path_val.set(str(image_data.path) if image_data.path else "—")
        self._size_val.set(self._format_size(image_data.size_bytes))
        inner_w = image_data.width - 2 * config.BORDER_WIDTH
        inner_h = image_data.height - 2 * config.BORDER_WIDTH
        self._dims_val.set(f"{image_data.width} × {image_data.height} px (без рамки {inner_w} × {inner_h})")
        self._top_val.set(f"По горизонтали: {_format_anchors(anchors.top)}")
        self._left_val.set(f"По вертикали: {_format_anchors(anchors.left)}")

    def set_target_size(self, width: int, height: int) -> None:
        self._width_slider.set(width)
        self._height_slider.set(height)
        self._width_val.set(str(width))
        self._height_val.set(str(height))

    def get_target_size(self) -> Tuple[int, int]:
        """Возвращает (ширина, высота) из полей ввода в пределах [1, MAX_TARGET_EXTENT]."""
        default_w, default_h = config.DEFAULT_TARGET_SIZE
        return (
            self._parse_extent(self._width_val.get(), default_w),
            self._parse_extent(self._height_val.get(), default_h),
        )

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Обновляет информацию по курсору (координаты, RGBA, HEX)."""
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            self._cursor_hex_val.set("—")
            return
        self._cursor_xy_val.set(f"({x}, {y})")
        r, g, b, a = rgba
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_clear_cache(self) -> None:
        if self.on_clear_cache:
            self.on_clear_cache()

    # Dragging only updates the entries; the size is committed on release
    def _on_width_slider(self, value: float) -> None:
        self._width_val.set(str(int(round(value))))

    def _on_height_slider(self, value: float) -> None:
        self._height_val.set(str(int(round(value))))

    def _on_size_commit(self, _event: object) -> None:
        width, height = self.get_target_size()
        self.set_target_size(width, height)
        self._emit_target_size()

    def _emit_target_size(self) -> None:
        if self.on_target_size_change:
            self.on_target_size_change(*self.get_target_size())

    # ---- Helpers ----
    def _parse_extent(self, text: str, default: int) -> int:
        try:
            value = int(text.strip())
        except ValueError:
            value = default
        return max(1, min(config.MAX_TARGET_EXTENT, value))

    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"
