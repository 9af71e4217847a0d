"""Виджет просмотра: масштабирование, панорамирование и сравнение исходника с результатом.

Принципы:
- SRP: отвечает только за представление и интеракции с изображением.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from ninepatch_preview import config


class ImageViewer(ctk.CTkFrame):
    """Канва с режимами «только результат» и side-by-side (исходник | результат)."""

    # UI label -> internal mode
    COMPARE_MODES = {"Результат": "off", "2-up": "side_by_side"}
    ZOOM_PRESETS = config.ZOOM_PRESETS

    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._original_image: Optional[Image.Image] = None
        self._processed_image: Optional[Image.Image] = None
        self._tk_image_before: Optional[ImageTk.PhotoImage] = None
        self._tk_image_after: Optional[ImageTk.PhotoImage] = None

        self._scale_factor: float = 1.0
        self._fit_scale_factor: float = 1.0
        self._image_top_left: Optional[Tuple[int, int]] = None

        # panning state
        self._is_panning: bool = False
        self._pan_start_canvas_xy: Optional[Tuple[int, int]] = None
        self._pan_start_top_left: Optional[Tuple[int, int]] = None

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        # compare modes: "off" | "side_by_side"
        self._compare_mode: str = "off"
        self._hold_before_active: bool = False

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

        # Panning with left mouse drag
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_pan_end)

        # Hold space to preview the unstretched source
        self._canvas.bind("<KeyPress-space>", self._on_space_down)
        self._canvas.bind("<KeyRelease-space>", self._on_space_up)

    # ---- Public API ----
    def set_image(self, image: Image.Image) -> None:
        """Устанавливает исходник (без рамки) и сбрасывает состояние зума/панорамирования."""
        self._original_image = image
        self._processed_image = None
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None  # reset to center
        self._render_image()

    def set_processed_image(self, image: Optional[Image.Image]) -> None:
        """Устанавливает растянутое изображение (может быть None) и перерисовывает виджет."""
        self._processed_image = image
        self._render_image()

    def set_zoom_to_fit(self) -> None:
        """Масштабирует содержимое так, чтобы оно целиком помещалось в доступную область."""
        self._compute_fit_scale()
        self._scale_factor = self._fit_scale_factor
        self._image_top_left = None  # reset to center
        self._render_image()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах."""
        self._scale_factor = self._clamp_scale(zoom_percent / 100.0)
        self._render_image()

    def get_zoom_percent(self) -> int:
        """Возвращает текущий масштаб в процентах."""
        return int(round(self._scale_factor * 100))

    def set_compare_mode(self, mode: str) -> None:
        """Устанавливает режим сравнения по подписи из `COMPARE_MODES`."""
        self._compare_mode = self.COMPARE_MODES.get(mode, "off")
        self._image_top_left = None  # recenter
        self._compute_fit_scale()
        self._render_image()

    # ---- Internals ----
    def _clamp_scale(self, scale: float) -> float:
        return max(config.MIN_ZOOM_PERCENT / 100.0, min(config.MAX_ZOOM_PERCENT / 100.0, scale))

    def _displayed_image(self) -> Optional[Image.Image]:
        """Изображение в основной позиции (или справа в режиме 2-up)."""
        if self._processed_image is None or self._hold_before_active:
            return self._original_image
        return self._processed_image

    def _content_size(self) -> Tuple[int, int]:
        """Размер содержимого в пикселях изображения (до масштабирования)."""
        main = self._displayed_image()
        if main is None:
            return 0, 0
        w, h = main.size
        if self._compare_mode == "side_by_side" and self._original_image is not None:
            ow, oh = self._original_image.size
            return ow + w, max(oh, h)
        return w, h

    def _scaled(self, image: Image.Image) -> Image.Image:
        w, h = image.size
        size = (max(1, int(w * self._scale_factor)), max(1, int(h * self._scale_factor)))
        # nearest keeps single marker-width pixels crisp when zoomed in
        return image.resize(size, Image.Resampling.NEAREST)

    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._original_image is None:
            return
        self._compute_fit_scale()
        # do not force fit scale if user zoomed manually, but rerender to center
        self._render_image()

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._original_image is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())

        side_by_side = self._compare_mode == "side_by_side"
        main_img = self._displayed_image()
        resized_main = self._scaled(main_img)
        resized_before = self._scaled(self._original_image) if side_by_side else None

        content_w, content_h = resized_main.size
        if resized_before is not None:
            content_w += resized_before.width + config.SIDE_BY_SIDE_GAP
            content_h = max(content_h, resized_before.height)

        # compute allowed top-left range
        if content_w <= canvas_w:
            min_x = max_x = (canvas_w - content_w) // 2
        else:
            min_x = canvas_w - content_w
            max_x = 0
        if content_h <= canvas_h:
            min_y = max_y = (canvas_h - content_h) // 2
        else:
            min_y = canvas_h - content_h
            max_y = 0

        if self._image_top_left is None:
            x = (canvas_w - content_w) // 2 if content_w <= canvas_w else 0
            y = (canvas_h - content_h) // 2 if content_h <= canvas_h else 0
            self._image_top_left = (x, y)
        else:
            ox, oy = self._image_top_left
            x = max(min_x, min(max_x, ox))
            y = max(min_y, min(max_y, oy))
            self._image_top_left = (x, y)

        ox, oy = self._image_top_left

        if resized_before is not None:
            self._tk_image_before = ImageTk.PhotoImage(resized_before)
            self._canvas.create_image(ox, oy, image=self._tk_image_before, anchor="nw")
            ox += resized_before.width + config.SIDE_BY_SIDE_GAP
        else:
            self._tk_image_before = None

        self._tk_image_after = ImageTk.PhotoImage(resized_main)
        self._canvas.create_image(ox, oy, image=self._tk_image_after, anchor="nw")

    def _compute_fit_scale(self) -> None:
        img_w, img_h = self._content_size()
        if img_w == 0 or img_h == 0:
            self._fit_scale_factor = 1.0
            return
        if self._compare_mode == "side_by_side":
            canvas_w = max(1, int(self._canvas.winfo_width()) - config.SIDE_BY_SIDE_GAP)
        else:
            canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        scale_w = canvas_w / img_w
        scale_h = canvas_h / img_h
        self._fit_scale_factor = self._clamp_scale(min(scale_w, scale_h))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._original_image is None or self.on_cursor_move is None:
            return
        img_x, img_y, image = self._canvas_to_image_coords(event.x, event.y)
        if img_x is None or img_y is None or image is None:
            self.on_cursor_move(None, None, None)
            return
        # both images are RGBA by construction
        rgba = image.getpixel((img_x, img_y))
        self.on_cursor_move(img_x, img_y, rgba)

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None)

    def _canvas_to_image_coords(self, cx: int, cy: int) -> Tuple[Optional[int], Optional[int], Optional[Image.Image]]:
        if self._original_image is None or self._image_top_left is None:
            return None, None, None
        ox, oy = self._image_top_left
        dx = cx - ox
        dy = cy - oy
        if dx < 0 or dy < 0:
            return None, None, None

        if self._compare_mode == "side_by_side":
            before_w = max(1, int(self._original_image.width * self._scale_factor))
            if dx < before_w:
                return self._hit_test(self._original_image, dx, dy)
            dx -= before_w + config.SIDE_BY_SIDE_GAP
            if dx < 0:
                return None, None, None

        main = self._displayed_image()
        return self._hit_test(main, dx, dy)

    def _hit_test(self, image: Image.Image, dx: int, dy: int) -> Tuple[Optional[int], Optional[int], Optional[Image.Image]]:
        x = int(dx / self._scale_factor)
        y = int(dy / self._scale_factor)
        img_w, img_h = image.size
        if 0 <= x < img_w and 0 <= y < img_h:
            return x, y, image
        return None, None, None

    def _get_canvas_bg(self) -> str:
        # Soft checker-like color; CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if self._original_image is None:
            return
        delta = event.delta
        if delta == 0:
            return
        factor = 1.1 if delta > 0 else 1.0 / 1.1
        self._zoom_at_point(event.x, event.y, factor)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        if self._original_image is None:
            return
        if getattr(event, "num", None) == 4:
            factor = 1.1
        else:
            factor = 1.0 / 1.1
        self._zoom_at_point(event.x, event.y, factor)

    def _zoom_at_point(self, cx: int, cy: int, factor: float) -> None:
        # anchor zoom under cursor; compute image coord before zoom
        if self._image_top_left is None or self._original_image is None:
            return
        old_scale = self._scale_factor
        new_scale = self._clamp_scale(old_scale * factor)
        if abs(new_scale - old_scale) < 1e-6:
            return

        ox, oy = self._image_top_left
        ix = (cx - ox) / old_scale
        iy = (cy - oy) / old_scale

        self._scale_factor = new_scale

        # compute new top-left so that (ix,iy) stays under (cx,cy)
        nx = int(round(cx - ix * new_scale))
        ny = int(round(cy - iy * new_scale))
        self._image_top_left = (nx, ny)
        self._render_image()

        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        if self._image_top_left is None:
            return
        self._canvas.focus_set()
        self._is_panning = True
        self._pan_start_canvas_xy = (event.x, event.y)
        self._pan_start_top_left = self._image_top_left

    def _on_pan_move(self, event: tk.Event) -> None:
        if not self._is_panning or self._pan_start_canvas_xy is None or self._pan_start_top_left is None:
            return
        sx, sy = self._pan_start_canvas_xy
        ox, oy = self._pan_start_top_left
        self._image_top_left = (ox + event.x - sx, oy + event.y - sy)
        self._render_image()

    def _on_pan_end(self, _event: tk.Event) -> None:
        self._is_panning = False
        self._pan_start_canvas_xy = None
        self._pan_start_top_left = None

    def _on_space_down(self, _event: tk.Event) -> None:
        if self._compare_mode == "off" and not self._hold_before_active:
            self._hold_before_active = True
            self._render_image()

    def _on_space_up(self, _event: tk.Event) -> None:
        if self._compare_mode == "off" and self._hold_before_active:
            self._hold_before_active = False
            self._render_image()
