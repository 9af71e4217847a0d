import customtkinter as ctk

from ninepatch_preview import config
from ninepatch_preview.controllers.app_controller import AppController
from ninepatch_preview.ui.image_viewer import ImageViewer
from ninepatch_preview.ui.sidebar import Sidebar
from ninepatch_preview.ui.status_bar import StatusBar


class NinePatchPreviewApp(ctk.CTk):
    def __init__(self) -> None:
        super().__init__()
        ctk.set_appearance_mode(config.APPEARANCE_MODE)
        ctk.set_default_color_theme(config.COLOR_THEME)

        self.title(config.WINDOW_TITLE)
        self.minsize(*config.WINDOW_MIN_SIZE)

        # root layout: left viewer, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._status_bar = StatusBar(
            self, zoom_presets=ImageViewer.ZOOM_PRESETS, compare_modes=ImageViewer.COMPARE_MODES
        )
        self._status_bar.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer, sidebar=self._sidebar, status_bar=self._status_bar, window=self
        )
        self._controller.bind_events()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._controller.shutdown()
        self.destroy()
