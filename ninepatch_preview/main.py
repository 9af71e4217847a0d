"""Точка входа в приложение."""
import logging

from rich.logging import RichHandler

from ninepatch_preview import config


def setup_logging(level: str = config.LOG_LEVEL) -> None:
    """Настраивает корневой логгер с выводом через Rich."""
    logging.basicConfig(
        level=level,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
    # Pillow logs every PNG chunk at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    setup_logging()
    # imported late so that logging is configured before the UI modules load
    from ninepatch_preview.app import NinePatchPreviewApp

    app = NinePatchPreviewApp()
    app.mainloop()


if __name__ == "__main__":
    main()
