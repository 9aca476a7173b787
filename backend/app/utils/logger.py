import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from app.config import get_settings

settings = get_settings()

CONSOLE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def _rotating(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5)  # 10MB
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


def setup_logging(log_dir: str, debug: bool) -> logging.Logger:
    """Configure the application logger: console, app.log and errors.log."""
    level = logging.DEBUG if debug else logging.INFO
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    app_logger = logging.getLogger(settings.APP_NAME)
    app_logger.setLevel(level)
    # Prevent duplicate logs on re-import
    app_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(CONSOLE_FORMAT)
    app_logger.addHandler(console_handler)

    app_logger.addHandler(_rotating(logs_dir / "app.log", logging.INFO))
    app_logger.addHandler(_rotating(logs_dir / "errors.log", logging.ERROR))
    return app_logger


logger = setup_logging(settings.LOG_DIR, settings.APP_DEBUG)


def get_logger(name: str = None) -> logging.Logger:
    """Get a logger instance. If name is provided, returns a child logger."""
    if name:
        return logger.getChild(name)
    return logger
