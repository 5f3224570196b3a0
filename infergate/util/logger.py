"""Project-wide ``infergate`` logger, configured once at import."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infergate.config.settings import settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROTATE_MAX_BYTES = 10 * 1024 * 1024
ROTATE_BACKUP_COUNT = 10


def _resolve_level(raw: str) -> int:
    level = logging.getLevelName(str(raw or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _file_handler(path_text: str, level: int, formatter: logging.Formatter) -> logging.Handler | None:
    path_text = path_text.strip()
    if not path_text:
        return None
    log_path = Path(path_text)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path,
            maxBytes=ROTATE_MAX_BYTES,
            backupCount=ROTATE_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        # 日志目录不可写（只读挂载等）时退回到 stderr 输出
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _build_logger() -> logging.Logger:
    project_logger = logging.getLogger("infergate")
    if project_logger.handlers:
        return project_logger

    level = _resolve_level(settings.log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    project_logger.setLevel(level)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    project_logger.addHandler(console)

    file_handler = _file_handler(settings.log_file_path, level, formatter)
    if file_handler is not None:
        project_logger.addHandler(file_handler)

    project_logger.propagate = False
    return project_logger


logger = _build_logger()
