"""Создаём экземпляр настроенного логгера для трекера."""

from src.core_shared.logging_setup import setup_logger

from .config import settings

# Получаем экземпляр логгера трекера
tracker_log = setup_logger(
    service_name="Tracker",
    log_level_override=settings.LOG_LEVEL,
    enable_file_logging=settings.LOG_TO_FILE,
)
