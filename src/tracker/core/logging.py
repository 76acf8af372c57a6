"""Создаём экземпляр настроенного логгера для трекера"""

from src.core_shared.logging_setup import LogConfig, setup_logger

from .config import settings

# Получаем экземпляр логгера трекера
tracker_log = setup_logger(
    service_name="Tracker",
    log_config=LogConfig(enable_file_logging=settings.ENABLE_FILE_LOGGING),
    log_level_override=settings.LOG_LEVEL,
)
