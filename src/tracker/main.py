"""Точка сборки трекера привычек.

Отвечает за:
- Инициализацию Sentry (если задан DSN).
- Подключение к базе данных хранилища.
- Создание хранилища и движка с загруженной коллекцией привычек.
"""

from datetime import datetime
from typing import Callable

from src.core_shared.sentry_sdk_setup import setup_sentry
from src.tracker.core.config import settings
from src.tracker.core.database import Database
from src.tracker.core.logging import tracker_log as log
from src.tracker.services import HabitEngine, HabitStorage


def create_habit_engine(
    database_url: str | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> tuple[HabitEngine, Database]:
    """
    Создает движок трекера, подключенный к хранилищу.

    Args:
        database_url (str | None): URL базы данных. Если None, используется `DATABASE_URL` из настроек.
        clock (Callable[[], datetime]): Источник текущего времени для движка.

    Returns:
        tuple[HabitEngine, Database]: Движок и менеджер базы данных (его нужно закрыть через `disconnect()`).

    Raises:
        RuntimeError: Если не удалось подключиться к базе данных.
    """
    log.info(f"Запуск '{settings.PROJECT_NAME}@{settings.API_VERSION}'")
    log.info(f"Режим разработки: {settings.DEVELOPMENT}, Режим продакшена: {settings.PRODUCTION}")

    if settings.SENTRY_DSN:
        setup_sentry(settings, log_level=settings.LOG_LEVEL)

    database = Database(database_url)
    database.connect()

    storage = HabitStorage(database)
    engine = HabitEngine(storage, clock=clock)

    log.info(f"Движок трекера готов, привычек в коллекции: {len(engine.habits)}.")
    return engine, database
