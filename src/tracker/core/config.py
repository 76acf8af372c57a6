"""Конфигурация трекера привычек."""

from pydantic import Field

from src.core_shared.config import AppSettings


class Settings(AppSettings):
    """Основные настройки трекера."""

    # --- Настройки, читаемые из .env ---

    # Хранилище
    DATABASE_URL: str = Field(
        default="sqlite:///habitrack.db",
        description="URL базы данных SQLAlchemy, в которой хранится сериализованная коллекция привычек",
    )
    STORAGE_KEY: str = Field(
        default="savedHabits",
        description="Ключ, под которым коллекция привычек сохраняется в хранилище",
    )

    # Бизнес-константы проекта
    SOFT_CHECK_DAYS: int = Field(
        default=6,
        gt=0,
        description="Количество дней после отметки еженедельной привычки, которые считаются выполненными",
    )


# Создаем глобальный экземпляр настроек
settings = Settings()
