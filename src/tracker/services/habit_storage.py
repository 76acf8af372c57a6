"""
Хранилище коллекции привычек.

Коллекция сохраняется целиком одним сериализованным блоком в key-value таблице.
Ошибки хранилища не пробрасываются: при неудачной загрузке возвращается пустая
коллекция, при неудачном сохранении возвращается False.
"""

from typing import Protocol, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from src.tracker.core.config import settings
from src.tracker.core.database import Database
from src.tracker.core.exceptions import StorageException
from src.tracker.core.logging import tracker_log as log
from src.tracker.repositories import BlobRepository
from src.tracker.schemas import Habit, decode_habits, encode_habits


class HabitStorageProtocol(Protocol):
    """Контракт хранилища, которое движок получает при создании."""

    def load(self) -> list[Habit]: ...

    def save(self, habits: Sequence[Habit]) -> bool: ...


class HabitStorage:
    """
    Хранилище коллекции привычек поверх SQLAlchemy.

    Attributes:
        database (Database): Менеджер подключений к базе данных.
        repository (BlobRepository): Репозиторий блоков.
        key (str): Ключ, под которым хранится коллекция.
    """

    def __init__(self, database: Database, repository: BlobRepository | None = None, key: str | None = None):
        self.database = database
        self.repository = repository or BlobRepository()
        self.key = key or settings.STORAGE_KEY

    def _read_payload(self) -> bytes | None:
        """
        Читает сырой блок коллекции.

        Raises:
            StorageException: Если база данных недоступна.
        """
        try:
            with self.database.session() as db_session:
                blob = self.repository.get_by_key(db_session, key=self.key)
                return blob.payload if blob else None
        except (SQLAlchemyError, RuntimeError) as exc:
            raise StorageException(
                message=f"Не удалось прочитать блок '{self.key}': {exc}", error_type="storage_read_failed"
            ) from exc

    def load(self) -> list[Habit]:
        """
        Загружает коллекцию привычек.

        Returns:
            list[Habit]: Коллекция привычек или пустой список, если блока нет или его не удалось прочитать.
        """
        try:
            payload = self._read_payload()
        except StorageException as exc:
            log.error(exc.message)
            return []

        if payload is None:
            log.info(f"Блок '{self.key}' отсутствует, начинаем с пустой коллекции.")
            return []

        try:
            habits = decode_habits(payload)
        except ValidationError as exc:
            log.error(f"Не удалось декодировать коллекцию привычек '{self.key}': {exc.error_count()} ошибок.")
            return []

        log.info(f"Загружено привычек: {len(habits)}.")
        return habits

    def save(self, habits: Sequence[Habit]) -> bool:
        """
        Сохраняет коллекцию привычек целиком.

        Args:
            habits (Sequence[Habit]): Коллекция для сохранения.

        Returns:
            bool: True при успешном сохранении, иначе False.
        """
        payload = encode_habits(list(habits))

        try:
            with self.database.session() as db_session:
                self.repository.put(db_session, key=self.key, payload=payload)
                db_session.commit()
        except (SQLAlchemyError, RuntimeError) as exc:
            # Откат уже выполнен менеджером сессий
            log.error(f"Ошибка при сохранении коллекции привычек '{self.key}': {exc}")
            return False

        log.debug(f"Коллекция привычек сохранена ({len(habits)} шт.).")
        return True

    def clear(self) -> bool:
        """
        Удаляет сохраненную коллекцию.

        Returns:
            bool: True, если блок существовал и был удален.
        """
        try:
            with self.database.session() as db_session:
                deleted = self.repository.delete_by_key(db_session, key=self.key)
                db_session.commit()
        except (SQLAlchemyError, RuntimeError) as exc:
            log.error(f"Ошибка при удалении коллекции привычек '{self.key}': {exc}")
            return False

        return deleted
