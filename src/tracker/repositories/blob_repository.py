"""Репозиторий для работы с блоками key-value хранилища."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.tracker.core.logging import tracker_log as log
from src.tracker.models import StoredBlob


class BlobRepository:
    """
    Репозиторий для чтения и записи сериализованных блоков по ключу.

    Управление транзакциями (commit, rollback) остается на стороне вызывающего сервиса.

    Attributes:
        model: Класс модели SQLAlchemy, с которым работает репозиторий.
    """

    def __init__(self, model: type[StoredBlob] = StoredBlob):
        """
        Инициализирует репозиторий.

        Args:
            model (type[StoredBlob]): Класс модели SQLAlchemy.
        """
        self.model = model

    def get_by_key(self, db_session: Session, *, key: str) -> StoredBlob | None:
        """
        Получает блок по ключу.

        Args:
            db_session (Session): Сессия базы данных.
            key (str): Ключ блока.

        Returns:
            StoredBlob | None: Экземпляр модели или None, если блок не найден.
        """
        log.debug(f"Получение блока по ключу: {key}")
        statement = select(self.model).where(self.model.key == key)
        instance = db_session.execute(statement).scalar_one_or_none()

        status = "найден" if instance else "не найден"
        log.debug(f"Блок с ключом {key} {status}.")

        return instance

    def put(self, db_session: Session, *, key: str, payload: bytes) -> StoredBlob:
        """
        Создает блок или заменяет содержимое существующего.

        Args:
            db_session (Session): Сессия базы данных.
            key (str): Ключ блока.
            payload (bytes): Новое содержимое.

        Returns:
            StoredBlob: Созданный или обновленный экземпляр модели.
        """
        db_obj = self.get_by_key(db_session, key=key)

        if db_obj is None:
            db_obj = self.model(key=key, payload=payload)
        else:
            db_obj.payload = payload

        db_session.add(db_obj)
        db_session.flush()

        log.debug(f"Блок {key} подготовлен к сохранению ({len(payload)} байт).")
        return db_obj

    def delete_by_key(self, db_session: Session, *, key: str) -> bool:
        """
        Удаляет блок по ключу.

        Args:
            db_session (Session): Сессия базы данных.
            key (str): Ключ блока.

        Returns:
            bool: True, если блок существовал и был удален.
        """
        db_obj = self.get_by_key(db_session, key=key)

        if db_obj is None:
            return False

        db_session.delete(db_obj)
        db_session.flush()
        return True
