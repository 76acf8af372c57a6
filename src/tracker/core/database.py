"""Настройка подключения к базе данных хранилища с использованием SQLAlchemy."""

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from src.tracker.models import Base

from .config import settings
from .logging import tracker_log as log


class Database:
    """
    Менеджер подключений к базе данных.

    Отвечает за:
    - Инициализацию подключения и создание таблиц
    - Создание сессий
    """

    def __init__(self, database_url: str | None = None) -> None:
        """
        Инициализирует менеджер с пустыми подключениями.

        Args:
            database_url (str | None): URL базы данных. Если None, используется `DATABASE_URL` из настроек.
        """
        self.database_url = database_url or settings.DATABASE_URL
        self.engine: Engine | None = None
        self.session_factory: sessionmaker[Session] | None = None

    def connect(self, **kwargs: Any) -> None:
        """
        Устанавливает подключение к базе данных и создает недостающие таблицы.

        Args:
            **kwargs: Дополнительные параметры для create_engine.

        Raises:
            RuntimeError: При неудачной проверке подключения.
        """
        self.engine = create_engine(
            self.database_url,
            echo=False,
            pool_pre_ping=True,  # Проверять соединение перед использованием
            **kwargs,
        )

        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,  # Управляем flush явно
        )

        self._verify_connection()
        Base.metadata.create_all(self.engine)
        log.success("Подключение к базе данных установлено.")

    def disconnect(self) -> None:
        """Корректное закрытие подключения к базе данных."""
        if self.engine:
            log.info("Закрытие подключения к базе данных...")
            self.engine.dispose()
            self.engine = None
            self.session_factory = None
            log.info("Подключение к базе данных успешно закрыто.")

    def _verify_connection(self) -> None:
        """
        Проверяет работоспособность подключения к базе данных.

        Raises:
            RuntimeError: Если проверка подключения не удалась.
        """
        if not self.session_factory:
            raise RuntimeError("Фабрика сессий не инициализирована.")
        try:
            with self.session_factory() as session:
                session.execute(text("SELECT 1"))
            log.debug("Проверка подключения к БД прошла успешно.")
        except Exception as exc:
            log.critical(f"Ошибка подключения к базе данных: {exc}")
            raise RuntimeError("Не удалось проверить подключение к БД.") from exc

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Контекстный менеджер для работы с сессиями БД.

        Yields:
            Session: Экземпляр сессии БД.

        Raises:
            RuntimeError: При вызове до инициализации подключения (`db.connect`).
        """
        if not self.session_factory:
            raise RuntimeError("База данных не инициализирована. Вызовите `db.connect()` перед использованием сессий.")

        session: Session = self.session_factory()

        try:
            yield session
        except Exception as exc:
            log.error(f"Ошибка во время сессии БД, выполняется откат: {exc}")
            session.rollback()
            raise
        finally:
            session.close()
