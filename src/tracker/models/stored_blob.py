"""Модель SQLAlchemy для StoredBlob (запись key-value хранилища)."""

from sqlalchemy import LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class StoredBlob(Base):
    """
    Непрозрачный сериализованный блок данных, сохраненный под строковым ключом.

    Трекер хранит всю коллекцию привычек одним блоком, поэтому таблица
    содержит по одной строке на ключ.

    Attributes:
        key: Первичный ключ, имя блока (например, "savedHabits").
        payload: Сериализованные данные.
        created_at: Время создания записи (унаследовано от TimestampMixin).
        updated_at: Время последнего обновления записи (унаследовано от TimestampMixin).
    """

    __tablename__ = "stored_blobs"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    payload: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(key={self.key!r}, size={len(self.payload or b'')})>"
