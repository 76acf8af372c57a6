"""Базовые конфигурации и схемы для Pydantic."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Базовая схема Pydantic с общей конфигурацией."""

    model_config = ConfigDict(
        from_attributes=True,  # Позволяет создавать схемы из объектов с атрибутами
        populate_by_name=True,  # Позволяет использовать и имя поля, и alias
        extra="ignore",  # Игнорировать лишние поля при парсинге
    )
