"""Схема Pydantic для внешнего вида привычки."""

from pydantic import Field

from .base_schema import BaseSchema


class Appearance(BaseSchema):
    """
    Цвет привычки: четыре канала с плавающей точкой в диапазоне 0..1.

    Поведения не имеет, трекер хранит и возвращает значение как есть.
    По умолчанию используется зеленый цвет.
    """

    red: float = Field(default=0.204, alias="r", description="Красный канал")
    green: float = Field(default=0.780, alias="g", description="Зеленый канал")
    blue: float = Field(default=0.349, alias="b", description="Синий канал")
    opacity: float = Field(default=1.0, description="Непрозрачность")
