"""Схема Pydantic для записи истории привычки."""

from pydantic import Field

from .base_schema import BaseSchema


class HabitEntry(BaseSchema):
    """
    Запись за один день.

    Для YES_NO привычек value равно 1.0 (отметка) или 0.5 (мягкая отметка еженедельной привычки),
    для MEASURABLE привычек это введенное количество.
    """

    value: float = Field(..., description="Значение за день")
    memo: str | None = Field(None, description="Заметка к записи")
