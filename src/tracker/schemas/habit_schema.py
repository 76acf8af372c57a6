"""Схемы Pydantic для модели Habit."""

from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import Field, TypeAdapter

from src.tracker.core.enums import HabitFrequency, HabitType

from .appearance_schema import Appearance
from .base_schema import BaseSchema
from .habit_entry_schema import HabitEntry


class Habit(BaseSchema):
    """
    Привычка пользователя вместе с историей выполнений.

    История (history) является единственным источником истины. Поля completed и measurement
    это кэш состояния за сегодняшний день, который пересчитывается движком при изменении истории.

    Attributes:
        id: Неизменяемый идентификатор привычки.
        title: Название привычки.
        habit_type: Тип привычки (YES_NO или MEASURABLE).
        frequency: Периодичность (имеет смысл только для YES_NO).
        completed: Выполнена ли привычка сегодня (кэш).
        measurement: Значение за сегодня (кэш, для MEASURABLE).
        history: Записи по нормализованным датам.
        creation_date: Момент создания привычки.
        appearance: Цвет привычки.
        goal: Целевое значение (только для MEASURABLE).
    """

    id: UUID = Field(default_factory=uuid4, description="ID привычки")
    title: str = Field(..., description="Название привычки")
    habit_type: HabitType = Field(..., alias="type", description="Тип привычки")
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY, description="Периодичность привычки")
    completed: bool = Field(default=False, description="Выполнена ли привычка сегодня")
    measurement: float | None = Field(default=None, description="Значение за сегодня")
    history: dict[date, HabitEntry] = Field(default_factory=dict, description="История по дням")
    creation_date: datetime = Field(default_factory=datetime.now, alias="creationDate", description="Время создания")
    appearance: Appearance = Field(default_factory=Appearance, description="Цвет привычки")
    goal: float | None = Field(default=None, description="Цель для измеримой привычки")

    @property
    def is_weekly_yes_no(self) -> bool:
        """Распространяются ли на привычку мягкие отметки."""
        return self.habit_type == HabitType.YES_NO and self.frequency == HabitFrequency.WEEKLY


# Адаптер для (де)сериализации всей коллекции привычек одним блоком
HabitCollectionAdapter = TypeAdapter(list[Habit])


def encode_habits(habits: list[Habit]) -> bytes:
    """Сериализует коллекцию привычек в JSON с именами полей формата хранения."""
    return HabitCollectionAdapter.dump_json(habits, by_alias=True)


def decode_habits(payload: bytes | str) -> list[Habit]:
    """
    Восстанавливает коллекцию привычек из JSON.

    Raises:
        pydantic.ValidationError: Если данные не соответствуют формату.
    """
    return HabitCollectionAdapter.validate_json(payload)
