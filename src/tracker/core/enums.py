"""
Перечисления (Enums) и константы трекера.

Значения перечислений совпадают с сериализованным форматом коллекции привычек.
"""

from enum import StrEnum

# Значение записи для явной отметки ("жесткая" отметка)
HARD_CHECK_VALUE = 1.0
# Значение записи, автоматически проставляемой еженедельной привычке ("мягкая" отметка)
SOFT_CHECK_VALUE = 0.5


class HabitType(StrEnum):
    """Тип привычки."""

    YES_NO = "yesNo"  # Выполнено / не выполнено
    MEASURABLE = "measurable"  # Числовое значение с опциональной целью


class HabitFrequency(StrEnum):
    """Периодичность привычки (имеет смысл только для YES_NO)."""

    DAILY = "daily"
    WEEKLY = "weekly"
