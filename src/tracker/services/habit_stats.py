"""
Производные показатели привычки.

Функции чистые: они не меняют привычку и не обращаются к хранилищу.
"Сегодня" передается явно, чтобы показатели не зависели от системных часов.
"""

from datetime import date, datetime

from src.tracker.core.enums import SOFT_CHECK_VALUE, HabitType
from src.tracker.schemas import Habit, HabitEntry
from src.tracker.utils.date_utils import normalize_date, shift_days, whole_days_between


def calculate_streak(habit: Habit) -> int:
    """
    Считает серию подряд идущих дней с записями, начиная с самой свежей записи.

    Серия не привязана к сегодняшнему дню: если последняя запись была неделю назад,
    серия все равно считается от нее.

    Args:
        habit (Habit): Привычка.

    Returns:
        int: Длина серии.
    """
    streak = 0
    previous_day: date | None = None

    for day in sorted(habit.history, reverse=True):
        if previous_day is not None and day not in (previous_day, shift_days(previous_day, -1)):
            break
        streak += 1
        previous_day = day

    return streak


def completion_rate(habit: Habit, now: datetime) -> float:
    """
    Доля записей относительно количества полных дней с момента создания привычки.

    Знаменатель не меньше 1. Частота и цель привычки не учитываются.
    """
    total_days = max(whole_days_between(habit.creation_date, now), 1)
    return len(habit.history) / total_days


def weekly_series(habit: Habit, today: date) -> list[float]:
    """
    Значения за последние 7 дней, от самого старого к сегодняшнему.

    Индекс 0 соответствует дню шесть дней назад, индекс 6 сегодняшнему дню.
    Дни без записи дают 0.0.
    """
    series = [0.0] * 7

    for offset in range(7):
        entry = habit.history.get(shift_days(today, -offset))
        if entry is not None:
            series[6 - offset] = entry.value

    return series


def monthly_series(habit: Habit, today: date) -> list[int]:
    """
    Количество записей по месяцам текущего года (12 значений, январь первым).

    Считаются записи, а не значения: мягкая отметка весит столько же, сколько любая другая запись.
    """
    series = [0] * 12

    for day in habit.history:
        if day.year == today.year:
            series[day.month - 1] += 1

    return series


def is_soft_check(habit: Habit, day: date | datetime) -> bool:
    """Является ли запись за день мягкой отметкой еженедельной привычки."""
    entry = habit.history.get(normalize_date(day))
    return entry is not None and entry.value == SOFT_CHECK_VALUE


def goal_achieved(habit: Habit, value: float) -> bool:
    """Достигает ли значение цели измеримой привычки (цель должна быть больше нуля)."""
    if habit.habit_type != HabitType.MEASURABLE or not habit.goal or habit.goal <= 0:
        return False
    return value >= habit.goal


def history_entries(habit: Habit) -> list[tuple[date, HabitEntry]]:
    """Записи истории, отсортированные от самой свежей к самой старой."""
    return sorted(habit.history.items(), key=lambda item: item[0], reverse=True)
