"""Модуль вспомогательных утилит для работы с датами."""

from datetime import date, datetime, timedelta


def normalize_date(value: date | datetime) -> date:
    """
    Нормализует момент времени до календарного дня в локальном часовом поясе.

    Нормализованная дата является единственной гранулярностью ключей истории привычки.

    Args:
        value (date | datetime): Дата или момент времени. Datetime с часовым поясом
                                 сначала переводится в локальное время.

    Returns:
        date: Календарный день.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def shift_days(day: date, offset: int) -> date:
    """Возвращает день, сдвинутый на `offset` календарных дней (может быть отрицательным)."""
    return day + timedelta(days=offset)


def following_days(day: date, count: int) -> list[date]:
    """Возвращает `count` дней, следующих за `day` (сам `day` не включается)."""
    return [shift_days(day, offset) for offset in range(1, count + 1)]


def last_seven_days(today: date) -> list[date]:
    """Возвращает последние 7 дней, начиная с сегодняшнего (сегодня первым)."""
    return [shift_days(today, -offset) for offset in range(7)]


def to_local_naive(moment: datetime) -> datetime:
    """Переводит момент с часовым поясом в локальное время без tzinfo, наивный момент не меняет."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def whole_days_between(start: datetime, end: datetime) -> int:
    """
    Количество полных суток между двумя моментами времени.

    Моменты могут отличаться наличием часового пояса (например, дата создания из хранилища
    с суффиксом "Z" и локальные часы движка), поэтому оба приводятся к локальному времени.
    """
    return (to_local_naive(end) - to_local_naive(start)).days
