"""Разбор числовых значений, введенных в формах."""

import math

from src.tracker.core.exceptions import ParseException


def parse_number(raw: str | float | int | None) -> float | None:
    """
    Разбирает числовое значение из формы.

    Args:
        raw (str | float | int | None): Введенное значение.

    Returns:
        float | None: Число или None, если поле не заполнено.

    Raises:
        ParseException: Если значение не является конечным числом.
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None

    try:
        number = float(raw)
    except (TypeError, ValueError) as exc:
        raise ParseException(message=f"Не удалось разобрать число: {raw!r}") from exc

    if not math.isfinite(number):
        raise ParseException(message=f"Ожидалось конечное число, получено: {raw!r}")

    return number
