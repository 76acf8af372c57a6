"""Инициализация модуля сервисов."""

from .habit_engine import HabitEngine
from .habit_storage import HabitStorage, HabitStorageProtocol

__all__ = [
    "HabitEngine",
    "HabitStorage",
    "HabitStorageProtocol",
]
