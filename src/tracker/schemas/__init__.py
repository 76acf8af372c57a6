from .appearance_schema import Appearance
from .base_schema import BaseSchema
from .habit_entry_schema import HabitEntry
from .habit_schema import Habit, HabitCollectionAdapter, decode_habits, encode_habits

__all__ = [
    "BaseSchema",
    "Appearance",
    "HabitEntry",
    "Habit",
    "HabitCollectionAdapter",
    "encode_habits",
    "decode_habits",
]
