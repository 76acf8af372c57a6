from datetime import date, datetime
from typing import Generator, Sequence

import pytest

from src.tracker.core.database import Database
from src.tracker.schemas import Habit
from src.tracker.services import HabitEngine, HabitStorage

# "Сегодня" для всех тестов: понедельник
TODAY = date(2024, 6, 3)
NOW = datetime(2024, 6, 3, 14, 30)


class InMemoryHabitStorage:
    """Хранилище в памяти, запоминающее каждое сохранение."""

    def __init__(self, habits: Sequence[Habit] | None = None, fail_on_save: bool = False):
        self.stored: list[Habit] = [habit.model_copy(deep=True) for habit in habits or []]
        self.saved_snapshots: list[list[Habit]] = []
        self.fail_on_save = fail_on_save

    def load(self) -> list[Habit]:
        return [habit.model_copy(deep=True) for habit in self.stored]

    def save(self, habits: Sequence[Habit]) -> bool:
        self.saved_snapshots.append(list(habits))
        if self.fail_on_save:
            return False
        self.stored = [habit.model_copy(deep=True) for habit in habits]
        return True

    @property
    def save_count(self) -> int:
        return len(self.saved_snapshots)


# --- ГЛОБАЛЬНЫЕ ФИКСТУРЫ ДЛЯ ВСЕГО ПРОЕКТА ---


@pytest.fixture
def storage() -> InMemoryHabitStorage:
    """Пустое хранилище в памяти."""
    return InMemoryHabitStorage()


@pytest.fixture
def engine(storage: InMemoryHabitStorage) -> HabitEngine:
    """Движок с фиксированными часами (сегодня = TODAY)."""
    return HabitEngine(storage, clock=lambda: NOW, soft_check_days=6)


@pytest.fixture
def database(tmp_path) -> Generator[Database, None, None]:
    """Подключенная SQLite база во временной директории."""
    db = Database(f"sqlite:///{tmp_path / 'habits.db'}")
    db.connect()
    yield db
    db.disconnect()


@pytest.fixture
def habit_storage(database: Database) -> HabitStorage:
    """Хранилище привычек поверх временной SQLite базы."""
    return HabitStorage(database, key="testHabits")


@pytest.fixture
def today() -> date:
    """Сегодняшний день движка."""
    return TODAY


@pytest.fixture
def now() -> datetime:
    """Текущий момент движка."""
    return NOW


@pytest.fixture
def storage_factory() -> type[InMemoryHabitStorage]:
    """Класс хранилища в памяти для тестов с особыми начальными данными."""
    return InMemoryHabitStorage
