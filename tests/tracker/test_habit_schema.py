import json
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.tracker.core.enums import HabitFrequency, HabitType
from src.tracker.schemas import Appearance, Habit, HabitEntry, decode_habits, encode_habits


@pytest.fixture
def sample_habits() -> list[Habit]:
    """Коллекция с записями разных видов."""
    gym = Habit(
        title="Gym",
        habit_type=HabitType.YES_NO,
        frequency=HabitFrequency.WEEKLY,
        completed=True,
        measurement=1.0,
        history={
            date(2024, 6, 3): HabitEntry(value=1.0, memo="legs"),
            date(2024, 6, 4): HabitEntry(value=0.5),
        },
        creation_date=datetime(2024, 1, 15, 8, 30, 12, 345678),
        appearance=Appearance(red=0.1, green=0.2, blue=0.3, opacity=0.4),
    )
    pushups = Habit(
        title="Pushups",
        habit_type=HabitType.MEASURABLE,
        measurement=None,
        history={date(2024, 5, 31): HabitEntry(value=27.5, memo=None)},
        creation_date=datetime(2024, 2, 1),
        goal=20,
    )
    return [gym, pushups]


def test_collection_round_trip(sample_habits: list[Habit]):
    """Сериализация и обратное чтение дают равную коллекцию, включая историю."""
    restored = decode_habits(encode_habits(sample_habits))

    assert restored == sample_habits
    assert restored[0].history[date(2024, 6, 4)].value == 0.5
    assert restored[1].history[date(2024, 5, 31)] == HabitEntry(value=27.5)


def test_serialized_record_uses_storage_field_names(sample_habits: list[Habit]):
    """Сериализованная запись использует имена полей формата хранения."""
    record = json.loads(encode_habits(sample_habits))[0]

    assert record["type"] == "yesNo"
    assert record["frequency"] == "weekly"
    assert record["creationDate"].startswith("2024-01-15T08:30:12")
    assert record["appearance"] == {"r": 0.1, "g": 0.2, "b": 0.3, "opacity": 0.4}
    assert record["history"]["2024-06-03"] == {"value": 1.0, "memo": "legs"}
    assert record["goal"] is None
    assert set(record) == {
        "id",
        "title",
        "type",
        "frequency",
        "completed",
        "measurement",
        "history",
        "creationDate",
        "appearance",
        "goal",
    }


def test_habit_defaults():
    """Новая привычка: ежедневная, пустая история, зеленый цвет, без цели."""
    habit = Habit(title="Read", habit_type=HabitType.YES_NO)

    assert habit.frequency == HabitFrequency.DAILY
    assert habit.history == {}
    assert habit.completed is False
    assert habit.measurement is None
    assert habit.goal is None
    assert habit.appearance == Appearance(r=0.204, g=0.780, b=0.349, opacity=1.0)
    assert habit.is_weekly_yes_no is False


def test_habit_ids_are_unique():
    """Каждая привычка получает свой ID."""
    assert Habit(title="A", type="yesNo").id != Habit(title="A", type="yesNo").id


def test_is_weekly_yes_no_requires_both_type_and_frequency():
    """Мягкие отметки распространяются только на еженедельные YES_NO привычки."""
    assert Habit(title="A", type="yesNo", frequency="weekly").is_weekly_yes_no is True
    assert Habit(title="A", type="measurable", frequency="weekly").is_weekly_yes_no is False


def test_decode_rejects_malformed_payload():
    """Некорректные данные не декодируются."""
    with pytest.raises(ValidationError):
        decode_habits(b"not json at all")

    with pytest.raises(ValidationError):
        decode_habits(b'[{"title": "No type"}]')
