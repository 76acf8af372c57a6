"""
Движок трекера привычек.

Владеет коллекцией привычек в памяти, выполняет команды изменения истории
и сохраняет коллекцию через переданное хранилище после каждой команды.
Наружу отдаются только копии привычек.
"""

from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, TypeVar
from uuid import UUID

from src.tracker.core.config import settings
from src.tracker.core.enums import HARD_CHECK_VALUE, SOFT_CHECK_VALUE, HabitFrequency, HabitType
from src.tracker.core.exceptions import NotFoundException, ParseException
from src.tracker.core.logging import tracker_log as log
from src.tracker.schemas import Appearance, Habit, HabitEntry
from src.tracker.utils.date_utils import following_days, last_seven_days, normalize_date
from src.tracker.utils.parsing import parse_number

from . import habit_stats
from .habit_storage import HabitStorageProtocol

ResultType = TypeVar("ResultType")


def persisted(method: Callable[..., ResultType]) -> Callable[..., ResultType | None]:
    """
    Декоратор команды движка.

    После успешной команды сохраняет коллекцию. Если привычка или запись не найдены,
    команда ничего не меняет, ничего не сохраняет и возвращает None.
    """

    @wraps(method)
    def wrapper(self: "HabitEngine", *args: Any, **kwargs: Any) -> ResultType | None:
        try:
            result = method(self, *args, **kwargs)
        except NotFoundException as exc:
            log.warning(f"{method.__name__}: {exc.message}")
            return None

        self._persist()
        return result

    return wrapper


class HabitEngine:
    """
    Команды и запросы над коллекцией привычек.

    Attributes:
        storage (HabitStorageProtocol): Хранилище с методами load() и save().
        clock (Callable[[], datetime]): Источник текущего локального времени.
        soft_check_days (int): Сколько дней после отметки еженедельной привычки получают мягкую отметку.
    """

    def __init__(
        self,
        storage: HabitStorageProtocol,
        clock: Callable[[], datetime] = datetime.now,
        soft_check_days: int | None = None,
    ):
        """
        Инициализирует движок и загружает коллекцию из хранилища.

        Args:
            storage (HabitStorageProtocol): Хранилище коллекции.
            clock (Callable[[], datetime]): Источник текущего времени.
            soft_check_days (int | None): Длина окна мягких отметок. Если None, берется из настроек.
        """
        self.storage = storage
        self.clock = clock
        self.soft_check_days = settings.SOFT_CHECK_DAYS if soft_check_days is None else soft_check_days

        self._habits: list[Habit] = self._load()

        # Кэш, сохраненный в прошлые дни, не относится к сегодняшнему дню
        today = self.today()
        for habit in self._habits:
            if today not in habit.history:
                self._refresh_today_cache(habit, today)

    # --- Вспомогательные методы ---

    def _load(self) -> list[Habit]:
        """Загружает коллекцию. Любая ошибка хранилища дает пустую коллекцию."""
        try:
            return list(self.storage.load())
        except Exception as exc:
            log.error(f"Не удалось загрузить коллекцию привычек: {exc}")
            return []

    def _persist(self) -> None:
        """Сохраняет текущую коллекцию. Ошибки сохранения не откатывают изменения в памяти."""
        try:
            saved = self.storage.save(self.habits)
        except Exception as exc:
            log.error(f"Непредвиденная ошибка при сохранении коллекции привычек: {exc}")
            return

        if saved is False:
            log.warning("Коллекция привычек не сохранена, изменения остаются только в памяти.")

    def today(self) -> date:
        """Сегодняшний нормализованный день по часам движка."""
        return normalize_date(self.clock())

    def _get_habit_by_id(self, habit_id: UUID) -> Habit:
        """
        Возвращает привычку из коллекции (не копию).

        Raises:
            NotFoundException: Если привычка не найдена.
        """
        for habit in self._habits:
            if habit.id == habit_id:
                return habit

        raise NotFoundException(message=f"Привычка с ID {habit_id} не найдена.", error_type="habit_not_found")

    def _refresh_today_cache(self, habit: Habit, today: date | None = None) -> None:
        """Пересчитывает completed/measurement по сегодняшней записи истории."""
        entry = habit.history.get(today or self.today())

        if entry is None:
            habit.completed = False
            habit.measurement = None
        else:
            habit.completed = entry.value > 0
            habit.measurement = entry.value

    def _add_soft_checks(self, habit: Habit, start: date, overwrite: bool) -> None:
        """
        Проставляет мягкие отметки на дни, следующие за `start`.

        При overwrite=False существующие записи не трогаются.
        """
        for day in following_days(start, self.soft_check_days):
            if overwrite or day not in habit.history:
                habit.history[day] = HabitEntry(value=SOFT_CHECK_VALUE)

        log.debug(f"Мягкие отметки для привычки ID {habit.id} после {start} (перезапись: {overwrite}).")

    def _remove_soft_checks(self, habit: Habit, start: date) -> None:
        """Удаляет записи на дни, следующие за `start`, независимо от их значения."""
        for day in following_days(start, self.soft_check_days):
            habit.history.pop(day, None)

        log.debug(f"Записи для привычки ID {habit.id} после {start} удалены.")

    def _apply_value(self, habit: Habit, day: date, value: float | None, memo: str | None) -> None:
        """Записывает (или очищает при value=None) запись за нормализованный день."""
        if value is not None:
            previous_entry = habit.history.get(day)
            if memo is None and previous_entry is not None:
                memo = previous_entry.memo

            habit.history[day] = HabitEntry(value=value, memo=memo)

            if habit.is_weekly_yes_no and value == HARD_CHECK_VALUE:
                self._add_soft_checks(habit, day, overwrite=True)
        else:
            removed_entry = habit.history.pop(day, None)

            if removed_entry is not None and removed_entry.value == HARD_CHECK_VALUE and habit.is_weekly_yes_no:
                self._remove_soft_checks(habit, day)

        today = self.today()
        if day == today:
            self._refresh_today_cache(habit, today)

    @staticmethod
    def _is_checked_on(habit: Habit, day: date) -> bool:
        """Есть ли за день запись, внесенная пользователем (мягкая отметка не считается)."""
        entry = habit.history.get(day)
        return entry is not None and entry.value > 0 and entry.value != SOFT_CHECK_VALUE

    def _backfill_soft_checks(self, habit: Habit) -> None:
        """Находит последнюю отметку за 7 дней и заполняет мягкими отметками только пустые дни после нее."""
        for day in last_seven_days(self.today()):
            entry = habit.history.get(day)
            if entry is not None and entry.value == HARD_CHECK_VALUE:
                self._add_soft_checks(habit, day, overwrite=False)
                break

    @staticmethod
    def _parse_form_number(raw: str | float | None, field_name: str) -> float | None:
        """Разбирает число из формы. Некорректное значение пропускается."""
        try:
            return parse_number(raw)
        except ParseException as exc:
            log.warning(f"Поле '{field_name}' пропущено: {exc.message}")
            return None

    # --- Снимки коллекции ---

    @property
    def habits(self) -> list[Habit]:
        """Копия коллекции привычек в исходном порядке."""
        return [habit.model_copy(deep=True) for habit in self._habits]

    def get_habit(self, habit_id: UUID) -> Habit | None:
        """Копия привычки по ID или None."""
        try:
            return self._get_habit_by_id(habit_id).model_copy(deep=True)
        except NotFoundException:
            return None

    # --- Команды ---

    @persisted
    def add(
        self,
        title: str,
        habit_type: HabitType | str,
        frequency: HabitFrequency | str = HabitFrequency.DAILY,
        appearance: Appearance | None = None,
        goal: float | None = None,
    ) -> Habit:
        """
        Создает привычку с пустой историей и добавляет ее в конец коллекции.

        Проверки на дубликаты названий нет.

        Returns:
            Habit: Копия созданной привычки.
        """
        habit = Habit(
            title=title,
            habit_type=HabitType(habit_type),
            frequency=HabitFrequency(frequency),
            appearance=appearance.model_copy() if appearance else Appearance(),
            goal=goal,
            creation_date=self.clock(),
        )
        self._habits.append(habit)

        log.info(f"Привычка ID {habit.id} ('{habit.title}') создана.")
        return habit.model_copy(deep=True)

    @persisted
    def toggle(self, habit_id: UUID) -> None:
        """
        Переключает выполнение привычки за сегодня.

        Включение записывает отметку 1.0 (и мягкие отметки на следующие дни для еженедельной привычки,
        с перезаписью). Выключение удаляет сегодняшнюю запись (и записи следующих дней для еженедельной).
        Сегодняшняя мягкая отметка не считается выполнением: переключение поверх нее ставит отметку 1.0.
        """
        habit = self._get_habit_by_id(habit_id)
        today = self.today()

        habit.completed = not self._is_checked_on(habit, today)

        if habit.completed:
            habit.history[today] = HabitEntry(value=HARD_CHECK_VALUE)
            if habit.is_weekly_yes_no:
                self._add_soft_checks(habit, today, overwrite=True)
        else:
            habit.history.pop(today, None)
            if habit.is_weekly_yes_no:
                self._remove_soft_checks(habit, today)

        self._refresh_today_cache(habit, today)
        log.info(f"Привычка ID {habit_id} переключена, выполнена сегодня: {habit.completed}.")

    @persisted
    def set_value(
        self,
        habit_id: UUID,
        day: date | datetime,
        value: float | None = None,
        memo: str | None = None,
    ) -> None:
        """
        Записывает значение за день или очищает день (value=None).

        Если memo не передана, сохраняется прежняя заметка этого дня.
        Отметка 1.0 еженедельной привычки проставляет мягкие отметки на следующие дни с перезаписью,
        очистка такой отметки удаляет записи следующих дней.
        """
        habit = self._get_habit_by_id(habit_id)
        normalized_day = normalize_date(day)

        self._apply_value(habit, normalized_day, value, memo)
        log.info(f"Привычка ID {habit_id}: значение за {normalized_day} -> {value}.")

    @persisted
    def set_memo(self, habit_id: UUID, day: date, memo: str | None) -> None:
        """
        Меняет заметку существующей записи за день (ключ должен быть уже нормализован).

        Новую запись не создает: если записи нет, команда ничего не делает.
        """
        habit = self._get_habit_by_id(habit_id)
        entry = habit.history.get(day)

        if entry is None:
            raise NotFoundException(
                message=f"Запись привычки ID {habit_id} за {day} не найдена.", error_type="entry_not_found"
            )

        entry.memo = memo
        log.info(f"Привычка ID {habit_id}: заметка за {day} обновлена.")

    @persisted
    def set_measurement(self, habit_id: UUID, value: float) -> None:
        """Записывает значение за сегодня для привычки любого типа."""
        habit = self._get_habit_by_id(habit_id)

        self._apply_value(habit, self.today(), value, None)
        log.info(f"Привычка ID {habit_id}: значение за сегодня -> {value}.")

    @persisted
    def toggle_for_date(self, habit_id: UUID, day: date | datetime) -> None:
        """
        Переключение дня в календаре.

        Если запись за день есть, она удаляется вместе с заметкой, иначе записывается отметка 1.0.
        """
        habit = self._get_habit_by_id(habit_id)
        normalized_day = normalize_date(day)

        if normalized_day in habit.history:
            self._apply_value(habit, normalized_day, None, None)
        else:
            self._apply_value(habit, normalized_day, HARD_CHECK_VALUE, None)

        log.info(f"Привычка ID {habit_id}: день {normalized_day} переключен.")

    @persisted
    def delete_habit(self, habit_id: UUID) -> None:
        """Удаляет привычку по ID."""
        habit = self._get_habit_by_id(habit_id)
        self._habits.remove(habit)

        log.info(f"Привычка ID {habit_id} удалена.")

    @persisted
    def delete_at(self, index: int) -> None:
        """
        Удаляет привычку по позиции в коллекции.

        Позиция сначала переводится в ID, дальше удаление идет по ID.
        """
        if not 0 <= index < len(self._habits):
            raise NotFoundException(message=f"Привычки на позиции {index} нет.", error_type="habit_index_not_found")

        habit = self._habits[index]
        self._habits.remove(habit)

        log.info(f"Привычка ID {habit.id} (позиция {index}) удалена.")

    @persisted
    def edit_habit(
        self,
        habit_id: UUID,
        title: str,
        habit_type: HabitType | str,
        frequency: HabitFrequency | str,
        appearance: Appearance,
        measurement: str | float | None = None,
        goal: str | float | None = None,
    ) -> None:
        """
        Редактирует привычку.

        Название, тип, периодичность и цвет перезаписываются напрямую. При смене периодичности
        у YES_NO привычки:
        - daily -> weekly: от последней отметки за 7 дней мягкие отметки ставятся только на пустые дни;
        - weekly -> daily: удаляются все мягкие отметки истории.
        Для MEASURABLE разобранное значение записывается за сегодня, разобранная цель сохраняется.
        Для YES_NO цель сбрасывается. Неразобранные поля пропускаются.
        """
        habit = self._get_habit_by_id(habit_id)
        previous_frequency = habit.frequency

        habit.title = title
        habit.habit_type = HabitType(habit_type)
        habit.frequency = HabitFrequency(frequency)
        habit.appearance = appearance.model_copy()

        if habit.frequency != previous_frequency and habit.habit_type == HabitType.YES_NO:
            if habit.frequency == HabitFrequency.WEEKLY:
                self._backfill_soft_checks(habit)
            else:
                habit.history = {
                    day: entry for day, entry in habit.history.items() if entry.value != SOFT_CHECK_VALUE
                }
                log.debug(f"Мягкие отметки привычки ID {habit_id} удалены.")

        if habit.habit_type == HabitType.MEASURABLE:
            new_measurement = self._parse_form_number(measurement, "measurement")
            if new_measurement is not None:
                self._apply_value(habit, self.today(), new_measurement, None)

            new_goal = self._parse_form_number(goal, "goal")
            if new_goal is not None:
                habit.goal = new_goal
        else:
            habit.goal = None

        log.info(f"Привычка ID {habit_id} отредактирована.")

    # --- Запросы ---

    def streak(self, habit: Habit) -> int:
        """Серия дней подряд от самой свежей записи."""
        return habit_stats.calculate_streak(habit)

    def completion_rate(self, habit: Habit) -> float:
        """Доля дней с записями с момента создания."""
        return habit_stats.completion_rate(habit, self.clock())

    def weekly_series(self, habit: Habit) -> list[float]:
        """Значения за последние 7 дней, от старого к сегодняшнему."""
        return habit_stats.weekly_series(habit, self.today())

    def monthly_series(self, habit: Habit) -> list[int]:
        """Количество записей по месяцам текущего года."""
        return habit_stats.monthly_series(habit, self.today())

    def is_soft_check(self, habit: Habit, day: date | datetime) -> bool:
        """Является ли запись за день мягкой отметкой."""
        return habit_stats.is_soft_check(habit, day)

    def goal_achieved(self, habit: Habit, value: float) -> bool:
        """Достигает ли значение цели измеримой привычки."""
        return habit_stats.goal_achieved(habit, value)

    def history_entries(self, habit: Habit) -> list[tuple[date, HabitEntry]]:
        """История привычки от свежих записей к старым."""
        return habit_stats.history_entries(habit)
