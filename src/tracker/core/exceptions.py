"""
Исключения трекера.

Все ошибки трекера локальны и не фатальны: они выбрасываются внутри слоев
(поиск привычки, разбор ввода, хранилище) и обрабатываются на границе движка
или хранилища, так что вызывающий код их не получает.
"""


class AppException(Exception):
    """
    Базовое исключение приложения.

    Attributes:
        message: Человекочитаемое описание ошибки.
        error_type: Машиночитаемый код ошибки.
    """

    def __init__(self, message: str, error_type: str = "app_error"):
        super().__init__(message)
        self.message = message
        self.error_type = error_type


class NotFoundException(AppException):
    """Привычка (по ID или позиции) не найдена."""

    def __init__(self, message: str = "Ресурс не найден.", error_type: str = "not_found"):
        super().__init__(message=message, error_type=error_type)


class ParseException(AppException):
    """Значение из формы не удалось разобрать как число."""

    def __init__(self, message: str = "Некорректное числовое значение.", error_type: str = "parse_error"):
        super().__init__(message=message, error_type=error_type)


class StorageException(AppException):
    """Ошибка чтения или записи хранилища (включая ошибки декодирования)."""

    def __init__(self, message: str = "Ошибка хранилища.", error_type: str = "storage_error"):
        super().__init__(message=message, error_type=error_type)
