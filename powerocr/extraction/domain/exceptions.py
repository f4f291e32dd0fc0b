"""
Исключения для домена Extraction.

Таксономия:
- InputNotFoundError: входного файла нет (ничего не обрабатываем)
- UnsupportedFormatError: расширение не поддерживается
- CorruptInputError: кодек не смог декодировать байты
- DocumentError: ошибка растеризатора документа
- RecognitionError: движок OCR отклонил изображение или упал
- ConfigurationError: нет ни одного доступного языка распознавания
"""

from typing import Optional


class ExtractionError(Exception):
    """Базовое исключение для ошибок домена Extraction."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Extraction Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class InputNotFoundError(ExtractionError):
    """Входной файл не найден."""

    def __init__(self, path, component: Optional[str] = None):
        self.path = path
        super().__init__(message=f"Файл не найден: {path}", component=component)


class UnsupportedFormatError(ExtractionError):
    """Формат файла не поддерживается."""

    def __init__(self, path, extension: str, component: Optional[str] = None):
        self.path = path
        self.extension = extension
        super().__init__(
            message=f"Формат {extension or '<без расширения>'} не поддерживается: {path}",
            component=component,
        )


class CorruptInputError(ExtractionError):
    """Не удалось декодировать изображение/документ."""
    pass


class DocumentError(ExtractionError):
    """Ошибка растеризатора документа."""
    pass


class CorruptDocumentError(DocumentError, CorruptInputError):
    """Документ не читается (повреждён или не PDF)."""
    pass


class PageIndexError(DocumentError):
    """Индекс страницы вне диапазона."""

    def __init__(self, page_index: int, page_count: int, component: Optional[str] = None):
        self.page_index = page_index
        self.page_count = page_count
        super().__init__(
            message=f"Страница {page_index} вне диапазона (0..{page_count - 1})",
            component=component,
        )


class RecognitionError(ExtractionError):
    """Ошибка распознавания текста."""
    pass


class ConfigurationError(ExtractionError):
    """Ошибка конфигурации домена Extraction."""
    pass


class ExtractionCancelledError(ExtractionError):
    """Обработка документа отменена между страницами."""
    pass


class ExtractionFileWriteError(ExtractionError):
    """Ошибка записи файла в домене Extraction."""
    pass
