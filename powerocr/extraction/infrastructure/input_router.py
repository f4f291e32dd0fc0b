"""
Маршрутизация входного файла по расширению.

Проверки выполняются ДО любой тяжёлой работы (декодирование, рендер, OCR):
файл должен существовать и иметь поддерживаемое расширение.
"""

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from loguru import logger

from config.settings import SUPPORTED_DOCUMENT_FORMATS, SUPPORTED_IMAGE_FORMATS
from ..domain.exceptions import InputNotFoundError, UnsupportedFormatError


class InputKind(str, Enum):
    """Тип входа."""

    IMAGE = "image"
    DOCUMENT = "document"


class InputRouter:
    """Определяет InputKind по расширению файла (без учёта регистра)."""

    def __init__(
        self,
        image_formats: Optional[Iterable[str]] = None,
        document_formats: Optional[Iterable[str]] = None
    ):
        self.image_formats = {ext.lower() for ext in (image_formats or SUPPORTED_IMAGE_FORMATS)}
        self.document_formats = {ext.lower() for ext in (document_formats or SUPPORTED_DOCUMENT_FORMATS)}

    def kind_for_extension(self, path: Union[str, Path]) -> InputKind:
        """
        Raises:
            UnsupportedFormatError: расширение не поддерживается
        """
        extension = Path(path).suffix.lower()
        if extension in self.document_formats:
            return InputKind.DOCUMENT
        if extension in self.image_formats:
            return InputKind.IMAGE
        raise UnsupportedFormatError(path, extension, component="InputRouter")

    def resolve(self, path: Union[str, Path]) -> InputKind:
        """
        Проверяет существование файла и определяет его тип.

        Raises:
            InputNotFoundError: файла нет
            UnsupportedFormatError: расширение не поддерживается
        """
        full_path = Path(path).resolve()
        if not full_path.is_file():
            raise InputNotFoundError(full_path, component="InputRouter")

        kind = self.kind_for_extension(full_path)
        logger.debug(f"[InputRouter] {full_path.name} -> {kind.value}")
        return kind
