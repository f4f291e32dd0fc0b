"""
Менеджер файлов для домена Extraction.

Результат сохраняется рядом с входным файлом: `<input>.txt` (scan.pdf -> scan.pdf.txt).
"""

from pathlib import Path
from typing import Union

from loguru import logger

from config.settings import OUTPUT_ENCODING, OUTPUT_SUFFIX
from ..domain.exceptions import ExtractionFileWriteError


class ExtractionFileManager:
    """Менеджер файлов для домена Extraction."""

    def __init__(self, suffix: str = OUTPUT_SUFFIX, encoding: str = OUTPUT_ENCODING):
        self.suffix = suffix
        self.encoding = encoding

    def output_path_for(self, input_path: Union[str, Path]) -> Path:
        """Путь результата: к полному имени входного файла дописывается суффикс."""
        input_path = Path(input_path)
        return input_path.with_name(input_path.name + self.suffix)

    def save_text(self, text: str, input_path: Union[str, Path]) -> Path:
        """
        Сохраняет распознанный текст рядом с входным файлом.

        Args:
            text: Текст целиком
            input_path: Путь к входному файлу

        Returns:
            Путь к сохраненному файлу

        Raises:
            ExtractionFileWriteError: Если не удалось сохранить файл
        """
        file_path = self.output_path_for(input_path)
        try:
            # newline="" -> "\n" пишется как есть на любой ОС
            with open(file_path, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
        except (IOError, OSError) as e:
            raise ExtractionFileWriteError(
                message=f"Не удалось сохранить текст: {file_path}",
                component="ExtractionFileManager",
                original_error=e
            )

        logger.debug(f"[Extraction] Файл сохранен: {file_path} ({len(text)} символов)")
        return file_path
