"""
Интерфейсы (абстрактные классы) для домена Extraction.

Домен Extraction отвечает за:
1. Preprocessing изображений (pad -> invert -> scale)
2. OCR распознавание текста через внешний движок
3. Растеризацию страниц документа
4. Сборку текста изображения/документа
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ContextManager, List

from contracts.ocr_text_dto import RasterImage, RecognitionResult
from powerocr.domain.contracts import Language, RenderOptions


class IRecognitionCapability(ABC):
    """
    Интерфейс для движков OCR (домен Extraction).

    Пайплайн зависит только от этого интерфейса, никогда от конкретного движка.
    """

    name: str = "unknown"

    @property
    @abstractmethod
    def max_image_dimension(self) -> int:
        """Максимальная сторона изображения, которую принимает движок."""
        pass

    @abstractmethod
    def available_languages(self) -> List[str]:
        """
        Теги доступных языков в порядке, который сообщает движок.

        Returns:
            Список тегов (может быть пустым)
        """
        pass

    @abstractmethod
    def is_language_supported(self, tag: str) -> bool:
        """Поддерживает ли движок язык с данным тегом."""
        pass

    @abstractmethod
    def recognize(self, image: RasterImage, language: Language) -> RecognitionResult:
        """
        Распознаёт текст на изображении.

        Args:
            image: Подготовленное изображение
            language: Язык распознавания

        Returns:
            RecognitionResult: строки сверху вниз, слова в порядке чтения

        Raises:
            RecognitionError: пустое/битое/слишком большое изображение,
                неподдерживаемый язык или сбой движка
        """
        pass


class IImagePreprocessor(ABC):
    """Интерфейс для препроцессоров изображений (домен Extraction)."""

    @abstractmethod
    def process(self, image: RasterImage) -> RasterImage:
        """
        Обрабатывает изображение перед OCR.

        Чистая функция: вход не меняется, возвращается новый RasterImage.
        """
        pass


class IPageRasterizer(ABC):
    """Интерфейс растеризатора страниц документа."""

    @abstractmethod
    def open(self, path: Path) -> ContextManager[Any]:
        """
        Открывает документ.

        Использование:
            with rasterizer.open(path) as document:
                document.page_count

        Raises:
            CorruptDocumentError: документ не читается
        """
        pass

    @abstractmethod
    def render(self, document: Any, page_index: int, options: RenderOptions) -> RasterImage:
        """
        Рендерит одну страницу (index с 0).

        Raises:
            PageIndexError: индекс вне диапазона
            DocumentError: сбой рендера
        """
        pass


class IDocumentPipeline(ABC):
    """Интерфейс для пайплайна extraction (домен Extraction)."""

    @abstractmethod
    def process_image(self, image: RasterImage) -> str:
        """Preprocess -> Recognize -> Assemble для одного изображения."""
        pass

    @abstractmethod
    def process_document(self, document: Any) -> str:
        """Постраничная обработка документа с маркерами страниц."""
        pass

    @abstractmethod
    def process_file(self, path: Path) -> str:
        """Маршрутизирует файл (изображение/документ) и обрабатывает его."""
        pass
