"""
Фабрика для создания компонентов домена Extraction.

Предоставляет удобные методы для создания и конфигурации
всех компонентов домена Extraction через единый интерфейс.
"""

from typing import Any, Optional

from loguru import logger

from config.settings import AVAILABLE_OCR_ENGINES, OCR_ENGINE
from powerocr.domain.contracts import PreprocessingOptions, RenderOptions
from ..domain.exceptions import ConfigurationError
from ..domain.interfaces import IImagePreprocessor, IPageRasterizer, IRecognitionCapability
from ..infrastructure.file_manager import ExtractionFileManager
from ..infrastructure.pdfium_rasterizer import PdfiumRasterizer
from ..ocr.google_vision_ocr import GoogleVisionOCR
from ..ocr.tesseract_ocr import TesseractOCR
from ..pre_ocr.pipeline import PowerPreOCRPipeline
from .extraction_pipeline import DocumentPipeline


class ExtractionComponentFactory:
    """
    Фабрика для создания компонентов домена Extraction.

    Домен Extraction отвечает за:
    - Preprocessing изображений
    - OCR распознавание текста (Tesseract или Google Vision)
    - Сохранение текста в <input>.txt
    """

    @staticmethod
    def create_recognizer(engine: Optional[str] = None, **kwargs: Any) -> IRecognitionCapability:
        """
        Создает движок OCR по имени.

        Args:
            engine: "tesseract" | "google_vision" (по умолчанию из settings)
            **kwargs: Параметры конструктора движка

        Raises:
            ConfigurationError: Неизвестное имя движка
        """
        engine = engine or OCR_ENGINE
        logger.debug(f"[Extraction] Создание OCR движка: {engine}")

        if engine == "tesseract":
            return TesseractOCR(**kwargs)
        if engine == "google_vision":
            return GoogleVisionOCR(**kwargs)

        raise ConfigurationError(
            message=f"Неизвестный OCR движок: {engine} (доступны: {', '.join(AVAILABLE_OCR_ENGINES)})",
            component="ExtractionComponentFactory"
        )

    @staticmethod
    def create_image_preprocessor(options: Optional[PreprocessingOptions] = None) -> IImagePreprocessor:
        logger.debug("[Extraction] Создание препроцессора изображений")
        return PowerPreOCRPipeline(options)

    @staticmethod
    def create_rasterizer() -> IPageRasterizer:
        logger.debug("[Extraction] Создание растеризатора PDF")
        return PdfiumRasterizer()

    @staticmethod
    def create_file_manager() -> ExtractionFileManager:
        logger.debug("[Extraction] Создание менеджера файлов")
        return ExtractionFileManager()

    @staticmethod
    def create_document_pipeline(
        engine: Optional[str] = None,
        language_tag: Optional[str] = None,
        capability: Optional[IRecognitionCapability] = None,
        preprocessor: Optional[IImagePreprocessor] = None,
        rasterizer: Optional[IPageRasterizer] = None,
        render_options: Optional[RenderOptions] = None
    ) -> DocumentPipeline:
        """
        Создает пайплайн extraction.

        Args:
            engine: Имя движка (если capability не передан)
            language_tag: Запрошенный язык
            capability: Готовый движок OCR (опционально)
            preprocessor: Препроцессор изображений (опционально)
            rasterizer: Растеризатор документов (опционально)
            render_options: Параметры рендера страниц (опционально)

        Returns:
            DocumentPipeline с выбранным языком

        Raises:
            ConfigurationError: неизвестный движок или у движка нет языков
        """
        logger.debug("[Extraction] Создание пайплайна extraction")

        # Создаем компоненты если они не предоставлены
        if capability is None:
            capability = ExtractionComponentFactory.create_recognizer(engine)

        if preprocessor is None:
            preprocessor = ExtractionComponentFactory.create_image_preprocessor()

        if rasterizer is None:
            rasterizer = ExtractionComponentFactory.create_rasterizer()

        return DocumentPipeline(
            capability=capability,
            preprocessor=preprocessor,
            rasterizer=rasterizer,
            language_tag=language_tag,
            render_options=render_options,
        )

