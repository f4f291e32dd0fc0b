"""
Пайплайн для домена Extraction.

Обрабатывает изображения и документы через:
1. Preprocessing изображения (pad -> invert -> scale)
2. OCR распознавание текста
3. Сборку текста по правилу склейки выбранного языка

Документ обрабатывается постранично, строго по возрастанию индекса страницы.
Ошибка на любой странице прерывает весь документ: частичного результата нет.

Состояния прогона:
  IDLE -> VALIDATING_INPUT -> RASTERIZING -> PREPROCESSING -> RECOGNIZING
  -> ASSEMBLING -> (следующая страница | DONE), любая ошибка -> FAILED
"""

import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from loguru import logger

from contracts.ocr_text_dto import DocumentText, Page, RasterImage
from powerocr.domain.contracts import Language, RenderOptions
from ..domain.exceptions import ExtractionCancelledError
from ..domain.interfaces import (
    IDocumentPipeline,
    IImagePreprocessor,
    IPageRasterizer,
    IRecognitionCapability,
)
from ..infrastructure.input_router import InputKind, InputRouter
from ..infrastructure.pdfium_rasterizer import PdfiumRasterizer
from ..ocr.language_selector import LanguageSelector
from ..ocr.result_assembler import ResultAssembler
from ..pre_ocr.image_decoder import ImageDecoder
from ..pre_ocr.pipeline import PowerPreOCRPipeline


T = TypeVar("T")


class RunState(str, Enum):
    """Состояние прогона пайплайна."""

    IDLE = "idle"
    VALIDATING_INPUT = "validating_input"
    RASTERIZING = "rasterizing"
    PREPROCESSING = "preprocessing"
    RECOGNIZING = "recognizing"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


class DocumentPipeline(IDocumentPipeline):
    """
    Пайплайн домена Extraction.

    Координирует:
    1. Растеризацию страниц документа (для PDF)
    2. Preprocessing изображения
    3. OCR распознавание
    4. Сборку текста страниц с маркерами

    Язык выбирается один раз при создании (LanguageSelector).
    """

    def __init__(
        self,
        capability: IRecognitionCapability,
        preprocessor: Optional[IImagePreprocessor] = None,
        rasterizer: Optional[IPageRasterizer] = None,
        language_tag: Optional[str] = None,
        render_options: Optional[RenderOptions] = None,
        router: Optional[InputRouter] = None,
        language_selector: Optional[LanguageSelector] = None
    ):
        """
        Инициализация пайплайна extraction.

        Args:
            capability: Движок OCR
            preprocessor: Препроцессор (по умолчанию PowerPreOCRPipeline)
            rasterizer: Растеризатор документов (по умолчанию PdfiumRasterizer)
            language_tag: Запрошенный язык (по умолчанию из settings)
            render_options: Параметры рендера страниц
            router: Маршрутизатор входных файлов

        Raises:
            ConfigurationError: движок не сообщает ни одного языка
        """
        self.capability = capability
        self.preprocessor = preprocessor or PowerPreOCRPipeline()
        self.rasterizer = rasterizer or PdfiumRasterizer()
        self.render_options = render_options or RenderOptions()
        self.router = router or InputRouter()

        selector = language_selector or LanguageSelector()
        self.language: Language = selector.select(capability, language_tag)
        self._state = RunState.IDLE

        logger.info(
            f"[Extraction] Pipeline инициализирован: движок={capability.name}, "
            f"язык={self.language.tag}"
        )

    @property
    def state(self) -> RunState:
        return self._state

    def _transition(self, state: RunState, page_index: Optional[int] = None) -> None:
        where = f" (страница {page_index + 1})" if page_index is not None else ""
        logger.debug(f"[Extraction] {self._state.value} -> {state.value}{where}")
        self._state = state

    def _run(self, work: Callable[[], T]) -> T:
        self._transition(RunState.VALIDATING_INPUT)
        try:
            result = work()
        except Exception as e:
            self._transition(RunState.FAILED)
            logger.error(f"[Extraction] Ошибка: {e}")
            raise
        self._transition(RunState.DONE)
        return result

    # ------------------------------------------------------------------
    # Публичный API
    # ------------------------------------------------------------------

    def process_image(self, image: RasterImage) -> str:
        """
        Preprocess -> Recognize -> Assemble для одного изображения.

        Returns:
            Текст изображения (без маркеров страниц)
        """
        return self._run(lambda: self._image_text(image))

    def process_document(self, document, cancel_event: Optional[threading.Event] = None) -> str:
        """
        Обрабатывает открытый документ постранично.

        Args:
            document: Документ из rasterizer.open(...)
            cancel_event: Если установлен, обработка прерывается перед следующей страницей

        Returns:
            Текст страниц с маркерами "--- Page N ---"

        Raises:
            ExtractionCancelledError: cancel_event установлен
        """
        return self._run(lambda: self._document_text(document, cancel_event))

    def process_file(
        self,
        path: Union[str, Path],
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """
        Маршрутизирует файл и обрабатывает его.

        Raises:
            InputNotFoundError: файла нет
            UnsupportedFormatError: расширение не поддерживается
        """
        return self._run(lambda: self._file_text(Path(path), cancel_event))

    # ------------------------------------------------------------------
    # Этапы
    # ------------------------------------------------------------------

    def _file_text(self, path: Path, cancel_event: Optional[threading.Event]) -> str:
        kind = self.router.resolve(path)
        logger.info(f"[Extraction] Обработка: {path.name} ({kind.value})")

        if kind is InputKind.IMAGE:
            image = ImageDecoder.read(path)
            return self._image_text(image)

        with self.rasterizer.open(path) as document:
            return self._document_text(document, cancel_event)

    def _document_text(self, document, cancel_event: Optional[threading.Event]) -> str:
        page_count = document.page_count
        output = DocumentText()

        for page_index in range(page_count):
            if cancel_event is not None and cancel_event.is_set():
                raise ExtractionCancelledError(
                    message=f"Обработка отменена перед страницей {page_index + 1} из {page_count}",
                    component="DocumentPipeline"
                )

            logger.info(f"[Extraction] Processing page {page_index + 1} of {page_count}")
            try:
                self._transition(RunState.RASTERIZING, page_index)
                page = Page(
                    index=page_index,
                    image=self.rasterizer.render(document, page_index, self.render_options),
                )
                text = self._image_text(page.image, page_index)
            except Exception:
                logger.error(f"[Extraction] Сбой на странице {page_index + 1} из {page_count}")
                raise

            output.append(page_index, text)

        logger.info(f"[Extraction] Готово: страниц {page_count}")
        return output.to_text()

    def _image_text(self, image: RasterImage, page_index: Optional[int] = None) -> str:
        self._transition(RunState.PREPROCESSING, page_index)
        processed = self.preprocessor.process(image)

        self._transition(RunState.RECOGNIZING, page_index)
        result = self.capability.recognize(processed, self.language)
        if not result.has_content():
            logger.debug("[Extraction] Движок не нашёл текста")

        self._transition(RunState.ASSEMBLING, page_index)
        text = ResultAssembler.assemble(result, self.language)

        logger.debug(f"[Extraction] Строк: {len(result.lines)}, символов: {len(text)}")
        return text
