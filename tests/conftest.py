"""
Общие fixtures: фейковый движок OCR и фейковый растеризатор.

Ни сети, ни бинарника Tesseract тестам не нужно.
"""

from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

import numpy as np
import pytest

from contracts.ocr_text_dto import RasterImage, RecognitionResult, RecognizedLine, RecognizedWord
from powerocr.domain.contracts import Language, RenderOptions
from powerocr.extraction.domain.exceptions import PageIndexError, RecognitionError
from powerocr.extraction.domain.interfaces import IPageRasterizer, IRecognitionCapability


class FakeRecognizer(IRecognitionCapability):
    """
    Движок OCR для тестов.

    texts[i] - строки, которые вернёт i-й вызов recognize.
    """

    name = "fake"

    def __init__(
        self,
        languages: Sequence[str] = ("en-US",),
        texts: Optional[List[List[str]]] = None,
        fail_on_call: Optional[int] = None,
        on_recognize: Optional[Callable[[int], None]] = None,
        max_image_dimension: int = 10000
    ):
        self.languages = list(languages)
        self.texts = list(texts or [])
        self.fail_on_call = fail_on_call
        self.on_recognize = on_recognize
        self._max_image_dimension = max_image_dimension
        self.calls: List[tuple] = []

    @property
    def max_image_dimension(self) -> int:
        return self._max_image_dimension

    def available_languages(self) -> List[str]:
        return list(self.languages)

    def is_language_supported(self, tag: str) -> bool:
        return tag.lower() in {lang.lower() for lang in self.languages}

    def recognize(self, image: RasterImage, language: Language) -> RecognitionResult:
        call_index = len(self.calls)
        self.calls.append((image, language))

        if self.on_recognize is not None:
            self.on_recognize(call_index)

        if self.fail_on_call == call_index:
            raise RecognitionError(message=f"Сбой на вызове {call_index}", component=self.name)

        lines = self.texts[call_index] if call_index < len(self.texts) else []
        return RecognitionResult(lines=[
            RecognizedLine(text=line, words=[RecognizedWord(text=w) for w in line.split()])
            for line in lines
        ])


class FakeDocument:
    def __init__(self, page_count: int):
        self.page_count = page_count
        self.closed = False


class FakeRasterizer(IPageRasterizer):
    """Растеризатор для тестов: белые страницы, журнал рендера."""

    def __init__(self, page_count: int = 1, width: int = 40, height: int = 20):
        self.page_count = page_count
        self.width = width
        self.height = height
        self.rendered: List[int] = []
        self.documents: List[FakeDocument] = []

    @contextmanager
    def open(self, path):
        document = FakeDocument(self.page_count)
        self.documents.append(document)
        try:
            yield document
        finally:
            document.closed = True

    def render(self, document, page_index: int, options: RenderOptions) -> RasterImage:
        if page_index < 0 or page_index >= document.page_count:
            raise PageIndexError(page_index, document.page_count, component="FakeRasterizer")
        self.rendered.append(page_index)
        pixels = np.full((self.height, self.width, 3), 255, dtype=np.uint8)
        return RasterImage.from_array(pixels, options.dpi, options.dpi)


@pytest.fixture
def make_recognizer():
    """Fixture: фабрика FakeRecognizer."""
    return FakeRecognizer


@pytest.fixture
def make_rasterizer():
    """Fixture: фабрика FakeRasterizer."""
    return FakeRasterizer


@pytest.fixture
def bgr_image():
    """Fixture: BGR изображение 10x5 (чёрное)."""
    return RasterImage.from_array(np.zeros((5, 10, 3), dtype=np.uint8))


@pytest.fixture
def gray_image():
    """Fixture: Grayscale изображение 10x5 (чёрное)."""
    return RasterImage.from_array(np.zeros((5, 10), dtype=np.uint8))


@pytest.fixture
def bgra_image():
    """Fixture: BGRA изображение 10x5, полупрозрачное."""
    pixels = np.zeros((5, 10, 4), dtype=np.uint8)
    pixels[:, :, 0] = 10
    pixels[:, :, 1] = 20
    pixels[:, :, 2] = 30
    pixels[:, :, 3] = 128
    return RasterImage.from_array(pixels)
