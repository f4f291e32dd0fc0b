"""
DTO контракт: Pre-OCR -> OCR -> Сборка текста.

Растровое изображение, результат распознавания (строки/слова)
и агрегированный текст документа по страницам.

ВАЖНО: RasterImage неизменяем. Каждая стадия возвращает НОВЫЙ экземпляр,
буфер пикселей помечается read-only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

import numpy as np
import numpy.typing as npt


PAGE_MARKER_TEMPLATE = "--- Page {number} ---"


class PixelFormat(str, Enum):
    """Формат пикселей (порядок каналов как в OpenCV)."""
    GRAY = "gray"      # 1 канал
    BGR = "bgr"        # 3 канала
    BGRA = "bgra"      # 4 канала, альфа последней

    @property
    def has_alpha(self) -> bool:
        return self is PixelFormat.BGRA

    @classmethod
    def from_array(cls, pixels: npt.NDArray[np.uint8]) -> "PixelFormat":
        """Определяет формат по форме массива (H, W) / (H, W, C)."""
        if pixels.ndim == 2:
            return cls.GRAY
        if pixels.ndim == 3:
            channels = pixels.shape[2]
            if channels == 1:
                return cls.GRAY
            if channels == 3:
                return cls.BGR
            if channels == 4:
                return cls.BGRA
        raise ValueError(f"Неподдерживаемая форма массива пикселей: {pixels.shape}")


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Неизменяемое растровое изображение.

    pixels: np.ndarray uint8, (H, W) для GRAY или (H, W, C) для BGR/BGRA
    """
    pixels: npt.NDArray[np.uint8]
    pixel_format: PixelFormat
    horizontal_resolution: float = 96.0
    vertical_resolution: float = 96.0

    def __post_init__(self) -> None:
        pixels = self.pixels
        if pixels.dtype != np.uint8:
            raise ValueError(f"Ожидается uint8, получено: {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels[:, :, 0]
        if PixelFormat.from_array(pixels) is not self.pixel_format:
            raise ValueError(
                f"Форма {pixels.shape} не соответствует формату {self.pixel_format.value}"
            )
        if pixels.flags.writeable:
            pixels = pixels.copy()
            pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_array(
        cls,
        pixels: npt.NDArray[np.uint8],
        horizontal_resolution: float = 96.0,
        vertical_resolution: float = 96.0,
    ) -> "RasterImage":
        return cls(
            pixels=pixels,
            pixel_format=PixelFormat.from_array(pixels),
            horizontal_resolution=horizontal_resolution,
            vertical_resolution=vertical_resolution,
        )

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass(frozen=True)
class Page:
    """Страница документа после растеризации (index с 0)."""
    index: int
    image: RasterImage


@dataclass(frozen=True)
class RecognizedWord:
    text: str


@dataclass(frozen=True)
class RecognizedLine:
    """
    Строка, как её вернул движок.

    text: "родной" текст строки (с правильными пробелами или без них)
    words: слова в порядке чтения
    """
    text: str
    words: List[RecognizedWord] = field(default_factory=list)


@dataclass(frozen=True)
class RecognitionResult:
    """Строки сверху вниз, в порядке движка. Никогда не переупорядочиваются."""
    lines: List[RecognizedLine] = field(default_factory=list)

    def has_content(self) -> bool:
        return any(line.text.strip() for line in self.lines)


@dataclass(frozen=True)
class PageText:
    page_index: int
    text: str


@dataclass
class DocumentText:
    """
    Текст документа по страницам.

    Страницы добавляются строго по возрастанию page_index.
    """
    pages: List[PageText] = field(default_factory=list)

    def append(self, page_index: int, text: str) -> None:
        if self.pages and page_index <= self.pages[-1].page_index:
            raise ValueError(
                f"Страница {page_index} добавлена после {self.pages[-1].page_index}: "
                f"нарушен порядок страниц"
            )
        self.pages.append(PageText(page_index=page_index, text=text))

    def to_text(self) -> str:
        """
        Склеивает страницы: маркер, текст страницы, пустая строка.

        Пример для одной страницы: "--- Page 1 ---\\nHELLO\\n\\n"
        """
        chunks = []
        for page in self.pages:
            chunks.append(PAGE_MARKER_TEMPLATE.format(number=page.page_index + 1) + "\n")
            chunks.append(page.text + "\n")
            chunks.append("\n")
        return "".join(chunks)
