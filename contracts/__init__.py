"""
Контракты DTO проекта PowerOCR.

Контракты:
- Pre-OCR -> OCR: RasterImage, Page (ocr_text_dto.py)
- OCR -> Сборка: RecognitionResult, RecognizedLine, RecognizedWord
- Сборка -> Выход: DocumentText, PageText
"""

from .ocr_text_dto import (
    PAGE_MARKER_TEMPLATE,
    PixelFormat,
    RasterImage,
    Page,
    RecognizedWord,
    RecognizedLine,
    RecognitionResult,
    PageText,
    DocumentText,
)

__all__ = [
    "PAGE_MARKER_TEMPLATE",
    "PixelFormat",
    "RasterImage",
    "Page",
    "RecognizedWord",
    "RecognizedLine",
    "RecognitionResult",
    "PageText",
    "DocumentText",
]
