"""
Домен Extraction: Pre-OCR + OCR обработка.

Этот домен отвечает за:
1. Pre-OCR обработку изображений (pad, invert, scale)
2. Растеризацию страниц PDF
3. Выполнение OCR (Tesseract / Google Vision)
4. Сборку текста документа с маркерами страниц
"""

# Экспортируем основные классы
from .pre_ocr.pipeline import PowerPreOCRPipeline
from .ocr.tesseract_ocr import TesseractOCR
from .ocr.google_vision_ocr import GoogleVisionOCR

# Экспортируем application слой
from .application.factory import ExtractionComponentFactory
from .application.extraction_pipeline import DocumentPipeline, RunState

__all__ = [
    # Основные классы
    "PowerPreOCRPipeline",
    "TesseractOCR",
    "GoogleVisionOCR",

    # Application слой
    "ExtractionComponentFactory",
    "DocumentPipeline",
    "RunState",
]
