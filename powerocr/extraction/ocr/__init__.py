"""
OCR: движки распознавания, выбор языка и сборка текста.
"""

from .base import BaseRecognizer
from .google_vision_ocr import GoogleVisionOCR
from .language_selector import LanguageSelector
from .result_assembler import ResultAssembler
from .tesseract_ocr import TesseractOCR

__all__ = [
    "BaseRecognizer",
    "GoogleVisionOCR",
    "LanguageSelector",
    "ResultAssembler",
    "TesseractOCR",
]
