"""
Инфраструктурный слой домена Extraction.

Растеризатор PDF, маршрутизация входа и файловые операции.
"""

from .file_manager import ExtractionFileManager
from .input_router import InputKind, InputRouter
from .pdfium_rasterizer import PdfDocumentHandle, PdfiumRasterizer

__all__ = [
    # Документы
    "PdfDocumentHandle",
    "PdfiumRasterizer",

    # Вход/выход
    "InputKind",
    "InputRouter",
    "ExtractionFileManager",
]
