"""
Domain слой домена Extraction.

Содержит интерфейсы (абстрактные классы) и исключения для Extraction домена.
"""

from .interfaces import (
    IRecognitionCapability,
    IImagePreprocessor,
    IPageRasterizer,
    IDocumentPipeline,
)

from .exceptions import (
    ExtractionError,
    InputNotFoundError,
    UnsupportedFormatError,
    CorruptInputError,
    DocumentError,
    CorruptDocumentError,
    PageIndexError,
    RecognitionError,
    ConfigurationError,
    ExtractionCancelledError,
    ExtractionFileWriteError,
)

__all__ = [
    # Интерфейсы
    "IRecognitionCapability",
    "IImagePreprocessor",
    "IPageRasterizer",
    "IDocumentPipeline",

    # Исключения
    "ExtractionError",
    "InputNotFoundError",
    "UnsupportedFormatError",
    "CorruptInputError",
    "DocumentError",
    "CorruptDocumentError",
    "PageIndexError",
    "RecognitionError",
    "ConfigurationError",
    "ExtractionCancelledError",
    "ExtractionFileWriteError",
]
