"""
Application слой домена Extraction.

Содержит фабрики и оркестраторы для использования компонентов.
"""

from .factory import ExtractionComponentFactory
from .extraction_pipeline import DocumentPipeline, RunState

__all__ = [
    "ExtractionComponentFactory",
    "DocumentPipeline",
    "RunState",
]
