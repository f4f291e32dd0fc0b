"""PowerOCR - извлечение текста из изображений и PDF."""

__version__ = "0.1.0"
