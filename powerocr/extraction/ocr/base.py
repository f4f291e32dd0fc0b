"""
Общая часть движков OCR: проверка входа до обращения к движку.
"""

from typing import List

from loguru import logger

from config.settings import MAX_IMAGE_DIMENSION
from contracts.ocr_text_dto import RasterImage
from powerocr.domain.contracts import Language
from ..domain.exceptions import RecognitionError
from ..domain.interfaces import IRecognitionCapability


class BaseRecognizer(IRecognitionCapability):
    """
    База для движков OCR.

    Отклоняет (RecognitionError) пустые изображения, изображения больше
    max_image_dimension и неподдерживаемые языки ДО вызова движка.
    """

    name = "base"

    def __init__(self, max_image_dimension: int = MAX_IMAGE_DIMENSION):
        self._max_image_dimension = max_image_dimension

    @property
    def max_image_dimension(self) -> int:
        return self._max_image_dimension

    def is_language_supported(self, tag: str) -> bool:
        lowered = tag.lower()
        return any(candidate.lower() == lowered for candidate in self.available_languages())

    def available_languages(self) -> List[str]:
        raise NotImplementedError

    def _validate_input(self, image: RasterImage, language: Language) -> None:
        if image.is_empty:
            raise RecognitionError(
                message=f"Пустое изображение: {image.width}x{image.height}",
                component=self.name
            )

        if image.width > self.max_image_dimension or image.height > self.max_image_dimension:
            raise RecognitionError(
                message=(
                    f"Изображение {image.width}x{image.height} больше лимита движка "
                    f"{self.max_image_dimension}px"
                ),
                component=self.name
            )

        if not self.is_language_supported(language.tag):
            raise RecognitionError(
                message=f"Язык не поддерживается движком: {language.tag}",
                component=self.name
            )

        logger.debug(
            f"[{self.name}] Вход проверен: {image.width}x{image.height}, язык={language.tag}"
        )
