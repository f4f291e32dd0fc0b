"""
Pre-OCR Pipeline для домена Extraction.

3-stage оркестратор (порядок фиксирован):
1. Padding: белая рамка + минимальный размер холста
2. Inversion: инверсия цветовых каналов (альфа без изменений)
3. Scaling: апскейл x2 бикубически, если результат помещается в лимит движка

КРИТИЧЕСКОЕ: Scaling ПОСЛЕДНИЙ, лимит проверяется на уже дополненном изображении.

Пайплайн чистый: повторный вызов на том же входе даёт тот же результат.
"""

from typing import Optional

from loguru import logger

from contracts.ocr_text_dto import RasterImage
from powerocr.domain.contracts import PreprocessingOptions
from ..domain.interfaces import IImagePreprocessor
from .s1_padding import ImagePaddingStage
from .s2_inversion import ImageInversionStage
from .s3_scaling import ImageScalingStage


class PowerPreOCRPipeline(IImagePreprocessor):
    """
    Пайплайн препроцессинга (3 Stages).

    Stages:
    1. Padding: pad(image, min_width, min_height)
    2. Inversion: invert(image)
    3. Scaling: conditional_scale(image, factor, max_dimension)
    """

    def __init__(self, options: Optional[PreprocessingOptions] = None) -> None:
        self.options = options or PreprocessingOptions()
        self.padding = ImagePaddingStage(
            border=self.options.border,
            min_width=self.options.min_width,
            min_height=self.options.min_height,
        )
        self.inversion = ImageInversionStage()
        self.scaling = ImageScalingStage(
            scale_factor=self.options.scale_factor,
            max_dimension=self.options.max_dimension,
            canonical_dpi=self.options.canonical_dpi,
        )
        logger.info("[PowerPreOCRPipeline] Инициализирован (pad → invert → scale)")

    def process(self, image: RasterImage) -> RasterImage:
        """
        Обрабатывает изображение через 3-stage пайплайн.

        Каждая стадия возвращает новый RasterImage; предыдущий можно отпустить.

        Args:
            image: Исходное изображение (страница или файл)

        Returns:
            Изображение, готовое для движка OCR
        """
        logger.debug(f"[PowerPreOCRPipeline] Вход: {image.width}x{image.height}")

        padded = self.padding.pad(image)
        inverted = self.inversion.invert(padded)
        del padded
        result = self.scaling.conditional_scale(inverted)

        logger.debug(
            f"[PowerPreOCRPipeline] Готово: {image.width}x{image.height} → "
            f"{result.width}x{result.height}"
        )
        return result
