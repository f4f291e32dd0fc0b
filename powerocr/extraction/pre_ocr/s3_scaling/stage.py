"""
Stage 3: Scaling (Условный апскейл).

Увеличивает изображение в scale_factor раз (бикубически), если результат
помещается в лимит движка. Иначе масштабирование пропускается ПОЛНОСТЬЮ:
частичного/обрезанного масштабирования нет.

Входные данные:
- image: RasterImage

Выходные данные:
- image: RasterImage
  - пропуск: если width*factor > max_dimension ИЛИ height*factor > max_dimension
  - иначе: round(width*factor) x round(height*factor), DPI = canonical_dpi
"""

from typing import Optional

from loguru import logger

from config.settings import CANONICAL_DPI, MAX_IMAGE_DIMENSION, SCALE_FACTOR
from contracts.ocr_text_dto import RasterImage
from ..infrastructure.filters import resize_bicubic, round_half_up


class ImageScalingStage:
    """
    Stage 3: Scaling.

    Апскейл только когда он безопасен для движка OCR.
    """

    def __init__(
        self,
        scale_factor: float = SCALE_FACTOR,
        max_dimension: int = MAX_IMAGE_DIMENSION,
        canonical_dpi: float = CANONICAL_DPI
    ):
        self.scale_factor = scale_factor
        self.max_dimension = max_dimension
        self.canonical_dpi = canonical_dpi
        logger.debug(
            f"[Stage 3: Scaling] Инициализирован "
            f"(factor={scale_factor}, max={max_dimension}px, dpi={canonical_dpi})"
        )

    @staticmethod
    def should_scale(width: int, height: int, factor: float, max_dimension: int) -> bool:
        return not (width * factor > max_dimension or height * factor > max_dimension)

    def conditional_scale(
        self,
        image: RasterImage,
        factor: Optional[float] = None,
        max_dimension: Optional[int] = None
    ) -> RasterImage:
        """
        Масштабирует изображение, если оно помещается в лимит.

        Args:
            image: Исходное изображение
            factor: Коэффициент (по умолчанию из настроек)
            max_dimension: Лимит стороны (по умолчанию из настроек)

        Returns:
            Новый RasterImage или исходный (если масштабирование пропущено)
        """
        factor = self.scale_factor if factor is None else factor
        max_dimension = self.max_dimension if max_dimension is None else max_dimension

        if not self.should_scale(image.width, image.height, factor, max_dimension):
            logger.debug(
                f"[Stage 3] Пропуск: {image.width}x{image.height} * {factor} > {max_dimension}px"
            )
            return image

        new_w = round_half_up(image.width * factor)
        new_h = round_half_up(image.height * factor)
        scaled = resize_bicubic(image.pixels, new_w, new_h)

        logger.debug(f"[Stage 3] Масштаб: {image.width}x{image.height} → {new_w}x{new_h}")

        return RasterImage(
            pixels=scaled,
            pixel_format=image.pixel_format,
            horizontal_resolution=self.canonical_dpi,
            vertical_resolution=self.canonical_dpi,
        )

    def process(self, image: RasterImage) -> RasterImage:
        return self.conditional_scale(image)
