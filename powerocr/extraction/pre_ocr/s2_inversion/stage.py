"""
Stage 2: Inversion (Инверсия цвета).

Инверсия выполняется всегда, без анализа яркости изображения.

Входные данные:
- image: RasterImage

Выходные данные:
- image: RasterImage, каждый цветовой канал c -> 255 - c, альфа без изменений
"""

from loguru import logger

from contracts.ocr_text_dto import RasterImage
from ..infrastructure.filters import invert_color_channels


class ImageInversionStage:
    """
    Stage 2: Inversion.

    Инволюция: invert(invert(x)) == x.
    """

    def __init__(self) -> None:
        logger.debug("[Stage 2: Inversion] Инициализирован")

    def invert(self, image: RasterImage) -> RasterImage:
        inverted = invert_color_channels(image.pixels, has_alpha=image.pixel_format.has_alpha)

        logger.debug(
            f"[Stage 2] Инверсия: {image.width}x{image.height} ({image.pixel_format.value})"
        )

        return RasterImage(
            pixels=inverted,
            pixel_format=image.pixel_format,
            horizontal_resolution=image.horizontal_resolution,
            vertical_resolution=image.vertical_resolution,
        )

    def process(self, image: RasterImage) -> RasterImage:
        return self.invert(image)
