"""
Stage 1: Padding (Рамка).

Добавляет белую рамку вокруг изображения и гарантирует минимальный размер.
OCR хуже распознаёт слишком маленькие изображения и текст, касающийся края.

Входные данные:
- image: RasterImage (любой формат)

Выходные данные:
- image: RasterImage
  ширина  = max(width + border, min_width + border)
  высота  = max(height + border, min_height + border)
  исходник по центру, смещения (out - in) // 2
"""

from typing import Optional

from loguru import logger

from config.settings import PAD_BORDER, PAD_MIN_HEIGHT, PAD_MIN_WIDTH
from contracts.ocr_text_dto import RasterImage
from ..infrastructure.filters import center_on_canvas


class ImagePaddingStage:
    """
    Stage 1: Padding.

    Белая рамка + минимальный размер холста. Разрешение и формат сохраняются.
    """

    def __init__(
        self,
        border: int = PAD_BORDER,
        min_width: int = PAD_MIN_WIDTH,
        min_height: int = PAD_MIN_HEIGHT
    ):
        self.border = border
        self.min_width = min_width
        self.min_height = min_height
        logger.debug(
            f"[Stage 1: Padding] Инициализирован "
            f"(border={border}px, min={min_width}x{min_height})"
        )

    def output_size(
        self,
        width: int,
        height: int,
        min_width: Optional[int] = None,
        min_height: Optional[int] = None
    ) -> tuple[int, int]:
        """Размер холста для изображения width x height."""
        min_width = self.min_width if min_width is None else min_width
        min_height = self.min_height if min_height is None else min_height
        return (
            max(width + self.border, min_width + self.border),
            max(height + self.border, min_height + self.border),
        )

    def pad(
        self,
        image: RasterImage,
        min_width: Optional[int] = None,
        min_height: Optional[int] = None
    ) -> RasterImage:
        """
        Кладёт изображение в центр белого холста.

        Args:
            image: Исходное изображение
            min_width: Минимальная ширина (по умолчанию из настроек)
            min_height: Минимальная высота (по умолчанию из настроек)

        Returns:
            Новый RasterImage
        """
        out_w, out_h = self.output_size(image.width, image.height, min_width, min_height)
        padded = center_on_canvas(image.pixels, out_w, out_h)

        logger.debug(f"[Stage 1] Padding: {image.width}x{image.height} → {out_w}x{out_h}")

        return RasterImage(
            pixels=padded,
            pixel_format=image.pixel_format,
            horizontal_resolution=image.horizontal_resolution,
            vertical_resolution=image.vertical_resolution,
        )

    def process(self, image: RasterImage) -> RasterImage:
        return self.pad(image)
