"""
Image Encoder для передачи изображения движку OCR.

Кодирование RasterImage в байты (PNG без потерь по умолчанию, JPEG по запросу)
и конвертация в PIL Image для движков, которые принимают объекты PIL.
"""

import cv2
from loguru import logger
from PIL import Image

from contracts.ocr_text_dto import PixelFormat, RasterImage
from .infrastructure.filters import as_cv_array


class ImageEncoder:
    """
    Кодирует RasterImage в байты файла.

    ЦКП: байты изображения в формате, который требует движок.
    """

    SUPPORTED_FORMATS = ("png", "jpg", "jpeg", "bmp", "tiff")

    @staticmethod
    def encode(image: RasterImage, fmt: str = "png", quality: int = 85) -> bytes:
        """
        Кодирует изображение.

        Args:
            image: Изображение
            fmt: Формат ("png", "jpg", ...)
            quality: Качество JPEG (0-100), для остальных форматов игнорируется

        Returns:
            Байты изображения

        Raises:
            ValueError: Неизвестный формат или ошибка кодирования
        """
        fmt = fmt.lower().lstrip(".")
        if fmt not in ImageEncoder.SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported encode format: {fmt}")

        pixels = as_cv_array(image.pixels)
        params: list[int] = []
        if fmt in ("jpg", "jpeg"):
            params = [int(cv2.IMWRITE_JPEG_QUALITY), quality]
            # JPEG без альфы
            if image.pixel_format is PixelFormat.BGRA:
                pixels = cv2.cvtColor(pixels, cv2.COLOR_BGRA2BGR)

        success, buffer = cv2.imencode(f".{fmt}", pixels, params)

        if not success or buffer is None:
            raise ValueError(f"Failed to encode image to {fmt.upper()}")

        encoded_bytes = buffer.tobytes()

        logger.debug(
            f"[ImageEncoder] Изображение закодировано: "
            f"{fmt.upper()}, {image.width}x{image.height}, {len(encoded_bytes)} байт"
        )

        return encoded_bytes

    @staticmethod
    def to_pil(image: RasterImage) -> Image.Image:
        """RasterImage (порядок OpenCV) -> PIL Image (RGB/RGBA/L) с DPI."""
        pixels = as_cv_array(image.pixels)

        if image.pixel_format is PixelFormat.GRAY:
            pil_img = Image.fromarray(pixels)
        elif image.pixel_format is PixelFormat.BGRA:
            pil_img = Image.fromarray(cv2.cvtColor(pixels, cv2.COLOR_BGRA2RGBA))
        else:
            pil_img = Image.fromarray(cv2.cvtColor(pixels, cv2.COLOR_BGR2RGB))

        pil_img.info["dpi"] = (image.horizontal_resolution, image.vertical_resolution)
        return pil_img
