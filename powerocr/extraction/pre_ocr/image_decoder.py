"""
Image Decoder для pre-OCR пайплайна.

Чтение и декодирование изображений (PNG, JPEG, BMP, TIFF, GIF) в RasterImage.
Берём первый кадр (для многостраничных TIFF/анимированных GIF).
Разрешение (DPI) читается из метаданных файла, если оно там есть.
"""

import io
from pathlib import Path

import cv2
import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from config.settings import DEFAULT_IMAGE_DPI
from contracts.ocr_text_dto import PixelFormat, RasterImage
from ..domain.exceptions import CorruptInputError, InputNotFoundError


_GRAY_MODES = {"1", "L"}
_HIGH_DEPTH_GRAY_MODES = {"I", "I;16", "I;16B", "I;16L"}
_ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}


class ImageDecoder:
    """
    Декодирует байты изображения в RasterImage (BGR / BGRA / GRAY).

    ЦКП: неизменяемый RasterImage с разрешением из файла.
    """

    @staticmethod
    def decode(data: bytes, source: str = "<bytes>") -> RasterImage:
        """
        Декодирует байты изображения.

        Args:
            data: Байты файла
            source: Имя источника (для сообщений об ошибках)

        Returns:
            RasterImage

        Raises:
            CorruptInputError: Если байты не декодируются
        """
        if not data:
            raise CorruptInputError(
                message=f"Пустой файл изображения: {source}",
                component="ImageDecoder"
            )

        try:
            with Image.open(io.BytesIO(data)) as pil_img:
                pil_img.load()
                dpi_x, dpi_y = ImageDecoder._read_dpi(pil_img)
                pixels, pixel_format = ImageDecoder._to_cv_pixels(pil_img)
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise CorruptInputError(
                message=f"Не удалось открыть изображение. Файл повреждён или формат не поддерживается: {source}",
                component="ImageDecoder",
                original_error=e
            )

        image = RasterImage(
            pixels=pixels,
            pixel_format=pixel_format,
            horizontal_resolution=dpi_x,
            vertical_resolution=dpi_y,
        )

        if image.is_empty:
            raise CorruptInputError(
                message=f"Изображение нулевого размера: {source}",
                component="ImageDecoder"
            )

        logger.debug(
            f"[ImageDecoder] Декодировано: {source}, {image.width}x{image.height}, "
            f"{pixel_format.value}, dpi={dpi_x:.0f}x{dpi_y:.0f}"
        )
        return image

    @staticmethod
    def read(image_path: Path) -> RasterImage:
        """
        Читает файл изображения и декодирует его.

        Raises:
            InputNotFoundError: Если файл не найден
            CorruptInputError: Если не удалось декодировать изображение
        """
        if not image_path.exists():
            raise InputNotFoundError(image_path, component="ImageDecoder")

        with open(image_path, "rb") as f:
            raw_bytes = f.read()

        return ImageDecoder.decode(raw_bytes, source=image_path.name)

    @staticmethod
    def _read_dpi(pil_img: Image.Image) -> tuple[float, float]:
        dpi = pil_img.info.get("dpi")
        if not dpi:
            return DEFAULT_IMAGE_DPI, DEFAULT_IMAGE_DPI
        dpi_x, dpi_y = (float(v) for v in dpi[:2])
        # Некоторые JPEG пишут dpi=(0, 0)
        if dpi_x <= 0 or dpi_y <= 0:
            return DEFAULT_IMAGE_DPI, DEFAULT_IMAGE_DPI
        return dpi_x, dpi_y

    @staticmethod
    def _to_cv_pixels(pil_img: Image.Image) -> tuple[np.ndarray, PixelFormat]:
        """PIL (RGB-порядок) -> numpy в порядке OpenCV."""
        mode = pil_img.mode
        has_transparency = mode == "P" and "transparency" in pil_img.info

        if mode in _GRAY_MODES:
            return np.array(pil_img.convert("L")), PixelFormat.GRAY

        # 16 бит -> 8 бит по старшему байту (convert("L") обрезает значения до 255)
        if mode in _HIGH_DEPTH_GRAY_MODES:
            wide = np.clip(np.asarray(pil_img), 0, 65535).astype(np.uint16)
            return (wide >> 8).astype(np.uint8), PixelFormat.GRAY

        if mode == "F":
            floats = np.asarray(pil_img, dtype=np.float32)
            gray = cv2.normalize(floats, None, 0, 255, norm_type=cv2.NORM_MINMAX, dtype=cv2.CV_8U)
            return gray, PixelFormat.GRAY

        if mode in _ALPHA_MODES or has_transparency:
            rgba = np.array(pil_img.convert("RGBA"))
            return cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA), PixelFormat.BGRA

        rgb = np.array(pil_img.convert("RGB"))
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR), PixelFormat.BGR
