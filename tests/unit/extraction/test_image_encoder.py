import numpy as np
import pytest

from contracts.ocr_text_dto import RasterImage
from powerocr.extraction.pre_ocr.image_decoder import ImageDecoder
from powerocr.extraction.pre_ocr.image_encoder import ImageEncoder


@pytest.fixture
def rgb_image():
    """Fixture: BGR тестовое изображение (B=100, G=150, R=200)."""
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    pixels[:, :, 0] = 100  # Blue
    pixels[:, :, 1] = 150  # Green
    pixels[:, :, 2] = 200  # Red
    return RasterImage.from_array(pixels)


def test_encode_png_by_default(rgb_image):
    """Тест: по умолчанию PNG."""
    encoded = ImageEncoder.encode(rgb_image)

    assert isinstance(encoded, bytes)
    assert encoded[:8] == b"\x89PNG\r\n\x1a\n"


def test_png_is_lossless(rgb_image):
    """Тест: PNG без потерь, пиксели совпадают после декодирования."""
    decoded = ImageDecoder.decode(ImageEncoder.encode(rgb_image, "png"))

    assert np.array_equal(decoded.pixels, rgb_image.pixels)


def test_encode_jpeg(rgb_image):
    """Тест: JPEG signature (FF D8 FF)."""
    encoded = ImageEncoder.encode(rgb_image, "jpg", quality=90)

    assert encoded[0] == 0xFF
    assert encoded[1] == 0xD8
    assert encoded[2] == 0xFF


def test_encode_jpeg_drops_alpha(bgra_image):
    """Тест: BGRA кодируется в JPEG (альфа отбрасывается)."""
    encoded = ImageEncoder.encode(bgra_image, "jpeg")

    assert encoded[:2] == b"\xff\xd8"


def test_unknown_format(rgb_image):
    """Тест: неизвестный формат -> ValueError."""
    with pytest.raises(ValueError):
        ImageEncoder.encode(rgb_image, "webp2")


def test_to_pil_converts_channel_order(rgb_image):
    """Тест: BGR -> PIL RGB с DPI."""
    pil_img = ImageEncoder.to_pil(rgb_image)

    assert pil_img.mode == "RGB"
    assert pil_img.size == (100, 100)
    assert pil_img.getpixel((0, 0)) == (200, 150, 100)
    assert pil_img.info["dpi"] == (96.0, 96.0)


def test_to_pil_grayscale(gray_image):
    """Тест: GRAY -> PIL L."""
    assert ImageEncoder.to_pil(gray_image).mode == "L"
