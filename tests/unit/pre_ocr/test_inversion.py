import numpy as np

from contracts.ocr_text_dto import RasterImage
from powerocr.extraction.pre_ocr.s2_inversion import ImageInversionStage


def test_invert_color_channels():
    """Тест: c -> 255 - c."""
    pixels = np.array([[[0, 100, 255]]], dtype=np.uint8)
    image = RasterImage.from_array(pixels)

    inverted = ImageInversionStage().invert(image)

    assert tuple(inverted.pixels[0, 0]) == (255, 155, 0)


def test_invert_is_involution():
    """Тест: invert(invert(x)) == x."""
    stage = ImageInversionStage()
    rng = np.random.default_rng(7)
    image = RasterImage.from_array(rng.integers(0, 256, (12, 9, 3), dtype=np.uint8))

    twice = stage.invert(stage.invert(image))

    assert np.array_equal(twice.pixels, image.pixels)


def test_alpha_untouched(bgra_image):
    """Тест: альфа-канал не инвертируется."""
    inverted = ImageInversionStage().invert(bgra_image)

    assert np.all(inverted.pixels[:, :, 3] == 128)
    assert tuple(inverted.pixels[0, 0, :3]) == (245, 235, 225)


def test_grayscale(gray_image):
    """Тест: Grayscale инвертируется целиком."""
    inverted = ImageInversionStage().process(gray_image)

    assert inverted.pixels.min() == 255
    assert inverted.size == gray_image.size
