import io

import numpy as np
import pytest
from PIL import Image

from contracts.ocr_text_dto import PixelFormat
from powerocr.extraction.domain.exceptions import CorruptInputError, InputNotFoundError
from powerocr.extraction.pre_ocr.image_decoder import ImageDecoder


def _png_bytes(pil_img, **save_kwargs):
    buffer = io.BytesIO()
    pil_img.save(buffer, format="PNG", **save_kwargs)
    return buffer.getvalue()


def test_rgb_decoded_as_bgr():
    """Тест: RGB -> BGR (порядок OpenCV)."""
    data = _png_bytes(Image.new("RGB", (4, 3), (255, 0, 0)))

    image = ImageDecoder.decode(data)

    assert image.pixel_format is PixelFormat.BGR
    assert image.size == (4, 3)
    assert tuple(image.pixels[0, 0]) == (0, 0, 255)


def test_rgba_decoded_as_bgra():
    """Тест: RGBA -> BGRA, альфа сохраняется."""
    data = _png_bytes(Image.new("RGBA", (4, 3), (255, 0, 0, 100)))

    image = ImageDecoder.decode(data)

    assert image.pixel_format is PixelFormat.BGRA
    assert tuple(image.pixels[0, 0]) == (0, 0, 255, 100)


def test_grayscale_decoded_as_gray():
    """Тест: L -> GRAY."""
    data = _png_bytes(Image.new("L", (4, 3), 77))

    image = ImageDecoder.decode(data)

    assert image.pixel_format is PixelFormat.GRAY
    assert image.pixels.shape == (3, 4)
    assert image.pixels[0, 0] == 77


def test_dpi_from_metadata():
    """Тест: DPI читается из файла."""
    data = _png_bytes(Image.new("RGB", (4, 3)), dpi=(300, 300))

    image = ImageDecoder.decode(data)

    assert image.horizontal_resolution == pytest.approx(300.0, abs=0.1)
    assert image.vertical_resolution == pytest.approx(300.0, abs=0.1)


def test_dpi_default_when_missing():
    """Тест: нет DPI в файле -> 96."""
    image = ImageDecoder.decode(_png_bytes(Image.new("RGB", (4, 3))))

    assert image.horizontal_resolution == 96.0
    assert image.vertical_resolution == 96.0


def test_pixels_read_only():
    """Тест: буфер пикселей неизменяем."""
    image = ImageDecoder.decode(_png_bytes(Image.new("RGB", (4, 3))))

    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1


def test_garbage_bytes_raise_corrupt_input():
    """Тест: мусор -> CorruptInputError."""
    with pytest.raises(CorruptInputError):
        ImageDecoder.decode(b"definitely not an image", source="junk.png")


def test_empty_bytes_raise_corrupt_input():
    """Тест: пустой файл -> CorruptInputError."""
    with pytest.raises(CorruptInputError):
        ImageDecoder.decode(b"")


def test_read_file(tmp_path):
    """Тест: чтение файла с диска."""
    path = tmp_path / "scan.png"
    Image.new("RGB", (6, 2), (0, 255, 0)).save(path)

    image = ImageDecoder.read(path)

    assert image.size == (6, 2)
    assert np.all(image.pixels[:, :, 1] == 255)


def test_read_missing_file(tmp_path):
    """Тест: файла нет -> InputNotFoundError (не CorruptInputError)."""
    with pytest.raises(InputNotFoundError) as exc_info:
        ImageDecoder.read(tmp_path / "missing.png")

    assert not isinstance(exc_info.value, CorruptInputError)


def test_16bit_grayscale_keeps_contrast():
    """Тест: 16-битный серый PNG -> 8 бит по старшему байту, не сплошной белый."""
    wide = np.full((20, 30), 8000, dtype=np.uint16)
    wide[5:15, 5:25] = 60000
    data = _png_bytes(Image.fromarray(wide))

    image = ImageDecoder.decode(data)

    assert image.pixel_format is PixelFormat.GRAY
    assert image.pixels.dtype == np.uint8
    assert image.pixels[0, 0] == 8000 >> 8
    assert image.pixels[10, 10] == 60000 >> 8
    assert image.pixels[0, 0] < image.pixels[10, 10]


def test_float_grayscale_normalized(tmp_path):
    """Тест: float TIFF (mode F) -> растяжение min/max в 0..255."""
    floats = np.full((20, 30), 0.25, dtype=np.float32)
    floats[5:15, 5:25] = 0.75
    path = tmp_path / "scan.tif"
    Image.fromarray(floats).save(path)

    image = ImageDecoder.read(path)

    assert image.pixel_format is PixelFormat.GRAY
    assert image.pixels[0, 0] == 0
    assert image.pixels[10, 10] == 255
