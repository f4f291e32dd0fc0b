"""
Pre-OCR Infrastructure: Низкоуровневые операции над пикселями.

Все функции чистые: вход не меняется, возвращается новый массив.
"""

import math

import cv2
import numpy as np
import numpy.typing as npt


WHITE = 255


def as_cv_array(pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """Записываемая C-contiguous копия (OpenCV не любит read-only буферы)."""
    return np.array(pixels, dtype=np.uint8, copy=True, order="C")


def round_half_up(value: float) -> int:
    """Округление x.5 вверх (без банковского округления Python)."""
    return int(math.floor(value + 0.5))


def center_on_canvas(
    image: npt.NDArray[np.uint8],
    canvas_width: int,
    canvas_height: int
) -> npt.NDArray[np.uint8]:
    """
    Кладёт изображение в центр белого холста.

    Смещения целочисленные: (canvas - size) // 2.
    Белый = 255 во всех каналах, включая альфу.
    """
    h, w = image.shape[:2]
    if canvas_width < w or canvas_height < h:
        raise ValueError(
            f"Холст {canvas_width}x{canvas_height} меньше изображения {w}x{h}"
        )

    canvas_shape = (canvas_height, canvas_width) + image.shape[2:]
    canvas = np.full(canvas_shape, WHITE, dtype=np.uint8)

    x = (canvas_width - w) // 2
    y = (canvas_height - h) // 2
    canvas[y:y + h, x:x + w] = image
    return canvas


def invert_color_channels(image: npt.NDArray[np.uint8], has_alpha: bool) -> npt.NDArray[np.uint8]:
    """
    c -> 255 - c для цветовых каналов. Альфа-канал не трогаем.

    Args:
        image: Grayscale (H, W), BGR (H, W, 3) или BGRA (H, W, 4)
        has_alpha: последний канал является альфой
    """
    if not has_alpha:
        return np.invert(image)

    inverted = image.copy()
    inverted[:, :, :-1] = np.invert(image[:, :, :-1])
    return inverted


def resize_bicubic(image: npt.NDArray[np.uint8], width: int, height: int) -> npt.NDArray[np.uint8]:
    """Ресемплинг бикубическим фильтром до (width, height)."""
    return cv2.resize(as_cv_array(image), (width, height), interpolation=cv2.INTER_CUBIC)  # type: ignore[return-value]
