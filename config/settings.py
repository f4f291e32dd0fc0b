"""
Настройки проекта PowerOCR.

Язык распознавания задаётся явно (аргумент CLI или POWEROCR_LANGUAGE),
локаль операционной системы НЕ читается.
"""

import os
import re
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent

# =============================================================================
# ДВИЖОК РАСПОЗНАВАНИЯ
# =============================================================================
# Доступные движки: "tesseract" (локальный процесс), "google_vision" (облако)
AVAILABLE_OCR_ENGINES = ["tesseract", "google_vision"]

OCR_ENGINE = os.getenv("POWEROCR_ENGINE", "tesseract")

# Язык по умолчанию (BCP-47). Если движок его не поддерживает, работает
# fallback: совпадение по первичному субтегу -> первый доступный язык.
DEFAULT_OCR_LANGUAGE = os.getenv("POWEROCR_LANGUAGE", "ru-RU")

# Максимальная сторона изображения, которую принимает движок
MAX_IMAGE_DIMENSION = 10000

# =============================================================================
# TESSERACT
# =============================================================================
# Путь к бинарнику tesseract (если не в PATH)
TESSERACT_CMD = os.getenv("TESSERACT_CMD", "")

# Таймаут одного вызова tesseract (секунды, 0 = без таймаута)
TESSERACT_TIMEOUT_S = 120

# =============================================================================
# GOOGLE CLOUD VISION API
# =============================================================================
GOOGLE_APPLICATION_CREDENTIALS = os.getenv(
    "GOOGLE_APPLICATION_CREDENTIALS",
    str(PROJECT_ROOT / "config" / "google_credentials.json")
)

# Языки, которые считаем доступными для Google Vision (порядок важен для fallback)
GOOGLE_VISION_LANGUAGES = ["en", "ru", "de", "fr", "es", "it", "zh", "ja"]

# =============================================================================
# НАСТРОЙКИ PRE-OCR
# =============================================================================
# Padding: рамка вокруг изображения и минимальный размер холста
PAD_BORDER = 16
PAD_MIN_WIDTH = 64
PAD_MIN_HEIGHT = 64

# Масштабирование перед OCR
SCALE_FACTOR = 2.0

# DPI после масштабирования (фиксируем для детерминизма)
CANONICAL_DPI = 96.0

# DPI по умолчанию, если в файле нет информации о разрешении
DEFAULT_IMAGE_DPI = 96.0

# =============================================================================
# НАСТРОЙКИ PDF
# =============================================================================
# Рендер страницы с опциями по умолчанию (без дополнительного апскейла,
# масштабирование делает Pre-OCR)
PDF_RENDER_DPI = 96.0

# =============================================================================
# ФОРМАТЫ ВХОДА / ВЫХОДА
# =============================================================================
SUPPORTED_IMAGE_FORMATS = [".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".gif"]
SUPPORTED_DOCUMENT_FORMATS = [".pdf"]

# Результат сохраняется рядом с исходником: <input>.txt
OUTPUT_SUFFIX = ".txt"
OUTPUT_ENCODING = "utf-8"

# Сколько символов результата показывать в консоли
CONSOLE_PREVIEW_LIMIT = 500

# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
LANGUAGE_TAG_PATTERN = re.compile(r"^[A-Za-z]{1,8}(-[A-Za-z0-9]{1,8})*$")


def validate_config(engine: str = None, language: str = None):
    """Проверяет корректность конфигурации."""
    errors = []

    engine = engine or OCR_ENGINE
    language = language or DEFAULT_OCR_LANGUAGE

    if engine not in AVAILABLE_OCR_ENGINES:
        errors.append(
            f"Неизвестный OCR движок: {engine}\n"
            f"Доступные: {', '.join(AVAILABLE_OCR_ENGINES)}"
        )

    if not LANGUAGE_TAG_PATTERN.match(language):
        errors.append(f"Некорректный тег языка: {language!r} (ожидается, например, 'en-US')")

    if MAX_IMAGE_DIMENSION <= 0:
        errors.append(f"MAX_IMAGE_DIMENSION должен быть > 0, получено: {MAX_IMAGE_DIMENSION}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
