"""
Валидационные контракты (contracts) для пайплайна PowerOCR.

Каждый контракт гарантирует:
  1. Правильный тип данных (type safety)
  2. Значения в допустимых диапазонах (data integrity)
  3. Неизменяемость после создания (frozen)

Без этих контрактов система может получить невалидные параметры:
  - scale_factor = 0 (изображение схлопнется)
  - max_dimension = -1 (масштабирование всегда пропускается)
  - language.tag = "" (движок не сможет выбрать модель)

Все модели используют Pydantic v2 с Field validators.
"""

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import (
    CANONICAL_DPI,
    LANGUAGE_TAG_PATTERN,
    MAX_IMAGE_DIMENSION,
    PAD_BORDER,
    PAD_MIN_HEIGHT,
    PAD_MIN_WIDTH,
    PDF_RENDER_DPI,
    SCALE_FACTOR,
)


# Языки, где слова НЕ разделяются пробелами
_NATIVE_JOINING_PRIMARY_SUBTAGS = ("zh",)
_NATIVE_JOINING_TAGS = ("ja",)


# ============================================================================
# PRE-OCR: PAD -> INVERT -> SCALE
# ============================================================================

class PreprocessingOptions(BaseModel):
    """Параметры Pre-OCR пайплайна."""

    model_config = ConfigDict(frozen=True)

    border: int = Field(PAD_BORDER, ge=0, description="Рамка вокруг изображения (px, суммарно по оси)")
    min_width: int = Field(PAD_MIN_WIDTH, ge=0, description="Минимальная ширина контента до рамки")
    min_height: int = Field(PAD_MIN_HEIGHT, ge=0, description="Минимальная высота контента до рамки")
    scale_factor: float = Field(SCALE_FACTOR, gt=0, description="Коэффициент апскейла")
    max_dimension: int = Field(MAX_IMAGE_DIMENSION, gt=0, description="Макс. сторона, которую примет движок")
    canonical_dpi: float = Field(CANONICAL_DPI, gt=0, description="DPI после масштабирования")


# ============================================================================
# PDF: RENDER
# ============================================================================

class RenderOptions(BaseModel):
    """Параметры рендера страницы документа."""

    model_config = ConfigDict(frozen=True)

    dpi: float = Field(PDF_RENDER_DPI, gt=0, le=1200, description="Разрешение рендера")

    @property
    def scale(self) -> float:
        """Масштаб pdfium: точки PDF = 1/72 дюйма."""
        return self.dpi / 72.0


# ============================================================================
# LANGUAGE
# ============================================================================

class Language(BaseModel):
    """
    Язык распознавания.

    Вычисляется один раз при создании пайплайна и не меняется.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., min_length=1, description="Тег языка (BCP-47), например 'en-US'")
    uses_whitespace_joining: bool = Field(..., description="Склеивать слова строки через пробел")

    @field_validator("tag")
    @classmethod
    def tag_well_formed(cls, v: str) -> str:
        """Тег: буквы, субтеги через '-'."""
        if not LANGUAGE_TAG_PATTERN.match(v):
            raise ValueError(f"Некорректный тег языка: {v!r}")
        return v

    @property
    def primary_subtag(self) -> str:
        return primary_subtag(self.tag)

    @classmethod
    def from_tag(cls, tag: str) -> "Language":
        return cls(tag=tag, uses_whitespace_joining=uses_whitespace_joining(tag))


def primary_subtag(tag: str) -> str:
    """Часть тега до первого '-' ('zh-CN' -> 'zh')."""
    return tag.split("-", 1)[0]


def uses_whitespace_joining(tag: str) -> bool:
    """
    False для китайского (первичный субтег 'zh') и японского ('ja'),
    True для остальных. Регистр не важен.
    """
    lowered = tag.lower()
    if primary_subtag(lowered) in _NATIVE_JOINING_PRIMARY_SUBTAGS:
        return False
    if lowered in _NATIVE_JOINING_TAGS:
        return False
    return True


# ============================================================================
# ERRORS & DIAGNOSTICS
# ============================================================================

class ContractValidationError(Exception):
    """Exception для нарушения контрактов (используется вместо Pydantic ValidationError)."""

    def __init__(self, stage_name: str, contract_name: str, errors: Union[List[Dict[str, Any]], List[Any]]) -> None:
        self.stage_name = stage_name
        self.contract_name = contract_name
        self.errors = errors

        error_messages = []
        for err in errors:
            if isinstance(err, dict):
                loc = err.get('loc', [])[0] if err.get('loc') else 'unknown'
                err_type = err.get('type', 'unknown')
                msg = err.get('msg', 'unknown error')
                error_messages.append(f"  {loc} ({err_type}): {msg}")
            else:
                error_messages.append(f"  {str(err)}")

        message = (
            f"Contract violation in {stage_name} ({contract_name}):\n"
            + "\n".join(error_messages)
        )
        super().__init__(message)
