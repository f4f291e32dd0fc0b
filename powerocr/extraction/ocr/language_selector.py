"""
Выбор языка распознавания.

Алгоритм (выполняется один раз при создании пайплайна):
1. Движок поддерживает запрошенный тег -> берём его
2. Иначе первый доступный язык с тем же первичным субтегом ('ru-RU' -> 'ru')
3. Иначе первый доступный язык в порядке движка
4. Языков нет вообще -> ConfigurationError
"""

from typing import Optional

from loguru import logger
from pydantic import ValidationError

from config.settings import DEFAULT_OCR_LANGUAGE
from powerocr.domain.contracts import ContractValidationError, Language, primary_subtag
from ..domain.exceptions import ConfigurationError
from ..domain.interfaces import IRecognitionCapability


class LanguageSelector:
    """Выбирает Language для движка по запрошенному тегу."""

    def __init__(self, default_tag: str = DEFAULT_OCR_LANGUAGE):
        self.default_tag = default_tag

    def select(self, capability: IRecognitionCapability, requested_tag: Optional[str] = None) -> Language:
        """
        Выбирает язык.

        Args:
            capability: Движок OCR
            requested_tag: Запрошенный тег (None -> default_tag)

        Returns:
            Language с вычисленным правилом склейки слов

        Raises:
            ConfigurationError: Движок не сообщает ни одного языка
        """
        tag = requested_tag or self.default_tag

        if capability.is_language_supported(tag):
            logger.debug(f"[LanguageSelector] Язык поддерживается: {tag}")
            return _make_language(tag)

        available = capability.available_languages()
        if not available:
            raise ConfigurationError(
                message="OCR языки не найдены",
                component="LanguageSelector"
            )

        primary = primary_subtag(tag).lower()
        for candidate in available:
            if primary_subtag(candidate).lower() == primary:
                logger.info(f"[LanguageSelector] {tag} не поддерживается, выбран {candidate} (тот же субтег)")
                return _make_language(candidate)

        fallback = available[0]
        logger.warning(f"[LanguageSelector] {tag} не поддерживается, выбран первый доступный: {fallback}")
        return _make_language(fallback)


def _make_language(tag: str) -> Language:
    try:
        return Language.from_tag(tag)
    except ValidationError as e:
        raise ContractValidationError("LanguageSelector", "Language", e.errors())
