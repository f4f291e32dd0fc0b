"""
OCR: Google Vision API интеграция.

- Отправка изображения (PNG) в DOCUMENT_TEXT_DETECTION с подсказкой языка
- Сборка строк из символов по detected_break (пробел / конец строки)
- Формирование RecognitionResult (строки со словами)

Список языков берётся из config.settings.GOOGLE_VISION_LANGUAGES:
API не сообщает поддерживаемые языки, подсказка лишь сужает выбор модели.
"""

import os
from pathlib import Path
from typing import Any, List, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import vision
from google.cloud.vision_v1 import types
from loguru import logger

from config.settings import GOOGLE_APPLICATION_CREDENTIALS, GOOGLE_VISION_LANGUAGES, MAX_IMAGE_DIMENSION
from contracts.ocr_text_dto import RasterImage, RecognitionResult, RecognizedLine, RecognizedWord
from powerocr.domain.contracts import Language
from ..domain.exceptions import ConfigurationError, RecognitionError
from ..pre_ocr.image_encoder import ImageEncoder
from .base import BaseRecognizer


BreakType = types.TextAnnotation.DetectedBreak.BreakType

# Разрыв после символа -> конец строки
_LINE_BREAKS = {BreakType.EOL_SURE_SPACE, BreakType.LINE_BREAK, BreakType.HYPHEN}


class GoogleVisionOCR(BaseRecognizer):
    """
    Обёртка над Google Cloud Vision API.

    Реализует интерфейс IRecognitionCapability.
    """

    name = "google_vision"

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        languages: Optional[List[str]] = None,
        client: Any = None,
        max_image_dimension: int = MAX_IMAGE_DIMENSION
    ):
        """
        Инициализация OCR клиента.

        Args:
            credentials_path: Путь к JSON-файлу credentials.
                            Если не указан, берётся из settings.
            languages: Доступные языки (по умолчанию из settings)
            client: Готовый ImageAnnotatorClient (credentials тогда не проверяются)
            max_image_dimension: Лимит стороны изображения
        """
        super().__init__(max_image_dimension=max_image_dimension)
        self._languages = list(languages if languages is not None else GOOGLE_VISION_LANGUAGES)

        if client is None:
            creds_path = credentials_path or GOOGLE_APPLICATION_CREDENTIALS
            if not creds_path:
                raise ConfigurationError(
                    message="Google credentials не указаны (GOOGLE_APPLICATION_CREDENTIALS)",
                    component="GoogleVisionOCR"
                )
            if not Path(creds_path).exists():
                raise ConfigurationError(
                    message=f"Credentials файл не найден: {creds_path}",
                    component="GoogleVisionOCR"
                )

            # Устанавливаем credentials через переменную окружения
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str(creds_path)
            client = vision.ImageAnnotatorClient()

        self.client = client
        logger.info(f"[GoogleVisionOCR] Клиент инициализирован, языков: {len(self._languages)}")

    def available_languages(self) -> List[str]:
        return list(self._languages)

    def recognize(self, image: RasterImage, language: Language) -> RecognitionResult:
        """
        Распознаёт текст на изображении.

        Raises:
            RecognitionError: вход отклонён, ошибка API или ошибка в ответе
        """
        self._validate_input(image, language)

        try:
            content = ImageEncoder.encode(image, "png")
        except ValueError as e:
            raise RecognitionError(
                message="Не удалось закодировать изображение для Google Vision",
                component="GoogleVisionOCR",
                original_error=e
            )

        request_image = types.Image(content=content)
        context = types.ImageContext(language_hints=[language.tag])

        try:
            response = self.client.document_text_detection(image=request_image, image_context=context)
        except google_exceptions.GoogleAPIError as e:
            raise RecognitionError(
                message="Ошибка вызова Google Vision API",
                component="GoogleVisionOCR",
                original_error=e
            )

        if response.error.message:
            raise RecognitionError(
                message=f"Google Vision API error: {response.error.message}",
                component="GoogleVisionOCR"
            )

        result = self._parse_response(response, joiner=" " if language.uses_whitespace_joining else "")
        logger.debug(f"[GoogleVisionOCR] Строк: {len(result.lines)}")
        return result

    @staticmethod
    def _parse_response(response: Any, joiner: str = " ") -> RecognitionResult:
        """
        Парсит ответ Google Vision в строки.

        Строка закрывается на EOL_SURE_SPACE / LINE_BREAK / HYPHEN
        и на границе абзаца. HYPHEN дописывает '-' к последнему слову.
        """
        lines: List[RecognizedLine] = []
        annotation = response.full_text_annotation
        if not annotation:
            return RecognitionResult(lines=lines)

        for page in annotation.pages:
            for block in page.blocks:
                for paragraph in block.paragraphs:
                    words: List[str] = []

                    for word in paragraph.words:
                        if not word.symbols:
                            continue
                        word_text = "".join(symbol.text for symbol in word.symbols)
                        break_type = word.symbols[-1].property.detected_break.type_

                        if break_type == BreakType.HYPHEN:
                            word_text += "-"
                        words.append(word_text)

                        if break_type in _LINE_BREAKS:
                            lines.append(_make_line(words, joiner))
                            words = []

                    if words:
                        lines.append(_make_line(words, joiner))

        return RecognitionResult(lines=lines)


def _make_line(words: List[str], joiner: str) -> RecognizedLine:
    return RecognizedLine(
        text=joiner.join(words),
        words=[RecognizedWord(text=w) for w in words],
    )
