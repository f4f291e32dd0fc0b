"""
OCR: Tesseract (локальный процесс) через pytesseract.

- Доступные языки: `tesseract --list-langs`, коды Tesseract переводятся в теги
  BCP-47 ('eng' -> 'en', 'chi_sim' -> 'zh-Hans').
- Распознавание: image_to_data (DICT), слова группируются в строки по
  (page, block, par, line) в порядке чтения.
- Текст строки: слова через пробел, для китайского/японского без разделителя
  (Tesseract режет CJK-текст на отдельные иероглифы).
"""

from typing import Dict, List, Optional, Tuple

import pytesseract
from loguru import logger

from config.settings import MAX_IMAGE_DIMENSION, TESSERACT_CMD, TESSERACT_TIMEOUT_S
from contracts.ocr_text_dto import RasterImage, RecognitionResult, RecognizedLine, RecognizedWord
from powerocr.domain.contracts import Language
from ..domain.exceptions import ConfigurationError, RecognitionError
from ..pre_ocr.image_encoder import ImageEncoder
from .base import BaseRecognizer


# Коды traineddata -> теги языков
TESSERACT_TO_TAG: Dict[str, str] = {
    "eng": "en",
    "rus": "ru",
    "ukr": "uk",
    "bel": "be",
    "deu": "de",
    "fra": "fr",
    "spa": "es",
    "ita": "it",
    "por": "pt",
    "nld": "nl",
    "pol": "pl",
    "ces": "cs",
    "tur": "tr",
    "ell": "el",
    "ara": "ar",
    "heb": "he",
    "hin": "hi",
    "kor": "ko",
    "jpn": "ja",
    "jpn_vert": "ja-vert",
    "chi_sim": "zh-Hans",
    "chi_sim_vert": "zh-Hans-vert",
    "chi_tra": "zh-Hant",
    "chi_tra_vert": "zh-Hant-vert",
}

# Не языки: ориентация/формулы
_SERVICE_CODES = {"osd", "equ"}

_WORD_LEVEL = 5


def tesseract_code_to_tag(code: str) -> str:
    return TESSERACT_TO_TAG.get(code, code.replace("_", "-"))


class TesseractOCR(BaseRecognizer):
    """
    Движок Tesseract.

    Реализует интерфейс IRecognitionCapability.
    """

    name = "tesseract"

    def __init__(
        self,
        tesseract_cmd: Optional[str] = None,
        timeout_s: int = TESSERACT_TIMEOUT_S,
        max_image_dimension: int = MAX_IMAGE_DIMENSION
    ):
        super().__init__(max_image_dimension=max_image_dimension)
        cmd = tesseract_cmd or TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd
        self.timeout_s = timeout_s
        self._codes_by_tag: Optional[Dict[str, str]] = None
        logger.info(f"[TesseractOCR] Инициализирован (timeout={timeout_s}s)")

    def available_languages(self) -> List[str]:
        return list(self._language_codes().keys())

    def _language_codes(self) -> Dict[str, str]:
        """tag -> код Tesseract, в порядке `--list-langs`. Кэшируется."""
        if self._codes_by_tag is None:
            try:
                codes = pytesseract.get_languages(config="")
            except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
                raise ConfigurationError(
                    message="Tesseract недоступен: не удалось получить список языков",
                    component="TesseractOCR",
                    original_error=e
                )

            codes_by_tag: Dict[str, str] = {}
            for code in codes:
                if code in _SERVICE_CODES or "/" in code:
                    continue
                codes_by_tag.setdefault(tesseract_code_to_tag(code), code)
            self._codes_by_tag = codes_by_tag
            logger.debug(f"[TesseractOCR] Языки: {list(codes_by_tag.keys())}")
        return self._codes_by_tag

    def _code_for(self, tag: str) -> str:
        lowered = tag.lower()
        for candidate, code in self._language_codes().items():
            if candidate.lower() == lowered:
                return code
        raise RecognitionError(
            message=f"Язык не поддерживается движком: {tag}",
            component="TesseractOCR"
        )

    def recognize(self, image: RasterImage, language: Language) -> RecognitionResult:
        """
        Распознаёт текст на изображении.

        Raises:
            RecognitionError: вход отклонён или tesseract завершился с ошибкой
        """
        self._validate_input(image, language)
        code = self._code_for(language.tag)

        try:
            pil_img = ImageEncoder.to_pil(image)
            data = pytesseract.image_to_data(
                pil_img,
                lang=code,
                output_type=pytesseract.Output.DICT,
                timeout=self.timeout_s,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, RuntimeError, ValueError) as e:
            raise RecognitionError(
                message=f"Ошибка Tesseract ({image.width}x{image.height}, lang={code})",
                component="TesseractOCR",
                original_error=e
            )

        result = self._parse_data(data, joiner=" " if language.uses_whitespace_joining else "")
        logger.debug(f"[TesseractOCR] Строк: {len(result.lines)}")
        return result

    @staticmethod
    def _parse_data(data: Dict[str, list], joiner: str = " ") -> RecognitionResult:
        """
        Парсит DICT вывод image_to_data в строки/слова.

        Порядок строк = порядок первого появления (page, block, par, line),
        т.е. порядок чтения Tesseract.
        """
        words_by_line: Dict[Tuple[int, int, int, int], List[str]] = {}

        for i, level in enumerate(data.get("level", [])):
            if int(level) != _WORD_LEVEL:
                continue
            text = str(data["text"][i]).strip()
            if not text:
                continue
            key = (
                int(data["page_num"][i]),
                int(data["block_num"][i]),
                int(data["par_num"][i]),
                int(data["line_num"][i]),
            )
            words_by_line.setdefault(key, []).append(text)

        lines = [
            RecognizedLine(
                text=joiner.join(words),
                words=[RecognizedWord(text=w) for w in words],
            )
            for words in words_by_line.values()
        ]
        return RecognitionResult(lines=lines)
