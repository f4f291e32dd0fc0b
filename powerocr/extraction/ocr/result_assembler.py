"""
Сборка текста из результата OCR.

Для языков без пробелов (китайский, японский) берём текст строки как есть:
движок уже расставил (или не расставил) пробелы правильно.
Для остальных склеиваем слова строки через один пробел.
"""

from contracts.ocr_text_dto import RecognitionResult
from powerocr.domain.contracts import Language


LINE_SEPARATOR = "\n"


class ResultAssembler:
    """Чистая функция: RecognitionResult + Language -> str."""

    @staticmethod
    def assemble(result: RecognitionResult, language: Language) -> str:
        lines = []
        for line in result.lines:
            if language.uses_whitespace_joining:
                lines.append(" ".join(word.text for word in line.words))
            else:
                lines.append(line.text)
        return LINE_SEPARATOR.join(lines).strip()
