"""
Точка входа: извлечение текста из изображения или PDF.

Использование:
    powerocr path/to/scan.pdf
    powerocr path/to/photo.png --lang en-US --engine google_vision

Результат сохраняется рядом с входным файлом: scan.pdf -> scan.pdf.txt
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from loguru import logger

from config.settings import CONSOLE_PREVIEW_LIMIT, DEFAULT_OCR_LANGUAGE, OCR_ENGINE, validate_config
from powerocr.extraction.application.factory import ExtractionComponentFactory
from powerocr.extraction.domain.exceptions import ExtractionError, InputNotFoundError
from powerocr.extraction.infrastructure.input_router import InputRouter


TRUNCATION_NOTICE = "\n... [text truncated for console] ..."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PowerOCR: текст из изображений и PDF")
    parser.add_argument("path", help="Путь к изображению или PDF")
    parser.add_argument("--lang", default=None, help=f"Язык распознавания (по умолчанию {DEFAULT_OCR_LANGUAGE})")
    parser.add_argument("--engine", default=None, help=f"OCR движок (по умолчанию {OCR_ENGINE})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Подробные логи (DEBUG)")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def console_preview(text: str, limit: int = CONSOLE_PREVIEW_LIMIT) -> str:
    """Первые limit символов текста, с пометкой если текст обрезан."""
    if len(text) > limit:
        return text[:limit] + TRUNCATION_NOTICE
    return text


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция. Возвращает код выхода (0 - успех, 1 - ошибка)."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    print("=== Starting OCR Tool ===")
    print(f"Input file: {args.path}")

    try:
        validate_config(engine=args.engine, language=args.lang)
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        return 1

    input_path = Path(args.path)

    try:
        # Формат проверяем до создания движка
        kind = InputRouter().resolve(input_path)

        pipeline = ExtractionComponentFactory.create_document_pipeline(
            engine=args.engine,
            language_tag=args.lang,
        )
        print(f">>> {kind.value.capitalize()} detected. Language: {pipeline.language.tag}")

        started = time.perf_counter()
        text = pipeline.process_file(input_path)
        elapsed = time.perf_counter() - started
        print(f">>> Processing completed in {elapsed:.2f} sec.")

        print("\n--- BEGIN RESULT ---")
        print(console_preview(text))
        print("--- END RESULT ---")

        output_path = ExtractionComponentFactory.create_file_manager().save_text(text, input_path)
        print(f"\n[SUCCESS] Full text saved to file: {output_path}")

    except InputNotFoundError as e:
        print(f"\n[ERROR] File not found: {e.path}")
        return 1
    except ExtractionError as e:
        logger.exception(f"[CLI] {e.message}")
        print(f"\n[CRITICAL ERROR]: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
