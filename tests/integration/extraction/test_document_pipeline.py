"""
Интеграционные тесты DocumentPipeline с фейковым движком и растеризатором.
"""

import threading

import numpy as np
import pytest
from loguru import logger
from PIL import Image

from contracts.ocr_text_dto import RasterImage
from powerocr.extraction.application.extraction_pipeline import DocumentPipeline, RunState
from powerocr.extraction.domain.exceptions import (
    ConfigurationError,
    DocumentError,
    ExtractionCancelledError,
    RecognitionError,
    UnsupportedFormatError,
)


def _pdf_path(tmp_path):
    path = tmp_path / "scan.pdf"
    path.write_bytes(b"%PDF-1.7 placeholder")
    return path


def test_three_pages_in_order(make_recognizer, make_rasterizer, tmp_path):
    """Тест: 3 страницы -> маркеры Page 1..3 по порядку, после текста пустая строка."""
    recognizer = make_recognizer(texts=[["first"], ["second"], ["third"]])
    rasterizer = make_rasterizer(page_count=3)
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    with rasterizer.open(_pdf_path(tmp_path)) as document:
        text = pipeline.process_document(document)

    assert text == (
        "--- Page 1 ---\nfirst\n\n"
        "--- Page 2 ---\nsecond\n\n"
        "--- Page 3 ---\nthird\n\n"
    )
    assert rasterizer.rendered == [0, 1, 2]
    assert pipeline.state is RunState.DONE


def test_page_failure_aborts_document(make_recognizer, make_rasterizer, tmp_path):
    """Тест: ошибка на странице 2 -> весь документ прерван, страница 3 не рендерится."""
    recognizer = make_recognizer(texts=[["first"], ["second"], ["third"]], fail_on_call=1)
    rasterizer = make_rasterizer(page_count=3)
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    with pytest.raises(RecognitionError):
        pipeline.process_file(_pdf_path(tmp_path))

    assert rasterizer.rendered == [0, 1]
    assert pipeline.state is RunState.FAILED
    # Документ закрыт и на пути ошибки
    assert rasterizer.documents[0].closed


def test_render_failure_logs_page_number(make_recognizer, make_rasterizer, tmp_path, monkeypatch):
    """Тест: сбой рендера страницы 2 -> ERROR с номером страницы, документ прерван."""
    recognizer = make_recognizer(texts=[["first"], ["second"]])
    rasterizer = make_rasterizer(page_count=2)
    render = rasterizer.render

    def failing_render(document, page_index, options):
        if page_index == 1:
            raise DocumentError(message="pdfium сломался", component="FakeRasterizer")
        return render(document, page_index, options)

    monkeypatch.setattr(rasterizer, "render", failing_render)
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    messages = []
    sink_id = logger.add(messages.append, level="ERROR", format="{message}")
    try:
        with pytest.raises(DocumentError):
            pipeline.process_file(_pdf_path(tmp_path))
    finally:
        logger.remove(sink_id)

    assert any("Сбой на странице 2 из 2" in m for m in messages)
    assert len(recognizer.calls) == 1
    assert pipeline.state is RunState.FAILED
    assert rasterizer.documents[0].closed


def test_process_file_closes_document(make_recognizer, make_rasterizer, tmp_path):
    recognizer = make_recognizer(texts=[["HELLO"]])
    rasterizer = make_rasterizer(page_count=1)
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    text = pipeline.process_file(_pdf_path(tmp_path))

    assert text == "--- Page 1 ---\nHELLO\n\n"
    assert rasterizer.documents[0].closed


def test_cancel_before_start(make_recognizer, make_rasterizer, tmp_path):
    """Тест: отмена до первой страницы -> ничего не рендерится."""
    rasterizer = make_rasterizer(page_count=2)
    pipeline = DocumentPipeline(make_recognizer(), rasterizer=rasterizer)
    cancel = threading.Event()
    cancel.set()

    with rasterizer.open(_pdf_path(tmp_path)) as document:
        with pytest.raises(ExtractionCancelledError):
            pipeline.process_document(document, cancel_event=cancel)

    assert rasterizer.rendered == []
    assert pipeline.state is RunState.FAILED


def test_cancel_between_pages(make_recognizer, make_rasterizer, tmp_path):
    """Тест: отмена во время страницы 1 -> страница 2 не начинается."""
    cancel = threading.Event()
    recognizer = make_recognizer(texts=[["a"], ["b"]], on_recognize=lambda call: cancel.set())
    rasterizer = make_rasterizer(page_count=2)
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    with pytest.raises(ExtractionCancelledError):
        pipeline.process_file(_pdf_path(tmp_path), cancel_event=cancel)

    assert rasterizer.rendered == [0]


def test_process_image_preprocesses_before_recognition(make_recognizer, gray_image):
    """Тест: движок получает pad -> invert -> scale (10x5 -> 160x160)."""
    recognizer = make_recognizer(texts=[["Hello   world"]])
    pipeline = DocumentPipeline(recognizer)

    text = pipeline.process_image(gray_image)

    received, language = recognizer.calls[0]
    assert received.size == (160, 160)
    assert language.tag == "en-US"
    # Нет маркеров страниц для одиночного изображения
    assert text == "Hello world"
    assert pipeline.state is RunState.DONE


def test_process_image_file(make_recognizer, tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (30, 20), (255, 255, 255)).save(path)
    recognizer = make_recognizer(texts=[["line one", "line two"]])

    text = DocumentPipeline(recognizer).process_file(path)

    assert text == "line one\nline two"


def test_unsupported_file_rejected_before_work(make_recognizer, make_rasterizer, tmp_path):
    """Тест: .txt -> UnsupportedFormatError, ни рендера, ни OCR."""
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    recognizer = make_recognizer()
    rasterizer = make_rasterizer()
    pipeline = DocumentPipeline(recognizer, rasterizer=rasterizer)

    with pytest.raises(UnsupportedFormatError):
        pipeline.process_file(path)

    assert recognizer.calls == []
    assert rasterizer.documents == []
    assert pipeline.state is RunState.FAILED


def test_language_selected_once_at_construction(make_recognizer):
    """Тест: 'xx-XX' при единственном 'en-US' -> 'en-US'."""
    pipeline = DocumentPipeline(make_recognizer(languages=["en-US"]), language_tag="xx-XX")

    assert pipeline.language.tag == "en-US"
    assert pipeline.state is RunState.IDLE


def test_no_languages_fails_at_construction(make_recognizer):
    with pytest.raises(ConfigurationError):
        DocumentPipeline(make_recognizer(languages=[]))


def test_chinese_document_keeps_line_text(make_recognizer):
    recognizer = make_recognizer(languages=["zh-CN"], texts=[["你好 世界"]])
    pipeline = DocumentPipeline(recognizer, language_tag="zh-CN")

    text = pipeline.process_image(RasterImage.from_array(np.zeros((8, 8), dtype=np.uint8)))

    assert text == "你好 世界"
