"""
Растеризатор PDF на pypdfium2.

Страница рендерится с масштабом dpi / 72 (точки PDF = 1/72 дюйма) на белом
фоне и возвращается как BGR RasterImage с разрешением рендера.
Документ закрывается при выходе из `with rasterizer.open(path)` на любом пути.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import cv2
import numpy as np
import pypdfium2 as pdfium
from loguru import logger

from contracts.ocr_text_dto import PixelFormat, RasterImage
from powerocr.domain.contracts import RenderOptions
from ..domain.exceptions import CorruptDocumentError, DocumentError, InputNotFoundError, PageIndexError
from ..domain.interfaces import IPageRasterizer


class PdfDocumentHandle:
    """Открытый PDF: количество страниц и доступ к страницам для рендера."""

    def __init__(self, pdf: "pdfium.PdfDocument", source: str):
        self._pdf = pdf
        self.source = source

    @property
    def page_count(self) -> int:
        return len(self._pdf)

    def get_page(self, page_index: int) -> "pdfium.PdfPage":
        return self._pdf[page_index]


class PdfiumRasterizer(IPageRasterizer):
    """
    Реализация IPageRasterizer на pypdfium2.
    """

    @contextmanager
    def open(self, path: Path) -> Iterator[PdfDocumentHandle]:
        """
        Открывает PDF.

        Raises:
            InputNotFoundError: файла нет
            CorruptDocumentError: pdfium не смог открыть файл
        """
        path = Path(path)
        if not path.exists():
            raise InputNotFoundError(path, component="PdfiumRasterizer")

        try:
            pdf = pdfium.PdfDocument(str(path))
        except pdfium.PdfiumError as e:
            raise CorruptDocumentError(
                message=f"Не удалось открыть PDF: {path}",
                component="PdfiumRasterizer",
                original_error=e
            )

        document = PdfDocumentHandle(pdf, source=str(path))
        logger.debug(f"[PdfiumRasterizer] Открыт {path.name}: страниц {document.page_count}")
        try:
            yield document
        finally:
            pdf.close()
            logger.debug(f"[PdfiumRasterizer] Закрыт {path.name}")

    def render(self, document: PdfDocumentHandle, page_index: int, options: RenderOptions) -> RasterImage:
        """
        Рендерит страницу (index с 0) в BGR.

        Raises:
            PageIndexError: индекс вне 0..page_count-1
            DocumentError: сбой pdfium при рендере
        """
        page_count = document.page_count
        if page_index < 0 or page_index >= page_count:
            raise PageIndexError(page_index, page_count, component="PdfiumRasterizer")

        page = document.get_page(page_index)
        try:
            bitmap = page.render(scale=options.scale)
            pil_img = bitmap.to_pil().convert("RGB")
            pixels = cv2.cvtColor(np.array(pil_img), cv2.COLOR_RGB2BGR)
        except pdfium.PdfiumError as e:
            raise DocumentError(
                message=f"Не удалось отрендерить страницу {page_index + 1}: {document.source}",
                component="PdfiumRasterizer",
                original_error=e
            )
        finally:
            page.close()

        image = RasterImage(
            pixels=pixels,
            pixel_format=PixelFormat.BGR,
            horizontal_resolution=options.dpi,
            vertical_resolution=options.dpi,
        )
        logger.debug(
            f"[PdfiumRasterizer] Страница {page_index + 1}/{page_count}: "
            f"{image.width}x{image.height} @ {options.dpi:g} dpi"
        )
        return image
