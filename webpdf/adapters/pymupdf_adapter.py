from __future__ import annotations

import io
from typing import cast

import fitz  # type: ignore[import-untyped]
from pypdf import PdfWriter

from webpdf.domain.errors import ParsingError


class PyMuPdfAdapter:
    @staticmethod
    def _optimized_bytes(document: fitz.Document) -> bytes:
        return cast(
            bytes,
            document.tobytes(
                garbage=4,
                clean=True,
                deflate=True,
                deflate_images=True,
                deflate_fonts=True,
            ),
        )

    @staticmethod
    def _empty_document_bytes() -> bytes:
        # MuPDF refuses to save a document without pages.
        buffer = io.BytesIO()
        PdfWriter().write(buffer)
        return buffer.getvalue()

    def new_document(self) -> fitz.Document:
        return fitz.open()

    def open_document(self, pdf_bytes: bytes) -> fitz.Document:
        try:
            return fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as exc:
            raise ParsingError("Unable to parse PDF document") from exc

    def append_document(self, output: fitz.Document, source: fitz.Document) -> int:
        if source.page_count == 0:
            return 0
        start = output.page_count
        try:
            output.insert_pdf(source, from_page=0, to_page=source.page_count - 1)
        except Exception as exc:
            # Drop pages copied before the failure.
            if output.page_count > start:
                output.delete_pages(start, output.page_count - 1)
            raise ParsingError("Unable to copy pages") from exc
        return int(source.page_count)

    def document_bytes(self, document: fitz.Document) -> bytes:
        if document.page_count == 0:
            return self._empty_document_bytes()
        try:
            return self._optimized_bytes(document)
        except Exception as exc:
            raise ParsingError("Unable to serialize PDF document") from exc
