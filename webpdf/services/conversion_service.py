from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from webpdf.domain.errors import WriteError
from webpdf.domain.models import ExtractionRule, PdfOptions, RenderedDocument
from webpdf.services.extraction_service import build_print_document, extract_content
from webpdf.services.naming import normalize_url

logger = logging.getLogger(__name__)


class Browser(Protocol):
    def fetch_html(self, url: str) -> str: ...

    def print_pdf(self, html: str, options: PdfOptions) -> bytes: ...


class ConversionService:
    def __init__(
        self, browser: Browser, pdf_options: PdfOptions, rule: ExtractionRule | None = None
    ) -> None:
        self.browser = browser
        self.pdf_options = pdf_options
        self.rule = rule or ExtractionRule()

    def render(self, url: str) -> bytes:
        target = normalize_url(url)
        page_html = self.browser.fetch_html(target)
        fragment = extract_content(page_html, self.rule)
        logger.debug(f"Extracted {len(fragment)} characters from {target}")
        document = build_print_document(page_html, fragment, target)
        return self.browser.print_pdf(document, self.pdf_options)

    def convert_to_file(self, url: str, output_path: Path) -> RenderedDocument:
        content = self.render(url)
        try:
            output_path.write_bytes(content)
        except OSError as exc:
            raise WriteError(f"Unable to write {output_path}: {exc}") from exc
        return RenderedDocument(path=output_path, content=content)
