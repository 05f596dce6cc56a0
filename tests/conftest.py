from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import fitz
import pytest
from bs4 import BeautifulSoup

from webpdf.domain.errors import NavigationError
from webpdf.domain.models import PdfOptions


def text_pdf_bytes(pages: list[str]) -> bytes:
    document = fitz.open()
    try:
        for text in pages:
            page = document.new_page()
            page.insert_text((72, 72), text)
        return document.tobytes(deflate=True, garbage=3)
    finally:
        document.close()


def pdf_page_texts(pdf: Path | bytes) -> list[str]:
    if isinstance(pdf, bytes):
        document = fitz.open(stream=pdf, filetype="pdf")
    else:
        document = fitz.open(str(pdf))
    with document:
        return [page.get_text("text").strip() for page in document]


class FakeBrowser:
    """Stands in for ``PlaywrightBrowser``: serves canned HTML, prints text PDFs."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages = pages or {}
        self.fetched: list[str] = []
        self.printed: list[str] = []
        self.entered = False
        self.closed = False

    def __enter__(self) -> FakeBrowser:
        self.entered = True
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def fetch_html(self, url: str) -> str:
        self.fetched.append(url)
        if url not in self.pages:
            raise NavigationError(f"Timed out after 60000 ms loading {url}")
        return self.pages[url]

    def print_pdf(self, html: str, options: PdfOptions) -> bytes:
        self.printed.append(html)
        soup = BeautifulSoup(html, "html.parser")
        text = soup.body.get_text(" ", strip=True) if soup.body else ""
        return text_pdf_bytes([text or "blank"])


def docs_page(title: str, body: str = "", with_text_content: bool = True) -> str:
    text = f'<div class="text content"><p>{body}</p></div>' if with_text_content else ""
    return (
        "<html><head><title>Docs</title>"
        '<script src="/app.js"></script></head>'
        "<body><nav>Sidebar</nav>"
        f'<main id="docs-content"><header><h1>{title}</h1></header>{text}'
        "<footer>Edit this page</footer></main>"
        "</body></html>"
    )


@pytest.fixture
def fake_browser() -> Callable[[dict[str, str] | None], FakeBrowser]:
    return FakeBrowser


@pytest.fixture
def page_html() -> Callable[..., str]:
    return docs_page


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    def _make(name: str, pages: list[str]) -> Path:
        path = tmp_path / name
        path.write_bytes(text_pdf_bytes(pages))
        return path

    return _make


@pytest.fixture
def corrupt_pdf(tmp_path: Path) -> Callable[[str], Path]:
    def _make(name: str) -> Path:
        path = tmp_path / name
        path.write_bytes(b"this is not a pdf document at all")
        return path

    return _make


@pytest.fixture
def page_texts() -> Callable[[Path | bytes], list[str]]:
    return pdf_page_texts
