from __future__ import annotations

import logging
from types import TracebackType
from typing import cast

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from webpdf.domain.errors import NavigationError, WebPdfError
from webpdf.domain.models import PdfOptions

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--disable-web-security", "--no-sandbox"]


class PlaywrightBrowser:
    """One headless Chromium for the lifetime of a ``with`` block."""

    def __init__(self, navigation_timeout_ms: int = 60000, headless: bool = True) -> None:
        self.navigation_timeout_ms = navigation_timeout_ms
        self.headless = headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    def __enter__(self) -> PlaywrightBrowser:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def start(self) -> None:
        if self._browser is not None:
            return
        logger.debug("Launching headless Chromium")
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(
                headless=self.headless, args=LAUNCH_ARGS
            )
        except PlaywrightError as exc:
            self._playwright.stop()
            self._playwright = None
            raise WebPdfError(f"Unable to launch browser: {exc}") from exc

    def close(self) -> None:
        try:
            if self._browser is not None:
                self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                self._playwright.stop()
                self._playwright = None

    def _new_page(self) -> Page:
        if self._browser is None:
            self.start()
        return cast(Browser, self._browser).new_page()

    def fetch_html(self, url: str) -> str:
        page = self._new_page()
        try:
            try:
                response = page.goto(
                    url, wait_until="networkidle", timeout=self.navigation_timeout_ms
                )
            except PlaywrightTimeout as exc:
                raise NavigationError(
                    f"Timed out after {self.navigation_timeout_ms} ms loading {url}"
                ) from exc
            except PlaywrightError as exc:
                raise NavigationError(f"Failed to load {url}: {exc}") from exc

            if response is not None and response.status >= 400:
                raise NavigationError(f"HTTP {response.status} loading {url}")
            return page.content()
        finally:
            page.close()

    def print_pdf(self, html: str, options: PdfOptions) -> bytes:
        page = self._new_page()
        try:
            page.set_content(html, wait_until="networkidle", timeout=self.navigation_timeout_ms)
            return page.pdf(**options.to_playwright())
        except PlaywrightError as exc:
            raise WebPdfError(f"Unable to print PDF: {exc}") from exc
        finally:
            page.close()
