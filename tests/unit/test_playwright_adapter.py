from unittest.mock import MagicMock, Mock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from webpdf.adapters.playwright_adapter import LAUNCH_ARGS, PlaywrightBrowser
from webpdf.domain.errors import NavigationError, WebPdfError
from webpdf.domain.models import PdfOptions

URL = "https://svelte.dev/docs/kit/load"


@pytest.fixture
def playwright():
    with patch("webpdf.adapters.playwright_adapter.sync_playwright") as mock_sync:
        instance = MagicMock()
        mock_sync.return_value.start.return_value = instance
        yield instance


@pytest.fixture
def page(playwright):
    return playwright.chromium.launch.return_value.new_page.return_value


@pytest.mark.unit
def test_fetch_html_waits_for_network_idle(playwright, page) -> None:
    page.goto.return_value = Mock(status=200)
    page.content.return_value = "<html><body>Loading data</body></html>"

    with PlaywrightBrowser(navigation_timeout_ms=1500) as browser:
        html = browser.fetch_html(URL)

    assert html == "<html><body>Loading data</body></html>"
    playwright.chromium.launch.assert_called_once_with(headless=True, args=LAUNCH_ARGS)
    page.goto.assert_called_once_with(URL, wait_until="networkidle", timeout=1500)
    page.close.assert_called_once()


@pytest.mark.unit
def test_navigation_timeout_becomes_navigation_error(page) -> None:
    page.goto.side_effect = PlaywrightTimeout("Timeout 1500ms exceeded")

    with PlaywrightBrowser(navigation_timeout_ms=1500) as browser:
        with pytest.raises(NavigationError, match="Timed out after 1500 ms loading"):
            browser.fetch_html(URL)

    page.close.assert_called_once()


@pytest.mark.unit
def test_playwright_error_becomes_navigation_error(page) -> None:
    page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

    with PlaywrightBrowser() as browser:
        with pytest.raises(NavigationError, match="Failed to load"):
            browser.fetch_html(URL)


@pytest.mark.unit
def test_http_error_status_becomes_navigation_error(page) -> None:
    page.goto.return_value = Mock(status=404)

    with PlaywrightBrowser() as browser:
        with pytest.raises(NavigationError, match="HTTP 404"):
            browser.fetch_html(URL)

    page.content.assert_not_called()


@pytest.mark.unit
def test_launch_failure_stops_playwright(playwright) -> None:
    playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

    with pytest.raises(WebPdfError, match="Unable to launch browser"):
        PlaywrightBrowser().start()

    playwright.stop.assert_called_once()


@pytest.mark.unit
def test_browser_released_when_block_raises(playwright) -> None:
    with pytest.raises(RuntimeError):
        with PlaywrightBrowser():
            raise RuntimeError("interrupted")

    playwright.chromium.launch.return_value.close.assert_called_once()
    playwright.stop.assert_called_once()


@pytest.mark.unit
def test_print_pdf_passes_options(page) -> None:
    options = PdfOptions()
    page.pdf.return_value = b"%PDF-1.7"

    with PlaywrightBrowser(navigation_timeout_ms=1500) as browser:
        assert browser.print_pdf("<html></html>", options) == b"%PDF-1.7"

    page.set_content.assert_called_once_with(
        "<html></html>", wait_until="networkidle", timeout=1500
    )
    page.pdf.assert_called_once_with(**options.to_playwright())
    page.close.assert_called_once()


@pytest.mark.unit
def test_print_failure_becomes_webpdf_error(page) -> None:
    page.pdf.side_effect = PlaywrightError("Target closed")

    with PlaywrightBrowser() as browser:
        with pytest.raises(WebPdfError, match="Unable to print PDF"):
            browser.print_pdf("<html></html>", PdfOptions())

    page.close.assert_called_once()
