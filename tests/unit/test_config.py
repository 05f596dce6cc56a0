import logging
import sys

import pytest

from webpdf.infrastructure.config import (
    BUNDLED_LINKS_DIR,
    AppConfig,
    _get_float_env,
    _get_int_env,
    _get_str_env,
)
from webpdf.infrastructure.logging_config import configure_logging


@pytest.mark.unit
def test_int_env_override_and_fallbacks(monkeypatch) -> None:
    monkeypatch.setenv("WEBPDF_TEST_INT", "1500")
    assert _get_int_env("WEBPDF_TEST_INT", 60000) == 1500

    monkeypatch.setenv("WEBPDF_TEST_INT", "soon")
    assert _get_int_env("WEBPDF_TEST_INT", 60000) == 60000

    monkeypatch.setenv("WEBPDF_TEST_INT", "-5")
    assert _get_int_env("WEBPDF_TEST_INT", 60000) == 60000

    monkeypatch.delenv("WEBPDF_TEST_INT")
    assert _get_int_env("WEBPDF_TEST_INT", 60000) == 60000


@pytest.mark.unit
def test_float_and_str_env(monkeypatch) -> None:
    monkeypatch.setenv("WEBPDF_TEST_SCALE", "0.9")
    monkeypatch.setenv("WEBPDF_TEST_FORMAT", "  Letter ")
    monkeypatch.setenv("WEBPDF_TEST_EMPTY", "   ")

    assert _get_float_env("WEBPDF_TEST_SCALE", 0.7) == 0.9
    assert _get_str_env("WEBPDF_TEST_FORMAT", "A4") == "Letter"
    assert _get_str_env("WEBPDF_TEST_EMPTY", "A4") == "A4"


@pytest.mark.unit
def test_pdf_options_from_config() -> None:
    config = AppConfig(pdf_format="Letter", pdf_scale=1.0, pdf_margin="2cm")

    options = config.pdf_options()

    assert options.format == "Letter"
    assert options.scale == 1.0
    assert options.landscape is False
    assert options.margin_left == "2cm"
    assert options.print_background is True


@pytest.mark.unit
def test_bundled_links_dir_holds_link_files() -> None:
    assert (BUNDLED_LINKS_DIR / "svelte-links.txt").is_file()
    assert (BUNDLED_LINKS_DIR / "sveltekit-links.txt").is_file()


@pytest.mark.unit
def test_progress_logging_goes_to_stdout(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(verbose=True)

    assert calls == [{"level": logging.DEBUG, "format": "%(message)s", "stream": sys.stdout}]
