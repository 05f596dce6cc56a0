from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from webpdf.domain.models import PdfOptions

BUNDLED_LINKS_DIR = Path(__file__).resolve().parent.parent / "data"


def _get_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _get_float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _get_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class AppConfig:
    navigation_timeout_ms: int = _get_int_env("WEBPDF_NAV_TIMEOUT_MS", 60000)
    pdf_format: str = _get_str_env("WEBPDF_PDF_FORMAT", "A4")
    pdf_scale: float = _get_float_env("WEBPDF_PDF_SCALE", 0.7)
    pdf_margin: str = _get_str_env("WEBPDF_PDF_MARGIN", "1cm")
    default_output_file: str = _get_str_env("WEBPDF_OUTPUT_FILE", "output.pdf")
    default_output_dir: str = _get_str_env("WEBPDF_OUTPUT_DIR", "output")
    links_dir: Path = Path(_get_str_env("WEBPDF_LINKS_DIR", str(BUNDLED_LINKS_DIR)))

    def pdf_options(self) -> PdfOptions:
        return PdfOptions(format=self.pdf_format, scale=self.pdf_scale).with_margin(
            self.pdf_margin
        )
