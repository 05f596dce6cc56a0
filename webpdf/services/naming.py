from __future__ import annotations

import re
from urllib.parse import urlparse

from webpdf.domain.models import NamingStrategy

NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]", flags=re.IGNORECASE)


def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        return "https://" + url
    return url


def _flatten(text: str) -> str:
    return NON_ALPHANUMERIC.sub("_", text).lower()


def qualified_name(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.hostname:
        return _flatten(url)
    if parsed.path in ("", "/"):
        return f"{parsed.hostname}_index".lower()
    return f"{parsed.hostname}{_flatten(parsed.path)}".lower()


def page_name(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.hostname:
        return _flatten(url)
    return parsed.path.split("/")[-1] or "index"


def output_filename(url: str, strategy: NamingStrategy = NamingStrategy.QUALIFIED) -> str:
    if strategy == NamingStrategy.PAGE:
        return f"{page_name(url)}.pdf"
    return f"{qualified_name(url)}.pdf"
