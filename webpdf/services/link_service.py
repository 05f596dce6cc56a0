from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from bs4 import BeautifulSoup, Tag

from webpdf.domain.errors import FileReadError, ValidationError, WriteError
from webpdf.domain.models import LinkSet

logger = logging.getLogger(__name__)

DOCS_ORIGIN = "https://svelte.dev"

SVELTE = LinkSet(
    name="svelte",
    label="Svelte",
    source_url=f"{DOCS_ORIGIN}/docs/svelte/overview",
    file_name="svelte-links.txt",
    default_output_dir="svelte-docs",
    default_combined_name="svelte-documentation.pdf",
    exclusions={"legacy": "legacy", "v4": "v4-migration-guide"},
)

SVELTEKIT = LinkSet(
    name="sveltekit",
    label="SvelteKit",
    source_url=f"{DOCS_ORIGIN}/docs/kit/introduction",
    file_name="sveltekit-links.txt",
    default_output_dir="sveltekit-docs",
    default_combined_name="sveltekit-documentation.pdf",
    exclusions={"migration": "migrat"},
)


class HtmlSource(Protocol):
    def fetch_html(self, url: str) -> str: ...


def _parse_lines(text: str) -> list[str]:
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line and not line.startswith("#")]


def load_urls_file(path: Path | str) -> list[str]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"Unable to read URLs file {path}: {exc}") from exc
    return _parse_lines(text)


def load_link_set(link_set: LinkSet, links_dir: Path) -> list[str]:
    path = links_dir / link_set.file_name
    try:
        links = load_urls_file(path)
    except FileReadError as exc:
        raise ValidationError(f"Error loading {link_set.file_name}: {exc}") from exc
    if not links:
        raise ValidationError(f"No valid URLs found in {link_set.file_name}.")
    return links


def exclude_links(links: Iterable[str], substring: str) -> list[str]:
    needle = substring.lower()
    return [link for link in links if needle not in link.lower()]


def apply_exclusions(links: list[str], link_set: LinkSet, excluded: Iterable[str]) -> list[str]:
    for flag in excluded:
        substring = link_set.exclusions[flag]
        before = len(links)
        links = exclude_links(links, substring)
        logger.info(f"Filtered out {before - len(links)} {substring} links")
    return links


def _docs_nav(soup: BeautifulSoup) -> Tag | None:
    for nav in soup.find_all("nav"):
        if nav.get("aria-label") == "Docs":
            return nav
    return None


def extract_doc_links(html: str, link_set: LinkSet) -> list[str]:
    """Collect documentation URLs from the "Docs" navigation of a page.

    SvelteKit links live in the top-level navigation sections that mention
    "kit"; Svelte links are every navigation link outside ``/kit/``. Only
    ``/docs/`` paths are kept, made absolute and de-duplicated in page order.
    """
    soup = BeautifulSoup(html, "html.parser")
    nav = _docs_nav(soup)
    if nav is None:
        return []

    if link_set is SVELTEKIT:
        sections = [child for child in nav.children if isinstance(child, Tag)]
        anchors = [
            anchor
            for section in sections
            if "kit" in section.get_text().lower()
            for anchor in section.find_all("a")
        ]
    else:
        anchors = [
            anchor for anchor in nav.find_all("a") if "/kit/" not in anchor.get("href", "")
        ]

    links: list[str] = []
    for anchor in anchors:
        href = anchor.get("href", "")
        if not href.startswith("/docs/"):
            continue
        url = f"{DOCS_ORIGIN}{href}"
        if url not in links:
            links.append(url)

    logger.info(
        f"Found {len(anchors)} total {link_set.label} links, {len(links)} documentation links"
    )
    return links


def save_links(links: list[str], link_set: LinkSet, links_dir: Path) -> Path:
    path = links_dir / link_set.file_name
    content = "\n".join([f"# {link_set.label} documentation links, one URL per line.", *links])
    try:
        links_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Unable to write {path}: {exc}") from exc
    return path


def refresh_links(source: HtmlSource, links_dir: Path) -> dict[str, int]:
    counts: dict[str, int] = {}
    for link_set in (SVELTE, SVELTEKIT):
        logger.info(f"\nOpening {link_set.label} documentation at {link_set.source_url}")
        links = extract_doc_links(source.fetch_html(link_set.source_url), link_set)
        if not links:
            raise ValidationError(f"No {link_set.label} documentation links found.")
        path = save_links(links, link_set, links_dir)
        logger.info(f"{link_set.label} docs: {len(links)} links saved to {path}")
        counts[link_set.name] = len(links)
    return counts
