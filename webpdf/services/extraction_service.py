"""Content extraction for documentation pages.

Everything here works on HTML text, so the fixed extraction rule can be
exercised without a browser. The renderer feeds it the live page markup and
loads the result back into the page before printing.
"""

from __future__ import annotations

import copy

from bs4 import BeautifulSoup

from webpdf.domain.errors import SelectorNotFoundError
from webpdf.domain.models import ExtractionRule

PRINT_STYLESHEET = """
body {
  margin: 0;
  padding: 20px;
  font-family: Arial, sans-serif;
}
img {
  max-width: 100%;
  height: auto;
}
pre, code {
  white-space: pre-wrap;
  overflow-wrap: break-word;
}
header, h1 {
  margin-bottom: 20px;
  padding-bottom: 10px;
  border-bottom: 1px solid #eaeaea;
}
"""


def extract_content(html: str, rule: ExtractionRule | None = None) -> str:
    """Return the printable fragment of a documentation page.

    The fragment is a ``<div>`` holding the container's header (if any)
    followed by the text-content element. Pages without a text-content
    element get a copy of the whole container instead, minus the header that
    was already taken so it is not printed twice.

    Raises:
        SelectorNotFoundError: the container selector matches nothing.
    """
    rule = rule or ExtractionRule()
    soup = BeautifulSoup(html, "html.parser")
    parent = soup.select_one(rule.container_selector)
    if parent is None:
        raise SelectorNotFoundError(
            f'Element with selector "{rule.container_selector}" not found on the page!'
        )

    container = soup.new_tag("div")
    header = parent.select_one(rule.header_selector)
    child = parent.select_one(rule.text_selector)

    if header is not None:
        container.append(copy.copy(header))

    if child is not None:
        container.append(copy.copy(child))
    else:
        parent_clone = copy.copy(parent)
        if header is not None:
            header_in_clone = parent_clone.select_one(rule.header_selector)
            if header_in_clone is not None:
                header_in_clone.decompose()
        container.append(parent_clone)

    return str(container)


def build_print_document(page_html: str, fragment: str, base_url: str) -> str:
    """Rebuild the page around ``fragment`` for printing.

    The original ``<head>`` is kept for the site's stylesheets, a ``<base>``
    pointing at ``base_url`` keeps relative resources resolvable once the
    markup is reloaded, and scripts are dropped so client-side rendering
    cannot replace the extracted body.
    """
    soup = BeautifulSoup(page_html, "html.parser")
    if soup.html is None:
        soup = BeautifulSoup("<html><head></head><body></body></html>", "html.parser")

    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        soup.html.insert(0, head)

    for script in soup.find_all("script"):
        script.decompose()
    for existing_base in head.find_all("base"):
        existing_base.decompose()

    base = soup.new_tag("base", href=base_url)
    head.insert(0, base)

    style = soup.new_tag("style")
    style.string = PRINT_STYLESHEET
    head.append(style)

    body = soup.body
    if body is None:
        body = soup.new_tag("body")
        soup.html.append(body)
    body.clear()
    body.append(BeautifulSoup(fragment, "html.parser"))

    return str(soup)
