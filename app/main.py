from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from webpdf.adapters.playwright_adapter import PlaywrightBrowser
from webpdf.adapters.pymupdf_adapter import PyMuPdfAdapter
from webpdf.domain.errors import ValidationError, WebPdfError
from webpdf.domain.models import BatchOperationResult, LinkSet, NamingStrategy, PdfOptions
from webpdf.infrastructure.config import AppConfig
from webpdf.infrastructure.logging_config import configure_logging
from webpdf.services.batch_service import BatchService
from webpdf.services.conversion_service import ConversionService
from webpdf.services.link_service import (
    SVELTE,
    SVELTEKIT,
    apply_exclusions,
    load_link_set,
    load_urls_file,
    refresh_links,
)
from webpdf.services.merge_service import MergeService

logger = logging.getLogger(__name__)

SELECTOR_NOTICE = 'Using hardcoded selectors: parent="#docs-content", child=".text.content"'


def _pdf_options(args: argparse.Namespace, config: AppConfig) -> PdfOptions:
    options = config.pdf_options()
    if args.margin:
        options = options.with_margin(args.margin)
    return PdfOptions(
        format=args.format or options.format,
        landscape=args.landscape,
        scale=args.scale if args.scale is not None else options.scale,
        margin_top=options.margin_top,
        margin_right=options.margin_right,
        margin_bottom=options.margin_bottom,
        margin_left=options.margin_left,
        print_background=not args.no_background,
    )


def _open_browser(config: AppConfig) -> PlaywrightBrowser:
    return PlaywrightBrowser(navigation_timeout_ms=config.navigation_timeout_ms)


def _batch_service(browser: PlaywrightBrowser, pdf_options: PdfOptions) -> BatchService:
    conversion = ConversionService(browser, pdf_options)
    return BatchService(conversion, MergeService(PyMuPdfAdapter()))


def _report(result: BatchOperationResult, title: str = "PDF Statistics") -> None:
    if result.statistics is not None:
        logger.info("\n" + BatchService.format_statistics(result.statistics, title))


def _run_urls(
    urls: list[str],
    args: argparse.Namespace,
    config: AppConfig,
    naming: NamingStrategy = NamingStrategy.QUALIFIED,
) -> BatchOperationResult:
    logger.info(f"Found {len(urls)} URLs to process.")
    logger.info(SELECTOR_NOTICE)
    with _open_browser(config) as browser:
        result = _batch_service(browser, _pdf_options(args, config)).run(
            urls,
            args.output_dir,
            naming=naming,
            combine=args.combine,
            combined_name=args.combined_name,
        )
    _report(result)
    return result


def _link_set_urls(link_set: LinkSet, excluded: list[str], config: AppConfig) -> list[str]:
    links = apply_exclusions(load_link_set(link_set, config.links_dir), link_set, excluded)
    logger.info(f"Found {len(links)} {link_set.label} documentation URLs to process.")
    return links


def _excluded_flags(args: argparse.Namespace, link_set: LinkSet) -> list[str]:
    return [flag for flag in link_set.exclusions if getattr(args, f"no_{flag}", False)]


def cmd_convert(args: argparse.Namespace, config: AppConfig) -> int:
    logger.info(f"Converting {args.url} to PDF...")
    logger.info(SELECTOR_NOTICE)
    with _open_browser(config) as browser:
        conversion = ConversionService(browser, _pdf_options(args, config))
        document = conversion.convert_to_file(args.url, Path(args.output))
    logger.info(f"PDF saved to {document.path.resolve()}")
    return 0


def cmd_bulk(args: argparse.Namespace, config: AppConfig) -> int:
    urls = load_urls_file(args.urls_file)
    if not urls:
        raise ValidationError("No URLs found in the file.")
    _run_urls(urls, args, config)
    return 0


def cmd_urls(args: argparse.Namespace, config: AppConfig) -> int:
    urls = [url for url in args.urls if url.strip()]
    if not urls:
        raise ValidationError("No URLs provided.")
    _run_urls(urls, args, config)
    return 0


def _cmd_link_set(link_set: LinkSet, args: argparse.Namespace, config: AppConfig) -> int:
    urls = _link_set_urls(link_set, _excluded_flags(args, link_set), config)
    logger.info(SELECTOR_NOTICE)
    with _open_browser(config) as browser:
        result = _batch_service(browser, _pdf_options(args, config)).run(
            urls,
            args.output_dir or link_set.default_output_dir,
            naming=NamingStrategy.PAGE,
            combine=args.combine,
            combined_name=args.combined_name or link_set.default_combined_name,
        )
    logger.info(f"{link_set.label} documentation conversion complete.")
    _report(result)
    return 0


def cmd_svelte(args: argparse.Namespace, config: AppConfig) -> int:
    return _cmd_link_set(SVELTE, args, config)


def cmd_sveltekit(args: argparse.Namespace, config: AppConfig) -> int:
    return _cmd_link_set(SVELTEKIT, args, config)


def cmd_extract_links(args: argparse.Namespace, config: AppConfig) -> int:
    with _open_browser(config) as browser:
        refresh_links(browser, config.links_dir)
    logger.info("\nExtraction complete!")
    return 0


def cmd_docs(args: argparse.Namespace, config: AppConfig) -> int:
    combine = not args.no_combine
    targets = [
        (SVELTE, args.svelte_dir, args.svelte_name),
        (SVELTEKIT, args.sveltekit_dir, args.sveltekit_name),
    ]

    with _open_browser(config) as browser:
        if args.no_extract:
            logger.info("Skipping link extraction as requested (--no-extract)")
        else:
            logger.info("\n=== EXTRACTING DOCUMENTATION LINKS ===")
            try:
                refresh_links(browser, config.links_dir)
            except WebPdfError as exc:
                logger.error(f"Error extracting links: {exc}")
                logger.info("Continuing with existing link files...")

        batch = _batch_service(browser, _pdf_options(args, config))
        for link_set, output_dir, combined_name in targets:
            logger.info(f"\n=== GENERATING {link_set.label.upper()} DOCUMENTATION ===")
            urls = _link_set_urls(link_set, _excluded_flags(args, link_set), config)
            result = batch.run(
                urls,
                output_dir,
                naming=NamingStrategy.PAGE,
                combine=combine,
                combined_name=combined_name,
            )
            logger.info(f"{link_set.label} documentation conversion complete.")
            _report(result, f"{link_set.label} PDF Statistics")

    logger.info("\n=== DOCUMENTATION GENERATION COMPLETE ===")
    for link_set, output_dir, combined_name in targets:
        suffix = f" (with combined PDF: {combined_name})" if combine else ""
        logger.info(f"{link_set.label} docs saved to: {output_dir}{suffix}")
    return 0


def _add_pdf_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("PDF options")
    group.add_argument("--format", help="Paper format, e.g. A4, Letter (default: A4).")
    group.add_argument("--landscape", action="store_true", help="Use landscape orientation.")
    group.add_argument("--scale", type=float, help="Rendering scale (default: 0.7).")
    group.add_argument("--margin", help="Margin applied to all sides (default: 1cm).")
    group.add_argument(
        "--no-background", action="store_true", help="Do not print background graphics."
    )


def _add_batch_options(
    parser: argparse.ArgumentParser, default_dir: str | None, default_name: str | None
) -> None:
    parser.add_argument(
        "-o", "--output-dir", default=default_dir, help="Output directory for PDF files."
    )
    parser.add_argument(
        "-c", "--combine", action="store_true", help="Create a combined PDF of all pages."
    )
    parser.add_argument(
        "--combined-name", default=default_name, help="Name for the combined PDF file."
    )


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webpage-to-pdf",
        description="Convert webpages to PDF files, extracting specific content.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    convert = subparsers.add_parser("convert", help="Convert a single webpage to PDF.")
    convert.add_argument("url", help="URL of the webpage to convert.")
    convert.add_argument(
        "-o", "--output", default=config.default_output_file, help="Output PDF file path."
    )
    _add_pdf_options(convert)
    convert.set_defaults(handler=cmd_convert)

    bulk = subparsers.add_parser("bulk", help="Convert multiple webpages listed in a file.")
    bulk.add_argument("urls_file", help="Path to a text file with URLs (one per line).")
    _add_batch_options(bulk, config.default_output_dir, "combined.pdf")
    _add_pdf_options(bulk)
    bulk.set_defaults(handler=cmd_bulk)

    urls = subparsers.add_parser("urls", help="Convert webpages given on the command line.")
    urls.add_argument("urls", nargs="+", help="Space-separated list of URLs to convert.")
    _add_batch_options(urls, config.default_output_dir, "combined.pdf")
    _add_pdf_options(urls)
    urls.set_defaults(handler=cmd_urls)

    svelte = subparsers.add_parser("svelte", help="Convert the Svelte documentation links.")
    _add_batch_options(svelte, None, None)
    svelte.add_argument(
        "--no-legacy", action="store_true", help='Ignore links containing "legacy".'
    )
    svelte.add_argument("--no-v4", action="store_true", help="Ignore the v4 migration guide.")
    _add_pdf_options(svelte)
    svelte.set_defaults(handler=cmd_svelte)

    sveltekit = subparsers.add_parser(
        "sveltekit", help="Convert the SvelteKit documentation links."
    )
    _add_batch_options(sveltekit, None, None)
    sveltekit.add_argument(
        "--no-migration", action="store_true", help="Ignore migration guides."
    )
    _add_pdf_options(sveltekit)
    sveltekit.set_defaults(handler=cmd_sveltekit)

    docs = subparsers.add_parser(
        "docs", help="Refresh links and generate Svelte and SvelteKit documentation."
    )
    docs.add_argument("--no-combine", action="store_true", help="Skip the combined PDFs.")
    docs.add_argument("--no-legacy", action="store_true", help='Ignore "legacy" links.')
    docs.add_argument("--no-v4", action="store_true", help="Ignore the v4 migration guide.")
    docs.add_argument(
        "--no-migration", action="store_true", help="Ignore SvelteKit migration guides."
    )
    docs.add_argument("--svelte-dir", default=SVELTE.default_output_dir)
    docs.add_argument("--sveltekit-dir", default=SVELTEKIT.default_output_dir)
    docs.add_argument("--svelte-name", default=SVELTE.default_combined_name)
    docs.add_argument("--sveltekit-name", default=SVELTEKIT.default_combined_name)
    docs.add_argument(
        "--no-extract",
        action="store_true",
        help="Skip link extraction step (use existing link files).",
    )
    _add_pdf_options(docs)
    docs.set_defaults(handler=cmd_docs)

    extract = subparsers.add_parser(
        "extract-links", help="Refresh the Svelte and SvelteKit link lists."
    )
    extract.set_defaults(handler=cmd_extract_links)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    config = AppConfig()
    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return int(args.handler(args, config))
    except WebPdfError as exc:
        logger.error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
