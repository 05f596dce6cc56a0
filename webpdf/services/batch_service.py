from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from webpdf.domain.errors import WriteError
from webpdf.domain.models import (
    BatchItemResult,
    BatchOperationResult,
    MergeStatistics,
    NamingStrategy,
    Status,
)
from webpdf.services.conversion_service import ConversionService
from webpdf.services.merge_service import MergeService
from webpdf.services.naming import output_filename

logger = logging.getLogger(__name__)


class BatchService:
    def __init__(self, conversion_service: ConversionService, merge_service: MergeService) -> None:
        self.conversion_service = conversion_service
        self.merge_service = merge_service

    @staticmethod
    def _prepare_output_dir(output_dir: Path) -> None:
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Unable to create output directory {output_dir}: {exc}") from exc

    def convert_all(
        self,
        urls: Sequence[str],
        output_dir: Path | str,
        naming: NamingStrategy = NamingStrategy.QUALIFIED,
    ) -> list[BatchItemResult]:
        output_dir = Path(output_dir)
        self._prepare_output_dir(output_dir)

        items: list[BatchItemResult] = []
        for index, raw_url in enumerate(urls, start=1):
            url = raw_url.strip()
            if not url:
                continue
            logger.info(f"[{index}/{len(urls)}] Converting {url}")
            try:
                output_path = output_dir / output_filename(url, naming)
                document = self.conversion_service.convert_to_file(url, output_path)
                logger.info(f"  Saved to {document.path}")
                logger.debug(f"  {document.size_bytes} bytes written")
                items.append(
                    BatchItemResult(url=url, status=Status.SUCCESS, output_path=document.path)
                )
            except Exception as exc:
                logger.error(f"  Error: {exc}")
                items.append(BatchItemResult(url=url, status=Status.ERROR, message=str(exc)))
        return items

    def run(
        self,
        urls: Sequence[str],
        output_dir: Path | str,
        naming: NamingStrategy = NamingStrategy.QUALIFIED,
        combine: bool = False,
        combined_name: str = "combined.pdf",
    ) -> BatchOperationResult:
        output_dir = Path(output_dir)
        result = BatchOperationResult(items=self.convert_all(urls, output_dir, naming))
        logger.info(
            f"Conversion complete: {result.success_count} succeeded, "
            f"{result.error_count} failed."
        )

        if not combine or not result.generated_paths:
            return result

        combined_path = output_dir / combined_name
        statistics = self.merge_service.merge(result.generated_paths, combined_path)
        return BatchOperationResult(
            items=result.items, statistics=statistics, combined_path=combined_path
        )

    @staticmethod
    def format_statistics(statistics: MergeStatistics, title: str = "PDF Statistics") -> str:
        lines = [
            f"{title}:",
            f"  Total number of files: {statistics.total_files}",
            f"  Total number of pages: {statistics.total_pages}",
            "  File with most pages: "
            f"{statistics.file_with_most_pages} ({statistics.max_pages} pages)",
            f"  Combined PDF size: {statistics.combined_size_mb}",
        ]
        return "\n".join(lines)
