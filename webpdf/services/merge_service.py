from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import fitz  # type: ignore[import-untyped]

from webpdf.adapters.pymupdf_adapter import PyMuPdfAdapter
from webpdf.domain.errors import FileReadError, ParsingError, WriteError
from webpdf.domain.models import MergeStatistics, MergeTally

logger = logging.getLogger(__name__)


class MergeService:
    def __init__(self, adapter: PyMuPdfAdapter) -> None:
        self.adapter = adapter

    @staticmethod
    def _read(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Unable to read {path}: {exc}") from exc

    def merge_step(self, output: fitz.Document, tally: MergeTally, path: Path) -> MergeTally:
        """Append the pages of ``path`` to ``output`` and return the advanced tally.

        Read and parse failures raise ``FileReadError`` or ``ParsingError``
        before anything is appended, so the caller can skip the input.
        """
        content = self._read(path)
        source = self.adapter.open_document(content)
        try:
            page_count = self.adapter.append_document(output, source)
        finally:
            source.close()
        return tally.add(path.name, page_count, size_bytes=len(content))

    def merge(self, input_paths: Sequence[Path | str], output_path: Path | str) -> MergeStatistics:
        paths = [Path(item) for item in input_paths]
        output_path = Path(output_path)
        logger.info(f"\nMerging {len(paths)} PDFs into a combined document...")

        tally = MergeTally()
        output = self.adapter.new_document()
        try:
            for index, path in enumerate(paths, start=1):
                logger.info(f"  Processing [{index}/{len(paths)}]: {path.name}")
                try:
                    tally = self.merge_step(output, tally, path)
                    logger.debug(f"    {tally.file_sizes[-1].size_kb}")
                except (FileReadError, ParsingError) as exc:
                    logger.warning(f"  Error processing {path}: {exc}")

            logger.info(f"\nTotal pages in combined document: {tally.total_pages}")
            try:
                merged_bytes = self.adapter.document_bytes(output)
            except ParsingError as exc:
                raise WriteError(f"Unable to write combined PDF {output_path}: {exc}") from exc
        finally:
            output.close()

        try:
            output_path.write_bytes(merged_bytes)
        except OSError as exc:
            raise WriteError(f"Unable to write combined PDF {output_path}: {exc}") from exc

        logger.info(f"Combined PDF saved to: {output_path}")
        return MergeStatistics.from_tally(
            tally, total_files=len(paths), combined_size_bytes=len(merged_bytes)
        )
