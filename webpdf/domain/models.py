from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any


class Status(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class NamingStrategy(str, Enum):
    QUALIFIED = "qualified"
    PAGE = "page"


@dataclass(frozen=True)
class ExtractionRule:
    container_selector: str = "#docs-content"
    text_selector: str = ".text.content"
    header_selector: str = "header, h1, .header"


@dataclass(frozen=True)
class PdfOptions:
    format: str = "A4"
    landscape: bool = False
    scale: float = 0.7
    margin_top: str = "1cm"
    margin_right: str = "1cm"
    margin_bottom: str = "1cm"
    margin_left: str = "1cm"
    print_background: bool = True

    def with_margin(self, margin: str) -> PdfOptions:
        return replace(
            self,
            margin_top=margin,
            margin_right=margin,
            margin_bottom=margin,
            margin_left=margin,
        )

    def to_playwright(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "landscape": self.landscape,
            "scale": self.scale,
            "margin": {
                "top": self.margin_top,
                "right": self.margin_right,
                "bottom": self.margin_bottom,
                "left": self.margin_left,
            },
            "print_background": self.print_background,
        }


@dataclass(frozen=True)
class RenderedDocument:
    path: Path
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FileSize:
    name: str
    size_bytes: int

    @property
    def size_kb(self) -> str:
        return f"{self.size_bytes / 1024:.2f} KB"


@dataclass(frozen=True)
class MergeTally:
    """Running totals of a merge, advanced one input at a time.

    ``add`` never mutates; it returns the tally that results from folding one
    more input into this one. The largest input is only replaced on a strictly
    greater page count, so the earliest input wins a tie.
    """

    total_pages: int = 0
    file_with_most_pages: str = ""
    max_pages: int = 0
    file_sizes: tuple[FileSize, ...] = ()

    def add(self, name: str, page_count: int, size_bytes: int = 0) -> MergeTally:
        largest_name = self.file_with_most_pages
        largest_count = self.max_pages
        if page_count > largest_count:
            largest_name = name
            largest_count = page_count
        return MergeTally(
            total_pages=self.total_pages + page_count,
            file_with_most_pages=largest_name,
            max_pages=largest_count,
            file_sizes=self.file_sizes + (FileSize(name=name, size_bytes=size_bytes),),
        )


@dataclass(frozen=True)
class MergeStatistics:
    total_files: int
    total_pages: int
    file_with_most_pages: str
    max_pages: int
    combined_size_bytes: int
    file_sizes: tuple[FileSize, ...] = ()

    @classmethod
    def from_tally(
        cls, tally: MergeTally, total_files: int, combined_size_bytes: int
    ) -> MergeStatistics:
        return cls(
            total_files=total_files,
            total_pages=tally.total_pages,
            file_with_most_pages=tally.file_with_most_pages,
            max_pages=tally.max_pages,
            combined_size_bytes=combined_size_bytes,
            file_sizes=tally.file_sizes,
        )

    @property
    def combined_size_mb(self) -> str:
        return f"{self.combined_size_bytes / 1024 / 1024:.2f} MB"


@dataclass(frozen=True)
class BatchItemResult:
    url: str
    status: Status
    message: str = ""
    output_path: Path | None = None


@dataclass(frozen=True)
class BatchOperationResult:
    items: list[BatchItemResult]
    statistics: MergeStatistics | None = None
    combined_path: Path | None = None

    @property
    def generated_paths(self) -> list[Path]:
        return [
            item.output_path
            for item in self.items
            if item.status == Status.SUCCESS and item.output_path is not None
        ]

    @property
    def success_count(self) -> int:
        return len([item for item in self.items if item.status == Status.SUCCESS])

    @property
    def error_count(self) -> int:
        return len([item for item in self.items if item.status == Status.ERROR])


@dataclass(frozen=True)
class LinkSet:
    name: str
    label: str
    source_url: str
    file_name: str
    default_output_dir: str
    default_combined_name: str
    exclusions: dict[str, str] = field(default_factory=dict)
