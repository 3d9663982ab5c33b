"""Domain models for the archive extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath


class RenderStyle(str, Enum):
    TRIVIAL = "trivial"
    PLAIN = "plain"
    RICH = "rich"


class ClassifierPolicy(str, Enum):
    EXTENSION = "extension"
    SNIFF = "sniff"


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    HTML = "html"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ExtractOptions:
    """Configuration for a single extraction run."""

    input_file: Path
    output_text_file: Path = Path("html_text.txt")
    output_dir: Path = Path("rest")
    width: int = 80
    artifacts: bool = False
    style: RenderStyle = RenderStyle.TRIVIAL
    policy: ClassifierPolicy = ClassifierPolicy.EXTENSION
    compact: bool = True
    dry_run: bool = False

    def validate(self) -> None:
        if self.width < 0:
            raise ValueError(f"Width must be a non-negative integer, got {self.width}")


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """Read-only view over one archive member."""

    index: int
    name: str
    path: PurePosixPath | None
    is_dir: bool
    size: int


@dataclass(slots=True)
class EntryOutcome:
    name: str
    kind: EntryKind
    destination: Path | None
    bytes_written: int = 0


@dataclass(slots=True)
class ExtractionResult:
    """Result metadata for an extraction run."""

    options: ExtractOptions
    outcomes: list[EntryOutcome] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    summary: str = ""

    def count(self, kind: EntryKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    @property
    def html_count(self) -> int:
        return self.count(EntryKind.HTML)

    @property
    def copied_count(self) -> int:
        return self.count(EntryKind.OTHER)

    @property
    def directory_count(self) -> int:
        return self.count(EntryKind.DIRECTORY)


__all__ = [
    "ArchiveEntry",
    "ClassifierPolicy",
    "EntryKind",
    "EntryOutcome",
    "ExtractOptions",
    "ExtractionResult",
    "RenderStyle",
]
