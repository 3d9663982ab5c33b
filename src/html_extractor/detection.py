from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from .models import ArchiveEntry, ClassifierPolicy, EntryKind


HTML_SUFFIX = ".html"
HTML_MARKER = "html document"
FALLBACK_LABEL = "file"


class DetectionError(RuntimeError):
    """Raised when an entry cannot be classified."""


class EntryClassifier(Protocol):
    def classify(self, entry: ArchiveEntry) -> EntryKind:  # pragma: no cover - interface
        ...


class ExtensionClassifier:
    """HTML iff the member's suffix is exactly ``.html``."""

    def classify(self, entry: ArchiveEntry) -> EntryKind:
        if entry.is_dir:
            return EntryKind.DIRECTORY
        if entry.path is not None and entry.path.suffix == HTML_SUFFIX:
            return EntryKind.HTML
        return EntryKind.OTHER


class ContentSniffClassifier:
    """Ask the ``file`` utility about the extracted copy of each member."""

    def __init__(self, scratch_dir: Path, command: str = "file") -> None:
        self._scratch_dir = scratch_dir
        self._command = command

    def describe(self, path: Path) -> str:
        try:
            completed = subprocess.run(
                [self._command, str(path)],
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise DetectionError(f"Could not run {self._command!r}: {exc}") from exc
        if completed.returncode != 0:
            return FALLBACK_LABEL
        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError:
            return FALLBACK_LABEL

    def classify(self, entry: ArchiveEntry) -> EntryKind:
        if entry.is_dir:
            return EntryKind.DIRECTORY
        if entry.path is None:
            return EntryKind.OTHER
        label = self.describe(self._scratch_dir / entry.path)
        if HTML_MARKER in label.lower():
            return EntryKind.HTML
        return EntryKind.OTHER


def get_classifier(
    policy: ClassifierPolicy,
    scratch_dir: Path | None = None,
    command: str = "file",
) -> EntryClassifier:
    if policy is ClassifierPolicy.EXTENSION:
        return ExtensionClassifier()
    if policy is ClassifierPolicy.SNIFF:
        if scratch_dir is None:
            raise DetectionError("Content sniffing needs an extracted copy of the archive")
        return ContentSniffClassifier(scratch_dir, command=command)
    raise DetectionError(f"Unknown classifier policy: {policy}")


__all__ = [
    "ContentSniffClassifier",
    "DetectionError",
    "EntryClassifier",
    "ExtensionClassifier",
    "get_classifier",
]
