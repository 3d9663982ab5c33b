from __future__ import annotations

import time
import zipfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Iterator, TextIO

from .adapters import format_block, get_renderer
from .archive import iter_entries, open_archive, open_entry, scratch_extraction
from .config import AppConfig
from .detection import DetectionError, EntryClassifier, get_classifier
from .errors import ErrorCode, ExtractionError
from .logging import RunLogEntry, RunLogger
from .models import (
    ArchiveEntry,
    ClassifierPolicy,
    EntryKind,
    EntryOutcome,
    ExtractionResult,
    ExtractOptions,
)
from .utils import copy_stream, generate_run_id

ProgressCallback = Callable[[float], None]

# raised while reading members of an archive that opened cleanly
MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError)


@dataclass(slots=True)
class _ExtractionContext:
    run_id: str
    logger: RunLogger
    options: ExtractOptions
    callback: ProgressCallback
    result: ExtractionResult


class ExtractionService:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()

    def extract(
        self,
        options: ExtractOptions,
        *,
        run_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> ExtractionResult:
        callback = progress or (lambda _: None)
        context = _ExtractionContext(
            run_id=run_id or generate_run_id(),
            logger=RunLogger(self._config.runtime.log_file),
            options=options,
            callback=callback,
            result=ExtractionResult(options=options),
        )
        start = time.perf_counter()

        callback(0.0)
        try:
            self._validate_options(options)
            self._extract_internal(context)
        except ExtractionError as exc:
            self._log_failure(context, exc)
            raise

        elapsed = time.perf_counter() - start
        context.result.summary = self._summarize(context.result, elapsed)
        callback(1.0)
        return context.result

    def scan(self, options: ExtractOptions) -> ExtractionResult:
        """Classify every entry without writing any output."""

        if not options.dry_run:
            options = replace(options, dry_run=True)
        return self.extract(options)

    def _validate_options(self, options: ExtractOptions) -> None:
        try:
            options.validate()
        except ValueError as exc:
            raise ExtractionError(ErrorCode.INVALID_ARGUMENT, str(exc)) from exc

    def _extract_internal(self, context: _ExtractionContext) -> None:
        options = context.options
        archive = open_archive(options.input_file)
        try:
            with archive, self._classifier(archive, options.policy) as classifier:
                if options.dry_run:
                    self._scan_entries(archive, classifier, context)
                else:
                    self._write_entries(archive, classifier, context)
        except MEMBER_READ_ERRORS as exc:
            raise ExtractionError(ErrorCode.BAD_ARCHIVE, str(exc)) from exc
        except DetectionError as exc:
            raise ExtractionError(ErrorCode.IO_ERROR, str(exc)) from exc
        except OSError as exc:
            raise ExtractionError(ErrorCode.IO_ERROR, str(exc)) from exc

    @contextmanager
    def _classifier(
        self, archive: zipfile.ZipFile, policy: ClassifierPolicy
    ) -> Iterator[EntryClassifier]:
        runtime = self._config.runtime
        if policy is not ClassifierPolicy.SNIFF:
            yield get_classifier(policy)
            return
        with scratch_extraction(archive, root=runtime.scratch_root) as scratch:
            yield get_classifier(policy, scratch_dir=scratch, command=runtime.file_command)

    def _scan_entries(
        self,
        archive: zipfile.ZipFile,
        classifier: EntryClassifier,
        context: _ExtractionContext,
    ) -> None:
        entries = list(iter_entries(archive))
        for position, entry in enumerate(entries, start=1):
            if entry.path is None:
                context.result.skipped.append(entry.name)
                continue
            kind = classifier.classify(entry)
            context.result.outcomes.append(
                EntryOutcome(
                    name=entry.name,
                    kind=kind,
                    destination=self._destination(entry, kind, context.options),
                )
            )
            context.callback(position / len(entries))

    def _write_entries(
        self,
        archive: zipfile.ZipFile,
        classifier: EntryClassifier,
        context: _ExtractionContext,
    ) -> None:
        options = context.options
        entries = list(iter_entries(archive))
        options.output_dir.mkdir(parents=True, exist_ok=True)
        options.output_text_file.parent.mkdir(parents=True, exist_ok=True)
        with options.output_text_file.open("w", encoding="utf-8") as text_out:
            for position, entry in enumerate(entries, start=1):
                if entry.path is None:
                    context.result.skipped.append(entry.name)
                    continue
                entry_start = time.perf_counter()
                kind = classifier.classify(entry)
                outcome = self._dispatch(archive, entry, kind, text_out, context)
                context.result.outcomes.append(outcome)
                self._log_entry(context, outcome, entry_start)
                context.callback(position / len(entries))

    def _dispatch(
        self,
        archive: zipfile.ZipFile,
        entry: ArchiveEntry,
        kind: EntryKind,
        text_out: TextIO,
        context: _ExtractionContext,
    ) -> EntryOutcome:
        options = context.options
        destination = self._destination(entry, kind, options)
        if kind is EntryKind.DIRECTORY:
            destination.mkdir(parents=True, exist_ok=True)
            return EntryOutcome(name=entry.name, kind=kind, destination=destination)
        if kind is EntryKind.HTML:
            written = self._render_entry(archive, entry, text_out, options)
            return EntryOutcome(name=entry.name, kind=kind, destination=destination, bytes_written=written)
        with open_entry(archive, entry) as source:
            written = copy_stream(source, destination)
        return EntryOutcome(name=entry.name, kind=kind, destination=destination, bytes_written=written)

    def _render_entry(
        self,
        archive: zipfile.ZipFile,
        entry: ArchiveEntry,
        text_out: TextIO,
        options: ExtractOptions,
    ) -> int:
        with open_entry(archive, entry) as source:
            payload = source.read()
        text = get_renderer(options.style).render(payload, options.width)
        block = format_block(entry.name, text, artifacts=options.artifacts, compact=options.compact)
        text_out.write(block)
        return len(block.encode("utf-8"))

    def _destination(self, entry: ArchiveEntry, kind: EntryKind, options: ExtractOptions) -> Path:
        if kind is EntryKind.HTML:
            return options.output_text_file
        if entry.path is None:
            raise ExtractionError(ErrorCode.BAD_ARCHIVE, f"Entry has no safe relative path: {entry.name}")
        return options.output_dir / entry.path

    def _log_entry(self, context: _ExtractionContext, outcome: EntryOutcome, started: float) -> None:
        context.logger.append(
            RunLogEntry(
                run_id=context.run_id,
                source=str(context.options.input_file),
                entry=outcome.name,
                kind=outcome.kind.value,
                status="success",
                destination=str(outcome.destination) if outcome.destination else None,
                bytes_written=outcome.bytes_written,
                elapsed_ms=(time.perf_counter() - started) * 1000,
            )
        )

    def _log_failure(self, context: _ExtractionContext, exc: ExtractionError) -> None:
        context.logger.append(
            RunLogEntry(
                run_id=context.run_id,
                source=str(context.options.input_file),
                entry=None,
                kind=None,
                status="failure",
                destination=None,
                bytes_written=0,
                elapsed_ms=0.0,
                error_code=exc.code.value,
            )
        )

    def _summarize(self, result: ExtractionResult, elapsed: float) -> str:
        options = result.options
        if options.dry_run:
            return (
                f"Scanned {options.input_file.name}: {result.html_count} html, "
                f"{result.copied_count} other, {result.directory_count} directories"
            )
        return (
            f"Extracted {options.input_file.name} in {elapsed:.2f}s: "
            f"{result.html_count} html -> {options.output_text_file}, "
            f"{result.copied_count} files -> {options.output_dir}"
        )


__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "ExtractionService",
    "ExtractOptions",
    "ErrorCode",
]
