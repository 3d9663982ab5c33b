from __future__ import annotations

import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from .errors import ErrorCode, ExtractionError
from .models import ArchiveEntry
from .utils import copy_stream, enclosed_name

ENCRYPTED_FLAG = 0x1


def open_archive(path: Path) -> zipfile.ZipFile:
    if not path.exists():
        raise ExtractionError(ErrorCode.NOT_FOUND, f"Input file does not exist: {path}")
    try:
        return zipfile.ZipFile(path)
    except zipfile.BadZipFile as exc:
        raise ExtractionError(ErrorCode.BAD_ARCHIVE, f"Not a readable zip archive: {path}") from exc
    except OSError as exc:
        raise ExtractionError(ErrorCode.IO_ERROR, str(exc)) from exc


def iter_entries(archive: zipfile.ZipFile) -> Iterator[ArchiveEntry]:
    for index, info in enumerate(archive.infolist()):
        yield ArchiveEntry(
            index=index,
            name=info.filename,
            path=enclosed_name(info.filename),
            is_dir=info.is_dir(),
            size=info.file_size,
        )


def open_entry(archive: zipfile.ZipFile, entry: ArchiveEntry) -> IO[bytes]:
    # by position, so duplicate member names resolve to the right record
    info = archive.infolist()[entry.index]
    if info.flag_bits & ENCRYPTED_FLAG:
        raise ExtractionError(ErrorCode.BAD_ARCHIVE, f"Encrypted archive member: {entry.name}")
    return archive.open(info)


@contextmanager
def scratch_extraction(archive: zipfile.ZipFile, root: Path | None = None) -> Iterator[Path]:
    """Extract every member into a private temporary directory.

    The directory is removed when the context exits, whether the run
    finished, failed or returned early.
    """

    if root is not None:
        root.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix="html-extractor-", dir=root) as tmp:
        scratch = Path(tmp)
        for entry in iter_entries(archive):
            if entry.path is None:
                continue
            target = scratch / entry.path
            if entry.is_dir:
                target.mkdir(parents=True, exist_ok=True)
                continue
            with open_entry(archive, entry) as source:
                copy_stream(source, target)
        yield scratch


__all__ = ["iter_entries", "open_archive", "open_entry", "scratch_extraction"]
