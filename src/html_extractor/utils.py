from __future__ import annotations

import hashlib
import os
import re
import shutil
import time
from pathlib import Path, PurePosixPath
from typing import BinaryIO


DRIVE_RE = re.compile(r"^[A-Za-z]:")


def generate_run_id(prefix: str = "run") -> str:
    epoch_ms = int(time.time() * 1000)
    random_bits = hashlib.sha256(os.urandom(16)).hexdigest()[:8]
    return f"{prefix}-{epoch_ms}-{random_bits}"


def enclosed_name(name: str) -> PurePosixPath | None:
    """Return a safe relative path for an archive member name, or None."""

    if not name or "\x00" in name:
        return None
    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or DRIVE_RE.match(normalized):
        return None
    parts: list[str] = []
    for part in normalized.split("/"):
        if part in {"", "."}:
            continue
        if part == "..":
            return None
        parts.append(part)
    if not parts:
        return None
    return PurePosixPath(*parts)


def compact_lines(text: str) -> str:
    return "\n".join(line for line in text.splitlines() if line)


def copy_stream(source: BinaryIO, destination: Path) -> int:
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("wb") as handle:
        shutil.copyfileobj(source, handle)
        return handle.tell()
