from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class RunLogEntry:
    run_id: str
    source: str
    entry: str | None
    kind: str | None
    status: str
    destination: str | None
    bytes_written: int
    elapsed_ms: float
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RunLogger:
    """Appends one JSON line per record; a logger without a file is a no-op."""

    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file

    @property
    def enabled(self) -> bool:
        return self._log_file is not None

    def append(self, entry: RunLogEntry) -> None:
        if self._log_file is None:
            return
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._log_file.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


__all__ = ["RunLogEntry", "RunLogger"]
