from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Callable, Sequence

import pytest

Members = Sequence[tuple[str, str | bytes]]


@pytest.fixture
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    def _make(members: Members, name: str = "input.zip") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for member, data in members:
                archive.writestr(member, data)
        return path

    return _make


@pytest.fixture
def sample_members() -> Members:
    return [
        ("a.html", "<p>Hi</p>"),
        ("b.txt", "hello"),
        ("sub/", ""),
        ("sub/c.html", "<b>Bye</b>"),
    ]
