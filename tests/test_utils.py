from pathlib import PurePosixPath

from html_extractor.utils import compact_lines, enclosed_name, generate_run_id


def test_enclosed_name_keeps_relative_paths() -> None:
    assert enclosed_name("docs/index.html") == PurePosixPath("docs/index.html")
    assert enclosed_name("./docs//index.html") == PurePosixPath("docs/index.html")
    assert enclosed_name("sub/") == PurePosixPath("sub")


def test_enclosed_name_rejects_unsafe_names() -> None:
    assert enclosed_name("../evil.txt") is None
    assert enclosed_name("docs/../../evil.txt") is None
    assert enclosed_name("/etc/passwd") is None
    assert enclosed_name("C:/windows/evil.txt") is None
    assert enclosed_name("..\\evil.txt") is None
    assert enclosed_name("") is None
    assert enclosed_name("./") is None


def test_compact_lines_drops_only_empty_lines() -> None:
    assert compact_lines("one\n\n  \ntwo\n\n") == "one\n  \ntwo"


def test_generate_run_id_unique() -> None:
    first = generate_run_id("test")
    second = generate_run_id("test")
    assert first != second
    assert first.startswith("test-")
