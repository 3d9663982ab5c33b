from pathlib import Path

import pytest

from html_extractor.config import CONFIG_ENV, load_config, resolve_config_path
from html_extractor.models import ClassifierPolicy, RenderStyle


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "absent.toml")
    assert cfg.defaults.width == 80
    assert cfg.defaults.style is RenderStyle.TRIVIAL
    assert cfg.defaults.policy is ClassifierPolicy.EXTENSION
    assert cfg.defaults.output_text_file == Path("html_text.txt")
    assert cfg.defaults.output_dir == Path("rest")
    assert cfg.runtime.file_command == "file"
    assert cfg.runtime.log_file is None


def test_load_config_reads_tables(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "[defaults]\n"
        'format = "rich"\n'
        "width = 100\n"
        "artifacts = true\n"
        'policy = "sniff"\n'
        'output_dir = "leftovers"\n'
        "\n"
        "[runtime]\n"
        'scratch_root = "scratch"\n'
        'file_command = "/usr/bin/file"\n'
        'log_file = "run.jsonl"\n',
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.defaults.style is RenderStyle.RICH
    assert cfg.defaults.width == 100
    assert cfg.defaults.artifacts is True
    assert cfg.defaults.policy is ClassifierPolicy.SNIFF
    assert cfg.defaults.output_dir == Path("leftovers")
    assert cfg.runtime.scratch_root == Path("scratch")
    assert cfg.runtime.file_command == "/usr/bin/file"
    assert cfg.runtime.log_file == Path("run.jsonl")


def test_load_config_rejects_unknown_format(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('[defaults]\nformat = "fancy"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_config_path_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "env.toml"))
    assert resolve_config_path() == tmp_path / "env.toml"
    assert resolve_config_path(Path("explicit.toml")) == Path("explicit.toml")
    monkeypatch.delenv(CONFIG_ENV)
    assert resolve_config_path() == Path("config.toml")
