from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .models import ClassifierPolicy, RenderStyle


CONFIG_FILE = Path("config.toml")
CONFIG_ENV = "HTML_EXTRACTOR_CONFIG"


@dataclass(slots=True)
class DefaultsConfig:
    output_text_file: Path = Path("html_text.txt")
    output_dir: Path = Path("rest")
    width: int = 80
    style: RenderStyle = RenderStyle.TRIVIAL
    artifacts: bool = False
    policy: ClassifierPolicy = ClassifierPolicy.EXTENSION
    compact: bool = True


@dataclass(slots=True)
class RuntimeConfig:
    scratch_root: Path | None = None
    file_command: str = "file"
    log_file: Path | None = None


@dataclass(slots=True)
class AppConfig:
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _optional_path(value: object | None) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value))


def _build_defaults(data: Mapping[str, object] | None) -> DefaultsConfig:
    if not data:
        return DefaultsConfig()
    width = int(data.get("width", 80))
    if width < 0:
        raise ValueError(f"Configured width must be non-negative, got {width}")
    return DefaultsConfig(
        output_text_file=Path(str(data.get("output_text_file", "html_text.txt"))),
        output_dir=Path(str(data.get("output_dir", "rest"))),
        width=width,
        style=RenderStyle(str(data.get("format", RenderStyle.TRIVIAL.value))),
        artifacts=bool(data.get("artifacts", False)),
        policy=ClassifierPolicy(str(data.get("policy", ClassifierPolicy.EXTENSION.value))),
        compact=bool(data.get("compact", True)),
    )


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        scratch_root=_optional_path(data.get("scratch_root")),
        file_command=str(data.get("file_command", "file")),
        log_file=_optional_path(data.get("log_file")),
    )


def resolve_config_path(path: Path | None = None) -> Path:
    if path is not None:
        return path
    env_value = os.getenv(CONFIG_ENV)
    return Path(env_value) if env_value else CONFIG_FILE


def load_config(path: Path | None = None) -> AppConfig:
    raw = _read_toml(resolve_config_path(path))
    defaults_data = raw.get("defaults") if isinstance(raw, Mapping) else None
    runtime_data = raw.get("runtime") if isinstance(raw, Mapping) else None
    defaults = _build_defaults(defaults_data if isinstance(defaults_data, Mapping) else None)
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    return AppConfig(defaults=defaults, runtime=runtime)


__all__ = ["AppConfig", "DefaultsConfig", "RuntimeConfig", "load_config", "resolve_config_path"]
