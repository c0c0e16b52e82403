"""Optional YAML configuration for the ``DocRender`` command.

Every key is optional; command-line flags override what the file sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .markdown_parser import ScanOptions

DEFAULT_ENDPOINT = "https://itsKrish01-emotion-checker.hf.space/api/v1/analyze"
OUTPUT_FORMATS = ("html", "docx")


@dataclass(frozen=True)
class OutputConfig:
    format: str = "html"
    standalone: bool = False
    title: str = "Documentation"


@dataclass(frozen=True)
class AnalysisConfig:
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 30.0


@dataclass(frozen=True)
class RenderConfig:
    parser: ScanOptions = field(default_factory=ScanOptions)
    render: OutputConfig = field(default_factory=OutputConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


def load_config(path: str | Path | None = None) -> RenderConfig:
    if path is None:
        return RenderConfig()
    config_path = Path(path).expanduser()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    return parse_config(text)


def parse_config(text: str) -> RenderConfig:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping.")

    parser = _as_section(data.get("parser"), name="parser")
    render = _as_section(data.get("render"), name="render")
    analysis = _as_section(data.get("analysis"), name="analysis")

    fmt = _as_str(render.get("format", "html"), name="render.format")
    if fmt not in OUTPUT_FORMATS:
        raise ConfigError(f"render.format must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}.")

    return RenderConfig(
        parser=ScanOptions(
            persistent_table_header=_as_bool(
                parser.get("persistent_table_header", False), name="parser.persistent_table_header"
            ),
            flush_unterminated_fence=_as_bool(
                parser.get("flush_unterminated_fence", False), name="parser.flush_unterminated_fence"
            ),
        ),
        render=OutputConfig(
            format=fmt,
            standalone=_as_bool(render.get("standalone", False), name="render.standalone"),
            title=_as_str(render.get("title", "Documentation"), name="render.title"),
        ),
        analysis=AnalysisConfig(
            endpoint=_as_str(analysis.get("endpoint", DEFAULT_ENDPOINT), name="analysis.endpoint"),
            timeout=_as_number(analysis.get("timeout", 30.0), name="analysis.timeout"),
        ),
    )


def _as_section(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Expected '{name}' to be a mapping.")
    return value


def _as_bool(value: Any, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Expected {name} to be a boolean.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Expected {name} to be a string.")
    return value


def _as_number(value: Any, *, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        raise ConfigError(f"Expected {name} to be a positive number.")
    return float(value)
