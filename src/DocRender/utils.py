from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import DocRenderError


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str], suffix: str) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.{suffix}"
        return out_path
    return input_path.with_suffix(f".{suffix}")


def read_markdown(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocRenderError(f"Input file is not valid UTF-8: {path} ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise DocRenderError(f"Cannot read input file {path}: {e.strerror or e}") from e
