import textwrap
from pathlib import Path

import pytest

from DocRender.config import DEFAULT_ENDPOINT, RenderConfig, load_config, parse_config
from DocRender.errors import ConfigError


def test_defaults_without_file():
    config = load_config(None)
    assert config == RenderConfig()
    assert config.render.format == "html"
    assert not config.parser.persistent_table_header
    assert config.analysis.endpoint == DEFAULT_ENDPOINT


def test_load_full_config(tmp_path: Path):
    path = tmp_path / "docrender.yaml"
    path.write_text(
        textwrap.dedent(
            """
            parser:
              persistent_table_header: true
              flush_unterminated_fence: true
            render:
              format: docx
              title: Emotion API
            analysis:
              endpoint: http://localhost:7860/api/v1/analyze
              timeout: 5
            """
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.parser.persistent_table_header
    assert config.parser.flush_unterminated_fence
    assert config.render.format == "docx"
    assert config.render.title == "Emotion API"
    assert not config.render.standalone
    assert config.analysis.endpoint == "http://localhost:7860/api/v1/analyze"
    assert config.analysis.timeout == 5.0


def test_empty_file_gives_defaults():
    assert parse_config("") == RenderConfig()


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "parser: yes please\n",
        "parser:\n  persistent_table_header: 1\n",
        "render:\n  format: pdf\n",
        "analysis:\n  timeout: -1\n",
        "render: [unclosed\n",
    ],
)
def test_invalid_config(text):
    with pytest.raises(ConfigError):
        parse_config(text)


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")
