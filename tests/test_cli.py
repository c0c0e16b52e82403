from pathlib import Path

from docx import Document as DocxReader

from DocRender import analysis, cli
from DocRender.analysis import AnalysisResult, EmotionScore
from DocRender.errors import AnalysisError

MARKDOWN = "# Usage\n\n| a |\n|---|\n| 1 |\n| 2 |\n\n```js\nanalyze(text)\n"


def test_render_html_default_output(tmp_path: Path):
    source = tmp_path / "guide.md"
    source.write_text(MARKDOWN, encoding="utf-8")
    assert cli.main(["render", str(source)]) == 0
    html = (tmp_path / "guide.html").read_text(encoding="utf-8")
    assert "<h1>Usage</h1>" in html
    assert html.count("<th>") == 2
    assert "<pre" not in html


def test_render_flags_override_defaults(tmp_path: Path):
    source = tmp_path / "guide.md"
    source.write_text(MARKDOWN, encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    argv = ["render", str(source), "-o", str(out_dir), "--fix-table-headers", "--keep-unterminated-fences", "--standalone"]
    assert cli.main(argv) == 0
    html = (out_dir / "guide.html").read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert html.count("<th>") == 1
    assert 'data-truncated="true"' in html


def test_render_docx_from_config(tmp_path: Path):
    source = tmp_path / "guide.md"
    source.write_text(MARKDOWN, encoding="utf-8")
    config = tmp_path / "docrender.yaml"
    config.write_text("render:\n  format: docx\n", encoding="utf-8")
    assert cli.main(["render", str(source), "--config", str(config)]) == 0
    reader = DocxReader(tmp_path / "guide.docx")
    assert len(reader.tables) == 1


def test_render_missing_input(tmp_path: Path):
    assert cli.main(["render", str(tmp_path / "nope.md")]) == 1


def test_render_bad_config(tmp_path: Path):
    source = tmp_path / "guide.md"
    source.write_text(MARKDOWN, encoding="utf-8")
    config = tmp_path / "bad.yaml"
    config.write_text("render:\n  format: pdf\n", encoding="utf-8")
    assert cli.main(["render", str(source), "--config", str(config)]) == 1


def test_analyze_prints_breakdown(monkeypatch, capsys):
    result = AnalysisResult("joy", 0.8, (EmotionScore("sadness", 0.2), EmotionScore("joy", 0.8)))
    monkeypatch.setattr(analysis, "analyze_emotion", lambda text, endpoint, timeout: result)
    assert cli.main(["analyze", "great news"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("😊 joy (80.0%)")
    assert "joy" in out[1]
    assert "sadness" in out[2]


def test_analyze_failure_exits_nonzero(monkeypatch):
    def failing(text, endpoint, timeout):
        raise AnalysisError("Rate limit exceeded.", status=429)

    monkeypatch.setattr(analysis, "analyze_emotion", failing)
    assert cli.main(["analyze", "hi"]) == 1


def test_render_invalid_utf8_input(tmp_path: Path):
    source = tmp_path / "latin1.md"
    source.write_bytes(b"# hi \xff\n")
    assert cli.main(["render", str(source)]) == 1
    assert not (tmp_path / "latin1.html").exists()


def test_render_directory_input(tmp_path: Path):
    folder = tmp_path / "docs.md"
    folder.mkdir()
    assert cli.main(["render", str(folder)]) == 1


def test_render_docx_with_control_characters(tmp_path: Path):
    source = tmp_path / "ctrl.md"
    source.write_text("hello\x0bworld\n\n```\na\x01b\n```\n", encoding="utf-8")
    assert cli.main(["render", str(source), "--format", "docx"]) == 0
    reader = DocxReader(tmp_path / "ctrl.docx")
    assert any(p.text == "hello�world" for p in reader.paragraphs)
