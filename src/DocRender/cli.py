from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from . import analysis, markdown_parser, renderer_docx, renderer_html
from .config import OUTPUT_FORMATS, load_config
from .errors import DocRenderError
from .utils import configure_logging, read_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="DocRender",
        description="Render documentation Markdown to HTML or DOCX, or query the emotion analysis service.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a Markdown file")
    render.add_argument("input", type=str, help="Path to Markdown file")
    render.add_argument("-o", "--output", type=str, help="Output file or directory")
    render.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format (default: html)")
    render.add_argument("--standalone", action="store_true", help="Emit a full HTML page")
    render.add_argument(
        "--fix-table-headers",
        action="store_true",
        help="Style every row after a table separator as a body row",
    )
    render.add_argument(
        "--keep-unterminated-fences",
        action="store_true",
        help="Emit an unclosed code fence as a truncated code block",
    )
    _add_common(render)

    analyze = sub.add_parser("analyze", help="Detect the emotional tone of a text")
    analyze.add_argument("text", type=str, help="Text to analyze")
    _add_common(analyze)
    return parser


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, help="Path to a YAML config file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    try:
        if args.command == "render":
            _render(args)
        else:
            _analyze(args)
    except DocRenderError as e:
        logging.error("%s", e)
        return 1
    return 0


def _render(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    options = config.parser
    if args.fix_table_headers:
        options = replace(options, persistent_table_header=True)
    if args.keep_unterminated_fences:
        options = replace(options, flush_unterminated_fence=True)
    fmt = args.format or config.render.format
    standalone = args.standalone or config.render.standalone

    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise DocRenderError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output, fmt)

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Parsing markdown...")
    document = markdown_parser.parse_markdown(markdown_text, options)
    logging.debug("Parsed %d block(s)", len(document))

    logging.info("Rendering %s to %s", fmt.upper(), output_path)
    if fmt == "docx":
        renderer_docx.render_document(document, output_path)
    else:
        html = renderer_html.render_html(document, standalone=standalone, title=config.render.title)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")

    logging.info("Done. Saved to %s", output_path)


def _analyze(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    logging.info("Analyzing %d chars...", len(args.text))
    result = analysis.analyze_emotion(args.text, endpoint=config.analysis.endpoint, timeout=config.analysis.timeout)
    print(analysis.format_result(result))


if __name__ == "__main__":
    sys.exit(main())
