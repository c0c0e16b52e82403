import pytest

from DocRender.escaping import escape_code, tokens_to_text, unescape_code
from DocRender.highlighter import highlight
from DocRender.model import CodeToken, TokenKind


def _kinds(code: str) -> list[tuple[TokenKind, str]]:
    return [(token.kind, token.text) for token in highlight(code)]


def test_keyword_classification():
    assert _kinds("const x = 1") == [
        (TokenKind.KEYWORD, "const"),
        (TokenKind.PLAIN, " x = "),
        (TokenKind.NUMBER, "1"),
    ]


def test_empty_code_has_no_tokens():
    assert highlight("") == []


def test_comment_runs_to_end_of_line():
    assert _kinds("a // const 'x' 1\nb") == [
        (TokenKind.PLAIN, "a "),
        (TokenKind.COMMENT, "// const 'x' 1"),
        (TokenKind.PLAIN, "\nb"),
    ]


def test_strings_of_each_delimiter():
    tokens = highlight("f(\"a'b\", 'c', `d`)")
    strings = [token.text for token in tokens if token.kind is TokenKind.STRING]
    assert strings == ["\"a'b\"", "'c'", "`d`"]
    assert tokens[0] == CodeToken(TokenKind.FUNCTION, "f")


def test_url_inside_string_is_not_a_comment():
    assert _kinds('fetch("https://api.dev")') == [
        (TokenKind.FUNCTION, "fetch"),
        (TokenKind.PLAIN, "("),
        (TokenKind.STRING, '"https://api.dev"'),
        (TokenKind.PLAIN, ")"),
    ]


def test_keyword_wins_over_function_call():
    assert _kinds("if(x)")[0] == (TokenKind.KEYWORD, "if")


def test_keywords_match_whole_words_only():
    assert _kinds("constant returnValue()") == [
        (TokenKind.PLAIN, "constant "),
        (TokenKind.FUNCTION, "returnValue"),
        (TokenKind.PLAIN, "()"),
    ]


def test_digits_inside_identifiers_are_plain():
    assert _kinds("x1 = 42") == [(TokenKind.PLAIN, "x1 = "), (TokenKind.NUMBER, "42")]


def test_html_characters_are_escaped_first():
    tokens = highlight("a < b && c")
    assert tokens_to_text(tokens) == "a &lt; b &amp;&amp; c"


def test_escape_order_avoids_double_escaping():
    assert escape_code("<&>") == "&lt;&amp;&gt;"
    assert unescape_code("&amp;lt;") == "&lt;"


@pytest.mark.parametrize(
    "body",
    [
        "import { analyze } from './client'\n\nconst result = await analyze(text) // call\n",
        "class A {\n  async run() { return new B(1, 'two', `three`) }\n}",
        "for (let i = 0; i < 10; i++) { if (a && b > c) break }",
        'const html = "<div class=\\"x\\">&amp;</div>"',
        "   \n\t\n",
        "unterminated 'string and \"quote",
    ],
)
def test_round_trip(body):
    assert unescape_code(tokens_to_text(highlight(body))) == body


def test_round_trip_without_html_characters_is_plain_concatenation():
    body = "export default function App() {\n  return 'ok' // done\n}"
    assert tokens_to_text(highlight(body)) == body


def test_tokens_have_no_empty_text():
    assert all(token.text for token in highlight("a(b) // c\n'd' 1 2 3"))


def test_word_boundaries_are_ascii():
    assert _kinds("éconst") == [(TokenKind.PLAIN, "é"), (TokenKind.KEYWORD, "const")]


def test_non_ascii_digits_are_plain():
    assert _kinds("x = ٤٢") == [(TokenKind.PLAIN, "x = ٤٢")]
