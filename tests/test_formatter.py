import pytest

from asciifier.formatter import (
    ESC,
    RESET,
    AsciiResult,
    Cell,
    format_ansi,
    format_html,
    format_plain,
    strip_ansi,
    strip_markup,
    wrap_html,
)


def row(text, color=None):
    return tuple(Cell(luminance=0.0, glyph=ch, color=color) for ch in text)


@pytest.fixture
def mixed_rows():
    return (
        row("@@", "#FF0000") + row("##", "#00FF00") + row(" ", "#00FF00") + row("<&"),
        row("ab", "hsl(120, 100%, 50%)") + row("\"'", "#0000FF"),
    )


class TestPlain:
    def test_joins_rows_with_newlines(self, mixed_rows):
        assert format_plain(mixed_rows) == "@@## <&\nab\"'"

    def test_no_trailing_newline(self):
        assert format_plain((row("a"), row("b"))) == "a\nb"


class TestAnsi:
    def test_runs_are_coalesced(self):
        out = format_ansi((row("@@@", "#FF0000"),))
        assert out == f"{ESC}[38;2;255;0;0m@@@{RESET}"

    def test_color_change_starts_a_new_run(self):
        out = format_ansi((row("@", "#FF0000") + row("#", "#00FF00"),))
        assert out == f"{ESC}[38;2;255;0;0m@{RESET}{ESC}[38;2;0;255;0m#{RESET}"

    def test_spaces_and_uncolored_cells_are_bare(self):
        out = format_ansi((row("a b", "#010203") + row("c"),))
        assert out == f"{ESC}[38;2;1;2;3ma{RESET} {ESC}[38;2;1;2;3mb{RESET}c"

    def test_hsl_colors_are_translated(self):
        out = format_ansi((row("x", "hsl(240, 100%, 50%)"),))
        assert out.startswith(f"{ESC}[38;2;0;0;255m")

    def test_256_color_mode(self):
        out = format_ansi((row("x", "#FF0000"),), truecolor=False)
        assert out == f"{ESC}[38;5;196mx{RESET}"

    def test_plain_rows_have_no_escapes(self):
        assert ESC not in format_ansi((row("abc"),))


class TestHtml:
    def test_span_per_run(self):
        out = format_html((row("@@", "#FF0000"),))
        assert out == '<span style="color: #FF0000;">@@</span>'

    def test_glyphs_are_escaped(self, mixed_rows):
        out = format_html(mixed_rows)
        assert "&lt;&amp;" in out
        assert "<&" not in out

    def test_uncolored_glyphs_pass_through(self):
        assert format_html((row("a.b"),)) == "a.b"

    def test_no_pre_wrapper(self, mixed_rows):
        assert "<pre" not in format_html(mixed_rows)

    def test_document_wraps_in_pre(self):
        doc = wrap_html('<span style="color: #FF0000;">@</span>', title="cat <1>")
        assert doc.startswith("<!doctype html>")
        assert "<pre>" in doc and "</pre>" in doc
        assert "<title>cat &lt;1&gt;</title>" in doc


class TestRoundTrip:
    def test_strip_markup_matches_plain(self, mixed_rows):
        assert strip_markup(format_html(mixed_rows)) == format_plain(mixed_rows)

    @pytest.mark.parametrize("truecolor", [True, False])
    def test_strip_ansi_matches_plain(self, mixed_rows, truecolor):
        assert strip_ansi(format_ansi(mixed_rows, truecolor)) == format_plain(mixed_rows)


class TestAsciiResult:
    def test_dimensions_and_lines(self, mixed_rows):
        result = AsciiResult(rows=(row("abc"), row("def")))
        assert (result.width, result.height) == (3, 2)
        assert result.lines() == ["abc", "def"]
        assert str(result) == "abc\ndef"

    def test_encoders(self, mixed_rows):
        result = AsciiResult(rows=mixed_rows)
        assert result.to_plain_text() == format_plain(mixed_rows)
        assert result.to_html() == format_html(mixed_rows)
        assert result.to_ansi() == format_ansi(mixed_rows)
        assert result.to_ansi(truecolor=False) == format_ansi(mixed_rows, truecolor=False)
        assert result.to_html() in result.to_html_document()

    def test_is_immutable(self):
        result = AsciiResult(rows=(row("a"),))
        with pytest.raises(AttributeError):
            result.rows = ()
