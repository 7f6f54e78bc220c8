from __future__ import annotations

import shlex

import pytest

from jandoc.convert import options


def test_assemble_options_drops_path_flags():
    raw = ["-d", "in.md", "-o", "out.html", "--toc"]

    assert options.assemble_options(raw) == "--toc"


def test_assemble_options_preserves_order_of_survivors():
    raw = [
        "--standalone",
        "--output-location",
        "site/",
        "-t",
        "html5",
        "--input-data",
        "docs",
        "--toc",
    ]

    assert options.assemble_options(raw) == "--standalone -t html5 --toc"


def test_assemble_options_handles_inline_long_values():
    raw = ["--input-data=docs", "--output-location=out.pdf", "-N"]

    assert options.assemble_options(raw) == "-N"


def test_assemble_options_only_matches_whole_tokens():
    raw = ["--css", "theme-o.css", "--filter-o", "x", "-o", "out.html"]

    assert options.assemble_options(raw) == "--css theme-o.css --filter-o x"


def test_assemble_options_quotes_tokens_with_spaces():
    raw = ["-d", "in.md", "--metadata", "title=My Notes"]

    assembled = options.assemble_options(raw)

    assert shlex.split(assembled) == ["--metadata", "title=My Notes"]


def test_assemble_options_empty_when_only_paths():
    assert options.assemble_options(["-d", "in", "-o", "out"]) == ""
    assert options.assemble_options([]) == ""


def test_trailing_path_flag_without_value_is_dropped():
    assert options.assemble_options(["--toc", "-o"]) == "--toc"


@pytest.mark.parametrize("output_path", ["out", "out.pdf", "missing/dir"])
def test_explicit_html5_collapses_to_html(output_path):
    assert options.resolve_format("html5", output_path) == "html"


def test_explicit_format_ignores_output_path_state(tmp_path):
    assert options.resolve_format("pdf", str(tmp_path)) == "pdf"
    assert options.resolve_format("pdf", "out.docx") == "pdf"
    assert options.resolve_format("pdf", "no-extension") == "pdf"


def test_format_inferred_from_extension_verbatim():
    assert options.resolve_format(None, "out.tex") == "tex"
    assert options.resolve_format(None, "site/index.html5") == "html5"


def test_missing_extension_cannot_be_resolved():
    with pytest.raises(options.FormatResolutionError) as excinfo:
        options.resolve_format(None, "out")

    assert str(excinfo.value) == "No output filetype specified."


def test_existing_directory_cannot_be_resolved(tmp_path):
    output = tmp_path / "site.d"
    output.mkdir()

    with pytest.raises(options.FormatResolutionError):
        options.resolve_format(None, str(output))


def test_format_resolution_error_is_a_usage_error():
    assert issubclass(options.FormatResolutionError, options.UsageError)


@pytest.mark.parametrize("blank", ["", "   ", "\t"])
def test_blank_explicit_format_falls_back_to_extension(blank):
    assert options.resolve_format(blank, "out.tex") == "tex"


def test_blank_explicit_format_without_extension_fails():
    with pytest.raises(options.FormatResolutionError):
        options.resolve_format("   ", "out")
