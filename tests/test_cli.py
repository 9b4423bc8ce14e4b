from __future__ import annotations

import textwrap
from pathlib import Path

import ceres_lint.cli as cli_module
from ceres_lint.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def test_cli_counts_plain_document(cli_runner, tmp_path):
    target = _write(
        tmp_path,
        "doc.ceres",
        """
        Plain prose with  double spacing.
        Second line.
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        str(target),
        "Counts: 8 words",
        "Total counts: 8 words",
    ]


def test_cli_rejects_non_integer_limit(cli_runner, tmp_path):
    target = _write(tmp_path, "doc.ceres", "text\n")

    result = cli_runner.invoke(cli, ["-l", "wide", str(target)])

    assert result.exit_code != 0
    assert "Counts:" not in result.output


def test_cli_rejects_non_positive_limit(cli_runner, tmp_path):
    target = _write(tmp_path, "doc.ceres", "text\n")

    result = cli_runner.invoke(cli, ["-c", "0", str(target)])

    assert result.exit_code != 0
    assert "positive integer" in result.output
    assert "Counts:" not in result.output


def test_cli_reports_limits(cli_runner, tmp_path):
    target = _write(
        tmp_path,
        "doc.ceres",
        """
        [code]
        a line that is clearly longer than twenty characters
        short
        [/code]
        """,
    )

    result = cli_runner.invoke(cli, ["-l", "20", "-c", "1", "-x", str(target)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "2: ERROR - line width 52 exceeds limit 20" in lines
    assert "4: ERROR - line count 2 exceeds limit 1" in lines
    assert lines[-1] == "Total counts: 2 words"


def test_cli_book_preset_reports_pages(cli_runner, tmp_path):
    target = _write(tmp_path, "doc.ceres", "word " * 400 + "\n")

    result = cli_runner.invoke(cli, ["-b", str(target)])

    assert result.exit_code == 0
    assert result.output.splitlines()[-1] == "Total counts: 1 pages + 51 words"


def test_cli_explicit_option_overrides_preset(cli_runner, tmp_path):
    target = _write(tmp_path, "doc.ceres", "a b c\n")

    result = cli_runner.invoke(cli, ["-b", "-p", "2", str(target)])

    assert result.output.splitlines()[-1] == "Total counts: 1 pages + 1 words"


def test_cli_walks_directory_in_order(cli_runner, tmp_path):
    second = _write(tmp_path, "book/b.ceres", "two words\n")
    first = _write(tmp_path, "book/a.ceres", "one\n")
    hidden = _write(tmp_path, "book/.draft.ceres", "hidden draft here\n")

    result = cli_runner.invoke(cli, [str(tmp_path / "book")])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        str(first),
        "Counts: 1 words",
        str(second),
        "Counts: 2 words",
        "Total counts: 3 words",
    ]

    result = cli_runner.invoke(cli, ["-A", str(tmp_path / "book")])

    assert str(hidden) in result.output
    assert result.output.splitlines()[-1] == "Total counts: 6 words"


def test_cli_no_matching_documents(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path)])

    assert result.exit_code != 0
    assert "No documents match" in result.output


def test_cli_rejects_invalid_max_file_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("CERES_LINT_MAX_FILE_SIZE", "huge")
    target = _write(tmp_path, "doc.ceres", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "CERES_LINT_MAX_FILE_SIZE" in result.output


def test_cli_lints_declared_blocks(cli_runner, tmp_path, monkeypatch, make_linter):
    linter = make_linter("PHP Parse error:  syntax error, unexpected end of file in - on line 2")
    monkeypatch.setattr(cli_module, "PhpLinter", lambda *args, **kwargs: linter)
    target = _write(
        tmp_path,
        "doc.ceres",
        """
        Intro
        [code php]
        <?php
        if (true) {
        [/code]
        """,
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert "4: ERROR - syntax error, unexpected end of file" in result.output.splitlines()
    assert linter.calls == ["<?php\nif (true) {\n"]


def test_cli_checks_urls(cli_runner, tmp_path, monkeypatch, make_fetcher):
    fetcher = make_fetcher({"https://example.com": "HTTP/1.1 200 OK"})
    monkeypatch.setattr(cli_module, "RequestsFetcher", lambda *args, **kwargs: fetcher)
    monkeypatch.setenv("CERES_LINT_URL_DELAY", "0")
    target = _write(
        tmp_path,
        "doc.ceres",
        """
        Home page: https://example.com.
        Dead link: https://dead.example/
        """,
    )

    result = cli_runner.invoke(cli, ["-u", str(target)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "1: NOTICE - found URL, response status 200" in lines
    assert "2: ERROR - found URL, could not access" in lines


def test_cli_uses_config_file(cli_runner, tmp_path):
    (tmp_path / ".ceres-lint.toml").write_text(
        "[ceres-lint]\nwords_per_page = 2\n", encoding="utf-8"
    )
    target = _write(tmp_path, "doc.ceres", "a b c d e\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.output.splitlines()[-1] == "Total counts: 2 pages + 1 words"
