"""
Lints Ceres documents: word counts, code block limits, embedded PHP syntax,
and URL reachability.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
from .config import ConfigError, build_config
from .filesystem import find_documents, get_max_file_size, get_url_delay
from .lint import PhpLinter
from .processor import DocumentProcessor
from .urls import RequestsFetcher, UrlChecker

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option("-a", "--article", is_flag=True, help="Apply the article preset")
@click.option("-b", "--book", is_flag=True, help="Apply the book preset")
@click.option("-A", "--all", "include_hidden", is_flag=True, help="Include hidden files")
@click.option("-c", "--line-count", type=int, help="Maximum lines per code block")
@click.option("-l", "--line-width", type=int, help="Maximum line width inside code blocks")
@click.option("-p", "--words-per-page", type=int, help="Report counts as pages of N words")
@click.option("-u", "--check-urls", is_flag=True, help="Check that URLs are reachable")
@click.option("-x", "--exclude-code", is_flag=True, help="Exclude code blocks from word counts")
@click.argument("pattern")
def cli(
    pattern: str,
    article: bool = False,
    book: bool = False,
    include_hidden: bool = False,
    line_count: int | None = None,
    line_width: int | None = None,
    words_per_page: int | None = None,
    check_urls: bool = False,
    exclude_code: bool = False,
):
    """
    Entry point for linting one Ceres document or a tree of them.

    Args:
        pattern: File, directory, or glob selecting the documents.
        article: Apply the article limits.
        book: Apply the book limits; wins over `article`.
        include_hidden: Scan hidden files and directories.
        line_count: Maximum content lines per code block.
        line_width: Maximum trimmed line width inside code blocks.
        words_per_page: Words per page for page-based counts.
        check_urls: Fetch URLs found in documents.
        exclude_code: Leave code block lines out of word counts.

    Raises:
        click.BadParameter: If an option or configuration value is invalid.
        click.ClickException: If environment overrides are invalid or nothing
            matches `pattern`.

    Examples:
        ceres-lint -b -u manuscript/
    """
    preset = "book" if book else "article" if article else None
    search_path = Path(pattern).expanduser()
    if not search_path.is_dir():
        search_path = search_path.parent
    if not search_path.is_dir():
        search_path = Path.cwd()

    try:
        config = build_config(
            search_path,
            preset=preset,
            include_hidden=include_hidden or None,
            line_count=line_count,
            line_width=line_width,
            words_per_page=words_per_page,
            check_urls=check_urls or None,
            exclude_code=exclude_code or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = replace(
            config,
            max_file_size=get_max_file_size(default=config.max_file_size),
            url_delay=get_url_delay(default=config.url_delay),
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    documents = find_documents(pattern, config.include_hidden, config.file_glob)
    if not documents:
        raise click.ClickException(f"No documents match {pattern}.")

    linter = PhpLinter(config.lint_command, timeout=config.lint_timeout)
    url_checker = None
    if config.check_urls:
        url_checker = UrlChecker(
            RequestsFetcher(timeout=config.url_timeout), delay=config.url_delay
        )

    processor = DocumentProcessor(
        config,
        linter=linter,
        url_checker=url_checker,
        warn=lambda message: click.echo(message, err=True),
    )
    processor.run(documents)


if __name__ == "__main__":
    cli()
