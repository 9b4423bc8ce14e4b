"""Drive the block scanner over documents and tally words."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import click

from .config import LintConfig
from .counter import format_counts
from .filesystem import read_document_lines
from .lint import Linter
from .scanner import BlockScanner
from .urls import UrlChecker


class DocumentProcessor:
    """Scan documents one at a time and report findings as they occur.

    Diagnostics are emitted immediately, never buffered. Each document ends
    with a ``Counts:`` line and the run ends with a ``Total counts:`` line.

    Args:
        config: Validated configuration for the run.
        linter: Optional syntax-check collaborator for declared blocks.
        url_checker: Optional URL checker; only used when `config.check_urls` is set.
        emit: Output callback for diagnostics and counts.
        warn: Output callback for documents that cannot be read.

    Examples:
        processor = DocumentProcessor(LintConfig(line_width=60))
        processor.run(find_documents("manuscript"))
    """

    def __init__(
        self,
        config: LintConfig,
        linter: Linter | None = None,
        url_checker: UrlChecker | None = None,
        emit: Callable[[str], None] = click.echo,
        warn: Callable[[str], None] | None = None,
    ):
        self.config = config
        self.linter = linter
        self.url_checker = url_checker if config.check_urls else None
        self.emit = emit
        self.warn = warn or emit
        self.total_words = 0

    def process_lines(self, lines: Iterable[str]) -> int:
        """Scan one document's lines and emit its findings and counts.

        Args:
            lines: Document lines in order, without terminators.

        Returns:
            int: Word total of the document.
        """
        scanner = BlockScanner(self.config, self.linter)
        document_words = 0
        line_number = 0

        for line_number, line in enumerate(lines, start=1):
            result = scanner.feed(line, line_number)
            for diagnostic in result.diagnostics:
                self.emit(diagnostic.format())
            document_words += result.words

            if self.url_checker is not None:
                url_diagnostic = self.url_checker.check(
                    line, line_number, scanner.context.block_start_line
                )
                if url_diagnostic is not None:
                    self.emit(url_diagnostic.format())

        for diagnostic in scanner.finish(line_number):
            self.emit(diagnostic.format())

        self.emit(f"Counts: {format_counts(document_words, self.config.words_per_page)}")
        return document_words

    def process(self, path: Path) -> int:
        """Read and scan a single document, folding its words into the run total.

        Unreadable documents are reported through `warn` and count as zero words.
        """
        try:
            lines = read_document_lines(path, self.config.max_file_size)
        except UnicodeDecodeError as error:
            self.warn(f"Invalid UTF-8 sequence in {path}: {error}")
            return 0
        except IOError as error:
            self.warn(str(error))
            return 0

        self.emit(str(path))
        document_words = self.process_lines(lines)
        self.total_words += document_words
        return document_words

    def run(self, paths: Iterable[Path]) -> int:
        """Process every document in order and emit the run total.

        Returns:
            int: Word total across all documents.
        """
        for path in paths:
            self.process(path)

        self.emit(f"Total counts: {format_counts(self.total_words, self.config.words_per_page)}")
        return self.total_words
