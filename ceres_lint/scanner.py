"""Code block scanning for Ceres documents."""

from __future__ import annotations

import re

from .classifier import classify_line, declares_language
from .config import LintConfig
from .exceptions import LintInvocationError
from .lint import Linter, parse_lint_output
from .models import Diagnostic, LineKind, LineResult, ScanContext, ScanState, Severity


def count_words(line: str) -> int:
    """Count words the way the word tally expects.

    The line is split on single spaces and every segment counts, so runs of
    spaces and empty lines contribute tokens too.

    Examples:
        count_words("a b")  # 2
        count_words("a  b")  # 3
        count_words("")  # 1
    """
    return len(line.split(" "))


def find_embedded_code(body_text: str, config: LintConfig) -> list[str]:
    """Find embedded source segments in a block body.

    A segment runs from `config.embed_start` to the nearest `config.embed_end`,
    or to the end of the body when the end marker is missing.

    Examples:
        find_embedded_code("<?php echo 1; ?>\\n", LintConfig())  # ["<?php echo 1; ?>"]
    """
    pattern = re.compile(
        rf"{re.escape(config.embed_start)}.*?(?:{re.escape(config.embed_end)}|\Z)",
        re.DOTALL,
    )
    return pattern.findall(body_text)


def check_line_width(line: str, line_number: int, limit: int | None) -> Diagnostic | None:
    """Report a block line whose trimmed width exceeds `limit`."""
    width = len(line.strip())
    if limit is None or width <= limit:
        return None
    return Diagnostic(line_number, Severity.ERROR, f"line width {width} exceeds limit {limit}")


def check_line_count(ctx: ScanContext, line_number: int, limit: int | None) -> Diagnostic | None:
    """Report a block with more content lines than `limit` at its close line."""
    if limit is None or ctx.line_count <= limit:
        return None
    return Diagnostic(
        line_number, Severity.ERROR, f"line count {ctx.line_count} exceeds limit {limit}"
    )


def lint_block(ctx: ScanContext, config: LintConfig, linter: Linter | None) -> list[Diagnostic]:
    """Lint the embedded code of the block held in `ctx`.

    Blocks without embedded segments are skipped. Undeclared blocks that still
    contain segments get a notice and are never sent to the linter.

    Args:
        ctx: Context of the block being closed.
        config: Configuration providing the embed markers.
        linter: Linter collaborator, or None to skip syntax checks.

    Returns:
        list[Diagnostic]: Zero or one diagnostic.
    """
    segments = find_embedded_code(ctx.body_text, config)
    if not segments:
        return []

    if not ctx.is_declared_language:
        message = (
            f"code block not declared as {config.language_tag} "
            f"but contains {config.language_tag} markers"
        )
        return [Diagnostic(ctx.block_start_line, Severity.NOTICE, message)]

    if linter is None:
        return []

    try:
        report = linter.lint("".join(segments))
    except LintInvocationError as error:
        return [Diagnostic(ctx.block_start_line, Severity.ERROR, str(error))]

    diagnostic = parse_lint_output(report, ctx.block_start_line, config.clean_marker)
    return [diagnostic] if diagnostic is not None else []


def _try_open_block(
    ctx: ScanContext, kind: LineKind, line: str, line_number: int, config: LintConfig
) -> bool:
    """Enter a code block when `kind` is an open marker.

    Examples:
        _try_open_block(ScanContext(), LineKind.OPEN_BLOCK, "[code php]", 4, LintConfig())  # True
    """
    if kind is not LineKind.OPEN_BLOCK:
        return False

    ctx.state = ScanState.INSIDE_BLOCK
    ctx.block_start_line = line_number
    ctx.line_count = 0
    ctx.body_text = ""
    ctx.is_declared_language = declares_language(line, config)
    return True


def _try_close_block(
    ctx: ScanContext,
    kind: LineKind,
    line_number: int,
    config: LintConfig,
    linter: Linter | None,
) -> list[Diagnostic] | None:
    """Run the block-close checks and leave the block when `kind` is a close marker.

    Returns:
        list[Diagnostic] | None: Findings for the closed block, or None when the
            line does not close a block.
    """
    if kind is not LineKind.CLOSE_BLOCK:
        return None

    diagnostics = lint_block(ctx, config, linter)
    line_count_diagnostic = check_line_count(ctx, line_number, config.line_count)
    if line_count_diagnostic is not None:
        diagnostics.append(line_count_diagnostic)

    ctx.state = ScanState.OUTSIDE
    ctx.block_start_line = 0
    ctx.line_count = 0
    ctx.body_text = ""
    ctx.is_declared_language = False
    return diagnostics


def _consume_block_line(
    ctx: ScanContext, line: str, line_number: int, config: LintConfig
) -> list[Diagnostic]:
    diagnostics = []
    width_diagnostic = check_line_width(line, line_number, config.line_width)
    if width_diagnostic is not None:
        diagnostics.append(width_diagnostic)

    ctx.line_count += 1
    ctx.body_text += line + "\n"
    return diagnostics


class BlockScanner:
    """Walk one document's lines through the code block state machine.

    Args:
        config: Limits and markup settings for the run.
        linter: Optional collaborator used to syntax-check declared blocks.

    Examples:
        scanner = BlockScanner(LintConfig(line_width=60))
        for number, line in enumerate(lines, start=1):
            result = scanner.feed(line, number)
    """

    def __init__(self, config: LintConfig, linter: Linter | None = None):
        self.config = config
        self.linter = linter
        self.context = ScanContext()

    def feed(self, line: str, line_number: int) -> LineResult:
        """Scan one line.

        Args:
            line: Line content without its terminator.
            line_number: One-based position of the line in the document.

        Returns:
            LineResult: Classification, findings, and word contribution.
        """
        ctx = self.context
        kind = classify_line(line, ctx, self.config)
        diagnostics: list[Diagnostic] = []

        if not _try_open_block(ctx, kind, line, line_number, self.config):
            closed = _try_close_block(ctx, kind, line_number, self.config, self.linter)
            if closed is not None:
                diagnostics.extend(closed)
            elif kind is LineKind.INSIDE:
                diagnostics.extend(_consume_block_line(ctx, line, line_number, self.config))

        words = 0
        if not self.config.exclude_code or kind is not LineKind.INSIDE:
            words = count_words(line)

        return LineResult(kind=kind, diagnostics=diagnostics, words=words)

    def finish(self, line_number: int) -> list[Diagnostic]:
        """Report a block left open at the end of the document."""
        ctx = self.context
        if ctx.state is not ScanState.INSIDE_BLOCK:
            return []
        message = f"code block opened on line {ctx.block_start_line} is never closed"
        return [Diagnostic(line_number, Severity.NOTICE, message)]
