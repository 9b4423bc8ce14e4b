"""External syntax checking of embedded PHP snippets."""

from __future__ import annotations

import shlex
import subprocess
from typing import Protocol

from .constants import (
    LINE_REFERENCE_PATTERN,
    LINT_ERROR_PREFIX_PATTERN,
    LINT_SOURCE_NAME_PATTERN,
    LINT_TRAILER_PATTERN,
)
from .exceptions import LintInvocationError
from .models import Diagnostic, Severity


class Linter(Protocol):
    """Anything that can syntax-check a piece of source text."""

    def lint(self, code: str) -> str:
        """Return the raw report for `code`."""
        ...


class PhpLinter:
    """Run ``php -l`` (or a compatible command) over source fed on stdin.

    Args:
        command: Command line; split with `shlex` when given as a string.
        timeout: Seconds to wait for the process.
    """

    def __init__(self, command: str | list[str] = "php -l", timeout: float = 30.0):
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.timeout = timeout

    def lint(self, code: str) -> str:
        """Syntax-check `code` and return the combined stdout/stderr report.

        Raises:
            LintInvocationError: If the command is missing, times out, or cannot
                be started.
        """
        display = shlex.join(self.command)
        try:
            completed = subprocess.run(
                self.command,
                input=code,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as error:
            raise LintInvocationError(display, "command not found") from error
        except subprocess.TimeoutExpired as error:
            raise LintInvocationError(display, f"timed out after {self.timeout} seconds") from error
        except OSError as error:
            raise LintInvocationError(display, str(error)) from error

        return completed.stdout + completed.stderr


def clean_lint_message(raw: str) -> str:
    """Strip linter boilerplate and the line reference from a report.

    Only the first non-empty line of the report is kept.

    Examples:
        clean_lint_message("PHP Parse error:  syntax error in Standard input code on line 3")
        # "syntax error"
    """
    report = LINT_TRAILER_PATTERN.sub("", raw)
    first_line = next((line for line in report.splitlines() if line.strip()), "")
    message = LINT_ERROR_PREFIX_PATTERN.sub("", first_line.strip())
    message = LINT_SOURCE_NAME_PATTERN.sub("", message)
    message = LINE_REFERENCE_PATTERN.sub("", message)
    return " ".join(message.split())


def parse_lint_output(
    raw: str, block_start_line: int, clean_marker: str = "No syntax errors detected"
) -> Diagnostic | None:
    """Turn a linter report into a document-level diagnostic.

    The report's ``on line N`` reference is relative to the submitted snippet;
    it is shifted by `block_start_line` to point into the document. A report
    without a reference is pinned to the block's open line.

    Args:
        raw: Raw linter output.
        block_start_line: One-based line of the block's open marker.
        clean_marker: Phrase indicating a clean result.

    Returns:
        Diagnostic | None: An error diagnostic, or None when the report is clean.

    Examples:
        parse_lint_output("Parse error: unexpected '}' in - on line 3", 20)
        # Diagnostic(23, Severity.ERROR, "unexpected '}'")
    """
    if clean_marker in raw:
        return None

    line_match = LINE_REFERENCE_PATTERN.search(raw)
    relative_line = int(line_match.group(1)) if line_match else 0
    message = clean_lint_message(raw) or "linter reported an error"
    return Diagnostic(block_start_line + relative_line, Severity.ERROR, message)
