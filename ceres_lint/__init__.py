"""
ceres-lint: word counts and code block checks for Ceres documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    ceres-lint -b manuscript/

Library Usage:
    from ceres_lint import BlockScanner, LintConfig

    scanner = BlockScanner(LintConfig(line_width=60))
    for number, line in enumerate(text.splitlines(), start=1):
        for diagnostic in scanner.feed(line, number).diagnostics:
            print(diagnostic.format())
"""

from .classifier import classify_line
from .config import ConfigError, LintConfig, build_config
from .counter import format_counts
from .exceptions import CeresLintError, FetchError, LintInvocationError
from .lint import PhpLinter, parse_lint_output
from .models import Diagnostic, LineKind, ScanContext, ScanState, Severity
from .processor import DocumentProcessor
from .scanner import BlockScanner, count_words
from .urls import RequestsFetcher, UrlChecker, find_url

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "BlockScanner",
    "DocumentProcessor",
    "classify_line",
    "count_words",
    "format_counts",
    "parse_lint_output",
    "find_url",
    # Collaborators
    "PhpLinter",
    "RequestsFetcher",
    "UrlChecker",
    # Data models
    "Diagnostic",
    "LineKind",
    "ScanContext",
    "ScanState",
    "Severity",
    # Configuration
    "LintConfig",
    "build_config",
    # Exceptions
    "CeresLintError",
    "ConfigError",
    "FetchError",
    "LintInvocationError",
    # Version
    "__version__",
]
