"""Line classification for Ceres code blocks."""

from __future__ import annotations

from .config import LintConfig
from .models import LineKind, ScanContext, ScanState


def declares_language(line: str, config: LintConfig) -> bool:
    """Return True when an open marker line carries the language annotation.

    Examples:
        declares_language("[code php]", LintConfig())  # True
    """
    return config.language_tag in line[len(config.open_marker) :]


def classify_line(line: str, ctx: ScanContext, config: LintConfig) -> LineKind:
    """Classify a line against the current scan state.

    Markers are case-sensitive prefixes at column 0. An open marker is only
    meaningful outside a block and a close marker only inside one; a stray
    marker in the wrong state is treated as ordinary content.

    Args:
        line: Line being scanned, without its line terminator.
        ctx: Current scanner context. Not modified.
        config: Configuration providing the marker tokens.

    Returns:
        LineKind: How the scanner should treat the line.

    Examples:
        classify_line("[code php]", ScanContext(), LintConfig())  # LineKind.OPEN_BLOCK
    """
    if ctx.state is ScanState.INSIDE_BLOCK:
        if line.startswith(config.close_marker):
            return LineKind.CLOSE_BLOCK
        return LineKind.INSIDE

    if line.startswith(config.open_marker):
        return LineKind.OPEN_BLOCK
    return LineKind.OUTSIDE
