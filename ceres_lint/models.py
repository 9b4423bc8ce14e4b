"""Data models for ceres-lint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ScanState(Enum):
    """Scanner states used while walking a Ceres document.

    Attributes:
        OUTSIDE: Default state for prose.
        INSIDE_BLOCK: Inside a code block opened by the open marker.
    """

    OUTSIDE = auto()
    INSIDE_BLOCK = auto()


class LineKind(Enum):
    """Classification of a single line relative to the scan state."""

    OPEN_BLOCK = auto()
    CLOSE_BLOCK = auto()
    INSIDE = auto()
    OUTSIDE = auto()


class Severity(Enum):
    """Severity of a reported finding."""

    NOTICE = "NOTICE"
    ERROR = "ERROR"


@dataclass
class ScanContext:
    """Encapsulate scanner state while walking a document.

    Attributes:
        state: Current scanner state.
        block_start_line: One-based line of the open marker, or 0 when outside a block.
        line_count: Content lines consumed since the block opened.
        body_text: Raw text of the block's content lines.
        is_declared_language: Whether the open marker declares the embedded language.
    """

    state: ScanState = ScanState.OUTSIDE
    block_start_line: int = 0
    line_count: int = 0
    body_text: str = ""
    is_declared_language: bool = False


@dataclass(frozen=True)
class Diagnostic:
    """A single finding tied to a document line.

    Attributes:
        line_number: One-based line the finding refers to.
        severity: `Severity.NOTICE` or `Severity.ERROR`.
        message: Human-readable description.
    """

    line_number: int
    severity: Severity
    message: str

    def format(self) -> str:
        """Render the diagnostic as ``"<line>: <SEVERITY> - <message>"``."""
        return f"{self.line_number}: {self.severity.value} - {self.message}"


@dataclass
class LineResult:
    """Outcome of scanning one line.

    Attributes:
        kind: Classification of the line.
        diagnostics: Findings produced while scanning the line.
        words: Contribution of the line to the document word tally.
    """

    kind: LineKind
    diagnostics: list[Diagnostic] = field(default_factory=list)
    words: int = 0
