"""Diagnostic model: structured lint findings for stylesheet analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single lint finding about a stylesheet.

    Attributes:
        rule: Name of the rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        line: 1-based line of the offending statement, if known.
        column: 1-based column of the offending statement, if known.
        source_name: The file (or other source label) that was linted.
    """

    rule: str
    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    source_name: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = ""
        if self.line is not None:
            location = f"{self.line}:{self.column or 1}: "
        if self.source_name:
            location = f"{self.source_name}:{location or ' '}"
        return f"{location}{self.severity.value}: {self.message} ({self.rule})"
