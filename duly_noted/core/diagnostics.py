"""Collector for recoverable anchor and link problems.

Every operation that can report a duplicate anchor, a collection conflict or
an unresolved link takes a Diagnostics instance, so callers decide whether
the reported problems should fail the run.
"""

import sys
from typing import Any

from pydantic import BaseModel

from ..constants import DiagnosticKind, Severity
from .errors import StrictModeError


class Diagnostic(BaseModel):
    """A single reported problem."""

    kind: DiagnosticKind
    severity: Severity
    message: str
    file: str | None = None
    line: int | None = None

    def format(self) -> str:
        location = ""
        if self.file is not None:
            location = f" ({self.file}" + (f":{self.line})" if self.line is not None else ")")
        label = "Warning" if self.severity == Severity.WARNING else "Error"
        return f"{label}: {self.message}{location}"


class Diagnostics:
    """Ordered list of Diagnostic records, echoed to stderr unless quiet.

    A problem is recorded once per run: reporting the same kind, message and
    location again (e.g. when several generators resolve the same comment)
    returns the existing record.
    """

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.records: list[Diagnostic] = []
        self._seen: dict[tuple, Diagnostic] = {}

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        file: str | None = None,
        line: int | None = None,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        key = (kind, severity, message, file, line)
        if key in self._seen:
            return self._seen[key]

        diagnostic = Diagnostic(
            kind=kind, severity=severity, message=message, file=file, line=line
        )
        self._seen[key] = diagnostic
        self.records.append(diagnostic)
        if not self.quiet:
            print(diagnostic.format(), file=sys.stderr)
        return diagnostic

    def warning(self, kind: DiagnosticKind, message: str, file: str | None = None,
                line: int | None = None) -> Diagnostic:
        return self.report(kind, message, file, line, Severity.WARNING)

    def error(self, kind: DiagnosticKind, message: str, file: str | None = None,
              line: int | None = None) -> Diagnostic:
        return self.report(kind, message, file, line, Severity.ERROR)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.records if d.severity == Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.records if d.severity == Severity.ERROR]

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.records if d.kind == kind]

    @property
    def has_problems(self) -> bool:
        return bool(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Summary in the shape used by tool responses."""
        return {
            "total": len(self.records),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [d.model_dump(mode="json") for d in self.records],
        }

    def raise_if_strict(self, strict: bool) -> None:
        """Escalate collected diagnostics to a failure in strict mode.

        Raises:
            StrictModeError: If strict is set and anything was reported
        """
        if strict and self.records:
            raise StrictModeError(
                f"{len(self.records)} reference problem(s) reported in strict mode: "
                + "; ".join(d.format() for d in self.records[:5])
            )
