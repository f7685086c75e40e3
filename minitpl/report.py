"""
Схема JSON-отчёта команды `minitpl report`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .template.diagnostics import Diagnostic, RenderResult, Severity


class DiagnosticEntry(BaseModel):
    code: str
    severity: Severity
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def from_diagnostic(cls, diag: Diagnostic) -> DiagnosticEntry:
        return cls(
            code=diag.code.value,
            severity=diag.severity,
            message=diag.message,
            line=diag.line,
            column=diag.column,
        )


class TemplateReport(BaseModel):
    template: str
    text: str
    ok: bool
    diagnostics: List[DiagnosticEntry] = Field(default_factory=list)

    @classmethod
    def from_result(cls, template: str, result: RenderResult) -> TemplateReport:
        return cls(
            template=template,
            text=result.text,
            ok=result.ok,
            diagnostics=[DiagnosticEntry.from_diagnostic(d) for d in result.diagnostics],
        )


class RenderReport(BaseModel):
    ok: bool
    templates: List[TemplateReport] = Field(default_factory=list)

    @classmethod
    def build(cls, items: List[TemplateReport]) -> RenderReport:
        return cls(ok=all(item.ok for item in items), templates=items)


__all__ = ["DiagnosticEntry", "TemplateReport", "RenderReport"]
