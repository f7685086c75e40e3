"""
Диагностика конвейера шаблонизации.

Ни одна стадия (лексер, парсер, вычислитель) не прерывает рендеринг при
некорректном вводе. Вместо исключений стадии сообщают о проблемах в
DiagnosticCollector, а итог возвращается вызывающему коду в RenderResult.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional


class Severity(str, enum.Enum):
    warning = "warning"
    error = "error"


class DiagnosticCode(str, enum.Enum):
    """Классы проблем, обнаруживаемых при рендеринге."""
    UNKNOWN_MARKER = "unknown-marker"          # {{...}} не подходит ни под одну форму
    UNTERMINATED_BLOCK = "unterminated-block"  # {{if}} без {{endif}}
    UNMATCHED_ENDIF = "unmatched-endif"        # {{endif}} без {{if}}
    UNBOUND_VARIABLE = "unbound-variable"      # переменная отсутствует в окружении
    UNKNOWN_NODE = "unknown-node"              # узел AST неизвестного типа


@dataclass(frozen=True)
class Diagnostic:
    """Одна диагностическая запись с позицией в исходном тексте (если известна)."""
    code: DiagnosticCode
    severity: Severity
    message: str
    position: Optional[int] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        where = f" at {self.line}:{self.column}" if self.line is not None else ""
        return f"{self.code.value}: {self.message}{where}"


class DiagnosticCollector:
    """
    Накопитель диагностик одного вызова рендеринга.

    Каждая запись дополнительно пишется в лог модуля, сообщившего о проблеме.
    """

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        *,
        severity: Severity = Severity.error,
        position: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ) -> Diagnostic:
        diag = Diagnostic(
            code=code,
            severity=severity,
            message=message,
            position=position,
            line=line,
            column=column,
        )
        self._items.append(diag)

        log = logger or logging.getLogger(__name__)
        level = logging.ERROR if severity is Severity.error else logging.WARNING
        log.log(level, "%s", diag)
        return diag

    @property
    def items(self) -> List[Diagnostic]:
        return list(self._items)


@dataclass(frozen=True)
class RenderResult:
    """
    Результат рендеринга шаблона.

    ok: не было ошибок (предупреждения допустимы);
    clean: не было вообще никаких диагностик.
    """
    text: str
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(d.severity is Severity.error for d in self.diagnostics)

    @property
    def clean(self) -> bool:
        return not self.diagnostics


__all__ = [
    "Severity",
    "DiagnosticCode",
    "Diagnostic",
    "DiagnosticCollector",
    "RenderResult",
]
