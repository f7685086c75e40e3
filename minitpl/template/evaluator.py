"""
Вычислитель AST шаблона.

Проходит по дереву и собирает итоговый текст в контексте окружения
переменных. Чистая функция от (AST, окружение): скрытого состояния нет,
кроме накопителя диагностик.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .diagnostics import DiagnosticCode, DiagnosticCollector, Severity
from .environment import VariableEnvironment
from .nodes import BlockNode, ConditionalNode, LiteralNode, TemplateNode, VariableNode

logger = logging.getLogger(__name__)


class TemplateEvaluator:
    """
    Вычислитель шаблонов.

    Принимает окружение переменных и (необязательно) корень AST,
    возвращает отрендеренную строку.
    """

    def __init__(
        self,
        environment: VariableEnvironment,
        root: Optional[TemplateNode] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.environment = environment
        self.root = root
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def evaluate(self, node: Optional[TemplateNode] = None) -> str:
        """
        Вычисляет узел AST.

        Обход идёт по явному стеку итераторов, поэтому глубина вложенности
        условных блоков не ограничена стеком вызовов Python.

        Args:
            node: Узел для вычисления; по умолчанию корень, переданный в конструктор

        Returns:
            Текстовое представление узла
        """
        if node is None:
            node = self.root if self.root is not None else BlockNode()

        parts: List[str] = []
        pending: List[Iterator[TemplateNode]] = [iter((node,))]

        while pending:
            current = next(pending[-1], None)
            if current is None:
                pending.pop()
                continue

            if isinstance(current, LiteralNode):
                parts.append(current.text)
            elif isinstance(current, VariableNode):
                parts.append(self._evaluate_variable(current))
            elif isinstance(current, BlockNode):
                pending.append(iter(current.statements))
            elif isinstance(current, ConditionalNode):
                if self.evaluate_condition(current.condition):
                    pending.append(iter(current.body.statements))
            else:
                # Недостижимо для дерева, построенного TemplateParser
                self.diagnostics.report(
                    DiagnosticCode.UNKNOWN_NODE,
                    f"Evaluator error: unknown node type {type(current).__name__}",
                    logger=logger,
                )

        return "".join(parts)

    def evaluate_condition(self, condition: str) -> bool:
        """Условие истинно, если имя есть в окружении как ключ, независимо от значения."""
        return self.environment.has(condition)

    def _evaluate_variable(self, node: VariableNode) -> str:
        value = self.environment.lookup(node.name)
        if value is None:
            self.diagnostics.report(
                DiagnosticCode.UNBOUND_VARIABLE,
                f"Variable {node.name} was not found.",
                severity=Severity.warning,
                logger=logger,
            )
            return ""
        return value


__all__ = ["TemplateEvaluator"]
