"""
Процессор шаблонов.

Объединяет лексер, парсер и вычислитель в единый конвейер:
текст шаблона → токены → AST → строка.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .diagnostics import DiagnosticCollector, RenderResult
from .environment import VariableEnvironment
from .evaluator import TemplateEvaluator
from .lexer import TemplateLexer
from .parser import TemplateParser


def render_template(
    template_text: str,
    local_variables: Optional[Mapping[str, Any]] = None,
    global_variables: Optional[Mapping[str, Any]] = None,
    *,
    strict: bool = False,
) -> RenderResult:
    """
    Рендерит шаблон и возвращает текст вместе с диагностикой.

    Args:
        template_text: Исходный текст шаблона
        local_variables: Переменные конкретного шаблона
        global_variables: Глобальные переменные (перезаписывают локальные)
        strict: Поднимать структурные ошибки как исключения

    Returns:
        RenderResult с итоговым текстом и списком диагностик

    Raises:
        TemplateParseError: При структурной ошибке в строгом режиме
    """
    diagnostics = DiagnosticCollector()

    tokens = TemplateLexer(template_text, diagnostics).tokenize()
    ast = TemplateParser(tokens, diagnostics, strict=strict).parse()

    environment = VariableEnvironment.merge(local_variables, global_variables)
    text = TemplateEvaluator(environment, ast, diagnostics).evaluate()

    return RenderResult(text=text, diagnostics=diagnostics.items)


def render(
    template_text: str,
    local_variables: Optional[Mapping[str, Any]] = None,
    global_variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """Рендерит шаблон в строку. Проблемы шаблона попадают только в лог."""
    return render_template(template_text, local_variables, global_variables).text


__all__ = ["render", "render_template"]
