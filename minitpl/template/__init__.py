"""
Движок шаблонов minitpl.

Шаблон состоит из литерального текста с подстановками {{name}} и условными блоками
{{if name}}...{{endif}}.
"""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticCollector, RenderResult, Severity
from .environment import VariableEnvironment
from .evaluator import TemplateEvaluator
from .lexer import TemplateLexer, tokenize_template
from .nodes import BlockNode, ConditionalNode, LiteralNode, TemplateNode, VariableNode, format_ast_tree
from .parser import TemplateParseError, TemplateParser, parse_template
from .processor import render, render_template
from .tokens import Token, TokenType

__all__ = [
    # Основные функции
    "render",
    "render_template",

    # Результат и диагностика
    "RenderResult",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticCollector",
    "Severity",
    "TemplateParseError",

    # Стадии конвейера (для тестирования и отладки)
    "TemplateLexer",
    "TemplateParser",
    "TemplateEvaluator",
    "VariableEnvironment",
    "tokenize_template",
    "parse_template",
    "Token",
    "TokenType",
    "TemplateNode",
    "LiteralNode",
    "VariableNode",
    "BlockNode",
    "ConditionalNode",
    "format_ast_tree",
]
