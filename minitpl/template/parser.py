"""
Парсер шаблонов.

Строит AST из плоской последовательности токенов.

Грамматика:
block       → statement*            (до конца ввода или до ENDIF)
statement   → TEXT | VAR | conditional
conditional → IF block ENDIF
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..errors import MinitplUserError
from .diagnostics import Diagnostic, DiagnosticCode, DiagnosticCollector
from .lexer import TemplateLexer
from .nodes import BlockNode, ConditionalNode, LiteralNode, TemplateNode, VariableNode
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class TemplateParseError(MinitplUserError):
    """Структурная ошибка шаблона в строгом режиме."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic


class TemplateParser:
    """
    Парсер шаблонов.

    Использует один курсор, который движется только вперёд. Вложенность
    условных блоков хранится в явном стеке открытых блоков, поэтому
    глубина вложенности не ограничена стеком вызовов Python.

    Структурные ошибки (незакрытый if, лишний endif) попадают в диагностику,
    а парсер возвращает дерево, построенное к этому моменту. В строгом
    режиме такие ошибки поднимаются как TemplateParseError.
    """

    def __init__(
        self,
        tokens: List[Token],
        diagnostics: Optional[DiagnosticCollector] = None,
        *,
        strict: bool = False,
    ):
        self.tokens = tokens
        self.position = 0
        self.strict = strict
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()

    def parse(self) -> BlockNode:
        """
        Парсит всю последовательность токенов.

        Returns:
            Корневой блок документа

        Raises:
            TemplateParseError: При структурной ошибке в строгом режиме
        """
        self.position = 0
        root: List[TemplateNode] = []
        # Открытые условные блоки: токен IF и инструкции родительского блока
        open_blocks: List[Tuple[Token, List[TemplateNode]]] = []
        statements = root

        while not self._is_at_end():
            token = self._advance()

            if token.type == TokenType.TEXT:
                statements.append(LiteralNode(text=token.value))
            elif token.type == TokenType.VAR:
                statements.append(VariableNode(name=token.value))
            elif token.type == TokenType.IF:
                open_blocks.append((token, statements))
                statements = []
            elif open_blocks:
                statements = self._close_conditional(open_blocks.pop(), statements)
            else:
                self._structural_error(
                    DiagnosticCode.UNMATCHED_ENDIF,
                    "endif without matching if",
                    token,
                )

        # Незакрытые блоки сворачиваются изнутри наружу
        while open_blocks:
            if_token, _ = open_blocks[-1]
            self._structural_error(
                DiagnosticCode.UNTERMINATED_BLOCK,
                f"code block not closed: {{{{if {if_token.value}}}}} has no matching endif",
                if_token,
            )
            statements = self._close_conditional(open_blocks.pop(), statements)

        return BlockNode(statements=tuple(root))

    @staticmethod
    def _close_conditional(
        opened: Tuple[Token, List[TemplateNode]],
        body: List[TemplateNode],
    ) -> List[TemplateNode]:
        """Добавляет условный блок в родительский блок и возвращает родителя."""
        if_token, parent = opened
        parent.append(ConditionalNode(condition=if_token.value, body=BlockNode(statements=tuple(body))))
        return parent

    # Вспомогательные методы для работы с токенами

    def _is_at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _structural_error(self, code: DiagnosticCode, message: str, token: Token) -> None:
        diag = self.diagnostics.report(
            code,
            message,
            position=token.position,
            line=token.line,
            column=token.column,
            logger=logger,
        )
        if self.strict:
            raise TemplateParseError(diag)


def parse_template(
    text: str,
    diagnostics: Optional[DiagnosticCollector] = None,
    *,
    strict: bool = False,
) -> BlockNode:
    """
    Удобная функция для токенизации и парсинга шаблона.

    Args:
        text: Исходный текст шаблона
        diagnostics: Общий накопитель диагностик для лексера и парсера
        strict: Поднимать структурные ошибки как исключения

    Returns:
        Корневой блок AST

    Raises:
        TemplateParseError: При структурной ошибке в строгом режиме
    """
    collector = diagnostics if diagnostics is not None else DiagnosticCollector()
    tokens = TemplateLexer(text, collector).tokenize()
    return TemplateParser(tokens, collector, strict=strict).parse()


__all__ = ["TemplateParser", "TemplateParseError", "parse_template"]
