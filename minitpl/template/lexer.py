"""
Лексический анализатор шаблонов.

Работает в два прохода:
1. Поиск маркеров {{...}} ручным сканированием и разбиение исходного
   текста на литеральные фрагменты и «сырые» маркеры.
2. Классификация каждого маркера: if, endif или переменная.

Некорректные маркеры не прерывают токенизацию: о них сообщается в
диагностике, а сам маркер в поток токенов не попадает.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Tuple

from .diagnostics import DiagnosticCode, DiagnosticCollector
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

MARKER_OPEN = "{{"
MARKER_CLOSE = "}}"


class TemplateLexer:
    """
    Лексер шаблонов.

    Маркер это ближайший фрагмент вида {{<тело>}}, где тело непустое и не
    содержит символа '{'. Всё, что не является маркером, копируется в TEXT
    как есть, включая одиночные фигурные скобки.
    """

    # Порядок важен: формы if и endif синтаксически входят в форму переменной
    _CLASSIFIERS: Tuple[Tuple[TokenType, "re.Pattern[str]"], ...] = (
        (TokenType.IF, re.compile(r'\{\{if\s+([^}]+)\}\}')),
        (TokenType.ENDIF, re.compile(r'\{\{endif\}\}')),
        (TokenType.VAR, re.compile(r'\{\{([^}\s]+)\}\}')),
    )

    def __init__(self, text: str, diagnostics: Optional[DiagnosticCollector] = None):
        self.text = text
        self.length = len(text)
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        # Переводы строк подсчитаны до _line_pos; позиции запрашиваются по возрастанию
        self._line_pos = 0
        self._line = 1
        self._line_start = 0

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст.

        Returns:
            Список токенов в порядке следования в исходном тексте.
            Пустые TEXT-токены не создаются.
        """
        tokens: List[Token] = []
        cursor = 0

        for start, end in self.scan_markers():
            if start > cursor:
                tokens.append(self._make_token(TokenType.TEXT, self.text[cursor:start], cursor))

            token = self._classify(start, end)
            if token is not None:
                tokens.append(token)

            cursor = end

        if cursor < self.length:
            tokens.append(self._make_token(TokenType.TEXT, self.text[cursor:], cursor))

        return tokens

    def scan_markers(self) -> Iterator[Tuple[int, int]]:
        """
        Находит маркеры слева направо.

        Yields:
            Пары (start, end): границы маркера вместе со скобками
        """
        search_from = 0

        while True:
            start = self.text.find(MARKER_OPEN, search_from)
            if start == -1:
                return

            close = self.text.find(MARKER_CLOSE, start + len(MARKER_OPEN))
            if close == -1:
                # Дальше закрывающих скобок нет, остаток считается литеральным текстом
                return

            body = self.text[start + len(MARKER_OPEN):close]
            if not body:
                search_from = start + 1
                continue

            brace = body.rfind("{")
            if brace != -1:
                # Маркер может начинаться не раньше последней '{' перед закрытием
                search_from = start + 1 + brace
                continue

            end = close + len(MARKER_CLOSE)
            yield start, end
            search_from = end

    def _classify(self, start: int, end: int) -> Optional[Token]:
        raw = self.text[start:end]

        for token_type, pattern in self._CLASSIFIERS:
            match = pattern.fullmatch(raw)
            if match is None:
                continue
            value = match.group(1) if pattern.groups else ""
            return self._make_token(token_type, value, start)

        line, column = self._line_col(start)
        self.diagnostics.report(
            DiagnosticCode.UNKNOWN_MARKER,
            f"Unknown token: {raw}",
            position=start,
            line=line,
            column=column,
            logger=logger,
        )
        return None

    def _make_token(self, token_type: TokenType, value: str, position: int) -> Token:
        line, column = self._line_col(position)
        return Token(token_type, value, position, line, column)

    def _line_col(self, position: int) -> Tuple[int, int]:
        if position < self._line_pos:
            self._line_pos, self._line, self._line_start = 0, 1, 0

        newlines = self.text.count("\n", self._line_pos, position)
        if newlines:
            self._line += newlines
            self._line_start = self.text.rfind("\n", self._line_pos, position) + 1
        self._line_pos = position

        return self._line, position - self._line_start + 1


def tokenize_template(text: str, diagnostics: Optional[DiagnosticCollector] = None) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона
        diagnostics: Накопитель диагностик (создаётся при отсутствии)

    Returns:
        Список токенов
    """
    return TemplateLexer(text, diagnostics).tokenize()


__all__ = ["TemplateLexer", "tokenize_template", "MARKER_OPEN", "MARKER_CLOSE"]
