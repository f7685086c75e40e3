"""
Лексические типы шаблонов.

Токен представляет классифицированный фрагмент исходного текста: литеральный текст,
ссылка на переменную, открытие или закрытие условного блока.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""
    TEXT = "TEXT"      # литеральный текст между маркерами
    VAR = "VAR"        # {{name}}
    IF = "IF"          # {{if condition}}
    ENDIF = "ENDIF"    # {{endif}}


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Для TEXT value содержит текст, для VAR имя переменной,
    для IF условие, для ENDIF пустую строку.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
