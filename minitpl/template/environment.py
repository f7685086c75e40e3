"""
Окружение переменных для вычисления шаблона.

Окружение строится заново для каждого вызова рендеринга из локальных и
глобальных переменных и во время вычисления только читается.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional

VariableValue = Optional[str]


class VariableEnvironment(Mapping[str, VariableValue]):
    """
    Неизменяемое отображение имя → значение.

    Присутствие ключа и его значение различаются: условие {{if name}}
    проверяет только присутствие, а значение None означает «ключ есть,
    но значение не задано».
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, VariableValue] = {}
        if values:
            for name, value in values.items():
                self._values[str(name)] = _coerce(value)

    @classmethod
    def merge(
        cls,
        local_variables: Optional[Mapping[str, Any]] = None,
        global_variables: Optional[Mapping[str, Any]] = None,
    ) -> VariableEnvironment:
        """
        Объединяет локальные и глобальные переменные.

        Сначала копируются локальные, затем глобальные перезаписывают их:
        при совпадении имён побеждает глобальная переменная.
        """
        merged: Dict[str, Any] = {}
        merged.update(local_variables or {})
        merged.update(global_variables or {})
        return cls(merged)

    def has(self, name: str) -> bool:
        return name in self._values

    def lookup(self, name: str) -> VariableValue:
        """Значение переменной или None, если её нет."""
        return self._values.get(name)

    def __getitem__(self, name: str) -> VariableValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableEnvironment({self._values!r})"


def _coerce(value: Any) -> VariableValue:
    # Значения из YAML могут быть числами или булевыми
    if value is None or isinstance(value, str):
        return value
    return str(value)


__all__ = ["VariableEnvironment", "VariableValue"]
