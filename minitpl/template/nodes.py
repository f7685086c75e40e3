"""
AST-узлы шаблона.

Дерево неизменяемо и не содержит значений переменных, поэтому одно и то же
дерево можно вычислять многократно с разными наборами переменных.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class LiteralNode(TemplateNode):
    """
    Литеральный текст шаблона.

    Выводится в результат без изменений.
    """
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Подстановка переменной {{name}}."""
    name: str


@dataclass(frozen=True)
class BlockNode(TemplateNode):
    """
    Упорядоченная последовательность инструкций.

    Корень документа и тело каждого условного блока.
    """
    statements: Tuple[TemplateNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ConditionalNode(TemplateNode):
    """
    Условный блок {{if condition}}...{{endif}}.

    Тело выводится, если имя условия присутствует в окружении как ключ.
    """
    condition: str
    body: BlockNode


def iter_nodes(node: TemplateNode) -> Iterator[TemplateNode]:
    """Обходит дерево в прямом порядке, начиная с node."""
    stack: List[TemplateNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(_children(current)))


def format_ast_tree(node: TemplateNode, indent: int = 0) -> str:
    """Форматирует AST как дерево для отладки."""
    lines: List[str] = []
    stack: List[Tuple[TemplateNode, int]] = [(node, indent)]

    while stack:
        current, depth = stack.pop()
        prefix = "  " * depth

        if isinstance(current, LiteralNode):
            # Показываем только начало текста для читабельности
            preview = repr(current.text[:50] + "..." if len(current.text) > 50 else current.text)
            lines.append(f"{prefix}LiteralNode({preview})")
        elif isinstance(current, VariableNode):
            lines.append(f"{prefix}VariableNode({current.name!r})")
        elif isinstance(current, BlockNode):
            lines.append(f"{prefix}BlockNode[{len(current.statements)}]")
        elif isinstance(current, ConditionalNode):
            lines.append(f"{prefix}ConditionalNode(condition={current.condition!r})")
        else:
            lines.append(f"{prefix}{type(current).__name__}")

        stack.extend((child, depth + 1) for child in reversed(_children(current)))

    return "\n".join(lines)


def _children(node: TemplateNode) -> Tuple[TemplateNode, ...]:
    if isinstance(node, BlockNode):
        return node.statements
    if isinstance(node, ConditionalNode):
        return (node.body,)
    return ()


__all__ = [
    "TemplateNode",
    "LiteralNode",
    "VariableNode",
    "BlockNode",
    "ConditionalNode",
    "iter_nodes",
    "format_ast_tree",
]
