"""
Тесты для вычислителя AST шаблонов.
"""

from dataclasses import dataclass

from minitpl.template.diagnostics import DiagnosticCode, DiagnosticCollector, Severity
from minitpl.template.environment import VariableEnvironment
from minitpl.template.evaluator import TemplateEvaluator
from minitpl.template.nodes import BlockNode, ConditionalNode, LiteralNode, TemplateNode, VariableNode


@dataclass(frozen=True)
class _ForeignNode(TemplateNode):
    """Узел, которого не строит парсер."""
    payload: str = ""


def _evaluator(values=None):
    return TemplateEvaluator(VariableEnvironment(values or {}), diagnostics=DiagnosticCollector())


class TestTemplateEvaluator:

    def test_literal(self):
        assert _evaluator().evaluate(LiteralNode("as is {")) == "as is {"

    def test_variable(self):
        assert _evaluator({"name": "Ada"}).evaluate(VariableNode("name")) == "Ada"

    def test_block_concatenates_in_order(self):
        tree = BlockNode((LiteralNode("<"), VariableNode("a"), VariableNode("b"), LiteralNode(">")))

        assert _evaluator({"a": "1", "b": "2"}).evaluate(tree) == "<12>"

    def test_default_node_is_root(self):
        root = BlockNode((LiteralNode("root"),))
        evaluator = TemplateEvaluator(VariableEnvironment(), root)

        assert evaluator.evaluate() == "root"

    def test_no_root_renders_empty(self):
        assert TemplateEvaluator(VariableEnvironment()).evaluate() == ""

    def test_same_tree_different_environments(self):
        tree = BlockNode((ConditionalNode("on", BlockNode((VariableNode("v"),))),))

        assert _evaluator({"on": "", "v": "x"}).evaluate(tree) == "x"
        assert _evaluator({"v": "x"}).evaluate(tree) == ""


class TestConditions:

    def test_presence_not_truthiness(self):
        """Пустая строка всё равно присутствующий ключ."""
        node = ConditionalNode("flag", BlockNode((LiteralNode("yes"),)))

        assert _evaluator({"flag": ""}).evaluate(node) == "yes"
        assert _evaluator({"flag": "0"}).evaluate(node) == "yes"
        assert _evaluator({}).evaluate(node) == ""

    def test_none_value_counts_as_present(self):
        node = ConditionalNode("flag", BlockNode((LiteralNode("yes"),)))

        assert _evaluator({"flag": None}).evaluate(node) == "yes"

    def test_condition_text_is_exact_key(self):
        node = ConditionalNode("flag ", BlockNode((LiteralNode("yes"),)))

        assert _evaluator({"flag": ""}).evaluate(node) == ""
        assert _evaluator({"flag ": ""}).evaluate(node) == "yes"


class TestEvaluatorDiagnostics:

    def test_unbound_variable(self):
        evaluator = _evaluator()

        assert evaluator.evaluate(VariableNode("missing")) == ""
        diag = evaluator.diagnostics.items[0]
        assert diag.code == DiagnosticCode.UNBOUND_VARIABLE
        assert diag.severity == Severity.warning
        assert "missing" in diag.message

    def test_variable_bound_to_none(self):
        evaluator = _evaluator({"x": None})

        assert evaluator.evaluate(VariableNode("x")) == ""
        assert [d.code for d in evaluator.diagnostics.items] == [DiagnosticCode.UNBOUND_VARIABLE]

    def test_unknown_node(self):
        evaluator = _evaluator()
        tree = BlockNode((LiteralNode("a"), _ForeignNode(), LiteralNode("b")))

        assert evaluator.evaluate(tree) == "ab"
        diag = evaluator.diagnostics.items[0]
        assert diag.code == DiagnosticCode.UNKNOWN_NODE
        assert diag.severity == Severity.error

    def test_unbound_variable_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            _evaluator().evaluate(VariableNode("ghost"))

        assert "Variable ghost was not found." in caplog.text

    def test_unknown_node_inside_condition(self):
        evaluator = _evaluator({"on": ""})
        tree = ConditionalNode("on", BlockNode((_ForeignNode(), LiteralNode("b"))))

        assert evaluator.evaluate(tree) == "b"
        assert [d.code for d in evaluator.diagnostics.items] == [DiagnosticCode.UNKNOWN_NODE]


class TestDeepTrees:

    @staticmethod
    def _nested(depth, leaf):
        node = BlockNode((leaf,))
        for _ in range(depth):
            node = BlockNode((ConditionalNode("a", node),))
        return node

    def test_deep_nesting_renders(self):
        tree = self._nested(5000, VariableNode("v"))

        assert _evaluator({"a": "", "v": "deep"}).evaluate(tree) == "deep"

    def test_deep_nesting_false_condition(self):
        tree = self._nested(5000, LiteralNode("x"))

        assert _evaluator().evaluate(tree) == ""
