"""Tests for ast_graph.builder — node emission, labels, ids, and edges."""

import copy

from ast_graph.builder import SEQUENCE_LABEL, GraphBuilder, build, node_label
from ast_graph.config import BuildConfig
from ast_graph.ir.graph import AstGraph


def _ids(graph: AstGraph) -> list[str]:
    return [n.id for n in graph.nodes]


def _labels(graph: AstGraph) -> dict[str, str]:
    return {n.id: n.kind for n in graph.nodes}


def _pairs(graph: AstGraph) -> list[tuple[str, str]]:
    return [(e.source, e.target) for e in graph.edges]


ADD_AST = {
    "type": "add",
    "left": {"type": "int", "value": "1"},
    "right": {"type": "int", "value": "2"},
}


class TestScenarios:
    def test_single_typed_node(self):
        g = build({"type": "int", "value": "5"})
        assert g.node_count() == 1
        assert g.edge_count() == 0
        assert g.nodes[0].kind == 'int: "5"'
        assert (g.nodes[0].position.x, g.nodes[0].position.y) == (0, 0)

    def test_binary_expression(self):
        g = build(ADD_AST)
        assert _ids(g) == ["add_1", "int_1", "int_2"]
        assert _pairs(g) == [("add_1", "int_1"), ("add_1", "int_2")]
        assert _labels(g) == {"add_1": "add", "int_1": 'int: "1"', "int_2": 'int: "2"'}


class TestLabels:
    def test_typed_with_string_value(self):
        assert node_label({"type": "ident", "value": "foo"}) == 'ident: "foo"'

    def test_typed_with_non_string_value(self):
        assert node_label({"type": "int", "value": 5}) == "int"

    def test_typed_without_value(self):
        assert node_label({"type": "call"}) == "call"

    def test_sequence_placeholder(self):
        assert node_label([1, 2]) == SEQUENCE_LABEL

    def test_untyped_mapping_serialization(self):
        label = node_label({"name": "x", "flag": True, "opt": None, "loc": [1, 2]})
        assert label == "name: x, flag: true, opt: null, loc: [1,2]"

    def test_empty_mapping(self):
        assert node_label({}) == "{}"

    def test_scalar(self):
        assert node_label(42) == "42"
        assert node_label(None) == "null"


class TestIds:
    def test_per_type_counters(self):
        g = build({"type": "a", "x": {"type": "b"}, "y": {"type": "a"}, "z": {"type": "b"}})
        assert _ids(g) == ["a_1", "b_1", "a_2", "b_2"]

    def test_ids_unique(self):
        ast = {"type": "block", "body": [{"type": "stmt", "args": [{"k": 1}, {"k": 2}]} for _ in range(10)]}
        g = build(ast)
        ids = _ids(g)
        assert len(ids) == len(set(ids))

    def test_counters_reset_between_builds(self):
        builder = GraphBuilder()
        first = builder.build(ADD_AST)
        second = builder.build(ADD_AST)
        assert _ids(first) == _ids(second)

    def test_edge_id_joins_endpoints(self):
        g = build(ADD_AST)
        assert [e.id for e in g.edges] == ["add_1-int_1", "add_1-int_2"]


class TestTraversal:
    def test_field_sequence_is_flattened(self):
        g = build({"type": "args", "parts": [{"type": "int"}, {"type": "str"}]})
        assert _ids(g) == ["args_1", "int_1", "str_1"]
        assert _pairs(g) == [("args_1", "int_1"), ("args_1", "str_1")]

    def test_scalars_in_field_sequence_are_dropped(self):
        g = build({"type": "loc", "location": [1, 0, 1, 4]})
        assert _ids(g) == ["loc_1"]

    def test_top_level_sequence_emits_node(self):
        g = build([{"type": "a"}, {"type": "b"}])
        assert _ids(g) == ["unnamed_1", "a_1", "b_1"]
        assert g.nodes[0].kind == SEQUENCE_LABEL
        assert _pairs(g) == [("unnamed_1", "a_1"), ("unnamed_1", "b_1")]

    def test_nested_sequence_emits_node(self):
        g = build({"type": "x", "rows": [[{"type": "a"}]]})
        assert _ids(g) == ["x_1", "unnamed_1", "a_1"]
        assert _pairs(g) == [("x_1", "unnamed_1"), ("unnamed_1", "a_1")]

    def test_depth_first_field_order(self):
        ast = {
            "type": "root",
            "a": {"type": "p", "c": {"type": "q"}},
            "b": {"type": "r"},
        }
        g = build(ast)
        assert _ids(g) == ["root_1", "p_1", "q_1", "r_1"]
        assert _pairs(g) == [("root_1", "p_1"), ("p_1", "q_1"), ("root_1", "r_1")]

    def test_source_reference_kept(self):
        g = build(ADD_AST)
        assert g.nodes[0].source is ADD_AST
        assert g.nodes[1].source is ADD_AST["left"]

    def test_input_not_mutated(self):
        ast = {"type": "prog", "body": [{"type": "a", "op": {"x": 1}}], "operator": "+"}
        before = copy.deepcopy(ast)
        build(ast)
        assert ast == before


class TestSatellites:
    def test_untyped_mapping_gets_satellite_per_scalar(self):
        g = build({"name": "x", "count": 2, "missing": None})
        assert _ids(g) == ["unnamed_1", "simple_1", "simple_2"]
        assert g.nodes[1].kind == "name: x"
        assert g.nodes[2].kind == "count: 2"
        assert _pairs(g) == [("unnamed_1", "simple_1"), ("unnamed_1", "simple_2")]

    def test_operator_satellite_on_typed_node(self):
        g = build({"type": "binary", "operator": "+", "left": {"type": "int"}})
        assert _labels(g) == {"binary_1": "binary", "simple_1": "operator: +", "int_1": "int"}
        assert _pairs(g) == [("binary_1", "simple_1"), ("binary_1", "int_1")]

    def test_other_scalars_on_typed_node_fold_into_label(self):
        g = build({"type": "ident", "value": "foo", "flag": True})
        assert _ids(g) == ["ident_1"]

    def test_custom_satellite_keys(self):
        g = build({"type": "call", "name": "puts"}, config=BuildConfig(satellite_keys=("name",)))
        assert _labels(g) == {"call_1": "call", "simple_1": "name: puts"}

    def test_satellites_interleave_in_field_order(self):
        g = build({"a": {"type": "t"}, "b": 1})
        assert _ids(g) == ["unnamed_1", "t_1", "simple_1"]

    def test_null_operator_still_gets_satellite(self):
        g = build({"type": "binary", "operator": None})
        assert _labels(g) == {"binary_1": "binary", "simple_1": "operator: null"}
        assert _pairs(g) == [("binary_1", "simple_1")]


class TestProgramCollapse:
    PROGRAM = {
        "type": "program",
        "location": [1, 0, 2, 5],
        "statements": {"type": "statements", "body": [{"type": "int", "value": "1"}, {"type": "int", "value": "2"}]},
    }

    def test_statements_wrapper_skipped(self):
        g = build(self.PROGRAM)
        assert _ids(g) == ["program_1", "int_1", "int_2"]
        assert _pairs(g) == [("program_1", "int_1"), ("program_1", "int_2")]
        assert g.nodes[0].kind == "program"

    def test_collapse_disabled(self):
        g = build(self.PROGRAM, config=BuildConfig(collapse_program=False))
        assert _ids(g) == ["program_1", "statements_1", "int_1", "int_2"]

    def test_program_without_body_traversed_normally(self):
        g = build({"type": "program", "statements": {"type": "statements"}})
        assert _ids(g) == ["program_1", "statements_1"]


class TestMalformedInput:
    def test_top_level_scalar(self):
        g = build("just text")
        assert g.node_count() == 1
        assert g.nodes[0].kind == "just text"
        assert g.nodes[0].id == "unnamed_1"

    def test_top_level_none(self):
        g = build(None)
        assert [n.kind for n in g.nodes] == ["null"]

    def test_arbitrary_object(self):
        class Opaque:
            def __str__(self):
                return "opaque"

        g = build(Opaque())
        assert [n.kind for n in g.nodes] == ["opaque"]

    def test_empty_sequence(self):
        g = build([])
        assert _ids(g) == ["unnamed_1"]
        assert g.edge_count() == 0

    def test_very_deep_tree(self):
        ast: dict = {"type": "leaf"}
        for _ in range(5000):
            ast = {"type": "wrap", "inner": ast}
        g = build(ast)
        assert g.node_count() == 5001
        assert g.edge_count() == 5000

    def test_non_string_keys(self):
        g = build({"a": {(1, 2): "x"}})
        assert _ids(g) == ["unnamed_1", "unnamed_2", "simple_1"]
        assert g.nodes[0].kind == "a: {(1, 2): 'x'}"
        assert g.nodes[2].kind == "(1, 2): x"


class TestParentId:
    def test_root_hangs_under_given_parent(self):
        g = build({"type": "int"}, parent_id="call_3")
        assert _pairs(g) == [("call_3", "int_1")]

    def test_root_detection_ignores_dangling_edge(self):
        g = build(ADD_AST, parent_id="outside_1")
        assert g.root_ids() == ["add_1"]
        assert g.root() is g.nodes[0]

    def test_parent_id_colliding_with_root_id(self):
        g = build({"type": "int"}, parent_id="int_1")
        assert _pairs(g) == [("int_1", "int_1")]
        assert g.root_ids() == ["int_1"]
        assert g.root() is g.nodes[0]

    def test_from_ast_classmethod(self):
        g = AstGraph.from_ast(ADD_AST)
        assert g.node_count() == 3
        assert g.is_tree()
