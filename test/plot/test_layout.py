import pytest

from ecotree.parser import parse_newick
from ecotree.plot.layout import (
    PaintMethod,
    calculate_node_xy,
    is_atom,
    number_of_descendants,
    visible_nodes,
)


def by_name(root):
    return {node.name: node for node in root.traverse()}


def test_paint_method_from_value(monkeypatch):
    assert PaintMethod.from_value("Collapsed") is PaintMethod.COLLAPSED
    assert PaintMethod.from_value(PaintMethod.DEMARCATED) is PaintMethod.DEMARCATED
    monkeypatch.setattr("ecotree.config.Config.PAINT_METHOD", "demarcated")
    assert PaintMethod.from_value(None) is PaintMethod.DEMARCATED
    with pytest.raises(ValueError):
        PaintMethod.from_value("radial")


def test_scenario_layout():
    root = parse_newick("((A:0.1,B:0.2)AB:0.3,(C:0.4,D:0.5)CD:0.6)R;")
    nodes = calculate_node_xy(root, PaintMethod.NORMAL)
    assert len(nodes) == 7

    named = by_name(root)
    assert [named[n].y for n in "ABCD"] == [0, 1, 2, 3]
    assert named["AB"].y == 0.5
    assert named["CD"].y == 2.5
    assert named["R"].y == 1.5

    assert named["R"].x == 0.0
    assert named["AB"].x == pytest.approx(0.3)
    assert named["A"].x == pytest.approx(0.4)
    assert named["D"].x == pytest.approx(1.1)


def test_layout_height_offset():
    root = parse_newick("(A:1,B:1);")
    calculate_node_xy(root, PaintMethod.NORMAL, height=5)
    assert [leaf.y for leaf in root.children] == [5, 6]
    assert root.y == 5.5


def test_internal_nodes_sit_between_first_and_last_child():
    root = parse_newick("((A:1,B:1,C:1):1,((D:1,E:1):1,F:2):1,G:3);")
    calculate_node_xy(root, PaintMethod.NORMAL)
    for node in root.traverse():
        if node.children:
            first, last = node.children[0], node.children[-1]
            assert node.y == (first.y + last.y) / 2
            assert first.y <= node.y <= last.y
    leaf_ys = [leaf.y for leaf in root.get_leaves()]
    assert leaf_ys == list(range(len(leaf_ys)))


def test_collapsed_layout():
    root = parse_newick("((A:0.1,B:0.2)AB:0.3,(C:0.4,D:0.5)CD:0.6)R;")
    named = by_name(root)
    named["AB"].collapsed = True

    nodes = calculate_node_xy(root, PaintMethod.COLLAPSED)
    assert [node.name for node in nodes] == ["R", "AB", "CD", "C", "D"]
    assert named["AB"].x == pytest.approx(0.5)
    assert named["AB"].y == 0
    assert named["C"].y == 1
    assert named["D"].y == 2
    assert named["CD"].y == 1.5
    assert named["R"].y == 0.75


def test_collapsed_clade_of_zero_depth_has_minimum_width():
    root = parse_newick("((A:0,B:0)AB:1,C:1);")
    root.children[0].collapsed = True
    calculate_node_xy(root, PaintMethod.COLLAPSED)
    assert root.children[0].x == pytest.approx(1.01)


def test_collapsed_flag_ignored_in_other_modes():
    root = parse_newick("((A:0.1,B:0.2)AB:0.3,(C:0.4,D:0.5)CD:0.6)R;")
    root.children[0].collapsed = True
    for method in (PaintMethod.NORMAL, PaintMethod.DEMARCATED):
        nodes = calculate_node_xy(root, method)
        assert len(nodes) == 7
        assert root.children[0].x == pytest.approx(0.3)


def test_number_of_descendants():
    root = parse_newick("(((A,B)E,C)F,D)R;")
    named = by_name(root)
    named["E"].collapsed = True
    assert number_of_descendants(root, PaintMethod.NORMAL) == 4
    assert number_of_descendants(root, PaintMethod.COLLAPSED) == 3
    assert number_of_descendants(named["E"], PaintMethod.COLLAPSED) == 2
    assert number_of_descendants(named["A"], PaintMethod.NORMAL) == 0
    assert is_atom(named["E"], PaintMethod.COLLAPSED)
    assert not is_atom(named["E"], PaintMethod.DEMARCATED)
    assert [n.name for n in visible_nodes(root, PaintMethod.COLLAPSED)] == [
        "R", "F", "E", "C", "D",
    ]


def test_deep_layout(deep_newick):
    root = parse_newick(deep_newick)
    nodes = calculate_node_xy(root, PaintMethod.NORMAL)
    assert len(nodes) == 2 * 3000 - 1
    assert max(node.x for node in nodes) == pytest.approx(2999.0)
