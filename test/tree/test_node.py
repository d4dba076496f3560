import pytest

from ecotree.node import Node
from ecotree.parser import parse_newick


def names(nodes):
    return [node.name for node in nodes]


def test_add_child_sets_parent():
    parent = Node(name="P")
    child = Node(name="C", distance=1.5)
    parent.add_child(child)
    assert child.parent is parent
    assert parent.children == [child]
    assert not parent.is_leaf()
    assert child.is_leaf()
    assert child.get_root() is parent


def test_constructor_children_are_linked():
    a, b = Node(name="A"), Node(name="B")
    root = Node(name="R", children=[a, b])
    assert root.children == [a, b]
    assert a.parent is root and b.parent is root


def test_remove_child_detaches():
    a, b = Node(name="A"), Node(name="B")
    root = Node(children=[a, b])
    root.remove_child(a)
    assert root.children == [b]
    assert a.parent is None
    assert a.is_root()


def test_remove_child_matches_by_identity():
    a = Node(name="A")
    root = Node(children=[a, Node(name="B")])
    with pytest.raises(ValueError):
        root.remove_child(Node(name="A"))
    assert len(root.children) == 2


def test_replace_child_keeps_position():
    a, b, c = Node(name="A"), Node(name="B"), Node(name="C")
    root = Node(children=[a, b])
    root.replace_child(a, c)
    assert names(root.children) == ["C", "B"]
    assert c.parent is root
    assert a.parent is None


def test_get_descendants_is_preorder():
    root = parse_newick("((A,B)E,(C,D)F)R;")
    assert names(root.get_descendants()) == ["E", "A", "B", "F", "C", "D"]
    assert names(root.traverse()) == ["R", "E", "A", "B", "F", "C", "D"]
    assert names(root.get_leaves()) == ["A", "B", "C", "D"]


def test_leaf_has_no_descendants():
    leaf = Node(name="A")
    assert leaf.get_descendants() == []
    assert leaf.get_leaves() == [leaf]


def test_get_collapsed():
    root = parse_newick("((A,B)E,((C,D)G,H)F)R;")
    for node in root.get_descendants():
        if node.name in ("G", "E"):
            node.collapsed = True
    assert names(root.get_collapsed()) == ["E", "G"]


def test_maximum_distance_from_leaf(scenario_newick):
    root = parse_newick(scenario_newick)
    assert root.maximum_distance_from_leaf() == pytest.approx(1.1)
    assert root.children[0].maximum_distance_from_leaf() == pytest.approx(0.2)
    assert root.children[0].children[0].maximum_distance_from_leaf() == 0.0


def test_distance_from_root(scenario_newick):
    root = parse_newick(scenario_newick)
    a = root.children[0].children[0]
    d = root.children[1].children[1]
    assert a.distance_from_root() == pytest.approx(0.4)
    assert d.distance_from_root() == pytest.approx(1.1)
    assert root.distance_from_root() == 0.0


def test_compare_to_equal_trees(scenario_newick):
    assert parse_newick(scenario_newick).compare_to(parse_newick(scenario_newick)) == 0


@pytest.mark.parametrize(
    "other",
    [
        "((A:0.1,X:0.2):0.3,(C:0.4,D:0.5):0.6);",
        "((A:0.1,B:0.25):0.3,(C:0.4,D:0.5):0.6);",
        "((A:0.1,B:0.2,E:0.1):0.3,(C:0.4,D:0.5):0.6);",
        "((C:0.4,D:0.5):0.6,(A:0.1,B:0.2):0.3);",
    ],
)
def test_compare_to_detects_differences(scenario_newick, other):
    mine = parse_newick(scenario_newick)
    theirs = parse_newick(other)
    result = mine.compare_to(theirs)
    assert result != 0
    assert theirs.compare_to(mine) == -result


def test_compare_to_tolerates_float_noise():
    mine = parse_newick("(A:0.3,B:0.6);")
    theirs = parse_newick("(A:0.30000000000000004,B:0.6);")
    assert mine.compare_to(theirs) == 0


def test_deep_copy_is_independent(scenario_newick):
    root = parse_newick(scenario_newick)
    root.children[0].collapsed = True
    copy = root.deep_copy()
    assert copy.compare_to(root) == 0
    assert copy.children[0].collapsed
    assert copy.parent is None

    copy.children[0].children[0].name = "Z"
    copy.children[1].distance = 9.0
    assert root.children[0].children[0].name == "A"
    assert root.children[1].distance == pytest.approx(0.6)
    assert all(node.get_root() is copy for node in copy.get_descendants())


def test_deep_copy_of_subtree_has_no_parent(scenario_newick):
    root = parse_newick(scenario_newick)
    copy = root.children[1].deep_copy()
    assert copy.parent is None
    assert names(copy.get_leaves()) == ["C", "D"]


def test_to_newick_includes_own_length(scenario_newick):
    root = parse_newick(scenario_newick)
    assert root.children[0].to_newick() == "(A:0.1,B:0.2):0.3"
    assert str(root) == "((A:0.1,B:0.2):0.3,(C:0.4,D:0.5):0.6)"
    assert repr(root.children[0].children[0]) == "Node('A')"


def test_deep_tree_traversals(deep_newick):
    root = parse_newick(deep_newick)
    assert len(root.get_leaves()) == 3000
    assert root.maximum_distance_from_leaf() == pytest.approx(2999.0)
    copy = root.deep_copy()
    assert copy.compare_to(root) == 0
    assert copy.to_newick() == root.to_newick()
