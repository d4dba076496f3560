from __future__ import annotations

import math
from typing import List, Optional, Tuple, Self

# Distances closer than this are considered equal when comparing trees
DISTANCE_TOLERANCE = 1e-9


class Node:
    """
    Tree node holding a label, the branch length to its parent and layout state.

    Parent links are plain back-references; the owning Tree keeps the graph
    reachable through its root. Traversals use explicit stacks so that very
    deep trees do not hit the interpreter recursion limit.
    """

    __slots__ = (
        "children",
        "parent",
        "name",
        "distance",
        "collapsed",
        "outgroup",
        "x",
        "y",
    )

    children: List[Self]
    parent: Optional[Self]
    name: str
    distance: float
    collapsed: bool
    outgroup: bool
    x: float
    y: float

    def __init__(
        self,
        name: str = "",
        distance: float = 0.0,
        children: Optional[List[Self]] = None,
    ):
        self.children = []
        self.parent = None
        self.name = name
        self.distance = distance
        self.collapsed = False
        self.outgroup = False
        self.x = 0.0
        self.y = 0.0
        for child in children or ():
            self.add_child(child)

    def __repr__(self) -> str:
        return f"Node('{self.name}')"

    def __str__(self) -> str:
        return self.to_newick()

    # ------------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------------
    def add_child(self, node: Self) -> None:
        node.parent = self
        self.children.append(node)

    def remove_child(self, node: Self) -> None:
        """Detach ``node`` from this node. Matching is by identity."""
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                node.parent = None
                return
        raise ValueError(f"{node!r} is not a child of {self!r}.")

    def replace_child(self, old_child: Self, new_child: Self) -> None:
        """Replaces an existing child node with a new one, keeping its position."""
        for index, child in enumerate(self.children):
            if child is old_child:
                self.children[index] = new_child
                old_child.parent = None
                new_child.parent = self
                return
        raise ValueError("old_child is not a child of this node.")

    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def is_root(self) -> bool:
        return self.parent is None

    def get_root(self) -> Self:
        cur = self
        while cur.parent is not None:
            cur = cur.parent
        return cur

    # ------------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------------
    def traverse(self) -> List[Self]:
        """
        Return all nodes of the subtree rooted at this node, including this
        node, in pre-order.
        """
        nodes: List[Self] = []
        stack: List[Self] = [self]
        while stack:
            current = stack.pop()
            nodes.append(current)
            # Reversed so that the leftmost child is visited first
            stack.extend(reversed(current.children))
        return nodes

    def get_descendants(self) -> List[Self]:
        """Return all transitive descendants (excluding this node) in pre-order."""
        return self.traverse()[1:]

    def get_leaves(self) -> List[Self]:
        return [node for node in self.traverse() if not node.children]

    def get_collapsed(self) -> List[Self]:
        """Return the descendants flagged as collapsed, in pre-order."""
        return [node for node in self.get_descendants() if node.collapsed]

    # ------------------------------------------------------------------------
    # Distances
    # ------------------------------------------------------------------------
    def maximum_distance_from_leaf(self) -> float:
        """
        Return the largest sum of branch lengths on any path from this node
        down to one of its leaves. A leaf returns 0.
        """
        maximum = 0.0
        stack: List[Tuple[Node, float]] = [(self, 0.0)]
        while stack:
            node, accumulated = stack.pop()
            if not node.children:
                maximum = max(maximum, accumulated)
                continue
            for child in node.children:
                stack.append((child, accumulated + child.distance))
        return maximum

    def distance_from_root(self) -> float:
        """Sum of branch lengths from this node up to (excluding) the root."""
        total = 0.0
        cur = self
        while cur.parent is not None:
            total += cur.distance
            cur = cur.parent
        return total

    # ------------------------------------------------------------------------
    # Comparison & copying
    # ------------------------------------------------------------------------
    def compare_to(self, other: Node) -> int:
        """
        Compare the subtrees rooted at this node and ``other``.

        Labels, branch lengths and topology (including child order) are
        compared in pre-order. Returns 0 if equal, otherwise -1 or 1 depending
        on the first difference found.
        """
        stack: List[Tuple[Node, Node]] = [(self, other)]
        while stack:
            mine, theirs = stack.pop()
            if mine.name != theirs.name:
                return -1 if mine.name < theirs.name else 1
            if not math.isclose(
                mine.distance,
                theirs.distance,
                rel_tol=DISTANCE_TOLERANCE,
                abs_tol=DISTANCE_TOLERANCE,
            ):
                return -1 if mine.distance < theirs.distance else 1
            if len(mine.children) != len(theirs.children):
                return -1 if len(mine.children) < len(theirs.children) else 1
            stack.extend(reversed(list(zip(mine.children, theirs.children))))
        return 0

    def deep_copy(self) -> Self:
        """Copy the subtree rooted at this node. The copy has no parent."""
        new_root = self._copy_attributes()
        stack: List[Tuple[Node, Node]] = [(self, new_root)]
        while stack:
            original, copy = stack.pop()
            for child in original.children:
                child_copy = child._copy_attributes()
                copy.add_child(child_copy)
                stack.append((child, child_copy))
        return new_root

    def _copy_attributes(self) -> Self:
        new_node = type(self)(name=self.name, distance=self.distance)
        new_node.collapsed = self.collapsed
        new_node.outgroup = self.outgroup
        new_node.x = self.x
        new_node.y = self.y
        return new_node

    # ------------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------------
    def to_newick(self) -> str:
        """
        Return the Newick text of the subtree rooted at this node, without
        the terminating semicolon.
        """
        from ecotree.parser.newick_writer import write_subtree

        return write_subtree(self)
