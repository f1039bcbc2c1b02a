"""tests/test_btree.py — Unit tests for BTree."""

import random

import pytest
from ordtree.btree import BTree, BTreeNode
from ordtree.validator import VALID, validate


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_tree(t: int = 3, keys=()) -> BTree:
    tree = BTree(t)
    for k in keys:
        tree.insert(k)
    return tree


def all_nodes(tree: BTree) -> list[BTreeNode]:
    nodes, stack = [], [tree.root] if tree.root else []
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack.extend(node.children)
    return nodes


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_default_degree(self):
        assert BTree().t == 2

    def test_custom_degree(self):
        assert BTree(5).t == 5

    def test_invalid_degree(self):
        with pytest.raises(ValueError):
            BTree(1)

    def test_empty_tree_has_no_root(self):
        t = make_tree()
        assert t.root is None
        assert len(t) == 0
        assert t.height() == 0


# ---------------------------------------------------------------------------
# Insert & Search (basic)
# ---------------------------------------------------------------------------

class TestInsertSearch:
    def test_first_insert_creates_leaf_root(self):
        t = make_tree(keys=[42])
        assert t.root.is_leaf
        assert t.root.keys == [42]

    def test_classic_example(self):
        t = make_tree(3, [10, 20, 5, 6, 12, 30, 7, 17])
        assert t.traverse() == [5, 6, 7, 10, 12, 17, 20, 30]
        assert t.search(6) is not None
        assert t.search(15) is None

    def test_search_returns_node_holding_key(self):
        t = make_tree(2, range(1, 20))
        for k in range(1, 20):
            node = t.search(k)
            assert node is not None
            assert k in node.keys

    def test_search_empty_tree(self):
        assert make_tree().search(1) is None

    def test_contains(self):
        t = make_tree(keys=[1, 2, 3])
        assert 2 in t
        assert 9 not in t

    def test_negative_and_large_keys(self):
        keys = [-(2 ** 40), -1, 0, 2 ** 40, 7]
        t = make_tree(2, keys)
        assert t.traverse() == sorted(keys)
        assert validate(t) == VALID

    def test_duplicate_rejected(self):
        t = make_tree(2, range(10))
        with pytest.raises(KeyError):
            t.insert(5)
        assert t.traverse() == list(range(10))
        assert len(t) == 10
        assert validate(t) == VALID


# ---------------------------------------------------------------------------
# Split behaviour
# ---------------------------------------------------------------------------

class TestSplit:
    """With t=2, max keys per node = 2*2-1 = 3. Split triggers at 4th key."""

    def test_root_split_creates_new_root(self):
        t = make_tree(2, [1, 2, 3, 4])
        assert not t.root.is_leaf
        assert t.root.keys == [2]
        assert [c.keys for c in t.root.children] == [[1], [3, 4]]

    def test_split_moves_median_up_not_copied(self):
        t = make_tree(3, [1, 2, 3, 4, 5, 6])
        assert t.root.keys == [3]
        assert t.traverse().count(3) == 1

    def test_height_grows_only_at_root(self):
        t = BTree(2)
        last = 0
        for k in range(1, 200):
            t.insert(k)
            h = t.height()
            assert h in (last, last + 1)
            last = h
        assert validate(t) == VALID

    def test_new_nodes_carry_tree_degree(self):
        t = make_tree(4, range(100))
        assert all(n.t == 4 for n in all_nodes(t))

    def test_descending_insert(self):
        t = make_tree(2, reversed(range(1, 50)))
        assert t.traverse() == list(range(1, 50))
        assert validate(t) == VALID


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

class TestDelete:
    def test_delete_only_key_empties_tree(self):
        t = make_tree(keys=[5])
        t.remove(5)
        assert t.root is None
        assert t.search(5) is None

    def test_delete_absent_is_noop(self):
        t = make_tree(2, range(1, 30))
        before = t.traverse()
        t.remove(999)
        assert t.traverse() == before
        assert len(t) == 29
        assert validate(t) == VALID

    def test_delete_from_empty(self):
        t = make_tree()
        t.remove(1)
        assert t.root is None

    def test_ascending_insert_then_ascending_delete(self):
        t = BTree(2)
        for k in range(1, 11):
            t.insert(k)
            assert validate(t) == VALID
        for k in range(1, 11):
            t.remove(k)
            assert validate(t) == VALID
            assert t.search(k) is None
        assert t.root is None

    def test_delete_internal_key_uses_predecessor(self):
        t = make_tree(2, [3, 4, 5, 6, 1, 2])
        # root [4], children [1, 2, 3] and [5, 6]
        assert t.root.keys == [4]
        t.remove(4)
        assert t.root.keys == [3]
        assert t.traverse() == [1, 2, 3, 5, 6]
        assert validate(t) == VALID

    def test_delete_internal_key_uses_successor(self):
        t = make_tree(2, [1, 2, 3, 4, 5])
        t.remove(2)
        assert t.root.keys == [3]
        assert t.traverse() == [1, 3, 4, 5]
        assert validate(t) == VALID

    def test_delete_internal_key_merges(self):
        t = make_tree(2, [1, 2, 3])
        t.insert(4)
        t.remove(4)
        # root [2], children [1] and [3] → merge
        t.remove(2)
        assert t.root.is_leaf
        assert t.root.keys == [1, 3]

    def test_root_collapses_to_child(self):
        t = make_tree(2, range(1, 8))
        h = t.height()
        for k in range(1, 6):
            t.remove(k)
        assert t.height() < h
        assert t.traverse() == [6, 7]
        assert validate(t) == VALID

    def test_delete_last_child_path(self):
        t = make_tree(2, range(1, 40))
        for k in range(39, 0, -1):
            t.remove(k)
            assert validate(t) == VALID
        assert t.root is None

    def test_search_after_remove(self):
        t = make_tree(3, range(100))
        for k in range(0, 100, 3):
            t.remove(k)
        for k in range(100):
            assert (t.search(k) is None) == (k % 3 == 0)

    @pytest.mark.parametrize("degree", [2, 3, 5])
    def test_random_order_round_trip(self, degree):
        rng = random.Random(degree)
        keys = rng.sample(range(1, 10_000), 300)
        t = BTree(degree)
        for k in keys:
            t.insert(k)
        assert t.traverse() == sorted(keys)
        rng.shuffle(keys)
        for i, k in enumerate(keys):
            t.remove(k)
            assert validate(t) == VALID
            assert len(t) == len(keys) - i - 1
        assert t.root is None


# ---------------------------------------------------------------------------
# Traverse / clear
# ---------------------------------------------------------------------------

class TestTraverse:
    def test_empty(self):
        assert make_tree().traverse() == []

    def test_iter_matches_traverse(self):
        t = make_tree(2, [9, 3, 7, 1])
        assert list(t) == t.traverse() == [1, 3, 7, 9]

    def test_clear(self):
        t = make_tree(2, range(50))
        t.clear()
        assert t.root is None
        assert len(t) == 0
        t.insert(3)
        assert t.traverse() == [3]
