"""
ordtree/btree.py
B-Tree of integer keys (CLRS style).

Terminology:
  t: minimum degree. Each non-root node has at least t-1 keys
  and at most 2t-1 keys. A node is "full" when it has 2t-1 keys.

Unlike a B+Tree, every key lives in exactly one node: internal nodes
hold real keys, not separator copies. Insert splits full nodes on the
way down; delete borrows or merges on the way down so that the node it
finally removes from never underflows.
"""

from __future__ import annotations
from typing import Iterator


class BTreeNode:
    """A single node in the B-Tree."""

    def __init__(self, t: int, is_leaf: bool = False) -> None:
        self.t: int = t
        self.is_leaf: bool = is_leaf
        self.keys: list[int] = []
        # internal → child BTreeNode references (len == len(keys) + 1)
        self.children: list["BTreeNode"] = []

    def is_full(self) -> bool:
        return len(self.keys) >= 2 * self.t - 1

    def find_key(self, key: int) -> int:
        """Return the smallest index i with keys[i] >= key."""
        i = 0
        while i < len(self.keys) and self.keys[i] < key:
            i += 1
        return i

    def __repr__(self) -> str:  # pragma: no cover
        kind = "Leaf" if self.is_leaf else "Internal"
        return f"{kind}({self.keys})"


class BTree:
    """
    B-Tree with configurable minimum degree t.

    - The root is created lazily on the first insert.
    - An empty tree has root None.
    - Height only grows when the root itself is split.
    """

    def __init__(self, t: int = 2) -> None:
        if t < 2:
            raise ValueError("t must be >= 2")
        self.t = t
        self.root: BTreeNode | None = None
        self._size = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, key: int) -> None:
        """Insert key into the tree. Raises KeyError on a duplicate."""
        if self.root is None:
            self.root = BTreeNode(self.t, is_leaf=True)
            self.root.keys.append(key)
            self._size = 1
            return

        if self.search(key) is not None:
            raise KeyError(f"duplicate key {key}")

        root = self.root
        if root.is_full():
            # Root is full → new root above it, then split the old root
            new_root = BTreeNode(self.t, is_leaf=False)
            new_root.children.append(root)
            self._split_child(new_root, 0)
            self.root = new_root
        self._insert_non_full(self.root, key)
        self._size += 1

    def search(self, key: int) -> BTreeNode | None:
        """Return the node holding key, or None if not found."""
        node = self.root
        while node is not None:
            i = node.find_key(key)
            if i < len(node.keys) and node.keys[i] == key:
                return node
            if node.is_leaf:
                return None
            node = node.children[i]
        return None

    def remove(self, key: int) -> None:
        """Delete key from the tree. Absent keys are ignored."""
        if self.root is None:
            return

        if self._remove(self.root, key):
            self._size -= 1

        # Root emptied by the delete → shrink the tree
        if len(self.root.keys) == 0:
            if self.root.is_leaf:
                self.root = None
            else:
                self.root = self.root.children[0]

    def traverse(self) -> list[int]:
        """Return all keys in ascending order."""
        out: list[int] = []
        if self.root is not None:
            self._traverse(self.root, out)
        return out

    def clear(self) -> None:
        """Drop every node. The tree is empty (and reusable) afterwards."""
        self.root = None
        self._size = 0

    def height(self) -> int:
        """Number of levels; 0 for an empty tree."""
        levels = 0
        node = self.root
        while node is not None:
            levels += 1
            node = None if node.is_leaf else node.children[0]
        return levels

    def __contains__(self, key: int) -> bool:
        return self.search(key) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        return iter(self.traverse())

    # ------------------------------------------------------------------
    # Internal helpers — insert
    # ------------------------------------------------------------------

    def _insert_non_full(self, node: BTreeNode, key: int) -> None:
        while not node.is_leaf:
            # Find the child to descend into
            i = len(node.keys) - 1
            while i >= 0 and key < node.keys[i]:
                i -= 1
            i += 1
            if node.children[i].is_full():
                self._split_child(node, i)
                if key > node.keys[i]:
                    i += 1
            node = node.children[i]

        # Insert into leaf in sorted order
        i = len(node.keys) - 1
        node.keys.append(key)
        while i >= 0 and key < node.keys[i]:
            node.keys[i + 1] = node.keys[i]
            i -= 1
        node.keys[i + 1] = key

    def _split_child(self, parent: BTreeNode, child_idx: int) -> None:
        """
        Split parent.children[child_idx] (which is full) into two nodes.
        The median key moves up into parent; it is not copied.
        """
        t = self.t
        child = parent.children[child_idx]
        new_node = BTreeNode(t, is_leaf=child.is_leaf)
        mid = t - 1  # index of the median key

        push_up_key = child.keys[mid]
        new_node.keys = child.keys[mid + 1:]
        child.keys = child.keys[:mid]
        if not child.is_leaf:
            new_node.children = child.children[mid + 1:]
            child.children = child.children[:mid + 1]

        parent.keys.insert(child_idx, push_up_key)
        parent.children.insert(child_idx + 1, new_node)

    # ------------------------------------------------------------------
    # Internal helpers — traverse
    # ------------------------------------------------------------------

    def _traverse(self, node: BTreeNode, out: list[int]) -> None:
        for i, key in enumerate(node.keys):
            if not node.is_leaf:
                self._traverse(node.children[i], out)
            out.append(key)
        if not node.is_leaf:
            self._traverse(node.children[len(node.keys)], out)

    # ------------------------------------------------------------------
    # Internal helpers — delete
    # ------------------------------------------------------------------

    def _remove(self, node: BTreeNode, key: int) -> bool:
        """
        Remove key from the subtree rooted at node.
        Every node entered below the root already holds at least t keys.
        Returns True if the key was found and removed.
        """
        t = self.t
        i = node.find_key(key)

        if i < len(node.keys) and node.keys[i] == key:
            if node.is_leaf:
                node.keys.pop(i)
                return True
            return self._remove_from_internal(node, i)

        if node.is_leaf:
            return False

        at_end = i == len(node.keys)
        if len(node.children[i].keys) < t:
            self._fill(node, i)

        # The fill merged the last child into its left sibling
        if at_end and i > len(node.keys):
            return self._remove(node.children[i - 1], key)
        return self._remove(node.children[i], key)

    def _remove_from_internal(self, node: BTreeNode, idx: int) -> bool:
        t = self.t
        key = node.keys[idx]
        left = node.children[idx]
        right = node.children[idx + 1]

        if len(left.keys) >= t:
            # Replace with predecessor, delete it from the left subtree
            pred = self._predecessor(node, idx)
            node.keys[idx] = pred
            return self._remove(left, pred)
        if len(right.keys) >= t:
            # Replace with successor, delete it from the right subtree
            succ = self._successor(node, idx)
            node.keys[idx] = succ
            return self._remove(right, succ)

        # Both neighbours are minimal → merge them around key, then recurse
        self._merge(node, idx)
        return self._remove(left, key)

    def _predecessor(self, node: BTreeNode, idx: int) -> int:
        cur = node.children[idx]
        while not cur.is_leaf:
            cur = cur.children[-1]
        return cur.keys[-1]

    def _successor(self, node: BTreeNode, idx: int) -> int:
        cur = node.children[idx + 1]
        while not cur.is_leaf:
            cur = cur.children[0]
        return cur.keys[0]

    def _fill(self, parent: BTreeNode, idx: int) -> None:
        """
        Ensure parent.children[idx] has at least t keys
        by borrowing from a sibling or merging with one.
        """
        t = self.t
        if idx > 0 and len(parent.children[idx - 1].keys) >= t:
            self._borrow_from_left(parent, idx)
        elif idx < len(parent.keys) and len(parent.children[idx + 1].keys) >= t:
            self._borrow_from_right(parent, idx)
        elif idx < len(parent.keys):
            self._merge(parent, idx)      # merge child and right sibling
        else:
            self._merge(parent, idx - 1)  # merge left sibling and child

    def _borrow_from_left(self, parent: BTreeNode, idx: int) -> None:
        child = parent.children[idx]
        left = parent.children[idx - 1]

        # Rotate via parent separator key
        child.keys.insert(0, parent.keys[idx - 1])
        parent.keys[idx - 1] = left.keys.pop()
        if not child.is_leaf:
            child.children.insert(0, left.children.pop())

    def _borrow_from_right(self, parent: BTreeNode, idx: int) -> None:
        child = parent.children[idx]
        right = parent.children[idx + 1]

        child.keys.append(parent.keys[idx])
        parent.keys[idx] = right.keys.pop(0)
        if not child.is_leaf:
            child.children.append(right.children.pop(0))

    def _merge(self, parent: BTreeNode, left_idx: int) -> None:
        """
        Merge parent.children[left_idx] and parent.children[left_idx+1].
        The separator key in parent is pulled down between them.
        """
        left = parent.children[left_idx]
        right = parent.children[left_idx + 1]

        left.keys.append(parent.keys[left_idx])
        left.keys.extend(right.keys)
        left.children.extend(right.children)

        parent.keys.pop(left_idx)
        parent.children.pop(left_idx + 1)
