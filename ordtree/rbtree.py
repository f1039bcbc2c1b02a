"""
ordtree/rbtree.py
Red-Black Tree of caller-owned payloads ordered by a comparator.

The tree stores references only: payloads are never copied, and delete
finds its target by identity (``is``), not by equality. Payloads that
compare equal may coexist; new ones go to the right of existing ones.

Properties maintained:
  1. Root is BLACK.
  2. A RED node never has a RED child.
  3. Every root-to-None path crosses the same number of BLACK nodes.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterator

Comparator = Callable[[Any, Any], int]


class Color(Enum):
    RED   = auto()
    BLACK = auto()


@dataclass(eq=False)
class RBNode:
    """Node in the Red-Black Tree. Compared by identity."""

    payload: Any
    color: Color = Color.RED
    parent: "RBNode | None" = None
    left: "RBNode | None" = None
    right: "RBNode | None" = None


def _is_black(node: RBNode | None) -> bool:
    # None leaves count as BLACK
    return node is None or node.color is Color.BLACK


class RedBlackTree:
    """
    Comparator-ordered Red-Black Tree.

    cmp(a, b) returns a negative number, zero, or a positive number
    when a sorts before, equal to, or after b.
    """

    def __init__(self, cmp: Comparator) -> None:
        self._cmp = cmp
        self.root: RBNode | None = None
        self._size = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, payload: Any) -> None:
        """Insert payload. Equal-comparing payloads go to the right."""
        parent = None
        current = self.root
        go_left = False
        while current is not None:
            parent = current
            go_left = self._cmp(payload, current.payload) < 0
            current = current.left if go_left else current.right

        node = RBNode(payload, parent=parent)
        if parent is None:
            self.root = node
        elif go_left:
            parent.left = node
        else:
            parent.right = node

        self._size += 1
        self._fix_insert(node)

    def delete(self, payload: Any) -> None:
        """Remove the node holding this exact payload object, if any."""
        node = self._find(self.root, payload)
        if node is None:
            return
        self._delete_node(node)
        self._size -= 1

    def min(self) -> Any | None:
        """Return the smallest payload, or None when empty."""
        node = self._leftmost(self.root)
        return node.payload if node is not None else None

    def empty(self) -> bool:
        return self.root is None

    def clear(self) -> None:
        self.root = None
        self._size = 0

    def black_height(self) -> int:
        """
        Return the black height, counting the None leaves.
        Raises ValueError if a Red-Black property does not hold.
        """
        if self.root is not None and self.root.color is not Color.BLACK:
            raise ValueError("root is not BLACK")
        return self._black_height(self.root)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        """Yield payloads in comparator order."""
        stack: list[RBNode] = []
        current = self.root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            node = stack.pop()
            yield node.payload
            current = node.right

    # ------------------------------------------------------------------
    # Internal helpers — lookup
    # ------------------------------------------------------------------

    def _find(self, node: RBNode | None, payload: Any) -> RBNode | None:
        while node is not None:
            if node.payload is payload:
                return node
            c = self._cmp(payload, node.payload)
            if c < 0:
                node = node.left
            elif c > 0:
                node = node.right
            else:
                # Rotations can leave equal payloads on either side
                found = self._find(node.left, payload)
                if found is not None:
                    return found
                node = node.right
        return None

    @staticmethod
    def _leftmost(node: RBNode | None) -> RBNode | None:
        while node is not None and node.left is not None:
            node = node.left
        return node

    def _black_height(
        self, node: RBNode | None, lo: RBNode | None = None, hi: RBNode | None = None
    ) -> int:
        """lo/hi are the nearest ancestors the subtree must sort after/before."""
        if node is None:
            return 1
        if node.color is Color.RED and not (
            _is_black(node.left) and _is_black(node.right)
        ):
            raise ValueError("RED node has a RED child")
        if (lo is not None and self._cmp(node.payload, lo.payload) < 0) or (
            hi is not None and self._cmp(node.payload, hi.payload) > 0
        ):
            raise ValueError("payloads out of comparator order")
        left = self._black_height(node.left, lo, node)
        right = self._black_height(node.right, node, hi)
        if left != right:
            raise ValueError("black height differs between subtrees")
        return left + (1 if node.color is Color.BLACK else 0)

    # ------------------------------------------------------------------
    # Internal helpers — rotations
    # ------------------------------------------------------------------

    def _rotate_left(self, x: RBNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is None:
            self.root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, x: RBNode) -> None:
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x
        y.parent = x.parent
        if x.parent is None:
            self.root = y
        elif x is x.parent.right:
            x.parent.right = y
        else:
            x.parent.left = y
        y.right = x
        x.parent = y

    # ------------------------------------------------------------------
    # Internal helpers — insert
    # ------------------------------------------------------------------

    def _fix_insert(self, z: RBNode) -> None:
        while z.parent is not None and z.parent.color is Color.RED:
            g = z.parent.parent
            if g is None:
                break

            if z.parent is g.left:
                uncle = g.right
                if uncle is not None and uncle.color is Color.RED:
                    z.parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    g.color = Color.RED
                    z = g
                else:
                    if z is z.parent.right:
                        # Inner child → rotate to the outer case
                        z = z.parent
                        self._rotate_left(z)
                    z.parent.color = Color.BLACK
                    g.color = Color.RED
                    self._rotate_right(g)
            else:
                uncle = g.left
                if uncle is not None and uncle.color is Color.RED:
                    z.parent.color = Color.BLACK
                    uncle.color = Color.BLACK
                    g.color = Color.RED
                    z = g
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.color = Color.BLACK
                    g.color = Color.RED
                    self._rotate_left(g)

        self.root.color = Color.BLACK

    # ------------------------------------------------------------------
    # Internal helpers — delete
    # ------------------------------------------------------------------

    def _transplant(self, u: RBNode, v: RBNode | None) -> None:
        """Put subtree v where u was."""
        if u.parent is None:
            self.root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        if v is not None:
            v.parent = u.parent

    def _delete_node(self, z: RBNode) -> None:
        removed_color = z.color
        if z.left is None:
            x, x_parent = z.right, z.parent
            self._transplant(z, z.right)
        elif z.right is None:
            x, x_parent = z.left, z.parent
            self._transplant(z, z.left)
        else:
            y = self._leftmost(z.right)
            removed_color = y.color
            x = y.right
            if y.parent is z:
                x_parent = y
            else:
                x_parent = y.parent
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color

        z.parent = z.left = z.right = None
        if removed_color is Color.BLACK:
            self._fix_delete(x, x_parent)

    def _fix_delete(self, x: RBNode | None, parent: RBNode | None) -> None:
        """x carries an extra BLACK; parent is its parent even when x is None."""
        while x is not self.root and _is_black(x):
            if parent is None:
                break

            if x is parent.left:
                w = parent.right
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    parent.color = Color.RED
                    self._rotate_left(parent)
                    w = parent.right

                if _is_black(w.left) and _is_black(w.right):
                    w.color = Color.RED
                    x, parent = parent, parent.parent
                else:
                    if _is_black(w.right):
                        w.left.color = Color.BLACK
                        w.color = Color.RED
                        self._rotate_right(w)
                        w = parent.right
                    w.color = parent.color
                    parent.color = Color.BLACK
                    w.right.color = Color.BLACK
                    self._rotate_left(parent)
                    x, parent = self.root, None
            else:
                w = parent.left
                if w.color is Color.RED:
                    w.color = Color.BLACK
                    parent.color = Color.RED
                    self._rotate_right(parent)
                    w = parent.left

                if _is_black(w.left) and _is_black(w.right):
                    w.color = Color.RED
                    x, parent = parent, parent.parent
                else:
                    if _is_black(w.left):
                        w.right.color = Color.BLACK
                        w.color = Color.RED
                        self._rotate_left(w)
                        w = parent.left
                    w.color = parent.color
                    parent.color = Color.BLACK
                    w.left.color = Color.BLACK
                    self._rotate_right(parent)
                    x, parent = self.root, None

        if x is not None:
            x.color = Color.BLACK
