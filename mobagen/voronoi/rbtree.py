"""Red-black tree whose nodes are also linked in order as a doubly linked list.

Insertion is positional: a new node is placed directly after a given node
(or first, when no node is given), so the tree keeps whatever order the
caller builds rather than comparing keys.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar


class RBNode:
    """Tree links, in-order neighbour links and colour of a red-black node."""

    def __init__(self) -> None:
        self.parent: RBNode | None = None
        self.previous: RBNode | None = None
        self.next: RBNode | None = None
        self.left: RBNode | None = None
        self.right: RBNode | None = None
        self.red: bool = False

    @property
    def black(self) -> bool:
        return not self.red


N = TypeVar("N", bound=RBNode)


class RBTree(Generic[N]):
    """Positional red-black tree with in-order previous/next links."""

    def __init__(self) -> None:
        self.root: N | None = None

    def first(self) -> N | None:
        """The left-most node, or None when the tree is empty."""
        if self.root is None:
            return None
        return self._leftmost(self.root)

    def __iter__(self) -> Iterator[N]:
        node = self.first()
        while node is not None:
            yield node
            node = node.next

    def insert(self, node: N | None, successor: N) -> None:
        """Insert ``successor`` right after ``node``, or first when ``node`` is None."""
        if node is not None:
            successor.previous = node
            successor.next = node.next
            if node.next is not None:
                node.next.previous = successor
            node.next = successor
            if node.right is not None:
                node = node.right
                while node.left is not None:
                    node = node.left
                node.left = successor
            else:
                node.right = successor
            parent = node
        elif self.root is not None:
            node = self._leftmost(self.root)
            successor.previous = None
            successor.next = node
            node.previous = successor
            node.left = successor
            parent = node
        else:
            successor.previous = None
            successor.next = None
            self.root = successor
            parent = None

        successor.left = None
        successor.right = None
        successor.parent = parent
        successor.red = True

        node = successor
        while parent is not None and parent.red:
            grandpa = parent.parent
            if parent is grandpa.left:
                uncle = grandpa.right
                if uncle is not None and uncle.red:
                    parent.red = False
                    uncle.red = False
                    grandpa.red = True
                    node = grandpa
                else:
                    if node is parent.right:
                        self._rotate_left(parent)
                        node = parent
                        parent = node.parent
                    parent.red = False
                    grandpa.red = True
                    self._rotate_right(grandpa)
            else:
                uncle = grandpa.left
                if uncle is not None and uncle.red:
                    parent.red = False
                    uncle.red = False
                    grandpa.red = True
                    node = grandpa
                else:
                    if node is parent.left:
                        self._rotate_right(parent)
                        node = parent
                        parent = node.parent
                    parent.red = False
                    grandpa.red = True
                    self._rotate_left(grandpa)
            parent = node.parent
        self.root.red = False

    def remove(self, node: N) -> None:
        """Unlink ``node`` from the tree and from its in-order neighbours."""
        if node.next is not None:
            node.next.previous = node.previous
        if node.previous is not None:
            node.previous.next = node.next
        node.next = None
        node.previous = None

        parent = node.parent
        left = node.left
        right = node.right
        if left is None:
            nxt = right
        elif right is None:
            nxt = left
        else:
            nxt = self._leftmost(right)

        if parent is not None:
            if parent.left is node:
                parent.left = nxt
            else:
                parent.right = nxt
        else:
            self.root = nxt

        if left is not None and right is not None:
            is_red = nxt.red
            nxt.red = node.red
            nxt.left = left
            left.parent = nxt
            if nxt is not right:
                parent = nxt.parent
                nxt.parent = node.parent
                node = nxt.right
                parent.left = node
                nxt.right = right
                right.parent = nxt
            else:
                nxt.parent = parent
                parent = nxt
                node = nxt.right
        else:
            is_red = node.red
            node = nxt

        # 'node' is now the sole child of the moved successor, 'parent' its parent.
        if node is not None:
            node.parent = parent
        if is_red:
            return
        if node is not None and node.red:
            node.red = False
            return

        while True:
            if node is self.root:
                break
            if node is parent.left:
                sibling = parent.right
                if sibling.red:
                    sibling.red = False
                    parent.red = True
                    self._rotate_left(parent)
                    sibling = parent.right
                if (sibling.left is not None and sibling.left.red) or (
                    sibling.right is not None and sibling.right.red
                ):
                    if sibling.right is None or sibling.right.black:
                        sibling.left.red = False
                        sibling.red = True
                        self._rotate_right(sibling)
                        sibling = parent.right
                    sibling.red = parent.red
                    parent.red = False
                    sibling.right.red = False
                    self._rotate_left(parent)
                    node = self.root
                    break
            else:
                sibling = parent.left
                if sibling.red:
                    sibling.red = False
                    parent.red = True
                    self._rotate_right(parent)
                    sibling = parent.left
                if (sibling.left is not None and sibling.left.red) or (
                    sibling.right is not None and sibling.right.red
                ):
                    if sibling.left is None or sibling.left.black:
                        sibling.right.red = False
                        sibling.red = True
                        self._rotate_left(sibling)
                        sibling = parent.left
                    sibling.red = parent.red
                    parent.red = False
                    sibling.left.red = False
                    self._rotate_right(parent)
                    node = self.root
                    break
            sibling.red = True
            node = parent
            parent = parent.parent
            if not node.black:
                break

        if node is not None:
            node.red = False

    def _rotate_left(self, p: N) -> None:
        q = p.right
        parent = p.parent
        if parent is not None:
            if parent.left is p:
                parent.left = q
            else:
                parent.right = q
        else:
            self.root = q
        q.parent = parent
        p.parent = q
        p.right = q.left
        if p.right is not None:
            p.right.parent = p
        q.left = p

    def _rotate_right(self, p: N) -> None:
        q = p.left
        parent = p.parent
        if parent is not None:
            if parent.left is p:
                parent.left = q
            else:
                parent.right = q
        else:
            self.root = q
        q.parent = parent
        p.parent = q
        p.left = q.right
        if p.left is not None:
            p.left.parent = p
        q.right = p

    @staticmethod
    def _leftmost(node: N) -> N:
        while node.left is not None:
            node = node.left
        return node