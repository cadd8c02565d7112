import logging
from typing import TypeVar, Generic, List, Iterable, Iterator, Optional, Tuple

from avltree.balancing import Balancer
from avltree.node import Node
from avltree.render import render

T = TypeVar('T')

logger = logging.getLogger(__name__)

_ROOT = object()


class InvariantError(AssertionError):
    """Raised by ``validate`` when the tree structure is inconsistent."""


class BinarySearchTree(Generic[T]):
    """Ordered key store built on linked nodes with parent back-references.

    Structural work (descent, transplant, successor lookup, rotations) lives
    here. After each insert or remove the affected ancestors are handed to
    ``balancer``; the default ``Balancer`` only refreshes heights, which makes
    this the plain unbalanced tree.

    Nodes returned by ``search``, ``minimum`` and friends stay valid only
    while their key is in the tree.
    """

    def __init__(self, keys: Optional[Iterable[T]] = None,
                 balancer: Optional[Balancer] = None) -> None:
        self._root: Optional[Node[T]] = None
        self._size: int = 0
        self._balancer: Balancer = balancer if balancer is not None else Balancer()
        if keys is not None:
            self.extend(keys)

    @classmethod
    def from_keys(cls, keys: Iterable[T]) -> 'BinarySearchTree[T]':
        return cls(keys)

    @property
    def root(self) -> Optional[Node[T]]:
        return self._root

    # Structural primitives

    def _insert_node(self, key: T) -> Tuple[Optional[Node[T]], List[Node[T]]]:
        """Attach ``key`` at the empty slot found by descent.

        Returns the new node (None for a duplicate) and the ancestors it
        was attached under, nearest first.
        """
        path: List[Node[T]] = []
        parent: Optional[Node[T]] = None
        node = self._root
        while node is not None:
            if key < node.key:
                parent, node = node, node.left
            elif key > node.key:
                parent, node = node, node.right
            else:
                return None, []
            path.append(parent)

        new_node = Node(key, parent)
        if parent is None:
            self._root = new_node
        elif key < parent.key:
            parent.left = new_node
        else:
            parent.right = new_node
        self._size += 1

        path.reverse()
        return new_node, path

    def transplant(self, u: Node[T], v: Optional[Node[T]]) -> None:
        """Put subtree ``v`` where subtree ``u`` hangs. Children are untouched."""
        if u.parent is None:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        if v is not None:
            v.parent = u.parent

    def _delete_node(self, node: Node[T]) -> Optional[Node[T]]:
        """Unlink ``node`` and return the lowest node whose height may have changed."""
        parent = node.parent
        if node.left is None:
            start = node.right if node.right is not None else parent
            self.transplant(node, node.right)
        elif node.right is None:
            start = node.left
            self.transplant(node, node.left)
        else:
            successor = self._minimum(node.right)
            if successor.parent is not node:
                start = successor.parent
                self.transplant(successor, successor.right)
                successor.right = node.right
                successor.right.parent = successor
            else:
                start = successor
            self.transplant(node, successor)
            successor.left = node.left
            successor.left.parent = successor

        node.left = node.right = node.parent = None
        self._size -= 1
        return start if start is not None else parent

    def _minimum(self, node: Node[T]) -> Node[T]:
        while node.left is not None:
            node = node.left
        return node

    def _maximum(self, node: Node[T]) -> Node[T]:
        while node.right is not None:
            node = node.right
        return node

    def rotate_left(self, z: Node[T]) -> Node[T]:
        y = z.right
        assert y is not None
        t2 = y.left

        z.right = t2
        if t2 is not None:
            t2.parent = z
        self.transplant(z, y)
        y.left = z
        z.parent = y

        self.update_height(z)
        self.update_height(y)
        return y

    def rotate_right(self, z: Node[T]) -> Node[T]:
        y = z.left
        assert y is not None
        t3 = y.right

        z.left = t3
        if t3 is not None:
            t3.parent = z
        self.transplant(z, y)
        y.right = z
        z.parent = y

        self.update_height(z)
        self.update_height(y)
        return y

    def update_height(self, node: Node[T]) -> None:
        node.height = 1 + max(self.height(node.left), self.height(node.right))

    def height(self, node=_ROOT) -> int:
        """Cached height of ``node``, or of the whole tree when omitted. 0 for None."""
        if node is _ROOT:
            node = self._root
        if node is None:
            return 0
        return node.height

    def balance_factor(self, node: Optional[Node[T]]) -> int:
        if node is None:
            return 0
        return self.height(node.left) - self.height(node.right)

    # Public operations

    def insert(self, key: T) -> None:
        node, path = self._insert_node(key)
        if node is None:
            return
        self._balancer.rebalance_after_insert(self, path, key)

    def extend(self, keys: Iterable[T]) -> None:
        for key in keys:
            self.insert(key)

    def remove(self, key: T) -> None:
        node = self.search(key)
        if node is None:
            return
        start = self._delete_node(node)
        logger.debug("removed %r, rebalancing from %r", key, start)
        self._balancer.rebalance_after_delete(self, start)

    def search(self, key: T) -> Optional[Node[T]]:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return None

    def contains(self, key: T) -> bool:
        return self.search(key) is not None

    def minimum(self) -> Optional[Node[T]]:
        if self._root is None:
            return None
        return self._minimum(self._root)

    def maximum(self) -> Optional[Node[T]]:
        if self._root is None:
            return None
        return self._maximum(self._root)

    def successor(self, key: T) -> Optional[Node[T]]:
        """Node holding the next larger key.

        The largest key is its own successor. Returns None when ``key`` is
        not in the tree.
        """
        node = self.search(key)
        if node is None:
            return None
        if node.right is not None:
            return self._minimum(node.right)

        current = node
        parent = current.parent
        while parent is not None and current is parent.right:
            current, parent = parent, parent.parent
        return parent if parent is not None else node

    def predecessor(self, key: T) -> Optional[Node[T]]:
        """Node holding the next smaller key; the smallest key is its own predecessor."""
        node = self.search(key)
        if node is None:
            return None
        if node.left is not None:
            return self._maximum(node.left)

        current = node
        parent = current.parent
        while parent is not None and current is parent.left:
            current, parent = parent, parent.parent
        return parent if parent is not None else node

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._minimum(self._root).key

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        return self._maximum(self._root).key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    # Traversals

    def _in_order_nodes(self) -> Iterator[Node[T]]:
        stack: List[Node[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def in_order(self) -> List[T]:
        return [node.key for node in self._in_order_nodes()]

    def pre_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[Node[T]] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def post_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        stack: List[Node[T]] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def copy(self) -> 'BinarySearchTree[T]':
        clone = type(self)()
        clone._balancer = self._balancer
        clone.extend(self.pre_order())
        return clone

    # Diagnostics

    def is_balanced(self) -> bool:
        return all(abs(self.balance_factor(node)) <= 1
                   for node in self._in_order_nodes())

    def validate(self) -> None:
        """Check order, cached heights, parent links and size.

        Height balance is checked too when the balancer promises it.
        Raises InvariantError on the first violation found.
        """
        if self._root is not None and self._root.parent is not None:
            raise InvariantError(f"root {self._root.key!r} has a parent")

        count = 0
        previous: Optional[Node[T]] = None
        for node in self._in_order_nodes():
            count += 1
            if previous is not None and not previous.key < node.key:
                raise InvariantError(
                    f"keys out of order: {previous.key!r} before {node.key!r}")
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    raise InvariantError(
                        f"{child.key!r} does not point back to parent {node.key!r}")
            expected = 1 + max(self.height(node.left), self.height(node.right))
            if node.height != expected:
                raise InvariantError(
                    f"{node.key!r} caches height {node.height}, expected {expected}")
            if self._balancer.height_balanced and abs(self.balance_factor(node)) > 1:
                raise InvariantError(
                    f"{node.key!r} has balance factor {self.balance_factor(node)}")
            previous = node

        if count != self._size:
            raise InvariantError(f"size is {self._size} but {count} nodes are reachable")

    def render(self) -> str:
        return render(self._root)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: T) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[T]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.in_order()})"

    def __str__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, height={self.height()})"
