from typing import TypeVar, Generic, Optional

T = TypeVar('T')


class Node(Generic[T]):
    """A tree vertex: key, cached subtree height and links to its neighbours.

    ``parent`` is None for the root. Whoever attaches a node as another
    node's child is responsible for setting ``parent`` in the same step.
    """

    __slots__ = ('key', 'height', 'left', 'right', 'parent')

    def __init__(self, key: T, parent: Optional['Node[T]'] = None) -> None:
        self.key: T = key
        self.height: int = 1
        self.left: Optional['Node[T]'] = None
        self.right: Optional['Node[T]'] = None
        self.parent: Optional['Node[T]'] = parent

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"Node(key={self.key!r}, height={self.height})"
