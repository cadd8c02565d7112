from typing import TypeVar, Iterable, Optional

from avltree.balancing import AVLBalancer
from avltree.binary_search_tree import BinarySearchTree

T = TypeVar('T')


class AVLTree(BinarySearchTree[T]):
    """Binary search tree kept height-balanced by AVL rotations.

    Search, insert and remove are O(log n). Keys are passed through in
    sequence order when ``keys`` is given, so the shape depends on that
    order while the invariants do not.
    """

    def __init__(self, keys: Optional[Iterable[T]] = None) -> None:
        super().__init__(keys, balancer=AVLBalancer())
